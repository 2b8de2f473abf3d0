#!/usr/bin/env python
"""
Classify, parse and DRC-check a directory of Gerber/drill files.

Usage examples:

    py -3 scripts/run_preview.py ./gerbers
    py -3 scripts/run_preview.py ./gerbers --width 80 --height 60 --layers 4 --svg preview.svg
"""

import argparse
from pathlib import Path

from gerber_preview.config import BoardSpec, PreviewSettings, load_drc_limits, load_settings
from gerber_preview.engine import PreviewSession
from gerber_preview.geometry import ViewTransform
from gerber_preview.ingest import FileRejected, UploadedFile
from gerber_preview.logging_config import setup_logging
from gerber_preview.report import generate_markdown_report, generate_text_report


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Preview a set of Gerber files: layer roles, extent and DRC summary."
    )
    parser.add_argument("directory", type=str, help="Directory holding the CAM export files")
    parser.add_argument("--width", type=float, default=100.0, help="Declared board width in mm (default: 100)")
    parser.add_argument("--height", type=float, default=100.0, help="Declared board height in mm (default: 100)")
    parser.add_argument("--layers", type=int, default=2, help="Declared layer count (default: 2)")
    parser.add_argument("--mask-color", type=str, default="Green", help="Solder mask colour (default: Green)")
    parser.add_argument("--config", type=str, default=None, help="JSON settings file (optional 'drc' section)")
    parser.add_argument("--svg", type=str, default=None, help="Write the composed preview SVG here")
    parser.add_argument("--zoom", type=float, default=1.0, help="Preview zoom factor (0.5-3.0)")
    parser.add_argument("--rotate", type=int, default=0, help="Preview rotation in degrees (multiple of 90)")
    parser.add_argument("--markdown", action="store_true", help="Print a Markdown report instead of text")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: LOGGING_LEVEL or WARNING)")

    args = parser.parse_args()
    setup_logging(args.log_level)

    directory = Path(args.directory).resolve()
    if not directory.is_dir():
        raise SystemExit(f"Directory not found: {directory}")

    settings = PreviewSettings()
    session_kwargs = {}
    if args.config:
        config_path = Path(args.config)
        settings = load_settings(config_path)
        session_kwargs["limits"] = load_drc_limits(config_path)

    spec = BoardSpec(
        width_mm=args.width,
        height_mm=args.height,
        layer_count=args.layers,
        solder_mask_color=args.mask_color,
    )
    session = PreviewSession(spec=spec, settings=settings, **session_kwargs)

    uploads = [UploadedFile.from_path(p) for p in sorted(directory.iterdir()) if p.is_file()]
    try:
        session.add_files(uploads)
    except FileRejected as e:
        raise SystemExit(f"Upload rejected: {e}")

    state = session.state
    if args.markdown:
        print(generate_markdown_report(state.layers, state.bounds, state.summary, title=directory.name))
    else:
        print(generate_text_report(state.layers, state.bounds, state.summary, title=directory.name))

    if args.svg:
        view = ViewTransform(
            zoom=min(3.0, max(0.5, args.zoom)),
            rotation=(args.rotate // 90 * 90) % 360,
        )
        Path(args.svg).write_text(session.render(view), encoding="utf-8")
        print(f"\nWrote {args.svg}")

    return 0 if state.summary.critical_failures == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
