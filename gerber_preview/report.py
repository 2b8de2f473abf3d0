from __future__ import annotations

from typing import List, Sequence

from .geometry import Bounds, LayerInfo
from .results import DrcSummary


def summarize_status(summary: DrcSummary) -> str:
    return (
        f"passed: {summary.passed}, "
        f"failed: {summary.failed}, "
        f"critical: {summary.critical_failures}"
    )


def _geometry_note(layer: LayerInfo) -> str:
    if layer.parsed is None:
        return "unreadable"
    return f"{len(layer.parsed.commands)} commands"


def generate_text_report(
    layers: Sequence[LayerInfo],
    bounds: Bounds,
    summary: DrcSummary,
    title: str = "board",
) -> str:
    lines: List[str] = []

    lines.append(f"Gerber preview for {title}")
    lines.append(
        f"Extent (mm): x={bounds.min_x:.3f}..{bounds.max_x:.3f}, "
        f"y={bounds.min_y:.3f}..{bounds.max_y:.3f} "
        f"({bounds.width:.3f} x {bounds.height:.3f})"
    )
    lines.append("")
    lines.append(f"Layers ({len(layers)}):")
    for layer in layers:
        flag = "on " if layer.visible else "off"
        lines.append(f"  [{flag}] {layer.name} -> {layer.role} {layer.color} ({_geometry_note(layer)})")
    lines.append("")
    lines.append(f"DRC status: {summary.status.upper()} ({summarize_status(summary)})")
    for check in summary.checks:
        mark = "PASS" if check.passed else ("FAIL" if check.critical else "WARN")
        lines.append(f"  - {check.name}: {mark} - {check.message}")

    return "\n".join(lines)


def generate_markdown_report(
    layers: Sequence[LayerInfo],
    bounds: Bounds,
    summary: DrcSummary,
    title: str = "board",
) -> str:
    lines: List[str] = []

    lines.append(f"# Gerber preview - {title}")
    lines.append("")
    lines.append(f"- Extent: **{bounds.width:.3f} x {bounds.height:.3f} mm**")
    lines.append(
        f"- DRC status: **{summary.status.upper()}** "
        f"({summarize_status(summary)})"
    )
    lines.append("")
    lines.append("## Layers")
    lines.append("")
    lines.append("| File | Role | Color | Visible | Geometry |")
    lines.append("|------|------|-------|---------|----------|")
    for layer in layers:
        lines.append(
            f"| `{layer.name}` | {layer.role} | `{layer.color}` | "
            f"{'yes' if layer.visible else 'no'} | {_geometry_note(layer)} |"
        )
    lines.append("")
    lines.append("## Design rule checks")
    lines.append("")
    lines.append("| Check | Status | Critical | Message |")
    lines.append("|-------|--------|----------|---------|")
    for check in summary.checks:
        lines.append(
            f"| {check.name} | {check.status} | {'yes' if check.critical else 'no'} | {check.message} |"
        )
    lines.append("")

    return "\n".join(lines)
