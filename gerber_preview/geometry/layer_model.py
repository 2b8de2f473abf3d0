# gerber_preview/geometry/layer_model.py

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence
import logging

from ..ingest import FileReadError, UploadedFile, classify, is_copper_role
from .gerber_parser import DEFAULT_COORDINATE_DIVISOR, ParsedGerberData, parse_gerber

log = logging.getLogger("gerber_preview.geometry.layers")

ProgressFn = Callable[[float], None]


@dataclass(frozen=True)
class LayerInfo:
    """
    One uploaded file as seen by the preview.

    parsed is None when the file content could not be read; the layer is
    then "known but unparsed" and still counts for DRC.
    """
    name: str
    role: str
    color: str
    visible: bool = True
    parsed: Optional[ParsedGerberData] = None

    @property
    def has_geometry(self) -> bool:
        return self.parsed is not None

    @property
    def is_copper(self) -> bool:
        return is_copper_role(self.role)


def build_layer(
    upload: UploadedFile,
    solder_mask_color: str,
    visible: bool = True,
    divisor: float = DEFAULT_COORDINATE_DIVISOR,
) -> LayerInfo:
    classification = classify(upload.name, solder_mask_color)

    parsed: Optional[ParsedGerberData] = None
    try:
        text = upload.read_text()
    except FileReadError as exc:
        log.warning("%s; keeping layer %r without geometry", exc, upload.name)
    else:
        parsed = parse_gerber(text, divisor)

    return LayerInfo(
        name=upload.name,
        role=classification.role,
        color=classification.color,
        visible=visible,
        parsed=parsed,
    )


def build_layer_set(
    files: Sequence[UploadedFile],
    visibility: Optional[Mapping[str, bool]] = None,
    solder_mask_color: str = "Green",
    progress: Optional[ProgressFn] = None,
    max_workers: Optional[int] = None,
    divisor: float = DEFAULT_COORDINATE_DIVISOR,
) -> List[LayerInfo]:
    """
    Build one LayerInfo per uploaded file, in input order.

    - Visibility of names already in `visibility` is carried over; new
      names default to visible.
    - progress, when given, receives the completed fraction after each
      file, monotonically increasing up to 1.0.
    - max_workers > 1 parses files on a thread pool. The list is only
      returned once every file is done.
    """
    visibility = visibility or {}
    total = len(files)

    def _one(upload: UploadedFile) -> LayerInfo:
        return build_layer(
            upload,
            solder_mask_color,
            visible=visibility.get(upload.name, True),
            divisor=divisor,
        )

    if total == 0:
        return []

    if not max_workers or max_workers <= 1:
        layers: List[LayerInfo] = []
        for i, upload in enumerate(files, start=1):
            layers.append(_one(upload))
            if progress is not None:
                progress(i / total)
        return layers

    results: Dict[int, LayerInfo] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {pool.submit(_one, upload): idx for idx, upload in enumerate(files)}
        for done, fut in enumerate(as_completed(futures), start=1):
            results[futures[fut]] = fut.result()
            if progress is not None:
                progress(done / total)

    return [results[i] for i in range(total)]

