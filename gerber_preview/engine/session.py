# gerber_preview/engine/session.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
import logging

from ..config import BoardSpec, DrcLimits, PreviewSettings
from ..geometry import (
    Bounds,
    LayerInfo,
    ViewTransform,
    aggregate_bounds,
    build_layer_set,
    project_layers,
    render_svg,
)
from ..geometry.layer_model import ProgressFn
from ..geometry.render import Primitive
from ..ingest import UploadedFile, solder_mask_hex, validate_uploads
from ..results import DrcCheck, DrcSummary
from .check_runner import evaluate_drc

log = logging.getLogger("gerber_preview.engine.session")


@dataclass(frozen=True)
class PreviewState:
    """
    Everything the UI needs for one render: layer panel, board extent
    and DRC panel. Rebuilt from scratch on every mutation.
    """
    layers: List[LayerInfo] = field(default_factory=list)
    bounds: Bounds = field(default_factory=Bounds.default)
    drc: List[DrcCheck] = field(default_factory=list)

    @property
    def summary(self) -> DrcSummary:
        return DrcSummary.from_checks(self.drc)


class PreviewSession:
    """
    The per-session working set of uploaded files and the derived preview.

    Mutations (files, visibility, solder mask colour, declared spec) each
    trigger a full recomputation LayerSet -> bounds -> DRC. Visibility
    toggles survive rebuilds for files that are still present.
    """

    def __init__(
        self,
        spec: Optional[BoardSpec] = None,
        settings: Optional[PreviewSettings] = None,
        limits: Optional[DrcLimits] = None,
        progress: Optional[ProgressFn] = None,
    ) -> None:
        self.spec = spec or BoardSpec()
        self.settings = settings or PreviewSettings()
        self.limits = limits or DrcLimits()
        self.progress = progress

        self._files: List[UploadedFile] = []
        self._visibility: Dict[str, bool] = {}
        self._state = PreviewState()
        self._recompute()

    # ------------------------------
    # Read side
    # ------------------------------

    @property
    def files(self) -> List[UploadedFile]:
        return list(self._files)

    @property
    def visibility(self) -> Dict[str, bool]:
        return dict(self._visibility)

    @property
    def state(self) -> PreviewState:
        return self._state

    @property
    def layers(self) -> List[LayerInfo]:
        return self._state.layers

    @property
    def bounds(self) -> Bounds:
        return self._state.bounds

    @property
    def drc(self) -> List[DrcCheck]:
        return self._state.drc

    def project(self) -> Dict[str, List[Primitive]]:
        return project_layers(
            self._state.layers,
            self._state.bounds,
            self._visibility,
            size=self.settings.viewbox_size,
        )

    def render(self, view: Optional[ViewTransform] = None) -> str:
        return render_svg(
            self._state.layers,
            self._state.bounds,
            self._visibility,
            size=self.settings.viewbox_size,
            view=view,
            background=solder_mask_hex(self.spec.solder_mask_color),
        )

    # ------------------------------
    # Mutations
    # ------------------------------

    def add_files(self, uploads: Iterable[UploadedFile]) -> PreviewState:
        """
        Validate and append a batch. Raises FileRejected (or
        DuplicateFileName) without changing the working set.
        """
        batch = validate_uploads(
            self._files,
            uploads,
            max_files=self.settings.max_files,
            max_file_size_mb=self.settings.max_file_size_mb,
            accepted_formats=self.settings.accepted_formats,
        )
        self._files.extend(batch)
        log.info("added %d file(s), working set now %d", len(batch), len(self._files))
        return self._recompute()

    def remove_file(self, name: str) -> PreviewState:
        before = len(self._files)
        self._files = [f for f in self._files if f.name != name]
        self._visibility.pop(name, None)
        if len(self._files) == before:
            log.debug("remove_file: %r not in working set", name)
        return self._recompute()

    def set_visibility(self, name: str, visible: bool) -> PreviewState:
        if not any(f.name == name for f in self._files):
            raise KeyError(f"No layer named {name!r}")
        self._visibility[name] = bool(visible)
        return self._recompute()

    def toggle_layer(self, name: str) -> PreviewState:
        return self.set_visibility(name, not self._visibility.get(name, True))

    def set_solder_mask_color(self, color: str) -> PreviewState:
        return self.update_spec(solder_mask_color=color)

    def update_spec(self, **changes: object) -> PreviewState:
        """
        Replace declared board fields and recompute.

        Changes are validated as a whole BoardSpec first; a ValidationError
        leaves the session untouched.
        """
        self.spec = BoardSpec.model_validate({**self.spec.model_dump(), **changes})
        return self._recompute()

    # ------------------------------
    # Pipeline
    # ------------------------------

    def _recompute(self) -> PreviewState:
        layers = build_layer_set(
            self._files,
            self._visibility,
            self.spec.solder_mask_color,
            progress=self.progress,
            max_workers=self.settings.max_workers,
            divisor=self.settings.coordinate_divisor,
        )
        self._visibility = {l.name: l.visible for l in layers}

        bounds = aggregate_bounds(
            layers,
            self._visibility,
            self.spec.width_mm,
            self.spec.height_mm,
        )
        drc = evaluate_drc(
            self.spec.width_mm,
            self.spec.height_mm,
            self.spec.layer_count,
            len(self._files),
            layers,
            self.limits,
        )

        self._state = PreviewState(layers=layers, bounds=bounds, drc=drc)
        return self._state
