# gerber_preview/config.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

from pydantic import BaseModel, ConfigDict

from .ingest.layer_classifier import LAYER_EXTENSIONS


# File types offered by the quote upload form.
UPLOAD_FORM_FORMATS: List[str] = [
    ".zip", ".rar", ".7z", ".gerber", ".gbr", ".drl", ".brd", ".pcb", ".kicad_pcb",
]
_EXTRA_GERBER_FORMATS: List[str] = [".ger", ".pho", ".art", ".txt"]

DEFAULT_ACCEPTED_FORMATS: List[str] = list(
    dict.fromkeys(UPLOAD_FORM_FORMATS + _EXTRA_GERBER_FORMATS + list(LAYER_EXTENSIONS))
)


@dataclass
class PreviewSettings:
    """
    Engine settings for one preview session.

    coordinate_divisor is the number of integer Gerber units per mm. It is
    fixed per session and never derived from a file's format statement.
    """
    coordinate_divisor: float = 10000.0
    viewbox_size: float = 180.0
    max_files: int = 10
    max_file_size_mb: float = 50.0
    accepted_formats: List[str] = field(default_factory=lambda: list(DEFAULT_ACCEPTED_FORMATS))
    max_workers: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PreviewSettings":
        settings = cls(**_known_fields(cls, data))
        settings.raw = dict(data)
        if settings.coordinate_divisor <= 0:
            raise ValueError("coordinate_divisor must be positive")
        if settings.viewbox_size <= 0:
            raise ValueError("viewbox_size must be positive")
        return settings


@dataclass
class DrcLimits:
    """Thresholds for the declared-spec checks of the DRC battery."""
    max_board_dimension_mm: float = 500.0
    min_layers: int = 1
    max_layers: int = 20
    min_files: int = 2
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrcLimits":
        limits = cls(**_known_fields(cls, data))
        limits.raw = dict(data)
        if limits.min_layers > limits.max_layers:
            raise ValueError("min_layers must not exceed max_layers")
        return limits


class BoardSpec(BaseModel):
    """Board parameters declared on the quote form."""
    model_config = ConfigDict(extra="forbid")

    width_mm: float = 100.0
    height_mm: float = 100.0
    layer_count: int = 2
    solder_mask_color: str = "Green"


def _known_fields(cls: type, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls) if f.name != "raw"}
    return {k: v for k, v in data.items() if k in names}


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return data


def load_settings(path: Path) -> PreviewSettings:
    """
    Load PreviewSettings from a JSON file.

    An optional "drc" object in the same file is ignored here; see
    load_drc_limits.
    """
    return PreviewSettings.from_dict(_load_json(path))


def load_drc_limits(path: Path) -> DrcLimits:
    """
    Load DrcLimits from a JSON file, either the whole object or its
    "drc" member.
    """
    data = _load_json(path)
    section = data.get("drc", data)
    if not isinstance(section, dict):
        raise ValueError(f"'drc' section must be a JSON object: {path}")
    return DrcLimits.from_dict(section)
