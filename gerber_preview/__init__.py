"""
gerber_preview package init.

Gerber layer classification, parsing, bounds and DRC for the PCB quote
preview.
"""

from .config import BoardSpec, DrcLimits, PreviewSettings
from .results import DrcCheck, DrcSummary
from .ingest import UploadedFile, classify
from .geometry import aggregate_bounds, build_layer_set, parse_gerber, project_layer
from .engine import PreviewSession, evaluate_drc

__all__ = [
    "BoardSpec",
    "DrcLimits",
    "PreviewSettings",
    "DrcCheck",
    "DrcSummary",
    "UploadedFile",
    "classify",
    "aggregate_bounds",
    "build_layer_set",
    "parse_gerber",
    "project_layer",
    "PreviewSession",
    "evaluate_drc",
]
