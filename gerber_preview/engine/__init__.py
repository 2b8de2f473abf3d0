# gerber_preview/engine/__init__.py

from .context import DrcContext
from .check_runner import (
    evaluate_drc,
    register_check,
    run_single_check,
)
from .session import PreviewSession, PreviewState

__all__ = [
    "DrcContext",
    "evaluate_drc",
    "register_check",
    "run_single_check",
    "PreviewSession",
    "PreviewState",
]
