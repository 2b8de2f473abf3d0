# gerber_preview/engine/check_runner.py

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import DrcLimits
from ..geometry import LayerInfo
from ..results import DrcCheck
from .context import DrcContext

CheckFn = Callable[[DrcContext], DrcCheck]

_REGISTRY: Dict[str, CheckFn] = {}


def register_check(check_id: str) -> Callable[[CheckFn], CheckFn]:
    """
    Decorator used by individual check implementations to register
    their runner.
    """
    def decorator(fn: CheckFn) -> CheckFn:
        _REGISTRY[check_id] = fn
        return fn
    return decorator


def get_check_runner(check_id: str) -> CheckFn:
    try:
        return _REGISTRY[check_id]
    except KeyError:
        raise KeyError(f"No runner registered for check id: {check_id!r}")


def battery_checks() -> List[Tuple[str, CheckFn]]:
    """
    The DRC battery in its fixed order.

    Checks registered outside BATTERY are reachable only through
    run_single_check.
    """
    from ..checks import BATTERY, _ensure_impls_loaded

    _ensure_impls_loaded()
    return [(check_id, get_check_runner(check_id)) for check_id, _ in BATTERY]


def evaluate_drc(
    declared_width: float,
    declared_height: float,
    declared_layers: int,
    file_count: int,
    layers: Sequence[LayerInfo],
    limits: Optional[DrcLimits] = None,
) -> List[DrcCheck]:
    """
    Run the fixed DRC battery against declared specs and the layer set.

    Pure: the result depends only on the arguments.
    """
    ctx = DrcContext(
        declared_width=declared_width,
        declared_height=declared_height,
        declared_layers=declared_layers,
        file_count=file_count,
        layers=list(layers),
        limits=limits or DrcLimits(),
    )
    return [runner(ctx) for _, runner in battery_checks()]


def run_single_check(check_id: str, ctx: DrcContext) -> DrcCheck:
    from ..checks import _ensure_impls_loaded

    _ensure_impls_loaded()
    return get_check_runner(check_id)(ctx)
