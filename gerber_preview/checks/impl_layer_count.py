from __future__ import annotations

from ..results import DrcCheck
from ..engine.context import DrcContext
from ..engine.check_runner import register_check


@register_check("layer_count")
def run_layer_count(ctx: DrcContext) -> DrcCheck:
    n = int(ctx.declared_layers)
    lo = ctx.limits.min_layers
    hi = ctx.limits.max_layers
    passed = lo <= n <= hi

    if passed:
        message = f"{n} layers"
    else:
        message = f"{n} layers (supported: {lo}-{hi})"

    return DrcCheck(
        check_id="layer_count",
        name="Layer Count",
        passed=passed,
        message=message,
        critical=True,
    )
