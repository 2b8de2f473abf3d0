from __future__ import annotations

from ..results import DrcCheck
from ..engine.context import DrcContext
from ..engine.check_runner import register_check


@register_check("copper_layers")
def run_copper_layers(ctx: DrcContext) -> DrcCheck:
    n = sum(1 for l in ctx.layers if l.is_copper)
    passed = n > 0
    if passed:
        message = f"{n} copper layer{'s' if n != 1 else ''} detected"
    else:
        message = "No copper layers detected"

    return DrcCheck(
        check_id="copper_layers",
        name="Copper Layers",
        passed=passed,
        message=message,
        critical=True,
    )
