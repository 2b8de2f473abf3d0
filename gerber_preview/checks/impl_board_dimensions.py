from __future__ import annotations

from ..results import DrcCheck
from ..engine.context import DrcContext
from ..engine.check_runner import register_check


def _fmt_mm(v: float) -> str:
    return f"{v:g}"


@register_check("board_dimensions")
def run_board_dimensions(ctx: DrcContext) -> DrcCheck:
    """
    Declared width and height must both be positive and within the
    fabrication panel limit.
    """
    w = float(ctx.declared_width)
    h = float(ctx.declared_height)
    max_mm = float(ctx.limits.max_board_dimension_mm)

    if w <= 0 or h <= 0:
        passed = False
        message = "Not specified"
    elif w > max_mm or h > max_mm:
        passed = False
        message = f"{_fmt_mm(w)}×{_fmt_mm(h)}mm exceeds {_fmt_mm(max_mm)}mm limit"
    else:
        passed = True
        message = f"{_fmt_mm(w)}×{_fmt_mm(h)}mm"

    return DrcCheck(
        check_id="board_dimensions",
        name="Board Dimensions",
        passed=passed,
        message=message,
        critical=True,
    )
