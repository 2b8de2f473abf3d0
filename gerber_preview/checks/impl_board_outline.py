from __future__ import annotations

from ..results import DrcCheck
from ..engine.context import DrcContext
from ..engine.check_runner import register_check


@register_check("board_outline")
def run_board_outline(ctx: DrcContext) -> DrcCheck:
    """
    Missing outline is reported but does not block the quote; the
    declared board size is used instead.
    """
    found = ctx.has_role("Board Outline")
    return DrcCheck(
        check_id="board_outline",
        name="Board Outline",
        passed=found,
        message="Found" if found else "Not found (optional, declared size used)",
        critical=False,
    )
