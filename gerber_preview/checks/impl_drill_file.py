from __future__ import annotations

from ..results import DrcCheck
from ..engine.context import DrcContext
from ..engine.check_runner import register_check


@register_check("drill_file")
def run_drill_file(ctx: DrcContext) -> DrcCheck:
    found = ctx.has_role("Drill")
    return DrcCheck(
        check_id="drill_file",
        name="Drill File",
        passed=found,
        message="Found" if found else "Missing",
        critical=True,
    )
