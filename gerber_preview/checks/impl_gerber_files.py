from __future__ import annotations

from ..results import DrcCheck
from ..engine.context import DrcContext
from ..engine.check_runner import register_check


@register_check("gerber_files")
def run_gerber_files(ctx: DrcContext) -> DrcCheck:
    """
    A usable job needs at least a copper image and a drill file, so fewer
    than min_files uploads cannot be complete. Unknown and unparsed files
    still count.
    """
    n = int(ctx.file_count)
    passed = n >= ctx.limits.min_files
    noun = "file" if n == 1 else "files"
    message = f"{n} {noun} uploaded"
    if not passed:
        message += f" (at least {ctx.limits.min_files} required)"

    return DrcCheck(
        check_id="gerber_files",
        name="Gerber Files",
        passed=passed,
        message=message,
        critical=True,
    )
