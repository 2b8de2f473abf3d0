from __future__ import annotations

from typing import List
from pydantic import BaseModel, Field


class DrcCheck(BaseModel):
    check_id: str
    name: str
    passed: bool
    message: str
    critical: bool = True

    @property
    def status(self) -> str:
        if self.passed:
            return "pass"
        return "fail" if self.critical else "warning"


class DrcSummary(BaseModel):
    total: int = 0
    passed: int = 0
    failed: int = 0
    critical_failures: int = 0
    status: str = Field(default="pass", pattern="^(pass|warning|fail)$")
    checks: List[DrcCheck] = Field(default_factory=list)

    @classmethod
    def from_checks(cls, checks: List[DrcCheck]) -> "DrcSummary":
        failed = [c for c in checks if not c.passed]
        critical = [c for c in failed if c.critical]
        if critical:
            status = "fail"
        elif failed:
            status = "warning"
        else:
            status = "pass"
        return cls(
            total=len(checks),
            passed=len(checks) - len(failed),
            failed=len(failed),
            critical_failures=len(critical),
            status=status,
            checks=list(checks),
        )

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    @classmethod
    def from_json(cls, data: str) -> "DrcSummary":
        return cls.model_validate_json(data)


def critical_failures(checks: List[DrcCheck]) -> List[DrcCheck]:
    return [c for c in checks if c.critical and not c.passed]
