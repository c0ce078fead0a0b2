from collections import Counter, defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

PASS = "PASS"
FAIL = "FAIL"
ERROR = "ERROR"


class CheckResult(BaseModel):
    """
    Outcome of a single conformance check.
    """
    check_id: str  # e.g. 'DOCTYPE', 'gender.FIELD_TABINDEX'
    code: str  # e.g. 'FIELD_TABINDEX'
    group: str  # e.g. 'STRUCTURE', 'FIELDS', 'ACCESSIBILITY'
    subject: Optional[str] = None  # field/button key for per-subject checks
    title: str
    status: str  # 'PASS', 'FAIL', 'ERROR'
    message: str = ""

    @property
    def passed(self) -> bool:
        return self.status == PASS


class AuditReport(BaseModel):
    """
    All check results for one document, in execution order.
    """
    source: str
    results: List[CheckResult] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> List[CheckResult]:
        return [r for r in self.results if not r.passed]

    @property
    def passed(self) -> bool:
        """Aggregate outcome: True only when every check passed."""
        return not self.failures

    def counts(self) -> Dict[str, int]:
        counter = Counter(r.status for r in self.results)
        return {PASS: counter[PASS], FAIL: counter[FAIL], ERROR: counter[ERROR]}

    def get(self, check_id: str) -> Optional[CheckResult]:
        for result in self.results:
            if result.check_id == check_id:
                return result
        return None

    def summary(self) -> Dict[str, Any]:
        """Constructs the report payload: totals plus a per-group breakdown."""
        breakdown = defaultdict(Counter)
        for r in self.results:
            breakdown[r.group][r.status] += 1

        return {
            "summary": {
                "source": self.source,
                "checks_run": self.total,
                **{k.lower(): v for k, v in self.counts().items()},
                "passed": self.passed
            },
            "breakdown": [
                {"group": group, "status": status, "count": count}
                for group, statuses in breakdown.items()
                for status, count in statuses.items()
            ]
        }

    def to_rows(self) -> List[Dict[str, Any]]:
        """Flat rows for export."""
        return [
            {
                "Source": self.source,
                "Group": r.group,
                "Check": r.check_id,
                "Title": r.title,
                "Status": r.status,
                "Message": r.message
            }
            for r in self.results
        ]
