"""Aggregate pass/fail/pending counts over a catalog."""

from dataclasses import dataclass

from ..catalog.schema import TestCatalog
from .results import ResultStatus, ResultStore


@dataclass(frozen=True)
class Summary:
    """Aggregate counts for one catalog."""
    passed: int
    failed: int
    pending: int

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.pending

    @property
    def completed(self) -> int:
        return self.passed + self.failed

    @property
    def all_passed(self) -> bool:
        return self.total > 0 and self.passed == self.total

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "pending": self.pending,
        }


def summarize(catalog: TestCatalog, store: ResultStore) -> Summary:
    """Count results for the cases in ``catalog``.

    Errors count as failures; running and never-run cases are pending.
    """
    passed = failed = 0
    for case in catalog:
        result = store.get(case.id)
        if result is None:
            continue
        if result.status == ResultStatus.COMPLETE:
            if result.passed:
                passed += 1
            else:
                failed += 1
        elif result.status == ResultStatus.ERROR:
            failed += 1

    return Summary(passed=passed, failed=failed, pending=len(catalog) - passed - failed)
