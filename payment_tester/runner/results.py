"""Result data structures produced by the execution engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..catalog.schema import TestCase


class ResultStatus(str, Enum):
    """Per-case result states."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    ERROR = "error"


TERMINAL_STATUSES = {ResultStatus.COMPLETE, ResultStatus.ERROR}


@dataclass(frozen=True)
class TestResult:
    """Outcome of the latest run of a single test case.

    Results are never edited in place; a new run stores a new object.
    """
    __test__ = False

    status: ResultStatus
    passed: bool = False
    response: Any = field(default=None, hash=False)
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def running(cls) -> "TestResult":
        return cls(status=ResultStatus.RUNNING)

    @classmethod
    def complete(cls, passed: bool, response: Any, status_code: int) -> "TestResult":
        return cls(
            status=ResultStatus.COMPLETE,
            passed=passed,
            response=response,
            status_code=status_code,
        )

    @classmethod
    def failed(cls, error: str) -> "TestResult":
        return cls(status=ResultStatus.ERROR, passed=False, error=error)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def response_code(self) -> Optional[Any]:
        """The application-level code from the response body, if any."""
        if isinstance(self.response, dict):
            return self.response.get("status_code")
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "passed": self.passed,
            "status_code": self.status_code,
            "response_code": self.response_code,
            "error": self.error,
            "response": self.response,
        }


def grade(case: TestCase, http_status: int, body: Any) -> bool:
    """Whether a response matches a case's expectations.

    Both the transport status and the application-level code must match
    exactly. A body without a ``status_code`` never passes.
    """
    if not isinstance(body, dict):
        return False
    return http_status == case.expected_status and body.get("status_code") == case.expected_code


class ResultStore:
    """Mapping of test case id to its latest result.

    A write replaces the whole entry for that id. Absence means the case
    has not run since startup or the last clear.
    """

    def __init__(self):
        self._results: dict[int, TestResult] = {}

    def get(self, case_id: int) -> Optional[TestResult]:
        return self._results.get(case_id)

    def get_all(self) -> dict[int, TestResult]:
        return dict(self._results)

    def set(self, case_id: int, result: TestResult) -> None:
        self._results[case_id] = result

    def clear(self) -> None:
        self._results.clear()

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, case_id: object) -> bool:
        return case_id in self._results
