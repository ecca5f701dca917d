"""Catalog data models for payment instruction test cases.

Defines dataclasses for parsing and representing YAML test catalogs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


class Category(str, Enum):
    """Test case categories."""
    VALID = "valid"
    INVALID = "invalid"


VALID_CATEGORIES = {e.value for e in Category}


@dataclass(frozen=True)
class TestCase:
    """A single request/expected-response pair.

    The payload is forwarded verbatim to the API and is never interpreted
    by the harness.
    """
    __test__ = False

    id: int
    name: str
    category: str
    expected_status: int
    expected_code: str
    payload: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    @property
    def accounts(self) -> list[dict[str, Any]]:
        return self.payload.get("accounts", [])

    @property
    def instruction(self) -> str:
        return self.payload.get("instruction", "")

    def to_dict(self) -> dict[str, Any]:
        """Convert test case to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "expected_status": self.expected_status,
            "expected_code": self.expected_code,
            "payload": self.payload,
        }


class TestCatalog:
    """Ordered, read-only collection of test cases.

    Definition order is the canonical execution order for batch runs.
    """
    __test__ = False

    def __init__(self, cases: list[TestCase], source: str = "<inline>"):
        self._cases = tuple(cases)
        self._by_id = {case.id: case for case in self._cases}
        self.source = source

    def __len__(self) -> int:
        return len(self._cases)

    def __iter__(self) -> Iterator[TestCase]:
        return iter(self._cases)

    def __contains__(self, case_id: object) -> bool:
        return case_id in self._by_id

    @property
    def ids(self) -> list[int]:
        return [case.id for case in self._cases]

    @property
    def valid_cases(self) -> list[TestCase]:
        return self.by_category(Category.VALID)

    @property
    def invalid_cases(self) -> list[TestCase]:
        return self.by_category(Category.INVALID)

    def by_category(self, category: str) -> list[TestCase]:
        """Cases of one category, in catalog order."""
        category = Category(category).value
        return [case for case in self._cases if case.category == category]

    def get(self, case_id: int) -> TestCase:
        """Look up a case by id.

        Raises:
            KeyError: If no case has this id.
        """
        try:
            return self._by_id[case_id]
        except KeyError:
            raise KeyError(f"Unknown test case id: {case_id}") from None

    def select(self, case_ids: list[int]) -> list[TestCase]:
        """Resolve ids to cases, returned in catalog order.

        Raises:
            KeyError: If any id is unknown.
        """
        wanted = set(case_ids)
        unknown = sorted(wanted - set(self._by_id))
        if unknown:
            raise KeyError(f"Unknown test case id(s): {', '.join(map(str, unknown))}")
        return [case for case in self._cases if case.id in wanted]


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"


@dataclass
class ValidationResult:
    """Result of catalog validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return f"Invalid: {self.error_count} errors, {self.warning_count} warnings"
