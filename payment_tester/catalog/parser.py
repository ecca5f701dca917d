"""YAML catalog parser for the payment API tester.

Parses YAML catalog files into TestCatalog objects.
"""

from pathlib import Path
from typing import Union

import yaml

from .schema import TestCase, TestCatalog

REQUIRED_CASE_FIELDS = ["id", "name", "category", "expected_status", "expected_code", "payload"]


def parse_catalog(file_path: Union[str, Path]) -> TestCatalog:
    """Parse a YAML catalog file into a TestCatalog.

    Args:
        file_path: Path to the YAML catalog file.

    Returns:
        Parsed TestCatalog.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist.
        ValueError: If the YAML is malformed or missing required fields.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Catalog file not found: {file_path}")

    if file_path.suffix not in (".yaml", ".yml"):
        raise ValueError(f"Expected .yaml or .yml file, got: {file_path.suffix}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML in {file_path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty catalog file: {file_path}")

    return parse_catalog_data(data, source=str(file_path))


def parse_catalog_data(data: dict, source: str = "<inline>") -> TestCatalog:
    """Parse a catalog from a dictionary (already loaded YAML).

    Only structure is checked here; semantic rules live in the validator.

    Raises:
        ValueError: If required fields are missing or malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Catalog must be a YAML mapping, got {type(data).__name__}")

    cases_data = data.get("cases", [])
    if not isinstance(cases_data, list):
        raise ValueError(f"'cases' must be a list in {source}")

    cases = []
    for i, case_data in enumerate(cases_data):
        if not isinstance(case_data, dict):
            raise ValueError(f"Case {i} must be a mapping in {source}")
        _require_fields(case_data, REQUIRED_CASE_FIELDS, f"cases[{i}]", source)
        if not isinstance(case_data["payload"], dict):
            raise ValueError(f"'payload' must be a mapping in cases[{i}] ({source})")
        if isinstance(case_data["id"], (list, dict)):
            raise ValueError(f"'id' must be a scalar in cases[{i}] ({source})")

        cases.append(TestCase(
            id=case_data["id"],
            name=case_data["name"],
            category=_lower(case_data["category"]),
            expected_status=case_data["expected_status"],
            expected_code=case_data["expected_code"],
            payload=case_data["payload"],
        ))

    return TestCatalog(cases, source=source)


def _lower(value):
    return value.lower() if isinstance(value, str) else value


def _require_fields(
    data: dict, fields: list[str], context: str, source: str
) -> None:
    """Check that required fields exist in a dictionary."""
    for field_name in fields:
        if field_name not in data:
            raise ValueError(
                f"Missing required field '{field_name}' in {context} ({source})"
            )
