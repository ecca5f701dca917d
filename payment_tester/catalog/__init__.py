"""Catalog module - YAML test catalog loading."""

import logging
from pathlib import Path
from typing import Optional, Union

from .schema import (
    Category,
    TestCase,
    TestCatalog,
    ValidationError,
    ValidationResult,
)
from .parser import parse_catalog, parse_catalog_data
from .validator import validate_catalog

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).with_name("default_catalog.yaml")


def load_catalog(file_path: Optional[Union[str, Path]] = None) -> TestCatalog:
    """Parse and validate a catalog file.

    Args:
        file_path: YAML catalog path. None loads the bundled catalog.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist.
        ValueError: If the catalog is malformed or fails validation.
    """
    catalog = parse_catalog(file_path or DEFAULT_CATALOG_PATH)
    validation = validate_catalog(catalog)

    if not validation.valid:
        errors_str = "; ".join(f"{e.path}: {e.message}" for e in validation.errors)
        raise ValueError(f"Invalid catalog {catalog.source}: {errors_str}")

    for warning in validation.warnings:
        logger.warning("%s: %s", warning.path, warning.message)

    logger.debug("Loaded %d test cases from %s", len(catalog), catalog.source)
    return catalog


__all__ = [
    "Category",
    "DEFAULT_CATALOG_PATH",
    "TestCase",
    "TestCatalog",
    "ValidationError",
    "ValidationResult",
    "load_catalog",
    "parse_catalog",
    "parse_catalog_data",
    "validate_catalog",
]
