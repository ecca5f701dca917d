"""Catalog validator for the payment API tester.

Validates parsed TestCatalog objects against catalog rules.
"""

from .schema import (
    TestCase,
    TestCatalog,
    ValidationError,
    ValidationResult,
    VALID_CATEGORIES,
)

REQUIRED_ACCOUNT_FIELDS = ("id", "balance", "currency")


def validate_catalog(catalog: TestCatalog) -> ValidationResult:
    """Validate a parsed TestCatalog.

    Checks:
    - Case ids are positive integers and unique
    - Category, expected status and expected code
    - Payload shape (accounts list and instruction)

    Args:
        catalog: Parsed TestCatalog to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    seen_ids: set = set()
    for i, case in enumerate(catalog):
        path = f"cases[{i}]"

        if not _is_int(case.id) or case.id <= 0:
            errors.append(ValidationError(
                path=f"{path}.id",
                message=f"Case id must be a positive integer, got {case.id!r}.",
            ))
        elif case.id in seen_ids:
            errors.append(ValidationError(
                path=f"{path}.id",
                message=f"Duplicate case id {case.id}.",
            ))
        seen_ids.add(case.id)

        _validate_expectations(case, path, errors, warnings)
        _validate_payload(case, path, errors, warnings)

    if len(catalog) == 0:
        warnings.append(ValidationError(
            path="cases",
            message="No test cases defined.",
            severity="warning",
        ))

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _validate_expectations(
    case: TestCase,
    path: str,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate category and expected outcome of a case."""
    if not _is_text(case.name):
        errors.append(ValidationError(
            path=f"{path}.name",
            message=f"'name' must be a non-empty string, got {case.name!r}.",
        ))

    if not isinstance(case.category, str) or case.category not in VALID_CATEGORIES:
        errors.append(ValidationError(
            path=f"{path}.category",
            message=f"Invalid category '{case.category}'. Must be one of: {', '.join(sorted(VALID_CATEGORIES))}",
        ))

    if not _is_int(case.expected_status):
        errors.append(ValidationError(
            path=f"{path}.expected_status",
            message=f"Expected status must be an integer, got {case.expected_status!r}.",
        ))
    elif not 100 <= case.expected_status <= 599:
        warnings.append(ValidationError(
            path=f"{path}.expected_status",
            message=f"Expected status {case.expected_status} is not a valid HTTP status code.",
            severity="warning",
        ))

    if not _is_text(case.expected_code):
        errors.append(ValidationError(
            path=f"{path}.expected_code",
            message=f"'expected_code' must be a non-empty string, got {case.expected_code!r}.",
        ))


def _validate_payload(
    case: TestCase,
    path: str,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    """Validate the request payload shape of a case."""
    payload = case.payload
    accounts = payload.get("accounts")

    if not isinstance(accounts, list):
        errors.append(ValidationError(
            path=f"{path}.payload.accounts",
            message="'accounts' must be a list.",
        ))
    else:
        for j, account in enumerate(accounts):
            account_path = f"{path}.payload.accounts[{j}]"
            if not isinstance(account, dict):
                errors.append(ValidationError(
                    path=account_path,
                    message="Account must be a mapping.",
                ))
                continue

            missing = [name for name in REQUIRED_ACCOUNT_FIELDS if name not in account]
            if missing:
                errors.append(ValidationError(
                    path=account_path,
                    message=f"Account is missing: {', '.join(missing)}.",
                ))
                continue

            currency = account["currency"]
            if not (isinstance(currency, str) and len(currency) == 3 and currency.isalpha()):
                warnings.append(ValidationError(
                    path=f"{account_path}.currency",
                    message=f"Currency {currency!r} is not a 3-letter code.",
                    severity="warning",
                ))

    if not isinstance(payload.get("instruction"), str):
        errors.append(ValidationError(
            path=f"{path}.payload.instruction",
            message="'instruction' is required and must be a string.",
        ))
