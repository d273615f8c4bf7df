"""Validation of raw perfume payloads before they reach the repository."""
from __future__ import annotations

from typing import Any, Sequence

from pydantic import ValidationError

from perfume_catalog.schemas.perfume import PerfumeCreate, ValidationIssue
from perfume_catalog.services.errors import PerfumeValidationError

_VALUE_ERROR_PREFIX = "Value error, "
_REQUEST_LOCATIONS = {"body", "query", "path", "header"}


def validate_perfume(raw: Any) -> PerfumeCreate:
    """
    Validate an untyped request body against the perfume schema.

    Every violated constraint is collected, so a client sees all problems in
    one round-trip. Optional fields that are absent receive their declared
    defaults. The function performs no I/O.

    Args:
        raw: Decoded JSON body (expected to be an object)

    Returns:
        PerfumeCreate with defaults applied

    Raises:
        PerfumeValidationError: If the payload is not an object or any field is invalid
    """
    if not isinstance(raw, dict):
        raise PerfumeValidationError(
            [ValidationIssue(field="body", message="Request body must be a JSON object")]
        )

    try:
        return PerfumeCreate.model_validate(raw)
    except ValidationError as e:
        raise PerfumeValidationError(issues_from_pydantic(e.errors())) from e


def issues_from_pydantic(errors: Sequence[Any], *, from_request: bool = False) -> list[ValidationIssue]:
    """Flatten pydantic (or FastAPI request) error dicts into field/message pairs."""
    issues: list[ValidationIssue] = []
    for error in errors:
        loc = list(error.get("loc", ()))
        if error.get("type") == "json_invalid":
            loc = []
        elif from_request and loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) if loc else "body"
        msg = error.get("msg", "Invalid value")
        if msg.startswith(_VALUE_ERROR_PREFIX):
            msg = msg[len(_VALUE_ERROR_PREFIX):]
        issues.append(ValidationIssue(field=field, message=msg))
    return issues
