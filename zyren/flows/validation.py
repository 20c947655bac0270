"""Shared validation for onboarding form submissions.

The frontend submits field changes as dictionaries. These validators make sure
the values are well-formed before they reach the wizard state.

On validation failure, raise `FormValidationError` so the API can return HTTP 422
with structured `field_errors`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional


@dataclass
class FormValidationError(Exception):
    """Exception raised for form validation failures.

    Attributes:
        field_errors: mapping of field name -> human-readable error message.
        message: optional top-level message.
    """

    field_errors: Dict[str, str]
    message: str = "Validation failed"

    def __str__(self) -> str:  # pragma: no cover
        return self.message


def _strip(v: Any) -> str:
    return "" if v is None else str(v).strip()


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def parse_bool(value: Any, field: str, errors: Dict[str, str], *, label: Optional[str] = None) -> bool:
    if isinstance(value, bool):
        return value
    s = _strip(value).lower()
    if s in ("true", "1", "yes", "y", "on"):
        return True
    if s in ("false", "0", "no", "n", "off"):
        return False
    add_error(errors, field, f"{label or field} must be true/false")
    return False


def validate_in(value: Any, allowed: Iterable[str], errors: Dict[str, str], field: str, *, label: Optional[str] = None) -> str:
    s = _strip(value)
    allowed = list(allowed)
    if s not in allowed:
        add_error(errors, field, f"{label or field} must be one of: {', '.join(allowed)}")
    return s


def raise_if_errors(errors: Dict[str, str]) -> None:
    if errors:
        raise FormValidationError(field_errors=errors)
