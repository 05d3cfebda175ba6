"""Validation of the add-task form."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date

from pydantic import TypeAdapter, ValidationError

from tasktable.models import Status

DESCRIPTION_REQUIRED = "description required"
STATUS_REQUIRED = "status required"
DEADLINE_REQUIRED = "deadline required"
STATUS_UNKNOWN = "unknown status"
DEADLINE_MALFORMED = "deadline must be a YYYY-MM-DD date"

ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Same parser the Task model uses for its deadline
_DATE_ADAPTER = TypeAdapter(date)


def validate(candidate: Mapping[str, object]) -> dict[str, str]:
    """Validate a candidate task before it is added.

    Missing keys count as empty. Deadlines in the past are accepted.

    Returns:
        Mapping of field name to error message; empty when the form is valid.
    """
    errors: dict[str, str] = {}

    description = candidate.get("description")
    if not _text(description).strip():
        errors["description"] = DESCRIPTION_REQUIRED

    status = candidate.get("status")
    if not _text(status):
        errors["status"] = STATUS_REQUIRED
    else:
        try:
            Status.parse(status)  # type: ignore[arg-type]
        except ValueError:
            errors["status"] = STATUS_UNKNOWN

    deadline = candidate.get("deadline")
    if not _text(deadline):
        errors["deadline"] = DEADLINE_REQUIRED
    elif not isinstance(deadline, date) and not _is_iso_date(str(deadline)):
        errors["deadline"] = DEADLINE_MALFORMED

    return errors


def _text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, Status):
        return value.value
    return str(value)


def _is_iso_date(text: str) -> bool:
    if not ISO_DATE_RE.fullmatch(text):
        return False
    try:
        _DATE_ADAPTER.validate_python(text)
    except ValidationError:
        return False
    return True
