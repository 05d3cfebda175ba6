"""Data models for tasktable.

Statuses, filter modes and editable fields are closed enums so an unknown
value never reaches the store. Task is a pydantic model with assignment
validation: a field can only ever hold a coerced, well-formed value.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class Status(Enum):
    """Task lifecycle status."""

    ACTIVE = "active"
    DONE = "done"
    CANCELED = "canceled"

    @property
    def label(self) -> str:
        """Human-readable label for the status."""
        return _STATUS_LABELS[self]

    @classmethod
    def parse(cls, raw: str | Status) -> Status:
        """Parse a status from its value, member name or display label.

        Matching is case-insensitive. The Russian labels are the ones stored
        in data files exported by the original web table.

        Raises:
            ValueError: If the value names no status.
        """
        if isinstance(raw, cls):
            return raw

        text = str(raw).strip()
        lowered = text.lower()
        for status in cls:
            if lowered in (status.value, status.name.lower()):
                return status

        legacy = _LEGACY_LABELS.get(text)
        if legacy is not None:
            return legacy

        raise ValueError(f"unknown status: {raw!r}")


_STATUS_LABELS = {
    Status.ACTIVE: "Active",
    Status.DONE: "Done",
    Status.CANCELED: "Canceled",
}

_LEGACY_LABELS = {
    "Активная задача": Status.ACTIVE,
    "Задача выполнена": Status.DONE,
    "Задача отменена": Status.CANCELED,
}


class FilterMode(Enum):
    """Which tasks the table shows."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class EditField(Enum):
    """Task fields that can be edited inline."""

    DESCRIPTION = "description"
    STATUS = "status"
    DEADLINE = "deadline"


class Task(BaseModel):
    """A single task row."""

    model_config = ConfigDict(validate_assignment=True)

    id: int
    description: str
    status: Status
    deadline: date

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("description must not be blank")
        return value

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: object) -> Status:
        if isinstance(value, (str, Status)):
            return Status.parse(value)
        raise ValueError(f"unknown status: {value!r}")

    def field_value(self, field: EditField) -> str:
        """Return a field as the string an edit session starts from."""
        if field is EditField.DESCRIPTION:
            return self.description
        if field is EditField.STATUS:
            return self.status.value
        return self.deadline.isoformat()

    def is_overdue(self, today: date | None = None) -> bool:
        """Check if the deadline is already behind us."""
        if today is None:
            today = date.today()
        return self.deadline < today
