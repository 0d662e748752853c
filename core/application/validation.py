"""Business rules shared by the task use cases.

The HTTP layer checks the same constraints first; these run again so that
direct callers of the use cases get the same guarantees.
"""

from enum import Enum
from typing import TypeVar

from core.domain.errors import TaskError
from core.domain.models.task import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    UNSET,
    TaskPriority,
    TaskStatus,
)

E = TypeVar("E", bound=Enum)


def check_create(title: str | None, description: str | None) -> None:
    if not title or not title.strip():
        raise TaskError.validation("Title is required and cannot be empty")
    if len(title.strip()) > TITLE_MAX_LENGTH:
        raise TaskError.validation(
            f"Title must not exceed {TITLE_MAX_LENGTH} characters"
        )
    _check_description(description)


def check_update(title, description, provided: int) -> None:
    if title is not UNSET:
        if title is None or not title.strip():
            raise TaskError.validation("Title cannot be empty")
        if len(title.strip()) > TITLE_MAX_LENGTH:
            raise TaskError.validation(
                f"Title must not exceed {TITLE_MAX_LENGTH} characters"
            )
    if description is not UNSET:
        _check_description(description)
    if provided == 0:
        raise TaskError.validation("At least one field must be provided for update")


def _check_description(description: str | None) -> None:
    if description and len(description.strip()) > DESCRIPTION_MAX_LENGTH:
        raise TaskError.validation(
            f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters"
        )


def coerce_enum(enum_cls: type[E], value, label: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise TaskError.validation(f"Invalid {label} value") from None


def coerce_status(value) -> TaskStatus:
    return coerce_enum(TaskStatus, value, "status")


def coerce_priority(value) -> TaskPriority:
    return coerce_enum(TaskPriority, value, "priority")


def clean_text(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value
