"""Request rules and response envelopes for the task API.

Each rule is a plain callable attached to a field with `BeforeValidator`, so
the checks for a route read as a list of declarations on its request model.
Rule failures are raised as `task_rule` errors whose message is returned to
the client as-is.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic_core import PydanticCustomError

from core.domain.errors import TaskError
from core.domain.models.task import (
    DESCRIPTION_MAX_LENGTH,
    STORE_INT_MAX,
    TITLE_MAX_LENGTH,
    TaskPriority,
    TaskStatus,
)

RULE_ERROR_TYPE = "task_rule"
SEARCH_MAX_LENGTH = 100
LIMIT_MAX = 100

T = TypeVar("T")


def rule_error(message: str) -> PydanticCustomError:
    return PydanticCustomError(RULE_ERROR_TYPE, message)


def required_text(
    label: str, max_length: int, empty_message: str | None = None
) -> Callable[[Any], str]:
    def check(value: Any) -> str:
        if value is not None and not isinstance(value, str):
            raise rule_error(f"{label} must be a string")
        value = (value or "").strip()
        if not value:
            raise rule_error(empty_message or f"{label} is required")
        if len(value) > max_length:
            raise rule_error(f"{label} must not exceed {max_length} characters")
        return value

    return check


def optional_text(
    label: str, max_length: int, too_long_message: str | None = None
) -> Callable[[Any], str | None]:
    def check(value: Any) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            raise rule_error(f"{label} must be a string")
        value = value.strip()
        if len(value) > max_length:
            raise rule_error(
                too_long_message or f"{label} must not exceed {max_length} characters"
            )
        return value

    return check


def enum_member(enum_cls: type[Enum], label: str) -> Callable[[Any], Enum]:
    def check(value: Any) -> Enum:
        try:
            return enum_cls(value)
        except ValueError:
            raise rule_error(f"Invalid {label} value") from None

    return check


def bounded_int(
    message: str, minimum: int, maximum: int | None = None
) -> Callable[[Any], int]:
    def check(value: Any) -> int:
        if isinstance(value, bool):
            raise rule_error(message)
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise rule_error(message) from None
        if isinstance(value, float) and value != number:
            raise rule_error(message)
        if number < minimum or (maximum is not None and number > maximum):
            raise rule_error(message)
        return number

    return check


Title = Annotated[Optional[str], BeforeValidator(required_text("Title", TITLE_MAX_LENGTH))]
UpdatedTitle = Annotated[
    Optional[str],
    BeforeValidator(
        required_text("Title", TITLE_MAX_LENGTH, empty_message="Title cannot be empty")
    ),
]
Description = Annotated[
    Optional[str],
    BeforeValidator(optional_text("Description", DESCRIPTION_MAX_LENGTH)),
]
Status = Annotated[Optional[TaskStatus], BeforeValidator(enum_member(TaskStatus, "status"))]
Priority = Annotated[
    Optional[TaskPriority], BeforeValidator(enum_member(TaskPriority, "priority"))
]


class TaskCreateRequest(BaseModel):
    """Body for POST /tasks."""

    model_config = ConfigDict(extra="ignore")

    title: Title = Field(default=None, validate_default=True, description="Task title")
    description: Description = Field(default=None, description="Task description")
    status: Status = Field(default=None, description="Initial status (default pending)")
    priority: Priority = Field(
        default=None, description="Task priority (default medium)"
    )


class TaskUpdateRequest(BaseModel):
    """Body for PUT/PATCH /tasks/{id}; only the fields sent are applied."""

    model_config = ConfigDict(extra="ignore")

    title: UpdatedTitle = None
    description: Description = None
    status: Status = None
    priority: Priority = None


class TaskListQuery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Status = None
    priority: Priority = None
    search: Annotated[
        Optional[str],
        BeforeValidator(
            optional_text("Search", SEARCH_MAX_LENGTH, "Search term too long")
        ),
    ] = None
    limit: Annotated[
        Optional[int],
        BeforeValidator(
            bounded_int(f"Limit must be between 1 and {LIMIT_MAX}", 1, LIMIT_MAX)
        ),
    ] = None
    offset: Annotated[
        Optional[int],
        BeforeValidator(
            bounded_int("Offset must be a non-negative integer", 0, STORE_INT_MAX)
        ),
    ] = None


def parse_task_id(raw: str) -> int:
    # Length check first: int() refuses very long digit strings.
    if (
        not (raw.isascii() and raw.isdigit())
        or len(raw) > len(str(STORE_INT_MAX))
        or not 1 <= int(raw) <= STORE_INT_MAX
    ):
        raise TaskError.validation("Invalid task ID")
    return int(raw)


# Responses


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime


class PaginationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    total: int
    limit: int
    offset: int
    has_more: bool = Field(alias="hasMore")


class TaskListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    data: list[TaskResponse]
    pagination: PaginationResponse


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: T


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: datetime
    uptime: float
    environment: str
