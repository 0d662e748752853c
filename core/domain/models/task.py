from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000
# Largest value a SQLite INTEGER column (ids, LIMIT, OFFSET) can hold.
STORE_INT_MAX = 2**63 - 1


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class _Unset:
    """Marks a field that was not provided in a partial update."""

    _instance = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def utcnow() -> datetime:
    # Naive UTC keeps SQLite text storage sortable across both ORMs.
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(slots=True)
class Task:
    id: int
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime


@dataclass(slots=True)
class TaskDraft:
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM


@dataclass(slots=True)
class TaskChanges:
    title: str = UNSET
    description: str | None = UNSET
    status: TaskStatus = UNSET
    priority: TaskPriority = UNSET

    def as_dict(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.as_dict()


@dataclass(slots=True)
class TaskFilters:
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    search: str | None = None
    limit: int | None = None
    offset: int | None = None


@dataclass(slots=True)
class TaskPage:
    tasks: list[Task] = field(default_factory=list)
    total: int = 0


@dataclass(slots=True)
class Pagination:
    total: int
    limit: int
    offset: int
    has_more: bool


@dataclass(slots=True)
class PaginatedTasks:
    data: list[Task]
    pagination: Pagination
