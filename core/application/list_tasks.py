import logging
from dataclasses import dataclass

from core.application.validation import clean_text, coerce_priority, coerce_status
from core.domain.models.task import (
    PaginatedTasks,
    Pagination,
    TaskFilters,
    TaskPriority,
    TaskStatus,
)
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0


@dataclass(slots=True)
class ListTasksCommand:
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    search: str | None = None
    limit: int | None = None
    offset: int | None = None


class ListTasksUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: ListTasksCommand | None = None) -> PaginatedTasks:
        cmd = cmd or ListTasksCommand()
        limit = cmd.limit or DEFAULT_LIMIT
        offset = cmd.offset or DEFAULT_OFFSET

        filters = TaskFilters(
            status=coerce_status(cmd.status) if cmd.status is not None else None,
            priority=(
                coerce_priority(cmd.priority) if cmd.priority is not None else None
            ),
            search=clean_text(cmd.search) or None,
            limit=limit,
            offset=offset,
        )
        logger.debug("Fetching tasks with filters: %s", filters)

        page = self._repository.find_all(filters)
        return PaginatedTasks(
            data=page.tasks,
            pagination=Pagination(
                total=page.total,
                limit=limit,
                offset=offset,
                has_more=offset + limit < page.total,
            ),
        )
