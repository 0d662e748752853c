import logging
from dataclasses import dataclass

from core.application.validation import (
    check_create,
    clean_text,
    coerce_priority,
    coerce_status,
)
from core.domain.models.task import Task, TaskDraft, TaskPriority, TaskStatus
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateTaskCommand:
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM


class CreateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: CreateTaskCommand) -> Task:
        check_create(cmd.title, cmd.description)
        draft = TaskDraft(
            title=cmd.title.strip(),
            description=clean_text(cmd.description),
            status=coerce_status(cmd.status),
            priority=coerce_priority(cmd.priority),
        )

        logger.info("Creating new task: %s", draft.title)
        task = self._repository.create(draft)
        logger.info("Task %s created", task.id)
        return task
