import logging
from dataclasses import dataclass

from core.application.validation import (
    check_update,
    clean_text,
    coerce_priority,
    coerce_status,
)
from core.domain.errors import TaskError
from core.domain.models.task import (
    UNSET,
    Task,
    TaskChanges,
    TaskPriority,
    TaskStatus,
)
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateTaskCommand:
    """Partial update; leave a field as UNSET to keep the stored value."""

    title: str = UNSET
    description: str | None = UNSET
    status: TaskStatus = UNSET
    priority: TaskPriority = UNSET

    def to_changes(self) -> TaskChanges:
        changes = TaskChanges()
        if self.title is not UNSET:
            changes.title = self.title.strip()
        if self.description is not UNSET:
            changes.description = clean_text(self.description)
        if self.status is not UNSET:
            changes.status = coerce_status(self.status)
        if self.priority is not UNSET:
            changes.priority = coerce_priority(self.priority)
        return changes


class UpdateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: int, cmd: UpdateTaskCommand) -> Task:
        provided = sum(
            value is not UNSET
            for value in (cmd.title, cmd.description, cmd.status, cmd.priority)
        )
        check_update(cmd.title, cmd.description, provided)
        changes = cmd.to_changes()

        logger.info("Updating task %s: %s", task_id, sorted(changes.as_dict()))
        task = self._repository.update(task_id, changes)
        if task is None:
            logger.warning("Task %s not found for update", task_id)
            raise TaskError.not_found(f"Task with ID {task_id} not found")

        logger.info("Task %s updated", task_id)
        return task
