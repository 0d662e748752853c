import logging
from dataclasses import dataclass

from core.domain.errors import TaskError
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeleteTaskCommand:
    id: int


class DeleteTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: DeleteTaskCommand) -> None:
        logger.info("Deleting task %s", cmd.id)
        if not self._repository.delete(cmd.id):
            logger.warning("Task %s not found for deletion", cmd.id)
            raise TaskError.not_found(f"Task with ID {cmd.id} not found")
        logger.info("Task %s deleted", cmd.id)
