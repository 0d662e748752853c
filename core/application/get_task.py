import logging

from core.domain.errors import TaskError
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


class GetTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: int) -> Task:
        logger.debug("Fetching task %s", task_id)
        task = self._repository.find_by_id(task_id)
        if task is None:
            logger.warning("Task %s not found", task_id)
            raise TaskError.not_found(f"Task with ID {task_id} not found")
        return task
