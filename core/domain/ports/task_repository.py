from abc import ABC, abstractmethod

from core.domain.models.task import Task, TaskChanges, TaskDraft, TaskFilters, TaskPage


class TaskRepository(ABC):
    @abstractmethod
    def create(self, draft: TaskDraft) -> Task:
        raise NotImplementedError

    @abstractmethod
    def find_all(self, filters: TaskFilters) -> TaskPage:
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, task_id: int) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def update(self, task_id: int, changes: TaskChanges) -> Task | None:
        """Apply only the provided fields; an empty change set is a no-op read."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, task_id: int) -> bool:
        raise NotImplementedError

    @abstractmethod
    def exists(self, task_id: int) -> bool:
        raise NotImplementedError
