import logging
import operator
import threading
from contextlib import contextmanager
from functools import reduce

from peewee import Database, PeeweeException

from core.domain.errors import TaskError
from core.domain.models.task import (
    STORE_INT_MAX,
    Task,
    TaskChanges,
    TaskDraft,
    TaskFilters,
    TaskPage,
    TaskPriority,
    TaskStatus,
    utcnow,
)
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.model.models import TaskModel

logger = logging.getLogger(__name__)

# TaskModel is a module-level class, so binding it to a handle is process-wide.
# Operations hold this lock while the model points at their own database.
_BIND_LOCK = threading.RLock()


def _to_domain(model: TaskModel) -> Task:
    return Task(
        id=model.id,
        title=model.title,
        description=model.description,
        status=TaskStatus(model.status),
        priority=TaskPriority(model.priority),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _storable_id(task_id: int) -> bool:
    return 0 < task_id <= STORE_INT_MAX


class PeeweeTaskRepository(TaskRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    @contextmanager
    def _bound(self):
        with _BIND_LOCK, self._db.bind_ctx([TaskModel]):
            yield

    def create(self, draft: TaskDraft) -> Task:
        now = utcnow()
        with self._bound():
            try:
                task_id = TaskModel.insert(
                    title=draft.title,
                    description=draft.description,
                    status=draft.status.value,
                    priority=draft.priority.value,
                    created_at=now,
                    updated_at=now,
                ).execute()
            except PeeweeException as e:
                logger.error("Database insert failed: %s", e)
                raise TaskError.internal(f"Failed to create task: {e}") from e

            task = self.find_by_id(task_id)
        if task is None:
            raise TaskError.internal("Failed to create task")
        return task

    def find_all(self, filters: TaskFilters) -> TaskPage:
        conditions = []
        if filters.status:
            conditions.append(TaskModel.status == filters.status.value)
        if filters.priority:
            conditions.append(TaskModel.priority == filters.priority.value)
        if filters.search:
            conditions.append(
                TaskModel.title.contains(filters.search)
                | TaskModel.description.contains(filters.search)
            )

        with self._bound():
            # Queries take the model's database when built, so build them here.
            base = TaskModel.select()
            if conditions:
                base = base.where(reduce(operator.and_, conditions))

            page = base.order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
            if filters.limit:
                page = page.limit(min(filters.limit, STORE_INT_MAX))
            if filters.offset:
                page = page.offset(min(filters.offset, STORE_INT_MAX))

            try:
                tasks = [_to_domain(t) for t in page]
                total = base.count()
            except PeeweeException as e:
                raise TaskError.internal(f"Failed to fetch tasks: {e}") from e
        return TaskPage(tasks=tasks, total=total)

    def find_by_id(self, task_id: int) -> Task | None:
        if not _storable_id(task_id):
            return None
        with self._bound():
            try:
                model = TaskModel.get_or_none(TaskModel.id == task_id)
            except PeeweeException as e:
                raise TaskError.internal(f"Failed to fetch task: {e}") from e
            return _to_domain(model) if model is not None else None

    def update(self, task_id: int, changes: TaskChanges) -> Task | None:
        if not _storable_id(task_id):
            return None
        values = {
            name: value.value if isinstance(value, (TaskStatus, TaskPriority)) else value
            for name, value in changes.as_dict().items()
        }
        if not values:
            return self.find_by_id(task_id)

        values["updated_at"] = utcnow()
        with self._bound():
            try:
                updated = (
                    TaskModel.update(**values).where(TaskModel.id == task_id).execute()
                )
            except PeeweeException as e:
                raise TaskError.internal(f"Failed to update task: {e}") from e

            if updated == 0:
                return None
            return self.find_by_id(task_id)

    def delete(self, task_id: int) -> bool:
        if not _storable_id(task_id):
            return False
        with self._bound():
            try:
                deleted = TaskModel.delete().where(TaskModel.id == task_id).execute()
            except PeeweeException as e:
                raise TaskError.internal(f"Failed to delete task: {e}") from e
        return deleted > 0

    def exists(self, task_id: int) -> bool:
        if not _storable_id(task_id):
            return False
        with self._bound():
            try:
                return TaskModel.select().where(TaskModel.id == task_id).exists()
            except PeeweeException as e:
                raise TaskError.internal(f"Failed to check task existence: {e}") from e
