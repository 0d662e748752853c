import threading
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, and_, delete, func, or_, select, true, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

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
from infrastructure.sqlalchemy.model.models import TaskModel
from infrastructure.sqlalchemy.session.db import session_factory


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


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, engine: Engine) -> None:
        self._session_factory = session_factory(engine)
        # SQLite takes one writer at a time, and an in-memory database shares
        # a single connection, so a session never overlaps another one.
        self._lock = threading.RLock()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self._lock:
            session = self._session_factory()
            try:
                yield session
            finally:
                session.close()

    def create(self, draft: TaskDraft) -> Task:
        now = utcnow()
        with self._session() as session:
            try:
                task_model = TaskModel(
                    title=draft.title,
                    description=draft.description,
                    status=draft.status.value,
                    priority=draft.priority.value,
                    created_at=now,
                    updated_at=now,
                )
                session.add(task_model)
                session.commit()
                task_id = task_model.id
            except SQLAlchemyError as e:
                session.rollback()
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
            pattern = f"%{filters.search}%"
            conditions.append(
                or_(TaskModel.title.ilike(pattern), TaskModel.description.ilike(pattern))
            )
        predicate = and_(true(), *conditions)

        page_query = (
            select(TaskModel)
            .where(predicate)
            .order_by(TaskModel.created_at.desc(), TaskModel.id.desc())
        )
        if filters.limit:
            page_query = page_query.limit(min(filters.limit, STORE_INT_MAX))
        if filters.offset:
            page_query = page_query.offset(min(filters.offset, STORE_INT_MAX))
        count_query = select(func.count()).select_from(TaskModel).where(predicate)

        with self._session() as session:
            try:
                tasks = [_to_domain(t) for t in session.scalars(page_query)]
                total = session.scalar(count_query) or 0
            except SQLAlchemyError as e:
                raise TaskError.internal(f"Failed to fetch tasks: {e}") from e
        return TaskPage(tasks=tasks, total=total)

    def find_by_id(self, task_id: int) -> Task | None:
        if not _storable_id(task_id):
            return None
        with self._session() as session:
            try:
                task_model = session.get(TaskModel, task_id)
            except SQLAlchemyError as e:
                raise TaskError.internal(f"Failed to fetch task: {e}") from e
            return _to_domain(task_model) if task_model is not None else None

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
        with self._session() as session:
            try:
                result = session.execute(
                    update(TaskModel).where(TaskModel.id == task_id).values(**values)
                )
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise TaskError.internal(f"Failed to update task: {e}") from e

        if result.rowcount == 0:
            return None
        return self.find_by_id(task_id)

    def delete(self, task_id: int) -> bool:
        if not _storable_id(task_id):
            return False
        with self._session() as session:
            try:
                result = session.execute(
                    delete(TaskModel).where(TaskModel.id == task_id)
                )
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise TaskError.internal(f"Failed to delete task: {e}") from e
        return result.rowcount > 0

    def exists(self, task_id: int) -> bool:
        if not _storable_id(task_id):
            return False
        with self._session() as session:
            try:
                found = session.scalar(
                    select(TaskModel.id).where(TaskModel.id == task_id).limit(1)
                )
            except SQLAlchemyError as e:
                raise TaskError.internal(f"Failed to check task existence: {e}") from e
        return found is not None
