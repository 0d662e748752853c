import logging
from typing import Any, Callable

from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.ports.task_repository import TaskRepository
from infrastructure.config import Settings

logger = logging.getLogger(__name__)


def _open_peewee(database_url: str) -> tuple[TaskRepository, Callable[[], None]]:
    from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository
    from infrastructure.peewee.session.db import close_database, init_db, open_database

    db = open_database(database_url)
    init_db(db)
    return PeeweeTaskRepository(db), lambda: close_database(db)


def _open_sqlalchemy(database_url: str) -> tuple[TaskRepository, Callable[[], None]]:
    from infrastructure.sqlalchemy.repository.task_repository import (
        SqlAlchemyTaskRepository,
    )
    from infrastructure.sqlalchemy.session.db import close_engine, init_db, open_engine

    engine = open_engine(database_url)
    init_db(engine)
    return SqlAlchemyTaskRepository(engine), lambda: close_engine(engine)


_BACKENDS: dict[str, Callable[[str], tuple[TaskRepository, Callable[[], None]]]] = {
    "peewee": _open_peewee,
    "sqlalchemy": _open_sqlalchemy,
}


class Container:
    """
    Owns the store handle for the life of the process.

    The handle is opened once, threaded into the repository and released
    by `close()` during shutdown.
    """

    def __init__(
        self,
        repository: TaskRepository,
        on_close: Callable[[], Any] | None = None,
    ) -> None:
        self.repository = repository
        self._on_close = on_close

    def create_task_use_case(self) -> CreateTaskUseCase:
        return CreateTaskUseCase(repository=self.repository)

    def list_tasks_use_case(self) -> ListTasksUseCase:
        return ListTasksUseCase(repository=self.repository)

    def get_task_use_case(self) -> GetTaskUseCase:
        return GetTaskUseCase(repository=self.repository)

    def update_task_use_case(self) -> UpdateTaskUseCase:
        return UpdateTaskUseCase(repository=self.repository)

    def delete_task_use_case(self) -> DeleteTaskUseCase:
        return DeleteTaskUseCase(repository=self.repository)

    def close(self) -> None:
        if self._on_close is not None:
            self._on_close()
            self._on_close = None


def build_container(settings: Settings) -> Container:
    repository, on_close = _BACKENDS[settings.orm](settings.database_url)
    logger.info("Task repository ready (orm=%s)", settings.orm)
    return Container(repository=repository, on_close=on_close)
