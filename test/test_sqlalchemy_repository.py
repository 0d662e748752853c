import unittest

from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from infrastructure.sqlalchemy.repository.task_repository import (
    SqlAlchemyTaskRepository,
)
from infrastructure.sqlalchemy.session.db import (
    close_engine,
    init_db,
    is_memory_url,
    open_engine,
)
from repository_contract import TaskRepositoryContract


class SqlAlchemyTaskRepositoryTests(TaskRepositoryContract, unittest.TestCase):
    def setUp(self) -> None:
        self.engine = open_engine("sqlite:///:memory:")
        init_db(self.engine)
        self.repo = SqlAlchemyTaskRepository(self.engine)

    def tearDown(self) -> None:
        close_engine(self.engine)

    def test_schema_has_constraints_and_indexes(self) -> None:
        index_names = {index["name"] for index in inspect(self.engine).get_indexes("tasks")}

        self.assertTrue(
            {"idx_tasks_status", "idx_tasks_priority", "idx_tasks_created_at"}
            <= index_names
        )
        with self.engine.connect() as conn:
            with self.assertRaises(IntegrityError):
                conn.execute(
                    text(
                        "INSERT INTO tasks (title, status, priority, created_at, updated_at) "
                        "VALUES ('x', 'pending', 'urgent', '2024-01-01', '2024-01-01')"
                    )
                )


class EnginePoolTests(unittest.TestCase):
    def test_memory_urls(self) -> None:
        self.assertTrue(is_memory_url("sqlite:///:memory:"))
        self.assertTrue(is_memory_url("sqlite://"))
        self.assertFalse(is_memory_url("sqlite:///database.sqlite"))

    def test_only_in_memory_database_shares_one_connection(self) -> None:
        memory = open_engine("sqlite:///:memory:")
        self.addCleanup(close_engine, memory)
        on_disk = open_engine("sqlite:///database.sqlite")
        self.addCleanup(close_engine, on_disk)

        self.assertIsInstance(memory.pool, StaticPool)
        self.assertNotIsInstance(on_disk.pool, StaticPool)


if __name__ == "__main__":
    unittest.main()
