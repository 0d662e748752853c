import unittest
from dataclasses import replace
from datetime import timedelta

from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.delete_task import DeleteTaskCommand, DeleteTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksCommand, ListTasksUseCase
from core.application.update_task import UpdateTaskCommand, UpdateTaskUseCase
from core.domain.errors import ErrorKind, TaskError
from core.domain.models.task import (
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


class InMemoryTaskRepository(TaskRepository):
    def __init__(self) -> None:
        self._data: dict[int, Task] = {}
        self._next_id = 1
        self.last_filters: TaskFilters | None = None

    def create(self, draft: TaskDraft) -> Task:
        now = utcnow() + timedelta(microseconds=self._next_id)
        task = Task(
            id=self._next_id,
            title=draft.title,
            description=draft.description,
            status=draft.status,
            priority=draft.priority,
            created_at=now,
            updated_at=now,
        )
        self._data[task.id] = task
        self._next_id += 1
        return task

    def find_all(self, filters: TaskFilters) -> TaskPage:
        self.last_filters = filters
        tasks = sorted(self._data.values(), key=lambda t: t.created_at, reverse=True)
        if filters.status:
            tasks = [t for t in tasks if t.status == filters.status]
        if filters.priority:
            tasks = [t for t in tasks if t.priority == filters.priority]
        if filters.search:
            term = filters.search.lower()
            tasks = [
                t
                for t in tasks
                if term in t.title.lower() or term in (t.description or "").lower()
            ]
        start = filters.offset or 0
        end = start + filters.limit if filters.limit else None
        return TaskPage(tasks=tasks[start:end], total=len(tasks))

    def find_by_id(self, task_id: int) -> Task | None:
        return self._data.get(task_id)

    def update(self, task_id: int, changes: TaskChanges) -> Task | None:
        task = self._data.get(task_id)
        if task is None or changes.is_empty():
            return task
        updated = replace(
            task,
            **changes.as_dict(),
            updated_at=task.updated_at + timedelta(seconds=1),
        )
        self._data[task_id] = updated
        return updated

    def delete(self, task_id: int) -> bool:
        return self._data.pop(task_id, None) is not None

    def exists(self, task_id: int) -> bool:
        return task_id in self._data


class CoreUseCasesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryTaskRepository()
        self.create = CreateTaskUseCase(self.repo)

    def assertTaskError(self, kind: ErrorKind, message: str, func, *args) -> None:
        with self.assertRaises(TaskError) as ctx:
            func(*args)
        self.assertIs(ctx.exception.kind, kind)
        self.assertEqual(ctx.exception.message, message)

    # create

    def test_create_applies_defaults_and_trims(self) -> None:
        task = self.create.execute(
            CreateTaskCommand(title="  Plan sprint  ", description=" notes ")
        )

        self.assertEqual(task.id, 1)
        self.assertEqual(task.title, "Plan sprint")
        self.assertEqual(task.description, "notes")
        self.assertEqual(task.status, TaskStatus.PENDING)
        self.assertEqual(task.priority, TaskPriority.MEDIUM)
        self.assertEqual(self.repo.find_by_id(task.id), task)

    def test_create_coerces_plain_string_enums(self) -> None:
        task = self.create.execute(
            CreateTaskCommand(title="x", status="in_progress", priority="high")
        )

        self.assertEqual(task.status, TaskStatus.IN_PROGRESS)
        self.assertEqual(task.priority, TaskPriority.HIGH)

    def test_create_rejects_invalid_input_before_storage(self) -> None:
        cases = [
            (CreateTaskCommand(title=""), "Title is required and cannot be empty"),
            (CreateTaskCommand(title="   "), "Title is required and cannot be empty"),
            (CreateTaskCommand(title="t" * 256), "Title must not exceed 255 characters"),
            (
                CreateTaskCommand(title="ok", description="d" * 1001),
                "Description must not exceed 1000 characters",
            ),
            (CreateTaskCommand(title="ok", status="archived"), "Invalid status value"),
            (CreateTaskCommand(title="ok", priority="urgent"), "Invalid priority value"),
        ]
        for cmd, message in cases:
            with self.subTest(message=message):
                self.assertTaskError(
                    ErrorKind.VALIDATION, message, self.create.execute, cmd
                )

        self.assertEqual(self.repo.find_all(TaskFilters()).total, 0)

    def test_create_accepts_boundary_lengths(self) -> None:
        task = self.create.execute(
            CreateTaskCommand(title="t" * 255, description="d" * 1000)
        )

        self.assertEqual(len(task.title), 255)

    def test_lengths_are_checked_after_trimming(self) -> None:
        task = self.create.execute(
            CreateTaskCommand(title="  " + "t" * 255 + "  ", description=" " + "d" * 1000 + " ")
        )

        self.assertEqual(task.title, "t" * 255)
        self.assertEqual(task.description, "d" * 1000)

        updated = UpdateTaskUseCase(self.repo).execute(
            task.id, UpdateTaskCommand(title="\t" + "u" * 255 + "\n")
        )

        self.assertEqual(updated.title, "u" * 255)

    # list

    def test_list_uses_default_pagination(self) -> None:
        for i in range(12):
            self.create.execute(CreateTaskCommand(title=f"task {i}"))

        result = ListTasksUseCase(self.repo).execute()

        self.assertEqual(len(result.data), 10)
        self.assertEqual(result.pagination.limit, 10)
        self.assertEqual(result.pagination.offset, 0)
        self.assertEqual(result.pagination.total, 12)
        self.assertTrue(result.pagination.has_more)
        self.assertEqual(result.data[0].title, "task 11")

    def test_list_last_page_has_no_more(self) -> None:
        for i in range(5):
            self.create.execute(CreateTaskCommand(title=f"task {i}"))

        result = ListTasksUseCase(self.repo).execute(ListTasksCommand(limit=2, offset=3))

        self.assertEqual([t.title for t in result.data], ["task 1", "task 0"])
        self.assertFalse(result.pagination.has_more)

    def test_list_passes_filters_to_repository(self) -> None:
        self.create.execute(CreateTaskCommand(title="a", status=TaskStatus.COMPLETED))
        self.create.execute(CreateTaskCommand(title="b"))

        result = ListTasksUseCase(self.repo).execute(
            ListTasksCommand(status="completed", search="  a ")
        )

        self.assertEqual(self.repo.last_filters.status, TaskStatus.COMPLETED)
        self.assertEqual(self.repo.last_filters.search, "a")
        self.assertEqual([t.title for t in result.data], ["a"])
        self.assertEqual(result.pagination.total, 1)

    # get

    def test_get_existing_task(self) -> None:
        created = self.create.execute(CreateTaskCommand(title="Find me"))

        self.assertEqual(GetTaskUseCase(self.repo).execute(created.id), created)

    def test_get_missing_task_raises_not_found(self) -> None:
        self.assertTaskError(
            ErrorKind.NOT_FOUND,
            "Task with ID 99999 not found",
            GetTaskUseCase(self.repo).execute,
            99999,
        )

    # update

    def test_update_changes_only_provided_fields(self) -> None:
        created = self.create.execute(
            CreateTaskCommand(title="Inicial", description="d1")
        )

        updated = UpdateTaskUseCase(self.repo).execute(
            created.id,
            UpdateTaskCommand(title=" Actualizada ", status=TaskStatus.COMPLETED),
        )

        self.assertEqual(updated.title, "Actualizada")
        self.assertEqual(updated.status, TaskStatus.COMPLETED)
        self.assertEqual(updated.description, "d1")
        self.assertEqual(updated.priority, TaskPriority.MEDIUM)
        self.assertGreater(updated.updated_at, created.updated_at)

    def test_update_with_empty_payload_is_rejected(self) -> None:
        created = self.create.execute(CreateTaskCommand(title="Keep"))

        self.assertTaskError(
            ErrorKind.VALIDATION,
            "At least one field must be provided for update",
            UpdateTaskUseCase(self.repo).execute,
            created.id,
            UpdateTaskCommand(),
        )
        # The repository on its own treats the same request as a no-op.
        self.assertEqual(self.repo.update(created.id, TaskChanges()), created)

    def test_update_rejects_blank_or_long_values(self) -> None:
        created = self.create.execute(CreateTaskCommand(title="Keep"))
        use_case = UpdateTaskUseCase(self.repo)
        cases = [
            (UpdateTaskCommand(title="  "), "Title cannot be empty"),
            (UpdateTaskCommand(title=None), "Title cannot be empty"),
            (UpdateTaskCommand(title="t" * 256), "Title must not exceed 255 characters"),
            (
                UpdateTaskCommand(description="d" * 1001),
                "Description must not exceed 1000 characters",
            ),
            (UpdateTaskCommand(priority="urgent"), "Invalid priority value"),
        ]
        for cmd, message in cases:
            with self.subTest(message=message):
                self.assertTaskError(
                    ErrorKind.VALIDATION, message, use_case.execute, created.id, cmd
                )

        self.assertEqual(self.repo.find_by_id(created.id), created)

    def test_update_missing_task_raises_not_found(self) -> None:
        self.assertTaskError(
            ErrorKind.NOT_FOUND,
            "Task with ID 7 not found",
            UpdateTaskUseCase(self.repo).execute,
            7,
            UpdateTaskCommand(title="x"),
        )

    # delete

    def test_delete_twice_raises_not_found_the_second_time(self) -> None:
        created = self.create.execute(CreateTaskCommand(title="Eliminar"))
        use_case = DeleteTaskUseCase(self.repo)

        use_case.execute(DeleteTaskCommand(id=created.id))

        self.assertIsNone(self.repo.find_by_id(created.id))
        self.assertTaskError(
            ErrorKind.NOT_FOUND,
            f"Task with ID {created.id} not found",
            use_case.execute,
            DeleteTaskCommand(id=created.id),
        )


if __name__ == "__main__":
    unittest.main()
