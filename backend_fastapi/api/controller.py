from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.delete_task import DeleteTaskCommand, DeleteTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksCommand, ListTasksUseCase
from core.application.update_task import UpdateTaskCommand, UpdateTaskUseCase
from core.domain.models.task import TaskPriority, TaskStatus
from backend_fastapi.api.schemas import (
    ApiResponse,
    MessageResponse,
    PaginationResponse,
    TaskCreateRequest,
    TaskListQuery,
    TaskListResponse,
    TaskResponse,
    TaskUpdateRequest,
)


class TaskController:
    """Turns validated requests into use case calls and wraps the results.

    Errors are not caught here; they reach the app's exception handlers.
    """

    def __init__(
        self,
        create: CreateTaskUseCase,
        list_: ListTasksUseCase,
        get: GetTaskUseCase,
        update: UpdateTaskUseCase,
        delete: DeleteTaskUseCase,
    ) -> None:
        self._create = create
        self._list = list_
        self._get = get
        self._update = update
        self._delete = delete

    def create_task(self, payload: TaskCreateRequest) -> ApiResponse[TaskResponse]:
        task = self._create.execute(
            CreateTaskCommand(
                title=payload.title,
                description=payload.description,
                status=payload.status or TaskStatus.PENDING,
                priority=payload.priority or TaskPriority.MEDIUM,
            )
        )
        return ApiResponse[TaskResponse](
            message="Task created successfully",
            data=TaskResponse.model_validate(task),
        )

    def list_tasks(self, query: TaskListQuery) -> ApiResponse[TaskListResponse]:
        result = self._list.execute(
            ListTasksCommand(
                status=query.status,
                priority=query.priority,
                search=query.search,
                limit=query.limit,
                offset=query.offset,
            )
        )
        pagination = result.pagination
        return ApiResponse[TaskListResponse](
            message="Tasks retrieved successfully",
            data=TaskListResponse(
                data=[TaskResponse.model_validate(task) for task in result.data],
                pagination=PaginationResponse(
                    total=pagination.total,
                    limit=pagination.limit,
                    offset=pagination.offset,
                    has_more=pagination.has_more,
                ),
            ),
        )

    def get_task(self, task_id: int) -> ApiResponse[TaskResponse]:
        task = self._get.execute(task_id)
        return ApiResponse[TaskResponse](
            message="Task retrieved successfully",
            data=TaskResponse.model_validate(task),
        )

    def update_task(
        self, task_id: int, payload: TaskUpdateRequest
    ) -> ApiResponse[TaskResponse]:
        sent = {name: getattr(payload, name) for name in payload.model_fields_set}
        task = self._update.execute(task_id, UpdateTaskCommand(**sent))
        return ApiResponse[TaskResponse](
            message="Task updated successfully",
            data=TaskResponse.model_validate(task),
        )

    def delete_task(self, task_id: int) -> MessageResponse:
        self._delete.execute(DeleteTaskCommand(id=task_id))
        return MessageResponse(message="Task deleted successfully")
