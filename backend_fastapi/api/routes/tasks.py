from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from backend_fastapi.api.controller import TaskController
from backend_fastapi.api.deps import get_task_controller
from backend_fastapi.api.schemas import (
    ApiResponse,
    MessageResponse,
    TaskCreateRequest,
    TaskListQuery,
    TaskListResponse,
    TaskResponse,
    TaskUpdateRequest,
    parse_task_id,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def task_id_param(
    task_id: str = Path(..., description="Positive integer id of the task"),
) -> int:
    return parse_task_id(task_id)


@router.post(
    "",
    response_model=ApiResponse[TaskResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
def create_task(
    payload: TaskCreateRequest,
    controller: TaskController = Depends(get_task_controller),
) -> ApiResponse[TaskResponse]:
    """
    Creates a new task.

    - **title**: required, at most 255 characters.
    - **description**: optional, at most 1000 characters.
    - **status**: `pending` (default), `in_progress` or `completed`.
    - **priority**: `low`, `medium` (default) or `high`.
    """
    return controller.create_task(payload)


@router.get(
    "",
    response_model=ApiResponse[TaskListResponse],
    summary="List tasks",
)
def list_tasks(
    query: Annotated[TaskListQuery, Query()],
    controller: TaskController = Depends(get_task_controller),
) -> ApiResponse[TaskListResponse]:
    """
    Lists tasks newest first.

    - **status** / **priority**: exact match filters.
    - **search**: substring of the title or description.
    - **limit**: page size between 1 and 100 (default 10).
    - **offset**: rows to skip (default 0).
    """
    return controller.list_tasks(query)


@router.get(
    "/{task_id}",
    response_model=ApiResponse[TaskResponse],
    summary="Get a task",
)
def get_task(
    task_id: int = Depends(task_id_param),
    controller: TaskController = Depends(get_task_controller),
) -> ApiResponse[TaskResponse]:
    return controller.get_task(task_id)


@router.api_route(
    "/{task_id}",
    methods=["PUT", "PATCH"],
    response_model=ApiResponse[TaskResponse],
    summary="Update a task",
)
def update_task(
    payload: TaskUpdateRequest,
    task_id: int = Depends(task_id_param),
    controller: TaskController = Depends(get_task_controller),
) -> ApiResponse[TaskResponse]:
    """
    Updates only the fields present in the body; at least one is required.
    """
    return controller.update_task(task_id, payload)


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task",
)
def delete_task(
    task_id: int = Depends(task_id_param),
    controller: TaskController = Depends(get_task_controller),
) -> MessageResponse:
    return controller.delete_task(task_id)
