from fastapi import Depends, Request

from backend_fastapi.api.controller import TaskController
from infrastructure.config import Settings
from infrastructure.container import Container


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_task_controller(
    container: Container = Depends(get_container),
) -> TaskController:
    return TaskController(
        create=container.create_task_use_case(),
        list_=container.list_tasks_use_case(),
        get=container.get_task_use_case(),
        update=container.update_task_use_case(),
        delete=container.delete_task_use_case(),
    )
