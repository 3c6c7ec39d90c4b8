from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from cosense_rag.common.api_key import get_api_key
from cosense_rag.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    service_unavailable_response,
)
from cosense_rag.common.workers_enabled_check import workers_enabled_check
from cosense_rag.config import Settings, get_settings
from cosense_rag.export.schemas import SyncTaskResponse
from cosense_rag.tasks.dependencies import get_task_service
from cosense_rag.tasks.schemas import Task
from cosense_rag.tasks.service import TaskService


router = APIRouter(
    prefix="/api",
    tags=["Tasks"],
    dependencies=[Depends(get_api_key)],
)


@router.post(
    "/sync",
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(workers_enabled_check)],
    responses={**service_unavailable_response},
)
def start_sync(
    task_service: TaskService = Depends(get_task_service),
    settings: Settings = Depends(get_settings),
) -> SyncTaskResponse:
    task_id = task_service.start_sync(settings.PROJECT_NAME)
    return SyncTaskResponse(
        task_id=task_id,
        message=f"Syncing pages of project '{settings.PROJECT_NAME}'...",
    )


@router.get("/tasks")
def list_tasks(task_service: TaskService = Depends(get_task_service)) -> list[Task]:
    return task_service.list_tasks()


@router.get(
    "/tasks/{task_id}", responses={**resource_not_found_response(ResourceType.TASK)}
)
def get_task(
    task_id: str, task_service: TaskService = Depends(get_task_service)
) -> Task:
    return task_service.get_task(task_id)


@router.post(
    "/tasks/{task_id}/terminate",
    dependencies=[Depends(workers_enabled_check)],
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        **resource_not_found_response(ResourceType.TASK),
        **service_unavailable_response,
    },
)
def terminate_task(
    task_id: str, task_service: TaskService = Depends(get_task_service)
) -> JSONResponse:
    task_service.terminate_task(task_id)

    return JSONResponse(
        content={"message": f"Terminating task {task_id}"},
        status_code=status.HTTP_202_ACCEPTED,
    )
