from datetime import timedelta
import logging
from typing import Any
from celery import Celery, signals
from celery.app.task import Context
from fastapi import Request

from cosense_rag.config import get_settings

settings = get_settings()

redis_url = settings.REDIS_URL

SYNC_TASK_NAME = "Sync Project Pages"

celery_app = Celery(
    __name__,
    broker=redis_url,
    backend=redis_url,
    broker_connection_retry_on_startup=True,
    include=["cosense_rag.tasks.sync_pages"],
    result_expires=timedelta(days=settings.TASK_RETENTION_DAYS),
    # Track started tasks so they show up in the task API while running
    task_track_started=True,
)

# One new sync run per firing; overlapping runs are not de-duplicated.
celery_app.conf.beat_schedule = {
    "sync-project-pages": {
        "task": SYNC_TASK_NAME,
        "schedule": timedelta(minutes=settings.SYNC_INTERVAL_MINUTES),
        "kwargs": {"project_name": settings.PROJECT_NAME},
    },
}


@signals.setup_logging.connect
def setup_celery_logging(**kwargs: Any) -> None:
    logging.basicConfig(level=settings.LOG_LEVEL)


@signals.task_revoked.connect
def handle_task_revoked(
    *, request: Context, terminated: bool, signum: int, expired: bool, **kwargs: Any
) -> None:
    if not request:
        return

    task_id = request.id
    project_name = request.kwargs.get("project_name") if request.kwargs else None
    type = "terminated" if terminated else "revoked"
    meta: dict[str, Any] = {
        "project": project_name or "unknown",
        "message": f"Sync was {type}.",
    }
    celery_app.backend.store_result(task_id=task_id, result=meta, state=type.upper())  # type: ignore


def get_celery_app(request: Request) -> Celery:
    return request.app.state.celery_app
