import asyncio
import logging
from typing import Any
from celery import current_task
from celery.exceptions import Ignore

from cosense_rag.common.redis import create_redis_client
from cosense_rag.config import get_settings
from cosense_rag.celery import SYNC_TASK_NAME, celery_app
from cosense_rag.cosense.client import CosenseClient
from cosense_rag.document_store.backend import get_object_store_backend
from cosense_rag.export.checkpoint import SyncCheckpointStore
from cosense_rag.export.exceptions import SyncException
from cosense_rag.export.service import PageExportService

logger = logging.getLogger(__name__)


@celery_app.task(
    name=SYNC_TASK_NAME,
    acks_late=True,
    reject_on_worker_lost=True,
)
def sync_project_pages_task(project_name: str | None = None) -> dict[str, Any]:
    """Celery task mirroring every page of a project into the object store.

    The message is acknowledged only once the run finishes, so a run cut short
    by a lost worker is redelivered and resumes from the stored checkpoint.
    """
    settings = get_settings()
    project_name = project_name or settings.PROJECT_NAME
    loop: asyncio.AbstractEventLoop | None = None

    try:
        if not settings.COSENSE_SID:
            raise SyncException("COSENSE_SID is not set.")

        current_task.update_state(
            state="SYNCING",
            meta={
                "project": project_name,
                "message": "Syncing pages...",
            },
        )

        object_store = get_object_store_backend(settings)
        checkpoint_store = (
            SyncCheckpointStore(create_redis_client(settings.REDIS_URL))
            if settings.SYNC_CHECKPOINT_ENABLED
            else None
        )

        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

        async def run_sync() -> dict[str, Any]:
            async with CosenseClient(
                base_url=settings.COSENSE_BASE_URL,
                session_id=settings.COSENSE_SID,
                concurrent_requests=settings.MAX_CONCURRENT_REQUESTS,
                user_agent=settings.USER_AGENT,
            ) as client:
                export_service = PageExportService(
                    client=client,
                    object_store=object_store,
                    project_name=project_name,
                    base_url=settings.COSENSE_BASE_URL,
                    page_limit=settings.SYNC_PAGE_LIMIT,
                    checkpoint_store=checkpoint_store,
                    run_id=current_task.request.id,
                )
                result = await export_service.sync_all()
                return result.model_dump()

        result = loop.run_until_complete(run_sync())
        logger.info(result["message"])
        return result
    except Exception as e:
        logger.exception(f"Failed to sync pages for project {project_name}.")
        current_task.update_state(
            state="FAILURE",
            meta={
                "project": project_name,
                "message": "Failed to sync pages.",
                "error": str(e),
                "exc_type": type(e).__name__,
            },
        )
        raise Ignore()

    finally:
        if loop:
            loop.close()
