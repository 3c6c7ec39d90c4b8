from fastapi import HTTPException, status, Depends
from cosense_rag.config import Settings, get_settings


def workers_enabled_check(settings: Settings = Depends(get_settings)):
    if not settings.WORKERS_ENABLED:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Syncing requires workers to be enabled. Set WORKERS_ENABLED to True to enable workers.",
        )
