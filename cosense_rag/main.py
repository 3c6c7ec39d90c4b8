import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from redis.exceptions import ConnectionError

from cosense_rag.common.exceptions import (
    ResourceNotFoundException,
    resource_not_found_handler,
    unexpected_exception_handler,
    redis_connection_exception_handler,
    validation_exception_handler,
)
from cosense_rag.common.http import create_http_session
from cosense_rag.common.opentelemetry import setup_opentelemetry
from cosense_rag.common.redis import create_redis_client
from cosense_rag.config import get_settings
from cosense_rag.ask.router import router as ask_router
from cosense_rag.assets.router import router as assets_router
from cosense_rag.healthcheck.router import router as health_router
from cosense_rag.tasks.router import router as tasks_router
from cosense_rag.celery import celery_app

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.redis_client = create_redis_client(settings.REDIS_URL)
    app.state.http_session = create_http_session(settings.USER_AGENT)
    app.state.celery_app = celery_app
    yield
    await app.state.http_session.close()
    app.state.redis_client.close()


app = FastAPI(
    title=settings.API_NAME,
    summary=settings.API_SUMMARY,
    lifespan=lifespan,
    version=settings.APP_VERSION,
)

if settings.OTEL_ENABLED:
    setup_opentelemetry(settings.OTEL_SERVICE_NAME, app)

app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ResourceNotFoundException)(resource_not_found_handler)
app.exception_handler(ConnectionError)(redis_connection_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)


app.include_router(health_router)
app.include_router(ask_router)
app.include_router(tasks_router)
# Catch-all, keep last
app.include_router(assets_router)
