from functools import lru_cache
from typing import Any, Literal
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application Configuration
    PROJECT_NAME: str = "help-jp"

    APP_VERSION: str = "v0.1.x"
    API_NAME: str = "Cosense RAG"
    API_SUMMARY: str = "Mirrors a Cosense project to object storage and answers questions about it"

    API_KEY: str | None = None

    WORKERS_ENABLED: bool = True
    TASK_RETENTION_DAYS: int = 7
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    USER_AGENT: str = "cosense-rag"
    MAX_CONCURRENT_REQUESTS: int = 10

    # Cosense
    COSENSE_SID: str = ""
    COSENSE_BASE_URL: str = "https://scrapbox.io"

    # Sync Settings
    SYNC_INTERVAL_MINUTES: int = 60
    SYNC_PAGE_LIMIT: int = 100
    SYNC_CHECKPOINT_ENABLED: bool = True

    # Broker Configuration
    REDIS_URL: str = "redis://localhost:6379"

    # Object Store Configuration
    OBJECT_STORE_BACKEND: Literal["s3", "local"] = "s3"
    S3_BUCKET: str | None = None
    S3_ENDPOINT_URL: str | None = None  # e.g. https://<account>.r2.cloudflarestorage.com
    S3_REGION: str | None = "auto"
    S3_ACCESS_KEY_ID: str | None = None
    S3_SECRET_ACCESS_KEY: str | None = None
    LOCAL_STORE_PATH: str = "./data"

    # AI Search Configuration
    CLOUDFLARE_ACCOUNT_ID: str = ""
    CLOUDFLARE_API_TOKEN: str = ""
    AI_SEARCH_ID: str = ""
    AI_SEARCH_API_BASE: str = "https://api.cloudflare.com/client/v4"

    # Ask Settings
    ASK_MAX_RESULTS: int = 5
    ASK_SOURCES_HEADING: str = "Sources"
    ASK_DEDUPLICATE_SOURCES: bool = False

    # Static Assets
    ASSET_BASE_URL: str = "http://localhost:8080"

    # OpenTelemetry Settings
    OTEL_ENABLED: bool = False
    OTEL_SERVICE_NAME: str = "cosense-rag"

    @model_validator(mode="after")
    def validate_object_store(self):
        if self.OBJECT_STORE_BACKEND == "s3" and not self.S3_BUCKET:
            raise ValueError("S3_BUCKET must be set when OBJECT_STORE_BACKEND is 's3'")
        return self

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("COSENSE_BASE_URL", "ASSET_BASE_URL", "AI_SEARCH_API_BASE")
    def strip_trailing_slash(cls, v: str):
        return v.rstrip("/")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings():
    return Settings()
