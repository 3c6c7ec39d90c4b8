from pydantic import BaseModel


class ExportedDocument(BaseModel):
    key: str
    content: str


class SyncCheckpoint(BaseModel):
    project: str
    run_id: str | None = None
    skip: int
    total_count: int
    updated_at: str


class SyncResult(BaseModel):
    project: str
    pages_processed: int
    pages_exported: int
    pages_skipped: int
    message: str


class SyncTaskResponse(BaseModel):
    task_id: str
    message: str
