from typing import Any
from pydantic import BaseModel, ConfigDict


class SearchResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    filename: str
    file_id: str | None = None
    score: float | None = None
    attributes: dict[str, Any] | None = None


class SearchResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    response: str
    data: list[SearchResult] = []
    has_more: bool = False
    next_page: str | None = None
