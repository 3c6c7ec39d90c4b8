from typing import Any


class SearchServiceException(Exception):
    def __init__(self, errors: list[Any] | None = None):
        self.errors = errors or []
        super().__init__(f"AI Search request failed: {self.errors or 'unknown error'}")
