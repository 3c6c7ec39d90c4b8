import asyncio
import logging
from types import TracebackType
from typing import Any, Type
from urllib.parse import quote
from aiohttp import ClientSession
from yarl import URL

from cosense_rag.cosense.exceptions import CosenseApiException
from cosense_rag.cosense.schemas import PageDetail, PageList


logger = logging.getLogger(__name__)


def encode_uri_component(value: str) -> str:
    """Percent-encode a path segment the way JavaScript's encodeURIComponent does."""
    return quote(value, safe="-_.!~*'()")


class CosenseClient:
    def __init__(
        self,
        *,
        base_url: str,
        session_id: str,
        concurrent_requests: int,
        user_agent: str,
    ):
        self.base_url = base_url.rstrip("/")
        self.session: ClientSession = ClientSession(
            headers={
                "Accept": "application/json",
                "User-Agent": user_agent,
                "Cookie": f"connect.sid={session_id}",
            }
        )
        self.semaphore = asyncio.Semaphore(concurrent_requests)

    async def __aenter__(self):
        return self

    async def __aexit__(
        self, exc_type: Type[Exception], exc: Exception, tb: TracebackType
    ):
        if self.session:
            await self.session.close()

    def _pages_url(self, project: str, title: str | None = None) -> URL:
        path = f"/api/pages/{encode_uri_component(project)}"
        if title is not None:
            path += f"/{encode_uri_component(title)}"
        # Titles may contain "/" which must stay encoded as %2F
        return URL(f"{self.base_url}{path}", encoded=True)

    async def request(
        self, url: URL, params: dict[str, str] | None = None
    ) -> Any:
        async with self.semaphore:
            async with self.session.get(url, params=params) as response:
                if not response.ok:
                    raise CosenseApiException(str(url), response.status, response.reason)
                return await response.json()

    async def list_pages(self, project: str, skip: int, limit: int) -> PageList:
        data = await self.request(
            self._pages_url(project),
            params={"skip": str(skip), "limit": str(limit)},
        )
        return PageList(**data)

    async def fetch_page(self, project: str, title: str) -> PageDetail | None:
        """Returns None when Cosense answers with an error status for the page."""
        try:
            data = await self.request(self._pages_url(project, title))
        except CosenseApiException as e:
            logger.warning(f"Skipping page '{title}': {e}")
            return None
        return PageDetail(**data)
