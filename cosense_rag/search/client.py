import logging
from aiohttp import ClientSession

from cosense_rag.search.exceptions import SearchServiceException
from cosense_rag.search.schemas import SearchResponse

logger = logging.getLogger(__name__)


class AISearchClient:
    """Client for Cloudflare AI Search (AutoRAG) retrieval + generation."""

    def __init__(
        self,
        *,
        session: ClientSession,
        api_base: str,
        account_id: str,
        api_token: str,
        search_id: str,
    ):
        self.session = session
        self.url = (
            f"{api_base.rstrip('/')}/accounts/{account_id}/autorag/rags/{search_id}/ai-search"
        )
        self.headers = {"Authorization": f"Bearer {api_token}"}

    async def search(
        self,
        *,
        query: str,
        max_num_results: int,
        system_prompt: str,
        stream: bool = False,
    ) -> SearchResponse:
        payload = {
            "query": query,
            "stream": stream,
            "max_num_results": max_num_results,
            "system_prompt": system_prompt,
        }
        async with self.session.post(
            self.url, json=payload, headers=self.headers
        ) as response:
            response.raise_for_status()
            body = await response.json()

        if not body.get("success", False):
            raise SearchServiceException(body.get("errors"))

        result = SearchResponse(**body["result"])
        logger.debug(f"AI Search returned {len(result.data)} results")
        return result
