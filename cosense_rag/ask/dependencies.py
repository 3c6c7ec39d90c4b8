from aiohttp import ClientSession
from fastapi import Depends

from cosense_rag.ask.service import AskService
from cosense_rag.common.http import get_http_session
from cosense_rag.config import Settings, get_settings
from cosense_rag.search.client import AISearchClient


def get_search_client(
    session: ClientSession = Depends(get_http_session),
    settings: Settings = Depends(get_settings),
) -> AISearchClient:
    return AISearchClient(
        session=session,
        api_base=settings.AI_SEARCH_API_BASE,
        account_id=settings.CLOUDFLARE_ACCOUNT_ID,
        api_token=settings.CLOUDFLARE_API_TOKEN,
        search_id=settings.AI_SEARCH_ID,
    )


def get_ask_service(
    search_client: AISearchClient = Depends(get_search_client),
    settings: Settings = Depends(get_settings),
) -> AskService:
    return AskService(
        search_client=search_client,
        project_name=settings.PROJECT_NAME,
        base_url=settings.COSENSE_BASE_URL,
        max_results=settings.ASK_MAX_RESULTS,
        sources_heading=settings.ASK_SOURCES_HEADING,
        deduplicate_sources=settings.ASK_DEDUPLICATE_SOURCES,
    )
