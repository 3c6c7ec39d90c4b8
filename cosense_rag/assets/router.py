from aiohttp import ClientSession
from fastapi import APIRouter, Depends, Request, Response

from cosense_rag.assets.service import AssetProxyService
from cosense_rag.common.http import get_http_session
from cosense_rag.config import Settings, get_settings


def get_asset_proxy_service(
    session: ClientSession = Depends(get_http_session),
    settings: Settings = Depends(get_settings),
) -> AssetProxyService:
    return AssetProxyService(
        session=session,
        asset_base_url=settings.ASSET_BASE_URL,
        project_name=settings.PROJECT_NAME,
    )


# Must be included last: it matches every path.
router = APIRouter(include_in_schema=False)


@router.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
)
async def proxy_asset(
    request: Request,
    path: str,
    proxy_service: AssetProxyService = Depends(get_asset_proxy_service),
) -> Response:
    return await proxy_service.forward(request)
