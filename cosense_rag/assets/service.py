import logging
from aiohttp import ClientSession
from fastapi import Request, Response

logger = logging.getLogger(__name__)

# Headers that describe a single connection or the transfer encoding and must
# not be relayed between hops. aiohttp also decompresses bodies, so
# content-encoding and content-length no longer match what it returns.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailers",
        "transfer-encoding",
        "upgrade",
        "host",
        "content-length",
        "content-encoding",
    }
)

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; img-src 'self' data: https:; style-src 'self' 'unsafe-inline';"
)


class AssetProxyService:
    def __init__(self, *, session: ClientSession, asset_base_url: str, project_name: str):
        self.session = session
        self.asset_base_url = asset_base_url.rstrip("/")
        self.project_name = project_name

    def injected_headers(self) -> dict[str, str]:
        return {
            "Cache-Control": "no-cache",
            "Content-Security-Policy": CONTENT_SECURITY_POLICY,
            "Set-Cookie": f"projectName={self.project_name}; Path=/; SameSite=Lax",
        }

    def _upstream_url(self, request: Request) -> str:
        url = f"{self.asset_base_url}{request.url.path}"
        if request.url.query:
            url += f"?{request.url.query}"
        return url

    async def forward(self, request: Request) -> Response:
        request_headers = {
            name: value
            for name, value in request.headers.items()
            if name.lower() not in HOP_BY_HOP_HEADERS
        }
        body = await request.body()

        async with self.session.request(
            request.method,
            self._upstream_url(request),
            headers=request_headers,
            data=body or None,
            allow_redirects=False,
        ) as upstream:
            content = await upstream.read()
            upstream_headers = list(upstream.headers.items())
            status_code = upstream.status

        logger.debug(f"{request.method} {request.url.path} -> {status_code}")

        injected = self.injected_headers()
        overridden = {name.lower() for name in injected} | HOP_BY_HOP_HEADERS
        response = Response(content=content, status_code=status_code)
        # Repeated headers such as Link or Vary keep every value
        for name, value in upstream_headers:
            if name.lower() not in overridden:
                response.headers.append(name, value)
        for name, value in injected.items():
            response.headers[name] = value
        return response
