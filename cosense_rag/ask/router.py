from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from cosense_rag.ask.dependencies import get_ask_service
from cosense_rag.ask.service import AskService
from cosense_rag.common.exceptions import internal_error_response


router = APIRouter(
    prefix="/api",
    tags=["Ask"],
)


@router.api_route(
    "/ask",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    response_class=JSONResponse,
    responses={
        200: {
            "description": "Answer with a list of cited pages",
            "content": {
                "text/markdown": {
                    "example": {"answer": "...\n\n## Sources\n- [Page](https://scrapbox.io/project/Page)"}
                }
            },
        },
        400: {
            "description": "Missing question",
            "content": {"text/plain": {"example": 'Missing "q" query parameter'}},
        },
        **internal_error_response,
    },
)
async def ask(
    q: str | None = None,
    ask_service: AskService = Depends(get_ask_service),
) -> Response:
    if not q:
        return PlainTextResponse(
            'Missing "q" query parameter', status_code=status.HTTP_400_BAD_REQUEST
        )

    result = await ask_service.ask(q)
    return JSONResponse(
        content=result.model_dump(),
        status_code=status.HTTP_200_OK,
        media_type="text/markdown",
    )
