"""
FastAPI Endpoints for WarpLink (JSON variant)

Endpoints only handle request parsing and HTTP responses; the link service
does the work and raises WarpLinkError variants, which `warplink.api.errors`
turns into responses.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from warplink.api.schemas import CreateLinkRequest, ErrorResponse, LinkResponse
from warplink.core.context import AppContext, get_context

router = APIRouter()


@router.post(
    "/register",
    response_model=LinkResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a short link",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def register_link(
    body: CreateLinkRequest,
    context: AppContext = Depends(get_context),
) -> LinkResponse:
    link = await context.link_service.create_link(body.long_url)
    return LinkResponse.model_validate(link)


@router.get(
    "/{short_code}",
    status_code=status.HTTP_302_FOUND,
    summary="Redirect to the long URL",
    response_class=RedirectResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def redirect_to_long_url(
    short_code: str,
    context: AppContext = Depends(get_context),
) -> RedirectResponse:
    """
    Redirect to the long URL for a short code.

    The code is matched verbatim: no trimming, no case folding.
    """
    link = await context.link_service.resolve_link(short_code)
    return RedirectResponse(url=link.long_url, status_code=status.HTTP_302_FOUND)
