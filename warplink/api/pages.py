"""
Form Endpoints for WarpLink (page variant)

The same link service behind an HTML form: the page posts `long_link` as a
form field and swaps the returned snippet into place.
"""

import html
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse

from warplink.core.context import AppContext, get_context

router = APIRouter()

RESULT_SNIPPET = """
<div class="result-box">
<a href="{href}" target="_blank">
<span id="shortLink">
{text}
</span>
</a>
</div>
"""


def build_short_url(short_code: str, host: str, base_url: Optional[str] = None) -> str:
    """
    Public URL for a short code.

    A configured base URL wins. Otherwise the request host is used, over plain
    http for localhost and https everywhere else.
    """
    if base_url:
        return f"{base_url.rstrip('/')}/{short_code}"
    protocol = "http" if host.startswith("localhost") else "https"
    return f"{protocol}://{host}/{short_code}"


@router.post(
    "/",
    response_class=HTMLResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a short link from a form",
)
async def register_link_form(
    request: Request,
    long_link: str = Form(...),
    context: AppContext = Depends(get_context),
) -> HTMLResponse:
    link = await context.link_service.create_link(long_link)

    host = request.headers.get("host", request.url.netloc)
    full_link = html.escape(build_short_url(link.short_code, host, context.settings.BASE_URL))
    return HTMLResponse(
        RESULT_SNIPPET.format(href=full_link, text=full_link),
        status_code=status.HTTP_201_CREATED,
    )
