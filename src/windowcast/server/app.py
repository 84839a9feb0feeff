"""
HTTP Application
================

FastAPI application serving the control page and the latest frame.

Routing:
    GET <image_path>...  - Latest JPEG frame (404 until the first capture)
    GET anything else    - Control page (HTML viewer)

Every response carries ``Connection: close``: one request, one
response, then the connection is gone.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response

from windowcast.server.page import render_control_page
from windowcast.stream.store import FrameStore


logger = logging.getLogger(__name__)


_CLOSE_HEADERS = {"Connection": "close"}
_IMAGE_HEADERS = {"Connection": "close", "Cache-Control": "no-cache"}


def image_response(store: FrameStore) -> Response:
    """
    Build the response for an image request.

    Args:
        store: FrameStore to snapshot

    Returns:
        200 with the current JPEG, or 404 with an empty body if nothing
        has been captured yet.
    """
    frame = store.snapshot()
    if frame is None:
        return Response(status_code=404, headers=_CLOSE_HEADERS)

    return Response(
        content=frame.data,
        media_type="image/jpeg",
        headers=_IMAGE_HEADERS,
    )


def create_app(
    store: FrameStore,
    image_path: str = "/image",
    page_html: Optional[str] = None,
) -> FastAPI:
    """
    Create the WindowCast HTTP application.

    Args:
        store: FrameStore shared with the capture thread
        image_path: Path prefix that selects the image branch
        page_html: Control page body (default page if omitted)

    Returns:
        FastAPI application
    """
    if not image_path.startswith("/"):
        raise ValueError(f"image_path must start with '/', got {image_path!r}")

    page = page_html if page_html is not None else render_control_page(image_path=image_path)

    # Docs routes disabled: every non-image path belongs to the control page
    app = FastAPI(
        title="WindowCast",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store

    @app.get("/{path:path}", include_in_schema=False)
    async def dispatch(request: Request) -> Response:
        if request.url.path.startswith(image_path):
            return image_response(store)
        return HTMLResponse(page, headers=_CLOSE_HEADERS)

    return app
