from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from starlette.responses import Response

from librearca_core.config import ConfigStore, config_script
from librearca_core.skins import LayoutContext, LayoutError, render_layout

logger = logging.getLogger(__name__)

config_router = APIRouter(tags=["config"])
shell_router = APIRouter(tags=["shell"])


@config_router.api_route(
    "/config.js", methods=["GET", "HEAD"], include_in_schema=False, response_model=None
)
async def runtime_config(request: Request) -> Response:
    store: ConfigStore = request.app.state.config_store
    return Response(
        content=config_script(store.get()),
        media_type="application/javascript",
        headers={"Cache-Control": "no-store"},
    )


@shell_router.api_route(
    "/{full_path:path}", methods=["GET", "HEAD"], include_in_schema=False, response_model=None
)
async def render_shell(request: Request, full_path: str) -> Response:
    layout_path = request.app.state.layout_path
    context: LayoutContext = request.app.state.layout_context
    try:
        html = render_layout(layout_path, context)
    except LayoutError as exc:
        # Keep the cause in the server log only.
        logger.warning("Failed to render %s: %s", layout_path, exc.__cause__ or exc)
        return PlainTextResponse(str(exc), status_code=500)

    return HTMLResponse(html, headers={"Cache-Control": "no-cache"})
