from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from enum import StrEnum

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from librearca_core.config import ConfigError, ConfigStore
from librearca_core.defaults import ensure_defaults
from librearca_core.home import LibreArcaPaths, resolve_librearca_paths
from librearca_core.manifest import ManifestError, load_manifest
from librearca_core.skins import SKIN_ASSETS_PREFIX, LayoutContext, resolve_skin
from librearca_core.ui.router import config_router, shell_router
from librearca_core.ui.static import BuildAssetFiles, SkinAssetFiles, SPAFiles

logger = logging.getLogger(__name__)


class ServeMode(StrEnum):
    SKIN = "skin"
    SPA = "spa"
    SPA_CONFIG = "spa-config"


class StartupError(RuntimeError):
    """The server cannot start; the message names the failed stage."""


def resolve_serve_mode(environ: dict[str, str] | None = None) -> ServeMode:
    env = os.environ if environ is None else environ
    raw = (env.get("LIBREARCA_SERVE_MODE") or "").strip().lower()
    if not raw:
        return ServeMode.SKIN
    try:
        return ServeMode(raw)
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in ServeMode)
        raise StartupError(f"LIBREARCA_SERVE_MODE must be one of {choices}, got {raw!r}") from exc


def _bootstrap_config(paths: LibreArcaPaths) -> ConfigStore:
    try:
        ensure_defaults(paths)
    except OSError as exc:
        raise StartupError(f"init defaults: {exc}") from exc

    store = ConfigStore()
    try:
        store.load(paths.config_path)
    except ConfigError as exc:
        raise StartupError(f"load config: {exc}") from exc
    return store


def _mount_skin_mode(app: FastAPI, paths: LibreArcaPaths, store: ConfigStore) -> None:
    try:
        entry = load_manifest(paths.manifest_path)
    except ManifestError as exc:
        raise StartupError(f"resolve entry paths: {exc}") from exc
    logger.info("Entry script %s (%d stylesheets)", entry.script_path, len(entry.style_paths))

    config = store.get()
    skin = resolve_skin(paths.skins_dir, config)
    if not skin.directory.is_dir():
        logger.warning(
            "Skin %r not found at %s; pages will fail until it is created",
            skin.name,
            skin.directory,
        )
    logger.info("Using skin %r from %s", skin.name, skin.directory)

    app.state.layout_path = skin.layout_path
    app.state.layout_context = LayoutContext(
        app_title=config.wiki_name,
        script_path=entry.script_path,
        style_paths=entry.style_paths,
    )

    app.include_router(config_router)
    app.mount(
        "/assets",
        BuildAssetFiles(directory=str(paths.assets_dir), check_dir=False),
        name="assets",
    )
    app.mount(
        SKIN_ASSETS_PREFIX,
        SkinAssetFiles(directory=str(skin.directory), check_dir=False),
        name="skin-assets",
    )
    app.include_router(shell_router)


def _mount_spa_mode(app: FastAPI, paths: LibreArcaPaths, mode: ServeMode) -> None:
    if not paths.index_path.is_file():
        raise StartupError(f"SPA index not found at {paths.index_path}")

    if mode is ServeMode.SPA_CONFIG:
        app.include_router(config_router)
    app.mount("/", SPAFiles(directory=str(paths.dist_dir)), name="spa")


def create_app(
    paths: LibreArcaPaths | None = None, mode: ServeMode | None = None
) -> FastAPI:
    """Build the application.

    Defaults are installed, config.yml is loaded and the build manifest is
    resolved before this returns; any failure raises StartupError so the server
    never starts half-configured.
    """

    paths = paths or resolve_librearca_paths()
    mode = mode or resolve_serve_mode()
    store = _bootstrap_config(paths)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        logger.info("LibreArca starting (mode=%s, home=%s)", mode.value, paths.home)
        yield
        logger.info("LibreArca stopped")

    app = FastAPI(
        title="LibreArca",
        version="0.1.0",
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.librearca_paths = paths
    app.state.serve_mode = mode
    app.state.config_store = store

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> PlainTextResponse:
        message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
        return PlainTextResponse(message, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
        # Avoid leaking internals to the client.
        logger.exception("Unhandled error serving %s", request.url.path)
        return PlainTextResponse("Internal server error", status_code=500)

    if mode is ServeMode.SKIN:
        _mount_skin_mode(app, paths, store)
    else:
        _mount_spa_mode(app, paths, mode)

    return app
