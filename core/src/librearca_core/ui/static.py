from __future__ import annotations

import logging
import os

from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

logger = logging.getLogger(__name__)

IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"


class BuildAssetFiles(StaticFiles):
    """Build output is content-hashed, so clients may cache it forever."""

    def file_response(
        self,
        full_path: str | os.PathLike[str],
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        response.headers["Cache-Control"] = IMMUTABLE_CACHE_CONTROL
        return response


class SkinAssetFiles(StaticFiles):
    """Static files from an administrator-managed skin directory.

    The directory may not exist yet when it names a non-default skin. That is
    reported as a 500 per request, and checked again on the next request.
    """

    async def check_config(self) -> None:
        try:
            await super().check_config()
        except RuntimeError as exc:
            logger.warning("Skin assets unavailable: %s", exc)
            raise HTTPException(status_code=500, detail="Skin unavailable") from exc


class SPAFiles(StaticFiles):
    """Serve files from the bundle root, falling back to index.html.

    Unknown paths are left to the client-side router.
    """

    def __init__(self, *, directory: str | os.PathLike[str], index: str = "index.html") -> None:
        super().__init__(directory=directory)
        self._index = index

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
        return await super().get_response(self._index, scope)
