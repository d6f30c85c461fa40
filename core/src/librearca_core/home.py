from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
BUNDLED_DIST_DIR = PACKAGE_DIR / "ui" / "dist"


@dataclass(frozen=True)
class LibreArcaPaths:
    home: Path
    dist_dir: Path

    @property
    def config_path(self) -> Path:
        return self.home / "config.yml"

    @property
    def skins_dir(self) -> Path:
        return self.home / "skins"

    @property
    def logs_dir(self) -> Path:
        return self.home / "logs"

    @property
    def manifest_path(self) -> Path:
        return self.dist_dir / ".vite" / "manifest.json"

    @property
    def assets_dir(self) -> Path:
        return self.dist_dir / "assets"

    @property
    def index_path(self) -> Path:
        return self.dist_dir / "index.html"


def _resolve_dir(raw: str | None, default: Path) -> Path:
    value = (raw or "").strip()
    if not value:
        return default.resolve()
    return Path(value).expanduser().resolve()


def resolve_librearca_paths(environ: dict[str, str] | None = None) -> LibreArcaPaths:
    """Resolve the deployment root and the build bundle directory.

    - LIBREARCA_HOME: directory holding config.yml and skins/ (default: CWD)
    - LIBREARCA_DIST_DIR: built front end (default: the bundle shipped in the package)
    """

    env = os.environ if environ is None else environ
    return LibreArcaPaths(
        home=_resolve_dir(env.get("LIBREARCA_HOME"), Path.cwd()),
        dist_dir=_resolve_dir(env.get("LIBREARCA_DIST_DIR"), BUNDLED_DIST_DIR),
    )
