from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from librearca_core.app import ServeMode, create_app
from librearca_core.home import LibreArcaPaths

MAIN_JS = b"console.log('main');\n"
MAIN_CSS = b"body { color: black; }\n"
INDEX_HTML = "<!doctype html><title>bundle index</title><div id=app></div>\n"


def write_manifest(dist_dir: Path, manifest: dict) -> None:
    vite_dir = dist_dir / ".vite"
    vite_dir.mkdir(parents=True, exist_ok=True)
    (vite_dir / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")


@pytest.fixture
def dist_dir(tmp_path: Path) -> Path:
    dist = tmp_path / "dist"
    assets = dist / "assets"
    assets.mkdir(parents=True)
    (assets / "app.abc123.js").write_bytes(MAIN_JS)
    (assets / "app.abc123.css").write_bytes(MAIN_CSS)
    (dist / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    write_manifest(
        dist,
        {
            "src/main.ts": {
                "file": "assets/app.abc123.js",
                "src": "src/main.ts",
                "isEntry": True,
                "css": ["assets/app.abc123.css"],
            }
        },
    )
    return dist


@pytest.fixture
def site_paths(tmp_path: Path, dist_dir: Path) -> LibreArcaPaths:
    return LibreArcaPaths(home=tmp_path / "site", dist_dir=dist_dir)


@pytest.fixture
def write_config(site_paths: LibreArcaPaths) -> Callable[[str], None]:
    def _write(text: str) -> None:
        site_paths.home.mkdir(parents=True, exist_ok=True)
        site_paths.config_path.write_text(text, encoding="utf-8")

    return _write


@pytest.fixture
def make_app(site_paths: LibreArcaPaths):
    def _make(mode: ServeMode = ServeMode.SKIN):
        return create_app(site_paths, mode)

    return _make
