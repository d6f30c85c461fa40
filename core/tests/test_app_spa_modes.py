from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from librearca_core.app import ServeMode, StartupError, resolve_serve_mode

from conftest import INDEX_HTML, MAIN_JS


def test_spa_mode_serves_files_and_falls_back_to_index(make_app) -> None:
    with TestClient(make_app(ServeMode.SPA)) as client:
        asset = client.get("/assets/app.abc123.js")
        root = client.get("/")
        deep = client.get("/wiki/Some/Page")
        unknown_asset = client.get("/assets/missing.js")
        config = client.get("/config.js")

    assert asset.status_code == 200
    assert asset.content == MAIN_JS
    for r in (root, deep, unknown_asset, config):
        assert r.status_code == 200
        assert r.text == INDEX_HTML
        assert r.headers["content-type"].startswith("text/html")


def test_spa_config_mode_adds_runtime_config(make_app, write_config) -> None:
    write_config("wiki_name: Arca\nbbs_name: Board\n")

    with TestClient(make_app(ServeMode.SPA_CONFIG)) as client:
        config = client.get("/config.js")
        deep = client.get("/bbs/threads")
        skin_asset = client.get("/skin-assets/style.css")

    assert config.headers["content-type"].startswith("application/javascript")
    assert '"bbs_name":"Board"' in config.text
    assert deep.text == INDEX_HTML
    # No skin system in SPA modes.
    assert skin_asset.text == INDEX_HTML


def test_spa_mode_requires_index(make_app, dist_dir: Path) -> None:
    (dist_dir / "index.html").unlink()

    with pytest.raises(StartupError):
        make_app(ServeMode.SPA)


def test_spa_mode_skips_manifest(make_app, dist_dir: Path) -> None:
    (dist_dir / ".vite" / "manifest.json").unlink()

    with TestClient(make_app(ServeMode.SPA_CONFIG)) as client:
        assert client.get("/").status_code == 200


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", ServeMode.SKIN),
        ("skin", ServeMode.SKIN),
        ("SPA", ServeMode.SPA),
        ("spa-config", ServeMode.SPA_CONFIG),
    ],
)
def test_resolve_serve_mode(raw: str, expected: ServeMode) -> None:
    assert resolve_serve_mode({"LIBREARCA_SERVE_MODE": raw}) is expected


def test_resolve_serve_mode_rejects_unknown() -> None:
    with pytest.raises(StartupError):
        resolve_serve_mode({"LIBREARCA_SERVE_MODE": "ssr"})
