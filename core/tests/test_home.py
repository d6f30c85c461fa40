from __future__ import annotations

from pathlib import Path

from librearca_core.home import BUNDLED_DIST_DIR, resolve_librearca_paths


def test_resolve_paths_from_env(tmp_path: Path) -> None:
    paths = resolve_librearca_paths(
        {"LIBREARCA_HOME": str(tmp_path / "site"), "LIBREARCA_DIST_DIR": str(tmp_path / "dist")}
    )

    assert paths.home == (tmp_path / "site").resolve()
    assert paths.config_path == (tmp_path / "site" / "config.yml").resolve()
    assert paths.skins_dir == (tmp_path / "site" / "skins").resolve()
    assert paths.manifest_path == (tmp_path / "dist" / ".vite" / "manifest.json").resolve()
    assert paths.assets_dir == (tmp_path / "dist" / "assets").resolve()


def test_resolve_paths_defaults_to_cwd_and_bundled_dist(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    paths = resolve_librearca_paths({})

    assert paths.home == tmp_path.resolve()
    assert paths.dist_dir == BUNDLED_DIST_DIR.resolve()


def test_bundled_dist_ships_a_manifest() -> None:
    assert (BUNDLED_DIST_DIR / ".vite" / "manifest.json").is_file()
    assert (BUNDLED_DIST_DIR / "index.html").is_file()
