from __future__ import annotations

import logging
from pathlib import Path

from librearca_core.config import DEFAULT_SKIN
from librearca_core.home import PACKAGE_DIR, LibreArcaPaths
from librearca_core.skins import LAYOUT_FILENAME, STYLE_FILENAME

logger = logging.getLogger(__name__)

DEFAULTS_DIR = PACKAGE_DIR / "defaults"
DEFAULT_CONFIG = DEFAULTS_DIR / "config.yml"
DEFAULT_SKIN_DIR = DEFAULTS_DIR / "skins" / DEFAULT_SKIN


def _install_if_missing(source: Path, target: Path) -> bool:
    """Copy a bundled default into place unless the target already exists.

    Only a missing target triggers a copy; other stat failures propagate.
    """

    try:
        target.stat()
    except FileNotFoundError:
        pass
    else:
        return False

    target.write_bytes(source.read_bytes())
    logger.info("Installed default %s", target)
    return True


def ensure_defaults(paths: LibreArcaPaths) -> None:
    """Make sure config.yml and the default skin exist under the deployment root.

    Safe to run on every startup; existing files are never overwritten.
    """

    paths.home.mkdir(parents=True, exist_ok=True)
    _install_if_missing(DEFAULT_CONFIG, paths.config_path)

    paths.skins_dir.mkdir(parents=True, exist_ok=True)
    skin_dir = paths.skins_dir / DEFAULT_SKIN
    skin_dir.mkdir(parents=True, exist_ok=True)

    for filename in (LAYOUT_FILENAME, STYLE_FILENAME):
        _install_if_missing(DEFAULT_SKIN_DIR / filename, skin_dir / filename)
