from librearca_core.app import ServeMode, StartupError, create_app
from librearca_core.config import ConfigStore, WikiConfig, load_config
from librearca_core.defaults import ensure_defaults
from librearca_core.home import LibreArcaPaths, resolve_librearca_paths
from librearca_core.manifest import EntryPaths, load_manifest, resolve_manifest
from librearca_core.skins import LayoutContext, SkinLocation, render_layout, resolve_skin

__version__ = "0.1.0"

__all__ = [
    "ConfigStore",
    "EntryPaths",
    "LayoutContext",
    "LibreArcaPaths",
    "ServeMode",
    "SkinLocation",
    "StartupError",
    "WikiConfig",
    "__version__",
    "create_app",
    "ensure_defaults",
    "load_config",
    "load_manifest",
    "render_layout",
    "resolve_librearca_paths",
    "resolve_manifest",
    "resolve_skin",
]
