"""Skin lookup and layout rendering.

A skin is a directory under skins/ holding layout.html (a Jinja2 template),
style.css and any other static files it wants served under /skin-assets/.
The layout is read from disk on every render so edits apply without a restart.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import jinja2

from librearca_core.config import WikiConfig

LAYOUT_FILENAME: Final[str] = "layout.html"
STYLE_FILENAME: Final[str] = "style.css"
SKIN_ASSETS_PREFIX: Final[str] = "/skin-assets"

_environment = jinja2.Environment(autoescape=True)


class LayoutError(Exception):
    """The layout template is missing or failed to render."""


@dataclass(frozen=True)
class SkinLocation:
    name: str
    directory: Path
    layout_path: Path


@dataclass(frozen=True)
class LayoutContext:
    app_title: str
    script_path: str
    style_paths: tuple[str, ...]
    skin_style_path: str = f"{SKIN_ASSETS_PREFIX}/{STYLE_FILENAME}"

    def as_template_vars(self) -> dict[str, Any]:
        return {
            "app_title": self.app_title,
            "script_path": self.script_path,
            "style_paths": list(self.style_paths),
            "skin_style_path": self.skin_style_path,
        }


def resolve_skin(skins_dir: Path, config: WikiConfig) -> SkinLocation:
    directory = skins_dir / config.skin
    return SkinLocation(
        name=config.skin,
        directory=directory,
        layout_path=directory / LAYOUT_FILENAME,
    )


def render_layout(layout_path: Path, context: LayoutContext) -> str:
    try:
        source = layout_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LayoutError("layout missing") from exc

    try:
        template = _environment.from_string(source)
        return template.render(context.as_template_vars())
    except jinja2.TemplateError as exc:
        raise LayoutError("template error") from exc
