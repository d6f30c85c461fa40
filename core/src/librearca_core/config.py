from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

DEFAULT_SKIN: Final[str] = "default"
CONFIG_GLOBAL: Final[str] = "window.__WIKI_CONFIG__"

# Characters that must not appear raw inside an inline <script> body.
_SCRIPT_ESCAPES: Final[dict[str, str]] = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class ConfigError(Exception):
    """Base class for configuration failures."""


class ConfigFileError(ConfigError):
    """The configuration file could not be read."""


class ConfigParseError(ConfigError):
    """The configuration file was read but is not a valid configuration."""


class WikiConfig(BaseModel):
    """Site configuration exposed to the front end as window.__WIKI_CONFIG__."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    wiki_name: str = Field(default="")
    bbs_name: str = Field(default="")
    skin: str = Field(default=DEFAULT_SKIN)

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        resolved = {key: value for key, value in data.items() if value is not None}
        if not resolved.get("bbs_name"):
            resolved["bbs_name"] = resolved.get("wiki_name", "")
        if not resolved.get("skin"):
            resolved["skin"] = DEFAULT_SKIN
        return resolved

    @field_validator("skin")
    @classmethod
    def _skin_is_single_segment(cls, value: str) -> str:
        if value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"skin must be a directory name under skins/, got {value!r}")
        return value


class _TextScalarLoader(yaml.SafeLoader):
    """Safe loader that keeps unquoted numbers, booleans and dates as their source text."""


_TEXT_SCALAR_TAGS: Final[frozenset[str]] = frozenset(
    {
        "tag:yaml.org,2002:bool",
        "tag:yaml.org,2002:int",
        "tag:yaml.org,2002:float",
        "tag:yaml.org,2002:timestamp",
    }
)

_TextScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_SCALAR_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_config(text: str) -> WikiConfig:
    try:
        raw = yaml.load(text, Loader=_TextScalarLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"Invalid YAML: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigParseError("Configuration must be a mapping at the top level")

    try:
        return WikiConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigParseError(str(exc)) from exc


def load_config(path: Path) -> WikiConfig:
    """Read and validate config.yml. Defaults are applied during validation."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigFileError(f"Cannot read {path}: {exc}") from exc

    try:
        return parse_config(text)
    except ConfigParseError as exc:
        raise ConfigParseError(f"{path}: {exc}") from exc


class ConfigStore:
    """Holds the single configuration value loaded at startup."""

    def __init__(self) -> None:
        self._config: WikiConfig | None = None

    @property
    def loaded(self) -> bool:
        return self._config is not None

    def load(self, path: Path) -> WikiConfig:
        config = load_config(path)
        self._config = config
        logger.info("Loaded configuration from %s (skin=%s)", path, config.skin)
        return config

    def get(self) -> WikiConfig:
        if self._config is None:
            raise ConfigError("Configuration has not been loaded")
        return self._config


def config_script(config: WikiConfig) -> str:
    """Render the runtime configuration as a JavaScript assignment.

    Returns an empty string if the value cannot be serialized.
    """

    try:
        payload = json.dumps(
            config.model_dump(mode="json"), ensure_ascii=False, separators=(",", ":")
        )
    except (TypeError, ValueError):
        logger.exception("Failed to serialize runtime configuration")
        return ""

    for char, escaped in _SCRIPT_ESCAPES.items():
        payload = payload.replace(char, escaped)
    return f"{CONFIG_GLOBAL} = {payload};"
