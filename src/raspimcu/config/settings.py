from __future__ import annotations

import json
import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from raspimcu.models import DEFAULT_TOOL_TIMEOUT

from .paths import default_config_path, expand_path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "RASPIMCU_CONFIG"


class DiscoveryConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    # Empty means the platform defaults.
    search_roots: list[str] = Field(default_factory=list)
    extra_vendor_ids: list[str] = Field(default_factory=list)

    @field_validator("extra_vendor_ids")
    @classmethod
    def _upper_hex(cls, value: list[str]) -> list[str]:
        return [item.lower().removeprefix("0x").upper().zfill(4) for item in value]


class ToolConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    path: str | None = None
    timeout: float = Field(default=DEFAULT_TOOL_TIMEOUT, gt=0)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    picotool: ToolConfig = Field(default_factory=ToolConfig)
    mpremote: ToolConfig = Field(default_factory=ToolConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    """Return the config file location and whether it exists.

    ``RASPIMCU_CONFIG`` wins over the per-user config directory; a path given
    through the environment must exist unless ``allow_missing`` is set.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    path = expand_path(env_path) if env_path else default_config_path()
    exists = path.is_file()
    if env_path and not allow_missing and not exists:
        raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
    return path, exists


def _describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        section, *rest = [str(part) for part in error["loc"]] or ["config"]
        key = ".".join(rest)
        where = f"[{section}] {key}" if key else f"[{section}]"
        problems.append(f"{where}: {error['msg']}")
    return "; ".join(problems)


def load_settings(path: Path) -> Settings:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file {path}: {exc}") from exc

    try:
        settings = Settings.model_validate(data)
    except ValidationError as exc:
        raise ValueError(
            f"Invalid config file {path}: {_describe_validation_error(exc)}"
        ) from exc
    logger.debug("Loaded settings from %s", path)
    return settings


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path()
    return load_settings(path) if exists else Settings()


def _toml_list(values: list[str]) -> str:
    # JSON string escaping is valid TOML basic-string syntax
    return "[" + ", ".join(json.dumps(value) for value in values) + "]"


def _tool_lines(name: str, tool: ToolConfig) -> list[str]:
    lines = [f"[{name}]"]
    if tool.path is None:
        lines.append(f"# path = {json.dumps(name)}")
    else:
        lines.append(f"path = {json.dumps(tool.path)}")
    lines.append(f"timeout = {tool.timeout}")
    lines.append("")
    return lines


def render_settings_toml(settings: Settings) -> str:
    lines = [
        "# raspimcu configuration",
        "",
        "[discovery]",
        f"search_roots = {_toml_list(settings.discovery.search_roots)}",
        f"extra_vendor_ids = {_toml_list(settings.discovery.extra_vendor_ids)}",
        "",
        *_tool_lines("picotool", settings.picotool),
        *_tool_lines("mpremote", settings.mpremote),
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings), encoding="utf-8")
    get_settings.cache_clear()
    return path
