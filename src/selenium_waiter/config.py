"""Configuration: timeout presets, polling interval and wait logging."""

from __future__ import annotations

import json
import pathlib
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from selenium_waiter.constants import (
    CONFIG_FILE,
    DEFAULT_POLL_MS,
    LONG_TIMEOUT,
    MEDIUM_TIMEOUT,
    TIMEOUT,
    TINY_TIMEOUT,
)
from selenium_waiter.core.errors import ConfigError

PRESETS = ("tiny", "default", "medium", "long")


class TimeoutConfig(BaseModel):
    tiny_s: int = TINY_TIMEOUT
    default_s: int = TIMEOUT
    medium_s: int = MEDIUM_TIMEOUT
    long_s: int = LONG_TIMEOUT
    poll_ms: int = DEFAULT_POLL_MS

    @field_validator("tiny_s", "default_s", "medium_s", "long_s")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("timeouts must be >= 0 seconds")
        return v

    @field_validator("poll_ms")
    @classmethod
    def positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("poll_ms must be > 0")
        return v

    def preset(self, name: str) -> int:
        """Seconds for a named preset (tiny/default/medium/long)."""
        if name not in PRESETS:
            raise ValueError(
                f"Unknown timeout preset {name!r} (expected one of {', '.join(PRESETS)})"
            )
        return getattr(self, f"{name}_s")


class LogConfig(BaseModel):
    path: Optional[str] = None
    echo: bool = False


class WaiterConfig(BaseModel):
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    log: LogConfig = Field(default_factory=LogConfig)


def _parse(path: pathlib.Path, text: str) -> Any:
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def load_config(path: str | pathlib.Path | None = None) -> WaiterConfig:
    """Load a config file (.json, .yaml or .yml).

    With no *path*, the project's waiter.json is used when present and the
    built-in defaults otherwise.
    """
    if path is None:
        default = pathlib.Path(CONFIG_FILE)
        if not default.exists():
            return WaiterConfig()
        path = default
    p = pathlib.Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: '{p}'")
    try:
        raw = _parse(p, p.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Config file '{p}' could not be parsed: {exc}") from exc
    if raw is None:
        return WaiterConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file '{p}' must contain a mapping")
    try:
        return WaiterConfig(**raw)
    except ValidationError as exc:
        raise ConfigError(f"Config file '{p}' is invalid: {exc}") from exc


def save_config(config: WaiterConfig, path: str | pathlib.Path | None = None) -> pathlib.Path:
    p = pathlib.Path(path or CONFIG_FILE)
    p.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(exclude_none=True)
    if p.suffix.lower() in (".yaml", ".yml"):
        p.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    else:
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return p


def ensure_default(path: str | pathlib.Path | None = None) -> bool:
    """Write a default config file unless one exists. Returns True if written."""
    p = pathlib.Path(path or CONFIG_FILE)
    if p.exists():
        return False
    save_config(WaiterConfig(), p)
    return True
