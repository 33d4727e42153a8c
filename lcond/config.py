"""
Engine configuration.

Loaded from a YAML mapping (ruamel.yaml, safe loader):

    error_mode: strict        # lax | warn | strict
    strict_variables: false
    max_chain_length: 50
    max_nesting_depth: 100

The LCOND_ERROR_MODE environment variable overrides error_mode.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import LCUserError

_LOG = logging.getLogger("lcond.config")

_yaml = YAML(typ="safe")

ENV_ERROR_MODE = "LCOND_ERROR_MODE"


class ConfigError(LCUserError):
    """Invalid or unreadable configuration."""
    pass


class ParseMode(Enum):
    """Grammar used for branch headers."""
    LAX = "lax"
    WARN = "warn"      # strict, falling back to lax with a warning
    STRICT = "strict"

    @classmethod
    def coerce(cls, value: Union[str, ParseMode]) -> ParseMode:
        if isinstance(value, ParseMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            raise ConfigError(f"Unknown error mode '{value}' (expected one of: {allowed})") from None


@dataclass(frozen=True)
class EngineConfig:
    error_mode: ParseMode = ParseMode.LAX
    strict_variables: bool = False
    max_chain_length: int = 50
    max_nesting_depth: int = 100

    def __post_init__(self):
        if self.max_chain_length < 1:
            raise ConfigError("max_chain_length must be positive")
        if self.max_nesting_depth < 1:
            raise ConfigError("max_nesting_depth must be positive")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EngineConfig:
        """
        Builds a config from a parsed mapping, validating keys and types.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(map(str, unknown))}")

        kwargs: Dict[str, Any] = {}
        if "error_mode" in data:
            kwargs["error_mode"] = ParseMode.coerce(data["error_mode"])
        if "strict_variables" in data:
            value = data["strict_variables"]
            if not isinstance(value, bool):
                raise ConfigError(f"strict_variables: expected bool, got {value!r}")
            kwargs["strict_variables"] = value
        for name in ("max_chain_length", "max_nesting_depth"):
            if name in data:
                value = data[name]
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError(f"{name}: expected int, got {value!r}")
                kwargs[name] = value

        return cls(**kwargs)

    def with_overrides(self, **changes: Any) -> EngineConfig:
        """Copy with the given non-None fields replaced."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if "error_mode" in changes:
            changes["error_mode"] = ParseMode.coerce(changes["error_mode"])
        return replace(self, **changes)


def _apply_env(cfg: EngineConfig) -> EngineConfig:
    mode = os.environ.get(ENV_ERROR_MODE)
    if mode:
        _LOG.debug("error_mode overridden from %s=%s", ENV_ERROR_MODE, mode)
        return cfg.with_overrides(error_mode=mode)
    return cfg


def load_config(path: Optional[Path] = None) -> EngineConfig:
    """
    Loads the engine config.

    Args:
        path: YAML file; defaults only (plus environment) when None

    Raises:
        ConfigError: If the file is missing, not a mapping, or invalid
    """
    if path is None:
        return _apply_env(EngineConfig())

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    cfg = EngineConfig.from_dict(raw)
    _LOG.debug("Loaded config from %s: %s", path, cfg)
    return _apply_env(cfg)


__all__ = ["ConfigError", "ParseMode", "EngineConfig", "load_config", "ENV_ERROR_MODE"]
