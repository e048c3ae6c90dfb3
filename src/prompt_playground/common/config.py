"""YAML configuration for the console driver."""
from __future__ import annotations
from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from prompt_playground.common.errors import ConfigError
from prompt_playground.common.schema import ModelConfig

def load_cfg(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
    return data


def _optional(cfg: dict[str, Any], key: str, cast: type, default: Any) -> Any:
    if key not in cfg:
        return default
    value = cfg[key]
    if value is None:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {key!r}: {value!r}") from e


def _required_str(cfg: dict[str, Any], key: str, default: str) -> str:
    value = cfg.get(key, default)
    if value is None:
        raise ConfigError(f"'{key}' cannot be null")
    return str(value)


def _flag(cfg: dict[str, Any], key: str, default: bool) -> bool:
    value = cfg.get(key, default)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ConfigError(f"Invalid value for {key!r}: {value!r} (expected true or false)")


def config_from_mapping(cfg: dict[str, Any], base: ModelConfig | None = None) -> ModelConfig:
    """
    Build a ModelConfig from a mapping, falling back to `base` for absent keys.

    Args:
        cfg: Parsed config values (model, endpoint, temperature, max_tokens,
            timeout, require_api_key).
        base: Defaults for keys missing from `cfg`.
    """
    base = base or ModelConfig()
    timeout = _optional(cfg, "timeout", float, base.timeout)
    if timeout is None:
        raise ConfigError("'timeout' cannot be null")
    return replace(
        base,
        model=_required_str(cfg, "model", base.model),
        endpoint=_required_str(cfg, "endpoint", base.endpoint),
        temperature=_optional(cfg, "temperature", float, base.temperature),
        max_tokens=_optional(cfg, "max_tokens", int, base.max_tokens),
        timeout=timeout,
        require_api_key=_flag(cfg, "require_api_key", base.require_api_key),
    )


def load_config(path: str | Path) -> ModelConfig:
    """Read a YAML config file into a ModelConfig."""
    return config_from_mapping(load_cfg(str(path)))
