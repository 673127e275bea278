"""Settings loading and validation."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from geocode_batch.common.constants import DEFAULT_SETTINGS
from geocode_batch.common.errors import ConfigError
from geocode_batch.common.fs import read_yaml
from geocode_batch.common.http import RetryConfig, TimeoutConfig
from geocode_batch.common.schema import validate_settings


@dataclass(frozen=True)
class Settings:
    endpoint: str
    user_agent: str
    timeout: TimeoutConfig
    retry: RetryConfig
    delay_seconds: float


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_overlay(path: Path) -> dict:
    try:
        overlay = read_yaml(path)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot load settings file {path}: {exc}") from exc
    if overlay is None:
        return {}
    if not isinstance(overlay, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return overlay


def load_settings(config_path: Path | None = None) -> Settings:
    cfg = copy.deepcopy(DEFAULT_SETTINGS)
    if config_path is not None:
        cfg = _deep_merge(cfg, _load_overlay(config_path))
    cfg = validate_settings(cfg)

    timeout = cfg["http"]["timeout"]
    retry = cfg["http"]["retry"]
    return Settings(
        endpoint=cfg["provider"]["endpoint"],
        user_agent=cfg["provider"]["user_agent"],
        timeout=TimeoutConfig(connect=float(timeout["connect"]), read=float(timeout["read"])),
        retry=RetryConfig(
            max_attempts=int(retry["max_attempts"]),
            multiplier=float(retry["multiplier"]),
            max_wait=float(retry["max_wait"]),
        ),
        delay_seconds=float(cfg["pacing"]["delay_seconds"]),
    )
