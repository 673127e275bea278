"""Filesystem helpers."""

from __future__ import annotations

import json
from pathlib import Path

from geocode_batch.common.errors import ConfigError


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_yaml(path: Path):
    import yaml

    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_json(path: Path, payload) -> None:
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2, sort_keys=True)
        f.write("\n")


def read_api_key(path: Path) -> str:
    """Return the key stored in *path*, stripped of surrounding whitespace."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read API key file {path}: {exc}") from exc
    api_key = raw.strip()
    if not api_key:
        raise ConfigError(f"API key file {path} is empty")
    return api_key
