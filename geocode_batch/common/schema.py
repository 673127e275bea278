"""Minimal strict schema for YAML settings validation."""

from __future__ import annotations

from geocode_batch.common.errors import ConfigError


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str) -> None:
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_exact_keys(obj: dict, keys: set[str], ctx: str) -> None:
    _assert_required_keys(obj, keys, ctx)
    _assert_no_unknown_keys(obj, keys, ctx)


def _assert_number(value: object, ctx: str, *, minimum: float, inclusive: bool = True) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{ctx} must be a number")
    if value < minimum or (not inclusive and value == minimum):
        bound = ">=" if inclusive else ">"
        raise ConfigError(f"{ctx} must be {bound} {minimum}")


def validate_settings(cfg: dict) -> dict:
    _assert_exact_keys(cfg, {"provider", "http", "pacing"}, "settings")

    _assert_exact_keys(cfg["provider"], {"endpoint", "user_agent"}, "provider")
    for key in ("endpoint", "user_agent"):
        value = cfg["provider"][key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"provider.{key} must be a non-empty string")

    _assert_exact_keys(cfg["http"], {"timeout", "retry"}, "http")
    _assert_exact_keys(cfg["http"]["timeout"], {"connect", "read"}, "http.timeout")
    for key in ("connect", "read"):
        _assert_number(cfg["http"]["timeout"][key], f"http.timeout.{key}", minimum=0, inclusive=False)

    retry = cfg["http"]["retry"]
    _assert_exact_keys(retry, {"max_attempts", "multiplier", "max_wait"}, "http.retry")
    if isinstance(retry["max_attempts"], bool) or not isinstance(retry["max_attempts"], int):
        raise ConfigError("http.retry.max_attempts must be an integer")
    _assert_number(retry["max_attempts"], "http.retry.max_attempts", minimum=1)
    _assert_number(retry["multiplier"], "http.retry.multiplier", minimum=0)
    _assert_number(retry["max_wait"], "http.retry.max_wait", minimum=0)

    _assert_exact_keys(cfg["pacing"], {"delay_seconds"}, "pacing")
    _assert_number(cfg["pacing"]["delay_seconds"], "pacing.delay_seconds", minimum=0)

    return cfg
