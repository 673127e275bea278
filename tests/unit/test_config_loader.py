from pathlib import Path

import pytest

from geocode_batch.common.config_loader import load_settings
from geocode_batch.common.constants import SEARCH_ENDPOINT
from geocode_batch.common.errors import ConfigError
from geocode_batch.common.fs import read_api_key


def test_load_settings_defaults():
    settings = load_settings()
    assert settings.endpoint == SEARCH_ENDPOINT
    assert settings.delay_seconds == 1.2
    assert settings.retry.max_attempts == 1
    assert settings.timeout.connect == 20.0


def test_load_settings_applies_overlay_values(tmp_path: Path):
    path = tmp_path / "settings.yml"
    path.write_text(
        """pacing:
  delay_seconds: 2
http:
  retry:
    max_attempts: 3
""",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.delay_seconds == 2.0
    assert settings.retry.max_attempts == 3
    assert settings.retry.max_wait == 30.0
    assert settings.timeout.read == 60.0


def test_load_settings_empty_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "settings.yml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path).delay_seconds == 1.2


@pytest.mark.parametrize(
    "body",
    [
        "pacing:\n  delay_seconds: -1\n",
        "pacing:\n  delay_seconds: soon\n",
        "pacing:\n  jitter: 1\n",
        "http:\n  retry:\n    max_attempts: 0\n",
        "http:\n  timeout:\n    read: 0\n",
        "provider:\n  endpoint: ''\n",
        "cache: true\n",
        "- not\n- a mapping\n",
    ],
)
def test_load_settings_rejects_invalid_values(tmp_path: Path, body: str):
    path = tmp_path / "settings.yml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_settings(path)


def test_load_settings_missing_file_is_config_error(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_settings(tmp_path / "missing.yml")


def test_read_api_key_strips_whitespace(tmp_path: Path):
    path = tmp_path / "key.txt"
    path.write_text("  abc123\n", encoding="utf-8")
    assert read_api_key(path) == "abc123"


def test_read_api_key_missing_or_empty(tmp_path: Path):
    with pytest.raises(ConfigError):
        read_api_key(tmp_path / "missing.txt")
    empty = tmp_path / "empty.txt"
    empty.write_text(" \n", encoding="utf-8")
    with pytest.raises(ConfigError, match="empty"):
        read_api_key(empty)
