"""
Tests for settings loading and the user .env writer.
"""

import pytest
from pydantic import ValidationError

from core import config
from core.config import PROVIDER_KEYS, AppSettings


def test_provider_keys_read_without_prefix(monkeypatch):
    monkeypatch.setenv("API_KEY", "fb-key")
    monkeypatch.setenv("ABSTRACT_API_KEY", "abs-key")
    monkeypatch.setenv("PROJECT_ID", "demo-project")

    settings = AppSettings(_env_file=None)

    assert settings.api_key == "fb-key"
    assert settings.abstract_api_key == "abs-key"
    assert settings.project_id == "demo-project"


def test_ambient_keys_use_prefix(monkeypatch):
    monkeypatch.setenv("AUTHFLOW_HTTP_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("AUTHFLOW_LOG_LEVEL", "DEBUG")

    settings = AppSettings(_env_file=None)

    assert settings.http_timeout_seconds == 3.5
    assert settings.log_level == "DEBUG"


def test_missing_keys(monkeypatch):
    for key in PROVIDER_KEYS:
        monkeypatch.delenv(key, raising=False)

    settings = AppSettings(_env_file=None, api_key="x")

    assert "API_KEY" not in settings.missing_keys()
    assert "ABSTRACT_API_KEY" in settings.missing_keys()


def test_write_user_env_vars_merges(tmp_path, monkeypatch):
    env_file = tmp_path / "authflow" / ".env"
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_file)

    config.write_user_env_vars({"API_KEY": "one", "APP_ID": "app"})
    config.write_user_env_vars({"API_KEY": "two", "PROJECT_ID": ""})

    text = env_file.read_text(encoding="utf-8")
    assert "API_KEY=two" in text
    assert "APP_ID=app" in text
    assert "PROJECT_ID" not in text


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("AUTHFLOW_LOG_LEVEL", " info ")

    assert AppSettings(_env_file=None).log_level == "INFO"


def test_unknown_log_level_rejected(monkeypatch):
    monkeypatch.setenv("AUTHFLOW_LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError, match="log_level must be one of"):
        AppSettings(_env_file=None)
