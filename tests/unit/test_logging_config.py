"""Tests for logging and settings."""

import json
import logging

from permatrix.config import Settings
from permatrix.logging_config import JSONFormatter


def test_json_formatter_includes_context_extras() -> None:
    record = logging.LogRecord(
        "permatrix.cascade", logging.WARNING, __file__, 1, "Cascade of role %s failed", (5,), None
    )
    record.role_id = 5
    record.user_id = 12

    entry = json.loads(JSONFormatter().format(record))

    assert entry["event"] == "Cascade of role 5 failed"
    assert entry["level"] == "WARNING"
    assert entry["role_id"] == 5
    assert entry["user_id"] == 12
    assert "session_id" not in entry


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("ADMIN_API_URL", raising=False)
    monkeypatch.delenv("CASCADE_CONCURRENCY", raising=False)
    settings = Settings(_env_file=None)
    assert settings.admin_api_url == "http://localhost:3000/api"
    assert settings.cascade_concurrency == 8


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("CASCADE_CONCURRENCY", "3")
    monkeypatch.setenv("LOG_FORMAT", "json")
    settings = Settings(_env_file=None)
    assert settings.cascade_concurrency == 3
    assert settings.log_format == "json"
