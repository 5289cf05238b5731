"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hiec.core.config.settings import get_settings


def test_defaults(monkeypatch):
    for name in ("HIEC_HOST", "HIEC_PORT", "HIEC_ALLOW_INSECURE_BIND"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.hiec_host == "127.0.0.1"
    assert settings.hiec_port == 8003
    assert settings.hiec_allow_insecure_bind is False
    assert settings.default_period == "month"
    assert settings.environment_history_days == 30
    assert settings.profile_post_menopausal is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HIEC_PORT", "9100")
    monkeypatch.setenv("DEFAULT_PERIOD", "quarter")
    monkeypatch.setenv("PROFILE_POST_MENOPAUSAL", "true")
    settings = get_settings()
    assert settings.hiec_port == 9100
    assert settings.default_period == "quarter"
    assert settings.profile_post_menopausal is True


def test_unknown_period_is_rejected(monkeypatch):
    monkeypatch.setenv("DEFAULT_PERIOD", "year")
    with pytest.raises(ValidationError):
        get_settings()
