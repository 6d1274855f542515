import pytest
from pydantic import ValidationError

from tripboard.config import Settings, generate_authorization, get_settings


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("TRIPBOARD_ENDPOINT", "https://trips.example.com/big-trip/")
    monkeypatch.setenv("TRIPBOARD_AUTHORIZATION", "Basic abc123")
    monkeypatch.setenv("TRIPBOARD_TIMEOUT_S", "5")
    monkeypatch.setenv("TRIPBOARD_LOG_LEVEL", "debug")
    get_settings.cache_clear()

    cfg = get_settings()
    assert isinstance(cfg, Settings)
    assert cfg.endpoint == "https://trips.example.com/big-trip"
    assert cfg.authorization == "Basic abc123"
    assert cfg.timeout_s == 5
    assert cfg.log_level == "DEBUG"
    get_settings.cache_clear()


def test_settings_reject_blank_authorization(monkeypatch):
    monkeypatch.setenv("TRIPBOARD_ENDPOINT", "https://trips.example.com")
    monkeypatch.setenv("TRIPBOARD_AUTHORIZATION", "   ")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_reject_non_positive_timeout(monkeypatch):
    monkeypatch.setenv("TRIPBOARD_ENDPOINT", "https://trips.example.com")
    monkeypatch.setenv("TRIPBOARD_AUTHORIZATION", "Basic abc")
    monkeypatch.setenv("TRIPBOARD_TIMEOUT_S", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_generate_authorization():
    token = generate_authorization()
    assert token.startswith("Basic ")
    secret = token[len("Basic "):]
    assert len(secret) == 12
    assert secret.isalnum() and secret == secret.lower()
