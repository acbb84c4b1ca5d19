from __future__ import annotations

import pytest
from pydantic import ValidationError

from yieldcast.config import Settings, get_settings


def test_defaults_match_vendor_endpoints(settings_env):
    s = settings_env()
    assert s.OPENAI_MODEL == "gpt-4o-mini"
    assert s.DEEPSEEK_BASE_URL == "https://api.deepseek.com"
    assert s.ANTHROPIC_MAX_TOKENS == 150
    assert s.LLM_TIMEOUT_SECONDS is None
    assert s.CSV_NUMERIC_POLICY == "passthrough"


def test_env_overrides_are_normalized(settings_env):
    s = settings_env(LOG_LEVEL="debug", API_BASE_URL="http://api:8000/", LLM_TIMEOUT_SECONDS="30")
    assert s.LOG_LEVEL == "DEBUG"
    assert s.API_BASE_URL == "http://api:8000"
    assert s.LLM_TIMEOUT_SECONDS == 30.0


def test_get_settings_is_cached(settings_env):
    first = settings_env()
    assert get_settings() is first


@pytest.mark.parametrize("env", [{"CSV_NUMERIC_POLICY": "drop"}, {"LLM_TIMEOUT_SECONDS": "0"}])
def test_invalid_values_are_rejected(monkeypatch, env):
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    with pytest.raises(ValidationError):
        Settings()
