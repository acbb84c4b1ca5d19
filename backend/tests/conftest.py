import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

# Ensure backend/ is importable as the top-level "yieldcast" package even when pytest runs from repo root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

# Configure the app for tests *before* importing any yieldcast modules.
# Real vendor keys must never reach a test run.
os.environ["ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CSV_NUMERIC_POLICY"] = "passthrough"
for _key in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "DEEPSEEK_API_KEY", "LLAMA_API_KEY"):
    os.environ.pop(_key, None)

from yieldcast.config import get_settings  # noqa: E402
from yieldcast.main import app  # noqa: E402
from yieldcast.routers.predict import get_provider_factory  # noqa: E402
from yieldcast.schemas.predict import Provider  # noqa: E402
from yieldcast.services.parsing import ProviderReply  # noqa: E402
from yieldcast.services.providers.base import DEFAULT_YIELD_RANGE  # noqa: E402

get_settings.cache_clear()


class FakeProvider:
    """Stands in for a vendor: returns a canned reply or raises a canned error."""

    def __init__(self, name: str, reply: Optional[ProviderReply] = None, error: Optional[Exception] = None):
        self.name = name
        self.model = f"fake-{name}"
        self.yield_range = DEFAULT_YIELD_RANGE
        self.reply = reply or ProviderReply(value=2.8, comment="Rainfall is near the optimal band.")
        self.error = error
        self.prompts: List = []

    def predict(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeProviderRegistry:
    """Provider factory double; records which vendors were asked for."""

    def __init__(self):
        self.providers: Dict[str, FakeProvider] = {p.value: FakeProvider(p.value) for p in Provider}
        self.requested: List[str] = []

    def __call__(self, provider: Provider) -> FakeProvider:
        self.requested.append(provider.value)
        return self.providers[provider.value]

    def __getitem__(self, name: str) -> FakeProvider:
        return self.providers[name]

    @property
    def total_calls(self) -> int:
        return sum(len(p.prompts) for p in self.providers.values())


@pytest.fixture
def fake_providers():
    registry = FakeProviderRegistry()
    app.dependency_overrides[get_provider_factory] = lambda: registry
    try:
        yield registry
    finally:
        app.dependency_overrides.pop(get_provider_factory, None)


@pytest.fixture
def client(fake_providers):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def settings_env(monkeypatch):
    """Set env vars for Settings and get a fresh, uncached instance."""

    def _apply(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, str(value))
        get_settings.cache_clear()
        return get_settings()

    yield _apply
    get_settings.cache_clear()
