"""Shared fixtures and fakes for the adapter tests."""
import asyncio
from types import SimpleNamespace

import pytest

from core.config import Settings
from core.models import RAGResponse


class FakeCompletions:
    """Stands in for ``client.chat.completions`` on an AsyncOpenAI client."""

    def __init__(self, answer=None, parsed=None, error=None):
        self.answer = answer
        self.parsed = parsed
        self.error = error
        self.create_calls = []
        self.parse_calls = []

    async def create(self, **kwargs):
        self.create_calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(role="assistant", content=self.answer))]
        )

    async def parse(self, **kwargs):
        self.parse_calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(role="assistant", parsed=self.parsed))]
        )


class FakeClient:
    """Minimal async-context-manager client exposing ``chat.completions``."""

    def __init__(self, completions: FakeCompletions):
        self.chat = SimpleNamespace(completions=completions)
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True


class FakeClientFactory:
    """Records every client it builds."""

    def __init__(self, completions: FakeCompletions):
        self.completions = completions
        self.clients = []

    @property
    def calls(self):
        return len(self.clients)

    def __call__(self, settings):
        client = FakeClient(self.completions)
        self.clients.append(client)
        return client


class RecordingAnalytics:
    """Async analytics logger that records entries, optionally slow or failing."""

    def __init__(self, error=None, delay=0.0):
        self.error = error
        self.delay = delay
        self.entries = []

    async def __call__(self, settings, entry):
        self.entries.append(entry)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error


@pytest.fixture
def settings():
    return Settings(api_key="test-key", api_base_url="https://api.test/v1")


@pytest.fixture
def no_key_settings():
    return Settings(api_key=None)


@pytest.fixture
def rate_limits_response():
    return RAGResponse.model_validate(
        {
            "content": [
                {
                    "type": "document",
                    "source": {"url": "https://docs.example.com/limits"},
                    "title": "Rate Limits",
                }
            ]
        }
    )
