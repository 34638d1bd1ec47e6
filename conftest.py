"""Shared fixtures for the Kotoba Bridge test suite."""
import pytest
from fastapi.testclient import TestClient

from config import Settings
from errors import TransportError


class FakeProvider:
    """Scripted provider: replies are returned (or raised) in order."""

    def __init__(self, provider_id, replies=None, available=True):
        self.id = provider_id
        self.available = available
        self._replies = list(replies or [])
        self.calls = []

    async def call(self, prompt, **options):
        self.calls.append((prompt, options))
        reply = self._replies.pop(0) if self._replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture()
def make_provider():
    return FakeProvider


@pytest.fixture()
def transport_error():
    def _error(provider_id="gemini"):
        return TransportError(provider_id, "connection refused")
    return _error


@pytest.fixture()
def settings():
    return Settings(gemini_api_key="test-key", libretranslate_url="http://lt.test/translate")


@pytest.fixture()
def offline_settings():
    return Settings(gemini_api_key="", libretranslate_url="")


@pytest.fixture()
def make_client():
    """Build a TestClient around create_app with injected settings/providers."""
    from backend import create_app

    def _client(settings, providers=None):
        return TestClient(create_app(settings, providers))
    return _client
