import json

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from main import app
from app.core.config import Settings, get_settings
from app.api.endpoints.waitlist import get_outbound_transport

SUPABASE_URL = "https://project.supabase.co"
SUPABASE_KEY = "anon-test-key"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every outbound request and answers with a canned response."""

    def __init__(self, status_code=201, body=None, text=None, exc=None):
        self.requests = []
        self.status_code = status_code
        self.body = body
        self.text = text
        self.exc = exc
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body if self.body is not None else [])

    @property
    def sent_rows(self):
        return [json.loads(r.content) for r in self.requests]


def make_settings(**overrides) -> Settings:
    values = {"SUPABASE_URL": SUPABASE_URL, "SUPABASE_ANON_KEY": SUPABASE_KEY}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def configured_settings():
    return make_settings()


@pytest.fixture
def outbound():
    return RecordingTransport()


@pytest.fixture
def override(configured_settings, outbound):
    """Point the app at test settings and the recording transport."""
    app.dependency_overrides[get_settings] = lambda: configured_settings
    app.dependency_overrides[get_outbound_transport] = lambda: outbound
    yield app.dependency_overrides
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(override):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def use_settings(override):
    """Swap configuration for one test: ``use_settings(SUPABASE_URL=None)``."""
    def _use(**values):
        override[get_settings] = lambda: make_settings(**values)
    return _use


@pytest.fixture
def use_outbound(override):
    """Swap the outbound transport for one test and return it."""
    def _use(**kwargs):
        transport = RecordingTransport(**kwargs)
        override[get_outbound_transport] = lambda: transport
        return transport
    return _use
