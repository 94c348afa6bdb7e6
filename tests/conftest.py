"""Shared fixtures: a Supabase client backed by ``httpx.MockTransport``."""

from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from slp_admin.config import SESSION_COOKIE_NAME, SESSION_VALUE
from slp_admin.dependencies import get_supabase
from slp_admin.main import app
from slp_admin.services.storage_service import reset_storage_state
from slp_admin.services.supabase_service import SupabaseClient

BASE_URL = "https://db.test"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeSupabase:
    """Records every request and answers with the configured handler."""

    def __init__(self, handler: Handler | None = None):
        self.requests: list[httpx.Request] = []
        self.handler = handler or (lambda request: httpx.Response(200, json=[]))
        self.client = SupabaseClient(
            BASE_URL,
            "anon-key",
            "images",
            http=httpx.AsyncClient(transport=httpx.MockTransport(self._dispatch)),
        )

    def _dispatch(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def storage_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith("/storage/")]


@pytest.fixture
def make_supabase() -> type[FakeSupabase]:
    """Factory for a standalone fake, for service-level tests."""
    return FakeSupabase


@pytest.fixture
def supabase() -> Iterator[FakeSupabase]:
    fake = FakeSupabase()
    app.dependency_overrides[get_supabase] = lambda: fake.client
    yield fake
    app.dependency_overrides.pop(get_supabase, None)


@pytest.fixture(autouse=True)
def _fresh_storage_state() -> Iterator[None]:
    reset_storage_state()
    yield
    reset_storage_state()


@pytest.fixture
def anon_client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_client() -> TestClient:
    return TestClient(app, cookies={SESSION_COOKIE_NAME: SESSION_VALUE})
