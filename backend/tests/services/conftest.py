"""Service test fixtures: in-memory backend + FastAPI test client.

Invariants:
    - Every test gets a fresh FakeBackend
    - get_backend dependency overridden, so the lifespan (real SDK) never runs
"""

import pytest
from httpx import ASGITransport, AsyncClient

from melodify.api.dependencies import get_backend
from melodify.main import app
from tests.services.fake_backend import VALID_TOKEN as TOKEN, FakeBackend



@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def user(backend):
    return backend.add_user(
        TOKEN, id="user-1", email="listener@example.com",
        user_metadata={"username": "listener"},
    )


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture
async def client(backend):
    """FastAPI test client with the backend dependency overridden."""
    app.dependency_overrides[get_backend] = lambda: backend
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
