"""Shared test fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from tests.fakes import TOKEN, FakeBackend, FakeUser


@pytest.fixture
def backend():
    """In-memory backend with one signed-in user behind ``TOKEN``."""
    fake = FakeBackend()
    fake.auth.add_user(TOKEN, FakeUser(id="user-ada", email="ada@example.com"))
    return fake


@pytest.fixture
def user_id(backend):
    return backend.auth.tokens[TOKEN].id


@pytest.fixture
def app(backend):
    """Create a test application instance wired to the in-memory backend."""
    from goaltrack.main import create_app

    _app = create_app()
    tokens: list[str | None] = []

    async def factory(access_token: str | None = None):
        tokens.append(access_token)
        return backend

    _app.state.backend_factory = factory
    _app.state.seen_tokens = tokens
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TOKEN}"}
