"""Application Lifespan: backend built on startup, closed on shutdown."""

from unittest.mock import AsyncMock, MagicMock

from melodify.main import app, lifespan


async def test_lifespan_connects_then_closes_backend(monkeypatch):
    backend = MagicMock()
    backend.aclose = AsyncMock()
    connect = AsyncMock(return_value=backend)
    monkeypatch.setattr("melodify.main.SupabaseBackend.connect", connect)

    async with lifespan(app):
        assert app.state.backend is backend
        backend.aclose.assert_not_awaited()

    connect.assert_awaited_once()
    backend.aclose.assert_awaited_once()
    assert app.state.backend is None
