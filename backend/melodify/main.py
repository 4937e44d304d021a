"""Melodify API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MelodifyError → {"error": message} responses
    - CORS configured from settings (not hardcoded)
    - Backend client built once in the lifespan, stored on app.state, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - app.state over a module-level singleton: handlers receive the client via
      the get_backend dependency, which tests override
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from melodify.api.error_handlers import register_error_handlers
from melodify.api.routes import auth, health, likes, playlists, profile, songs, uploads
from melodify.config import get_settings
from melodify.infrastructure.observability import setup_logging
from melodify.infrastructure.supabase_backend import SupabaseBackend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.backend = await SupabaseBackend.connect(settings)
    logger.info("Melodify API started")
    yield
    backend, app.state.backend = app.state.backend, None
    await backend.aclose()
    logger.info("Melodify API shutting down")


app = FastAPI(title="Melodify API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(songs.router)
app.include_router(uploads.router)
app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(likes.router)
app.include_router(playlists.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app on the configured host/port."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Melodify API listening on http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
