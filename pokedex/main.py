"""Pokedex API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PokedexError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Repository initialized on startup via lifespan, closed on shutdown

Design Decisions:
    - create_app(settings) factory: the CLI passes flag-overridden settings,
      uvicorn's import string uses the module-level `app` built from env settings
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokedex import __version__
from pokedex.api.error_handlers import register_error_handlers
from pokedex.api.routes import health, pokemons
from pokedex.config import Settings, get_settings
from pokedex.infrastructure.observability import setup_logging
from pokedex.infrastructure.repository_factory import (
    close_repository, init_repository,
)

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        await init_repository(settings)
        logger.info(
            "Pokedex API started", extra={"backend": settings.repository_backend},
        )
        yield
        await close_repository()
        logger.info("Pokedex API shutting down")

    app = FastAPI(title="Pokedex API", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(pokemons.router)

    register_error_handlers(app)
    return app


app = create_app()
