"""
FastAPI application entry point for the Study Cards API.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studycards import __version__
from studycards.api.errors import setup_error_handlers
from studycards.api.schemas import HealthResponse
from studycards.api.v1 import v1_router
from studycards.infra.config.dependencies import get_deck_service, get_storage
from studycards.infra.config.logging_config import get_logger, setup_logging
from studycards.infra.config.settings import get_settings
from studycards.infra.middleware.request_context import RequestContextMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging()
    logger = get_logger("app")
    logger.info(
        "app.startup",
        app_name=settings.app_name,
        environment=settings.environment,
        storage=settings.storage_backend,
    )

    storage = get_storage()
    await storage.initialize()
    if settings.seed_on_startup:
        seeded = await get_deck_service().initialize()
        logger.info("storage.seed", seeded=seeded)

    yield

    await storage.close()
    logger.info("app.shutdown", app_name=settings.app_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Flashcard decks, cards and study progress",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)
    app.include_router(v1_router, prefix="/api")

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service=settings.app_name,
            version=__version__,
            storage=get_storage().name,
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "studycards.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
