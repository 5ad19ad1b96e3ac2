from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripdesk import __version__
from tripdesk.api.v1.router import router as api_v1_router
from tripdesk.config.settings import settings
from tripdesk.core.logging import get_logger, setup_logging
from tripdesk.core.middleware import register_exception_handlers, register_middlewares
from tripdesk.db.init_db import init_db
from tripdesk.db.session import engine

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # Schema is managed by migrations in production
    if not settings.is_production():
        init_db(engine)
    logger.info(f"{settings.APP_NAME} started", extra={"environment": settings.ENVIRONMENT})
    yield
    logger.info(f"{settings.APP_NAME} stopped")


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Credentials cannot be combined with a wildcard origin
    allow_any_origin = not settings.CORS_ORIGINS or settings.CORS_ORIGINS == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_any_origin else settings.CORS_ORIGINS,
        allow_credentials=not allow_any_origin,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["Health"])
    def health_check():
        return {
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tripdesk.main:app", host="0.0.0.0", port=8000, reload=settings.is_development())
