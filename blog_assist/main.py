"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_assist.api.v1.router import api_router
from blog_assist.config import settings
from blog_assist.core.database import close_db
from blog_assist.core.logging import setup_logging
from blog_assist.services.container import ServiceContainer, build_service_container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    setup_logging()

    logger.info(
        "Starting BlogAssist",
        extra={
            "environment": settings.environment,
            "version": settings.app_version,
            "gemini_configured": settings.gemini_configured,
            "openai_configured": settings.openai_configured,
            "semantic_search": settings.enable_semantic_search,
        },
    )

    yield

    logger.info("Shutting down BlogAssist")
    await app.state.services.aclose()
    await close_db()


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="AI-assisted authoring backend: SEO, excerpts, drafts, header images and semantic search",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.services = services or build_service_container()

    # CORS middleware
    app.add_middleware(
        cast(Any, CORSMiddleware),
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get(
        "/health",
        summary="Health check",
        description="Return service health status and backend version information.",
    )
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.app_version}

    return app


app = create_app()
