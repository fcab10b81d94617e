"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import CandleTimeError
from .models import ErrorResponse
from .routes import health
from modules.admin.routes import router as admin_router
from modules.articles.routes import admin_router as articles_admin_router
from modules.articles.routes import public_router as articles_router
from modules.candles.routes import map_router, router as candles_router
from modules.prompts.routes import router as prompts_router

logger = logging.getLogger(__name__)


def status_for_error(exc: CandleTimeError) -> int:
    """HTTP status for a domain error that escaped its route."""
    return exc.status_code


async def candletime_error_handler(request: Request, exc: CandleTimeError) -> JSONResponse:
    status_code = status_for_error(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.code}: {exc.message}")
    body = ErrorResponse(**exc.to_dict())
    return JSONResponse(status_code=status_code, content=body.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    if not settings.admin_emails.strip():
        logger.warning("ADMIN_EMAILS is empty; every admin check will be denied")
    yield
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Memorial candles, SEO articles and the admin panel API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(CandleTimeError, candletime_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(candles_router, prefix="/api/candles", tags=["candles"])
    app.include_router(map_router, prefix="/api/map", tags=["map"])
    app.include_router(articles_router, prefix="/api/articles", tags=["articles"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])
    app.include_router(
        prompts_router, prefix="/api/admin/prompt-templates", tags=["admin", "prompts"]
    )
    app.include_router(
        articles_admin_router, prefix="/api/admin/articles", tags=["admin", "articles"]
    )

    return app


# Application instance for uvicorn
app = create_app()
