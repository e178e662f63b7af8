"""
FastAPI application for the FCA Fines API.

Serves homepage statistics, digest email links, fines data and the
editorial content catalog.

Responsibility: Main API application setup and configuration
"""

# Load .env BEFORE importing settings (critical for pydantic-settings)
from dotenv import load_dotenv
load_dotenv('.env', override=True)

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from fca_fines.config import Settings, settings as default_settings
from fca_fines.db.session import Database
from api.v1.endpoints import content, digest, fines, homepage

# Configure logging
logging.basicConfig(
    level=default_settings.app.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log configuration on startup and release the connection pool on shutdown."""
    app_settings: Settings = app.state.settings
    logger.info(f"Starting {app_settings.app.app_name}...")
    logger.info(f"Environment: {app_settings.app.environment}")
    logger.info(f"Debug mode: {app_settings.app.debug}")
    logger.info(f"Redirect base URL: {app_settings.app.base_url}")
    yield
    logger.info(f"Shutting down {app_settings.app.app_name}...")
    await app.state.db.close()


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        app_settings: Settings to run with (default: environment settings)

    Returns:
        Configured FastAPI app. The database engine is created lazily on
        the first request that needs it.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title=app_settings.app.app_name,
        description="API for UK Financial Conduct Authority enforcement fines",
        version=app_settings.app.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.db = Database(app_settings.db)

    logger.info(f"CORS Origins configured: {app_settings.app.cors_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,  # Cache preflight for 1 hour
    )

    @app.get("/")
    async def root():
        """Root endpoint - API information."""
        return {
            "name": app_settings.app.app_name,
            "version": app_settings.app.app_version,
            "status": "operational",
            "endpoints": {
                "homepage_stats": "/api/homepage/stats",
                "digest_verify": "/api/digest/verify/{token}",
                "digest_unsubscribe": "/api/digest/unsubscribe/{token}",
                "fines": "/api/fca-fines/list",
                "fine_stats": "/api/fca-fines/stats",
                "years": "/api/fca-fines/years",
                "firms": "/api/fca-fines/firms",
                "breach_categories": "/api/fca-fines/categories",
                "sectors": "/api/fca-fines/sectors",
                "trends": "/api/fca-fines/trends",
                "notifications": "/api/fca-fines/notifications",
                "articles": "/api/content/articles",
                "yearly_reviews": "/api/content/yearly-reviews",
                "sitemap": "/api/content/sitemap",
                "docs": "/docs",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": "fca-fines-api"
        }

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if app_settings.app.debug else "An unexpected error occurred"
            }
        )

    app.include_router(homepage.router, prefix="/api")
    app.include_router(digest.router, prefix="/api")
    app.include_router(fines.router, prefix="/api")
    app.include_router(content.router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=default_settings.app.api_host,
        port=default_settings.app.api_port,
        reload=default_settings.app.debug
    )
