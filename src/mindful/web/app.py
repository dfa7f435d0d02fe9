"""
MindfulAI Web API - FastAPI application.

Serves the onboarding flow to the React frontend. Authentication itself
is delegated to Supabase through the onboarding gateway.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mindful import __version__
from mindful.config import get_settings
from mindful.logging_setup import configure_logging
from onboarding.api import router as onboarding_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the FastAPI app from current settings."""
    settings = get_settings()

    app = FastAPI(title="MindfulAI Therapy", version=__version__)

    # CORS middleware for React frontend dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(onboarding_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    logger.info(f"MindfulAI API ready (env={settings.mindful_env})")
    return app


def build_app() -> FastAPI:
    """uvicorn factory: configures logging, then builds the app."""
    configure_logging(get_settings().log_level)
    return create_app()
