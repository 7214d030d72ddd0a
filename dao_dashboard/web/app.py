"""FastAPI application factory."""

from fastapi import FastAPI

from .routes import router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="DAO Committee Dashboard",
        description="Committee seats, member stakes and challenge eligibility",
        version="0.1.0",
    )

    app.include_router(router, prefix="/api")

    return app
