from fastapi import FastAPI

from weatherflow.api.health import router as health_router
from weatherflow.api.home import router as home_router
from weatherflow.api.weather import router as weather_router
from weatherflow.config.settings import settings


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes with the FastAPI application

    Args:
        app: FastAPI application instance
    """
    # Base routes (no prefix)
    app.include_router(home_router)

    # API routes (with API prefix)
    app.include_router(health_router, prefix=settings.API_PREFIX)
    app.include_router(weather_router, prefix=settings.API_PREFIX)
