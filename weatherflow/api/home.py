from fastapi import APIRouter, Request

from weatherflow.common.response import ResponseUtil
from weatherflow.config.settings import settings

router = APIRouter(tags=["Home"])

# Public weather routes, relative to API_PREFIX
WEATHER_ENDPOINTS = {
    "city": "/weather/{city}",
    "coordinates": "/weather/coords/{lat}/{lon}",
}


@router.get("/")
async def home(request: Request):
    """Service index: version, weather routes and where the docs live"""
    prefix = settings.API_PREFIX
    return ResponseUtil.success_response(
        data={
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "environment": settings.ENV,
            "endpoints": {kind: f"{prefix}{path}" for kind, path in WEATHER_ENDPOINTS.items()},
            "docs": {"swagger": f"{prefix}/docs", "redoc": f"{prefix}/redoc"},
        },
        message="Welcome to the WeatherFlow API",
        request_id=getattr(request.state, "request_id", None),
    )
