from fastapi import APIRouter, Request

from weatherflow.common.response import ResponseUtil
from weatherflow.config.settings import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """Liveness check; the generator has no backing store to verify"""
    return ResponseUtil.success_response(
        data={"service": settings.PROJECT_NAME, "version": settings.VERSION, "port": settings.PORT},
        message="WeatherFlow API is up",
        request_id=getattr(request.state, "request_id", None),
    )
