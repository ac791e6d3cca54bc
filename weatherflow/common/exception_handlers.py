import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from weatherflow.common.exceptions import BaseAPIException
from weatherflow.common.response import CustomJSONResponse, ResponseUtil
from weatherflow.middleware.logging import route_template
from weatherflow.utils.logger import logger


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(BaseAPIException, api_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def _request_timing(request: Request):
    """Request ID and elapsed milliseconds recorded by LoggingMiddleware"""
    request_id = getattr(request.state, "request_id", None)
    start_time = getattr(request.state, "start_time", None)

    elapsed_ms: Optional[float] = None
    if start_time:
        elapsed_ms = (time.time() - start_time) * 1000

    return request_id, elapsed_ms


async def http_exception_handler(request: Request, exc: HTTPException) -> CustomJSONResponse:
    """
    Handle framework HTTP errors (unknown route, wrong method)

    Keeps the framework's status code and detail text.
    """
    request_id, elapsed_ms = _request_timing(request)

    logger.warning(
        f"HTTP exception: {exc.status_code} - {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "route": route_template(request),
            "method": request.method,
        }
    )

    response = ResponseUtil.error_message(
        message=str(exc.detail),
        status_code=exc.status_code,
        request_id=request_id,
        elapsed_ms=elapsed_ms
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> CustomJSONResponse:
    request_id, elapsed_ms = _request_timing(request)
    errors = exc.errors()

    logger.warning(
        f"Validation error: {len(errors)} validation errors",
        extra={
            "validation_errors": [str(error.get("msg")) for error in errors],
            "route": route_template(request),
            "method": request.method,
        }
    )

    return ResponseUtil.error_message(
        message="Request validation error",
        status_code=422,
        request_id=request_id,
        elapsed_ms=elapsed_ms
    )


async def api_exception_handler(request: Request, exc: BaseAPIException) -> CustomJSONResponse:
    """
    Handle the service's own exceptions

    The detail is already a client-safe message; it becomes the error text.
    """
    request_id, elapsed_ms = _request_timing(request)

    logger.error(
        f"API exception: {exc.status_code} - {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "route": route_template(request),
            "method": request.method,
        }
    )

    return ResponseUtil.error_message(
        message=str(exc.detail),
        status_code=exc.status_code,
        request_id=request_id,
        elapsed_ms=elapsed_ms
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> CustomJSONResponse:
    """
    Handle unhandled exceptions with a generic 500

    The exception text is logged but never returned to the caller.
    """
    request_id, elapsed_ms = _request_timing(request)

    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "route": route_template(request),
            "method": request.method,
        }
    )

    return ResponseUtil.error_message(
        message="An unexpected error occurred",
        status_code=500,
        request_id=request_id,
        elapsed_ms=elapsed_ms
    )
