import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from weatherflow.utils.logger import logger

UNMATCHED_ROUTE = "<unmatched>"


def route_template(request: Request) -> str:
    """
    The matched route's path template, e.g. ``/api/weather/{city}``

    Path parameters carry the caller's query, so logs name the route rather
    than the concrete URL. The router records the match in the shared scope,
    which makes this valid only once routing has happened.
    """
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Access log for every request, plus X-Request-ID and X-Response-Time headers
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = self._resolve_request_id(request)
        started = time.time()
        request.state.request_id = request_id
        request.state.start_time = started
        logger.set_context(request_id=request_id)

        logger.info(
            f"{request.method} request received",
            extra={
                "method": request.method,
                "client_host": request.client.host if request.client else None,
                "user_agent": request.headers.get("User-Agent", ""),
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"{request.method} {route_template(request)} raised {type(exc).__name__}",
                exc_info=True,
                extra={
                    "method": request.method,
                    "route": route_template(request),
                    "process_time_ms": self._elapsed_ms(started),
                },
            )
            raise

        elapsed_ms = self._elapsed_ms(started)
        route = route_template(request)
        logger.info(
            f"{request.method} {route} -> {response.status_code}",
            extra={
                "method": request.method,
                "route": route,
                "status_code": response.status_code,
                "process_time_ms": elapsed_ms,
            },
        )

        # ResponseUtil may have set these already
        response.headers.setdefault("X-Request-ID", request_id)
        response.headers.setdefault("X-Response-Time", f"{elapsed_ms}ms")
        return response

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.time() - started) * 1000, 2)

    @staticmethod
    def _resolve_request_id(request: Request) -> str:
        """Correlation ID if one is bound, then an inbound request ID header, then a new UUID"""
        correlation_id = getattr(request.state, "correlation_id", None)
        if correlation_id:
            return correlation_id

        for header in ("X-Request-ID", "Request-ID"):
            if header in request.headers:
                return request.headers[header]

        return str(uuid.uuid4())
