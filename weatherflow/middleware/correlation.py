from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from weatherflow.config.settings import settings
from weatherflow.utils.logger import generate_correlation_id, logger, set_correlation_id


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Middleware for correlation ID generation and propagation
    """

    # Checked in order after the configured header
    FALLBACK_HEADERS = ("X-Request-ID", "X-Trace-ID", "Request-ID", "Trace-ID")

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.correlation_header = settings.CORRELATION_ID_HEADER
        self.enable_correlation = settings.ENABLE_CORRELATION_ID

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Read or generate a correlation ID, bind it for logging, echo it back"""
        if not self.enable_correlation:
            return await call_next(request)

        correlation_id = self._get_correlation_id_from_request(request) or generate_correlation_id()
        set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id

        try:
            response = await call_next(request)
        finally:
            logger.clear_context()

        response.headers[self.correlation_header] = correlation_id
        return response

    def _get_correlation_id_from_request(self, request: Request) -> Optional[str]:
        for header in (self.correlation_header,) + self.FALLBACK_HEADERS:
            value = request.headers.get(header)
            if value:
                return value

        return None
