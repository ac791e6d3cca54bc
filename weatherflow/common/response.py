import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from fastapi import status
from fastapi.responses import JSONResponse


class ResponseStatus(str, Enum):
    """API response status values"""
    SUCCESS = "success"
    ERROR = "error"


class CustomJSONResponse(JSONResponse):
    """JSONResponse that renders datetime objects as ISO strings"""
    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            separators=(",", ":"),
            default=lambda o: o.isoformat() if isinstance(o, datetime) else str(o)
        ).encode("utf-8")


def _response_id() -> str:
    return f"res_{datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S%f')}"


class ResponseUtil:
    """Builds the service's JSON responses"""

    @staticmethod
    def _add_trace_headers(
        response: CustomJSONResponse,
        request_id: Optional[str],
        elapsed_ms: Optional[float],
    ) -> CustomJSONResponse:
        if request_id:
            response.headers["X-Request-ID"] = request_id

        response.headers["X-Response-ID"] = _response_id()

        if elapsed_ms:
            response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"

        return response

    @classmethod
    def success_response(
        cls,
        data: Any = None,
        message: Optional[str] = None,
        status_code: int = status.HTTP_200_OK,
        request_id: Optional[str] = None,
        elapsed_ms: Optional[float] = None,
    ) -> CustomJSONResponse:
        """
        Generate the success envelope used by the info endpoints

        Args:
            data: Response payload
            message: Optional success message
            status_code: HTTP status code
            request_id: Request ID for tracing
            elapsed_ms: Time taken to process the request in milliseconds

        Returns:
            CustomJSONResponse with status, timestamp and status_code keys
        """
        response_content = {
            "status": ResponseStatus.SUCCESS.value,
            "timestamp": datetime.now(timezone.utc),
            "status_code": status_code
        }

        if data is not None:
            response_content["data"] = data

        if message:
            response_content["message"] = message

        response = CustomJSONResponse(content=response_content, status_code=status_code)
        return cls._add_trace_headers(response, request_id, elapsed_ms)

    @classmethod
    def error_message(
        cls,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        request_id: Optional[str] = None,
        elapsed_ms: Optional[float] = None,
    ) -> CustomJSONResponse:
        """
        Generate an ``{"error": message}`` response

        This is the only error shape clients see, whatever went wrong.
        """
        response = CustomJSONResponse(content={"error": message}, status_code=status_code)
        return cls._add_trace_headers(response, request_id, elapsed_ms)
