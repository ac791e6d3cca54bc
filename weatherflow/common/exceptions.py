from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class BaseAPIException(HTTPException):
    """
    Base exception class for all API exceptions

    Subclasses set ``status_code`` and a default ``detail``; the registered
    handler renders them as ``{"error": detail}``.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"
    headers: Optional[Dict[str, Any]] = None

    def __init__(
        self,
        detail: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        actual_detail = detail if detail is not None else self.detail
        actual_headers = headers if headers is not None else self.headers

        super().__init__(
            status_code=self.status_code,
            detail=actual_detail,
            headers=actual_headers
        )


class InternalServerErrorException(BaseAPIException):
    """Exception for unexpected server errors"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"


class WeatherDataException(InternalServerErrorException):
    """Raised when a weather record could not be produced"""
    detail = "Failed to fetch weather data"


class WeatherUnavailableError(Exception):
    """
    Client-side failure fetching weather

    The message shown to users is fixed; the server's own error text is
    never surfaced. ``status_code`` is set when the server answered.
    """
    user_message = "Unable to fetch weather data. Please try again."

    def __init__(self, status_code: Optional[int] = None, cause: Optional[str] = None):
        super().__init__(self.user_message)
        self.status_code = status_code
        self.cause = cause
