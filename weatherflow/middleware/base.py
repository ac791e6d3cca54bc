from fastapi import FastAPI

from weatherflow.middleware.correlation import CorrelationMiddleware
from weatherflow.middleware.logging import LoggingMiddleware


def setup_middlewares(app: FastAPI) -> None:
    """
    Register all middleware with the FastAPI application

    Args:
        app: FastAPI application instance
    """
    # Last added = first executed
    app.add_middleware(LoggingMiddleware)

    # Outermost, so the request logger already sees the correlation ID
    app.add_middleware(CorrelationMiddleware)
