from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weatherflow.common.exception_handlers import register_exception_handlers
from weatherflow.common.response import CustomJSONResponse
from weatherflow.config.settings import settings
from weatherflow.middleware.base import setup_middlewares
from weatherflow.routes import register_routes
from weatherflow.utils.logger import logger


@asynccontextmanager
async def lifespan(application: FastAPI):
    logger.info("WeatherFlow API starting up", extra={"event_type": "app_startup", "port": settings.PORT})
    yield
    logger.info("WeatherFlow API shutting down", extra={"event_type": "app_shutdown"})


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application
    """
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=f"{settings.API_PREFIX}/redoc",
        default_response_class=CustomJSONResponse,
        lifespan=lifespan,
    )

    # Any origin may call the API; no cookies are involved
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", settings.CORRELATION_ID_HEADER],
    )

    setup_middlewares(application)
    register_exception_handlers(application)
    register_routes(application)

    return application


app = create_application()


if __name__ == "__main__":
    import uvicorn

    # LoggingMiddleware is the access log; uvicorn's own would print concrete URLs
    uvicorn.run(
        "weatherflow.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        access_log=False,
    )
