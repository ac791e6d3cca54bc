import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from structlog.contextvars import clear_contextvars

from weatherflow.main import create_application
from weatherflow.services.weather_service import WeatherService, get_weather_service


@pytest.fixture(autouse=True)
def clean_logging_context():
    """Correlation context must not leak from one test into the next"""
    clear_contextvars()
    yield
    clear_contextvars()


@pytest.fixture()
def app():
    application = create_application()
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def seeded_service(app):
    """Route weather requests through a service with a fixed seed"""
    service = WeatherService(rng=random.Random(1234))
    app.dependency_overrides[get_weather_service] = lambda: service
    return service
