"""
Tests that request logs name routes, never the city or coordinates asked for
"""
import logging

import pytest
from httpx import ASGITransport, AsyncClient

from weatherflow.client.weather_client import create_weather_client
from weatherflow.common.exceptions import WeatherUnavailableError
from weatherflow.services.weather_service import WeatherService, get_weather_service
from weatherflow.utils.logger import logger

CITY = "secretville"
LAT, LON = "north-7731", "east-9942"


class FailingWeatherService(WeatherService):

    def get_weather_by_city(self, city):
        raise RuntimeError("generator unavailable")


class ListHandler(logging.Handler):

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture()
def log_records():
    handler = ListHandler()
    previous_level = logger._logger.level
    logger._logger.addHandler(handler)
    logger._logger.setLevel(logging.DEBUG)
    yield handler.records
    logger._logger.removeHandler(handler)
    logger._logger.setLevel(previous_level)


def assert_not_logged(records, *values):
    assert records
    for record in records:
        rendered = record.getMessage() + " " + repr(vars(record))
        for value in values:
            assert value.lower() not in rendered.lower()


def routes_logged(records):
    return [getattr(record, "route", None) for record in records]


@pytest.mark.asyncio
async def test_city_lookup_logs_route_template_only(client: AsyncClient, log_records):
    response = await client.get(f"/api/weather/{CITY}")

    assert response.status_code == 200
    assert_not_logged(log_records, CITY)
    assert "/api/weather/{city}" in routes_logged(log_records)
    assert any(record.getMessage() == "GET /api/weather/{city} -> 200" for record in log_records)


@pytest.mark.asyncio
async def test_coordinate_lookup_logs_route_template_only(client: AsyncClient, log_records):
    response = await client.get(f"/api/weather/coords/{LAT}/{LON}")

    assert response.status_code == 200
    assert_not_logged(log_records, LAT, LON)
    assert "/api/weather/coords/{lat}/{lon}" in routes_logged(log_records)


@pytest.mark.asyncio
async def test_failed_lookup_logs_route_template_only(app, client: AsyncClient, log_records):
    app.dependency_overrides[get_weather_service] = lambda: FailingWeatherService()

    response = await client.get(f"/api/weather/{CITY}")

    assert response.status_code == 500
    assert_not_logged(log_records, CITY)
    assert any(record.levelno == logging.ERROR for record in log_records)
    assert "/api/weather/{city}" in routes_logged(log_records)


@pytest.mark.asyncio
async def test_unmatched_path_is_not_logged(client: AsyncClient, log_records):
    response = await client.get(f"/api/weather/coords/{CITY}")

    assert response.status_code == 404
    assert_not_logged(log_records, CITY)
    assert "<unmatched>" in routes_logged(log_records)


@pytest.mark.asyncio
async def test_client_logs_route_template_only(app, log_records):
    async with create_weather_client(base_url="http://test", transport=ASGITransport(app=app)) as client:
        await client.get_weather(CITY)
        await client.get_weather_by_coordinates(LAT, LON)

    assert_not_logged(log_records, CITY, LAT, LON)
    assert "/weather/{city}" in routes_logged(log_records)
    assert "/weather/coords/{lat}/{lon}" in routes_logged(log_records)


@pytest.mark.asyncio
async def test_city_with_encoded_slash_is_not_found(app):
    # The server decodes %2F before routing, so "a/b" is two path segments
    async with create_weather_client(base_url="http://test", transport=ASGITransport(app=app)) as client:
        with pytest.raises(WeatherUnavailableError) as exc_info:
            await client.get_weather("a/b")

    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Unable to fetch weather data. Please try again."
