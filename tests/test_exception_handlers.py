import json

import pytest
from starlette.requests import Request

from weatherflow.common.exception_handlers import api_exception_handler, unhandled_exception_handler
from weatherflow.common.exceptions import WeatherDataException


def make_request(path="/api/weather/london"):
    return Request({
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": [],
        "query_string": b"",
        "state": {"request_id": "req-7"},
    })


@pytest.mark.asyncio
async def test_unhandled_exception_hides_details():
    response = await unhandled_exception_handler(make_request(), RuntimeError("database password is hunter2"))

    assert response.status_code == 500
    assert json.loads(response.body) == {"error": "An unexpected error occurred"}
    assert response.headers["X-Request-ID"] == "req-7"


@pytest.mark.asyncio
async def test_weather_data_exception_body():
    response = await api_exception_handler(make_request(), WeatherDataException())

    assert response.status_code == 500
    assert json.loads(response.body) == {"error": "Failed to fetch weather data"}


def test_weather_data_exception_defaults():
    exc = WeatherDataException()
    assert exc.status_code == 500
    assert exc.detail == "Failed to fetch weather data"
