from fastapi import APIRouter, Depends, Path

from weatherflow.common.exceptions import WeatherDataException
from weatherflow.schemas.weather.schemas import WeatherError, WeatherRecord
from weatherflow.services.weather_service import WeatherService, get_weather_service
from weatherflow.utils.logger import logger

router = APIRouter(tags=["Weather"])

_responses = {500: {"model": WeatherError, "description": "Weather data could not be produced"}}


# Registered before /weather/{city} so the literal "coords" segment wins
@router.get(
    "/weather/coords/{lat}/{lon}",
    response_model=WeatherRecord,
    response_model_exclude_none=True,
    responses=_responses,
)
async def get_weather_by_coordinates(
    lat: str = Path(..., description="Latitude, echoed verbatim", examples=["51.5"]),
    lon: str = Path(..., description="Longitude, echoed verbatim", examples=["-0.12"]),
    service: WeatherService = Depends(get_weather_service),
):
    """
    Get mock weather for a coordinate pair.

    The city is reported as "Current Location" and the coordinates are
    returned exactly as given.
    """
    try:
        return service.get_weather_by_coordinates(lat, lon)
    except Exception as exc:
        logger.exception(
            "Weather generation failed for coordinate lookup",
            extra={"error_type": type(exc).__name__},
        )
        raise WeatherDataException() from exc


@router.get(
    "/weather/{city}",
    response_model=WeatherRecord,
    response_model_exclude_none=True,
    responses=_responses,
)
async def get_weather(
    city: str = Path(..., description="City name", examples=["London"]),
    service: WeatherService = Depends(get_weather_service),
):
    """
    Get mock current weather and a 5-day forecast for a city.
    """
    try:
        return service.get_weather_by_city(city)
    except Exception as exc:
        logger.exception(
            "Weather generation failed for city lookup",
            extra={"error_type": type(exc).__name__},
        )
        raise WeatherDataException() from exc
