import random
from typing import List, Optional

from weatherflow.schemas.weather.schemas import (
    CURRENT_LOCATION,
    FEELS_LIKE_RANGE,
    FORECAST_HIGH_RANGE,
    FORECAST_LOW_RANGE,
    HUMIDITY_RANGE,
    TEMPERATURE_RANGE,
    WIND_SPEED_RANGE,
    Condition,
    Coordinates,
    ForecastCondition,
    ForecastDay,
    WeatherRecord,
    Weekday,
)
from weatherflow.utils.logger import logger


class WeatherService:
    """
    Mock weather provider

    Synthesizes a fresh WeatherRecord on every call. Each field is drawn
    independently and uniformly from its inclusive range or enumeration, so
    two calls with the same input will usually differ.

    The random source is passed in rather than taken from the ``random``
    module globals; give it a seeded ``random.Random`` for reproducible output.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    @staticmethod
    def capitalize_city(city: str) -> str:
        """
        Upper-case the first character and keep the rest as typed

        ``"neW york"`` becomes ``"NeW york"``; this is not title-casing.
        """
        return city[:1].upper() + city[1:]

    def _draw(self, bounds) -> int:
        low, high = bounds
        return self.rng.randint(low, high)

    def build_forecast(self) -> List[ForecastDay]:
        """Five forecast days labelled Mon to Fri, whatever today is"""
        return [
            ForecastDay(
                day=day,
                high=self._draw(FORECAST_HIGH_RANGE),
                low=self._draw(FORECAST_LOW_RANGE),
                condition=self.rng.choice(list(ForecastCondition)),
            )
            for day in Weekday
        ]

    def _build_record(self, city: str, coordinates: Optional[Coordinates] = None) -> WeatherRecord:
        return WeatherRecord(
            city=city,
            temperature=self._draw(TEMPERATURE_RANGE),
            condition=self.rng.choice(list(Condition)),
            humidity=self._draw(HUMIDITY_RANGE),
            wind_speed=self._draw(WIND_SPEED_RANGE),
            feels_like=self._draw(FEELS_LIKE_RANGE),
            coordinates=coordinates,
            forecast=self.build_forecast(),
        )

    def get_weather_by_city(self, city: str) -> WeatherRecord:
        """
        Build a record for a free-text city name

        Args:
            city: City as typed by the user; not trimmed or validated

        Returns:
            WeatherRecord without coordinates
        """
        logger.debug("Generating mock weather for city lookup")
        return self._build_record(self.capitalize_city(city))

    def get_weather_by_coordinates(self, lat: str, lon: str) -> WeatherRecord:
        """
        Build a record for a coordinate pair

        The coordinates are opaque strings: no numeric parsing and no
        range check. They are echoed back verbatim in ``coordinates``.

        Args:
            lat: Latitude as received
            lon: Longitude as received

        Returns:
            WeatherRecord named "Current Location" with coordinates set
        """
        logger.debug("Generating mock weather for coordinate lookup")
        return self._build_record(CURRENT_LOCATION, Coordinates(lat=lat, lon=lon))


def get_weather_service() -> WeatherService:
    """Request-scoped dependency; every request gets its own random source"""
    return WeatherService()
