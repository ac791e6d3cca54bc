from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Condition(str, Enum):
    """Current sky condition"""
    SUNNY = "Sunny"
    CLOUDY = "Cloudy"
    RAINY = "Rainy"
    PARTLY_CLOUDY = "Partly Cloudy"
    STORMY = "Stormy"


class ForecastCondition(str, Enum):
    """Forecast sky condition (no storms in the outlook)"""
    SUNNY = "Sunny"
    CLOUDY = "Cloudy"
    RAINY = "Rainy"
    PARTLY_CLOUDY = "Partly Cloudy"


class Weekday(str, Enum):
    """Forecast day labels, in forecast order"""
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"


# Inclusive integer bounds for every generated field
TEMPERATURE_RANGE = (10, 39)
HUMIDITY_RANGE = (40, 79)
WIND_SPEED_RANGE = (5, 24)
FEELS_LIKE_RANGE = (10, 39)
FORECAST_HIGH_RANGE = (20, 34)
FORECAST_LOW_RANGE = (10, 19)

FORECAST_DAYS = len(Weekday)

# Display name used for coordinate lookups
CURRENT_LOCATION = "Current Location"


class Coordinates(BaseModel):
    """Raw coordinate strings echoed from the request path"""
    lat: str = Field(..., description="Latitude as received")
    lon: str = Field(..., description="Longitude as received")


class ForecastDay(BaseModel):
    """One day of the 5-day forecast"""
    day: Weekday = Field(..., description="Day label")
    high: int = Field(..., ge=FORECAST_HIGH_RANGE[0], le=FORECAST_HIGH_RANGE[1], description="High temperature")
    low: int = Field(..., ge=FORECAST_LOW_RANGE[0], le=FORECAST_LOW_RANGE[1], description="Low temperature")
    condition: ForecastCondition = Field(..., description="Forecast condition")


class WeatherRecord(BaseModel):
    """Current conditions plus the 5-day forecast"""
    city: str = Field(..., description="Display name of the location")
    temperature: int = Field(..., ge=TEMPERATURE_RANGE[0], le=TEMPERATURE_RANGE[1], description="Temperature")
    condition: Condition = Field(..., description="Current condition")
    humidity: int = Field(..., ge=HUMIDITY_RANGE[0], le=HUMIDITY_RANGE[1], description="Humidity percentage")
    wind_speed: int = Field(..., ge=WIND_SPEED_RANGE[0], le=WIND_SPEED_RANGE[1], description="Wind speed in km/h")
    feels_like: int = Field(..., ge=FEELS_LIKE_RANGE[0], le=FEELS_LIKE_RANGE[1], description="Feels like temperature")
    coordinates: Optional[Coordinates] = Field(None, description="Only set for coordinate lookups")
    forecast: List[ForecastDay] = Field(
        ..., min_length=FORECAST_DAYS, max_length=FORECAST_DAYS, description="5-day forecast, Mon to Fri"
    )

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "city": "London",
                    "temperature": 18,
                    "condition": "Partly Cloudy",
                    "humidity": 62,
                    "windSpeed": 14,
                    "feelsLike": 21,
                    "forecast": [
                        {"day": "Mon", "high": 24, "low": 13, "condition": "Sunny"},
                        {"day": "Tue", "high": 22, "low": 12, "condition": "Cloudy"},
                        {"day": "Wed", "high": 20, "low": 15, "condition": "Rainy"},
                        {"day": "Thu", "high": 27, "low": 11, "condition": "Partly Cloudy"},
                        {"day": "Fri", "high": 31, "low": 18, "condition": "Sunny"}
                    ]
                }
            ]
        }
    }

    def to_wire(self) -> dict:
        """JSON-ready dict using the camelCase wire names"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class WeatherError(BaseModel):
    """Error body returned by the weather endpoints"""
    error: str = Field(..., description="Error message")

    model_config = {
        "json_schema_extra": {
            "examples": [{"error": "Failed to fetch weather data"}]
        }
    }
