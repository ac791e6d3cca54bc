from typing import Optional

from weatherflow.client.weather_client import WeatherClient
from weatherflow.common.exceptions import WeatherUnavailableError
from weatherflow.config.settings import settings
from weatherflow.schemas.weather.schemas import WeatherRecord
from weatherflow.utils.logger import logger

WEATHER_ICONS = {
    "Sunny": "☀️",
    "Cloudy": "☁️",
    "Rainy": "🌧️",
    "Partly Cloudy": "⛅",
    "Stormy": "⛈️",
}
DEFAULT_ICON = "🌤️"

CONDITION_GRADIENTS = {
    "Sunny": "from-amber-400 via-orange-400 to-yellow-500",
    "Cloudy": "from-slate-400 via-gray-400 to-slate-500",
    "Rainy": "from-blue-500 via-indigo-500 to-blue-600",
    "Partly Cloudy": "from-sky-400 via-blue-400 to-cyan-500",
    "Stormy": "from-purple-600 via-indigo-700 to-purple-800",
}
DEFAULT_GRADIENT = "from-blue-400 via-cyan-400 to-teal-500"


def _condition_key(condition) -> str:
    return getattr(condition, "value", condition)


def weather_icon(condition) -> str:
    """Emoji for a condition; unknown conditions get a generic one"""
    return WEATHER_ICONS.get(_condition_key(condition), DEFAULT_ICON)


def condition_gradient(condition) -> str:
    """Background gradient classes for a condition"""
    return CONDITION_GRADIENTS.get(_condition_key(condition), DEFAULT_GRADIENT)


class WeatherView:
    """
    Display state behind the weather screen

    Holds the last record shown, a loading flag, and an error message.
    A failed fetch keeps the previous record on screen.
    """

    def __init__(self, client: WeatherClient):
        self.client = client
        self.weather: Optional[WeatherRecord] = None
        self.loading = False
        self.error = ""

    async def load_default(self) -> Optional[WeatherRecord]:
        return await self.fetch_weather(settings.DEFAULT_CITY)

    async def search(self, city: str) -> Optional[WeatherRecord]:
        """
        Submit a search box value

        Blank input is ignored. Otherwise the raw text is fetched, untrimmed.
        """
        if not city.strip():
            return None
        return await self.fetch_weather(city)

    async def fetch_weather(self, city: str) -> Optional[WeatherRecord]:
        self.loading = True
        self.error = ""
        try:
            self.weather = await self.client.get_weather(city)
        except WeatherUnavailableError as e:
            logger.warning(
                "Weather fetch failed",
                extra={"event_type": "view_fetch_failed", "status_code": e.status_code},
            )
            self.error = e.user_message
            return None
        finally:
            self.loading = False
        return self.weather

    @property
    def icon(self) -> str:
        return weather_icon(self.weather.condition) if self.weather else DEFAULT_ICON

    @property
    def gradient(self) -> str:
        return condition_gradient(self.weather.condition) if self.weather else DEFAULT_GRADIENT
