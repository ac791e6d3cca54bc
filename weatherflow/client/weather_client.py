import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from weatherflow.common.exceptions import WeatherUnavailableError
from weatherflow.config.settings import settings
from weatherflow.schemas.weather.schemas import WeatherRecord
from weatherflow.utils.logger import get_correlation_id, logger

# Relative to the API prefix
CITY_ROUTE = "/weather/{city}"
COORDINATES_ROUTE = "/weather/coords/{lat}/{lon}"


@dataclass
class WeatherClientConfig:
    """Connection settings for the weather API"""
    # Server root, without the /api prefix
    base_url: str

    # Default headers to use for all requests
    headers: Dict[str, str] = field(default_factory=dict)

    # Default timeout for all requests (in seconds)
    timeout: float = 10.0

    api_prefix: str = "/api"


class WeatherClient:
    """
    Async client for the weather endpoints

    Every failure (HTTP error status, connection problem, unreadable body)
    surfaces as WeatherUnavailableError carrying the same user-facing
    message. There is no retry; callers resubmit.
    """

    def __init__(self, config: WeatherClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(config.timeout),
            headers=config.headers,
            transport=transport,
        )

    async def __aenter__(self) -> "WeatherClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get_weather(self, city: str) -> WeatherRecord:
        """
        Fetch weather for a city name

        The name is sent as typed; it is only percent-encoded for the path.
        """
        return await self._fetch(CITY_ROUTE, city=city)

    async def get_weather_by_coordinates(self, lat: str, lon: str) -> WeatherRecord:
        """Fetch weather for a coordinate pair"""
        return await self._fetch(COORDINATES_ROUTE, lat=str(lat), lon=str(lon))

    async def _fetch(self, route: str, **path_params: str) -> WeatherRecord:
        """
        GET one weather route

        Only the route template is logged; the filled-in URL holds the query.
        """
        endpoint = route.format(**{name: quote(value, safe="") for name, value in path_params.items()})
        url = f"{self.config.api_prefix.rstrip('/')}{endpoint}"

        request_headers = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            request_headers[settings.CORRELATION_ID_HEADER] = correlation_id

        start_time = time.time()
        logger.info(
            f"Outgoing GET {route}",
            extra={"event_type": "weather_api_request_start", "route": route},
        )

        try:
            response = await self._client.get(url, headers=request_headers)
        except httpx.HTTPError as e:
            logger.error(
                f"Weather API request failed: {type(e).__name__}",
                extra={
                    "event_type": "weather_api_request_error",
                    "route": route,
                    "error_type": type(e).__name__,
                },
            )
            raise WeatherUnavailableError(cause=str(e)) from e

        execution_time_ms = round((time.time() - start_time) * 1000, 2)

        if not response.is_success:
            logger.warning(
                f"Weather API returned {response.status_code}",
                extra={
                    "event_type": "weather_api_request_error",
                    "route": route,
                    "status_code": response.status_code,
                    "execution_time_ms": execution_time_ms,
                },
            )
            raise WeatherUnavailableError(status_code=response.status_code, cause=response.text)

        try:
            record = WeatherRecord.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(
                "Weather API returned an unreadable body",
                extra={"event_type": "weather_api_bad_body", "route": route},
            )
            raise WeatherUnavailableError(status_code=response.status_code, cause=str(e)) from e

        logger.info(
            f"Weather received from {route}",
            extra={
                "event_type": "weather_api_request_complete",
                "route": route,
                "status_code": response.status_code,
                "execution_time_ms": execution_time_ms,
            },
        )
        return record

    async def close(self):
        """Close the HTTP client"""
        await self._client.aclose()


def create_weather_client(
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    **kwargs: Any
) -> WeatherClient:
    """
    Create a weather client, defaulting to the configured server

    Args:
        base_url: Server root; defaults to settings.WEATHER_API_URL
        timeout: Request timeout in seconds; defaults to settings.WEATHER_CLIENT_TIMEOUT
        **kwargs: ``headers`` / ``api_prefix`` for the config, ``transport`` for httpx

    Returns:
        WeatherClient instance
    """
    transport = kwargs.pop("transport", None)
    config = WeatherClientConfig(
        base_url=base_url or settings.WEATHER_API_URL,
        timeout=timeout if timeout is not None else settings.WEATHER_CLIENT_TIMEOUT,
        **kwargs
    )
    return WeatherClient(config, transport=transport)
