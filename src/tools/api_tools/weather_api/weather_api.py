"""Weather API Tool - OpenWeatherMap integration."""

import asyncio
import logging
import os

import httpx

from observability import trace_tool

from .errors import (
    InvalidResponseError,
    LocationNotFoundError,
    MissingAPIKeyError,
    QueryTransportError,
)
from .models import (
    CurrentConditions,
    Forecast,
    LookupResult,
    parse_current_conditions,
    parse_forecast,
    validate_city,
)


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://api.openweathermap.org/data/2.5'
DEFAULT_TIMEOUT = 10.0


async def _get_json(
    client: httpx.AsyncClient,
    path: str,
    params: dict,
    city: str,
) -> dict:
    """GET a provider resource and decode its JSON body.

    Raises:
        LocationNotFoundError: Non-success status.
        QueryTransportError: Network-level failure.
        InvalidResponseError: Body is not valid JSON.
    """
    try:
        response = await client.get(path, params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        raise LocationNotFoundError(city, e.response.status_code) from e
    except httpx.HTTPError as e:
        raise QueryTransportError(f'API request failed: {e}', city=city) from e
    except ValueError as e:
        raise InvalidResponseError(
            'Invalid JSON response from API.', city=city
        ) from e


@trace_tool(name='openweather.current', capture_input=False)
async def fetch_current_conditions(
    client: httpx.AsyncClient,
    city: str,
    params: dict,
) -> CurrentConditions:
    """Get current weather for a city.

    Args:
        client: Client bound to the provider base URL.
        city: The city name (e.g., "Seoul", "Tokyo", "New York").
        params: Shared query parameters (credential and units).

    Returns:
        Parsed current conditions.
    """
    data = await _get_json(client, '/weather', {'q': city, **params}, city)
    return parse_current_conditions(data, city)


@trace_tool(name='openweather.forecast', capture_input=False)
async def fetch_forecast(
    client: httpx.AsyncClient,
    city: str,
    params: dict,
) -> Forecast:
    """Get the 5-day / 3-hour forecast for a city.

    Args:
        client: Client bound to the provider base URL.
        city: The city name.
        params: Shared query parameters (credential and units).

    Returns:
        Parsed forecast, entries in provider order.
    """
    data = await _get_json(client, '/forecast', {'q': city, **params}, city)
    return parse_forecast(data, city)


class WeatherQueryService:
    """Fetches current conditions and forecast for a city in one lookup.

    Both resources are requested concurrently and awaited together. If
    either fails the whole lookup fails; when both fail, the current
    conditions error is the one raised.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        units: str = 'metric',
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or os.getenv(
            'OPENWEATHER_BASE_URL', DEFAULT_BASE_URL
        )
        self.units = units
        if timeout is None:
            timeout = float(os.getenv('OPENWEATHER_TIMEOUT', DEFAULT_TIMEOUT))
        self.timeout = timeout
        self.transport = transport

    def _resolve_api_key(self) -> str:
        api_key = self.api_key or os.getenv('OPENWEATHER_API_KEY')
        if not api_key:
            raise MissingAPIKeyError()
        return api_key

    async def fetch(self, city: str) -> LookupResult:
        """Look up current conditions and forecast for a city.

        Args:
            city: The city name. Surrounding whitespace is ignored.

        Returns:
            The combined LookupResult.

        Raises:
            CityValidationError: If the city is empty.
            QueryError: If either retrieval fails.
        """
        city = validate_city(city)
        params = {'appid': self._resolve_api_key(), 'units': self.units}

        logger.info(f'Looking up weather for {city!r}')
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            conditions, forecast = await asyncio.gather(
                fetch_current_conditions(client, city, params),
                fetch_forecast(client, city, params),
                return_exceptions=True,
            )

        for outcome in (conditions, forecast):
            if isinstance(outcome, BaseException):
                logger.warning(f'Weather lookup for {city!r} failed: {outcome}')
                raise outcome

        return LookupResult(conditions=conditions, forecast=forecast)
