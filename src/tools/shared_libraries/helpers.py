"""Shared display helpers for weather results."""

import math
from datetime import datetime, timezone

from src.tools.api_tools.weather_api.models import CurrentConditions


def format_temperature(temp: float, units: str = 'metric') -> str:
    """Format temperature rounded to whole degrees with unit symbol.

    Halves round up, so 20.5 shows as 21.

    Args:
        temp: Temperature value.
        units: "metric" for Celsius, "imperial" for Fahrenheit.

    Returns:
        Formatted temperature string.
    """
    unit_symbol = 'C' if units == 'metric' else 'F'
    return f'{math.floor(temp + 0.5)}°{unit_symbol}'


def format_location(conditions: CurrentConditions) -> str:
    if conditions.country_code:
        return f'{conditions.location_name}, {conditions.country_code}'
    return conditions.location_name


def weekday_label(timestamp: int, tz: timezone | None = None) -> str:
    """Short weekday name ("Mon") for a Unix timestamp.

    Uses the local timezone unless ``tz`` is given.
    """
    return datetime.fromtimestamp(timestamp, tz=tz).strftime('%a')


def weather_icon(condition_code: int) -> str:
    """Pick an icon for an OpenWeatherMap condition id.

    See https://openweathermap.org/weather-conditions for the id groups.
    """
    if 200 <= condition_code < 300:
        return '⛈️'
    if 300 <= condition_code < 600:
        return '🌧️'
    if 600 <= condition_code < 700:
        return '🌨️'
    if 700 <= condition_code < 800:
        return '🌫️'
    if condition_code == 800:
        return '☀️'
    return '☁️'


def format_weather_summary(conditions: CurrentConditions) -> str:
    """Format current conditions into a one-line summary.

    Args:
        conditions: Parsed current conditions.

    Returns:
        Formatted weather summary string.
    """
    return (
        f'{format_location(conditions)}: '
        f'{format_temperature(conditions.temperature_c)}, '
        f'{conditions.condition_description}, '
        f'Humidity: {conditions.humidity_pct}%'
    )
