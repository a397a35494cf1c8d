"""Weather record types and OpenWeatherMap payload parsing."""

from pydantic import BaseModel, Field, ValidationError

from .errors import CityValidationError, InvalidResponseError


class CurrentConditions(BaseModel):
    """Current conditions for a resolved location."""

    location_name: str = Field(description='Resolved location name')
    country_code: str = Field(description='ISO country code')
    temperature_c: float = Field(description='Temperature in Celsius')
    feels_like_c: float = Field(description='Feels-like temperature in Celsius')
    humidity_pct: int = Field(description='Relative humidity percentage')
    pressure_hpa: int = Field(description='Atmospheric pressure in hPa')
    wind_speed_ms: float = Field(description='Wind speed in m/s')
    condition_code: int = Field(description='Provider weather condition id')
    condition_main: str = Field(description='Condition group (Rain, Clear, ...)')
    condition_description: str = Field(description='Condition description')


class ForecastEntry(BaseModel):
    """A single forecast step."""

    timestamp: int = Field(description='Unix timestamp in seconds')
    temperature_c: float = Field(description='Temperature in Celsius')
    condition_main: str = Field(description='Condition group')


class Forecast(BaseModel):
    """Forecast steps in provider order (3-hour intervals)."""

    entries: list[ForecastEntry] = Field(default_factory=list)


class LookupResult(BaseModel):
    """Current conditions and forecast from one successful lookup."""

    conditions: CurrentConditions
    forecast: Forecast


# Raw OpenWeatherMap shapes. Only the fields we read are declared.

class _ConditionBlock(BaseModel):
    id: int
    main: str
    description: str


class _ForecastCondition(BaseModel):
    id: int
    main: str


class _MainBlock(BaseModel):
    temp: float
    feels_like: float
    humidity: int
    pressure: int


class _WindBlock(BaseModel):
    speed: float


class _SysBlock(BaseModel):
    country: str


class _CurrentPayload(BaseModel):
    name: str
    main: _MainBlock
    weather: list[_ConditionBlock] = Field(min_length=1)
    wind: _WindBlock
    sys: _SysBlock


class _ForecastMain(BaseModel):
    temp: float


class _ForecastItem(BaseModel):
    dt: int
    main: _ForecastMain
    weather: list[_ForecastCondition] = Field(min_length=1)


class _ForecastPayload(BaseModel):
    items: list[_ForecastItem] = Field(alias='list')


def validate_city(city: str) -> str:
    """Return the trimmed city name, or raise CityValidationError."""
    trimmed = (city or '').strip()
    if not trimmed:
        raise CityValidationError()
    return trimmed


def parse_current_conditions(data: dict, city: str = '') -> CurrentConditions:
    """Parse a /weather response body.

    Args:
        data: Decoded JSON body.
        city: The queried city, used in error messages.

    Returns:
        The parsed CurrentConditions.

    Raises:
        InvalidResponseError: If any required field is missing or mistyped.
    """
    try:
        payload = _CurrentPayload.model_validate(data)
    except ValidationError as e:
        raise InvalidResponseError(
            f'Invalid current weather response for "{city}": '
            f'{e.error_count()} field error(s).',
            city=city,
        ) from e

    condition = payload.weather[0]
    return CurrentConditions(
        location_name=payload.name,
        country_code=payload.sys.country,
        temperature_c=payload.main.temp,
        feels_like_c=payload.main.feels_like,
        humidity_pct=payload.main.humidity,
        pressure_hpa=payload.main.pressure,
        wind_speed_ms=payload.wind.speed,
        condition_code=condition.id,
        condition_main=condition.main,
        condition_description=condition.description,
    )


def parse_forecast(data: dict, city: str = '') -> Forecast:
    """Parse a /forecast response body.

    Raises:
        InvalidResponseError: If any required field is missing or mistyped.
    """
    try:
        payload = _ForecastPayload.model_validate(data)
    except ValidationError as e:
        raise InvalidResponseError(
            f'Invalid forecast response for "{city}": '
            f'{e.error_count()} field error(s).',
            city=city,
        ) from e

    return Forecast(entries=[
        ForecastEntry(
            timestamp=item.dt,
            temperature_c=item.main.temp,
            condition_main=item.weather[0].main,
        )
        for item in payload.items
    ])


def daily_snapshots(
    forecast: Forecast,
    step: int = 8,
    limit: int = 5,
) -> list[ForecastEntry]:
    """Pick one forecast entry per day.

    The provider reports 3-hour steps, so every 8th entry starting from the
    first is roughly one per 24h.

    Args:
        forecast: The forecast to sample.
        step: Stride between picked entries.
        limit: Maximum number of entries returned.

    Returns:
        At most ``limit`` entries, in forecast order.
    """
    return forecast.entries[::step][:limit]
