"""Exceptions raised by the weather lookup path."""


class CityValidationError(ValueError):
    """Raised when a city query is empty after trimming."""

    def __init__(self, message: str = 'Please enter a city name'):
        super().__init__(message)


class QueryError(Exception):
    """Base class for a failed weather lookup."""

    def __init__(self, message: str, city: str = ''):
        super().__init__(message)
        self.message = message
        self.city = city


class LocationNotFoundError(QueryError):
    """The provider answered with a non-success status."""

    def __init__(self, city: str, status_code: int):
        super().__init__(f'City "{city}" not found.', city=city)
        self.status_code = status_code


class QueryTransportError(QueryError):
    """Network-level failure (timeout, DNS, connection reset)."""


class InvalidResponseError(QueryError):
    """The provider payload could not be parsed into weather records."""


class MissingAPIKeyError(QueryError):
    """Exception for missing API key."""

    def __init__(self):
        super().__init__('OPENWEATHER_API_KEY environment variable not set.')
