"""Lookup Workflow Controller - drives a city lookup end to end."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Protocol

from observability import trace_span
from src.tools.api_tools.weather_api.errors import CityValidationError, QueryError
from src.tools.api_tools.weather_api.models import LookupResult, validate_city
from src.tools.data_tools.recency_store.recency_store import RecencyStore


logger = logging.getLogger(__name__)


class WeatherFetcher(Protocol):
    """Anything that can look up a city, e.g. WeatherQueryService."""

    async def fetch(self, city: str) -> LookupResult: ...


@dataclass
class Notification:
    """A user-facing toast."""

    level: Literal['success', 'error']
    message: str


@dataclass
class LookupState:
    """State the presentation layer renders from."""

    input_city: str = ''
    current: LookupResult | None = None
    history: list[str] = field(default_factory=list)
    busy: bool = False


class LookupController:
    """Runs lookups and keeps the search history in step with them.

    Only successful lookups touch the history. A failed lookup reports an
    error, clears the input box and leaves everything else as it was.
    """

    def __init__(
        self,
        service: WeatherFetcher,
        store: RecencyStore,
        notify: Callable[[Notification], Any] | None = None,
    ):
        self.service = service
        self.store = store
        self.state = LookupState()
        self.notifications: list[Notification] = []
        self._notify = notify or self.notifications.append

    def _success(self, message: str) -> None:
        self._notify(Notification('success', message))

    def _error(self, message: str) -> None:
        self._notify(Notification('error', message))

    def initialize(self) -> LookupResult | None:
        """Load stored history and re-run the last successful lookup."""
        history, last_searched = self.store.load()
        self.state.history = history
        if last_searched:
            self.state.input_city = last_searched
            return self.submit(last_searched)
        return None

    def set_input(self, text: str) -> None:
        self.state.input_city = text

    @trace_span('lookup.submit')
    def submit(self, city_raw: str) -> LookupResult | None:
        """Look up a city and record it on success.

        Args:
            city_raw: City name as typed or selected.

        Returns:
            The new LookupResult, or None when the lookup did not happen or
            failed. Outcomes are reported through notifications.
        """
        if self.state.busy:
            logger.info(f'Lookup already in flight, ignoring {city_raw!r}')
            return None

        try:
            city = validate_city(city_raw)
        except CityValidationError as e:
            self._error(str(e))
            return None

        self.state.busy = True
        try:
            result = asyncio.run(self.service.fetch(city))
        except QueryError as e:
            logger.warning(f'Lookup for {city!r} failed: {e.message}')
            self._error(e.message)
            self.state.input_city = ''
            return None
        else:
            self.state.current = result
            self.state.history = self.store.record_success(city)
            self._success(
                f'Weather data fetched for {result.conditions.location_name}'
            )
            return result
        finally:
            self.state.busy = False

    def remove_history_entry(self, city: str) -> list[str]:
        """Drop a city from the history. The displayed result is kept."""
        self.state.history = self.store.remove(city)
        return self.state.history

    def select_history_entry(self, city: str) -> LookupResult | None:
        return self.submit(city)
