"""Unit tests for the lookup workflow controller."""

import pytest

from src.agents.lookup_workflow.controller import LookupController, Notification
from src.tools.api_tools.weather_api.errors import (
    LocationNotFoundError,
    QueryTransportError,
)
from src.tools.api_tools.weather_api.models import (
    CurrentConditions,
    Forecast,
    ForecastEntry,
    LookupResult,
)
from src.tools.data_tools.recency_store.kv_store import InMemoryKeyValueStore
from src.tools.data_tools.recency_store.recency_store import RecencyStore


def make_result(city: str) -> LookupResult:
    return LookupResult(
        conditions=CurrentConditions(
            location_name=city.title(),
            country_code='XX',
            temperature_c=18.0,
            feels_like_c=17.0,
            humidity_pct=55,
            pressure_hpa=1015,
            wind_speed_ms=2.5,
            condition_code=800,
            condition_main='Clear',
            condition_description='clear sky',
        ),
        forecast=Forecast(entries=[
            ForecastEntry(timestamp=1704067200, temperature_c=16.0, condition_main='Clear'),
        ]),
    )


class FakeWeatherService:
    """Answers lookups from a fixed set of known cities."""

    def __init__(self, known=('paris', 'london', 'tokyo', 'rome'), error=None):
        self.known = {c.lower() for c in known}
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, city: str) -> LookupResult:
        self.calls.append(city)
        if self.error is not None:
            raise self.error
        if city.lower() not in self.known:
            raise LocationNotFoundError(city, 404)
        return make_result(city)


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def service():
    return FakeWeatherService()


@pytest.fixture
def controller(service, kv):
    return LookupController(service, RecencyStore(kv))


class TestSubmit:
    """Tests for LookupController.submit."""

    def test_example_scenario(self, controller):
        """History follows successful lookups, most recent first."""
        controller.submit('Paris')
        assert controller.state.history == ['Paris']

        controller.submit('london')
        assert controller.state.history == ['london', 'Paris']

        controller.submit('PARIS')
        assert controller.state.history == ['PARIS', 'london']

        controller.remove_history_entry('london')
        assert controller.state.history == ['PARIS']

    def test_success_sets_current_and_notifies(self, controller):
        result = controller.submit('  rome ')

        assert controller.state.current == result
        assert controller.state.history == ['rome']
        assert controller.state.busy is False
        assert controller.notifications == [
            Notification('success', 'Weather data fetched for Rome'),
        ]

    @pytest.mark.parametrize('city', ['', '   '])
    def test_blank_input_never_calls_service(self, controller, service, city):
        controller.submit('Paris')
        service.calls.clear()

        assert controller.submit(city) is None

        assert service.calls == []
        assert controller.state.history == ['Paris']
        assert controller.notifications[-1] == Notification('error', 'Please enter a city name')

    def test_failure_leaves_state_and_clears_input(self, controller):
        """Failure scenario: history and current survive, input is cleared."""
        previous = controller.submit('Tokyo')
        controller.set_input('Nowhereville')

        assert controller.submit('Nowhereville') is None

        assert controller.state.history == ['Tokyo']
        assert controller.state.current == previous
        assert controller.state.input_city == ''
        assert controller.state.busy is False
        assert controller.notifications[-1] == Notification(
            'error', 'City "Nowhereville" not found.',
        )

    def test_failure_does_not_touch_store(self, controller, kv):
        controller.submit('Tokyo')

        controller.submit('Nowhereville')

        assert RecencyStore(kv).load() == (['Tokyo'], 'Tokyo')

    def test_transport_error_reported_like_not_found(self, kv):
        service = FakeWeatherService(error=QueryTransportError('API request failed: boom'))
        controller = LookupController(service, RecencyStore(kv))
        controller.set_input('Paris')

        controller.submit('Paris')

        assert controller.state.input_city == ''
        assert controller.state.current is None
        assert controller.state.history == []
        assert controller.notifications == [
            Notification('error', 'API request failed: boom'),
        ]

    def test_submit_while_busy_is_suppressed(self, controller, service):
        controller.state.busy = True

        assert controller.submit('Paris') is None

        assert service.calls == []
        assert controller.notifications == []

    def test_custom_notify_callback(self, service, kv):
        received = []
        controller = LookupController(service, RecencyStore(kv), notify=received.append)

        controller.submit('Paris')

        assert received == [Notification('success', 'Weather data fetched for Paris')]
        assert controller.notifications == []


class TestInitialize:
    """Tests for LookupController.initialize."""

    def test_empty_store(self, controller, service):
        assert controller.initialize() is None

        assert controller.state.history == []
        assert service.calls == []

    def test_reruns_last_searched(self, service, kv):
        store = RecencyStore(kv)
        store.record_success('Paris')
        store.record_success('London')

        controller = LookupController(service, store)
        result = controller.initialize()

        assert service.calls == ['London']
        assert controller.state.input_city == 'London'
        assert controller.state.current == result
        assert controller.state.history == ['London', 'Paris']


class TestHistoryEntries:
    """Tests for selecting and removing history entries."""

    def test_select_is_submit(self, controller, service):
        controller.submit('Paris')
        controller.submit('London')

        controller.select_history_entry('Paris')

        assert service.calls[-1] == 'Paris'
        assert controller.state.history == ['Paris', 'London']

    def test_remove_keeps_current(self, controller, kv):
        result = controller.submit('Paris')

        assert controller.remove_history_entry('paris') == []

        assert controller.state.current == result
        assert RecencyStore(kv).load() == ([], None)
