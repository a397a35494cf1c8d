"""Weather Lookup - Streamlit Frontend.

Run with: streamlit run frontend/app.py
"""

import logging
import os
from typing import Callable

import streamlit as st
from dotenv import load_dotenv

from observability import init_tracing
from src.agents.lookup_workflow.controller import LookupController
from src.tools.api_tools.weather_api.models import LookupResult, daily_snapshots
from src.tools.api_tools.weather_api.weather_api import WeatherQueryService
from src.tools.data_tools.recency_store.kv_store import SqliteKeyValueStore
from src.tools.data_tools.recency_store.recency_store import RecencyStore
from src.tools.shared_libraries.helpers import (
    format_location,
    format_temperature,
    format_weather_summary,
    weather_icon,
    weekday_label,
)


load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Weather App",
    page_icon="🌤️",
    layout="wide",
)


def build_controller() -> LookupController:
    """Wire the controller to the OpenWeatherMap service and SQLite store."""
    logger.info("Starting weather lookup client")
    if os.getenv("PHOENIX_COLLECTOR_ENDPOINT"):
        init_tracing(project_name="weather-lookup")
    return LookupController(
        service=WeatherQueryService(),
        store=RecencyStore(SqliteKeyValueStore()),
    )


def flush_notifications(controller: LookupController) -> None:
    """Show pending notifications as toasts."""
    while controller.notifications:
        note = controller.notifications.pop(0)
        st.toast(note.message, icon="✅" if note.level == "success" else "❌")


def run_lookup(
    controller: LookupController,
    lookup: Callable[[str], LookupResult | None],
    city: str,
) -> None:
    """Run a lookup behind a spinner, then redraw."""
    with st.spinner("Loading weather data..."):
        lookup(city)
    if not controller.state.input_city:
        # A failed lookup clears the search box.
        st.session_state.pop("city_input", None)
    st.rerun()


# Initialize session state
if "controller" not in st.session_state:
    st.session_state.controller = build_controller()
    st.session_state.controller.initialize()
    st.session_state.city_input = st.session_state.controller.state.input_city

controller: LookupController = st.session_state.controller
state = controller.state


# Main content
st.title("Weather App")
st.caption("Enter a city name to get the current weather")

col_input, col_button = st.columns([5, 1])
with col_input:
    city = st.text_input(
        "City",
        key="city_input",
        placeholder="Enter city name...",
        label_visibility="collapsed",
    )
    controller.set_input(city)
with col_button:
    if st.button("🔍 Search", key="search", use_container_width=True):
        run_lookup(controller, controller.submit, city)

# Search History
if state.history:
    st.markdown("**Recent Searches:**")
    for i, history_city in enumerate(state.history):
        col_city, col_remove, _ = st.columns([2, 1, 7])
        with col_city:
            if st.button(history_city, key=f"history_select_{i}"):
                run_lookup(controller, controller.select_history_entry, history_city)
        with col_remove:
            if st.button("✕", key=f"history_remove_{i}"):
                controller.remove_history_entry(history_city)
                st.rerun()

flush_notifications(controller)

if state.current:
    conditions = state.current.conditions
    forecast = state.current.forecast

    col_now, col_forecast = st.columns(2)

    # Current Weather
    with col_now:
        st.markdown(f"# {weather_icon(conditions.condition_code)}")
        st.subheader(format_location(conditions))
        st.markdown(f"## {format_temperature(conditions.temperature_c)}")
        st.write(conditions.condition_description.capitalize())

        metric_a, metric_b = st.columns(2)
        metric_a.metric("Feels Like", format_temperature(conditions.feels_like_c))
        metric_b.metric("Humidity", f"{conditions.humidity_pct}%")
        metric_a.metric("Wind", f"{conditions.wind_speed_ms} m/s")
        metric_b.metric("Pressure", f"{conditions.pressure_hpa} hPa")

    # 5-day forecast
    with col_forecast:
        st.subheader("5-Day Forecast")
        for day in daily_snapshots(forecast):
            col_day, col_temp, col_main = st.columns(3)
            col_day.write(weekday_label(day.timestamp))
            col_temp.write(format_temperature(day.temperature_c))
            col_main.write(day.condition_main)

    with st.expander("📋 Summary"):
        st.code(format_weather_summary(conditions), language=None)

st.divider()
st.caption("Data by OpenWeather API")
