"""OpenTelemetry instrumentation for the weather lookup client.

Spans are exported to a Phoenix collector once init_tracing() has run.
Before that, the decorators below record into the no-op tracer.
"""

import functools
import inspect
import json
import os
from typing import Any, Callable, TypeVar

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
from pydantic import BaseModel

# Type variable for preserving function signatures
F = TypeVar("F", bound=Callable[..., Any])

TRACER_NAME = "weather-lookup"

# Global tracer instance
_tracer: trace.Tracer | None = None


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def init_tracing(
    project_name: str = TRACER_NAME,
    endpoint: str | None = None,
) -> None:
    """Register a Phoenix tracer provider and route our spans to it.

    Args:
        project_name: Name of the project in Phoenix dashboard.
        endpoint: Phoenix collector endpoint. Defaults to
            PHOENIX_COLLECTOR_ENDPOINT, then the local Phoenix server.
    """
    from phoenix.otel import register

    collector_endpoint = endpoint or os.getenv(
        "PHOENIX_COLLECTOR_ENDPOINT",
        "http://localhost:6006/v1/traces"
    )

    tracer_provider = register(
        project_name=project_name,
        endpoint=collector_endpoint,
    )

    global _tracer
    _tracer = trace.get_tracer(TRACER_NAME, tracer_provider=tracer_provider)

    print(f"Phoenix tracing initialized for project: {project_name}")
    print(f"Sending traces to: {collector_endpoint}")


def _serialize_value(value: Any) -> str:
    """Serialize a value to string for span attributes."""
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    try:
        if isinstance(value, (dict, list, tuple)):
            return json.dumps(value, ensure_ascii=False, default=str)
        return str(value)
    except (TypeError, ValueError):
        return str(value)


def _record_error(span: trace.Span, error: Exception) -> None:
    span.set_status(Status(StatusCode.ERROR, str(error)))
    span.set_attribute("error.type", type(error).__name__)
    span.set_attribute("error.message", str(error))


def trace_tool(
    name: str | None = None,
    capture_input: bool = True,
    capture_output: bool = True,
) -> Callable[[F], F]:
    """Decorator to trace a provider call or store operation.

    Args:
        name: Custom span name. Defaults to ``tool.<function name>``.
        capture_input: Whether to capture input arguments. Turn this off
            when arguments carry credentials.
        capture_output: Whether to capture return value. Defaults to True.

    Returns:
        Decorated function with tracing.

    Example:
        @trace_tool(name="openweather.current", capture_input=False)
        async def fetch_current_conditions(client, city, params):
            ...
    """
    def decorator(func: F) -> F:
        span_name = name or f"tool.{func.__name__}"

        def _start(span: trace.Span, kind: str, args: tuple, kwargs: dict) -> None:
            span.set_attribute("tool.name", func.__name__)
            span.set_attribute("tool.type", kind)
            if capture_input:
                if args:
                    span.set_attribute("input.args", _serialize_value(args))
                if kwargs:
                    span.set_attribute("input.kwargs", _serialize_value(kwargs))

        def _finish(span: trace.Span, result: Any) -> None:
            if capture_output and result is not None:
                span.set_attribute("output.result", _serialize_value(result))
            span.set_status(Status(StatusCode.OK))

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer().start_as_current_span(span_name) as span:
                _start(span, "sync", args, kwargs)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    _record_error(span, e)
                    raise
                _finish(span, result)
                return result

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer().start_as_current_span(span_name) as span:
                _start(span, "async", args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _record_error(span, e)
                    raise
                _finish(span, result)
                return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator


def trace_span(name: str) -> Callable[[F], F]:
    """Simple decorator to create a named span around a function.

    Args:
        name: Span name.

    Returns:
        Decorated function with tracing.

    Example:
        @trace_span("lookup.submit")
        def submit(self, city_raw: str) -> LookupResult | None:
            ...
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer().start_as_current_span(name) as span:
                span.set_attribute("function.name", func.__name__)
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            with get_tracer().start_as_current_span(name) as span:
                span.set_attribute("function.name", func.__name__)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    raise
                span.set_status(Status(StatusCode.OK))
                return result

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore
        return sync_wrapper  # type: ignore

    return decorator
