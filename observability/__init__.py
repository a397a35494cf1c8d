"""Observability module for the weather lookup client.

Uses OpenTelemetry spans exported to Arize Phoenix.
"""

from .instrumentation import init_tracing, trace_tool, trace_span

__all__ = ["init_tracing", "trace_tool", "trace_span"]
