"""Logging, metrics and tracing helpers shared by the haiku finder.

Loggers are thin :class:`logging.LoggerAdapter` wrappers that append bound
context as JSON. Metrics are Prometheus collectors and spans come from the
globally configured OpenTelemetry tracer provider (a no-op provider unless
the host application installs an SDK).
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from opentelemetry import trace
from prometheus_client import REGISTRY, Counter


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Adapter that renders structured context inline with messages."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        merged = dict(self.extra)
        merged.update(context)
        return StructuredLoggerAdapter(self.logger, merged)

    def process(self, msg: str, kwargs: Dict[str, Any]):
        event_context: Dict[str, Any] = dict(self.extra)
        provided = kwargs.pop("context", None)
        if isinstance(provided, dict):
            event_context.update(provided)
        if event_context:
            try:
                payload = json.dumps(event_context, sort_keys=True, default=str)
            except TypeError:
                payload = json.dumps({k: str(v) for k, v in event_context.items()})
            msg = f"{msg} | {payload}"
        return msg, kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a project logger with optional bound context."""

    return StructuredLoggerAdapter(logging.getLogger(name), context)


def create_counter(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> Counter:
    """Create a Prometheus counter, reusing it if already registered."""

    try:
        return Counter(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        # Duplicate registration happens when a module is imported twice.
        existing = REGISTRY._names_to_collectors.get(name)  # type: ignore[attr-defined]
        if existing is None:
            raise
        return existing


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
    """Start an OpenTelemetry span named ``name`` with ``attributes``."""

    tracer = trace.get_tracer("haiku_finder")
    with tracer.start_as_current_span(name) as span:
        if attributes:
            add_span_attributes(span, attributes)
        yield span


def add_span_attributes(span: Any, attributes: Dict[str, Any]) -> None:
    """Attach ``attributes`` to ``span`` if one is active."""

    if span is None:
        return
    for key, value in attributes.items():
        if not isinstance(key, str):
            continue
        span.set_attribute(key, value)


__all__ = [
    "StructuredLoggerAdapter",
    "get_logger",
    "create_counter",
    "start_span",
    "add_span_attributes",
]
