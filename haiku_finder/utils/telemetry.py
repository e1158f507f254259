"""Per-run telemetry for haiku scans: phase timings, counters and metadata."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


class StructuredTelemetry:
    """Collects timings, counters and metadata for the current scan run."""

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        max_events: int = 64,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self._time_fn = time_fn or time.perf_counter
        self._max_events = max(1, int(max_events))
        self._lock = threading.RLock()
        self._run_id = 0
        self._listeners: list[TelemetryListener] = list(listeners or [])
        self._reset_state()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _reset_state(self) -> None:
        self._timings: Dict[str, Dict[str, float]] = {}
        self._counters: Dict[str, float] = {}
        self._events: list[Dict[str, Any]] = []
        self._metadata: Dict[str, Any] = {}
        self._run_name: Optional[str] = None

    def _notify_listeners(self, event_type: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            listeners: Tuple[TelemetryListener, ...] = tuple(self._listeners)
        for listener in listeners:
            listener(event_type, dict(payload))

    def now(self) -> float:
        return float(self._time_fn())

    def start_run(self, name: str) -> int:
        """Discard the previous run's data and start recording a new one."""

        with self._lock:
            self._run_id += 1
            self._reset_state()
            self._run_name = name
            self._metadata["run_name"] = name
            run_id = self._run_id

        self._notify_listeners("run_started", {"run_id": run_id, "name": name})
        return run_id

    def record_timing(
        self,
        name: str,
        duration: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        duration = max(0.0, float(duration))
        payload = dict(metadata) if metadata else {}
        with self._lock:
            bucket = self._timings.setdefault(
                name, {"count": 0, "total": 0.0, "min": duration, "max": duration}
            )
            bucket["count"] += 1
            bucket["total"] += duration
            bucket["min"] = min(bucket["min"], duration)
            bucket["max"] = max(bucket["max"], duration)

            event: Dict[str, Any] = {"name": name, "duration": duration}
            if payload:
                event["metadata"] = payload
            self._events.append(event)
            if len(self._events) > self._max_events:
                self._events = self._events[-self._max_events :]

        self._notify_listeners(
            "timing", {"name": name, "duration": duration, "metadata": payload}
        )

    @contextmanager
    def timer(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Iterator[Dict[str, Any]]:
        """Time the enclosed block; callers may add metadata to the yielded dict."""

        payload: Dict[str, Any] = dict(metadata) if metadata else {}
        start = self.now()
        try:
            yield payload
        finally:
            self.record_timing(name, self.now() - start, payload)

    def increment(self, name: str, amount: float = 1.0) -> None:
        value = float(amount)
        with self._lock:
            self._counters[name] = self._counters.get(name, 0.0) + value
            current_value = self._counters[name]

        self._notify_listeners(
            "counter", {"name": name, "delta": value, "value": current_value}
        )

    def annotate(self, key: str, value: Any) -> None:
        with self._lock:
            self._metadata[key] = value

        self._notify_listeners("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        """Return a deep copy of everything recorded for the current run."""

        with self._lock:
            return deepcopy(
                {
                    "run_id": self._run_id,
                    "name": self._run_name,
                    "timings": self._timings,
                    "counters": self._counters,
                    "events": self._events,
                    "metadata": self._metadata,
                }
            )

    def add_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners.append(listener)


class TelemetryLogger:
    """Listener that writes telemetry events to the project logger."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._level = level

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(self._level):
            return

        context = {"telemetry.event": event_type}
        context.update({str(key): value for key, value in payload.items()})
        name = payload.get("name") or payload.get("key") or payload.get("run_id") or "event"
        self._logger.log(self._level, f"Telemetry {event_type}: {name}", context=context)


__all__ = ["StructuredTelemetry", "TelemetryLogger", "TelemetryListener"]
