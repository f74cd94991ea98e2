"""Request telemetry.

The client opens one ``client.request`` scope per API call and counts
transport failures inside it. Scopes nest through a context variable, so
concurrent requests on the same event loop keep separate paths.

Telemetry is off unless ``OPENAI_TELEMETRY=1`` is set when the context is
created and at least one reporter is passed. Otherwise every call goes to a
shared no-op context.
"""

from collections import defaultdict, deque
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
import logging
import os
import time
from types import TracebackType
from typing import Any, NamedTuple, Protocol, Self, runtime_checkable

log = logging.getLogger(__name__)

_scope_path_var: ContextVar[tuple[str, ...]] = ContextVar("scope_path", default=())


def telemetry_enabled() -> bool:
    return os.getenv("OPENAI_TELEMETRY") == "1"


@runtime_checkable
class TelemetryReporter(Protocol):
    """Receives scope timings and metrics."""

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None: ...
    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None: ...


@dataclass(frozen=True, slots=True)
class _NoOpTelemetryContext:
    """Accepts every telemetry call and records nothing."""

    def __call__(self, name: str, **metadata: Any) -> Self:
        return self

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        return None

    def metric(self, name: str, value: Any, **metadata: Any) -> None:
        pass

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        pass


def _position(path: tuple[str, ...]) -> dict[str, Any]:
    return {"depth": len(path), "parent_scope": ".".join(path) or None}


class _EnabledTelemetryContext:
    """Times scopes and forwards timings and metrics to the reporters."""

    __slots__ = ("reporters",)

    def __init__(self, *reporters: TelemetryReporter):
        self.reporters = reporters

    def __call__(
        self, name: str, **metadata: Any
    ) -> AbstractContextManager["_EnabledTelemetryContext"]:
        if not name or not isinstance(name, str):
            raise ValueError("Scope name must be a non-empty string")
        return self._scope(name, metadata)

    @contextmanager
    def _scope(
        self, name: str, metadata: dict[str, Any]
    ) -> Iterator["_EnabledTelemetryContext"]:
        parent = _scope_path_var.get()
        token = _scope_path_var.set((*parent, name))
        started = time.perf_counter()
        try:
            yield self
        finally:
            elapsed = time.perf_counter() - started
            _scope_path_var.reset(token)
            self._emit(
                "record_timing", ".".join((*parent, name)), elapsed,
                {**_position(parent), **metadata},
            )

    def metric(self, name: str, value: Any, **metadata: Any) -> None:
        """Record a value under the current scope path."""
        path = _scope_path_var.get()
        self._emit(
            "record_metric", ".".join((*path, name)), value,
            {**_position(path), **metadata},
        )

    def count(self, name: str, increment: int = 1, **metadata: Any) -> None:
        self.metric(name, increment, metric_type="counter", **metadata)

    def _emit(self, method: str, scope: str, value: Any, metadata: dict[str, Any]) -> None:
        # A failing reporter must not fail the request being measured.
        for reporter in self.reporters:
            try:
                getattr(reporter, method)(scope, value, **metadata)
            except Exception:
                log.error(
                    "Telemetry reporter '%s' failed on %s",
                    type(reporter).__name__,
                    scope,
                    exc_info=True,
                )


_NO_OP_SINGLETON = _NoOpTelemetryContext()

type TelemetryContextProtocol = _EnabledTelemetryContext | _NoOpTelemetryContext


def TelemetryContext(*reporters: TelemetryReporter) -> TelemetryContextProtocol:  # noqa: N802
    """Return an enabled context, or the shared no-op one when telemetry is off."""
    if reporters and telemetry_enabled():
        return _EnabledTelemetryContext(*reporters)
    return _NO_OP_SINGLETON


class Sample(NamedTuple):
    value: Any
    metadata: dict[str, Any]


class InMemoryReporter:
    """Keeps the most recent samples per scope, for development and tests."""

    def __init__(self, max_entries_per_scope: int = 1000):
        self.timings: defaultdict[str, deque[Sample]] = defaultdict(
            lambda: deque(maxlen=max_entries_per_scope)
        )
        self.metrics: defaultdict[str, deque[Sample]] = defaultdict(
            lambda: deque(maxlen=max_entries_per_scope)
        )

    def record_timing(self, scope: str, duration: float, **metadata: Any) -> None:
        self.timings[scope].append(Sample(duration, metadata))

    def record_metric(self, scope: str, value: Any, **metadata: Any) -> None:
        self.metrics[scope].append(Sample(value, metadata))

    def get_report(self) -> str:
        """Summarize request timings and metric totals per scope."""
        lines = ["=== Telemetry Report ==="]
        for scope, samples in sorted(self.timings.items()):
            durations = [sample.value for sample in samples]
            lines.append(
                f"{scope:<40} | Calls: {len(durations):<4} | "
                f"Avg: {sum(durations) / len(durations):.4f}s | "
                f"Max: {max(durations):.4f}s"
            )
        for scope, samples in sorted(self.metrics.items()):
            total = sum(s.value for s in samples if isinstance(s.value, int | float))
            lines.append(f"{scope:<40} | Count: {len(samples):<4} | Total: {total:,.0f}")
        return "\n".join(lines)
