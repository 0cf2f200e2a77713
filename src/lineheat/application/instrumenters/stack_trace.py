"""Stack-trace instrumentation: every frame of a captured stack counts once.

Sampling-style ingestion. The capture point (a wrapper, a signal
handler, a periodic sampler) is outside this class; it only turns a
stack into counter increments through the resolver.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lineheat.domain.model.location_key import LocationKey
from lineheat.infrastructure.frames import basename

if TYPE_CHECKING:
    from traceback import StackSummary

    from lineheat.application.counters.store import CounterStore
    from lineheat.application.resolver import LocationResolver


class StackTraceInstrumenter:
    """Ingestion source fed by stack traces.

    Thread-safe: the resolver is read-only between reloads and the
    store is lock-guarded.
    """

    __slots__ = ("_resolver", "_store")

    def __init__(self, store: CounterStore, resolver: LocationResolver) -> None:
        self._store = store
        self._resolver = resolver

    @property
    def store(self) -> CounterStore:
        return self._store

    def on_line_executed(self, file: str, line: int) -> None:
        """Count one execution; file normalized to its last path component."""
        self._store.increment(LocationKey(file=basename(file), line=line))

    def record_trace(self, text: str) -> int:
        """Count every recognizable frame of a textual stack trace.

        Non-frame lines are skipped silently.

        Returns:
            Number of frames counted.
        """
        keys = self._resolver.resolve_stack(text)
        for key in keys:
            self._store.increment(key)
        return len(keys)

    def record_stack(self, stack: StackSummary) -> int:
        """Count every frame of a traceback.StackSummary.

        Frames without a line number are skipped.

        Returns:
            Number of frames counted.
        """
        recorded = 0
        for frame in stack:
            if not frame.lineno or frame.lineno < 1:
                continue
            self.on_line_executed(frame.filename, frame.lineno)
            recorded += 1
        return recorded
