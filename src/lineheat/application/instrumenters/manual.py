"""Manual instrumentation: explicit track_line() calls at call sites."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lineheat.domain.model.location_key import LocationKey

if TYPE_CHECKING:
    from lineheat.application.counters.store import CounterStore


class ManualInstrumenter:
    """Ingestion source for hand-placed tracking calls.

    The instrumentation layer is trusted: only types are validated.
    Thread-safe (delegates to CounterStore).
    """

    __slots__ = ("_store",)

    def __init__(self, store: CounterStore) -> None:
        self._store = store

    @property
    def store(self) -> CounterStore:
        return self._store

    def on_line_executed(self, file: str, line: int) -> None:
        """Count one execution of file:line.

        Raises:
            TypeError: file is not str or line is not int.
            ValueError: line < 1.
        """
        self._store.increment(LocationKey(file=file, line=line))

    track_line = on_line_executed
