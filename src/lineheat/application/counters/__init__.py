"""Counter storage: the engine's only shared mutable state."""

from lineheat.application.counters.store import MAX_COUNT, CounterStore

__all__ = ["MAX_COUNT", "CounterStore"]
