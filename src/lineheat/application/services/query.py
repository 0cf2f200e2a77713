"""Heatmap query service: merged reads and reset over ingestion sources."""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING

from lineheat.domain.aggregation import build_snapshot, build_stats, merge_counts
from lineheat.domain.model.configuration import DEFAULT_TOP_N
from lineheat.domain.model.heatmap import HealthStatus, ResetAck

if TYPE_CHECKING:
    from collections.abc import Mapping

    from lineheat.application.counters.store import CounterStore
    from lineheat.domain.model.heatmap import HeatmapSnapshot, StatsResult
    from lineheat.domain.model.location_key import LocationKey


class HeatmapQueryService:
    """Serves heatmap, stats and reset over named ingestion sources.

    Every read sums counts per identical LocationKey across sources,
    so a location tracked by two sources reports one combined entry.

    Thread Safety:
      - _lock serializes reset() against merged reads, so no result
        straddles a reset of some sources but not others
      - increments never take _lock; they go straight to the stores
    """

    __slots__ = ("_default_top_n", "_lock", "_sources")

    def __init__(
        self,
        sources: Mapping[str, CounterStore] | None = None,
        *,
        default_top_n: int = DEFAULT_TOP_N,
    ) -> None:
        """Initialize service.

        Args:
            sources: Source name -> store. None = no sources yet.
            default_top_n: Hottest-lines length when get_stats() gets none.

        Raises:
            ValueError: If default_top_n is negative.
        """
        if default_top_n < 0:
            raise ValueError(f"default_top_n must be >= 0, got {default_top_n}")

        self._sources: dict[str, CounterStore] = dict(sources or {})
        self._default_top_n = default_top_n
        self._lock = threading.Lock()

    @property
    def sources(self) -> Mapping[str, CounterStore]:
        """Read-only copy of attached sources."""
        with self._lock:
            return MappingProxyType(dict(self._sources))

    def attach(self, name: str, store: CounterStore) -> None:
        """Attach (or replace) a named source."""
        if not name:
            raise ValueError("name must be non-empty string")
        with self._lock:
            self._sources[name] = store

    def detach(self, name: str) -> CounterStore | None:
        """Detach a named source. Returns it, or None if absent."""
        with self._lock:
            return self._sources.pop(name, None)

    def is_attached(self, name: str) -> bool:
        with self._lock:
            return name in self._sources

    def merged_counts(self) -> dict[LocationKey, int]:
        """Counts summed across all sources. Thread-safe."""
        with self._lock:
            return merge_counts(store.counts() for store in self._sources.values())

    def get_heatmap(self) -> HeatmapSnapshot:
        """Merged file -> line -> count snapshot."""
        return build_snapshot(self.merged_counts())

    def get_stats(self, top_n: int | None = None) -> StatsResult:
        """Merged totals, hottest lines and heatmap.

        Args:
            top_n: Hottest-lines length. None = configured default.

        Raises:
            TypeError: If top_n is not an int.
            ValueError: If top_n is negative.
        """
        if top_n is None:
            top_n = self._default_top_n
        if isinstance(top_n, bool) or not isinstance(top_n, int):
            raise TypeError(f"top_n must be int, got {type(top_n).__name__}")
        return build_stats(self.merged_counts(), top_n)

    def reset(self) -> ResetAck:
        """Clear every attached source."""
        with self._lock:
            for store in self._sources.values():
                store.reset()
        return ResetAck()

    def health(self) -> HealthStatus:
        """Liveness probe. No state access."""
        return HealthStatus()
