"""Concurrency-safe execution counter store.

The only shared mutable state of the engine. All mutation goes
through increment() and reset().

Locking:
    - shard locks: one per shard, increment() holds exactly one
    - view lock: serializes reset() against counts()/snapshot()/stats()
    - reset() takes the view lock, then every shard lock in shard order
    Lock order is always view -> shards ascending, so no deadlock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from lineheat.domain.aggregation import build_snapshot, build_stats
from lineheat.domain.model.configuration import DEFAULT_SHARD_COUNT, DEFAULT_TOP_N
from lineheat.domain.model.location_key import LocationKey

if TYPE_CHECKING:
    from lineheat.domain.model.heatmap import HeatmapSnapshot, StatsResult

# 64-bit unsigned ceiling; counts saturate instead of growing past it
MAX_COUNT: Final = 2**64 - 1


@dataclass(slots=True)
class _Shard:
    """One lock-guarded slice of the key space."""

    counts: dict[LocationKey, int] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)


class CounterStore:
    """Thread-safe mapping LocationKey -> monotonically increasing count.

    Keys are created lazily on first increment and live until reset().
    Reads return copies; callers never see the internal dicts.

    Contracts:
        - counts are never negative and only increase between resets
        - concurrent increments of one key never lose updates
        - reset() is indivisible w.r.t. increment() and reads
    """

    __slots__ = ("_shards", "_view_lock")

    def __init__(self, shard_count: int = DEFAULT_SHARD_COUNT) -> None:
        """Initialize empty store.

        Args:
            shard_count: Number of independent lock shards (>= 1).
                1 = single global lock, lowest throughput under contention.

        Raises:
            ValueError: If shard_count < 1.
        """
        if shard_count < 1:
            raise ValueError(f"shard_count must be >= 1, got {shard_count}")

        self._shards = tuple(_Shard() for _ in range(shard_count))
        self._view_lock = threading.Lock()

    @property
    def shard_count(self) -> int:
        """Number of lock shards."""
        return len(self._shards)

    def _shard_for(self, key: LocationKey) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    def increment(self, key: LocationKey) -> None:
        """Add 1 to key's count, creating it with 1 if absent. Thread-safe."""
        shard = self._shard_for(key)
        with shard.lock:
            current = shard.counts.get(key, 0)
            if current < MAX_COUNT:
                shard.counts[key] = current + 1

    def get(self, key: LocationKey) -> int:
        """Current count for key, 0 if absent. Thread-safe."""
        shard = self._shard_for(key)
        with shard.lock:
            return shard.counts.get(key, 0)

    def counts(self) -> dict[LocationKey, int]:
        """Flat copy of all counts. Thread-safe.

        Each entry holds a value it had at some instant during the call.
        Never observes a half-applied reset.
        """
        with self._view_lock:
            return self._copy_shards()

    def snapshot(self) -> HeatmapSnapshot:
        """Grouped point-in-time copy. Thread-safe."""
        return build_snapshot(self.counts())

    def stats(self, top_n: int = DEFAULT_TOP_N) -> StatsResult:
        """Totals and hottest lines from one copy. Thread-safe.

        Raises:
            ValueError: If top_n is negative.
        """
        return build_stats(self.counts(), top_n)

    def reset(self) -> None:
        """Discard all entries atomically. Thread-safe.

        Increments racing with reset() land either before it (and are
        discarded) or after it (and count in the fresh state).
        """
        with self._view_lock:
            for shard in self._shards:
                shard.lock.acquire()
            try:
                for shard in self._shards:
                    shard.counts = {}
            finally:
                for shard in reversed(self._shards):
                    shard.lock.release()

    def _copy_shards(self) -> dict[LocationKey, int]:
        """Copy every shard under its own lock. Caller holds view lock."""
        merged: dict[LocationKey, int] = {}
        for shard in self._shards:
            with shard.lock:
                merged.update(shard.counts)
        return merged

    def __len__(self) -> int:
        """Number of distinct keys. Thread-safe."""
        with self._view_lock:
            total = 0
            for shard in self._shards:
                with shard.lock:
                    total += len(shard.counts)
            return total

    def __contains__(self, key: object) -> bool:
        """Check if key has been incremented since last reset."""
        if not isinstance(key, LocationKey):
            return False
        return self.get(key) > 0
