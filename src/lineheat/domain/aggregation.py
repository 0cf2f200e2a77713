"""Aggregation rules: flat counts -> snapshot and stats.

Pure functions over already-copied counts. Callers are responsible
for taking the copy under whatever lock protects the source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lineheat.domain.model.heatmap import HeatmapSnapshot, HotLine, StatsResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from lineheat.domain.model.location_key import LocationKey


def merge_counts(sources: Iterable[Mapping[LocationKey, int]]) -> dict[LocationKey, int]:
    """Sum counts per identical key across ingestion sources.

    A location tracked by several sources reports the combined total.
    """
    merged: dict[LocationKey, int] = {}
    for counts in sources:
        for key, count in counts.items():
            merged[key] = merged.get(key, 0) + count
    return merged


def build_snapshot(counts: Mapping[LocationKey, int]) -> HeatmapSnapshot:
    """Group flat counts by file."""
    return HeatmapSnapshot.from_counts(counts)


def rank_hottest(counts: Mapping[LocationKey, int], top_n: int) -> tuple[HotLine, ...]:
    """Highest counts first, at most top_n entries.

    Ties are ordered by file, then line (ascending).

    Raises:
        ValueError: If top_n is negative.
    """
    if top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0].file, item[0].line))
    return tuple(HotLine(key=key, count=count) for key, count in ranked[:top_n])


def build_stats(counts: Mapping[LocationKey, int], top_n: int) -> StatsResult:
    """Build StatsResult from one consistent copy of counts.

    totals and hottest are derived from the same snapshot, so
    total_lines always equals the number of keys returned.
    """
    snapshot = build_snapshot(counts)
    return StatsResult(
        total_lines=snapshot.total_lines,
        total_executions=snapshot.total_executions,
        hottest=rank_hottest(counts, top_n),
        heatmap=snapshot,
    )
