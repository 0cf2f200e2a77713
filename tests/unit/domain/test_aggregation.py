"""Tests for domain/aggregation.py.

Tests:
- merge_counts sums identical keys across sources
- rank_hottest ordering, tie-break and length limit
- build_stats totals consistent with the heatmap
"""

from __future__ import annotations

import pytest

from lineheat.domain.aggregation import build_stats, merge_counts, rank_hottest
from tests.factories import make_key


class TestMergeCounts:
    """Tests for merge_counts."""

    def test_same_key_summed(self) -> None:
        """One key in two sources reports the sum."""
        merged = merge_counts([{make_key(10): 3}, {make_key(10): 2}])
        assert merged == {make_key(10): 5}

    def test_disjoint_keys_kept(self) -> None:
        """Keys from different sources are all kept."""
        merged = merge_counts([{make_key(1): 1}, {make_key(2): 2}])
        assert merged == {make_key(1): 1, make_key(2): 2}

    def test_no_sources(self) -> None:
        """No sources merge to nothing."""
        assert merge_counts([]) == {}


class TestRankHottest:
    """Tests for rank_hottest."""

    def test_descending_by_count(self) -> None:
        """Highest counts come first."""
        hottest = rank_hottest({make_key(1): 1, make_key(2): 50, make_key(3): 7}, top_n=10)
        assert [h.count for h in hottest] == [50, 7, 1]

    def test_limited_to_top_n(self) -> None:
        """At most top_n entries."""
        counts = {make_key(line): line for line in range(1, 30)}
        assert len(rank_hottest(counts, top_n=5)) == 5

    def test_zero_top_n(self) -> None:
        """top_n=0 gives an empty ranking."""
        assert rank_hottest({make_key(1): 1}, top_n=0) == ()

    def test_ties_ordered_by_file_then_line(self) -> None:
        """Equal counts are ordered by file, then line."""
        counts = {
            make_key(9, file="b.ts"): 4,
            make_key(3, file="a.ts"): 4,
            make_key(1, file="a.ts"): 4,
        }
        keys = [str(h.key) for h in rank_hottest(counts, top_n=3)]
        assert keys == ["a.ts:1", "a.ts:3", "b.ts:9"]

    def test_negative_top_n_raises(self) -> None:
        """Negative top_n raises ValueError."""
        with pytest.raises(ValueError, match="top_n must be >= 0"):
            rank_hottest({}, top_n=-1)


class TestBuildStats:
    """Tests for build_stats."""

    def test_scenario_totals_and_hottest(self) -> None:
        """100/10/1 executions with top_n=2."""
        counts = {make_key(10): 100, make_key(20): 10, make_key(30): 1}
        stats = build_stats(counts, top_n=2)
        assert stats.total_lines == 3
        assert stats.total_executions == 111
        assert [(str(h.key), h.count) for h in stats.hottest] == [
            ("app.ts:10", 100),
            ("app.ts:20", 10),
        ]
        assert stats.heatmap.to_dict() == {"app.ts": {"10": 100, "20": 10, "30": 1}}

    def test_empty(self) -> None:
        """No counts give empty stats."""
        stats = build_stats({}, top_n=10)
        assert stats.total_lines == 0
        assert stats.total_executions == 0
        assert stats.hottest == ()
