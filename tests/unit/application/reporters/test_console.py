"""Tests for application/reporters/console.py."""

from __future__ import annotations

import pytest

from lineheat.application.reporters.console import ConsoleConfig, ConsoleReporter
from lineheat.domain.aggregation import build_stats
from lineheat.domain.model.heatmap import StatsResult
from tests.factories import make_key


@pytest.fixture
def stats() -> StatsResult:
    """100/10/1 executions on app.ts lines 10/20/30 plus util.ts:5, top 2."""
    return build_stats(
        {make_key(10): 100, make_key(20): 10, make_key(30): 1, make_key(5, file="util.ts"): 2},
        top_n=2,
    )


def plain(*, show_heatmap: bool = True) -> ConsoleReporter:
    """Reporter without ANSI codes."""
    return ConsoleReporter(ConsoleConfig(show_heatmap=show_heatmap, color=False))


class TestConsoleReporter:
    """Tests for ConsoleReporter output content."""

    def test_header_totals(self, stats: StatsResult) -> None:
        """Header shows both totals."""
        output = plain().report(stats)
        assert "HEATMAP STATS" in output
        assert "Total lines tracked: 4" in output
        assert "Total executions: 113" in output

    def test_hottest_section(self, stats: StatsResult) -> None:
        """Hottest lines are listed in rank order."""
        output = plain().report(stats)
        assert "TOP 2 HOTTEST LINES" in output
        assert "app.ts:10" in output
        assert output.index("app.ts:10") < output.index("app.ts:20")

    def test_heatmap_section_lists_files(self, stats: StatsResult) -> None:
        """Per-file section lists every file with its line count."""
        output = plain().report(stats)
        assert "app.ts (3 lines)" in output
        assert "util.ts (1 lines)" in output

    def test_heatmap_section_hidden(self, stats: StatsResult) -> None:
        """show_heatmap=False omits the per-file section."""
        output = plain(show_heatmap=False).report(stats)
        assert "util.ts" not in output

    def test_empty_stats(self) -> None:
        """Empty stats render totals without a hottest table."""
        output = plain().report(StatsResult.empty())
        assert "Total executions: 0" in output
        assert "HOTTEST" not in output

    def test_no_ansi_without_color(self, stats: StatsResult) -> None:
        """color=False emits no escape sequences."""
        assert "\x1b[" not in plain().report(stats)


class TestConsoleConfig:
    """Tests for ConsoleConfig validation."""

    def test_negative_max_lines_raises(self) -> None:
        """Negative max_lines_per_file raises ValueError."""
        with pytest.raises(ValueError, match="max_lines_per_file"):
            ConsoleConfig(max_lines_per_file=-1)

    def test_zero_width_raises(self) -> None:
        """Zero width raises ValueError."""
        with pytest.raises(ValueError, match="width must be > 0"):
            ConsoleConfig(width=0)
