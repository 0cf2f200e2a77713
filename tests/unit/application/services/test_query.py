"""Tests for application/services/query.py."""

from __future__ import annotations

import pytest

from lineheat.application.counters.store import CounterStore
from lineheat.application.services.query import HeatmapQueryService
from tests.factories import make_key, make_store


class TestMergedReads:
    """Tests for reads merged across sources."""

    def test_same_key_across_sources_summed(self) -> None:
        """3 manual + 2 auto on one key report a single 5."""
        service = HeatmapQueryService(
            {"manual": make_store({make_key(10): 3}), "auto": make_store({make_key(10): 2})}
        )
        assert service.get_heatmap().to_dict() == {"app.ts": {"10": 5}}
        stats = service.get_stats()
        assert stats.total_lines == 1
        assert stats.total_executions == 5

    def test_no_sources_is_empty(self) -> None:
        """Service without sources reports nothing."""
        service = HeatmapQueryService()
        assert service.get_heatmap().to_dict() == {}
        assert service.get_stats().total_lines == 0

    def test_default_top_n_applied(self) -> None:
        """top_n omitted uses 10."""
        store = make_store({make_key(line): line for line in range(1, 16)})
        service = HeatmapQueryService({"manual": store})
        assert len(service.get_stats().hottest) == 10

    def test_configured_default_top_n(self) -> None:
        """default_top_n overrides 10."""
        store = make_store({make_key(line): line for line in range(1, 6)})
        service = HeatmapQueryService({"manual": store}, default_top_n=2)
        assert [h.count for h in service.get_stats().hottest] == [5, 4]

    def test_explicit_top_n(self) -> None:
        """Explicit top_n limits the ranking."""
        store = make_store({make_key(10): 100, make_key(20): 10, make_key(30): 1})
        service = HeatmapQueryService({"manual": store})
        stats = service.get_stats(top_n=2)
        assert [(str(h.key), h.count) for h in stats.hottest] == [
            ("app.ts:10", 100),
            ("app.ts:20", 10),
        ]

    def test_top_n_zero(self) -> None:
        """top_n=0 keeps totals and heatmap."""
        service = HeatmapQueryService({"manual": make_store({make_key(1): 1})})
        stats = service.get_stats(top_n=0)
        assert stats.hottest == ()
        assert stats.total_lines == 1

    def test_negative_top_n_raises(self) -> None:
        """Negative top_n raises ValueError."""
        with pytest.raises(ValueError, match="top_n must be >= 0"):
            HeatmapQueryService().get_stats(top_n=-1)

    @pytest.mark.parametrize("top_n", ["5", 2.0, True])
    def test_non_int_top_n_raises(self, top_n: object) -> None:
        """Non-int top_n raises TypeError."""
        with pytest.raises(TypeError, match="top_n must be int"):
            HeatmapQueryService().get_stats(top_n=top_n)  # type: ignore[arg-type]

    def test_negative_default_raises(self) -> None:
        """Negative default_top_n raises ValueError."""
        with pytest.raises(ValueError, match="default_top_n"):
            HeatmapQueryService(default_top_n=-1)


class TestSources:
    """Tests for attach and detach."""

    def test_attach_and_detach(self) -> None:
        """Attached sources count; detached ones stop counting."""
        service = HeatmapQueryService()
        store = make_store({make_key(1): 1})

        service.attach("auto", store)
        assert service.is_attached("auto")
        assert service.get_stats().total_executions == 1

        assert service.detach("auto") is store
        assert not service.is_attached("auto")
        assert service.get_stats().total_executions == 0

    def test_detach_missing_is_none(self) -> None:
        """Detaching an unknown source returns None."""
        assert HeatmapQueryService().detach("auto") is None

    def test_attach_empty_name_raises(self) -> None:
        """Sources must be named."""
        with pytest.raises(ValueError, match="name must be non-empty"):
            HeatmapQueryService().attach("", CounterStore())

    def test_sources_is_read_only_copy(self) -> None:
        """sources is a snapshot and rejects writes."""
        service = HeatmapQueryService({"manual": CounterStore()})
        sources = service.sources
        service.attach("auto", CounterStore())
        assert set(sources) == {"manual"}
        with pytest.raises(TypeError):
            sources["x"] = CounterStore()  # type: ignore[index]


class TestResetAndHealth:
    """Tests for reset and health."""

    def test_reset_clears_all_sources(self) -> None:
        """Reset empties every attached store."""
        manual = make_store({make_key(1): 3})
        auto = make_store({make_key(2): 4})
        service = HeatmapQueryService({"manual": manual, "auto": auto})

        ack = service.reset()

        assert ack.message == "Heatmap reset"
        assert service.get_heatmap().to_dict() == {}
        assert len(manual) == 0
        assert len(auto) == 0

    def test_reset_is_idempotent(self) -> None:
        """Two resets in a row leave the same empty state."""
        service = HeatmapQueryService({"manual": make_store({make_key(1): 3})})
        service.reset()
        service.reset()
        assert service.get_stats().total_executions == 0

    def test_health(self) -> None:
        """Health is ok regardless of state."""
        assert HeatmapQueryService().health().status == "ok"
