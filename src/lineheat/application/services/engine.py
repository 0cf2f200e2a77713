"""HeatmapEngine: composition root wiring stores, resolver and instrumenters.

One explicit instance per profiled process. Nothing here is global:
call sites receive the engine (or one of its instrumenters) explicitly.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Final

from lineheat.application.counters.store import CounterStore
from lineheat.application.instrumenters.line_monitor import LineMonitor
from lineheat.application.instrumenters.manual import ManualInstrumenter
from lineheat.application.instrumenters.stack_trace import StackTraceInstrumenter
from lineheat.application.resolver import LocationResolver
from lineheat.application.services.query import HeatmapQueryService
from lineheat.domain.model.configuration import EngineConfig
from lineheat.domain.model.heatmap import ModeInfo, ToggleResult
from lineheat.infrastructure.sourcemaps.loader import LoadReport

if TYPE_CHECKING:
    from pathlib import Path
    from traceback import StackSummary

    from lineheat.domain.model.heatmap import HealthStatus, HeatmapSnapshot, ResetAck, StatsResult

logger = logging.getLogger(__name__)

MANUAL_SOURCE: Final = "manual"
AUTO_SOURCE: Final = "auto"


class HeatmapEngine:
    """Execution heatmap engine.

    Sources:
      - manual: track_line() calls, always attached
      - auto: stack traces and LineMonitor, attached while enabled

    Usage:
        with HeatmapEngine(EngineConfig(base_dir=Path("src"))) as engine:
            engine.set_auto_instrument(True)
            run_workload()
            stats = engine.get_stats(top_n=20)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        """Initialize engine and load source maps if configured.

        Args:
            config: Engine configuration. Uses defaults if None.
        """
        self._config = config or EngineConfig()
        self._toggle_lock = threading.Lock()

        self._resolver = LocationResolver()
        self._manual = ManualInstrumenter(CounterStore(self._config.shard_count))
        self._query = HeatmapQueryService(
            {MANUAL_SOURCE: self._manual.store},
            default_top_n=self._config.default_top_n,
        )
        self._auto: StackTraceInstrumenter | None = None
        self._monitor: LineMonitor | None = None

        if self._config.source_map_root is not None:
            self.load_source_maps(self._config.source_map_root)

        if self._config.auto_instrument:
            self.set_auto_instrument(True)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def resolver(self) -> LocationResolver:
        return self._resolver

    @property
    def query(self) -> HeatmapQueryService:
        return self._query

    @property
    def manual(self) -> ManualInstrumenter:
        return self._manual

    @property
    def auto(self) -> StackTraceInstrumenter | None:
        """Automatic ingestion source, None while disabled."""
        return self._auto

    # =========================================================================
    # Ingestion
    # =========================================================================

    def track_line(self, file: str, line: int) -> None:
        """Count one execution of file:line (manual source)."""
        self._manual.on_line_executed(file, line)

    def record_trace(self, text: str) -> int:
        """Count every frame of a stack trace (auto source).

        Returns:
            Number of frames counted, 0 while auto-instrumentation is off.
        """
        auto = self._auto
        if auto is None:
            return 0
        return auto.record_trace(text)

    def record_stack(self, stack: StackSummary) -> int:
        """Count every frame of a traceback.StackSummary (auto source)."""
        auto = self._auto
        if auto is None:
            return 0
        return auto.record_stack(stack)

    def load_source_maps(self, root: Path) -> LoadReport:
        """Scan root for source maps; best-effort, never raises per file."""
        if not root.is_dir():
            logger.warning("Source map root is not a directory: %s", root)
            self._resolver.replace_tables(())
            return LoadReport.empty()
        return self._resolver.reload(root, self._config.map_suffix)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_heatmap(self) -> HeatmapSnapshot:
        return self._query.get_heatmap()

    def get_stats(self, top_n: int | None = None) -> StatsResult:
        return self._query.get_stats(top_n)

    def reset(self) -> ResetAck:
        return self._query.reset()

    def health(self) -> HealthStatus:
        return self._query.health()

    def mode(self) -> ModeInfo:
        return ModeInfo(
            manual_tracking=True,
            auto_instrumentation=self._query.is_attached(AUTO_SOURCE),
        )

    # =========================================================================
    # Automatic instrumentation
    # =========================================================================

    def set_auto_instrument(self, enabled: bool) -> ToggleResult:
        """Attach or detach the automatic ingestion source.

        Enabling starts from a fresh store and, when base_dir is
        configured, a LineMonitor. Disabling stops the monitor and drops
        the automatic counts from query results.

        Raises:
            ToolIdUnavailableError: If the monitor's tool ID is in use.
        """
        with self._toggle_lock:
            if enabled == (self._auto is not None):
                return ToggleResult(enabled=enabled, changed=False)

            if enabled:
                self._enable_auto()
                logger.info("Auto-instrumentation enabled")
            else:
                self._disable_auto()
                logger.info("Auto-instrumentation disabled")
            return ToggleResult(enabled=enabled, changed=True)

    def _enable_auto(self) -> None:
        auto = StackTraceInstrumenter(CounterStore(self._config.shard_count), self._resolver)

        monitor: LineMonitor | None = None
        if self._config.base_dir is not None:
            # base_dir-relative names are distinct files; keep them as reported
            monitor = LineMonitor(ManualInstrumenter(auto.store), self._config.base_dir)
            monitor.start()

        self._auto = auto
        self._monitor = monitor
        self._query.attach(AUTO_SOURCE, auto.store)

    def _disable_auto(self) -> None:
        if self._monitor is not None and self._monitor.is_started:
            self._monitor.stop()
        self._monitor = None
        self._auto = None
        self._query.detach(AUTO_SOURCE)

    def close(self) -> None:
        """Stop automatic instrumentation if running."""
        self.set_auto_instrument(False)

    def __enter__(self) -> HeatmapEngine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
