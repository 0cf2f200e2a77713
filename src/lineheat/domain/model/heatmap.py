"""Heatmap query results.

Derived, read-only values built per query and discarded afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from lineheat.domain.model.location_key import LocationKey

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


@dataclass(frozen=True, slots=True)
class HeatmapSnapshot:
    """Point-in-time copy of counts grouped by file.

    Later store mutations never change a snapshot already handed out.

    Attributes:
        files: file -> (line -> count), read-only at both levels
    """

    files: Mapping[str, Mapping[int, int]]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        for file, lines in self.files.items():
            for line, count in lines.items():
                if line <= 0:
                    raise ValueError(f"{file}: line must be > 0, got {line}")
                if count < 0:
                    raise ValueError(f"{file}:{line}: count must be >= 0, got {count}")

    @classmethod
    def from_counts(cls, counts: Mapping[LocationKey, int]) -> HeatmapSnapshot:
        """Group flat counts by file. Copies, never aliases the input."""
        grouped: dict[str, dict[int, int]] = {}
        for key, count in counts.items():
            grouped.setdefault(key.file, {})[key.line] = count
        return cls(
            files=MappingProxyType(
                {file: MappingProxyType(lines) for file, lines in grouped.items()}
            )
        )

    @classmethod
    def empty(cls) -> HeatmapSnapshot:
        """Create empty snapshot."""
        return cls(files=MappingProxyType({}))

    @property
    def total_lines(self) -> int:
        """Number of distinct locations."""
        return sum(len(lines) for lines in self.files.values())

    @property
    def total_executions(self) -> int:
        """Sum of all counts."""
        return sum(sum(lines.values()) for lines in self.files.values())

    def items(self) -> Iterator[tuple[LocationKey, int]]:
        """Iterate flat (key, count) pairs."""
        for file, lines in self.files.items():
            for line, count in lines.items():
                yield LocationKey(file=file, line=line), count

    def count(self, key: LocationKey) -> int:
        """Count for key, 0 if never executed."""
        return self.files.get(key.file, {}).get(key.line, 0)

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Wire shape: file -> {line as string -> count}."""
        return {
            file: {str(line): count for line, count in lines.items()}
            for file, lines in self.files.items()
        }


@dataclass(frozen=True, slots=True)
class HotLine:
    """One entry of the hottest-lines ranking."""

    key: LocationKey
    count: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")


@dataclass(frozen=True, slots=True)
class StatsResult:
    """Aggregate statistics over one snapshot.

    Attributes:
        total_lines: Number of distinct locations in heatmap
        total_executions: Sum of all counts in heatmap
        hottest: Highest counts first, at most top_n entries
        heatmap: Snapshot the statistics were computed from
    """

    total_lines: int
    total_executions: int
    hottest: tuple[HotLine, ...]
    heatmap: HeatmapSnapshot

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.total_lines != self.heatmap.total_lines:
            raise ValueError(
                f"total_lines ({self.total_lines}) must match heatmap ({self.heatmap.total_lines})"
            )
        if self.total_executions != self.heatmap.total_executions:
            raise ValueError(
                f"total_executions ({self.total_executions}) must match heatmap "
                f"({self.heatmap.total_executions})"
            )

    @classmethod
    def empty(cls) -> StatsResult:
        """Create empty stats."""
        return cls(
            total_lines=0,
            total_executions=0,
            hottest=(),
            heatmap=HeatmapSnapshot.empty(),
        )


@dataclass(frozen=True, slots=True)
class ResetAck:
    """Acknowledgement returned by reset."""

    message: str = "Heatmap reset"


@dataclass(frozen=True, slots=True)
class HealthStatus:
    """Liveness probe result. Constant, no state access."""

    status: str = "ok"


@dataclass(frozen=True, slots=True)
class ModeInfo:
    """Which ingestion sources currently feed the heatmap."""

    manual_tracking: bool
    auto_instrumentation: bool

    @property
    def description(self) -> str:
        """Human-readable mode summary."""
        if self.auto_instrumentation:
            return "Hybrid mode: both manual track_line() and automatic instrumentation"
        return "Manual mode: only explicit track_line() calls"


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """Outcome of switching automatic instrumentation.

    Attributes:
        enabled: State after the request
        changed: False when the request matched the current state
    """

    enabled: bool
    changed: bool

    @property
    def message(self) -> str:
        """Human-readable outcome."""
        if not self.changed:
            return "No change needed"
        return "Auto-instrumentation enabled" if self.enabled else "Auto-instrumentation disabled"
