"""Engine configuration.

None = feature disabled, value = feature enabled with that config.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

DEFAULT_SHARD_COUNT: Final = 16
DEFAULT_TOP_N: Final = 10
DEFAULT_MAP_SUFFIX: Final = ".map"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Configuration DTO for HeatmapEngine.

    Immutable configuration object with FAIL-FIRST validation.

    Attributes:
        shard_count: Number of lock shards in each counter store.
        default_top_n: Hottest-lines length when the caller gives none.
        source_map_root: Directory scanned for source maps at startup. None = disabled.
        map_suffix: File name suffix identifying source-map files.
        auto_instrument: Start with automatic tracking attached.
        base_dir: Directory whose Python files LineMonitor tracks.
            None = automatic tracking uses stack traces only.
    """

    shard_count: int = DEFAULT_SHARD_COUNT
    default_top_n: int = DEFAULT_TOP_N
    source_map_root: Path | None = None
    map_suffix: str = DEFAULT_MAP_SUFFIX
    auto_instrument: bool = False
    base_dir: Path | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.shard_count < 1:
            raise ValueError(f"shard_count must be >= 1, got {self.shard_count}")
        if self.default_top_n < 0:
            raise ValueError(f"default_top_n must be >= 0, got {self.default_top_n}")
        if not self.map_suffix:
            raise ValueError("map_suffix must be non-empty string")
        if self.base_dir is not None and not self.base_dir.is_dir():
            raise ValueError(f"base_dir must be a directory: {self.base_dir}")
