"""Domain model: immutable value objects."""

from lineheat.domain.model.configuration import EngineConfig
from lineheat.domain.model.heatmap import (
    HealthStatus,
    HeatmapSnapshot,
    HotLine,
    ModeInfo,
    ResetAck,
    StatsResult,
    ToggleResult,
)
from lineheat.domain.model.location_key import LocationKey
from lineheat.domain.model.source_map import MappingEntry, SourceMapTable

__all__ = [
    "EngineConfig",
    "HealthStatus",
    "HeatmapSnapshot",
    "HotLine",
    "LocationKey",
    "MappingEntry",
    "ModeInfo",
    "ResetAck",
    "SourceMapTable",
    "StatsResult",
    "ToggleResult",
]
