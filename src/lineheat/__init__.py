"""lineheat - execution heatmap profiler: per-line counts, source maps, queries."""

__version__ = "0.1.0"

from lineheat.application.services.engine import HeatmapEngine
from lineheat.domain.model.configuration import EngineConfig
from lineheat.domain.model.location_key import LocationKey
from lineheat.presentation.api import HeatmapApi

__all__ = ["EngineConfig", "HeatmapApi", "HeatmapEngine", "LocationKey", "__version__"]
