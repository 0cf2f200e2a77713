"""Application services: query service and engine composition root."""

from lineheat.application.services.engine import AUTO_SOURCE, MANUAL_SOURCE, HeatmapEngine
from lineheat.application.services.query import HeatmapQueryService

__all__ = ["AUTO_SOURCE", "MANUAL_SOURCE", "HeatmapEngine", "HeatmapQueryService"]
