"""Transport boundary: framework-agnostic verbs returning JSON-ready dicts.

An HTTP layer maps routes onto these methods and serializes the
returned dicts; it needs nothing else from lineheat.

    GET  /api/heatmap                      -> get_heatmap()
    GET  /api/heatmap/stats?topN=N         -> get_stats(parse_top_n(...))
    GET  /api/heatmap/mode                 -> mode()
    POST /api/heatmap/reset                -> reset()
    POST /api/heatmap/auto-instrument/X    -> auto_instrument(X == "true")
    GET  /health                           -> health()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lineheat.application.reporters.json import (
    health_to_dict,
    heatmap_to_dict,
    mode_to_dict,
    reset_to_dict,
    stats_to_dict,
    toggle_to_dict,
)
from lineheat.domain.exceptions import InvalidRequestError

if TYPE_CHECKING:
    from lineheat.application.services.engine import HeatmapEngine


def parse_top_n(raw: str | None, default: int | None = None, *, name: str = "topN") -> int | None:
    """Convert a query-string topN value.

    Args:
        raw: Raw parameter value, None or "" when absent.
        default: Returned when the parameter is absent.
        name: Parameter name reported in errors.

    Raises:
        InvalidRequestError: Not an integer, or negative.
    """
    if raw is None or raw == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise InvalidRequestError(name, raw, "must be an integer") from None
    if value < 0:
        raise InvalidRequestError(name, raw, "must be >= 0")
    return value


class HeatmapApi:
    """Query verbs of one engine, as JSON-ready dicts."""

    __slots__ = ("_engine",)

    def __init__(self, engine: HeatmapEngine) -> None:
        self._engine = engine

    def get_heatmap(self) -> dict[str, dict[str, int]]:
        return heatmap_to_dict(self._engine.get_heatmap())

    def get_stats(self, top_n: int | None = None) -> dict[str, object]:
        return stats_to_dict(self._engine.get_stats(top_n))

    def reset(self) -> dict[str, object]:
        return reset_to_dict(self._engine.reset())

    def health(self) -> dict[str, object]:
        return health_to_dict(self._engine.health())

    def mode(self) -> dict[str, object]:
        return mode_to_dict(self._engine.mode())

    def auto_instrument(self, enabled: bool) -> dict[str, object]:
        return toggle_to_dict(self._engine.set_auto_instrument(enabled))
