"""JSON reporter: query results -> wire-format dicts and JSON strings.

Field names match the transport contract:
    heatmap: {file: {"line": count}}
    stats:   {totalLines, totalExecutions, hottest: [{key, count}], heatmap}
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lineheat.domain.model.heatmap import (
        HealthStatus,
        HeatmapSnapshot,
        HotLine,
        ModeInfo,
        ResetAck,
        StatsResult,
        ToggleResult,
    )


class JsonReporter:
    """JSON reporter: outputs machine-readable JSON.

    Schema is the transport contract, not the Python attribute names.
    """

    def __init__(self, *, indent: int | None = 2) -> None:
        """Initialize reporter.

        Args:
            indent: JSON indentation. None for compact output.
        """
        self._indent = indent

    def report(self, result: StatsResult) -> str:
        """Format stats as JSON string."""
        return json.dumps(stats_to_dict(result), indent=self._indent)

    def report_heatmap(self, snapshot: HeatmapSnapshot) -> str:
        """Format heatmap snapshot as JSON string."""
        return json.dumps(heatmap_to_dict(snapshot), indent=self._indent)


def heatmap_to_dict(snapshot: HeatmapSnapshot) -> dict[str, dict[str, int]]:
    """Convert snapshot to {file: {line-as-string: count}}."""
    return snapshot.to_dict()


def hot_line_to_dict(hot: HotLine) -> dict[str, object]:
    """Convert HotLine to {"key": "file:line", "count": n}."""
    return {
        "key": str(hot.key),
        "count": hot.count,
    }


def stats_to_dict(result: StatsResult) -> dict[str, object]:
    """Convert StatsResult to dict."""
    return {
        "totalLines": result.total_lines,
        "totalExecutions": result.total_executions,
        "hottest": [hot_line_to_dict(h) for h in result.hottest],
        "heatmap": heatmap_to_dict(result.heatmap),
    }


def reset_to_dict(ack: ResetAck) -> dict[str, object]:
    """Convert ResetAck to dict."""
    return {"message": ack.message}


def health_to_dict(health: HealthStatus) -> dict[str, object]:
    """Convert HealthStatus to dict."""
    return {"status": health.status}


def mode_to_dict(mode: ModeInfo) -> dict[str, object]:
    """Convert ModeInfo to dict."""
    return {
        "manualTracking": mode.manual_tracking,
        "autoInstrumentation": mode.auto_instrumentation,
        "description": mode.description,
    }


def toggle_to_dict(toggle: ToggleResult) -> dict[str, object]:
    """Convert ToggleResult to dict."""
    return {
        "message": toggle.message,
        "enabled": toggle.enabled,
    }
