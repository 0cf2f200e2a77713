"""pytest plugin for lineheat.

Provides fixtures:
    lineheat_config: Engine configuration (override in conftest.py)
    heatmap_engine: Fresh HeatmapEngine per test

Ini options:
    lineheat_source_maps: Directory scanned for source maps (default: none)
    lineheat_top_n: Default hottest-lines length (default: 10)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lineheat.presentation.pytest_plugin.fixtures import heatmap_engine, lineheat_config

if TYPE_CHECKING:
    import pytest

__all__ = [
    "heatmap_engine",
    "lineheat_config",
]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options."""
    parser.addini("lineheat_source_maps", "Directory scanned for source maps", default="")
    parser.addini("lineheat_top_n", "Default hottest-lines length", default="")
