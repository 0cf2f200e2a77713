"""pytest fixtures for execution heatmaps.

User overrides lineheat_config in their conftest.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from lineheat.application.services.engine import HeatmapEngine
from lineheat.domain.model.configuration import DEFAULT_TOP_N, EngineConfig
from lineheat.presentation.api import parse_top_n

if TYPE_CHECKING:
    from collections.abc import Iterator


def _ini(config: pytest.Config, name: str) -> str | None:
    """Ini option as string, None when unset or empty."""
    raw = config.getini(name)
    return str(raw) if raw else None


def config_from_ini(config: pytest.Config) -> EngineConfig:
    """Build EngineConfig from lineheat_* ini options.

    Raises:
        InvalidRequestError: lineheat_top_n is not a non-negative integer.
    """
    source_maps = _ini(config, "lineheat_source_maps")
    top_n = parse_top_n(_ini(config, "lineheat_top_n"), name="lineheat_top_n")

    return EngineConfig(
        default_top_n=DEFAULT_TOP_N if top_n is None else top_n,
        source_map_root=config.rootpath / source_maps if source_maps else None,
    )


@pytest.fixture(scope="session")
def lineheat_config(request: pytest.FixtureRequest) -> EngineConfig:
    """Engine configuration from pytest.ini / pyproject.toml.

    Reads lineheat_source_maps (directory, relative to rootdir) and
    lineheat_top_n. Override this fixture in conftest.py for anything else.

    Returns:
        EngineConfig
    """
    return config_from_ini(request.config)


@pytest.fixture
def heatmap_engine(lineheat_config: EngineConfig) -> Iterator[HeatmapEngine]:
    """Fresh HeatmapEngine per test, closed afterwards.

    Returns:
        HeatmapEngine built from lineheat_config
    """
    with HeatmapEngine(lineheat_config) as engine:
        yield engine
