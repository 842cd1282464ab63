"""Pytest configuration and fixtures for Tidewater tests."""
import pytest
import structlog

from game_state import build_initial_state
from logging_config import configure_logging
from simulation.config import WaterConfig
from world.generation import MapShape, WaterTableStrategy
from world.geometry import MapGeometry
from world.terrain import TerrainColumns
from water import WaterTable

# Map sizes used by the scenario grids
ONE_TILE = 0
TINY = 3


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Keep engine debug logging out of test output."""
    configure_logging("WARNING")
    # capture_logs() cannot patch cached loggers; keep caching off in tests.
    structlog.configure(cache_logger_on_first_use=False)


@pytest.fixture
def make_state():
    """Factory for small simulation states with fixed weather.

    Defaults to the NULL config so a test switches on only the process it
    is checking.
    """
    def _make_state(
        radius=TINY,
        map_shape=MapShape.FLAT,
        strategy=WaterTableStrategy.DEPTH_ONE,
        water_config=WaterConfig.NULL,
        **kwargs,
    ):
        return build_initial_state(
            radius=radius,
            map_shape=map_shape,
            strategy=strategy,
            water_config=water_config,
            seed=kwargs.pop("seed", 0),
            **kwargs,
        )

    return _make_state


@pytest.fixture
def tiny_geometry():
    return MapGeometry(TINY)


@pytest.fixture
def flat_terrain(tiny_geometry):
    """Radius-3 map of loam at height 1."""
    terrain = TerrainColumns(tiny_geometry)
    terrain.height[:] = 1.0
    return terrain


@pytest.fixture
def empty_table(tiny_geometry):
    return WaterTable(tiny_geometry)
