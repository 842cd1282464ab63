# game_state/initialization.py
"""Simulation state initialization and scenario setup."""
from __future__ import annotations

import random
from typing import Iterable, Optional, Sequence

import structlog

from config import DEFAULT_MAP_RADIUS, SECONDS_PER_DAY, TICK_INTERVAL
from game_state.state import SimulationState
from simulation.config import WaterConfig
from simulation.roots import RootedStructure
from world.generation import (
    MapShape,
    WaterTableStrategy,
    generate_terrain,
    generate_water_table,
)
from world.geometry import Hex, MapGeometry
from world.terrain import DEFAULT_SOIL
from world.weather import InGameTime, Weather, WeatherSystem

logger = structlog.get_logger()


def build_initial_state(
    radius: int = DEFAULT_MAP_RADIUS,
    map_shape: MapShape = MapShape.FLAT,
    strategy: WaterTableStrategy = WaterTableStrategy.DEPTH_ONE,
    water_config: WaterConfig = WaterConfig.IN_GAME,
    weather: Weather = Weather.CLEAR,
    fixed_weather: bool = True,
    emitters: Iterable[Hex] = (),
    seconds_per_day: float = SECONDS_PER_DAY,
    tick_interval: float = TICK_INTERVAL,
    soil: str = DEFAULT_SOIL,
    seed: Optional[int] = None,
    rooted_structures: Sequence[RootedStructure] = (),
) -> SimulationState:
    """Create a new simulation state for a generated scenario.

    The map is a hexagon of the given radius around (0, 0). Emitters are
    placed at the listed tiles with the configured emission pressure.
    Weather stays fixed unless fixed_weather is False, in which case it is
    rerolled each in-game day from a generator seeded with `seed`.
    """
    geometry = MapGeometry(radius)
    terrain = generate_terrain(geometry, map_shape, soil=soil, seed=seed)
    water_table = generate_water_table(geometry, terrain, strategy)

    state = SimulationState(
        geometry=geometry,
        terrain=terrain,
        water_table=water_table,
        water_config=water_config,
        time=InGameTime(seconds_per_day=seconds_per_day),
        weather=WeatherSystem(current=weather, fixed=fixed_weather, rng=random.Random(seed)),
        tick_interval=tick_interval,
    )
    # Start the ocean at its t=0 tide so the first tick sees a settled boundary
    state.ocean.update(water_config.tide_settings, state.time.elapsed_days)

    for tile in emitters:
        state.add_emitter(tile)
    for structure in rooted_structures:
        geometry.index_of(structure.center)
        state.rooted_structures.append(structure)

    logger.info(
        "simulation.initialized",
        radius=radius,
        tiles=geometry.n_tiles,
        shape=map_shape.value,
        strategy=strategy.value,
        soil=soil,
        oceans=water_config.enable_oceans,
        emitters=len(state.emitters),
        total_water=round(water_table.total_water(), 6),
    )
    return state
