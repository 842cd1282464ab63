# world/generation.py
"""
Scenario generation for Tidewater.

Builds terrain and initial water tables from two small vocabularies:
- MapShape: how terrain height varies across the map
- WaterTableStrategy: how much water each tile starts with

These are the building blocks of the scenario test suite and of the CLI.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np

from water import WaterTable
from world.geometry import MapGeometry
from world.terrain import DEFAULT_SOIL, TerrainColumns, clamp_height


class MapShape(Enum):
    BEDROCK = "bedrock"  # Flat at height 0
    FLAT = "flat"        # Flat at height 1
    SLOPED = "sloped"    # Rises with q, never below 0
    BUMPY = "bumpy"      # Uniform random heights in [0, 1)

    def heights(self, geometry: MapGeometry, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Terrain height for every tile, indexed like geometry.tiles."""
        n = geometry.n_tiles
        if self is MapShape.BEDROCK:
            return np.zeros(n)
        if self is MapShape.FLAT:
            return np.ones(n)
        if self is MapShape.SLOPED:
            return np.array([max(q, 0) for q, _ in geometry.tiles], dtype=np.float64)
        rng = rng if rng is not None else np.random.default_rng()
        return rng.random(n)


class WaterTableStrategy(Enum):
    DRY = "dry"                # No water
    DEPTH_HALF = "depth_half"  # Half a tile of volume everywhere
    DEPTH_ONE = "depth_one"    # One tile of volume everywhere
    SATURATED = "saturated"    # Water table exactly at the surface
    FLOODED = "flooded"        # One tile of standing water above the surface

    def starting_volume(self, terrain: TerrainColumns) -> np.ndarray:
        """Initial volume for every tile, indexed like terrain.height."""
        n = terrain.height.shape[0]
        if self is WaterTableStrategy.DRY:
            return np.zeros(n)
        if self is WaterTableStrategy.DEPTH_HALF:
            return np.full(n, 0.5)
        if self is WaterTableStrategy.DEPTH_ONE:
            return np.ones(n)
        saturated = terrain.height * terrain.water_capacity
        if self is WaterTableStrategy.SATURATED:
            return saturated
        return saturated + 1.0


def generate_terrain(
    geometry: MapGeometry,
    shape: MapShape,
    soil: str = DEFAULT_SOIL,
    seed: Optional[int] = None,
) -> TerrainColumns:
    """Create terrain columns of the given shape and a single soil type."""
    terrain = TerrainColumns(geometry, soil=soil)
    rng = np.random.default_rng(seed)
    for pos, height in zip(geometry.tiles, shape.heights(geometry, rng)):
        terrain.update_height(pos, clamp_height(height))
    return terrain


def generate_water_table(
    geometry: MapGeometry,
    terrain: TerrainColumns,
    strategy: WaterTableStrategy,
) -> WaterTable:
    """Create a water table filled according to strategy, with depth resolved."""
    water_table = WaterTable(geometry)
    water_table.volume[:] = strategy.starting_volume(terrain)
    water_table.cache_previous_volume()
    water_table.update_depth(terrain)
    return water_table
