# water.py
"""
water.py - Water data model for Tidewater

Defines:
- WaterDepth: the derived Dry / Underground / Flooded state of a tile
- resolve_depth: the pure volume -> depth mapping (scalar and array forms)
- WaterTable: per-tile water state for the whole map, stored as flat arrays

Simulation logic lives in simulation/. The engine is the only writer of a
WaterTable; collaborators read through the accessors and take water through
`remove`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple

import numpy as np

from world.geometry import Hex, MapGeometry
from world.terrain import TerrainColumns


class DepthKind(IntEnum):
    DRY = 0
    UNDERGROUND = 1
    FLOODED = 2


@dataclass(frozen=True)
class WaterDepth:
    """Where the water table sits relative to the terrain surface.

    - Dry: no water at all
    - Underground(depth): the water table is `depth` below the surface
    - Flooded(height): water stands `height` above the surface
    """
    kind: DepthKind
    value: float = 0.0

    @classmethod
    def dry(cls) -> "WaterDepth":
        return cls(DepthKind.DRY)

    @classmethod
    def underground(cls, depth: float) -> "WaterDepth":
        return cls(DepthKind.UNDERGROUND, depth)

    @classmethod
    def flooded(cls, height: float) -> "WaterDepth":
        return cls(DepthKind.FLOODED, height)

    def __repr__(self) -> str:
        if self.kind == DepthKind.DRY:
            return "Dry"
        if self.kind == DepthKind.UNDERGROUND:
            return f"Underground({self.value})"
        return f"Flooded({self.value})"

    def surface_height(self, terrain_height: float) -> float:
        """Height of the visible surface: terrain, or the top of standing water."""
        if self.kind == DepthKind.FLOODED:
            return terrain_height + self.value
        return terrain_height

    def water_table_height(self, terrain_height: float) -> float:
        """Absolute height of the water table. A dry tile's table rests at 0."""
        if self.kind == DepthKind.DRY:
            return 0.0
        if self.kind == DepthKind.UNDERGROUND:
            return terrain_height - self.value
        return terrain_height + self.value

    def surface_water_depth(self) -> float:
        """Depth of standing water; zero unless flooded."""
        if self.kind == DepthKind.FLOODED:
            return self.value
        return 0.0


def resolve_depth(volume: float, terrain_height: float, soil_capacity: float) -> WaterDepth:
    """Compute the depth state of a single tile.

    Soil stores up to `terrain_height * soil_capacity` volume below the
    surface. Stored water fills the column from the bottom up, occupying
    `volume / soil_capacity` of its height; anything beyond saturation
    stands on the surface.

    Example: volume=0.1, height=1.0, capacity=0.5 -> Underground(0.8)
    """
    assert volume >= 0, f"Negative volume {volume}"
    assert terrain_height >= 0, f"Negative terrain height {terrain_height}"
    assert 0 <= soil_capacity <= 1, f"Soil capacity {soil_capacity} outside [0, 1]"

    if volume == 0:
        return WaterDepth.dry()

    max_storable = terrain_height * soil_capacity
    if volume <= max_storable:
        height_of_water_in_soil = volume / soil_capacity
        return WaterDepth.underground(terrain_height - height_of_water_in_soil)

    return WaterDepth.flooded(volume - max_storable)


def resolve_depth_array(
    volume: np.ndarray,
    terrain_height: np.ndarray,
    soil_capacity: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorized resolve_depth.

    Returns:
        (kind, value) arrays: DepthKind codes (int8) and the depth/flood value
    """
    assert np.all(volume >= 0), "Negative volume in water table"
    assert np.all(terrain_height >= 0), "Negative terrain height"

    max_storable = terrain_height * soil_capacity
    kind = np.where(
        volume == 0,
        DepthKind.DRY,
        np.where(volume <= max_storable, DepthKind.UNDERGROUND, DepthKind.FLOODED),
    ).astype(np.int8)

    # capacity == 0 can only be reached by dry or flooded tiles
    soil_column = np.divide(volume, soil_capacity, out=np.zeros_like(volume), where=soil_capacity > 0)
    value = np.where(
        kind == DepthKind.UNDERGROUND,
        terrain_height - soil_column,
        np.where(kind == DepthKind.FLOODED, volume - max_storable, 0.0),
    )
    return kind, value


def water_table_height_array(kind: np.ndarray, value: np.ndarray, terrain_height: np.ndarray) -> np.ndarray:
    """Vectorized WaterDepth.water_table_height."""
    return np.where(
        kind == DepthKind.FLOODED,
        terrain_height + value,
        np.where(kind == DepthKind.UNDERGROUND, terrain_height - value, 0.0),
    )


def volume_at_water_table_height(
    water_height: np.ndarray,
    terrain_height: np.ndarray,
    soil_capacity: np.ndarray,
) -> np.ndarray:
    """Inverse of the depth model: volume needed to raise the table to water_height."""
    below_surface = np.clip(water_height, 0.0, terrain_height) * soil_capacity
    above_surface = np.maximum(water_height - terrain_height, 0.0)
    return below_surface + above_surface


class WaterTable:
    """Water state of every tile on the map.

    Arrays are indexed like MapGeometry.tiles:
    - volume: current water volume (tile volumes, never negative)
    - previous_volume: volume at the start of the last tick
    - depth_kind / depth_value: derived depth, refreshed by update_depth
    - flow_velocity: (n_tiles, 2) world-plane outflow vector from the last lateral pass
    """

    def __init__(self, geometry: MapGeometry):
        self.geometry = geometry
        n = geometry.n_tiles
        self.volume = np.zeros(n, dtype=np.float64)
        self.previous_volume = np.zeros(n, dtype=np.float64)
        self.depth_kind = np.zeros(n, dtype=np.int8)
        self.depth_value = np.zeros(n, dtype=np.float64)
        self.flow_velocity = np.zeros((n, 2), dtype=np.float64)

    def __repr__(self) -> str:
        return f"WaterTable(tiles={self.geometry.n_tiles}, total={self.total_water():.4f})"

    def copy(self) -> "WaterTable":
        clone = WaterTable(self.geometry)
        clone.volume = self.volume.copy()
        clone.previous_volume = self.previous_volume.copy()
        clone.depth_kind = self.depth_kind.copy()
        clone.depth_value = self.depth_value.copy()
        clone.flow_velocity = self.flow_velocity.copy()
        return clone

    # =========================================================================
    # Volume
    # =========================================================================

    def get_volume(self, pos: Hex) -> float:
        return float(self.volume[self.geometry.index_of(pos)])

    def set_volume(self, pos: Hex, amount: float) -> None:
        assert amount >= 0, f"Negative volume {amount} for tile {pos}"
        self.volume[self.geometry.index_of(pos)] = amount

    def add(self, pos: Hex, amount: float) -> None:
        """Add water to a tile."""
        assert amount >= 0, f"Cannot add negative volume {amount}"
        self.volume[self.geometry.index_of(pos)] += amount

    def remove(self, pos: Hex, amount: float) -> float:
        """
        Remove water from a tile.

        Returns actual amount removed (could be less if insufficient water).
        """
        assert amount >= 0, f"Cannot remove negative volume {amount}"
        i = self.geometry.index_of(pos)
        current = self.volume[i]
        actual = min(amount, current)
        self.volume[i] = current - actual
        return float(actual)

    def add_array(self, amounts: np.ndarray) -> None:
        """Add a per-tile amount to every tile."""
        assert np.all(amounts >= 0), "Cannot add negative volume"
        self.volume += amounts

    def remove_array(self, amounts: np.ndarray) -> np.ndarray:
        """Remove a per-tile amount from every tile, clamped at zero.

        Returns per-tile amounts actually removed.
        """
        assert np.all(amounts >= 0), "Cannot remove negative volume"
        actual = np.minimum(amounts, self.volume)
        self.volume -= actual
        return actual

    def total_water(self) -> float:
        return float(np.sum(self.volume))

    def cache_previous_volume(self) -> None:
        self.previous_volume[:] = self.volume

    def net_flux(self) -> np.ndarray:
        """Change in volume over the last tick, for visualization."""
        return self.volume - self.previous_volume

    # =========================================================================
    # Derived depth
    # =========================================================================

    def update_depth(self, terrain: TerrainColumns) -> None:
        """Resynchronize depth with the current volume."""
        self.depth_kind, self.depth_value = resolve_depth_array(
            self.volume, terrain.height, terrain.water_capacity
        )

    def get_depth(self, pos: Hex) -> WaterDepth:
        i = self.geometry.index_of(pos)
        return WaterDepth(DepthKind(int(self.depth_kind[i])), float(self.depth_value[i]))

    def surface_water_depth(self) -> np.ndarray:
        """Per-tile standing water depth (zero where not flooded)."""
        return np.where(self.depth_kind == DepthKind.FLOODED, self.depth_value, 0.0)

    def is_flooded(self) -> np.ndarray:
        return self.depth_kind == DepthKind.FLOODED

    def water_table_heights(self, terrain: TerrainColumns) -> np.ndarray:
        """Per-tile absolute water table height, from the cached depth."""
        return water_table_height_array(self.depth_kind, self.depth_value, terrain.height)

    def get_height(self, pos: Hex, terrain: TerrainColumns) -> float:
        """Absolute water table height of one tile."""
        return self.get_depth(pos).water_table_height(terrain.get_height(pos))

    def average_height(self, terrain: TerrainColumns) -> float:
        return float(np.mean(self.water_table_heights(terrain)))

    # =========================================================================
    # Flow
    # =========================================================================

    def get_flow_velocity(self, pos: Hex) -> Tuple[float, float]:
        vx, vy = self.flow_velocity[self.geometry.index_of(pos)]
        return float(vx), float(vy)
