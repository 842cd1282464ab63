"""
terrain.py - Terrain columns for Tidewater

Each valid hex holds one terrain column:
- Height (non-negative, clamped to MAX_TERRAIN_HEIGHT)
- Soil type, which fixes three water coefficients for the column:
  - water capacity: fraction of the column that stores water before flooding
  - evaporation ratio: evaporation multiplier while water is underground
  - lateral flow ratio: flow multiplier while water is underground

Terrain is supplied by world generation and edited only between ticks.
The water engine reads it; it never writes it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from config import (
    MAX_TERRAIN_HEIGHT,
    DEFAULT_SOIL_WATER_CAPACITY,
    DEFAULT_SOIL_EVAPORATION_RATIO,
    DEFAULT_SOIL_LATERAL_FLOW_RATIO,
)
from utils import clamp
from world.geometry import Hex, MapGeometry


@dataclass(frozen=True)
class SoilType:
    """Water-related properties of a soil."""
    name: str
    water_capacity: float = DEFAULT_SOIL_WATER_CAPACITY          # [0, 1]
    evaporation_ratio: float = DEFAULT_SOIL_EVAPORATION_RATIO    # (0, 1]
    lateral_flow_ratio: float = DEFAULT_SOIL_LATERAL_FLOW_RATIO  # (0, 1]

    # Visual properties
    display_color: Tuple[int, int, int] = (150, 120, 90)

    def __post_init__(self):
        if not 0.0 <= self.water_capacity <= 1.0:
            raise ValueError(f"Soil '{self.name}': water_capacity must be in [0, 1], got {self.water_capacity}")
        if not 0.0 < self.evaporation_ratio <= 1.0:
            raise ValueError(f"Soil '{self.name}': evaporation_ratio must be in (0, 1], got {self.evaporation_ratio}")
        if not 0.0 < self.lateral_flow_ratio <= 1.0:
            raise ValueError(f"Soil '{self.name}': lateral_flow_ratio must be in (0, 1], got {self.lateral_flow_ratio}")


# Soil library - single source of truth for all soil types
SOIL_LIBRARY: Dict[str, SoilType] = {
    "loam": SoilType("loam", display_color=(150, 120, 90)),
    "sand": SoilType(
        "sand",
        water_capacity=0.35,
        evaporation_ratio=0.8,
        lateral_flow_ratio=0.8,
        display_color=(204, 174, 120),
    ),
    "clay": SoilType(
        "clay",
        water_capacity=0.45,
        evaporation_ratio=0.3,
        lateral_flow_ratio=0.1,
        display_color=(120, 100, 80),
    ),
    "peat": SoilType(
        "peat",
        water_capacity=0.8,
        evaporation_ratio=0.4,
        lateral_flow_ratio=0.3,
        display_color=(60, 50, 40),
    ),
    "rock": SoilType(
        "rock",
        water_capacity=0.1,
        evaporation_ratio=0.9,
        lateral_flow_ratio=0.05,
        display_color=(120, 120, 110),
    ),
}
DEFAULT_SOIL = "loam"


def clamp_height(height: float) -> float:
    """Clamp a terrain height to the valid range."""
    return clamp(float(height), 0.0, MAX_TERRAIN_HEIGHT)


class TerrainColumns:
    """Per-tile terrain data in flat arrays, indexed like MapGeometry.tiles."""

    def __init__(self, geometry: MapGeometry, soil: str = DEFAULT_SOIL):
        self.geometry = geometry
        n = geometry.n_tiles
        # Shape: (n_tiles,), dtype=float64
        self.height = np.zeros(n, dtype=np.float64)
        self.soil_names = np.full(n, soil, dtype="U16")
        self.water_capacity = np.zeros(n, dtype=np.float64)
        self.evaporation_ratio = np.zeros(n, dtype=np.float64)
        self.lateral_flow_ratio = np.zeros(n, dtype=np.float64)
        for pos in geometry.tiles:
            self.set_soil(pos, soil)

    def get_height(self, pos: Hex) -> float:
        return float(self.height[self.geometry.index_of(pos)])

    def update_height(self, pos: Hex, height: float) -> None:
        """Set terrain height, clamped to [0, MAX_TERRAIN_HEIGHT]."""
        self.height[self.geometry.index_of(pos)] = clamp_height(height)

    def get_soil(self, pos: Hex) -> SoilType:
        return SOIL_LIBRARY[self.soil_names[self.geometry.index_of(pos)]]

    def set_soil(self, pos: Hex, soil: str) -> None:
        """Assign a soil type (by library name) to a tile."""
        soil_type = SOIL_LIBRARY[soil]
        i = self.geometry.index_of(pos)
        self.soil_names[i] = soil_type.name
        self.water_capacity[i] = soil_type.water_capacity
        self.evaporation_ratio[i] = soil_type.evaporation_ratio
        self.lateral_flow_ratio[i] = soil_type.lateral_flow_ratio
