"""
World module: map topology, terrain, weather, and scenario generation.

Provides:
- Hex topology (from geometry.py)
- Terrain columns and soil types (from terrain.py)
- Weather, light and in-game time (from weather.py)

Scenario generation (generation.py) builds WaterTables, so import it
directly: `from world.generation import ...`
"""

# Topology
from world.geometry import (
    DIRECTION_VECTORS,
    HEX_DIRECTIONS,
    Hex,
    MapGeometry,
    hex_distance,
    hexagon,
    hex_ring,
    hex_to_world,
    world_to_hex,
)

# Terrain
from world.terrain import (
    DEFAULT_SOIL,
    SOIL_LIBRARY,
    SoilType,
    TerrainColumns,
    clamp_height,
)

# Weather system
from world.weather import (
    Illuminance,
    InGameTime,
    Weather,
    WeatherSystem,
)

__all__ = [
    # Topology
    "DIRECTION_VECTORS",
    "HEX_DIRECTIONS",
    "Hex",
    "MapGeometry",
    "hex_distance",
    "hexagon",
    "hex_ring",
    "hex_to_world",
    "world_to_hex",
    # Terrain
    "DEFAULT_SOIL",
    "SOIL_LIBRARY",
    "SoilType",
    "TerrainColumns",
    "clamp_height",
    # Weather
    "Illuminance",
    "InGameTime",
    "Weather",
    "WeatherSystem",
]
