"""
Centralized configuration for Tidewater.

This file contains high-level, cross-cutting constants.
Domain-specific constants are in:
- simulation/config.py (water physics, presets)
- render/config.py (colors, viewer dimensions)
"""
from __future__ import annotations

# =============================================================================
# MAP
# =============================================================================
# Hexagonal map: every axial coordinate within DEFAULT_MAP_RADIUS of the origin
DEFAULT_MAP_RADIUS = 3

# =============================================================================
# UNITS & SCALE
# =============================================================================
# HEIGHT MODEL:
# - Terrain height is measured in tile heights (1.0 = one tile tall)
# - Water volume is measured in tile volumes (1.0 = one tile height of water
#   standing over one tile footprint)
# - Heights are clamped to [0, MAX_TERRAIN_HEIGHT]
MAX_TERRAIN_HEIGHT = 255.0

# =============================================================================
# SOIL DEFAULTS
# =============================================================================
DEFAULT_SOIL_WATER_CAPACITY = 0.5     # Fraction of the column that holds water before flooding
DEFAULT_SOIL_EVAPORATION_RATIO = 0.5  # Only applies while water is underground
DEFAULT_SOIL_LATERAL_FLOW_RATIO = 0.5 # Surface water always flows at 1.0

# =============================================================================
# TIME & SIMULATION
# =============================================================================
TICK_INTERVAL = 1.0 / 60.0  # Seconds of simulated time per tick
SECONDS_PER_DAY = 60.0      # Seconds of simulated time per in-game day
NIGHT_START = 0.5           # Fraction of the day at which night begins (dusk)

# =============================================================================
# LOGGING
# =============================================================================
DEFAULT_LOG_LEVEL = "WARNING"
