# render/colors.py
"""Color calculations for hex-map rendering.

Provides utilities for:
- Elevation-based brightness scaling
- Color blending
- The depth color ramp: dry soil, damp soil, shallow and deep standing water
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Tuple, cast

from render.config import (
    COLOR_WATER_DEEP,
    COLOR_WATER_SHALLOW,
    DRY_SOIL_DARKEN,
    ELEVATION_BRIGHTNESS_MAX,
    ELEVATION_BRIGHTNESS_MIN,
    FLOOD_DEPTH_FULL,
    SATURATION_BLEND_MAX,
)
from water import DepthKind, WaterDepth

if TYPE_CHECKING:
    from game_state.state import SimulationState

Color = Tuple[int, int, int]


def calculate_elevation_range(state: "SimulationState") -> Tuple[float, float]:
    """Calculate min/max terrain height across all tiles."""
    heights = state.terrain.height
    return (float(heights.min()), float(heights.max()))


def elevation_brightness(elevation: float, min_elev: float, max_elev: float) -> float:
    """Calculate brightness multiplier based on elevation."""
    if max_elev == min_elev:
        return 1.0
    normalized = (elevation - min_elev) / (max_elev - min_elev)
    return ELEVATION_BRIGHTNESS_MIN + (normalized * (ELEVATION_BRIGHTNESS_MAX - ELEVATION_BRIGHTNESS_MIN))


def apply_brightness(color: Color, brightness: float) -> Color:
    """Apply brightness multiplier to a color."""
    return cast(Color, tuple(max(0, min(255, int(c * brightness))) for c in color))


def blend_colors(color1: Color, color2: Color, weight: float = 0.5) -> Color:
    """Blend two colors with given weight (0 = all color1, 1 = all color2)."""
    return cast(Color, tuple(int(c1 * (1 - weight) + c2 * weight) for c1, c2 in zip(color1, color2)))


def depth_color(soil_color: Color, depth: WaterDepth, terrain_height: float) -> Color:
    """Color for a tile's water state.

    Underground water tints the soil toward shallow water the closer the table
    is to the surface. Standing water goes from shallow to deep blue.
    """
    if depth.kind == DepthKind.DRY:
        return apply_brightness(soil_color, DRY_SOIL_DARKEN)

    if depth.kind == DepthKind.UNDERGROUND:
        if terrain_height <= 0:
            return soil_color
        wetness = 1.0 - min(depth.value / terrain_height, 1.0)
        return blend_colors(soil_color, COLOR_WATER_SHALLOW, wetness * SATURATION_BLEND_MAX)

    return blend_colors(COLOR_WATER_SHALLOW, COLOR_WATER_DEEP, min(depth.value / FLOOD_DEPTH_FULL, 1.0))


def color_for_tile(state: "SimulationState", pos, elevation_range: Tuple[float, float]) -> Color:
    """Final draw color for a tile: depth ramp, then elevation shading."""
    terrain = state.terrain
    height = terrain.get_height(pos)
    base = depth_color(terrain.get_soil(pos).display_color, state.water_table.get_depth(pos), height)
    return apply_brightness(base, elevation_brightness(height, *elevation_range))
