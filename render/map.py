# render/map.py
"""Hex map rendering.

Draws every tile with the depth color ramp, the ocean ring around the map
when oceans are enabled, emitter and root markers, and one flow arrow per
tile showing where its water went last tick.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np
import pygame

from render.colors import blend_colors, calculate_elevation_range, color_for_tile
from render.config import (
    COLOR_BG_DARK,
    COLOR_BORDER,
    COLOR_EMITTER,
    COLOR_FLOW_ARROW,
    COLOR_OCEAN,
    COLOR_ROOTS,
    COLOR_SELECTED,
    COLOR_WATER_SHALLOW,
    EMITTER_RADIUS_RATIO,
    FLOW_ARROW_MIN_SIZE,
    FLOW_ARROW_SCALE,
    HEX_OUTLINE_MIN_SIZE,
    HEX_SIZE_MAX,
    HEX_SIZE_MIN,
)
from render.primitives import draw_arrow, draw_hexagon
from world.geometry import Hex, hex_to_world, world_to_hex

if TYPE_CHECKING:
    from game_state.state import SimulationState


@dataclass
class MapLayout:
    """Pixel placement of the hex map inside a viewport."""
    origin: Tuple[float, float]  # Pixel position of hex (0, 0)
    hex_size: float

    @classmethod
    def fit(cls, radius: int, rect: pygame.Rect, show_ocean: bool = True) -> "MapLayout":
        """Largest layout that fits a map of `radius` (plus its ocean ring) in rect."""
        rings = radius + 1 if show_ocean else radius
        by_width = rect.width / (3.0 * rings + 2.0)
        by_height = rect.height / (math.sqrt(3.0) * (2 * rings + 1))
        size = max(HEX_SIZE_MIN, min(HEX_SIZE_MAX, by_width, by_height))
        return cls(origin=(float(rect.centerx), float(rect.centery)), hex_size=size)

    def to_pixel(self, pos: Hex) -> Tuple[float, float]:
        x, y = hex_to_world(pos, self.hex_size)
        return (self.origin[0] + x, self.origin[1] + y)

    def to_hex(self, pixel: Tuple[int, int]) -> Hex:
        return world_to_hex(pixel[0] - self.origin[0], pixel[1] - self.origin[1], self.hex_size)


def render_map(
    surface: pygame.Surface,
    state: "SimulationState",
    layout: MapLayout,
    selected: Optional[Hex] = None,
    show_flow: bool = True,
) -> None:
    """Render the whole map to surface."""
    surface.fill(COLOR_BG_DARK)
    size = layout.hex_size
    outline = size >= HEX_OUTLINE_MIN_SIZE

    if state.water_config.enable_oceans:
        _render_ocean(surface, state, layout)

    elevation_range = calculate_elevation_range(state)
    for pos in state.geometry.tiles:
        center = layout.to_pixel(pos)
        draw_hexagon(surface, color_for_tile(state, pos, elevation_range), center, size)
        if outline:
            draw_hexagon(surface, COLOR_BORDER, center, size, width=1)

    render_sources(surface, state, layout)
    if show_flow and size >= FLOW_ARROW_MIN_SIZE:
        render_flow_arrows(surface, state, layout)

    if selected is not None and state.geometry.is_valid(selected):
        draw_hexagon(surface, COLOR_SELECTED, layout.to_pixel(selected), size, width=2)


def _render_ocean(surface: pygame.Surface, state: "SimulationState", layout: MapLayout) -> None:
    # Lighter when the tide is high
    tide = state.water_config.tide_settings
    peak = tide.minimum + 2 * tide.amplitude
    level = 0.0 if peak <= tide.minimum else (state.ocean.height - tide.minimum) / (peak - tide.minimum)
    color = blend_colors(COLOR_OCEAN, COLOR_WATER_SHALLOW, 0.4 * level)
    for pos in state.geometry.ocean_ring:
        draw_hexagon(surface, color, layout.to_pixel(pos), layout.hex_size)


def render_sources(surface: pygame.Surface, state: "SimulationState", layout: MapLayout) -> None:
    """Mark emitters (filled circles) and rooted structures (rings)."""
    radius = max(2, int(layout.hex_size * EMITTER_RADIUS_RATIO))
    for emitter in state.emitters:
        pygame.draw.circle(surface, COLOR_EMITTER, layout.to_pixel(emitter.tile), radius)
    for structure in state.rooted_structures:
        pygame.draw.circle(surface, COLOR_ROOTS, layout.to_pixel(structure.center), radius, 2)


def render_flow_arrows(surface: pygame.Surface, state: "SimulationState", layout: MapLayout) -> None:
    """One arrow per tile along its last-tick flow velocity."""
    velocity = state.water_table.flow_velocity
    magnitude = np.hypot(velocity[:, 0], velocity[:, 1])
    max_length = layout.hex_size * 0.8

    for index in np.flatnonzero(magnitude > 1e-9):
        start = layout.to_pixel(state.geometry.tiles[index])
        length = min(magnitude[index] * FLOW_ARROW_SCALE * layout.hex_size, max_length)
        dx, dy = velocity[index] / magnitude[index] * length
        draw_arrow(surface, COLOR_FLOW_ARROW, start, (start[0] + dx, start[1] + dy))
