"""
Rendering module for the Tidewater pygame viewer.

Provides modular rendering functions for the hex map, HUD, and overlays.
"""
from render.colors import (
    Color,
    calculate_elevation_range,
    elevation_brightness,
    apply_brightness,
    blend_colors,
    depth_color,
    color_for_tile,
)
from render.primitives import draw_text, draw_section_header, draw_hexagon, draw_arrow
from render.map import MapLayout, render_map, render_flow_arrows, render_sources
from render.hud import render_hud
from render.overlays import render_help_overlay, render_night_overlay, render_event_log

__all__ = [
    # Colors
    "Color",
    "calculate_elevation_range",
    "elevation_brightness",
    "apply_brightness",
    "blend_colors",
    "depth_color",
    "color_for_tile",
    # Primitives
    "draw_text",
    "draw_section_header",
    "draw_hexagon",
    "draw_arrow",
    # Map
    "MapLayout",
    "render_map",
    "render_flow_arrows",
    "render_sources",
    # HUD
    "render_hud",
    # Overlays
    "render_help_overlay",
    "render_night_overlay",
    "render_event_log",
]
