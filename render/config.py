# render/config.py
"""
Configuration constants for the rendering domain.
Includes window dimensions, hex sizing, colors, and font sizes for the viewer.
"""
from __future__ import annotations

from typing import Tuple

# =============================================================================
# UI LAYOUT & DIMENSIONS
# =============================================================================
VIRTUAL_WIDTH = 1280
VIRTUAL_HEIGHT = 720

SIDEBAR_WIDTH = 320
LINE_HEIGHT = 20
FONT_SIZE = 18
SECTION_SPACING = 8
LOG_PANEL_HEIGHT = 140

HEX_SIZE_MAX = 48            # Center-to-corner hex size in pixels
HEX_SIZE_MIN = 3
HEX_OUTLINE_MIN_SIZE = 10    # Below this size hex outlines are skipped
FLOW_ARROW_MIN_SIZE = 12     # Below this size flow arrows are skipped
FLOW_ARROW_SCALE = 40.0      # Pixels per tile volume per tick, before clamping to the hex
EMITTER_RADIUS_RATIO = 0.3   # Emitter marker radius as a fraction of hex size

FPS = 60

# =============================================================================
# COLORS
# =============================================================================
# UI Colors
COLOR_BG_DARK = (20, 20, 25)
COLOR_BG_PANEL = (25, 25, 30)
COLOR_BORDER = (40, 40, 40)
COLOR_TEXT_WHITE = (230, 230, 230)
COLOR_TEXT_GRAY = (160, 160, 160)
COLOR_TEXT_DIM = (100, 100, 100)
COLOR_TEXT_HIGHLIGHT = (220, 200, 120)

# Map / Feature Colors
COLOR_OCEAN = (28, 70, 130)
COLOR_WATER_SHALLOW = (92, 180, 238)
COLOR_WATER_DEEP = (30, 90, 180)
COLOR_EMITTER = (100, 180, 240)
COLOR_ROOTS = (90, 160, 70)
COLOR_FLOW_ARROW = (240, 240, 240)
COLOR_SELECTED: Tuple[int, int, int] = (240, 240, 90)

# Depth color ramp
DRY_SOIL_DARKEN = 0.85       # Dry tiles are drawn slightly darker than their soil
SATURATION_BLEND_MAX = 0.6   # Blend toward shallow water as the table nears the surface
FLOOD_DEPTH_FULL = 2.0       # Standing water this deep is drawn fully "deep"

# Elevation-based coloring
ELEVATION_BRIGHTNESS_MIN = 0.7
ELEVATION_BRIGHTNESS_MAX = 1.3
