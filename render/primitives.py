# render/primitives.py
"""Basic drawing primitives shared across render modules."""
from __future__ import annotations

import math
from typing import Dict, List, Tuple

import pygame

from render.config import (
    LINE_HEIGHT,
    COLOR_TEXT_WHITE,
    COLOR_TEXT_HIGHLIGHT,
)

Color = Tuple[int, int, int]
Point = Tuple[float, float]

# Rendered text surfaces keyed by (font_id, text, color)
_TEXT_CACHE: Dict[Tuple[int, str, Color], pygame.Surface] = {}
_TEXT_CACHE_LIMIT = 512


def draw_text(surface, font, text: str, pos: Tuple[int, int], color: Color = COLOR_TEXT_WHITE) -> None:
    """Draw text at the given position, using a cache to avoid re-rendering."""
    cache_key = (id(font), text, color)
    if cache_key not in _TEXT_CACHE:
        # Reports change every tick, so the cache would otherwise grow without bound
        if len(_TEXT_CACHE) >= _TEXT_CACHE_LIMIT:
            _TEXT_CACHE.clear()
        _TEXT_CACHE[cache_key] = font.render(text, True, color)
    surface.blit(_TEXT_CACHE[cache_key], pos)


def draw_section_header(surface, font, text: str, pos: Tuple[int, int], width: int = 200) -> int:
    """Draw a section header with underline. Returns the y position after the header."""
    x, y = pos
    draw_text(surface, font, text, (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += LINE_HEIGHT
    pygame.draw.line(surface, (100, 100, 80), (x, y), (x + width, y), 1)
    return y + 6


def hex_corners(center: Point, size: float) -> List[Point]:
    """Corner points of a flat-topped hex."""
    cx, cy = center
    return [
        (cx + size * math.cos(math.radians(60 * i)), cy + size * math.sin(math.radians(60 * i)))
        for i in range(6)
    ]


def draw_hexagon(surface, color: Color, center: Point, size: float, width: int = 0) -> None:
    pygame.draw.polygon(surface, color, hex_corners(center, size), width)


def draw_arrow(surface, color: Color, start: Point, end: Point, head_size: float = 4.0) -> None:
    """Line from start to end with a small arrowhead at end."""
    pygame.draw.line(surface, color, start, end, 1)
    angle = math.atan2(end[1] - start[1], end[0] - start[0])
    left = (
        end[0] - head_size * math.cos(angle - math.pi / 6),
        end[1] - head_size * math.sin(angle - math.pi / 6),
    )
    right = (
        end[0] - head_size * math.cos(angle + math.pi / 6),
        end[1] - head_size * math.sin(angle + math.pi / 6),
    )
    pygame.draw.polygon(surface, color, [end, left, right])
