# render/overlays.py
"""Overlay rendering: help screen, night effect, event log."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

import pygame

from render.primitives import draw_text
from render.config import (
    LINE_HEIGHT,
    COLOR_BG_PANEL,
    COLOR_TEXT_HIGHLIGHT,
    COLOR_TEXT_GRAY,
    COLOR_TEXT_DIM,
)
from world.weather import Illuminance

if TYPE_CHECKING:
    from game_state.state import SimulationState

# Darkening alpha per light level
_NIGHT_ALPHA = {
    Illuminance.DARK: 140,
    Illuminance.DIMLY_LIT: 50,
    Illuminance.BRIGHTLY_LIT: 0,
}


def render_help_overlay(
    surface,
    font,
    controls: List[str],
    pos: Tuple[int, int],
    available_width: int,
    available_height: int,
) -> None:
    """Render the help overlay with control descriptions.

    Args:
        surface: The pygame surface to draw on.
        font: The pygame font to use for rendering text.
        controls: A list of strings, each describing a control.
        pos: The (x, y) coordinates for the top-left corner of the overlay.
        available_width: The maximum width for the overlay.
        available_height: The maximum height for the overlay.
    """
    x, y = pos
    col_width, row_height = 170, 18
    cols = max(1, available_width // col_width)

    pygame.draw.rect(surface, COLOR_BG_PANEL, (x - 4, y - 4, available_width, available_height), 0)
    draw_text(surface, font, "CONTROLS", (x, y), color=COLOR_TEXT_HIGHLIGHT)
    y += row_height + 4

    for i, control in enumerate(controls):
        cx = x + (i % cols * col_width)
        cy = y + (i // cols * row_height)
        if cy + row_height < pos[1] + available_height:
            draw_text(surface, font, control, (cx, cy), color=COLOR_TEXT_GRAY)


def render_event_log(
    surface,
    font,
    state: "SimulationState",
    pos: Tuple[int, int],
    max_height: int,
) -> None:
    """Render the most recent event log messages that fit in max_height."""
    log_x, log_y = pos
    draw_text(surface, font, "EVENT LOG", (log_x, log_y), color=COLOR_TEXT_HIGHLIGHT)
    log_y += LINE_HEIGHT + 4

    visible_count = (max_height - 40) // 18
    if visible_count <= 0:
        return

    messages = state.messages
    start_idx = max(0, len(messages) - visible_count)
    for i in range(start_idx, len(messages)):
        draw_text(surface, font, f"- {messages[i]}", (log_x, log_y), color=(160, 200, 160))
        log_y += 18

    if start_idx > 0:
        draw_text(surface, font, f"[{start_idx} older]", (log_x, log_y), color=COLOR_TEXT_DIM)


def render_night_overlay(surface: pygame.Surface, illuminance: Illuminance) -> None:
    """Darken the map according to the current light level."""
    night_alpha = _NIGHT_ALPHA[illuminance]
    if night_alpha > 0:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill((10, 20, 40, night_alpha))
        surface.blit(overlay, (0, 0))
