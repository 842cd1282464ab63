# render/hud.py
"""HUD panels: environment info, water budget, selected tile."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from render.primitives import draw_text, draw_section_header
from render.config import (
    LINE_HEIGHT,
    SECTION_SPACING,
    COLOR_TEXT_GRAY,
    COLOR_WATER_SHALLOW,
)
from world.geometry import Hex

if TYPE_CHECKING:
    from game_state.state import SimulationState


def get_time_string(state: "SimulationState") -> str:
    """Formats the current in-game time into a string."""
    time = state.time
    if time.is_night:
        return f"Day {time.day + 1} (Night)"

    # Map the daylight half of the day onto 06:00-18:00
    daylight_minutes = int(time.fraction_of_day * 2 * 12 * 60)
    hour = 6 + daylight_minutes // 60
    minute = daylight_minutes % 60
    return f"Day {time.day + 1}, {hour:02d}:{minute:02d}"


def get_light_string(state: "SimulationState") -> str:
    """Light exposure, with the share of full sunlight during the day."""
    light = state.weather.illuminance(state.time)
    label = f"Light: {light.name.lower().replace('_', ' ')}"
    if state.time.is_night:
        return label
    return f"{label} ({state.weather.light_level():.0%} sun)"


def render_hud(
    screen,
    font,
    state: "SimulationState",
    hud_x: int,
    start_y: int,
    selected: Optional[Hex] = None,
    paused: bool = False,
) -> int:
    """Render the environment, water and tile panels. Returns final y position."""
    y_offset = start_y

    # Environment section
    y_offset = draw_section_header(screen, font, "ENVIRONMENT", (hud_x, y_offset), width=280) + 4
    time_str = get_time_string(state)
    if paused:
        time_str += " [paused]"
    draw_text(screen, font, time_str, (hud_x, y_offset))
    y_offset += LINE_HEIGHT
    draw_text(screen, font, f"Weather: {state.weather.current.value}", (hud_x, y_offset))
    y_offset += LINE_HEIGHT
    draw_text(screen, font, get_light_string(state), (hud_x, y_offset))
    y_offset += LINE_HEIGHT
    if state.water_config.enable_oceans:
        draw_text(screen, font, f"Ocean: {state.ocean.height:.2f}", (hud_x, y_offset), color=COLOR_WATER_SHALLOW)
        y_offset += LINE_HEIGHT
    y_offset += SECTION_SPACING

    # Water section
    water_table = state.water_table
    budget = state.budget
    y_offset = draw_section_header(screen, font, "WATER", (hud_x, y_offset), width=280) + 4
    rows = [
        f"Total: {water_table.total_water():.2f}",
        f"Flooded tiles: {int(water_table.is_flooded().sum())}/{state.geometry.n_tiles}",
        f"Avg table height: {water_table.average_height(state.terrain):.3f}",
        f"Rain in: {budget.precipitated:.2f}",
        f"Springs in: {budget.emitted:.2f}",
        f"Ocean in/out: {budget.ocean_inflow:.2f}/{budget.ocean_outflow:.2f}",
        f"Evaporated: {budget.evaporated:.2f}",
        f"Uptake: {budget.absorbed:.2f}",
    ]
    for row in rows:
        draw_text(screen, font, row, (hud_x, y_offset))
        y_offset += LINE_HEIGHT
    y_offset += SECTION_SPACING

    # Tile section
    y_offset = draw_section_header(screen, font, "TILE", (hud_x, y_offset), width=280) + 4
    if selected is None or not state.geometry.is_valid(selected):
        draw_text(screen, font, "Click a tile to inspect it", (hud_x, y_offset), color=COLOR_TEXT_GRAY)
        return y_offset + LINE_HEIGHT

    terrain = state.terrain
    vx, vy = water_table.get_flow_velocity(selected)
    rows = [
        f"Hex {selected[0]},{selected[1]} ({terrain.get_soil(selected).name})",
        f"Height: {terrain.get_height(selected):.2f}",
        f"Volume: {water_table.get_volume(selected):.3f}",
        f"Depth: {water_table.get_depth(selected)!r}",
        f"Table height: {water_table.get_height(selected, terrain):.3f}",
        f"Net flux: {water_table.net_flux()[state.geometry.index_of(selected)]:+.4f}",
        f"Flow: ({vx:.3f}, {vy:.3f})",
    ]
    for row in rows:
        draw_text(screen, font, row, (hud_x, y_offset))
        y_offset += LINE_HEIGHT
    return y_offset
