# pygame_runner.py
"""
Pygame-CE viewer for the Tidewater water simulation.

Architecture:
- Virtual screen space: fixed 1280x720 layout surface (map viewport, sidebar, log)
- Screen space: actual window pixels (scales with resize, letterboxed)
- Map space: hex coordinates, placed in the viewport by a MapLayout

Mouse input transforms: screen -> virtual -> hex.

Accepts the same scenario options as main.py, e.g.
    python pygame_runner.py --radius 8 --shape bumpy --emitter 0,0
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

try:
    import pygame
except ImportError as exc:
    raise SystemExit("pygame-ce is required. Install with: pip install pygame-ce") from exc

import structlog

from keybindings import (
    ADD_WATER_KEY,
    CONTROL_DESCRIPTIONS,
    EMITTER_KEY,
    FLOW_ARROWS_KEY,
    HELP_KEY,
    LOWER_KEY,
    OCEANS_KEY,
    PAUSE_KEY,
    QUIT_KEY,
    RAISE_KEY,
    REMOVE_WATER_KEY,
    RESET_KEY,
    SLOW_DOWN_KEY,
    SPEED_UP_KEY,
    STEP_KEY,
    WEATHER_KEYS,
)
from logging_config import configure_logging
from main import WATER_CONFIGS, build_parser, simulate_tick
from game_state import SimulationState, build_initial_state
from render import (
    MapLayout,
    draw_text,
    render_event_log,
    render_help_overlay,
    render_hud,
    render_map,
    render_night_overlay,
)
from render.config import (
    COLOR_BG_DARK,
    COLOR_BG_PANEL,
    FONT_SIZE,
    FPS,
    LOG_PANEL_HEIGHT,
    SIDEBAR_WIDTH,
    VIRTUAL_HEIGHT,
    VIRTUAL_WIDTH,
)
from world.generation import MapShape, WaterTableStrategy
from world.geometry import Hex
from world.weather import Weather

logger = structlog.get_logger()

MAX_TICKS_PER_FRAME = 64
EDIT_HEIGHT_STEP = 0.25
EDIT_WATER_STEP = 1.0

MAP_RECT = pygame.Rect(0, 0, VIRTUAL_WIDTH - SIDEBAR_WIDTH, VIRTUAL_HEIGHT - LOG_PANEL_HEIGHT)
SIDEBAR_RECT = pygame.Rect(VIRTUAL_WIDTH - SIDEBAR_WIDTH, 0, SIDEBAR_WIDTH, VIRTUAL_HEIGHT)
LOG_RECT = pygame.Rect(0, VIRTUAL_HEIGHT - LOG_PANEL_HEIGHT, VIRTUAL_WIDTH - SIDEBAR_WIDTH, LOG_PANEL_HEIGHT)


def screen_to_virtual(
    screen_pos: Tuple[int, int],
    screen_size: Tuple[int, int],
) -> Tuple[int, int]:
    """Transform screen coordinates to virtual screen coordinates."""
    screen_w, screen_h = screen_size
    scale = min(screen_w / VIRTUAL_WIDTH, screen_h / VIRTUAL_HEIGHT)
    scaled_w = VIRTUAL_WIDTH * scale
    scaled_h = VIRTUAL_HEIGHT * scale
    offset_x = (screen_w - scaled_w) / 2
    offset_y = (screen_h - scaled_h) / 2

    vx = int((screen_pos[0] - offset_x) / scale)
    vy = int((screen_pos[1] - offset_y) / scale)

    return vx, vy


def blit_virtual_to_screen(virtual_screen: pygame.Surface, screen: pygame.Surface) -> None:
    """Scale and blit the virtual screen to the actual display, with letterboxing."""
    screen_w, screen_h = screen.get_size()
    scale = min(screen_w / VIRTUAL_WIDTH, screen_h / VIRTUAL_HEIGHT)
    scaled_w = int(VIRTUAL_WIDTH * scale)
    scaled_h = int(VIRTUAL_HEIGHT * scale)
    offset_x = (screen_w - scaled_w) // 2
    offset_y = (screen_h - scaled_h) // 2

    screen.fill((0, 0, 0))
    scaled = pygame.transform.scale(virtual_screen, (scaled_w, scaled_h))
    screen.blit(scaled, (offset_x, offset_y))


def apply_edit(state: SimulationState, key: int, tile: Hex) -> None:
    """Apply a tile-editing key to the selected tile."""
    terrain = state.terrain
    water_table = state.water_table
    if key == RAISE_KEY:
        terrain.update_height(tile, terrain.get_height(tile) + EDIT_HEIGHT_STEP)
    elif key == LOWER_KEY:
        terrain.update_height(tile, terrain.get_height(tile) - EDIT_HEIGHT_STEP)
    elif key == ADD_WATER_KEY:
        water_table.add(tile, EDIT_WATER_STEP)
    elif key == REMOVE_WATER_KEY:
        state.request_uptake(tile, EDIT_WATER_STEP)
    elif key == EMITTER_KEY:
        state.add_emitter(tile)
        state.messages.append(f"Spring placed at {tile[0]},{tile[1]}.")
    water_table.update_depth(terrain)


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Main viewer loop."""
    parser = build_parser()
    parser.description = "Watch the water table simulation"
    args = parser.parse_args(argv)
    configure_logging(args.log_level, json=args.json_logs)

    def new_state() -> SimulationState:
        state = build_initial_state(
            radius=args.radius,
            map_shape=MapShape(args.shape),
            strategy=WaterTableStrategy(args.strategy),
            water_config=WATER_CONFIGS[args.config],
            weather=Weather(args.weather),
            fixed_weather=not args.changing_weather,
            emitters=args.emitter,
            soil=args.soil,
            seed=args.seed,
        )
        state.messages.append("Welcome to Tidewater. Press H for help.")
        return state

    pygame.init()
    virtual_screen = pygame.Surface((VIRTUAL_WIDTH, VIRTUAL_HEIGHT))
    screen = pygame.display.set_mode((VIRTUAL_WIDTH, VIRTUAL_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("Tidewater - Water Table Viewer")

    font = pygame.font.Font(None, FONT_SIZE)
    clock = pygame.time.Clock()

    state = new_state()
    layout = MapLayout.fit(state.geometry.radius, MAP_RECT)
    map_surface = pygame.Surface(MAP_RECT.size)

    selected: Optional[Hex] = None
    paused = False
    show_help = False
    show_flow = True
    ticks_per_frame = 1

    running = True
    while running:
        clock.tick(FPS)
        step_once = False

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                continue

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                virtual_pos = screen_to_virtual(event.pos, screen.get_size())
                if MAP_RECT.collidepoint(virtual_pos):
                    tile = layout.to_hex((virtual_pos[0] - MAP_RECT.x, virtual_pos[1] - MAP_RECT.y))
                    selected = tile if state.geometry.is_valid(tile) else None
                continue

            if event.type != pygame.KEYDOWN:
                continue

            key = event.key
            if key == QUIT_KEY:
                running = False
            elif key == HELP_KEY:
                show_help = not show_help
            elif key == PAUSE_KEY:
                paused = not paused
            elif key == STEP_KEY:
                step_once = True
            elif key == SPEED_UP_KEY:
                ticks_per_frame = min(ticks_per_frame * 2, MAX_TICKS_PER_FRAME)
            elif key == SLOW_DOWN_KEY:
                ticks_per_frame = max(ticks_per_frame // 2, 1)
            elif key == RESET_KEY:
                state = new_state()
                selected = None
            elif key == FLOW_ARROWS_KEY:
                show_flow = not show_flow
            elif key == OCEANS_KEY:
                enabled = not state.water_config.enable_oceans
                state.reconfigure(state.water_config.replace(enable_oceans=enabled))
                state.messages.append(f"Oceans {'enabled' if enabled else 'disabled'}.")
            elif key in WEATHER_KEYS:
                state.weather.current = WEATHER_KEYS[key]
                state.messages.append(f"The weather is now {state.weather.current.value}.")
            elif selected is not None:
                apply_edit(state, key, selected)

        if not paused:
            for _ in range(ticks_per_frame):
                simulate_tick(state)
        elif step_once:
            simulate_tick(state)

        # Draw
        virtual_screen.fill(COLOR_BG_DARK)
        render_map(map_surface, state, layout, selected=selected, show_flow=show_flow)
        render_night_overlay(map_surface, state.weather.illuminance(state.time))
        virtual_screen.blit(map_surface, MAP_RECT.topleft)

        pygame.draw.rect(virtual_screen, COLOR_BG_PANEL, SIDEBAR_RECT)
        y = render_hud(virtual_screen, font, state, SIDEBAR_RECT.x + 12, 12, selected=selected, paused=paused)
        if not paused:
            draw_text(virtual_screen, font, f"Speed: x{ticks_per_frame}", (SIDEBAR_RECT.x + 12, y + 8))

        pygame.draw.rect(virtual_screen, COLOR_BG_PANEL, LOG_RECT)
        if show_help:
            render_help_overlay(virtual_screen, font, CONTROL_DESCRIPTIONS,
                                (LOG_RECT.x + 8, LOG_RECT.y + 8), LOG_RECT.width - 8, LOG_RECT.height - 8)
        else:
            render_event_log(virtual_screen, font, state, (LOG_RECT.x + 8, LOG_RECT.y + 8), LOG_RECT.height)

        blit_virtual_to_screen(virtual_screen, screen)
        pygame.display.flip()

    logger.info("viewer.closed", ticks=state.tick_count, total_water=round(state.water_table.total_water(), 6))
    pygame.quit()


if __name__ == "__main__":
    run()
