# main.py
"""
Tidewater - hex-grid water table simulation.

Each tick moves water vertically (tides, springs, rain, uptake, evaporation)
and then laterally between neighboring tiles. Run headless from the command
line, or open the map in the pygame viewer (pygame_runner.py).
"""
from __future__ import annotations

import argparse
from typing import Callable, List, Optional, Sequence, Tuple

import structlog

from config import DEFAULT_MAP_RADIUS, DEFAULT_LOG_LEVEL, SECONDS_PER_DAY
from logging_config import configure_logging
from game_state import SimulationState, build_initial_state
from simulation.config import WaterConfig
from simulation.emitters import produce_water_from_emitters
from simulation.lateral import simulate_lateral_flow
from simulation.ocean import tides
from simulation.roots import draw_water_from_roots
from simulation.vertical import apply_uptake_requests, evaporation, precipitation
from world.generation import MapShape, WaterTableStrategy
from world.geometry import Hex
from world.terrain import DEFAULT_SOIL, SOIL_LIBRARY
from world.weather import Weather

logger = structlog.get_logger()

def resync_depth(state: SimulationState) -> None:
    state.water_table.update_depth(state.terrain)


# One tick, in order: vertical fluxes, depth resync, lateral flow, depth resync
TICK_PASSES: List[Tuple[str, Callable[[SimulationState], object]]] = [
    ("tides", tides),
    ("emitters", produce_water_from_emitters),
    ("precipitation", precipitation),
    ("uptake", apply_uptake_requests),
    ("roots", draw_water_from_roots),
    ("evaporation", evaporation),
    ("depth (vertical)", resync_depth),
    ("lateral flow", simulate_lateral_flow),
    ("depth (lateral)", resync_depth),
]

WATER_CONFIGS = {
    "in_game": WaterConfig.IN_GAME,
    "null": WaterConfig.NULL,
}


def simulate_tick(state: SimulationState) -> None:
    """Run one fixed-interval simulation tick.

    The order is fixed: vertical fluxes see the previous tick's lateral
    result, and lateral flow sees every vertical change made this tick.
    """
    start_tick(state)
    for _, run_pass in TICK_PASSES:
        run_pass(state)
    state.tick_count += 1


def start_tick(state: SimulationState) -> None:
    """Advance the clock and weather, and remember last tick's volumes."""
    state.time.advance(state.tick_interval)
    state.messages.extend(state.weather.tick(state.time))
    state.water_table.cache_previous_volume()


def run_for(state: SimulationState, seconds: float) -> int:
    """Advance the simulation by `seconds` of simulated time.

    Returns the number of ticks run.
    """
    n_ticks = int(round(seconds / state.tick_interval))
    for _ in range(n_ticks):
        simulate_tick(state)
    return n_ticks


def describe_tile(state: SimulationState, tile: Hex) -> str:
    """One-line survey of a tile's terrain and water."""
    terrain = state.terrain
    water_table = state.water_table
    vx, vy = water_table.get_flow_velocity(tile)
    return (
        f"Tile {tile[0]},{tile[1]}: {terrain.get_soil(tile).name}, "
        f"height={terrain.get_height(tile):.2f}, "
        f"volume={water_table.get_volume(tile):.3f}, "
        f"{water_table.get_depth(tile)!r}, "
        f"table={water_table.get_height(tile, terrain):.3f}, "
        f"flow=({vx:.3f}, {vy:.3f})"
    )


def build_report(state: SimulationState) -> List[str]:
    """Summary of the water on the map and where it came from."""
    water_table = state.water_table
    budget = state.budget
    n_flooded = int(water_table.is_flooded().sum())
    lines = [
        f"Day {state.time.day + 1} ({state.time.elapsed_days:.3f} days, {state.tick_count} ticks), "
        f"weather {state.weather.current.value}",
        f"Tiles: {state.geometry.n_tiles}, flooded: {n_flooded}",
        f"Total water: {water_table.total_water():.4f}",
        f"Average water table height: {water_table.average_height(state.terrain):.4f}",
        f"Ocean height: {state.ocean.height:.4f}",
        f"In: rain {budget.precipitated:.4f}, springs {budget.emitted:.4f}, ocean {budget.ocean_inflow:.4f}",
        f"Out: evaporation {budget.evaporated:.4f}, uptake {budget.absorbed:.4f}, ocean {budget.ocean_outflow:.4f}",
    ]
    return lines


def _parse_hex(text: str) -> Hex:
    try:
        q, r = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'q,r', got {text!r}")
    return (q, r)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the water table simulation headless")
    parser.add_argument("--radius", type=int, default=DEFAULT_MAP_RADIUS, help="Map radius in tiles")
    parser.add_argument(
        "--shape",
        choices=[shape.value for shape in MapShape],
        default=MapShape.FLAT.value,
        help="Terrain shape",
    )
    parser.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in WaterTableStrategy],
        default=WaterTableStrategy.DEPTH_ONE.value,
        help="Initial water table",
    )
    parser.add_argument("--config", choices=sorted(WATER_CONFIGS), default="in_game", help="Water config preset")
    parser.add_argument(
        "--weather",
        choices=[weather.value for weather in Weather],
        default=Weather.CLEAR.value,
        help="Starting weather",
    )
    parser.add_argument("--changing-weather", action="store_true", help="Reroll the weather every day")
    parser.add_argument("--soil", choices=sorted(SOIL_LIBRARY), default=DEFAULT_SOIL, help="Soil for every tile")
    parser.add_argument(
        "--emitter",
        type=_parse_hex,
        action="append",
        default=[],
        metavar="Q,R",
        help="Place a spring (repeatable)",
    )
    parser.add_argument("--seconds", type=float, default=SECONDS_PER_DAY / 6, help="Simulated seconds to run")
    parser.add_argument("--seed", type=int, default=None, help="Seed for bumpy terrain and weather")
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL, help="Log level (DEBUG, INFO, ...)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, json=args.json_logs)

    try:
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
    except (ValueError, KeyError) as e:
        parser.error(str(e))

    initial_total = state.water_table.total_water()
    ticks = run_for(state, args.seconds)
    logger.info(
        "simulation.finished",
        ticks=ticks,
        initial_total=round(initial_total, 6),
        final_total=round(state.water_table.total_water(), 6),
        budget_net=round(state.budget.net(), 6),
    )

    for message in state.messages:
        print(message)
    for line in build_report(state):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
