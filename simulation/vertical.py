# simulation/vertical.py
"""Vertical water fluxes: precipitation, evaporation and external uptake.

All day-denominated rates are converted to this tick with
utils.scale_daily_rate, scaled by a per-tile multiplier, then applied
through the water table's clamped add/remove.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import structlog

from utils import scale_daily_rate
from world.geometry import Hex
from world.weather import EVAPORATION_MULTIPLIER, Illuminance

if TYPE_CHECKING:
    from game_state.state import SimulationState

logger = structlog.get_logger()

# Indexed by Illuminance value
_EVAPORATION_BY_ILLUMINANCE = np.array(
    [EVAPORATION_MULTIPLIER[level] for level in sorted(Illuminance)],
    dtype=np.float64,
)


def precipitation(state: "SimulationState") -> float:
    """Rain on every tile uniformly.

    Returns the total volume added.
    """
    per_tile = scale_daily_rate(
        state.water_config.precipitation_rate,
        state.time.seconds_per_day,
        state.tick_interval,
    ) * state.weather.precipitation_multiplier()
    if per_tile <= 0:
        return 0.0

    state.water_table.add_array(np.full(state.geometry.n_tiles, per_tile))
    total = per_tile * state.geometry.n_tiles
    state.budget.precipitated += total
    return total


def light_multipliers(state: "SimulationState") -> np.ndarray:
    """Per-tile evaporation multiplier from light exposure.

    Uses the weather system's illuminance everywhere unless the state carries
    a per-tile illuminance override (shade from structures, cliffs, ...).
    """
    if state.illuminance_override is not None:
        return _EVAPORATION_BY_ILLUMINANCE[state.illuminance_override]
    level = state.weather.illuminance(state.time)
    return np.full(state.geometry.n_tiles, EVAPORATION_MULTIPLIER[level])


def evaporation(state: "SimulationState") -> float:
    """Evaporate water from every tile.

    Open water evaporates at the full (light-scaled) rate; water held in soil
    is further slowed by the soil's evaporation ratio.

    Returns the total volume removed.
    """
    base = scale_daily_rate(
        state.water_config.evaporation_rate,
        state.time.seconds_per_day,
        state.tick_interval,
    )
    if base <= 0:
        return 0.0

    water_table = state.water_table
    soil_ratio = np.where(water_table.is_flooded(), 1.0, state.terrain.evaporation_ratio)
    requested = base * light_multipliers(state) * soil_ratio
    removed = water_table.remove_array(requested)

    # Tiles that held some water but not enough for the full amount
    dried_out = int(np.count_nonzero((removed < requested) & (removed > 0)))
    if dried_out:
        logger.debug("evaporation.clamped", tick=state.tick_count, tiles=dried_out)

    total = float(np.sum(removed))
    state.budget.evaporated += total
    return total


@dataclass
class UptakeRequest:
    """A collaborator's request to take water from one tile.

    `removed` is filled in during the tick's uptake step with the amount
    actually taken (never more than the tile held).
    """
    tile: Hex
    amount: float
    removed: float = 0.0
    fulfilled: bool = False


def apply_uptake_requests(state: "SimulationState") -> float:
    """Serve and clear every queued uptake request.

    Returns the total volume removed.
    """
    total = 0.0
    short = 0
    for request in state.uptake_requests:
        request.removed = state.water_table.remove(request.tile, request.amount)
        request.fulfilled = True
        total += request.removed
        if request.removed < request.amount:
            short += 1
    if short:
        logger.debug("uptake.clamped", tick=state.tick_count, requests=short)
    state.uptake_requests.clear()

    state.budget.absorbed += total
    return total
