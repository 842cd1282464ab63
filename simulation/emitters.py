# simulation/emitters.py
"""Point sources (springs) that produce water from nothing.

An emitter pushes water out against the weight of the water standing on it:
production falls linearly with the depth of surface water and stops once
that depth reaches the emitter's pressure.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from simulation.config import WaterConfig
from world.geometry import Hex

if TYPE_CHECKING:
    from game_state.state import SimulationState

logger = structlog.get_logger()


@dataclass(frozen=True)
class WaterEmitter:
    """A spring on one tile."""
    tile: Hex
    # Maximum depth of standing water the emitter can push through
    pressure: float

    @classmethod
    def from_config(cls, tile: Hex, water_config: WaterConfig) -> "WaterEmitter":
        return cls(tile=tile, pressure=water_config.emission_pressure)

    def current_water_production(self, surface_water_depth: float, water_config: WaterConfig) -> float:
        """Volume produced per day while covered by surface_water_depth of water.

        Underground water exerts no pressure on the emitter, so callers pass
        zero for tiles that are not flooded.
        """
        assert surface_water_depth >= 0, f"Negative surface water depth {surface_water_depth}"
        remaining_pressure = max(self.pressure - surface_water_depth, 0.0)
        return remaining_pressure * water_config.emission_rate

    def max_water_production(self, water_config: WaterConfig) -> float:
        """Volume produced per day by an uncovered emitter."""
        return self.pressure * water_config.emission_rate


def produce_water_from_emitters(state: "SimulationState") -> float:
    """Add each emitter's production for this tick to its tile.

    Returns the total volume produced.
    """
    water_config = state.water_config
    if water_config.emission_rate == 0 or not state.emitters:
        return 0.0

    elapsed_days = state.tick_interval / state.time.seconds_per_day
    water_table = state.water_table

    total = 0.0
    covered = 0
    for emitter in state.emitters:
        surface_depth = water_table.get_depth(emitter.tile).surface_water_depth()
        produced = emitter.current_water_production(surface_depth, water_config) * elapsed_days
        if produced > 0:
            water_table.add(emitter.tile, produced)
            total += produced
        else:
            covered += 1
    if covered:
        logger.debug("emitters.covered", tick=state.tick_count, emitters=covered)

    state.budget.emitted += total
    return total
