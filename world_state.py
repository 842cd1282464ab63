"""Global world state for the water simulation.

- Ocean: the single tide-driven height of the infinite reservoir around the map
- WaterBudget: running totals of every flux that crosses the map's boundary

Only precipitation, emission, ocean exchange, uptake and evaporation change
the amount of water on the map. Lateral flow between tiles moves water
without creating or destroying it, so

    initial_total + budget.net() == current_total

holds to within floating point error.
"""
from __future__ import annotations

from dataclasses import dataclass

from simulation.config import TideSettings


@dataclass
class Ocean:
    """Current state of the ocean beyond the map edge."""
    height: float = 0.0

    def update(self, tide_settings: TideSettings, elapsed_days: float) -> float:
        """Recompute the tide height for the current time."""
        self.height = tide_settings.height_at(elapsed_days)
        return self.height


@dataclass
class WaterBudget:
    """Cumulative water entering and leaving the map."""
    precipitated: float = 0.0
    emitted: float = 0.0
    ocean_inflow: float = 0.0
    evaporated: float = 0.0
    absorbed: float = 0.0        # Taken through the uptake hook
    ocean_outflow: float = 0.0

    def total_in(self) -> float:
        return self.precipitated + self.emitted + self.ocean_inflow

    def total_out(self) -> float:
        return self.evaporated + self.absorbed + self.ocean_outflow

    def net(self) -> float:
        """Net water gained by the map."""
        return self.total_in() - self.total_out()
