# simulation/ocean.py
"""Tidal forcing of the ocean boundary."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from game_state.state import SimulationState


def tides(state: "SimulationState") -> float:
    """Raise or lower the ocean to match the current in-game time.

    Returns the new ocean height.
    """
    return state.ocean.update(state.water_config.tide_settings, state.time.elapsed_days)
