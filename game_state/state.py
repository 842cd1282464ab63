# game_state/state.py
"""Core simulation state container."""
from __future__ import annotations

import collections
from dataclasses import dataclass, field
from typing import Deque, List, Optional

import numpy as np

from config import TICK_INTERVAL
from simulation.config import WaterConfig
from simulation.emitters import WaterEmitter
from simulation.roots import RootedStructure
from simulation.vertical import UptakeRequest
from water import WaterTable
from world.geometry import Hex, MapGeometry
from world.terrain import TerrainColumns
from world.weather import Illuminance, InGameTime, WeatherSystem
from world_state import Ocean, WaterBudget


@dataclass
class SimulationState:
    """Everything one water simulation run reads and writes.

    Geometry, terrain and config are read-only during a tick; they may be
    replaced or edited between ticks. The water table is written only by the
    simulation passes.
    """
    geometry: MapGeometry
    terrain: TerrainColumns
    water_table: WaterTable
    water_config: WaterConfig = WaterConfig.IN_GAME
    time: InGameTime = field(default_factory=InGameTime)
    weather: WeatherSystem = field(default_factory=WeatherSystem)
    ocean: Ocean = field(default_factory=Ocean)
    budget: WaterBudget = field(default_factory=WaterBudget)
    tick_interval: float = TICK_INTERVAL
    tick_count: int = 0

    # Water sources and consumers
    emitters: List[WaterEmitter] = field(default_factory=list)
    rooted_structures: List[RootedStructure] = field(default_factory=list)
    uptake_requests: List[UptakeRequest] = field(default_factory=list)

    # Shape: (n_tiles,), dtype=int8. Per-tile Illuminance; None = follow the weather.
    illuminance_override: Optional[np.ndarray] = None

    messages: Deque[str] = field(default_factory=lambda: collections.deque(maxlen=100))

    def request_uptake(self, tile: Hex, amount: float) -> UptakeRequest:
        """Queue a request to take up to `amount` water from `tile` next tick."""
        self.geometry.index_of(tile)
        request = UptakeRequest(tile=tile, amount=amount)
        self.uptake_requests.append(request)
        return request

    def add_emitter(self, tile: Hex, pressure: Optional[float] = None) -> WaterEmitter:
        """Place a spring on a tile. Pressure defaults to the configured emission pressure."""
        self.geometry.index_of(tile)
        if pressure is None:
            emitter = WaterEmitter.from_config(tile, self.water_config)
        else:
            emitter = WaterEmitter(tile=tile, pressure=pressure)
        self.emitters.append(emitter)
        return emitter

    def set_illuminance(self, tile: Hex, level: Illuminance) -> None:
        """Pin the light level of one tile (the rest keep following the weather)."""
        if self.illuminance_override is None:
            current = self.weather.illuminance(self.time)
            self.illuminance_override = np.full(self.geometry.n_tiles, int(current), dtype=np.int8)
        self.illuminance_override[self.geometry.index_of(tile)] = int(level)

    def reconfigure(self, water_config: WaterConfig) -> None:
        """Swap the water configuration between ticks."""
        self.water_config = water_config
