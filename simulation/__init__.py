# simulation/__init__.py
"""Water simulation passes for Tidewater.

- ocean: tidal forcing of the ocean boundary
- emitters: springs
- vertical: precipitation, evaporation, external uptake
- roots: root-zone water draw by structures
- lateral: gravity-driven flow between tiles
"""

from simulation.config import TideSettings, WaterConfig
from simulation.ocean import tides
from simulation.emitters import WaterEmitter, produce_water_from_emitters
from simulation.vertical import (
    UptakeRequest,
    apply_uptake_requests,
    evaporation,
    precipitation,
)
from simulation.roots import RootedStructure, RootZone, draw_water_from_roots
from simulation.lateral import (
    TransferLedger,
    apply_transfers,
    compute_lateral_transfers,
    lateral_flow,
    simulate_lateral_flow,
)

__all__ = [
    "TideSettings",
    "WaterConfig",
    "tides",
    "WaterEmitter",
    "produce_water_from_emitters",
    "UptakeRequest",
    "apply_uptake_requests",
    "evaporation",
    "precipitation",
    "RootedStructure",
    "RootZone",
    "draw_water_from_roots",
    "TransferLedger",
    "apply_transfers",
    "compute_lateral_transfers",
    "lateral_flow",
    "simulate_lateral_flow",
]
