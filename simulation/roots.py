# simulation/roots.py
"""Roots: structures that draw water from the nearby water table.

A rooted structure keeps a small store of water items. Each tick it asks for
the items it is missing, converted to tile volumes, and takes that volume
evenly from every reachable tile through the water table's uptake hook.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List

from water import DepthKind, WaterTable
from world.geometry import Hex, MapGeometry

if TYPE_CHECKING:
    from game_state.state import SimulationState


@dataclass(frozen=True)
class RootZone:
    """The volume around a tile that roots can draw water from."""
    # Depth below the surface beyond which roots cannot reach
    max_depth: float
    # Water can only be drawn from tiles within this many steps
    radius: int

    def __str__(self) -> str:
        return f"Root Zone: {self.max_depth} tiles deep, {self.radius} tiles radius"

    def relevant_tiles(self, center: Hex, geometry: MapGeometry, water_table: WaterTable) -> List[Hex]:
        """Tiles in range whose water table is within reach of the roots."""
        relevant = []
        for pos in geometry.tiles_within(center, self.radius):
            depth = water_table.get_depth(pos)
            if depth.kind == DepthKind.FLOODED:
                relevant.append(pos)
            elif depth.kind == DepthKind.UNDERGROUND and depth.value <= self.max_depth:
                relevant.append(pos)
        return relevant


@dataclass
class RootedStructure:
    """A structure with roots and an inventory of water items."""
    center: Hex
    root_zone: RootZone
    max_water_items: int
    water_items: int = 0

    def remaining_space(self) -> int:
        return max(self.max_water_items - self.water_items, 0)

    def take_water(self, items: int) -> int:
        """Consume up to `items` stored water items. Returns the number consumed."""
        taken = min(items, self.water_items)
        self.water_items -= taken
        return taken


def draw_water_from_roots(state: "SimulationState") -> float:
    """Fill every rooted structure's water store from its root zone.

    Fractions of an item that are drawn but cannot be stored are lost.

    Returns the total volume drawn.
    """
    water_config = state.water_config
    water_table = state.water_table

    total_drawn = 0.0
    for structure in state.rooted_structures:
        items_requested = structure.remaining_space()
        if items_requested == 0:
            continue

        tiles = structure.root_zone.relevant_tiles(structure.center, state.geometry, water_table)
        if not tiles:
            continue

        water_per_tile = water_config.items_to_tiles(items_requested) / len(tiles)
        drawn = 0.0
        for pos in tiles:
            drawn += water_table.remove(pos, water_per_tile)

        structure.water_items += water_config.tiles_to_items(drawn)
        total_drawn += drawn

    state.budget.absorbed += total_drawn
    return total_drawn
