# simulation/lateral.py
"""Gravity-driven lateral water flow between neighboring hex tiles.

Water moves from a tile to each lower neighbor at a rate proportional to the
difference in water table height (not raw volume, not terrain height).

Key concepts:
- One synchronized pass: every proposal is computed from the same snapshot,
  collected into a TransferLedger, and only then committed
- Flow through soil is slower than flow over flooded ground (medium coefficient)
- A tile never sends away more than would drop it to the mean water table
  height of its neighborhood, and never more than it holds
- Off-map neighbors are the ocean when oceans are enabled: water drains into
  it and flows back out of it, but the ocean itself never runs dry
- Flow velocity is bookkeeping: the sum of outflow volumes along each hex
  direction
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import structlog

from simulation.config import WaterConfig
from utils import scale_daily_rate
from water import WaterTable, volume_at_water_table_height
from world.geometry import DIRECTION_VECTORS, MapGeometry
from world.terrain import TerrainColumns

if TYPE_CHECKING:
    from game_state.state import SimulationState

logger = structlog.get_logger()

# Open water (and the ocean) always flows at the full rate
SURFACE_FLOW_RATIO = 1.0

# Largest negative volume a commit may leave behind from float rounding
ROUNDING_TOLERANCE = 1e-9


def lateral_flow(
    base_rate: float,
    soil_rate_a: float,
    soil_rate_b: float,
    height_a: float,
    height_b: float,
    water_height_a: float,
    water_height_b: float,
) -> float:
    """Volume that should move from tile A to neighbor B in one tick.

    The result is halved because every pair is evaluated from both sides
    during a pass; only the downhill side produces a non-zero amount.

    Args:
        base_rate: Lateral flow rate already scaled to this tick
        soil_rate_a, soil_rate_b: Soil lateral flow ratios
        height_a, height_b: Terrain heights
        water_height_a, water_height_b: Water table heights

    Returns:
        Volume to transfer from A to B (0.0 unless A's table is higher)
    """
    assert base_rate >= 0, f"Negative flow rate {base_rate}"
    assert soil_rate_a >= 0 and soil_rate_b >= 0, "Negative soil flow ratio"
    assert height_a >= 0 and height_b >= 0, "Negative terrain height"
    assert water_height_a >= 0 and water_height_b >= 0, "Negative water table height"

    delta = water_height_a - water_height_b
    # Water only flows down the water table
    if delta <= 0:
        return 0.0

    surface_a = water_height_a > height_a
    surface_b = water_height_b > height_b

    if surface_a and surface_b:
        medium_coefficient = SURFACE_FLOW_RATIO
    elif not surface_a and not surface_b:
        medium_coefficient = (soil_rate_a + soil_rate_b) / 2.0
    else:
        soil_rate = soil_rate_b if surface_a else soil_rate_a
        medium_coefficient = (SURFACE_FLOW_RATIO + soil_rate) / 2.0

    return delta * medium_coefficient * base_rate / 2.0


def lateral_flow_array(
    base_rate: float,
    soil_rate_a: np.ndarray,
    soil_rate_b: np.ndarray,
    surface_a: np.ndarray,
    surface_b: np.ndarray,
    water_height_a: np.ndarray,
    water_height_b: np.ndarray,
) -> np.ndarray:
    """Vectorized lateral_flow over broadcastable arrays.

    Takes precomputed surface flags so the ocean slot can be forced to count
    as open water.
    """
    assert base_rate >= 0, f"Negative flow rate {base_rate}"
    assert np.all(soil_rate_a >= 0) and np.all(soil_rate_b >= 0), "Negative soil flow ratio"
    assert np.all(water_height_a >= 0) and np.all(water_height_b >= 0), "Negative water table height"

    delta = np.maximum(water_height_a - water_height_b, 0.0)
    mixed_soil_rate = np.where(surface_a, soil_rate_b, soil_rate_a)
    medium_coefficient = np.where(
        surface_a & surface_b,
        SURFACE_FLOW_RATIO,
        np.where(
            ~surface_a & ~surface_b,
            (soil_rate_a + soil_rate_b) / 2.0,
            (SURFACE_FLOW_RATIO + mixed_soil_rate) / 2.0,
        ),
    )
    return delta * medium_coefficient * base_rate / 2.0


@dataclass(frozen=True)
class TransferLedger:
    """Result of the gather phase of one lateral flow pass.

    additions: (n_tiles,) volume each tile receives from land and ocean
    removals: (n_tiles,) volume each tile sends away
    outflow: (n_tiles, 6) volume sent in each hex direction
    """
    additions: np.ndarray
    removals: np.ndarray
    outflow: np.ndarray
    ocean_inflow: float = 0.0
    ocean_outflow: float = 0.0
    clamped_tiles: int = 0

    def net_change(self) -> np.ndarray:
        return self.additions - self.removals


def compute_lateral_transfers(
    geometry: MapGeometry,
    terrain: TerrainColumns,
    water_table: WaterTable,
    water_config: WaterConfig,
    ocean_height: float,
    base_rate: float,
) -> TransferLedger:
    """Gather phase: propose every transfer from the current snapshot.

    Reads the water table's cached depth, so update_depth must have run
    since volumes last changed. Does not modify anything.
    """
    assert base_rate >= 0, f"Negative flow rate {base_rate}"
    assert ocean_height >= 0, f"Negative ocean height {ocean_height}"

    n = geometry.n_tiles
    volume = water_table.volume
    height = terrain.height
    assert np.all(volume >= 0), "Negative water volume"
    assert np.all(height >= 0), "Negative terrain height"
    soil_rate = terrain.lateral_flow_ratio
    water_height = water_table.water_table_heights(terrain)
    surface = water_height > height

    # Extend per-tile arrays with the ocean slot so neighbors gather in one step
    water_height_ext = np.append(water_height, ocean_height)
    soil_rate_ext = np.append(soil_rate, SURFACE_FLOW_RATIO)
    surface_ext = np.append(surface, True)

    neighbors = geometry.neighbors
    if water_config.enable_oceans:
        linked = np.ones_like(geometry.ocean_mask)
    else:
        linked = ~geometry.ocean_mask

    neighbor_height = water_height_ext[neighbors]

    # 1. Pairwise proposals, only from tiles that hold water
    proposals = lateral_flow_array(
        base_rate,
        soil_rate[:, None],
        soil_rate_ext[neighbors],
        surface[:, None],
        surface_ext[neighbors],
        water_height[:, None],
        neighbor_height,
    )
    proposals = np.where(linked & (volume[:, None] > 0), proposals, 0.0)

    # 2. Local cap: no tile drains below the mean table height of its neighborhood.
    # This damps oscillation but does not remove it at extreme flow rates.
    neighbor_count = np.sum(linked, axis=1)
    neighbor_total = np.sum(np.where(linked, neighbor_height, 0.0), axis=1)
    local_mean = (water_height + neighbor_total) / (1 + neighbor_count)
    cap = np.maximum(
        volume - volume_at_water_table_height(local_mean, height, terrain.water_capacity),
        0.0,
    )

    # 3. Scale all of a tile's proposals by one ratio so the total fits
    allowed = np.minimum(cap, volume)
    total_proposed = np.sum(proposals, axis=1)
    over = total_proposed > allowed
    scale = np.divide(allowed, total_proposed, out=np.ones_like(total_proposed), where=over)
    outflow = proposals * scale[:, None]

    # 4. Ledger: removals from senders, additions to land receivers
    removals = np.sum(outflow, axis=1)
    additions = np.zeros(n, dtype=np.float64)
    to_land = ~geometry.ocean_mask
    np.add.at(additions, neighbors[to_land], outflow[to_land])
    ocean_outflow = float(np.sum(outflow[geometry.ocean_mask]))

    # 5. The ocean pushes water into boundary tiles; it is never decremented
    ocean_inflow = 0.0
    if water_config.enable_oceans:
        inflow = lateral_flow_array(
            base_rate,
            SURFACE_FLOW_RATIO,
            soil_rate[:, None],
            np.array(True),
            surface[:, None],
            ocean_height,
            water_height[:, None],
        )
        inflow = np.where(geometry.ocean_mask, inflow, 0.0)
        inflow_per_tile = np.sum(inflow, axis=1)
        additions += inflow_per_tile
        ocean_inflow = float(np.sum(inflow_per_tile))

    return TransferLedger(
        additions=additions,
        removals=removals,
        outflow=outflow,
        ocean_inflow=ocean_inflow,
        ocean_outflow=ocean_outflow,
        clamped_tiles=int(np.count_nonzero(over)),
    )


def apply_transfers(water_table: WaterTable, ledger: TransferLedger) -> None:
    """Commit phase: apply a ledger and publish flow velocity."""
    water_table.volume += ledger.additions
    water_table.volume -= ledger.removals
    # Scaling keeps removals within each tile's volume, so only rounding can dip below zero
    assert np.all(water_table.volume >= -ROUNDING_TOLERANCE), (
        f"Lateral flow drained a tile to {water_table.volume.min()}"
    )
    np.maximum(water_table.volume, 0.0, out=water_table.volume)

    # (n_tiles, 6) @ (6, 2): one vector per direction, magnitude = volume sent
    water_table.flow_velocity = ledger.outflow @ DIRECTION_VECTORS


def simulate_lateral_flow(state: "SimulationState") -> TransferLedger:
    """Run one lateral flow pass on the simulation state."""
    base_rate = scale_daily_rate(
        state.water_config.lateral_flow_rate,
        state.time.seconds_per_day,
        state.tick_interval,
    )
    ledger = compute_lateral_transfers(
        state.geometry,
        state.terrain,
        state.water_table,
        state.water_config,
        state.ocean.height,
        base_rate,
    )
    apply_transfers(state.water_table, ledger)

    state.budget.ocean_inflow += ledger.ocean_inflow
    state.budget.ocean_outflow += ledger.ocean_outflow
    if ledger.clamped_tiles:
        logger.debug("lateral_flow.clamped", tick=state.tick_count, tiles=ledger.clamped_tiles)
    return ledger
