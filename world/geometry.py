# world/geometry.py
"""Hexagonal map topology.

Tiles are addressed by axial coordinates (q, r) on a flat-topped hex layout.
The map is the hexagon of every coordinate within `radius` of the origin.

Key concepts:
- Each tile gets a dense index (0..n_tiles-1) so per-tile data can live in
  flat NumPy arrays
- Adjacency is precomputed as an (n_tiles, 6) index array
- Off-map neighbors point at the OCEAN slot (index n_tiles) instead of None,
  so flow code can gather "neighbor or ocean" values with a single fancy index
- The ring of coordinates just outside the radius is the ocean boundary
"""
from __future__ import annotations

import math
from typing import Dict, List, Tuple

import numpy as np

Hex = Tuple[int, int]

# Axial offsets of the six neighbors, counterclockwise starting east
HEX_DIRECTIONS: Tuple[Hex, ...] = (
    (1, 0), (1, -1), (0, -1),
    (-1, 0), (-1, 1), (0, 1),
)


def hex_distance(a: Hex, b: Hex) -> int:
    """Number of steps between two hexes.

    Example: (0,0) to (2,-1) -> 2
    """
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def hexagon(center: Hex, radius: int) -> List[Hex]:
    """All hexes within radius of center (inclusive), in stable q-major order."""
    cq, cr = center
    result = []
    for dq in range(-radius, radius + 1):
        for dr in range(max(-radius, -dq - radius), min(radius, -dq + radius) + 1):
            result.append((cq + dq, cr + dr))
    return result


def hex_ring(center: Hex, radius: int) -> List[Hex]:
    """Hexes at exactly `radius` steps from center."""
    return [h for h in hexagon(center, radius) if hex_distance(center, h) == radius]


def hex_to_world(pos: Hex, size: float = 1.0) -> Tuple[float, float]:
    """World-plane center of a hex (flat-topped layout)."""
    q, r = pos
    x = size * 1.5 * q
    y = size * math.sqrt(3.0) * (r + q / 2.0)
    return x, y


def world_to_hex(x: float, y: float, size: float = 1.0) -> Hex:
    """Hex containing a world-plane point (inverse of hex_to_world)."""
    q = (2.0 / 3.0 * x) / size
    r = (-1.0 / 3.0 * x + math.sqrt(3.0) / 3.0 * y) / size
    s = -q - r

    # Cube rounding: fix the component with the largest rounding error
    rq, rr, rs = round(q), round(r), round(s)
    dq, dr, ds = abs(rq - q), abs(rr - r), abs(rs - s)
    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr > ds:
        rr = -rq - rs
    return (int(rq), int(rr))


def _direction_vectors() -> np.ndarray:
    vectors = np.array([hex_to_world(d) for d in HEX_DIRECTIONS], dtype=np.float64)
    return vectors / np.linalg.norm(vectors, axis=1, keepdims=True)


# Shape: (6, 2). Unit world-plane vector for each entry of HEX_DIRECTIONS.
DIRECTION_VECTORS = _direction_vectors()


class MapGeometry:
    """Fixed adjacency structure for a hexagonal map.

    Read-only once built. Terrain heights and soils live in world.terrain,
    water in water.WaterTable; both are indexed with `index_of`.
    """

    def __init__(self, radius: int):
        assert radius >= 0, f"Map radius must be non-negative, got {radius}"
        self.radius = radius
        self.tiles: List[Hex] = hexagon((0, 0), radius)
        self._index: Dict[Hex, int] = {pos: i for i, pos in enumerate(self.tiles)}
        self.n_tiles = len(self.tiles)

        # Sentinel slot standing in for every off-map neighbor
        self.ocean_index = self.n_tiles

        # Shape: (n_tiles, 6), dtype=intp. Neighbor index or ocean_index.
        self.neighbors = np.full((self.n_tiles, len(HEX_DIRECTIONS)), self.ocean_index, dtype=np.intp)
        for i, (q, r) in enumerate(self.tiles):
            for d, (dq, dr) in enumerate(HEX_DIRECTIONS):
                j = self._index.get((q + dq, r + dr))
                if j is not None:
                    self.neighbors[i, d] = j

        # Shape: (n_tiles, 6), dtype=bool. True where the neighbor is off-map.
        self.ocean_mask = self.neighbors == self.ocean_index
        self.ocean_ring: List[Hex] = hex_ring((0, 0), radius + 1)

    def __len__(self) -> int:
        return self.n_tiles

    def __repr__(self) -> str:
        return f"MapGeometry(radius={self.radius}, tiles={self.n_tiles})"

    def is_valid(self, pos: Hex) -> bool:
        return pos in self._index

    def index_of(self, pos: Hex) -> int:
        """Dense index of a tile. Raises KeyError for off-map coordinates."""
        try:
            return self._index[pos]
        except KeyError:
            raise KeyError(f"Tile {pos} is outside the map of radius {self.radius}") from None

    def valid_neighbors(self, pos: Hex) -> List[Hex]:
        """On-map neighbors of a tile, in HEX_DIRECTIONS order."""
        i = self.index_of(pos)
        return [self.tiles[j] for j in self.neighbors[i] if j != self.ocean_index]

    def is_boundary(self, pos: Hex) -> bool:
        """True if the tile touches the ocean ring."""
        return bool(self.ocean_mask[self.index_of(pos)].any())

    def ocean_ring_neighbors(self) -> Dict[Hex, List[Hex]]:
        """Map each ocean ring coordinate to the land tiles it borders."""
        result: Dict[Hex, List[Hex]] = {}
        for q, r in self.ocean_ring:
            result[(q, r)] = [
                (q + dq, r + dr) for dq, dr in HEX_DIRECTIONS
                if (q + dq, r + dr) in self._index
            ]
        return result

    def tiles_within(self, center: Hex, radius: int) -> List[Hex]:
        """On-map tiles within radius of center."""
        return [h for h in hexagon(center, radius) if h in self._index]
