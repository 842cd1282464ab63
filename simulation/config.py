# simulation/config.py
"""
Configuration for the water simulation domain.

Holds the physics tuning values and the WaterConfig record that every water
system reads. Two presets are provided:
- WaterConfig.IN_GAME: all processes active
- WaterConfig.NULL: everything off, for isolating one behavior in tests
"""
from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import ClassVar

# =============================================================================
# WATER PHYSICS (in-game tuning)
# =============================================================================
# Rates are per in-game day, in tile volumes
EVAPORATION_RATE = 0.5        # Open water loses half a tile of depth per day in full sun
PRECIPITATION_RATE = 2.0      # Scaled by the weather's precipitation multiplier
EMISSION_RATE = 100.0         # Per tile height of remaining emitter pressure
EMISSION_PRESSURE = 5.0       # Emitters stop once covered by this much standing water
WATER_ITEMS_PER_TILE = 50.0   # Inventory items per tile volume (inventory systems only)
LATERAL_FLOW_RATE = 500.0     # Per tile height of water table difference

# Tides (heights in tile heights, period in days)
TIDE_AMPLITUDE = 1.0
TIDE_PERIOD = 1.0
TIDE_MINIMUM = 1.0


@dataclass(frozen=True)
class TideSettings:
    """Controls the ebb and flow of the ocean."""
    amplitude: float = 0.0  # Half the peak-to-trough range
    period: float = 1.0     # Days per full cycle
    minimum: float = 0.0    # Lowest ocean height

    def __post_init__(self):
        if self.amplitude < 0:
            raise ValueError(f"Tide amplitude must be non-negative, got {self.amplitude}")
        if self.period <= 0:
            raise ValueError(f"Tide period must be positive, got {self.period}")
        if self.minimum < 0:
            raise ValueError(f"Tide minimum must be non-negative, got {self.minimum}")

    def height_at(self, elapsed_days: float) -> float:
        """Ocean height after elapsed_days.

        The sine term spans [-amplitude, amplitude], so adding the amplitude
        once puts the trough exactly at `minimum`.
        """
        scaled_time = elapsed_days * math.tau / self.period
        return self.minimum + self.amplitude + self.amplitude * math.sin(scaled_time)


@dataclass(frozen=True)
class WaterConfig:
    """Tuning for every water process. Immutable for the length of a run."""
    evaporation_rate: float = 0.0
    precipitation_rate: float = 0.0
    emission_rate: float = 0.0
    emission_pressure: float = 0.0
    water_items_per_tile: float = WATER_ITEMS_PER_TILE
    lateral_flow_rate: float = 0.0
    enable_oceans: bool = False
    tide_settings: TideSettings = field(default_factory=TideSettings)

    IN_GAME: ClassVar["WaterConfig"]
    NULL: ClassVar["WaterConfig"]

    def __post_init__(self):
        for name in (
            "evaporation_rate",
            "precipitation_rate",
            "emission_rate",
            "emission_pressure",
            "lateral_flow_rate",
        ):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"WaterConfig.{name} must be non-negative, got {value}")
        if self.water_items_per_tile <= 0:
            raise ValueError(
                f"WaterConfig.water_items_per_tile must be positive, got {self.water_items_per_tile}"
            )

    def replace(self, **changes) -> "WaterConfig":
        """Copy of this config with some fields changed."""
        return dataclasses.replace(self, **changes)

    def items_to_tiles(self, items: float) -> float:
        """Convert a count of water items into tile volumes."""
        return items / self.water_items_per_tile

    def tiles_to_items(self, volume: float) -> int:
        """Convert tile volumes into whole water items (rounded down).

        Rounds to 9 decimals first so a volume split across tiles and summed
        back still converts to the item count it came from.
        """
        return int(math.floor(round(volume * self.water_items_per_tile, 9)))


WaterConfig.IN_GAME = WaterConfig(
    evaporation_rate=EVAPORATION_RATE,
    precipitation_rate=PRECIPITATION_RATE,
    emission_rate=EMISSION_RATE,
    emission_pressure=EMISSION_PRESSURE,
    water_items_per_tile=WATER_ITEMS_PER_TILE,
    lateral_flow_rate=LATERAL_FLOW_RATE,
    enable_oceans=True,
    tide_settings=TideSettings(
        amplitude=TIDE_AMPLITUDE,
        period=TIDE_PERIOD,
        minimum=TIDE_MINIMUM,
    ),
)

WaterConfig.NULL = WaterConfig()
