# weather.py
"""
Weather and time-of-day system for Tidewater.

Manages in-game time, the daily weather roll and the light level that drives
evaporation. Multipliers are plain lookup tables, checked at import so a new
enum member without a table entry fails immediately.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List

import structlog

from config import SECONDS_PER_DAY, NIGHT_START

logger = structlog.get_logger()


class Weather(Enum):
    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAINY = "rainy"


class Illuminance(IntEnum):
    DARK = 0
    DIMLY_LIT = 1
    BRIGHTLY_LIT = 2


# Relative precipitation; RAINY is defined to be 1.0
PRECIPITATION_MULTIPLIER: Dict[Weather, float] = {
    Weather.CLEAR: 0.0,
    Weather.CLOUDY: 0.0,
    Weather.RAINY: 1.0,
}

# Fraction of full sunlight reaching the ground
LIGHT_LEVEL: Dict[Weather, float] = {
    Weather.CLEAR: 1.0,
    Weather.CLOUDY: 0.8,
    Weather.RAINY: 0.6,
}

# Daytime illuminance under each weather (night is always DARK)
DAYTIME_ILLUMINANCE: Dict[Weather, Illuminance] = {
    Weather.CLEAR: Illuminance.BRIGHTLY_LIT,
    Weather.CLOUDY: Illuminance.DIMLY_LIT,
    Weather.RAINY: Illuminance.DIMLY_LIT,
}

# Evaporation multiplier by light exposure
EVAPORATION_MULTIPLIER: Dict[Illuminance, float] = {
    Illuminance.DARK: 0.2,
    Illuminance.DIMLY_LIT: 0.5,
    Illuminance.BRIGHTLY_LIT: 1.0,
}


def _validate_tables() -> None:
    for name, table, keys in (
        ("PRECIPITATION_MULTIPLIER", PRECIPITATION_MULTIPLIER, Weather),
        ("LIGHT_LEVEL", LIGHT_LEVEL, Weather),
        ("DAYTIME_ILLUMINANCE", DAYTIME_ILLUMINANCE, Weather),
        ("EVAPORATION_MULTIPLIER", EVAPORATION_MULTIPLIER, Illuminance),
    ):
        missing = set(keys) - set(table)
        if missing:
            raise ValueError(f"{name} has no entry for {sorted(m.name for m in missing)}")


_validate_tables()


@dataclass
class InGameTime:
    """Elapsed simulated time, in in-game days."""
    seconds_per_day: float = SECONDS_PER_DAY
    elapsed_days: float = 0.0

    def __post_init__(self):
        if self.seconds_per_day <= 0:
            raise ValueError(f"seconds_per_day must be positive, got {self.seconds_per_day}")

    def advance(self, seconds: float) -> None:
        self.elapsed_days += seconds / self.seconds_per_day

    @property
    def day(self) -> int:
        """Whole days elapsed."""
        return int(math.floor(self.elapsed_days))

    @property
    def fraction_of_day(self) -> float:
        """How far through the day: 0.0 dawn, 0.25 noon, 0.5 dusk, 0.75 midnight."""
        return self.elapsed_days % 1.0

    @property
    def is_night(self) -> bool:
        return self.fraction_of_day >= NIGHT_START


@dataclass
class WeatherSystem:
    """
    Holds the current weather and rerolls it at the start of each day.

    Set `fixed` to keep the weather constant (scenario tests do this).
    """
    current: Weather = Weather.CLEAR
    fixed: bool = False
    last_day: int = 0
    rng: random.Random = field(default_factory=random.Random)

    def tick(self, time: InGameTime) -> List[str]:
        """
        Advance weather to match the in-game time.

        Returns a list of event messages.
        """
        messages: List[str] = []
        if time.day == self.last_day:
            return messages

        self.last_day = time.day
        if self.fixed:
            return messages

        previous = self.current
        self.current = self.rng.choice(list(Weather))
        logger.debug("weather.rolled", day=time.day, previous=previous.value, current=self.current.value)
        if self.current != previous:
            messages.append(f"Day {time.day + 1}: the weather turns {self.current.value}.")
        return messages

    def precipitation_multiplier(self) -> float:
        return PRECIPITATION_MULTIPLIER[self.current]

    def light_level(self) -> float:
        return LIGHT_LEVEL[self.current]

    def illuminance(self, time: InGameTime) -> Illuminance:
        if time.is_night:
            return Illuminance.DARK
        return DAYTIME_ILLUMINANCE[self.current]
