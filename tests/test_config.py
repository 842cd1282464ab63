"""Tests for water configuration, soils and lookup tables."""

import random

import pytest

from simulation.config import LATERAL_FLOW_RATE, WaterConfig
from utils import scale_daily_rate
from world.terrain import SOIL_LIBRARY, SoilType, clamp_height
from world.weather import (
    DAYTIME_ILLUMINANCE,
    EVAPORATION_MULTIPLIER,
    LIGHT_LEVEL,
    PRECIPITATION_MULTIPLIER,
    Illuminance,
    InGameTime,
    Weather,
    WeatherSystem,
)


class TestWaterConfig:

    def test_null_turns_everything_off(self):
        config = WaterConfig.NULL
        assert config.evaporation_rate == 0.0
        assert config.precipitation_rate == 0.0
        assert config.emission_rate == 0.0
        assert config.lateral_flow_rate == 0.0
        assert not config.enable_oceans

    def test_in_game_turns_everything_on(self):
        config = WaterConfig.IN_GAME
        assert config.evaporation_rate > 0
        assert config.precipitation_rate > 0
        assert config.emission_rate > 0
        assert config.lateral_flow_rate == LATERAL_FLOW_RATE
        assert config.enable_oceans
        assert config.tide_settings.amplitude > 0

    def test_replace_returns_a_new_config(self):
        config = WaterConfig.NULL.replace(lateral_flow_rate=9001.0)
        assert config.lateral_flow_rate == 9001.0
        assert WaterConfig.NULL.lateral_flow_rate == 0.0

    @pytest.mark.parametrize("field", ["evaporation_rate", "precipitation_rate", "emission_rate",
                                       "emission_pressure", "lateral_flow_rate"])
    def test_negative_rates_are_rejected(self, field):
        with pytest.raises(ValueError):
            WaterConfig(**{field: -1.0})

    def test_items_per_tile_must_be_positive(self):
        with pytest.raises(ValueError):
            WaterConfig(water_items_per_tile=0.0)

    def test_item_conversion(self):
        config = WaterConfig.NULL
        assert config.items_to_tiles(25) == pytest.approx(0.5)
        assert config.tiles_to_items(0.5) == 25
        assert config.tiles_to_items(0.499) == 24
        # Split across three tiles and summed back
        assert config.tiles_to_items(sum([0.2 / 3] * 3)) == 10

    def test_daily_rate_scaling(self):
        assert scale_daily_rate(1.0, 60.0, 1.0 / 60.0) == pytest.approx(1.0 / 3600.0)
        assert scale_daily_rate(0.0, 60.0, 1.0) == 0.0


class TestSoils:

    def test_library_names_match_keys(self):
        for name, soil in SOIL_LIBRARY.items():
            assert soil.name == name

    @pytest.mark.parametrize("kwargs", [
        {"water_capacity": 1.5},
        {"water_capacity": -0.1},
        {"evaporation_ratio": 0.0},
        {"lateral_flow_ratio": 1.2},
    ])
    def test_invalid_soils(self, kwargs):
        with pytest.raises(ValueError):
            SoilType("bad", **kwargs)

    def test_clamp_height(self):
        assert clamp_height(-2.0) == 0.0
        assert clamp_height(1e9) == 255.0


class TestWeatherTables:

    @pytest.mark.parametrize("table", [PRECIPITATION_MULTIPLIER, LIGHT_LEVEL, DAYTIME_ILLUMINANCE])
    def test_weather_tables_cover_every_weather(self, table):
        assert set(table) == set(Weather)

    def test_evaporation_table_covers_every_light_level(self):
        assert set(EVAPORATION_MULTIPLIER) == set(Illuminance)
        assert EVAPORATION_MULTIPLIER[Illuminance.DARK] == 0.2
        assert EVAPORATION_MULTIPLIER[Illuminance.DIMLY_LIT] == 0.5
        assert EVAPORATION_MULTIPLIER[Illuminance.BRIGHTLY_LIT] == 1.0

    def test_only_rain_precipitates(self):
        assert PRECIPITATION_MULTIPLIER[Weather.RAINY] == 1.0
        assert PRECIPITATION_MULTIPLIER[Weather.CLEAR] == 0.0


class TestWeatherSystem:

    def test_night_is_dark(self):
        weather = WeatherSystem(current=Weather.CLEAR)
        assert weather.illuminance(InGameTime(elapsed_days=0.2)) == Illuminance.BRIGHTLY_LIT
        assert weather.illuminance(InGameTime(elapsed_days=0.7)) == Illuminance.DARK

    def test_fixed_weather_never_changes(self):
        weather = WeatherSystem(current=Weather.RAINY, fixed=True)
        time = InGameTime()
        for _ in range(10):
            time.advance(time.seconds_per_day)
            assert weather.tick(time) == []
        assert weather.current == Weather.RAINY

    def test_weather_rolls_once_per_day(self):
        weather = WeatherSystem(rng=random.Random(7))
        time = InGameTime(elapsed_days=0.5)
        weather.tick(time)
        assert weather.last_day == 0

        time.advance(time.seconds_per_day)
        weather.tick(time)
        assert weather.last_day == 1

    def test_time_rejects_non_positive_day_length(self):
        with pytest.raises(ValueError):
            InGameTime(seconds_per_day=0.0)
