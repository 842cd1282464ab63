"""Tests for precipitation, evaporation and the uptake hook."""

import numpy as np
import pytest
from structlog.testing import capture_logs

from simulation.config import WaterConfig
from simulation.vertical import apply_uptake_requests, evaporation, light_multipliers, precipitation
from world.generation import MapShape, WaterTableStrategy
from world.weather import Illuminance, Weather

TICK_FRACTION = (1.0 / 60.0) / 60.0  # One tick as a fraction of a day


class TestPrecipitation:

    def test_rain_adds_uniformly(self, make_state):
        state = make_state(
            strategy=WaterTableStrategy.DRY,
            water_config=WaterConfig.NULL.replace(precipitation_rate=2.0),
            weather=Weather.RAINY,
        )

        total = precipitation(state)

        np.testing.assert_allclose(state.water_table.volume, 2.0 * TICK_FRACTION)
        assert total == pytest.approx(2.0 * TICK_FRACTION * state.geometry.n_tiles)
        assert state.budget.precipitated == pytest.approx(total)

    @pytest.mark.parametrize("weather", [Weather.CLEAR, Weather.CLOUDY])
    def test_no_rain_without_rainy_weather(self, make_state, weather):
        state = make_state(
            strategy=WaterTableStrategy.DRY,
            water_config=WaterConfig.NULL.replace(precipitation_rate=2.0),
            weather=weather,
        )

        assert precipitation(state) == 0.0
        assert state.water_table.total_water() == 0.0


class TestEvaporation:

    def test_open_water_evaporates_at_full_rate(self, make_state):
        state = make_state(
            strategy=WaterTableStrategy.DEPTH_ONE,
            water_config=WaterConfig.NULL.replace(evaporation_rate=1.0),
        )

        evaporation(state)

        np.testing.assert_allclose(state.water_table.volume, 1.0 - TICK_FRACTION)

    def test_soil_ratio_slows_underground_water(self, make_state):
        state = make_state(
            strategy=WaterTableStrategy.DEPTH_HALF,
            water_config=WaterConfig.NULL.replace(evaporation_rate=1.0),
        )
        assert not state.water_table.is_flooded().any()

        evaporation(state)

        # Loam evaporation ratio is 0.5
        np.testing.assert_allclose(state.water_table.volume, 0.5 - 0.5 * TICK_FRACTION)

    def test_night_evaporation_is_reduced(self, make_state):
        state = make_state(water_config=WaterConfig.NULL.replace(evaporation_rate=1.0))
        state.time.elapsed_days = 0.6

        total = evaporation(state)

        assert total == pytest.approx(0.2 * TICK_FRACTION * state.geometry.n_tiles)

    def test_cloudy_day_is_dimly_lit(self, make_state):
        state = make_state(weather=Weather.CLOUDY)
        np.testing.assert_allclose(light_multipliers(state), 0.5)

    def test_illuminance_override_per_tile(self, make_state):
        state = make_state(water_config=WaterConfig.NULL.replace(evaporation_rate=1.0))
        state.set_illuminance((0, 0), Illuminance.DARK)

        evaporation(state)

        shaded = state.water_table.get_volume((0, 0))
        lit = state.water_table.get_volume((1, 0))
        assert 1.0 - shaded == pytest.approx(0.2 * (1.0 - lit))

    def test_evaporation_never_goes_negative(self, make_state):
        state = make_state(
            map_shape=MapShape.BEDROCK,
            strategy=WaterTableStrategy.DRY,
            water_config=WaterConfig.NULL.replace(evaporation_rate=1e6),
        )
        state.water_table.set_volume((0, 0), 0.001)
        state.water_table.update_depth(state.terrain)

        total = evaporation(state)

        assert total == pytest.approx(0.001)
        assert state.water_table.volume.min() == 0.0

    def test_zero_rate_is_a_no_op(self, make_state):
        state = make_state()
        before = state.water_table.volume.copy()
        assert evaporation(state) == 0.0
        assert np.array_equal(state.water_table.volume, before)


class TestUptake:

    def test_request_is_served_and_cleared(self, make_state):
        state = make_state(strategy=WaterTableStrategy.DEPTH_HALF)
        request = state.request_uptake((0, 0), 0.2)

        total = apply_uptake_requests(state)

        assert request.fulfilled
        assert request.removed == pytest.approx(0.2)
        assert total == pytest.approx(0.2)
        assert state.water_table.get_volume((0, 0)) == pytest.approx(0.3)
        assert state.uptake_requests == []
        assert state.budget.absorbed == pytest.approx(0.2)

    def test_request_is_limited_by_available_water(self, make_state):
        state = make_state(strategy=WaterTableStrategy.DEPTH_HALF)
        request = state.request_uptake((1, 0), 3.0)

        apply_uptake_requests(state)

        assert request.removed == pytest.approx(0.5)
        assert state.water_table.get_volume((1, 0)) == 0.0

    def test_request_for_unknown_tile(self, make_state):
        state = make_state()
        with pytest.raises(KeyError):
            state.request_uptake((9, 9), 1.0)


class TestClampLogging:
    """Passes report how many tiles or requests ran out of water."""

    def test_evaporation_logs_dried_out_tiles(self, make_state):
        state = make_state(
            strategy=WaterTableStrategy.DRY,
            water_config=WaterConfig.NULL.replace(evaporation_rate=1.0),
        )
        state.water_table.set_volume((0, 0), 1e-9)
        state.water_table.update_depth(state.terrain)

        with capture_logs() as logs:
            evaporation(state)

        clamped = [entry for entry in logs if entry["event"] == "evaporation.clamped"]
        assert len(clamped) == 1
        assert clamped[0]["tiles"] == 1
        assert clamped[0]["log_level"] == "debug"

    def test_short_uptake_is_logged(self, make_state):
        state = make_state(strategy=WaterTableStrategy.DEPTH_HALF)
        state.request_uptake((0, 0), 3.0)
        state.request_uptake((1, 0), 0.1)

        with capture_logs() as logs:
            apply_uptake_requests(state)

        assert [entry["requests"] for entry in logs if entry["event"] == "uptake.clamped"] == [1]

    def test_nothing_logged_when_water_suffices(self, make_state):
        state = make_state(
            strategy=WaterTableStrategy.DEPTH_ONE,
            water_config=WaterConfig.NULL.replace(evaporation_rate=1.0),
        )

        with capture_logs() as logs:
            evaporation(state)

        assert logs == []
