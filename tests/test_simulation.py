"""Scenario tests for the full tick: conservation, monotonicity, equilibrium.

Scenarios are grids over map size, terrain shape and starting water table,
each run through the same tick the game uses.
"""

import numpy as np
import pytest

from main import build_report, main, run_for, simulate_tick
from simulation.config import TideSettings, WaterConfig
from world.generation import MapShape, WaterTableStrategy
from world.weather import Weather

ONE_TILE = 0
TINY = 3

MAP_SIZES = [ONE_TILE, TINY]
ALL_SHAPES = list(MapShape)
ALL_STRATEGIES = list(WaterTableStrategy)
WET_STRATEGIES = [s for s in WaterTableStrategy if s is not WaterTableStrategy.DRY]
SLOPED_SHAPES = [MapShape.FLAT, MapShape.SLOPED, MapShape.BUMPY]


def run_ticks(state, n_ticks):
    for _ in range(n_ticks):
        simulate_tick(state)


class TestScheduler:

    def test_tick_advances_clock(self, make_state):
        state = make_state()
        simulate_tick(state)
        assert state.tick_count == 1
        assert state.time.elapsed_days == pytest.approx(1.0 / 3600.0)

    def test_run_for_ten_seconds(self, make_state):
        state = make_state(radius=ONE_TILE)
        assert run_for(state, 10.0) == 600
        assert state.tick_count == 600

    def test_uptake_queue_is_served_each_tick(self, make_state):
        state = make_state()
        request = state.request_uptake((0, 0), 0.25)
        simulate_tick(state)
        assert request.fulfilled
        assert request.removed == pytest.approx(0.25)
        assert state.uptake_requests == []

    def test_in_game_config_changes_the_table(self, make_state):
        state = make_state(water_config=WaterConfig.IN_GAME, emitters=[(0, 0)], weather=Weather.RAINY)
        before = state.water_table.volume.copy()
        run_ticks(state, 60)
        assert not np.array_equal(before, state.water_table.volume)

    def test_budget_accounts_for_every_flux(self, make_state):
        state = make_state(
            map_shape=MapShape.BUMPY,
            water_config=WaterConfig.IN_GAME,
            emitters=[(0, 0)],
            weather=Weather.RAINY,
        )
        state.request_uptake((1, 0), 0.3)
        initial = state.water_table.total_water()

        run_ticks(state, 120)

        assert state.water_table.total_water() == pytest.approx(initial + state.budget.net(), rel=1e-9)

    def test_report(self, make_state):
        state = make_state()
        lines = build_report(state)
        assert any(line.startswith("Total water") for line in lines)


class TestNonNegativity:

    @pytest.mark.parametrize("radius", MAP_SIZES)
    @pytest.mark.parametrize("shape", ALL_SHAPES)
    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_volumes_stay_non_negative(self, make_state, radius, shape, strategy):
        state = make_state(
            radius=radius,
            map_shape=shape,
            strategy=strategy,
            water_config=WaterConfig.IN_GAME,
            emitters=[(0, 0)],
        )
        run_ticks(state, 120)
        assert state.water_table.volume.min() >= 0.0


class TestConservation:

    @pytest.mark.parametrize("radius", MAP_SIZES)
    @pytest.mark.parametrize("shape", ALL_SHAPES)
    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_idle_map_is_unchanged(self, make_state, radius, shape, strategy):
        state = make_state(radius=radius, map_shape=shape, strategy=strategy, water_config=WaterConfig.NULL)
        before = state.water_table.volume.copy()

        run_ticks(state, 30)

        assert np.array_equal(before, state.water_table.volume)

    @pytest.mark.parametrize("rate", [1.0, 9001.0])
    @pytest.mark.parametrize("radius", MAP_SIZES)
    @pytest.mark.parametrize("shape", SLOPED_SHAPES)
    @pytest.mark.parametrize("strategy", WET_STRATEGIES)
    def test_lateral_flow_conserves_water(self, make_state, rate, radius, shape, strategy):
        state = make_state(
            radius=radius,
            map_shape=shape,
            strategy=strategy,
            water_config=WaterConfig.NULL.replace(lateral_flow_rate=rate),
        )
        initial = state.water_table.total_water()

        run_ticks(state, 60)

        assert state.water_table.total_water() == pytest.approx(initial, rel=1e-9)
        assert state.water_table.volume.min() >= 0.0


class TestMonotonicity:

    @pytest.mark.parametrize("radius", MAP_SIZES)
    @pytest.mark.parametrize("shape", ALL_SHAPES)
    @pytest.mark.parametrize("strategy", WET_STRATEGIES)
    def test_evaporation_only_removes(self, make_state, radius, shape, strategy):
        state = make_state(
            radius=radius,
            map_shape=shape,
            strategy=strategy,
            water_config=WaterConfig.NULL.replace(evaporation_rate=1.0),
        )
        for _ in range(30):
            before = state.water_table.volume.copy()
            simulate_tick(state)
            after = state.water_table.volume
            # Every tile dries, unless it had nothing to lose
            assert np.all((after < before) | ((before == 0.0) & (after == 0.0)))

    @pytest.mark.parametrize("radius", MAP_SIZES)
    @pytest.mark.parametrize("shape", ALL_SHAPES)
    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_precipitation_only_adds(self, make_state, radius, shape, strategy):
        state = make_state(
            radius=radius,
            map_shape=shape,
            strategy=strategy,
            water_config=WaterConfig.NULL.replace(precipitation_rate=1.0),
            weather=Weather.RAINY,
        )
        for _ in range(30):
            before = state.water_table.volume.copy()
            simulate_tick(state)
            assert np.all(state.water_table.volume > before)

    @pytest.mark.parametrize("radius", MAP_SIZES)
    @pytest.mark.parametrize("shape", ALL_SHAPES)
    def test_emitters_only_add(self, make_state, radius, shape):
        state = make_state(
            radius=radius,
            map_shape=shape,
            strategy=WaterTableStrategy.DRY,
            water_config=WaterConfig.NULL.replace(emission_rate=10.0, emission_pressure=5.0, lateral_flow_rate=100.0),
            emitters=[(0, 0)],
        )
        previous = state.water_table.total_water()
        for _ in range(30):
            simulate_tick(state)
            current = state.water_table.total_water()
            assert current > previous
            previous = current


class TestEquilibrium:
    """Standing water on bedrock levels out."""

    LEVELING = WaterConfig.NULL.replace(lateral_flow_rate=1000.0)

    def test_hill_flattens(self, make_state):
        state = make_state(
            radius=TINY,
            map_shape=MapShape.BEDROCK,
            strategy=WaterTableStrategy.DRY,
            water_config=self.LEVELING,
        )
        n_tiles = state.geometry.n_tiles
        state.water_table.set_volume((0, 0), float(n_tiles))
        state.water_table.update_depth(state.terrain)

        run_ticks(state, 600)

        np.testing.assert_allclose(state.water_table.volume, 1.0, atol=1e-3)

    def test_valley_fills(self, make_state):
        state = make_state(
            radius=TINY,
            map_shape=MapShape.BEDROCK,
            strategy=WaterTableStrategy.DEPTH_ONE,
            water_config=self.LEVELING,
        )
        n_tiles = state.geometry.n_tiles
        state.water_table.set_volume((0, 0), 0.0)
        state.water_table.update_depth(state.terrain)

        run_ticks(state, 600)

        expected = (n_tiles - 1) / n_tiles
        np.testing.assert_allclose(state.water_table.volume, expected, atol=1e-3)


class TestOcean:
    """The ocean is an infinite reservoir at the tide height."""

    CALM_SEA = TideSettings(amplitude=0.0, minimum=1.5)

    def test_ocean_floods_dry_land(self, make_state):
        config = WaterConfig.NULL.replace(
            evaporation_rate=0.5,
            lateral_flow_rate=1000.0,
            enable_oceans=True,
            tide_settings=self.CALM_SEA,
        )
        state = make_state(strategy=WaterTableStrategy.DRY, water_config=config)

        run_ticks(state, 1200)

        assert state.ocean.height == 1.5
        assert state.budget.ocean_inflow > 0.0
        # Flat loam at height 1: the water table rises above the surface
        assert state.water_table.average_height(state.terrain) > 1.0
        assert state.water_table.is_flooded().all()

    @pytest.mark.parametrize("radius", MAP_SIZES)
    def test_table_settles_at_tide_height(self, make_state, radius):
        config = WaterConfig.NULL.replace(
            lateral_flow_rate=500.0,
            enable_oceans=True,
            tide_settings=self.CALM_SEA,
        )
        state = make_state(radius=radius, strategy=WaterTableStrategy.DRY, water_config=config)

        run_ticks(state, 6000)

        heights = state.water_table.water_table_heights(state.terrain)
        np.testing.assert_allclose(heights, state.ocean.height, atol=1e-6)
        # Filling the map never lowers the sea
        assert state.ocean.height == 1.5
        assert state.budget.ocean_inflow > 0.0

    @pytest.mark.parametrize("radius", MAP_SIZES)
    def test_without_oceans_the_map_keeps_draining(self, make_state, radius):
        config = WaterConfig.NULL.replace(
            evaporation_rate=0.5,
            lateral_flow_rate=500.0,
            tide_settings=self.CALM_SEA,
        )
        state = make_state(radius=radius, strategy=WaterTableStrategy.DEPTH_ONE, water_config=config)

        previous = state.water_table.total_water()
        for _ in range(600):
            simulate_tick(state)
            current = state.water_table.total_water()
            assert current < previous
            previous = current

        assert state.budget.ocean_inflow == 0.0
        assert state.water_table.average_height(state.terrain) < state.ocean.height


class TestCommandLine:

    def test_headless_run(self, capsys):
        assert main(["--radius", "1", "--seconds", "1", "--emitter", "0,0"]) == 0
        out = capsys.readouterr().out
        assert "Total water" in out

    def test_bad_emitter_is_a_usage_error(self):
        with pytest.raises(SystemExit):
            main(["--radius", "1", "--emitter", "5,5"])
