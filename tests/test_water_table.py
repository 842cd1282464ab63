"""Tests for WaterTable storage and accessors."""

import numpy as np
import pytest

from water import DepthKind, WaterDepth


class TestVolume:

    def test_starts_empty(self, empty_table):
        assert empty_table.total_water() == 0.0

    def test_add_and_get(self, empty_table):
        empty_table.add((0, 0), 0.75)
        assert empty_table.get_volume((0, 0)) == 0.75

    def test_remove_returns_actual_amount(self, empty_table):
        empty_table.add((1, -1), 0.3)

        assert empty_table.remove((1, -1), 0.1) == pytest.approx(0.1)
        assert empty_table.remove((1, -1), 5.0) == pytest.approx(0.2)
        assert empty_table.get_volume((1, -1)) == 0.0
        assert empty_table.remove((1, -1), 1.0) == 0.0

    def test_remove_array_clamps_at_zero(self, empty_table):
        empty_table.volume[:] = 0.5
        amounts = np.full(empty_table.volume.shape, 0.2)
        amounts[0] = 2.0

        removed = empty_table.remove_array(amounts)

        assert removed[0] == 0.5
        assert empty_table.volume[0] == 0.0
        np.testing.assert_allclose(empty_table.volume[1:], 0.3)

    def test_negative_add_is_rejected(self, empty_table):
        with pytest.raises(AssertionError):
            empty_table.add((0, 0), -1.0)

    def test_unknown_tile_raises_key_error(self, empty_table):
        with pytest.raises(KeyError):
            empty_table.get_volume((10, 10))
        with pytest.raises(KeyError):
            empty_table.remove((4, 0), 1.0)

    def test_net_flux(self, empty_table):
        empty_table.add((0, 0), 1.0)
        empty_table.cache_previous_volume()
        empty_table.remove((0, 0), 0.25)

        flux = empty_table.net_flux()
        assert flux[empty_table.geometry.index_of((0, 0))] == pytest.approx(-0.25)
        assert np.count_nonzero(flux) == 1

    def test_copy_is_independent(self, empty_table):
        empty_table.add((0, 0), 1.0)
        clone = empty_table.copy()
        clone.add((0, 0), 1.0)
        assert empty_table.get_volume((0, 0)) == 1.0


class TestDerivedDepth:

    def test_update_depth(self, empty_table, flat_terrain):
        empty_table.set_volume((0, 0), 0.1)
        empty_table.set_volume((1, 0), 1.5)
        empty_table.update_depth(flat_terrain)

        assert empty_table.get_depth((0, 0)).kind == DepthKind.UNDERGROUND
        assert empty_table.get_depth((0, 0)).value == pytest.approx(0.8)
        assert empty_table.get_depth((1, 0)) == WaterDepth.flooded(1.0)
        assert empty_table.get_depth((0, 1)) == WaterDepth.dry()

    def test_heights(self, empty_table, flat_terrain):
        empty_table.set_volume((0, 0), 0.25)
        empty_table.set_volume((1, 0), 1.5)
        empty_table.update_depth(flat_terrain)

        assert empty_table.get_height((0, 0), flat_terrain) == pytest.approx(0.5)
        assert empty_table.get_height((1, 0), flat_terrain) == pytest.approx(2.0)
        assert empty_table.get_height((0, 1), flat_terrain) == 0.0

    def test_flooded_mask_and_surface_depth(self, empty_table, flat_terrain):
        empty_table.set_volume((0, 0), 0.75)
        empty_table.update_depth(flat_terrain)

        i = empty_table.geometry.index_of((0, 0))
        assert empty_table.is_flooded()[i]
        assert empty_table.is_flooded().sum() == 1
        assert empty_table.surface_water_depth()[i] == pytest.approx(0.25)

    def test_flow_velocity_defaults_to_zero(self, empty_table):
        assert empty_table.get_flow_velocity((0, 0)) == (0.0, 0.0)
