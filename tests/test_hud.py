"""Tests for the viewer's HUD text."""

import pytest

from render.hud import get_light_string, get_time_string
from world.weather import Weather


@pytest.mark.parametrize("weather, expected", [
    (Weather.CLEAR, "Light: brightly lit (100% sun)"),
    (Weather.CLOUDY, "Light: dimly lit (80% sun)"),
    (Weather.RAINY, "Light: dimly lit (60% sun)"),
])
def test_daytime_light_shows_sunlight_share(make_state, weather, expected):
    state = make_state(radius=0, weather=weather)
    assert get_light_string(state) == expected


def test_night_is_dark(make_state):
    state = make_state(radius=0, weather=Weather.CLEAR)
    state.time.elapsed_days = 0.7
    assert get_light_string(state) == "Light: dark"
    assert get_time_string(state) == "Day 1 (Night)"


def test_time_string_starts_at_dawn(make_state):
    state = make_state(radius=0)
    assert get_time_string(state) == "Day 1, 06:00"
