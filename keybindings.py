"""
keybindings.py - Centralized key mappings for the Tidewater viewer

Single source of truth for all keyboard controls.
"""
from __future__ import annotations

import pygame

from world.weather import Weather

# Simulation controls
PAUSE_KEY = pygame.K_SPACE
STEP_KEY = pygame.K_PERIOD        # Advance one tick while paused
SPEED_UP_KEY = pygame.K_EQUALS    # More ticks per frame
SLOW_DOWN_KEY = pygame.K_MINUS
RESET_KEY = pygame.K_r

# Tile editing (on the selected tile)
RAISE_KEY = pygame.K_UP
LOWER_KEY = pygame.K_DOWN
ADD_WATER_KEY = pygame.K_w
REMOVE_WATER_KEY = pygame.K_s
EMITTER_KEY = pygame.K_e

# Display
FLOW_ARROWS_KEY = pygame.K_f
OCEANS_KEY = pygame.K_o

# Weather overrides
WEATHER_KEYS = {
    pygame.K_1: Weather.CLEAR,
    pygame.K_2: Weather.CLOUDY,
    pygame.K_3: Weather.RAINY,
}

# System keys
QUIT_KEY = pygame.K_ESCAPE
HELP_KEY = pygame.K_h

# Control descriptions for help display
CONTROL_DESCRIPTIONS = [
    "Click: select tile",
    "Space: pause",
    ".: step one tick",
    "+/-: speed",
    "R: reset",
    "Up/Down: raise/lower",
    "W/S: add/remove water",
    "E: place spring",
    "F: flow arrows",
    "O: toggle oceans",
    "1/2/3: clear/cloudy/rain",
    "H: help",
    "Esc: quit",
]
