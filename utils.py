"""
utils.py - Common utility functions for Tidewater

Provides shared, stateless helper functions used across different modules.
"""
from __future__ import annotations


def clamp(val: float, low: float, high: float) -> float:
    """Clamp a value between low and high bounds."""
    return max(low, min(high, val))


def scale_daily_rate(rate_per_day: float, seconds_per_day: float, elapsed_seconds: float) -> float:
    """Convert a per-day rate into the amount for one step of elapsed_seconds.

    Every day-denominated rate in the simulation goes through this conversion:
    rate_per_day / seconds_per_day * elapsed_seconds.

    Example: 1.0 per day, 60s days, 1/60s tick -> 1/3600 per tick
    """
    assert seconds_per_day > 0
    return rate_per_day / seconds_per_day * elapsed_seconds
