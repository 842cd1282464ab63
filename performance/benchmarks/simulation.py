#!/usr/bin/env python3
"""
Performance benchmark for the water simulation.

Runs the simulation headless on a large map (radius 100, about 30k tiles) with
a mix of porous and dense soils, timing each pass of the tick separately.
Optionally profiles with cProfile to identify hot code paths.

    python -m performance.benchmarks.simulation [num_ticks] [--profile]
"""
from __future__ import annotations

import cProfile
import io
import pstats
import sys
import time
import tracemalloc
from statistics import mean, median, stdev
from typing import Dict, List

import numpy as np

from game_state import SimulationState, build_initial_state
from logging_config import configure_logging
from main import TICK_PASSES, start_tick
from simulation.config import WaterConfig
from world.generation import MapShape, WaterTableStrategy

BENCHMARK_RADIUS = 100
POROUS_SOIL = "peat"   # High water capacity
DENSE_SOIL = "rock"    # Low water capacity
DENSE_FRACTION = 0.5
REPORT_WIDTH = 80


def _ms(seconds: float) -> str:
    return f"{seconds * 1000:.2f}ms"


def _mb(bytes_: float) -> str:
    return f"{bytes_ / (1024 * 1024):.1f} MB"


def _metric(label: str, value: str, indent: int = 2) -> None:
    print(f"{' ' * indent}{label:<25} {value}")


def _header(title: str) -> None:
    print("\n" + "=" * REPORT_WIDTH)
    print(title)
    print("=" * REPORT_WIDTH)


class PerformanceMetrics:
    """Per-tick and per-pass wall times, plus traced memory samples."""

    def __init__(self):
        self.tick_times: List[float] = []
        self.pass_times: Dict[str, List[float]] = {name: [] for name, _ in TICK_PASSES}
        self.memory_snapshots: List[int] = []  # Bytes
        self.total_time: float = 0.0

    def record_memory(self):
        current, _peak = tracemalloc.get_traced_memory()
        self.memory_snapshots.append(current)

    def ticks_per_second(self) -> float:
        if self.total_time <= 0:
            return 0.0
        return len(self.tick_times) / self.total_time

    def print_report(self, state: SimulationState):
        _header("WATER SIMULATION BENCHMARK REPORT")
        _metric("Map radius:", str(state.geometry.radius))
        _metric("Tiles:", str(state.geometry.n_tiles))
        _metric("Total runtime:", f"{self.total_time:.2f}s")
        _metric("Total ticks:", str(len(self.tick_times)))
        _metric("Average TPS:", f"{self.ticks_per_second():.1f} ticks/sec")
        _metric("Total water:", f"{state.water_table.total_water():.2f}")

        if self.tick_times:
            avg = mean(self.tick_times)
            spread = stdev(self.tick_times) if len(self.tick_times) > 1 else 0.0
            print("\n  TICK TIMING")
            _metric("Mean:", _ms(avg), indent=4)
            _metric("Median:", _ms(median(self.tick_times)), indent=4)
            _metric("Std dev:", _ms(spread), indent=4)
            _metric("Min / max:", f"{_ms(min(self.tick_times))} / {_ms(max(self.tick_times))}", indent=4)

            print("\n  PASS BREAKDOWN (average times)")
            for name, times in self.pass_times.items():
                pass_avg = mean(times)
                pct = pass_avg / avg * 100 if avg > 0 else 0.0
                print(f"    {name:20s} {_ms(pass_avg):>10s}  ({pct:5.1f}%)")

        if self.memory_snapshots:
            print("\n  MEMORY USAGE")
            _metric("Mean:", _mb(np.mean(self.memory_snapshots)), indent=4)
            _metric("Peak:", _mb(max(self.memory_snapshots)), indent=4)

        print("=" * REPORT_WIDTH)


def build_benchmark_state(radius: int = BENCHMARK_RADIUS, seed: int = 0) -> SimulationState:
    """Bumpy map with a random mix of porous and dense soils, all processes on."""
    state = build_initial_state(
        radius=radius,
        map_shape=MapShape.BUMPY,
        strategy=WaterTableStrategy.DEPTH_ONE,
        water_config=WaterConfig.IN_GAME,
        soil=POROUS_SOIL,
        seed=seed,
        emitters=[(0, 0)],
    )
    rng = np.random.default_rng(seed)
    dense = rng.random(state.geometry.n_tiles) < DENSE_FRACTION
    for pos in np.asarray(state.geometry.tiles)[dense]:
        state.terrain.set_soil((int(pos[0]), int(pos[1])), DENSE_SOIL)
    state.water_table.update_depth(state.terrain)
    return state


def simulate_tick_profiled(state: SimulationState, metrics: PerformanceMetrics) -> None:
    """Run one simulation tick, timing each pass."""
    tick_start = time.perf_counter()
    start_tick(state)
    for name, run_pass in TICK_PASSES:
        pass_start = time.perf_counter()
        run_pass(state)
        metrics.pass_times[name].append(time.perf_counter() - pass_start)
    state.tick_count += 1
    metrics.tick_times.append(time.perf_counter() - tick_start)


def run_benchmark(num_ticks: int = 200, profile_hotspots: bool = False) -> PerformanceMetrics:
    """
    Run a headless simulation benchmark.

    Args:
        num_ticks: Number of simulation ticks to run
        profile_hotspots: If True, run cProfile to identify hot code paths

    Returns:
        PerformanceMetrics object with collected data
    """
    print(f"\nStarting benchmark: {num_ticks} ticks on a radius-{BENCHMARK_RADIUS} map...")
    tracemalloc.start()

    print("  Initializing simulation state...")
    state = build_benchmark_state()
    metrics = PerformanceMetrics()

    profiler = cProfile.Profile() if profile_hotspots else None
    if profiler is not None:
        profiler.enable()

    run_start = time.perf_counter()
    for i in range(num_ticks):
        simulate_tick_profiled(state, metrics)
        if i % 20 == 0:
            metrics.record_memory()
            print(f"    Ticks: {i / num_ticks * 100:.0f}% ({i}/{num_ticks})", end="\r")
    print(f"    Ticks: 100% ({num_ticks}/{num_ticks})")
    metrics.total_time = time.perf_counter() - run_start

    if profiler is not None:
        profiler.disable()
    tracemalloc.stop()

    metrics.print_report(state)

    if profiler is not None:
        _header("HOT CODE PATHS (Top 20 functions by cumulative time)")
        s = io.StringIO()
        pstats.Stats(profiler, stream=s).sort_stats("cumulative").print_stats(20)
        for line in s.getvalue().split("\n")[:25]:
            if line.strip():
                print(line)

    return metrics


if __name__ == "__main__":
    configure_logging("WARNING")
    ticks = int(sys.argv[1]) if len(sys.argv) > 1 and sys.argv[1].isdigit() else 200
    run_benchmark(num_ticks=ticks, profile_hotspots="--profile" in sys.argv)
