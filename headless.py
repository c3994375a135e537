#!/usr/bin/env python3
"""
Headless flock runner.

Advances the simulation without a window and prints summary statistics.

Usage:
    python headless.py                               # Default scenario, 1000 ticks
    python headless.py --ticks 500 --num-b 20        # Mixed flock
    python headless.py --seed 7 --report-every 50    # Reproducible run
    python headless.py --update-order simultaneous   # Snapshot updates
"""

import argparse
import time
from typing import Dict

import numpy as np

from flocking import ConfigError, Flock, FlockParams, Group, Simulation


def flock_stats(flock: Flock) -> Dict[str, float]:
    """
    Summarise a flock.

    Returns:
        Mean distance from home for each group (NaN for an empty group),
        mean speed and spread (mean distance from the flock centroid).
    """
    positions = flock.positions()
    if len(positions) == 0:
        return {"home_a": float("nan"), "home_b": float("nan"), "speed": 0.0, "spread": 0.0}

    homes = flock.homes()
    home_dist = np.linalg.norm(positions - homes, axis=1)
    groups = flock.groups()

    stats = {}
    for key, group in (("home_a", Group.A), ("home_b", Group.B)):
        mask = groups == (0 if group is Group.A else 1)
        stats[key] = float(home_dist[mask].mean()) if mask.any() else float("nan")

    stats["speed"] = float(np.linalg.norm(flock.velocities(), axis=1).mean())
    centroid = positions.mean(axis=0)
    stats["spread"] = float(np.linalg.norm(positions - centroid, axis=1).mean())
    return stats


def format_stats(tick: int, stats: Dict[str, float]) -> str:
    return (f"[Headless] tick {tick:6d} | home A {stats['home_a']:9.3f} | "
            f"home B {stats['home_b']:9.3f} | speed {stats['speed']:7.4f} | "
            f"spread {stats['spread']:9.3f}")


def run_headless(ticks: int, params: FlockParams, seed=None, report_every: int = 100) -> Dict[str, float]:
    """Run the simulation for a number of ticks, printing periodic reports."""
    sim = Simulation(params, seed=seed)
    print(format_stats(0, flock_stats(sim.flock)))

    start = time.perf_counter()
    for _ in range(ticks):
        sim.tick()
        if report_every > 0 and sim.tick_count % report_every == 0:
            print(format_stats(sim.tick_count, flock_stats(sim.flock)))
    elapsed = time.perf_counter() - start

    stats = flock_stats(sim.flock)
    if ticks:
        print(f"[Headless] {ticks:,} ticks in {elapsed:.2f}s ({elapsed / ticks * 1000:.2f} ms/tick)")
    return stats


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the homing flock without a window")
    parser.add_argument("--ticks", type=int, default=1000)
    parser.add_argument("--num-a", type=int, default=None, help="Group A agents (default from config)")
    parser.add_argument("--num-b", type=int, default=None, help="Group B agents (default from config)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--report-every", type=int, default=100,
                        help="Print statistics every N ticks (0 disables)")
    parser.add_argument("--update-order", choices=["sequential", "simultaneous"], default=None)
    args = parser.parse_args(argv)

    if args.ticks < 0:
        parser.error("--ticks must not be negative")
    try:
        params = FlockParams.from_config(
            num_a=args.num_a, num_b=args.num_b, update_order=args.update_order
        )
    except ConfigError as e:
        parser.error(f"[Config] {e}")

    return run_headless(args.ticks, params, seed=args.seed, report_every=args.report_every)


if __name__ == "__main__":
    main()
