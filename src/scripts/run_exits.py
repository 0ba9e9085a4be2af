#!/usr/bin/env python3
"""
Bounded-Exit Simulation Runner

Runs the parallel Brownian motion simulation, saves every recorded
segment to CSV and prints a short summary of the run.
"""

import argparse
import logging
import os
import sys
import time

from brownian_exits import ConfigurationError, SimulationParams, io, load_params, simulate
from brownian_exits.analysis import format_summary, summarize_segments
from brownian_exits.logging_config import setup_logging


def build_params(args: argparse.Namespace) -> SimulationParams:
    """Merge an optional config file with explicit command-line values."""
    values = load_params(args.config) if args.config else {}
    params = SimulationParams.from_mapping(values)

    if args.domain_x_min is not None or args.domain_x_max is not None:
        x_min, x_max = params.domain_x
        params.domain_x = (
            x_min if args.domain_x_min is None else args.domain_x_min,
            x_max if args.domain_x_max is None else args.domain_x_max,
        )
    if args.domain_y_min is not None or args.domain_y_max is not None:
        y_min, y_max = params.domain_y
        params.domain_y = (
            y_min if args.domain_y_min is None else args.domain_y_min,
            y_max if args.domain_y_max is None else args.domain_y_max,
        )
    if args.max_exits is not None:
        params.max_global_exits = args.max_exits
    elif "max_global_exits" not in values:
        params.max_global_exits = 50_000
    if args.paths_per_thread is not None:
        params.paths_per_thread = args.paths_per_thread
    if args.step_size is not None:
        params.step_size = args.step_size
    elif "step_size" not in values:
        params.step_size = 0.05
    if args.threads is not None:
        params.n_threads = args.threads
    if args.seed is not None:
        params.seed = args.seed
    if args.buffer_segments:
        params.buffer_segments = True
    return params


def main():
    parser = argparse.ArgumentParser(
        description="Simulate Brownian motions with domain exits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--domain-x-min", type=float, default=None, help="Minimum x value of domain (default: 0.0)")
    parser.add_argument("--domain-x-max", type=float, default=None, help="Maximum x value of domain (default: 1.0)")
    parser.add_argument("--domain-y-min", type=float, default=None, help="Minimum y value of domain (default: 0.0)")
    parser.add_argument("--domain-y-max", type=float, default=None, help="Maximum y value of domain (default: 1.0)")
    parser.add_argument("--max-exits", type=int, default=None, help="Maximum number of exits to simulate (default: 50000)")
    parser.add_argument("--paths-per-thread", type=int, default=None, help="Number of simultaneous paths per thread (default: 100)")
    parser.add_argument("--step-size", type=float, default=None, help="Standard deviation of each step (default: 0.05)")
    parser.add_argument("--threads", type=int, default=None, help="Worker threads (default: one per CPU)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--buffer-segments",
        action="store_true",
        help="Collect segments per worker and merge them after the run",
    )
    parser.add_argument("--config", type=str, default=None, help="JSON or TOML parameter file")
    parser.add_argument("--output-csv", type=str, default="brownian_paths.csv", help="Output CSV file for path segments")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", type=str, default=None, help="Also write the log to this file")

    args = parser.parse_args()
    setup_logging(getattr(logging, args.log_level), args.log_file)

    if args.config and not os.path.exists(args.config):
        print(f"Error: file not found: {args.config}", file=sys.stderr)
        return 1

    try:
        params = build_params(args)
        params.validate()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("Simulation Parameters:")
    print("---------------------")
    print(f"  Domain X: {params.domain_x}")
    print(f"  Domain Y: {params.domain_y}")
    print(f"  Max Exits: {params.max_global_exits}")
    print(f"  Paths per Thread: {params.paths_per_thread}")
    print(f"  Step Size: {params.step_size}")
    print(f"  Number of Threads: {params.resolved_threads()}")
    print(f"  Random Seed: {'random' if params.seed is None else params.seed}")

    start_time = time.time()
    segments = simulate(
        params.domain_x,
        params.domain_y,
        max_global_exits=params.max_global_exits,
        paths_per_thread=params.paths_per_thread,
        step_size=params.step_size,
        seed=params.seed,
        n_threads=params.n_threads,
        buffer_segments=params.buffer_segments,
    )
    elapsed_time = time.time() - start_time

    rows = io.write_segments_csv(args.output_csv, segments)
    print(f"\nSaved {rows} path segments to: {args.output_csv}")

    print(f"\nResults ({elapsed_time:.2f} seconds):")
    print(format_summary(summarize_segments(segments)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
