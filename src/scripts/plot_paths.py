#!/usr/bin/env python3
"""
Plot a random selection of simulated paths from a segment CSV.
"""

import argparse
import os
import sys

import matplotlib.pyplot as plt

from brownian_exits import io
from brownian_exits.visualization import plot_random_paths


def main():
    parser = argparse.ArgumentParser(
        description="Plot Brownian motion paths with domain exits"
    )
    parser.add_argument("--input-csv", required=True, help="Input CSV file with the path data")
    parser.add_argument("--plot-output", default="brownian_paths.png", help="Output image for the path plot")
    parser.add_argument("--n-paths", type=int, default=5, help="Number of random paths to plot (default: 5)")
    parser.add_argument("--domain-x-min", type=float, default=0.0, help="Minimum x value of domain")
    parser.add_argument("--domain-x-max", type=float, default=1.0, help="Maximum x value of domain")
    parser.add_argument("--domain-y-min", type=float, default=0.0, help="Minimum y value of domain")
    parser.add_argument("--domain-y-max", type=float, default=1.0, help="Maximum y value of domain")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the path selection")
    parser.add_argument("--dpi", type=int, default=150, help="DPI for output file (default: 150)")
    args = parser.parse_args()

    if not os.path.exists(args.input_csv):
        print(f"Error: file not found: {args.input_csv}")
        return 1

    segments = io.read_segments_csv(args.input_csv)
    fig, selected = plot_random_paths(
        segments,
        n_paths=args.n_paths,
        domain_x=(args.domain_x_min, args.domain_x_max),
        domain_y=(args.domain_y_min, args.domain_y_max),
        output_file=args.plot_output,
        seed=args.seed,
        dpi=args.dpi,
    )
    plt.close(fig)

    print(f"Plotted paths {selected}")
    print(f"Plot saved to: {args.plot_output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
