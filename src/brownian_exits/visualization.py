# src/brownian_exits/visualization.py
from __future__ import annotations

import os
from typing import List, Optional, Sequence, Tuple

import matplotlib
import matplotlib.pyplot as plt
import numpy as np

from .segments import Segment, group_by_path

DOMAIN_PADDING = 0.05


def _domain_outline(domain_x, domain_y):
    x_min, x_max = domain_x
    y_min, y_max = domain_y
    return [x_min, x_max, x_max, x_min, x_min], [y_min, y_min, y_max, y_max, y_min]


def polyline(path: Sequence[Segment]) -> Tuple[np.ndarray, np.ndarray]:
    """Vertices of a path: first start point, then every end point by step."""
    ordered = sorted(path, key=lambda s: s.step)
    xs = np.empty(len(ordered) + 1, dtype=np.float64)
    ys = np.empty(len(ordered) + 1, dtype=np.float64)
    xs[0], ys[0] = ordered[0].start_x, ordered[0].start_y
    for k, seg in enumerate(ordered, start=1):
        xs[k], ys[k] = seg.end_x, seg.end_y
    return xs, ys


def plot_random_paths(
    segments: Sequence[Segment],
    n_paths: int = 5,
    domain_x: Tuple[float, float] = (0.0, 1.0),
    domain_y: Tuple[float, float] = (0.0, 1.0),
    output_file: Optional[str] = "brownian_paths.png",
    seed: Optional[int] = None,
    dpi: int = 150,
):
    """
    Plot a random selection of paths with their start, crossing and exit points.

    Args:
        segments: Segments of one or more paths
        n_paths: Number of paths to draw (fewer if not enough paths exist)
        domain_x, domain_y: Domain bounds drawn as the outline
        output_file: Image path to save to (None to skip saving)
        seed: Seed for the path selection

    Returns:
        (figure, selected path ids)
    """
    paths = group_by_path(segments)
    rng = np.random.default_rng(seed)
    ids = np.array(sorted(paths), dtype=np.int64)
    count = min(n_paths, ids.size)
    selected: List[int] = sorted(int(i) for i in rng.choice(ids, size=count, replace=False)) if count else []

    fig, ax = plt.subplots(figsize=(8, 6))
    outline_x, outline_y = _domain_outline(domain_x, domain_y)
    ax.plot(outline_x, outline_y, color="black", linestyle="--", linewidth=1.5, label="Domain")

    colors = matplotlib.colormaps["tab10"](np.linspace(0.0, 1.0, max(count, 1), endpoint=False))

    # Lines first, markers on top
    for color, path_id in zip(colors, selected):
        xs, ys = polyline(paths[path_id])
        ax.plot(xs, ys, color=color, linewidth=1.5, alpha=0.8, label=f"Path {path_id}")

    marker_style = dict(edgecolors="white", linewidths=1, zorder=3)
    for color, path_id in zip(colors, selected):
        path = paths[path_id]
        ax.scatter([path[0].start_x], [path[0].start_y], color=color, marker="o", s=36, **marker_style)
        exits = [seg for seg in path if seg.has_exited]
        if exits:
            exit_seg = exits[0]
            ax.scatter(
                [exit_seg.intersection_x], [exit_seg.intersection_y],
                color=color, marker="D", s=36, **marker_style,
            )
            ax.scatter([exit_seg.end_x], [exit_seg.end_y], color=color, marker="*", s=64, **marker_style)

    # Legend entries for the marker kinds
    ax.scatter([], [], color="black", marker="o", s=36, label="Start points")
    ax.scatter([], [], color="black", marker="D", s=36, label="Intersection points")
    ax.scatter([], [], color="black", marker="*", s=64, alpha=0.5, label="Exit points")

    ax.plot(outline_x, outline_y, color="black", linewidth=1.0)

    ax.set_xlim(domain_x[0] - DOMAIN_PADDING, domain_x[1] + DOMAIN_PADDING)
    ax.set_ylim(domain_y[0] - DOMAIN_PADDING, domain_y[1] + DOMAIN_PADDING)
    ax.set_aspect("equal")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Brownian Motion Paths")
    ax.grid(True, linestyle="--", alpha=0.3)
    ax.legend(loc="center left", bbox_to_anchor=(1.02, 0.5))

    if output_file:
        out_dir = os.path.dirname(output_file)
        os.makedirs(out_dir if out_dir else ".", exist_ok=True)
        fig.savefig(output_file, dpi=dpi, bbox_inches="tight")

    return fig, selected
