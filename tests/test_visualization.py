"""
Smoke tests for the path plot.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from brownian_exits import simulate
from brownian_exits.visualization import plot_random_paths, polyline


def test_polyline_orders_by_step(sample_segments):
    path = [sample_segments[2], sample_segments[0]]
    xs, ys = polyline(path)
    assert np.allclose(xs, [0.5, 0.7, 1.1])
    assert np.allclose(ys, [0.5, 0.5, 0.5])


def test_plot_random_paths_writes_image(tmp_path):
    segments = simulate(
        (0.0, 1.0), (-0.5, 0.5),
        max_global_exits=20, paths_per_thread=5, step_size=0.1, seed=8, n_threads=1,
    )
    out = tmp_path / "plots" / "paths.png"
    fig, selected = plot_random_paths(
        segments, n_paths=4, domain_x=(0.0, 1.0), domain_y=(-0.5, 0.5),
        output_file=str(out), seed=0,
    )
    plt.close(fig)

    assert out.exists() and out.stat().st_size > 0
    assert len(selected) == 4
    assert selected == sorted(selected)
    assert set(selected) <= {s.path_id for s in segments}


def test_plot_with_fewer_paths_than_requested(sample_segments):
    fig, selected = plot_random_paths(sample_segments, n_paths=10, output_file=None, seed=1)
    plt.close(fig)
    assert selected == [0, 1, 2]
