"""
Summary statistics for a finished run.
"""
from __future__ import annotations

from typing import Any, Dict, Sequence

import numpy as np
from scipy.stats import describe

from .geometry import BOUNDARY_LABELS
from .segments import Segment, segments_to_arrays


def steps_per_path(segments: Sequence[Segment]) -> np.ndarray:
    """Number of recorded segments of each path, ordered by path id."""
    if not segments:
        return np.empty(0, dtype=np.int64)
    ids = np.fromiter((seg.path_id for seg in segments), dtype=np.int64, count=len(segments))
    _, counts = np.unique(ids, return_counts=True)
    return counts


def describe_steps(counts: np.ndarray) -> Dict[str, float] | None:
    """
    Describe a steps-per-path sample.

    Returns None for an empty sample.
    """
    if counts.size == 0:
        return None
    stats = describe(counts.astype(np.float64), ddof=0)
    q1, median, q3 = np.percentile(counts, [25, 50, 75])
    return {
        "count": int(stats.nobs),
        "min": float(stats.minmax[0]),
        "q1": float(q1),
        "median": float(median),
        "mean": float(stats.mean),
        "q3": float(q3),
        "max": float(stats.minmax[1]),
        "variance": float(stats.variance),
    }


def summarize_segments(segments: Sequence[Segment]) -> Dict[str, Any]:
    """
    Totals and per-boundary exit counts for a segment sequence.
    """
    cols = segments_to_arrays(segments)
    exited = cols["has_exited"]
    boundaries = cols["exit_boundary"][exited]
    return {
        "total_segments": int(len(segments)),
        "unique_paths": int(np.unique(cols["path_id"]).size),
        "total_exits": int(np.count_nonzero(exited)),
        "exits_by_boundary": {
            label: int(np.count_nonzero(boundaries == label)) for label in BOUNDARY_LABELS
        },
        "steps_per_path": describe_steps(steps_per_path(segments)),
    }


def format_summary(summary: Dict[str, Any]) -> str:
    lines = [
        f"Total path segments: {summary['total_segments']}",
        f"Total unique paths: {summary['unique_paths']}",
        f"Total exits: {summary['total_exits']}",
        "Exits by boundary: "
        + ", ".join(f"{k}={v}" for k, v in summary["exits_by_boundary"].items()),
    ]
    steps = summary["steps_per_path"]
    if steps is not None:
        lines.append("Steps per path:")
        for key in ("count", "min", "q1", "median", "mean", "q3", "max", "variance"):
            value = steps[key]
            lines.append(f"  {key:<9}{value:.4g}" if isinstance(value, float) else f"  {key:<9}{value}")
    return "\n".join(lines)
