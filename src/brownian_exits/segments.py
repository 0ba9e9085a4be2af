"""
Segment records and post-run filtering.

A ``Segment`` is one recorded step of one path. The field order of
``SEGMENT_FIELDS`` is the column order of the tabular output.
"""

from __future__ import annotations

import logging
from dataclasses import astuple, dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)

SEGMENT_FIELDS = (
    "path_id",
    "step",
    "start_x",
    "start_y",
    "end_x",
    "end_y",
    "has_exited",
    "intersection_x",
    "intersection_y",
    "exit_boundary",
    "boundary_value",
)


@dataclass(frozen=True)
class Segment:
    """One step of one path, with exit data when the step left the domain."""

    path_id: int
    step: int
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    has_exited: bool = False
    intersection_x: Optional[float] = None
    intersection_y: Optional[float] = None
    exit_boundary: Optional[str] = None
    boundary_value: Optional[float] = None

    def as_tuple(self) -> tuple:
        return astuple(self)


def remove_non_exiting_paths(segments: Sequence[Segment]) -> List[Segment]:
    """
    Keep only the segments of paths that reached an exit.

    Paths still in flight when the exit budget ran out are dropped
    entirely. Relative order of the kept segments is preserved.
    """
    exiting = {seg.path_id for seg in segments if seg.has_exited}
    filtered = [seg for seg in segments if seg.path_id in exiting]

    original_paths = len({seg.path_id for seg in segments})
    logger.info(
        "Kept %d/%d paths (%d/%d segments); removed %d paths without an exit",
        len(exiting),
        original_paths,
        len(filtered),
        len(segments),
        original_paths - len(exiting),
    )
    return filtered


def group_by_path(segments: Iterable[Segment]) -> Dict[int, List[Segment]]:
    """Group segments by ``path_id``, each group ordered by ``step``."""
    paths: Dict[int, List[Segment]] = {}
    for seg in segments:
        paths.setdefault(seg.path_id, []).append(seg)
    for path in paths.values():
        path.sort(key=lambda s: s.step)
    return paths


def segments_to_arrays(segments: Sequence[Segment]) -> Dict[str, np.ndarray]:
    """
    Column-oriented view of a segment sequence.

    Absent float values become NaN and absent boundary labels become empty
    strings so every column is a plain numpy array.
    """
    n = len(segments)
    cols: Dict[str, np.ndarray] = {
        "path_id": np.empty(n, dtype=np.int64),
        "step": np.empty(n, dtype=np.int64),
        "start_x": np.empty(n, dtype=np.float64),
        "start_y": np.empty(n, dtype=np.float64),
        "end_x": np.empty(n, dtype=np.float64),
        "end_y": np.empty(n, dtype=np.float64),
        "has_exited": np.empty(n, dtype=bool),
        "intersection_x": np.full(n, np.nan, dtype=np.float64),
        "intersection_y": np.full(n, np.nan, dtype=np.float64),
        "exit_boundary": np.full(n, "", dtype="<U6"),
        "boundary_value": np.full(n, np.nan, dtype=np.float64),
    }
    for i, seg in enumerate(segments):
        cols["path_id"][i] = seg.path_id
        cols["step"][i] = seg.step
        cols["start_x"][i] = seg.start_x
        cols["start_y"][i] = seg.start_y
        cols["end_x"][i] = seg.end_x
        cols["end_y"][i] = seg.end_y
        cols["has_exited"][i] = seg.has_exited
        if seg.has_exited:
            cols["intersection_x"][i] = seg.intersection_x
            cols["intersection_y"][i] = seg.intersection_y
            cols["exit_boundary"][i] = seg.exit_boundary
            cols["boundary_value"][i] = seg.boundary_value
    return cols
