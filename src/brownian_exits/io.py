# src/brownian_exits/io.py
from __future__ import annotations

import csv
import os
from pathlib import Path
from typing import Iterable, List, Optional

from .segments import SEGMENT_FIELDS, Segment

_TRUE = {"true", "1"}
_FALSE = {"false", "0"}


def _format_cell(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_bool(text: str) -> bool:
    key = text.strip().lower()
    if key in _TRUE:
        return True
    if key in _FALSE:
        return False
    raise ValueError(f"Invalid boolean cell: {text!r}")


def _parse_optional_float(text: str) -> Optional[float]:
    text = text.strip()
    if text == "" or text.lower() == "missing":
        return None
    return float(text)


def write_segments_csv(
    path: str | os.PathLike[str], segments: Iterable[Segment]
) -> int:
    """
    Write segments as CSV, one row per segment, header first.

    Absent values are written as empty cells. Returns the row count.
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with open(out_path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(SEGMENT_FIELDS)
        for seg in segments:
            writer.writerow([_format_cell(v) for v in seg.as_tuple()])
            rows += 1
    return rows


def read_segments_csv(path: str | os.PathLike[str]) -> List[Segment]:
    """
    Read a CSV produced by ``write_segments_csv``.

    Raises:
        ValueError: If a required column is missing or a cell cannot be parsed.
    """
    segments: List[Segment] = []
    with open(path, newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        missing = [name for name in SEGMENT_FIELDS if name not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{path}: missing columns {', '.join(missing)}")
        for row in reader:
            boundary = row["exit_boundary"].strip()
            segments.append(
                Segment(
                    path_id=int(row["path_id"]),
                    step=int(row["step"]),
                    start_x=float(row["start_x"]),
                    start_y=float(row["start_y"]),
                    end_x=float(row["end_x"]),
                    end_y=float(row["end_y"]),
                    has_exited=_parse_bool(row["has_exited"]),
                    intersection_x=_parse_optional_float(row["intersection_x"]),
                    intersection_y=_parse_optional_float(row["intersection_y"]),
                    exit_boundary=boundary if boundary and boundary != "missing" else None,
                    boundary_value=_parse_optional_float(row["boundary_value"]),
                )
            )
    return segments
