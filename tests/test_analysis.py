"""
Tests for run summaries.
"""

import pytest

from brownian_exits.analysis import format_summary, steps_per_path, summarize_segments


def test_steps_per_path(sample_segments):
    assert steps_per_path(sample_segments).tolist() == [2, 2, 1]
    assert steps_per_path([]).size == 0


def test_summarize_segments(sample_segments):
    summary = summarize_segments(sample_segments)
    assert summary["total_segments"] == 5
    assert summary["unique_paths"] == 3
    assert summary["total_exits"] == 2
    assert summary["exits_by_boundary"] == {"left": 0, "right": 1, "bottom": 1, "top": 0}

    steps = summary["steps_per_path"]
    assert steps["count"] == 3
    assert steps["min"] == 1.0
    assert steps["max"] == 2.0
    assert steps["mean"] == pytest.approx(5.0 / 3.0)
    assert steps["median"] == 2.0


def test_summarize_empty():
    summary = summarize_segments([])
    assert summary["total_segments"] == 0
    assert summary["total_exits"] == 0
    assert summary["steps_per_path"] is None
    assert "Total exits: 0" in format_summary(summary)


def test_format_summary(sample_segments):
    text = format_summary(summarize_segments(sample_segments))
    assert "Total path segments: 5" in text
    assert "right=1" in text
    assert "Steps per path:" in text
