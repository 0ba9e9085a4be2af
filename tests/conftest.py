import pytest

from brownian_exits import Segment


@pytest.fixture
def sample_segments():
    """Three paths in the unit square: 0 and 2 exit, 1 is still in flight."""
    return [
        Segment(0, 1, 0.5, 0.5, 0.7, 0.5),
        Segment(1, 1, 0.2, 0.2, 0.25, 0.3),
        Segment(0, 2, 0.7, 0.5, 1.1, 0.5, True, 1.0, 0.5, "right", 1.0),
        Segment(2, 1, 0.3, 0.1, 0.3, -0.1, True, 0.3, 0.0, "bottom", 0.0),
        Segment(1, 2, 0.25, 0.3, 0.2, 0.4),
    ]
