"""
Rectangular domain and exact exit geometry.

A step from ``(x1, y1)`` to ``(x2, y2)`` is treated as the parametric line
``P(t) = (x1, y1) + t * (dx, dy)``. The exit parameter is the smallest
``t`` in ``[0, 1]`` at which the line meets one of the four boundary lines
at a point that still lies on the rectangle. The arithmetic is compiled
with numba so that the worker hot loop can call it directly with scalars.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple, Union

from numba import njit

from .errors import ConfigurationError, GeometryError

###############################################################################
# Constants
###############################################################################

BOUNDARY_TOL = 1e-10
# Classification priority for points near more than one edge (corners).
BOUNDARY_LABELS = ("left", "right", "bottom", "top")

# Returned when no boundary crossing is found on the step.
FALLBACK_T = 1.0


@dataclass(frozen=True)
class Domain:
    """Rectangle ``[x_min, x_max] x [y_min, y_max]`` walks are confined to."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self) -> None:
        for name in ("x_min", "x_max", "y_min", "y_max"):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ConfigurationError(f"Domain bound {name}={value!r} must be finite")
            object.__setattr__(self, name, value)
        if self.x_min >= self.x_max:
            raise ConfigurationError(
                f"Domain requires x_min < x_max, got x_min={self.x_min}, x_max={self.x_max}"
            )
        if self.y_min >= self.y_max:
            raise ConfigurationError(
                f"Domain requires y_min < y_max, got y_min={self.y_min}, y_max={self.y_max}"
            )

    @classmethod
    def from_bounds(
        cls, domain_x: Tuple[float, float], domain_y: Tuple[float, float]
    ) -> "Domain":
        x_min, x_max = domain_x
        y_min, y_max = domain_y
        return cls(x_min, x_max, y_min, y_max)

    @property
    def x_bounds(self) -> Tuple[float, float]:
        return (self.x_min, self.x_max)

    @property
    def y_bounds(self) -> Tuple[float, float]:
        return (self.y_min, self.y_max)

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    def contains(self, x: float, y: float) -> bool:
        """Inclusive containment test (points on the boundary are inside)."""
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    def is_outside(self, x: float, y: float) -> bool:
        return is_outside(x, y, self.x_min, self.x_max, self.y_min, self.y_max)


DomainLike = Union[Domain, Tuple[float, float]]


###############################################################################
# Numba kernels
###############################################################################


@njit(cache=True)
def is_outside(x, y, x_min, x_max, y_min, y_max):
    return x < x_min or x > x_max or y < y_min or y > y_max


@njit(cache=True)
def _valid_candidate(t, start, delta, lo, hi):
    # The crossing axis lies on its bound by construction; only the other
    # axis is tested.
    if t < 0.0 or t > 1.0:
        return False
    p = start + t * delta
    return lo <= p <= hi


@njit(cache=True)
def exit_parameter(x1, y1, x2, y2, x_min, x_max, y_min, y_max):
    """
    Smallest valid crossing parameter of the step, or ``1.0`` if none.

    A zero direction component has no crossing on that axis, so its two
    candidates are skipped instead of dividing by zero.
    """
    dx = x2 - x1
    dy = y2 - y1

    best = math.inf
    if dx != 0.0:
        t = (x_min - x1) / dx
        if t < best and _valid_candidate(t, y1, dy, y_min, y_max):
            best = t
        t = (x_max - x1) / dx
        if t < best and _valid_candidate(t, y1, dy, y_min, y_max):
            best = t
    if dy != 0.0:
        t = (y_min - y1) / dy
        if t < best and _valid_candidate(t, x1, dx, x_min, x_max):
            best = t
        t = (y_max - y1) / dy
        if t < best and _valid_candidate(t, x1, dx, x_min, x_max):
            best = t

    if best == math.inf:
        return 1.0
    return best


###############################################################################
# Public API
###############################################################################


def _unpack(domain_x: DomainLike, domain_y: Tuple[float, float] | None):
    if isinstance(domain_x, Domain):
        return domain_x.x_min, domain_x.x_max, domain_x.y_min, domain_x.y_max
    if domain_y is None:
        raise TypeError("domain_y is required when domain_x is a bounds tuple")
    x_min, x_max = domain_x
    y_min, y_max = domain_y
    return float(x_min), float(x_max), float(y_min), float(y_max)


def find_exit_point(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    domain_x: DomainLike,
    domain_y: Tuple[float, float] | None = None,
) -> float:
    """
    Find the parameter ``t`` at which the step first leaves the domain.

    Args:
        x1, y1: Start of the step (inside or on the domain)
        x2, y2: End of the step
        domain_x: ``(x_min, x_max)`` or a ``Domain``
        domain_y: ``(y_min, y_max)``; omitted when ``domain_x`` is a ``Domain``

    Returns:
        ``t`` in ``[0, 1]``; ``1.0`` when no crossing is found, which makes
        the step end point the exit point.
    """
    x_min, x_max, y_min, y_max = _unpack(domain_x, domain_y)
    return float(
        exit_parameter(
            float(x1), float(y1), float(x2), float(y2), x_min, x_max, y_min, y_max
        )
    )


def identify_exit_boundary(
    x: float,
    y: float,
    domain_x: DomainLike,
    domain_y: Tuple[float, float] | None = None,
    tol: float = BOUNDARY_TOL,
) -> Tuple[str, float]:
    """
    Identify which boundary the point lies on and that boundary's value.

    Edges are tested in the order left, right, bottom, top and the first
    one within ``tol`` wins, so a corner point resolves to its x edge.

    Raises:
        GeometryError: If the point is not within ``tol`` of any boundary.
    """
    x_min, x_max, y_min, y_max = _unpack(domain_x, domain_y)
    if abs(x - x_min) <= tol:
        return "left", x_min
    if abs(x - x_max) <= tol:
        return "right", x_max
    if abs(y - y_min) <= tol:
        return "bottom", y_min
    if abs(y - y_max) <= tol:
        return "top", y_max
    raise GeometryError(x, y, tol)
