# src/brownian_exits/errors.py
from __future__ import annotations


class BrownianExitsError(Exception):
    """Base class for errors raised by the simulation."""


class ConfigurationError(BrownianExitsError, ValueError):
    """Invalid simulation parameters, raised before any worker starts."""


class GeometryError(BrownianExitsError, ArithmeticError):
    """
    An exit point could not be matched to any domain boundary.

    Only reachable through compounding floating-point error; the run that
    hits it is aborted.
    """

    def __init__(self, x: float, y: float, tol: float):
        super().__init__(
            f"Point ({x!r}, {y!r}) is not on any boundary (tol={tol:g})"
        )
        self.x = x
        self.y = y
        self.tol = tol
