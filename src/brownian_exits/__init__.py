"""
Bounded-Exit Brownian Motion Simulator

Simulates many concurrent 2D random walks in a rectangular domain, records
every step as a segment, and computes the exact point where each walk
first leaves the domain. The run stops after a global number of exits.
"""

from .config import SimulationParams, load_params, load_simulation_params
from .errors import BrownianExitsError, ConfigurationError, GeometryError
from .geometry import Domain, find_exit_point, identify_exit_boundary
from .segments import Segment, remove_non_exiting_paths
from .simulation import run_simulation, simulate
from . import analysis, io

__all__ = [
    # Simulation
    "simulate",
    "run_simulation",
    "SimulationParams",
    "load_params",
    "load_simulation_params",
    # Geometry
    "Domain",
    "find_exit_point",
    "identify_exit_boundary",
    # Results
    "Segment",
    "remove_non_exiting_paths",
    # Errors
    "BrownianExitsError",
    "ConfigurationError",
    "GeometryError",
    # Submodules
    "analysis",
    "io",
]
