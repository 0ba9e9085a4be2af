# src/brownian_exits/config.py
from __future__ import annotations

import json
import math
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import ConfigurationError
from .geometry import Domain


@dataclass
class SimulationParams:
    """Configuration for a bounded-exit Brownian motion run."""

    domain_x: Tuple[float, float] = (0.0, 1.0)
    domain_y: Tuple[float, float] = (0.0, 1.0)
    max_global_exits: int = 10_000
    paths_per_thread: int = 100
    step_size: float = 0.1
    seed: Optional[int] = None
    n_threads: Optional[int] = None
    buffer_segments: bool = False

    def domain(self) -> Domain:
        return Domain.from_bounds(self.domain_x, self.domain_y)

    def resolved_threads(self) -> int:
        """Worker count; one per hardware thread unless set explicitly."""
        if self.n_threads is not None:
            return int(self.n_threads)
        return os.cpu_count() or 1

    def validate(self) -> Domain:
        """
        Check every parameter and return the run's ``Domain``.

        Raises:
            ConfigurationError: Naming the first offending value.
        """
        domain = self.domain()
        if not math.isfinite(self.step_size) or self.step_size <= 0:
            raise ConfigurationError(f"step_size must be > 0, got {self.step_size!r}")
        if self.paths_per_thread <= 0:
            raise ConfigurationError(
                f"paths_per_thread must be > 0, got {self.paths_per_thread!r}"
            )
        if self.max_global_exits < 0:
            raise ConfigurationError(
                f"max_global_exits must be >= 0, got {self.max_global_exits!r}"
            )
        if self.n_threads is not None and self.n_threads <= 0:
            raise ConfigurationError(f"n_threads must be > 0, got {self.n_threads!r}")
        return domain

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationParams":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown simulation parameters: {', '.join(unknown)}")
        values = dict(data)
        for key in ("domain_x", "domain_y"):
            if key in values:
                try:
                    bounds = tuple(float(v) for v in values[key])
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(
                        f"{key} must be two numbers, got {values[key]!r}"
                    ) from e
                if len(bounds) != 2:
                    raise ConfigurationError(f"{key} must have two values, got {values[key]!r}")
                values[key] = bounds
        return cls(**values)


def load_params(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """
    Load simulation parameters from JSON or TOML.

    Raises:
        ConfigurationError: Unsupported suffix or unparseable content.
        FileNotFoundError: If ``path`` does not exist.
    """
    path = str(path)
    suffix = Path(path).suffix.lower()
    if suffix not in {".json", "", ".toml", ".tml"}:
        raise ConfigurationError(f"Unsupported parameter file format: {suffix}")
    with open(path, "rb") as fh:
        data = fh.read()
    try:
        if suffix in {".toml", ".tml"}:
            return tomllib.loads(data.decode("utf-8"))
        return json.loads(data.decode("utf-8"))
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Could not parse {path}: {e}") from e


def load_simulation_params(path: str | os.PathLike[str]) -> SimulationParams:
    return SimulationParams.from_mapping(load_params(path))
