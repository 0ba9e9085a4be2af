"""
Parallel bounded-exit Brownian motion simulator.

Each worker thread owns a fixed pool of walkers and a private random
generator. Walkers take Gaussian steps; a step that lands outside the
domain is clipped to its exact boundary crossing, recorded as an exit, and
the walker's slot is re-seeded with a fresh path. Workers stop once the
shared exit budget is spent.

Shared between workers:
- the global exit budget (``AtomicCounter``),
- the path id allocator (``AtomicCounter``),
- the segment sink (``SegmentSink``).
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import SimulationParams
from .errors import GeometryError
from .geometry import Domain, exit_parameter, identify_exit_boundary, is_outside
from .segments import Segment, remove_non_exiting_paths
from .sync import AtomicCounter, SegmentSink

logger = logging.getLogger(__name__)


@dataclass
class PathState:
    id: int
    x: float
    y: float
    step_count: int = 0


class PathPool:
    """
    Fixed-size arena of walker slots.

    Slots are overwritten in place when a walker exits; the pool never
    grows or shrinks during a run.
    """

    def __init__(self, size: int):
        self.ids = np.empty(size, dtype=np.int64)
        self.x = np.empty(size, dtype=np.float64)
        self.y = np.empty(size, dtype=np.float64)
        self.steps = np.zeros(size, dtype=np.int64)

    def __len__(self) -> int:
        return self.ids.shape[0]

    def respawn(
        self, i: int, path_id: int, rng: np.random.Generator, domain: Domain
    ) -> None:
        """Start a new path in slot ``i`` at a uniform position in the domain."""
        self.ids[i] = path_id
        self.x[i] = domain.x_min + rng.random() * domain.width
        self.y[i] = domain.y_min + rng.random() * domain.height
        self.steps[i] = 0

    def state(self, i: int) -> PathState:
        return PathState(
            id=int(self.ids[i]),
            x=float(self.x[i]),
            y=float(self.y[i]),
            step_count=int(self.steps[i]),
        )


class ExitWorker:
    """One simulation thread: steps its own walkers until the budget runs out."""

    def __init__(
        self,
        worker_id: int,
        domain: Domain,
        params: SimulationParams,
        budget: AtomicCounter,
        path_ids: AtomicCounter,
        sink: SegmentSink,
        rng: np.random.Generator,
        abort: threading.Event,
    ):
        self.worker_id = worker_id
        self.domain = domain
        self.max_global_exits = int(params.max_global_exits)
        self.step_size = float(params.step_size)
        self.buffer_segments = bool(params.buffer_segments)
        self.budget = budget
        self.path_ids = path_ids
        self.sink = sink
        self.rng = rng
        self.abort = abort
        self.exits_recorded = 0

        # Initial ids are allocated on the constructing thread.
        self.pool = PathPool(int(params.paths_per_thread))
        for i in range(len(self.pool)):
            self.pool.respawn(i, self.path_ids.fetch_add(1), self.rng, self.domain)

    def _classify(
        self, path_id: int, start: Tuple[float, float], end: Tuple[float, float],
        ix: float, iy: float,
    ) -> Tuple[str, float]:
        try:
            return identify_exit_boundary(ix, iy, self.domain)
        except GeometryError:
            logger.error(
                "Worker %d: path %d step (%r, %r) -> (%r, %r) crosses at (%r, %r), "
                "which matches no boundary",
                self.worker_id, path_id, start[0], start[1], end[0], end[1], ix, iy,
            )
            raise

    def run(self) -> int:
        """
        Run until the exit budget is spent or the run is aborted.

        Returns:
            Number of exits this worker recorded.
        """
        d = self.domain
        x_min, x_max, y_min, y_max = d.x_min, d.x_max, d.y_min, d.y_max
        cap = self.max_global_exits
        step_size = self.step_size
        rng = self.rng
        pool = self.pool
        n = len(pool)

        buffer: List[Segment] = []
        record = buffer.append if self.buffer_segments else self.sink.append

        while n > 0 and self.budget.peek() < cap and not self.abort.is_set():
            i = 0
            while i < n:
                path_id = int(pool.ids[i])
                x = float(pool.x[i])
                y = float(pool.y[i])
                step = int(pool.steps[i]) + 1

                dx = rng.normal(0.0, step_size)
                dy = rng.normal(0.0, step_size)
                new_x = x + dx
                new_y = y + dy

                if is_outside(new_x, new_y, x_min, x_max, y_min, y_max):
                    t = exit_parameter(x, y, new_x, new_y, x_min, x_max, y_min, y_max)
                    ix = x + t * dx
                    iy = y + t * dy
                    boundary, value = self._classify(path_id, (x, y), (new_x, new_y), ix, iy)

                    if self.budget.fetch_add(1) >= cap:
                        # Budget spent by now; this step is discarded.
                        break

                    record(
                        Segment(
                            path_id=path_id,
                            step=step,
                            start_x=x,
                            start_y=y,
                            end_x=new_x,
                            end_y=new_y,
                            has_exited=True,
                            intersection_x=ix,
                            intersection_y=iy,
                            exit_boundary=boundary,
                            boundary_value=value,
                        )
                    )
                    self.exits_recorded += 1
                    # Same index: the fresh walker is stepped next.
                    pool.respawn(i, self.path_ids.fetch_add(1), rng, d)
                else:
                    record(
                        Segment(
                            path_id=path_id,
                            step=step,
                            start_x=x,
                            start_y=y,
                            end_x=new_x,
                            end_y=new_y,
                        )
                    )
                    pool.x[i] = new_x
                    pool.y[i] = new_y
                    pool.steps[i] = step
                    i += 1

        if self.buffer_segments:
            self.sink.extend(buffer)
        return self.exits_recorded


def run_simulation(params: SimulationParams) -> List[Segment]:
    """
    Run a full simulation described by ``params``.

    Raises:
        ConfigurationError: Before any worker starts, for invalid parameters.
        GeometryError: If any worker fails to classify an exit point; the
            partial results are discarded.
    """
    domain = params.validate()
    n_threads = params.resolved_threads()

    budget = AtomicCounter()
    path_ids = AtomicCounter()
    sink = SegmentSink()
    abort = threading.Event()

    seeds = np.random.SeedSequence(params.seed).spawn(n_threads)
    workers = [
        ExitWorker(k, domain, params, budget, path_ids, sink, np.random.default_rng(s), abort)
        for k, s in enumerate(seeds)
    ]

    logger.info(
        "Running exit simulation: domain=%s x %s, max_exits=%d, threads=%d, "
        "paths/thread=%d, step=%g, seed=%s",
        domain.x_bounds, domain.y_bounds, params.max_global_exits, n_threads,
        params.paths_per_thread, params.step_size,
        "random" if params.seed is None else params.seed,
    )
    start_time = time.time()

    failures: List[BaseException] = []
    with ThreadPoolExecutor(max_workers=n_threads, thread_name_prefix="exit-worker") as executor:
        future_to_worker = {executor.submit(w.run): w for w in workers}
        for future in as_completed(future_to_worker):
            worker = future_to_worker[future]
            try:
                exits = future.result()
            except Exception as e:
                abort.set()
                failures.append(e)
                logger.error("Worker %d failed: %s", worker.worker_id, e)
            else:
                logger.debug("Worker %d finished with %d exits", worker.worker_id, exits)

    if failures:
        raise failures[0]

    segments = sink.snapshot()
    elapsed = time.time() - start_time
    logger.info(
        "Simulation completed: %d segments, %d exit attempts in %.2fs",
        len(segments), budget.peek(), elapsed,
    )
    return remove_non_exiting_paths(segments)


def simulate(
    domain_x: Tuple[float, float] = (0.0, 1.0),
    domain_y: Tuple[float, float] = (0.0, 1.0),
    max_global_exits: int = 10_000,
    paths_per_thread: int = 100,
    step_size: float = 0.1,
    seed: Optional[int] = None,
    *,
    n_threads: Optional[int] = None,
    buffer_segments: bool = False,
) -> List[Segment]:
    """
    Simulate concurrent Brownian motions until ``max_global_exits`` exits.

    Args:
        domain_x: ``(x_min, x_max)``
        domain_y: ``(y_min, y_max)``
        max_global_exits: Exits to record across all workers
        paths_per_thread: Walkers kept alive by each worker
        step_size: Standard deviation of each Gaussian step component
        seed: Base seed; ``None`` draws from system entropy
        n_threads: Worker count (default: one per hardware thread)
        buffer_segments: Collect segments per worker and merge after the run

    Returns:
        Segments of every path that exited, in arrival order.
    """
    params = SimulationParams(
        domain_x=tuple(domain_x),
        domain_y=tuple(domain_y),
        max_global_exits=max_global_exits,
        paths_per_thread=paths_per_thread,
        step_size=step_size,
        seed=seed,
        n_threads=n_threads,
        buffer_segments=buffer_segments,
    )
    return run_simulation(params)
