"""Parallel sweep of the dead-time simulation over buffer capacities."""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .config import DEFAULT_MIN_LIMIT, SimulationConfig, limit_range
from .simulation import run_simulation
from .utils import DeadTimeResult, SweepResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class SweepError(Exception):
    pass


def default_workers() -> int:
    return os.cpu_count() or 1


def _run_one(
    limit: int, config: SimulationConfig, seed_seq: np.random.SeedSequence
) -> Tuple[int, DeadTimeResult]:
    rng = np.random.default_rng(seed_seq)
    return limit, run_simulation(limit, config, rng=rng)


def _collect(
    limit: int,
    result: Tuple[int, DeadTimeResult],
    results: Dict[int, DeadTimeResult],
) -> None:
    got_limit, value = result
    if got_limit != limit or limit in results:
        raise SweepError(f"Run for buffer size {limit} delivered a result for {got_limit}")
    results[limit] = value


def run_sweep(
    max_limit: int,
    min_limit: int = DEFAULT_MIN_LIMIT,
    config: Optional[SimulationConfig] = None,
    workers: Optional[int] = None,
    seed: Optional[int] = None,
    use_processes: bool = True,
    progress: Optional[ProgressCallback] = None,
) -> SweepResult:
    """Simulate every buffer capacity in ``[min_limit, max_limit]``.

    Each capacity gets its own run and its own random stream, spawned from a
    single :class:`numpy.random.SeedSequence` so that a fixed ``seed`` makes
    the whole sweep reproducible. Runs are dispatched to a process pool
    (or a thread pool when ``use_processes`` is false) of ``workers`` size,
    defaulting to the CPU count; ``workers=1`` runs them one after another in
    the calling thread.

    Results are collected in completion order and returned keyed by
    capacity. Any run that fails aborts the sweep with :class:`SweepError`
    as soon as its failure is seen; queued runs are cancelled and runs
    already in progress are abandoned. A partial sweep is never returned.
    """
    if config is None:
        config = SimulationConfig()
    config.validate()
    limits = limit_range(max_limit, min_limit)
    if workers is None:
        workers = default_workers()
    workers = max(1, min(workers, len(limits)))

    seed_seqs = np.random.SeedSequence(seed).spawn(len(limits))
    total = len(limits)
    results: Dict[int, DeadTimeResult] = {}

    logger.info(
        "Sweeping buffer sizes %d..%d (max_event=%d) on %d worker(s)",
        min_limit,
        max_limit,
        config.max_event,
        workers,
    )
    start = time.monotonic()

    if workers == 1:
        for done, (limit, seed_seq) in enumerate(zip(limits, seed_seqs), start=1):
            try:
                outcome = _run_one(limit, config, seed_seq)
            except Exception as exc:
                raise SweepError(f"Run for buffer size {limit} failed: {exc}") from exc
            _collect(limit, outcome, results)
            if progress is not None:
                progress(done, total)
    else:
        executor_cls = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
        ex = executor_cls(max_workers=workers)
        # Not a ``with`` block: leaving one waits for every running future.
        try:
            futs: Dict[Future, int] = {
                ex.submit(_run_one, limit, config, seed_seq): limit
                for limit, seed_seq in zip(limits, seed_seqs)
            }
            for done, fut in enumerate(as_completed(futs), start=1):
                limit = futs[fut]
                try:
                    outcome = fut.result()
                except Exception as exc:
                    raise SweepError(f"Run for buffer size {limit} failed: {exc}") from exc
                _collect(limit, outcome, results)
                if progress is not None:
                    progress(done, total)
        except BaseException:
            ex.shutdown(wait=False, cancel_futures=True)
            raise
        ex.shutdown(wait=True)

    missing: List[int] = [limit for limit in limits if limit not in results]
    if missing:
        raise SweepError(f"No result for buffer sizes {missing}")

    elapsed = time.monotonic() - start
    logger.info("Sweep finished in %.3f s", elapsed)
    return SweepResult(results={limit: results[limit] for limit in limits}, elapsed_s=elapsed)
