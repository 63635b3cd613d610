"""Tick-level dead-time simulation of a single trigger buffer."""

from __future__ import annotations

import logging
import math
import time
from typing import Optional, Tuple

import numpy as np

from .buffer import Buffer
from .config import SimulationConfig
from .utils import DeadTimeResult

logger = logging.getLogger(__name__)

# Uniform draws are pulled from the generator in blocks of this size.
DRAW_CHUNK = 1 << 16


def dead_time_stats(lost: int, total: int) -> Tuple[float, float]:
    """Return dead time and its binomial standard error, both in percent.

    With no triggers the ratio is undefined and NaN is returned for both
    values instead of raising.
    """
    if total == 0:
        return math.nan, math.nan
    ratio = lost / total
    return ratio * 100.0, math.sqrt(ratio * (1.0 - ratio) / total) * 100.0


def _uniform_draws(rng: np.random.Generator, count: int):
    remaining = count
    while remaining > 0:
        size = min(DRAW_CHUNK, remaining)
        remaining -= size
        yield from rng.random(size).tolist()


def run_simulation(
    limit: int,
    config: Optional[SimulationConfig] = None,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
) -> DeadTimeResult:
    if config is None:
        config = SimulationConfig()
    config.validate()
    if rng is None:
        rng = np.random.default_rng(seed)

    start = time.monotonic()
    trigger_prob = config.trigger_probability
    block_ticks = config.block_ticks
    max_event = config.max_event

    buffer = Buffer(limit, readout_ticks=config.readout_ticks)
    block = 0
    n_triggers = 0
    lost_blocked = 0
    lost_full = 0
    ticks = 0

    logger.debug("Starting run: limit=%d max_event=%d", limit, max_event)

    for p in _uniform_draws(rng, max_event):
        buffer.step()

        # The block countdown doubles as the arrival delay of the triggered
        # event: when it runs out the event reaches the buffer.
        if block > 0:
            block -= 1
            if block == 0:
                if buffer.free():
                    buffer.add()
                else:
                    lost_full += 1

        buffer.read()

        ticks += 1
        if p < trigger_prob:
            n_triggers += 1
            if block == 0:
                block = block_ticks
            else:
                lost_blocked += 1

    lost = lost_blocked + lost_full
    dead_time, error = dead_time_stats(lost, n_triggers)
    runtime_ms = (time.monotonic() - start) * 1000.0

    logger.debug(
        "Finished run: limit=%d triggers=%d lost=%d (blocked=%d, full=%d) in %.1f ms",
        limit,
        n_triggers,
        lost,
        lost_blocked,
        lost_full,
        runtime_ms,
    )

    return DeadTimeResult(
        limit=limit,
        dead_time=dead_time,
        error=error,
        triggers_total=n_triggers,
        triggers_lost=lost,
        lost_blocked=lost_blocked,
        lost_buffer_full=lost_full,
        ticks=ticks,
        runtime_ms=runtime_ms,
    )


def calc_dead_time(limit: int, max_event: int, seed: Optional[int] = None) -> Tuple[float, float]:
    result = run_simulation(limit, SimulationConfig(max_event=max_event), seed=seed)
    return result.dead_time, result.error
