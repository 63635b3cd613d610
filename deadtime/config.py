"""Simulation configuration and sweep range parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import List

DEFAULT_MAX_LIMIT = 15
DEFAULT_MIN_LIMIT = 0

_LIMIT_RE = re.compile(r"[0-9]+")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class SimulationConfig:
    trigger_rate_hz: float = 75_000.0
    tick_rate_hz: float = 40_000_000.0
    block_ticks: int = 5
    readout_ticks: int = 424
    max_event: int = 1_000_000_000

    @property
    def trigger_probability(self) -> float:
        """Chance of an L1A on any single tick (75 kHz over 40 MHz by default)."""
        return self.trigger_rate_hz / self.tick_rate_hz

    def validate(self) -> "SimulationConfig":
        if self.tick_rate_hz <= 0:
            raise ConfigError("tick_rate_hz must be positive")
        if self.trigger_rate_hz < 0:
            raise ConfigError("trigger_rate_hz must be non-negative")
        if not 0.0 <= self.trigger_probability <= 1.0:
            raise ConfigError("trigger_rate_hz must not exceed tick_rate_hz")
        if self.block_ticks < 0 or self.readout_ticks < 0 or self.max_event < 0:
            raise ConfigError("block_ticks, readout_ticks and max_event must be non-negative")
        return self

    def with_max_event(self, max_event: int) -> "SimulationConfig":
        return replace(self, max_event=max_event).validate()


def parse_limit(text: str, name: str = "limit") -> int:
    # Plain ASCII digits only: no sign, whitespace or underscores.
    if not isinstance(text, str) or not _LIMIT_RE.fullmatch(text):
        raise ConfigError(f"{name} must be a non-negative integer, got {text!r}")
    return int(text)


def limit_range(max_limit: int, min_limit: int = DEFAULT_MIN_LIMIT) -> List[int]:
    """Return every buffer capacity in ``[min_limit, max_limit]``, ascending."""
    if min_limit < 0 or max_limit < 0:
        raise ConfigError("Buffer limits must be non-negative")
    if min_limit > max_limit:
        raise ConfigError(f"min_limit ({min_limit}) is larger than max_limit ({max_limit})")
    return list(range(min_limit, max_limit + 1))
