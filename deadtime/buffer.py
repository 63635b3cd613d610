"""Readout buffer state machine."""

from __future__ import annotations

READOUT_TICKS = 424


class Buffer:
    """Bounded event queue with a single readout slot.

    Capacity is not enforced by :meth:`add`; callers check :meth:`free` first
    so that a full buffer can be accounted as dead time at the call site.
    """

    def __init__(self, limit: int, readout_ticks: int = READOUT_TICKS):
        if limit < 0:
            raise ValueError(f"Buffer limit must be non-negative, got {limit}")
        self.limit = limit
        self.readout_ticks = readout_ticks
        self.queue = 0
        self.readout_remaining = 0

    def __repr__(self) -> str:
        return f"Buffer(queue={self.queue}, limit={self.limit}, readout_remaining={self.readout_remaining})"

    @property
    def busy(self) -> bool:
        return self.readout_remaining > 0

    def add(self) -> None:
        self.queue += 1

    def free(self) -> bool:
        return self.queue < self.limit

    def is_filled(self) -> bool:
        return self.queue > 0

    def read(self) -> None:
        # Only start a readout when idle; an in-progress one is never reset.
        if self.is_filled() and self.readout_remaining == 0:
            self.readout_remaining = self.readout_ticks

    def step(self) -> None:
        if self.is_filled() and self.readout_remaining > 0:
            self.readout_remaining -= 1
            if self.readout_remaining == 0:
                self.queue -= 1
