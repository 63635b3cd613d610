"""Result containers and report formatting."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, List, Optional


@dataclass(frozen=True)
class DeadTimeResult:
    limit: int
    dead_time: float
    error: float
    triggers_total: int
    triggers_lost: int
    lost_blocked: int
    lost_buffer_full: int
    ticks: int
    runtime_ms: Optional[float] = None

    @property
    def ratio(self) -> float:
        return self.dead_time / 100.0

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def to_json(self) -> str:
        # NaN is emitted as-is for runs that saw no triggers.
        return json.dumps(self.to_dict(), indent=2, sort_keys=True)


@dataclass
class SweepResult:
    results: Dict[int, DeadTimeResult] = field(default_factory=dict)
    elapsed_s: float = 0.0

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[DeadTimeResult]:
        for limit in sorted(self.results):
            yield self.results[limit]

    def __getitem__(self, limit: int) -> DeadTimeResult:
        return self.results[limit]

    @property
    def limits(self) -> List[int]:
        return sorted(self.results)

    def rows(self) -> List[str]:
        return [format_row(result) for result in self]

    def to_json(self) -> str:
        payload = {
            "elapsed_s": self.elapsed_s,
            "results": [result.to_dict() for result in self],
        }
        return json.dumps(payload, indent=2)


def format_row(result: DeadTimeResult) -> str:
    return f"Buffer size {result.limit} =>  {result.dead_time:.3f} +- {result.error:.3f}%"


def format_elapsed(seconds: float) -> str:
    if seconds < 1.0:
        return f"{seconds * 1000.0:.3f}ms"
    minutes, secs = divmod(seconds, 60.0)
    if minutes < 1:
        return f"{secs:.3f}s"
    hours, minutes = divmod(int(minutes), 60)
    if hours:
        return f"{hours}h{minutes:02d}m{secs:06.3f}s"
    return f"{minutes}m{secs:06.3f}s"
