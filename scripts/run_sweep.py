"""Run a buffer-size sweep and write the results as JSON and CSV artifacts."""

from __future__ import annotations

import argparse
import csv
import logging
from pathlib import Path

from deadtime.config import SimulationConfig  # noqa: E402
from deadtime.sweep import run_sweep  # noqa: E402

FIELDS = [
    "limit",
    "dead_time",
    "error",
    "triggers_total",
    "triggers_lost",
    "lost_blocked",
    "lost_buffer_full",
    "ticks",
    "runtime_ms",
]


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--max_limit", type=int, default=15)
    ap.add_argument("--min_limit", type=int, default=0)
    ap.add_argument("--max_event", type=int, default=SimulationConfig().max_event)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--threads", action="store_true", help="Use a thread pool instead of processes")
    ap.add_argument("--outdir", default="artifacts", help="Output directory")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    result = run_sweep(
        args.max_limit,
        args.min_limit,
        config=SimulationConfig(max_event=args.max_event),
        workers=args.workers,
        seed=args.seed,
        use_processes=not args.threads,
    )

    (outdir / "sweep.json").write_text(result.to_json())

    with (outdir / "sweep.csv").open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        w.writerows(r.to_dict() for r in result)

    print(f"Wrote {len(result)} rows to: {outdir}")


if __name__ == "__main__":
    main()
