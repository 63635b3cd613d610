"""Command line interface for the buffer dead-time sweep."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from .config import DEFAULT_MAX_LIMIT, DEFAULT_MIN_LIMIT, ConfigError, SimulationConfig, parse_limit
from .sweep import SweepError, run_sweep
from .utils import format_elapsed


def _print_progress(done: int, total: int) -> None:
    print(f"Finished {done / total * 100.0:.2f}%.", end="\r", flush=True)


def _run_command(args: argparse.Namespace) -> int:
    try:
        max_limit = DEFAULT_MAX_LIMIT if args.max_limit is None else parse_limit(args.max_limit, "max_limit")
        min_limit = DEFAULT_MIN_LIMIT if args.min_limit is None else parse_limit(args.min_limit, "min_limit")
        config = SimulationConfig(max_event=args.max_event).validate()
    except ConfigError as exc:
        print(f"Error: {exc}")
        return 2

    try:
        result = run_sweep(
            max_limit,
            min_limit,
            config=config,
            workers=args.workers,
            seed=args.seed,
            use_processes=not args.threads,
            progress=None if args.json else _print_progress,
        )
    except ConfigError as exc:
        print(f"Error: {exc}")
        return 2
    except SweepError as exc:
        print()
        print(f"Error: {exc}")
        return 1

    if args.json:
        print(result.to_json())
        return 0

    print()
    print("Finished all computations. Will now output results below:")
    for line in result.rows():
        print(line)
    print(f"Time for calculations: {format_elapsed(result.elapsed_s)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate trigger buffer dead time for a range of buffer sizes")
    parser.add_argument("max_limit", nargs="?", default=None, help=f"Largest buffer size to simulate (default {DEFAULT_MAX_LIMIT})")
    parser.add_argument("min_limit", nargs="?", default=None, help=f"Smallest buffer size to simulate (default {DEFAULT_MIN_LIMIT})")
    parser.add_argument("--max-event", type=int, default=SimulationConfig().max_event, help="Ticks simulated per buffer size")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible random streams")
    parser.add_argument("--workers", type=int, default=None, help="Worker pool size (default: CPU count)")
    parser.add_argument("--threads", action="store_true", help="Use a thread pool instead of processes")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    parser.set_defaults(func=_run_command)
    return parser


def main(argv: Any = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
