#!/usr/bin/env python3
"""Render LaTeX table of sweep results for the report."""

from __future__ import annotations

import json
import math
from pathlib import Path


def _fmt(x: float) -> str:
    return "--" if math.isnan(x) else f"{x:.3f}"


def main() -> None:
    results_path = Path("artifacts/sweep.json")
    if not results_path.exists():
        raise SystemExit("artifacts/sweep.json missing. Run scripts/run_sweep.py first.")

    rows = json.loads(results_path.read_text())["results"]

    out_dir = Path("report/artifacts")
    out_dir.mkdir(parents=True, exist_ok=True)

    lines = [
        "\\begin{table}[h]",
        "\\centering",
        "\\begin{tabular}{rrrrrr}",
        "\\toprule",
        "Buffer size & Dead time (\\%) & Error (\\%) & L1A & Blocked & Buffer full \\\\",
        "\\midrule",
    ]
    for row in rows:
        lines.append(
            f"{row['limit']} & {_fmt(row['dead_time'])} & {_fmt(row['error'])} & "
            f"{row['triggers_total']} & {row['lost_blocked']} & {row['lost_buffer_full']} \\\\"
        )
    lines.extend(
        [
            "\\bottomrule",
            "\\end{tabular}",
            "\\caption{Trigger dead time per buffer size.}",
            "\\label{tab:deadtime}",
            "\\end{table}",
        ]
    )
    (out_dir / "results.tex").write_text("\n".join(lines) + "\n")


if __name__ == "__main__":
    main()
