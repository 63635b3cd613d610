"""Plot dead time against buffer size from a sweep.json artifact."""

import argparse
import json
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt


def main():
    ap = argparse.ArgumentParser(description="Dead time vs buffer size plot from sweep.json")
    ap.add_argument("--inp", type=str, default="artifacts/sweep.json")
    ap.add_argument("--out", type=str, default="artifacts/deadtime_vs_buffer.png")
    ap.add_argument("--logy", action="store_true", help="log scale for dead time")
    args = ap.parse_args()

    data = json.loads(Path(args.inp).read_text())
    rows = data["results"]
    if not rows:
        raise SystemExit(f"No results in {args.inp}")

    limit = np.array([r["limit"] for r in rows], dtype=np.int64)
    dead = np.array([r["dead_time"] for r in rows], dtype=np.float64)
    err = np.array([r["error"] for r in rows], dtype=np.float64)

    # runs without triggers carry NaN; leave them off the plot
    ok = np.isfinite(dead) & np.isfinite(err)

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 4))
    ax.errorbar(limit[ok], dead[ok], yerr=err[ok], marker="o", capsize=3)
    if args.logy:
        ax.set_yscale("log")
    ax.set_xlabel("buffer size (events)")
    ax.set_ylabel("dead time (%)")
    ax.set_title(f"Trigger dead time vs buffer size | sweep time {data.get('elapsed_s', 0.0):.1f} s")
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.6)
    fig.tight_layout()
    fig.savefig(out_path, dpi=180)
    plt.close(fig)

    print(f"Wrote plot to: {out_path}")


if __name__ == "__main__":
    main()
