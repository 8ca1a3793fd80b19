#!/usr/bin/env python3
"""
Generate the shape-of-work curves (windowed averages over total daily activity)
from a dataset bundle.

Input : .npz with `data` (N x 24) and `self_reports` (N)
Output: .npz with `C` (M x 24), `C_reports` (M) and window metadata
"""

import argparse
from pathlib import Path

import matplotlib.pyplot as plt

from shape_of_work.config import load_config, with_overrides
from shape_of_work.curves import generate_work_curves, window_starts
from shape_of_work.dataset import ActivityDataset
from shape_of_work.reporting import curves_table
from shape_of_work.viz_helpers import plot_curves


def parse_args():
    parser = argparse.ArgumentParser(description="Generate shape-of-work curves")
    parser.add_argument(
        "--data",
        type=str,
        default="outputs/synthetic_data.npz",
        help="Dataset bundle (.npz) or CSV with h01..h24,self_report columns",
    )
    parser.add_argument(
        "--out",
        type=str,
        default="outputs/shape_of_work.npz",
        help="Output curve bundle (.npz)",
    )
    parser.add_argument("--config", type=str, default=None, help="Optional YAML config")
    parser.add_argument("--window-width", type=float, default=None, help="Window size w (minutes)")
    parser.add_argument("--offset", type=float, default=None, help="Offset o between windows (minutes)")
    parser.add_argument("--csv", type=str, default=None, help="Also write the curves as CSV")
    parser.add_argument("--plot", type=str, default=None, help="Save the curve line plot to this PNG")
    return parser.parse_args()


def main():
    args = parse_args()

    cfg = with_overrides(
        load_config(args.config),
        curves__window_width=args.window_width,
        curves__offset=args.offset,
    )

    print(f"[generate_work_curves] loading dataset from: {args.data}")
    if Path(args.data).suffix.lower() == ".csv":
        dataset = ActivityDataset.from_csv(args.data)
    else:
        dataset = ActivityDataset.load(args.data)

    curves = generate_work_curves(dataset, cfg.curves)
    n_windows = len(window_starts(dataset.totals(), cfg.curves))

    print(
        f"[generate_work_curves] w={cfg.curves.window_width:g} o={cfg.curves.offset:g}: "
        f"{curves.n_curves} curves from {n_windows} windows over {dataset.n_days} days"
    )
    if curves.n_curves:
        print(curves_table(curves).to_string(index=False, float_format=lambda v: f"{v:.2f}"))

    out = curves.save(args.out)
    print(f"[generate_work_curves] wrote {out}")

    if args.csv:
        print(f"[generate_work_curves] wrote {curves.to_csv(args.csv)}")

    if args.plot:
        fig = plot_curves(curves)
        Path(args.plot).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(args.plot, dpi=150)
        plt.close(fig)
        print(f"[generate_work_curves] wrote {args.plot}")


if __name__ == "__main__":
    main()
