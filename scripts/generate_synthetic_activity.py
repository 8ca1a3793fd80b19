#!/usr/bin/env python3
"""
Generate synthetic daily activity profiles for the shape-of-work pipeline.

Writes a dataset bundle (.npz with `data` N x 24 and `self_reports` N) and,
optionally, a CSV copy and a bar plot of the average daily profile.
"""

import argparse
from pathlib import Path

import matplotlib.pyplot as plt

from shape_of_work.config import load_config, with_overrides
from shape_of_work.reporting import check_hourly_cap, dataset_summary
from shape_of_work.synthetic import generate_synthetic_activity
from shape_of_work.viz_helpers import plot_average_profile


def parse_args():
    parser = argparse.ArgumentParser(description="Generate synthetic daily activity profiles")
    parser.add_argument(
        "--out",
        type=str,
        default="outputs/synthetic_data.npz",
        help="Output dataset bundle (.npz)",
    )
    parser.add_argument("--config", type=str, default=None, help="Optional YAML config")
    parser.add_argument("--n-days", type=int, default=None, help="Number of days to generate")
    parser.add_argument("--min-total", type=int, default=None, help="Minimum total minutes per day")
    parser.add_argument("--max-total", type=int, default=None, help="Maximum total minutes per day")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--csv", type=str, default=None, help="Also write the dataset as CSV")
    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Save the average-profile bar plot to this PNG",
    )
    return parser.parse_args()


def main():
    args = parse_args()

    cfg = with_overrides(
        load_config(args.config),
        synthetic__n_days=args.n_days,
        synthetic__min_total_activity=args.min_total,
        synthetic__max_total_activity=args.max_total,
        synthetic__seed=args.seed,
    )

    dataset = generate_synthetic_activity(cfg.synthetic)
    check_hourly_cap(dataset, cap=cfg.synthetic.hourly_cap)

    summary = dataset_summary(dataset)
    print(f"[generate_synthetic_activity] days: {summary['n_days']}")
    print(
        "[generate_synthetic_activity] total activity per day ranges from "
        f"{summary['total_min']:.2f} to {summary['total_max']:.2f} minutes"
    )

    out = dataset.save(args.out)
    print(f"[generate_synthetic_activity] wrote {out}")

    if args.csv:
        print(f"[generate_synthetic_activity] wrote {dataset.to_csv(args.csv)}")

    if args.plot:
        fig = plot_average_profile(dataset)
        Path(args.plot).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(args.plot, dpi=150)
        plt.close(fig)
        print(f"[generate_synthetic_activity] wrote {args.plot}")


if __name__ == "__main__":
    main()
