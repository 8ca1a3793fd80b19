#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt

from shape_of_work.config import load_config, with_overrides
from shape_of_work.dataset import WorkCurves
from shape_of_work.viz_helpers import plot_work_surface


def visualize_work_curves(
    curves_path: str,
    outpath: Optional[str] = None,
    config_path: Optional[str] = None,
    title: Optional[str] = None,
    dpi: int = 150,
    show: bool = True,
) -> None:
    cfg = with_overrides(load_config(config_path), plot__title=title)
    curves = WorkCurves.load(curves_path)
    print(f"[visualize_work_curves] {curves.n_curves} curves from {curves_path}")

    fig = plot_work_surface(curves, cfg.plot)

    if outpath:
        Path(outpath).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(outpath, dpi=dpi)
        print(f"[visualize_work_curves] wrote: {outpath}")
    if show:
        plt.show()
    plt.close(fig)


def main() -> None:
    p = argparse.ArgumentParser("Render the 3D shape-of-work surface from a curve bundle.")
    p.add_argument("--curves", default="outputs/shape_of_work.npz", help="Curve bundle (.npz)")
    p.add_argument("--out", default=None, help="Optional path to save PNG.")
    p.add_argument("--config", default=None, help="Optional YAML config (plot section).")
    p.add_argument("--title", default=None, help="Figure title.")
    p.add_argument("--dpi", type=int, default=150)
    p.add_argument("--no-show", action="store_true", help="Do not open a window.")
    args = p.parse_args()
    visualize_work_curves(
        args.curves,
        outpath=args.out,
        config_path=args.config,
        title=args.title,
        dpi=args.dpi,
        show=not args.no_show,
    )


if __name__ == "__main__":
    main()
