#!/usr/bin/env python3
"""
pipeline.py

End-to-end batch run: synthetic activity -> work curves -> (optional) figures.

Each stage is a plain function call that takes and returns immutable values;
nothing is shared between stages except what is passed explicitly. The
individual stages live in:

  - synthetic.py  : generate_synthetic_activity()
  - curves.py     : generate_work_curves()
  - viz_helpers.py: plot_curves(), plot_average_profile(), plot_work_surface()

Use run_pipeline() when you want the data; use save_pipeline_outputs() when
you want the same bundles the stage scripts write.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np

from .config import PipelineConfig
from .curves import generate_work_curves
from .dataset import ActivityDataset, WorkCurves
from .synthetic import generate_synthetic_activity


@dataclass(frozen=True)
class PipelineResult:
    """Dataset and the curve collection derived from it."""

    dataset: ActivityDataset
    curves: WorkCurves


def run_pipeline(
    cfg: Optional[PipelineConfig] = None,
    dataset: Optional[ActivityDataset] = None,
    rng: Optional[np.random.Generator] = None,
) -> PipelineResult:
    """
    Run generate -> aggregate.

    Parameters
    ----------
    cfg:
        Pipeline parameters (defaults if omitted).
    dataset:
        Use this dataset instead of generating a synthetic one.
    rng:
        Random source for the synthetic stage (else seeded from cfg.synthetic.seed).
    """
    cfg = cfg or PipelineConfig()
    if dataset is None:
        dataset = generate_synthetic_activity(cfg.synthetic, rng=rng)
    curves = generate_work_curves(dataset, cfg.curves)
    return PipelineResult(dataset=dataset, curves=curves)


def save_pipeline_outputs(
    result: PipelineResult,
    outdir: Union[str, Path],
    csv: bool = False,
) -> Dict[str, Path]:
    """
    Write synthetic_data.npz and shape_of_work.npz (plus CSV copies if asked)
    under outdir. Returns name -> written path.
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    written = {
        "dataset": result.dataset.save(outdir / "synthetic_data.npz"),
        "curves": result.curves.save(outdir / "shape_of_work.npz"),
    }
    if csv:
        written["dataset_csv"] = result.dataset.to_csv(outdir / "synthetic_data.csv")
        written["curves_csv"] = result.curves.to_csv(outdir / "shape_of_work.csv")
    return written
