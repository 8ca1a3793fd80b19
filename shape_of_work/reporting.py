from __future__ import annotations

from typing import Dict, Tuple

import numpy as np
import pandas as pd

from .dataset import ActivityDataset, WorkCurves
from .errors import EmptyDataset, ShapeMismatch
from .synthetic import MINUTES_PER_HOUR


# Optional diagnostics. None of these are needed to compute curves; they are
# what the stage scripts print so a run can be sanity-checked at a glance.


def average_profile(dataset: ActivityDataset) -> np.ndarray:
    """Mean minutes of activity per hour over all days."""
    if dataset.n_days == 0:
        raise EmptyDataset("dataset has no day records")
    return dataset.data.mean(axis=0)


def check_hourly_cap(dataset: ActivityDataset, cap: float = MINUTES_PER_HOUR) -> None:
    """Raise ShapeMismatch if any hour holds more than `cap` minutes."""
    over = np.argwhere(dataset.data > cap)
    if over.size:
        day, hour = (int(v) for v in over[0])
        raise ShapeMismatch(
            f"{len(over)} hourly value(s) exceed {cap:g} minutes "
            f"(first at day {day}, hour {hour}: {dataset.data[day, hour]:.2f})"
        )


def total_activity_range(dataset: ActivityDataset) -> Tuple[float, float]:
    """(min, max) total daily activity in minutes."""
    if dataset.n_days == 0:
        raise EmptyDataset("dataset has no day records")
    totals = dataset.totals()
    return float(totals.min()), float(totals.max())


def dataset_summary(dataset: ActivityDataset) -> Dict[str, float]:
    lo, hi = total_activity_range(dataset)
    return {
        "n_days": dataset.n_days,
        "total_min": lo,
        "total_max": hi,
        "total_mean": float(dataset.totals().mean()),
        "hourly_max": float(dataset.data.max()),
        "self_report_min": float(dataset.self_reports.min()),
        "self_report_max": float(dataset.self_reports.max()),
    }


def curves_table(curves: WorkCurves) -> pd.DataFrame:
    """
    One row per emitted curve: window bounds, days averaged, mean
    self-report, curve total and the hour with the most activity.
    """
    peak_hour = curves.C.argmax(axis=1) + 1 if curves.n_curves else np.empty(0, dtype=int)
    return pd.DataFrame(
        {
            "curve": np.arange(1, curves.n_curves + 1),
            "window_start": curves.window_starts,
            "window_end": curves.window_ends,
            "n_days": curves.n_days,
            "self_report": curves.C_reports,
            "total": curves.totals(),
            "peak_hour": peak_hour,
        }
    )
