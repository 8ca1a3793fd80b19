#!/usr/bin/env python3
"""
curves.py

Windowed work-curve aggregation ("shape of work", Algorithm 1).

Given N days of hourly activity and a per-day self-report, slide a window of
fixed width over the distribution of *total* daily activity and, for every
window that catches at least one day, average those days hour by hour:

    T[i]   = sum_h data[i, h]
    T_min  = floor(min(T)),  T_max = ceil(max(T))
    for s in T_min, T_min + o, ..., <= T_max - w:
        D_W = { i : s <= T[i] < s + w }
        if D_W: emit mean(data[D_W, :]), mean(self_reports[D_W])

Conventions
-----------
- Windows are half-open [s, s + w): a day whose total equals s + w belongs to
  the *next* windows, never this one.
- Windows overlap whenever offset < window_width, so one day can feed several
  adjacent curves. Curves are smoothed estimates, not a partition.
- Empty windows are skipped without a placeholder; the output is ordered by
  window start.
- Membership is recomputed with a full scan for every window. There is no
  state carried from one window to the next.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .dataset import HOURS_PER_DAY, ActivityDataset, WorkCurves
from .errors import EmptyDataset, InvalidParameter

# Slack when counting window starts, so 100:20:340 keeps 340 despite float error.
_STEP_EPS = 1e-9


@dataclass(frozen=True)
class WorkCurveConfig:
    """
    Parameters of the windowed aggregation.

    Attributes
    ----------
    window_width : float
        Width ``w`` of each total-activity window, in minutes.
    offset : float
        Step ``o`` between consecutive window starts, in minutes.
    """

    window_width: float = 150.0
    offset: float = 20.0

    def __post_init__(self) -> None:
        for name in ("window_width", "offset"):
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise InvalidParameter(f"{name} must be a number, got {value!r}") from None
            if not math.isfinite(value) or value <= 0:
                raise InvalidParameter(f"{name} must be positive, got {value!r}")
            object.__setattr__(self, name, value)


def total_activity(data: np.ndarray) -> np.ndarray:
    """Sum of the 24 hourly values for every day (row)."""
    return np.asarray(data, dtype=float).sum(axis=1)


def window_starts(totals: np.ndarray, cfg: WorkCurveConfig) -> np.ndarray:
    """
    Window starts s = T_min, T_min + o, ... up to T_max - w inclusive.

    Returns an empty array when the total-activity range is narrower than the
    window (that is a valid, empty result, not an error).
    """
    totals = np.asarray(totals, dtype=float)
    if totals.size == 0:
        raise EmptyDataset("cannot place windows over an empty dataset")

    t_min = math.floor(float(totals.min()))
    t_max = math.ceil(float(totals.max()))
    stop = t_max - cfg.window_width
    if stop < t_min:
        return np.empty(0, dtype=float)

    n = int(math.floor((stop - t_min) / cfg.offset + _STEP_EPS)) + 1
    return t_min + cfg.offset * np.arange(n, dtype=float)


def select_days_in_window(totals: np.ndarray, start: float, width: float) -> np.ndarray:
    """
    Indices of days whose total lies in [start, start + width).

    Scans every day; the caller does not need to pre-sort anything.
    """
    totals = np.asarray(totals, dtype=float)
    mask = (totals >= start) & (totals < start + width)
    return np.flatnonzero(mask)


def generate_work_curves(
    dataset: ActivityDataset,
    cfg: Optional[WorkCurveConfig] = None,
) -> WorkCurves:
    """
    Compute the ordered work-curve collection for a dataset.

    Parameters
    ----------
    dataset : ActivityDataset
        N day records (N x 24 activity matrix + N self-reports).
    cfg : WorkCurveConfig, optional
        Window width/offset. Defaults to w=150, o=20 minutes.

    Returns
    -------
    WorkCurves
        One row per non-empty window, in increasing order of window start.

    Raises
    ------
    EmptyDataset
        If the dataset has no days.
    """
    cfg = cfg or WorkCurveConfig()
    if dataset.n_days == 0:
        raise EmptyDataset("dataset has no day records")

    totals = dataset.totals()

    curves: List[np.ndarray] = []
    reports: List[float] = []
    starts: List[float] = []
    counts: List[int] = []

    for s in window_starts(totals, cfg):
        days = select_days_in_window(totals, s, cfg.window_width)
        if days.size == 0:
            continue

        curves.append(dataset.data[days, :].mean(axis=0))
        reports.append(float(dataset.self_reports[days].mean()))
        starts.append(float(s))
        counts.append(int(days.size))

    C = np.vstack(curves) if curves else np.empty((0, HOURS_PER_DAY), dtype=float)

    return WorkCurves(
        C=C,
        C_reports=np.asarray(reports, dtype=float),
        window_starts=np.asarray(starts, dtype=float),
        n_days=np.asarray(counts, dtype=int),
        window_width=cfg.window_width,
        offset=cfg.offset,
    )
