#!/usr/bin/env python3
"""
dataset.py

Value types exchanged between the three stages of the work-curve pipeline:

    synthetic / external data -> ActivityDataset
    ActivityDataset           -> generate_work_curves() -> WorkCurves
    WorkCurves                -> plotting

Both types wrap read-only numpy arrays so a bundle produced by one stage can be
handed to the next without anyone mutating it underneath.

Persistence
-----------
Bundles are stored as ``.npz`` archives keyed by the exchange field names:

    dataset bundle : data (N x 24), self_reports (N)
    curve bundle   : C (M x 24), C_reports (M), window_starts (M),
                     window_width (scalar), offset (scalar)

CSV export (pandas) is provided for eyeballing results in a spreadsheet; it is
not the interchange format.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

import numpy as np
import pandas as pd

from .errors import ShapeMismatch

HOURS_PER_DAY = 24

PathLike = Union[str, Path]


def hour_columns() -> List[str]:
    """Column names h01..h24 used for CSV export."""
    return [f"h{h:02d}" for h in range(1, HOURS_PER_DAY + 1)]


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, dtype=float, copy=True)
    a.setflags(write=False)
    return a


def _as_matrix(values, name: str) -> np.ndarray:
    m = np.asarray(values, dtype=float)
    if m.ndim == 1 and m.size == 0:
        m = m.reshape(0, HOURS_PER_DAY)
    if m.ndim != 2 or m.shape[1] != HOURS_PER_DAY:
        raise ShapeMismatch(
            f"{name} must be an N x {HOURS_PER_DAY} matrix, got shape {m.shape}"
        )
    if not np.all(np.isfinite(m)):
        raise ShapeMismatch(f"{name} contains NaN or infinite values")
    return m


def _as_vector(values, name: str, n: int) -> np.ndarray:
    v = np.asarray(values, dtype=float).reshape(-1)
    if v.shape[0] != n:
        raise ShapeMismatch(f"{name} has length {v.shape[0]} but there are {n} rows")
    if not np.all(np.isfinite(v)):
        raise ShapeMismatch(f"{name} contains NaN or infinite values")
    return v


def _require(bundle, keys: List[str], path: Path) -> None:
    missing = [k for k in keys if k not in bundle]
    if missing:
        raise ShapeMismatch(f"{path}: bundle is missing field(s) {missing}")


# -------------------------
# Day records
# -------------------------

@dataclass(frozen=True, eq=False)
class ActivityDataset:
    """
    N day records: hourly activity minutes plus one self-report per day.

    Attributes
    ----------
    data:
        N x 24 matrix, minutes of activity per hour. Must be non-negative.
    self_reports:
        Length-N vector of per-day self-report values (conventionally in [0, 1]).
    """

    data: np.ndarray
    self_reports: np.ndarray

    def __post_init__(self) -> None:
        data = _as_matrix(self.data, "data")
        if np.any(data < 0):
            raise ShapeMismatch("data contains negative activity minutes")
        reports = _as_vector(self.self_reports, "self_reports", data.shape[0])
        object.__setattr__(self, "data", _frozen(data))
        object.__setattr__(self, "self_reports", _frozen(reports))

    @property
    def n_days(self) -> int:
        return int(self.data.shape[0])

    def __len__(self) -> int:
        return self.n_days

    def totals(self) -> np.ndarray:
        """Total daily activity (sum over the 24 hours) for every day."""
        return self.data.sum(axis=1)

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(self.data, columns=hour_columns())
        df["self_report"] = self.self_reports
        return df

    # ---------- persistence ----------

    def save(self, path: PathLike) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            np.savez(f, data=self.data, self_reports=self.self_reports)
        return path

    @classmethod
    def load(cls, path: PathLike) -> "ActivityDataset":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Dataset bundle not found: {path}")
        with np.load(path) as bundle:
            _require(bundle, ["data", "self_reports"], path)
            return cls(data=bundle["data"], self_reports=bundle["self_reports"])

    def to_csv(self, path: PathLike) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_frame().to_csv(path, index=False)
        return path

    @classmethod
    def from_csv(cls, path: PathLike) -> "ActivityDataset":
        """Read a CSV written by to_csv() (columns h01..h24, self_report)."""
        df = pd.read_csv(path)
        cols = hour_columns()
        missing = [c for c in cols + ["self_report"] if c not in df.columns]
        if missing:
            raise ShapeMismatch(f"{path}: missing columns {missing}")
        return cls(
            data=df[cols].to_numpy(dtype=float),
            self_reports=df["self_report"].to_numpy(dtype=float),
        )


# -------------------------
# Curve collection
# -------------------------

@dataclass(frozen=True, eq=False)
class WorkCurves:
    """
    Ordered curve collection produced by generate_work_curves().

    Row i of every array describes the i-th emitted window, and rows are in
    strictly increasing order of window start.

    Attributes
    ----------
    C:
        M x 24 matrix of per-hour mean activity, one row per non-empty window.
    C_reports:
        Length-M vector of mean self-report over the same days.
    window_starts:
        Length-M vector of the start ``s`` of each emitted window.
    n_days:
        Length-M vector with the number of days averaged into each curve.
    window_width, offset:
        Parameters the collection was generated with.
    """

    C: np.ndarray
    C_reports: np.ndarray
    window_starts: np.ndarray
    n_days: np.ndarray
    window_width: float
    offset: float

    def __post_init__(self) -> None:
        C = _as_matrix(self.C, "C")
        m = C.shape[0]
        object.__setattr__(self, "C", _frozen(C))
        object.__setattr__(self, "C_reports", _frozen(_as_vector(self.C_reports, "C_reports", m)))
        object.__setattr__(self, "window_starts", _frozen(_as_vector(self.window_starts, "window_starts", m)))
        n_days = np.asarray(self.n_days, dtype=int).reshape(-1)
        if n_days.shape[0] != m:
            raise ShapeMismatch(f"n_days has length {n_days.shape[0]} but there are {m} curves")
        n_days = n_days.copy()
        n_days.setflags(write=False)
        object.__setattr__(self, "n_days", n_days)
        object.__setattr__(self, "window_width", float(self.window_width))
        object.__setattr__(self, "offset", float(self.offset))

    @property
    def n_curves(self) -> int:
        return int(self.C.shape[0])

    def __len__(self) -> int:
        return self.n_curves

    @property
    def window_ends(self) -> np.ndarray:
        return self.window_starts + self.window_width

    def totals(self) -> np.ndarray:
        """Total activity of each curve (row sums of C); the y-axis of the surface plot."""
        return self.C.sum(axis=1)

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame(
            {
                "window_start": self.window_starts,
                "window_end": self.window_ends,
                "n_days": self.n_days,
                "self_report": self.C_reports,
            }
        )
        hours = pd.DataFrame(self.C, columns=hour_columns())
        return pd.concat([df, hours], axis=1)

    # ---------- persistence ----------

    def save(self, path: PathLike) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as f:
            np.savez(
                f,
                C=self.C,
                C_reports=self.C_reports,
                window_starts=self.window_starts,
                n_days=self.n_days,
                window_width=np.asarray(self.window_width),
                offset=np.asarray(self.offset),
            )
        return path

    @classmethod
    def load(cls, path: PathLike) -> "WorkCurves":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Curve bundle not found: {path}")
        with np.load(path) as bundle:
            _require(bundle, ["C", "C_reports"], path)
            C = _as_matrix(bundle["C"], "C")
            m = C.shape[0]
            reports = np.asarray(bundle["C_reports"], dtype=float)
            # Bundles written by other tools may carry only C and C_reports.
            starts = bundle["window_starts"] if "window_starts" in bundle else np.arange(m, dtype=float)
            n_days = bundle["n_days"] if "n_days" in bundle else np.zeros(m, dtype=int)
            width = float(bundle["window_width"]) if "window_width" in bundle else float("nan")
            offset = float(bundle["offset"]) if "offset" in bundle else float("nan")
        return cls(
            C=C,
            C_reports=reports,
            window_starts=starts,
            n_days=n_days,
            window_width=width,
            offset=offset,
        )

    def to_csv(self, path: PathLike) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_frame().to_csv(path, index=False)
        return path
