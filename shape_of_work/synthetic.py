#!/usr/bin/env python3
"""
synthetic.py

Synthetic daily computer-activity profiles for exercising the work-curve
aggregation without real telemetry.

Each day:

1) Draw a total number of active minutes, uniform over the integers
   [min_total_activity, max_total_activity].
2) Shape it with three Gaussian bumps over the hours 0..23:
     - mid-morning  (~10:00, amplitude ~1.0)
     - afternoon    (~14:00, amplitude ~1.0)
     - evening      (~21:00, amplitude ~0.5)
   with jittered centres/amplitudes so no two days look the same.
3) Normalise the profile to unit sum and scale it to the day's total.
4) Add per-hour Gaussian noise, clip into [0, 60] minutes.
5) Pull the day back into the total-activity range if noise/capping pushed
   it out (scale up with a re-cap and an even top-up, or scale down).

Self-reports are the day totals min-max rescaled to [0, 1] across the whole
dataset, a stand-in for a participant's reported activity level.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .dataset import HOURS_PER_DAY, ActivityDataset
from .errors import InvalidParameter

MINUTES_PER_HOUR = 60.0


@dataclass(frozen=True)
class GaussianPeak:
    """One activity bump: centre hour, amplitude, and the jitter applied to each."""

    center: float
    amplitude: float
    center_jitter: float = 0.5
    amplitude_jitter: float = 0.1


DEFAULT_PEAKS: Tuple[GaussianPeak, ...] = (
    GaussianPeak(center=10.0, amplitude=1.0, center_jitter=0.5, amplitude_jitter=0.1),
    GaussianPeak(center=14.0, amplitude=1.0, center_jitter=0.5, amplitude_jitter=0.1),
    GaussianPeak(center=21.0, amplitude=0.5, center_jitter=0.5, amplitude_jitter=0.05),
)


@dataclass(frozen=True)
class SyntheticActivityConfig:
    """
    Configuration for generate_synthetic_activity().

    Attributes
    ----------
    n_days : int
        Number of day records to generate.
    min_total_activity, max_total_activity : int
        Range of total active minutes per day (inclusive).
    sigma : float
        Width (hours) of every Gaussian bump.
    noise_std : float
        Std-dev of the per-hour additive noise, in minutes.
    hourly_cap : float
        Maximum minutes of activity in one hour.
    peaks : tuple of GaussianPeak
        Activity bumps summed into the daily shape.
    seed : int, optional
        Seed for numpy's Generator. None draws fresh entropy.
    """

    n_days: int = 1000
    min_total_activity: int = 100
    max_total_activity: int = 650
    sigma: float = 1.0
    noise_std: float = 5.0
    hourly_cap: float = MINUTES_PER_HOUR
    peaks: Tuple[GaussianPeak, ...] = DEFAULT_PEAKS
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if int(self.n_days) < 0:
            raise InvalidParameter("n_days must be >= 0")
        if self.min_total_activity < 0 or self.max_total_activity < self.min_total_activity:
            raise InvalidParameter(
                "need 0 <= min_total_activity <= max_total_activity, got "
                f"[{self.min_total_activity}, {self.max_total_activity}]"
            )
        if self.max_total_activity > HOURS_PER_DAY * self.hourly_cap:
            raise InvalidParameter(
                f"max_total_activity={self.max_total_activity} cannot fit under "
                f"hourly_cap={self.hourly_cap} x {HOURS_PER_DAY} hours"
            )
        if self.sigma <= 0 or self.noise_std < 0 or self.hourly_cap <= 0:
            raise InvalidParameter("sigma and hourly_cap must be > 0, noise_std >= 0")
        if not self.peaks:
            raise InvalidParameter("at least one Gaussian peak is required")


def scale_to_unit(values: np.ndarray) -> np.ndarray:
    """
    Linearly map values onto [0, 1] using their own min and max.

    A constant vector has no spread to map and comes back as all zeros.
    """
    v = np.asarray(values, dtype=float)
    if v.size == 0:
        return v.copy()
    lo, hi = float(v.min()), float(v.max())
    if hi == lo:
        return np.zeros_like(v)
    return (v - lo) / (hi - lo)


def daily_shape(
    rng: np.random.Generator,
    peaks: Tuple[GaussianPeak, ...] = DEFAULT_PEAKS,
    sigma: float = 1.0,
) -> np.ndarray:
    """Unit-sum 24-hour activity shape built from jittered Gaussian peaks."""
    hours = np.arange(HOURS_PER_DAY, dtype=float)
    profile = np.zeros(HOURS_PER_DAY, dtype=float)
    for peak in peaks:
        amp = peak.amplitude + peak.amplitude_jitter * rng.standard_normal()
        mu = peak.center + peak.center_jitter * rng.standard_normal()
        profile += amp * np.exp(-((hours - mu) ** 2) / (2.0 * sigma ** 2))
    return profile / profile.sum()


def fit_to_total_range(
    per_hour: np.ndarray,
    min_total: float,
    max_total: float,
    cap: float = MINUTES_PER_HOUR,
) -> np.ndarray:
    """
    Bring one day's hourly minutes back inside [min_total, max_total].

    Below the minimum: scale up proportionally, re-apply the hourly cap and,
    if the cap ate part of the increase, spread the remaining deficit evenly
    over the hours that still have room. Above the maximum: scale down.
    """
    x = np.clip(np.asarray(per_hour, dtype=float), 0.0, cap)
    total = float(x.sum())

    if total < min_total:
        if total > 0:
            x = np.minimum(x * (min_total / total), cap)
            total = float(x.sum())
        if total < min_total:
            room = x < cap
            if room.any():
                x[room] += (min_total - total) / int(room.sum())
                x = np.minimum(x, cap)
    elif total > max_total:
        x = x * (max_total / total)

    return x


def generate_synthetic_day(
    rng: np.random.Generator,
    cfg: SyntheticActivityConfig,
) -> np.ndarray:
    """Generate one day's 24 hourly activity values."""
    total_minutes = int(rng.integers(cfg.min_total_activity, cfg.max_total_activity, endpoint=True))
    per_hour = total_minutes * daily_shape(rng, cfg.peaks, cfg.sigma)
    per_hour = per_hour + cfg.noise_std * rng.standard_normal(HOURS_PER_DAY)
    return fit_to_total_range(
        per_hour,
        cfg.min_total_activity,
        cfg.max_total_activity,
        cap=cfg.hourly_cap,
    )


def generate_synthetic_activity(
    cfg: Optional[SyntheticActivityConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> ActivityDataset:
    """
    Generate a full synthetic ActivityDataset.

    Parameters
    ----------
    cfg : SyntheticActivityConfig, optional
        Generator settings (defaults: 1000 days, totals in [100, 650]).
    rng : numpy.random.Generator, optional
        Random source. If omitted, one is created from cfg.seed.
    """
    cfg = cfg or SyntheticActivityConfig()
    if rng is None:
        rng = np.random.default_rng(cfg.seed)

    data = np.zeros((int(cfg.n_days), HOURS_PER_DAY), dtype=float)
    for i in range(int(cfg.n_days)):
        data[i, :] = generate_synthetic_day(rng, cfg)

    self_reports = scale_to_unit(data.sum(axis=1))
    return ActivityDataset(data=data, self_reports=self_reports)
