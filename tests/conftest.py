import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from shape_of_work.dataset import HOURS_PER_DAY, ActivityDataset


def day_with_total(total: float) -> np.ndarray:
    """Hourly minutes filled 60 at a time from midnight; sums exactly to `total`."""
    day = np.zeros(HOURS_PER_DAY, dtype=float)
    remaining = float(total)
    for h in range(HOURS_PER_DAY):
        day[h] = min(60.0, remaining)
        remaining -= day[h]
        if remaining <= 0:
            break
    return day


def dataset_with_totals(totals, reports=None) -> ActivityDataset:
    data = np.vstack([day_with_total(t) for t in totals])
    if reports is None:
        reports = np.linspace(0.0, 1.0, len(totals)) if len(totals) > 1 else [0.5]
    return ActivityDataset(data=data, self_reports=reports)


@pytest.fixture
def random_dataset() -> ActivityDataset:
    rng = np.random.default_rng(1234)
    data = rng.uniform(0.0, 40.0, size=(300, HOURS_PER_DAY))
    reports = rng.uniform(0.0, 1.0, size=300)
    return ActivityDataset(data=data, self_reports=reports)
