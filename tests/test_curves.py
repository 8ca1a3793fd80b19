import numpy as np
import pytest

from shape_of_work.curves import (
    WorkCurveConfig,
    generate_work_curves,
    select_days_in_window,
    window_starts,
)
from shape_of_work.dataset import ActivityDataset
from shape_of_work.errors import EmptyDataset, InvalidParameter, WorkCurveError

from conftest import dataset_with_totals, day_with_total


def _brute_force(dataset, width, offset):
    """Independent re-derivation with plain Python loops."""
    totals = [sum(row) for row in dataset.data.tolist()]
    s = np.floor(min(totals))
    stop = np.ceil(max(totals)) - width
    out = []
    while s <= stop + 1e-9:
        days = [i for i, t in enumerate(totals) if s <= t < s + width]
        if days:
            curve = [sum(dataset.data[i, h] for i in days) / len(days) for h in range(24)]
            report = sum(dataset.self_reports[i] for i in days) / len(days)
            out.append((s, curve, report))
        s += offset
    return out


def test_default_config_matches_paper_parameters():
    cfg = WorkCurveConfig()
    assert cfg.window_width == 150.0
    assert cfg.offset == 20.0


def test_each_curve_is_mean_of_days_in_its_window(random_dataset):
    curves = generate_work_curves(random_dataset, WorkCurveConfig(150, 20))
    expected = _brute_force(random_dataset, 150, 20)

    assert curves.n_curves == len(expected) > 0
    for i, (s, curve, report) in enumerate(expected):
        assert curves.window_starts[i] == pytest.approx(s)
        np.testing.assert_allclose(curves.C[i], curve, rtol=1e-12, atol=1e-12)
        assert curves.C_reports[i] == pytest.approx(report, abs=1e-12)

        days = select_days_in_window(random_dataset.totals(), s, 150)
        assert curves.n_days[i] == len(days)


def test_windows_are_emitted_in_strictly_increasing_order(random_dataset):
    curves = generate_work_curves(random_dataset, WorkCurveConfig(60, 10))
    assert curves.n_curves > 1
    assert np.all(np.diff(curves.window_starts) > 0)


def test_gap_wider_than_window_leaves_no_curve_for_empty_windows():
    ds = dataset_with_totals([100, 110, 120, 600, 610])
    cfg = WorkCurveConfig(window_width=150, offset=20)

    attempted = window_starts(ds.totals(), cfg)
    curves = generate_work_curves(ds, cfg)

    assert len(attempted) == 19
    np.testing.assert_array_equal(curves.window_starts, [100.0, 120.0, 460.0])
    assert curves.n_curves < len(attempted)
    np.testing.assert_array_equal(curves.n_days, [3, 1, 1])
    np.testing.assert_allclose(curves.C[2], day_with_total(600))


def test_runs_are_deterministic(random_dataset):
    a = generate_work_curves(random_dataset)
    b = generate_work_curves(random_dataset)
    np.testing.assert_array_equal(a.C, b.C)
    np.testing.assert_array_equal(a.C_reports, b.C_reports)
    np.testing.assert_array_equal(a.window_starts, b.window_starts)


def test_day_on_upper_bound_belongs_to_next_window():
    ds = dataset_with_totals([100, 250, 400], reports=[0.1, 0.2, 0.3])
    curves = generate_work_curves(ds, WorkCurveConfig(window_width=150, offset=20))

    assert curves.window_starts[0] == 100.0
    assert curves.n_days[0] == 1
    np.testing.assert_allclose(curves.C[0], day_with_total(100))

    # [120, 270) picks up the day sitting exactly on 250.
    assert curves.window_starts[1] == 120.0
    np.testing.assert_allclose(curves.C[1], day_with_total(250))
    assert curves.C_reports[1] == pytest.approx(0.2)


def test_three_day_scenario_first_window_averages_first_two_days():
    ds = ActivityDataset(
        data=np.vstack([day_with_total(100), np.roll(day_with_total(100), 5), day_with_total(500)]),
        self_reports=[0.0, 0.2, 1.0],
    )
    curves = generate_work_curves(ds, WorkCurveConfig(window_width=150, offset=20))

    np.testing.assert_allclose(curves.C[0], ds.data[:2].mean(axis=0))
    assert curves.C_reports[0] == pytest.approx(0.1)
    # T_max = 500 and windows stop at s <= 350, so [s, s+150) never reaches 500
    # and every window from 120 on is empty.
    np.testing.assert_array_equal(curves.window_starts, [100.0])


def test_window_holding_only_the_top_day_averages_it_alone():
    ds = dataset_with_totals([100, 100, 499.5], reports=[0.0, 0.2, 1.0])
    curves = generate_work_curves(ds, WorkCurveConfig(window_width=150, offset=50))

    np.testing.assert_array_equal(curves.window_starts, [100.0, 350.0])
    np.testing.assert_allclose(curves.C[1], day_with_total(499.5))
    assert curves.C_reports[1] == pytest.approx(1.0)


def test_single_day_curves_equal_that_day():
    day = day_with_total(300.25)
    ds = ActivityDataset(data=day[None, :], self_reports=[0.7])
    curves = generate_work_curves(ds, WorkCurveConfig(window_width=0.5, offset=0.1))

    assert curves.n_curves == 3
    for i in range(curves.n_curves):
        np.testing.assert_array_equal(curves.C[i], day)
        assert curves.C_reports[i] == 0.7


def test_single_day_with_default_window_gives_no_curves():
    ds = dataset_with_totals([300])
    curves = generate_work_curves(ds)
    assert curves.n_curves == 0
    assert curves.C.shape == (0, 24)


def test_window_wider_than_range_is_empty_not_an_error():
    ds = dataset_with_totals([200, 260, 300])
    curves = generate_work_curves(ds, WorkCurveConfig(window_width=150, offset=20))
    assert curves.n_curves == 0
    assert curves.C_reports.shape == (0,)


def test_overlapping_windows_share_days():
    ds = dataset_with_totals([100, 180, 400])
    curves = generate_work_curves(ds, WorkCurveConfig(window_width=150, offset=20))
    # The day at 180 falls in every window starting at 100..180.
    assert sum(
        180 in ds.totals()[select_days_in_window(ds.totals(), s, 150)]
        for s in curves.window_starts
    ) > 1


def test_window_starts_include_last_start_despite_float_steps():
    ds = dataset_with_totals([0.0, 1.5])
    starts = window_starts(ds.totals(), WorkCurveConfig(window_width=1.0, offset=0.1))
    assert len(starts) == 11
    assert starts[-1] == pytest.approx(1.0)


@pytest.mark.parametrize("width,offset", [(0, 20), (150, 0), (-1, 20), (150, -5), (float("nan"), 20)])
def test_non_positive_parameters_fail(width, offset):
    with pytest.raises(InvalidParameter):
        WorkCurveConfig(window_width=width, offset=offset)


def test_empty_dataset_fails():
    ds = ActivityDataset(data=np.empty((0, 24)), self_reports=[])
    with pytest.raises(EmptyDataset):
        generate_work_curves(ds)


def test_errors_are_value_errors():
    assert issubclass(InvalidParameter, WorkCurveError)
    assert issubclass(EmptyDataset, ValueError)
