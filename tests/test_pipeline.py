import numpy as np

from shape_of_work.config import config_from_dict
from shape_of_work.curves import generate_work_curves
from shape_of_work.dataset import ActivityDataset, WorkCurves
from shape_of_work.pipeline import run_pipeline, save_pipeline_outputs

from conftest import dataset_with_totals


def _small_cfg():
    return config_from_dict({"synthetic": {"n_days": 120, "seed": 21}})


def test_run_pipeline_generates_and_aggregates():
    result = run_pipeline(_small_cfg())
    assert result.dataset.n_days == 120
    assert result.curves.n_curves > 0
    np.testing.assert_array_equal(
        result.curves.C, generate_work_curves(result.dataset, _small_cfg().curves).C
    )
    assert np.all(np.diff(result.curves.window_starts) > 0)


def test_run_pipeline_accepts_external_dataset():
    ds = dataset_with_totals([100, 130, 180, 260, 300, 420])
    result = run_pipeline(dataset=ds)
    assert result.dataset is ds
    np.testing.assert_array_equal(result.curves.C, generate_work_curves(ds).C)


def test_save_pipeline_outputs(tmp_path):
    result = run_pipeline(_small_cfg())
    written = save_pipeline_outputs(result, tmp_path / "out", csv=True)

    assert set(written) == {"dataset", "curves", "dataset_csv", "curves_csv"}
    assert all(p.exists() for p in written.values())

    ds = ActivityDataset.load(written["dataset"])
    curves = WorkCurves.load(written["curves"])
    np.testing.assert_array_equal(ds.data, result.dataset.data)
    np.testing.assert_array_equal(curves.C, result.curves.C)
