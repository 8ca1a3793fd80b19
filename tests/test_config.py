from pathlib import Path

import pytest

from shape_of_work.config import PipelineConfig, config_from_dict, load_config, with_overrides
from shape_of_work.errors import InvalidParameter

DEFAULT_YAML = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


def test_default_yaml_matches_builtin_defaults():
    cfg = load_config(DEFAULT_YAML)
    builtin = PipelineConfig()
    assert cfg.curves == builtin.curves
    assert cfg.synthetic.n_days == builtin.synthetic.n_days
    assert cfg.synthetic.peaks == builtin.synthetic.peaks
    assert cfg.plot.trim == 20


def test_none_path_gives_defaults():
    assert load_config(None) == PipelineConfig()


def test_missing_sections_keep_defaults():
    cfg = config_from_dict({"curves": {"window_width": 90}})
    assert cfg.curves.window_width == 90.0
    assert cfg.curves.offset == 20.0
    assert cfg.synthetic == PipelineConfig().synthetic


def test_yaml_file_round_trip(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("synthetic:\n  n_days: 10\n  seed: 4\ncurves:\n  offset: 5\n")
    cfg = load_config(path)
    assert cfg.synthetic.n_days == 10
    assert cfg.synthetic.seed == 4
    assert cfg.curves.offset == 5.0


@pytest.mark.parametrize(
    "raw",
    [
        {"curves": {"window": 10}},
        {"bogus": {}},
        {"curves": [1, 2]},
        {"curves": {"offset": 0}},
        {"synthetic": {"peaks": [{"centre": 3}]}},
    ],
)
def test_bad_config_raises(raw):
    with pytest.raises(InvalidParameter):
        config_from_dict(raw)


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_overrides_skip_none_and_revalidate():
    cfg = with_overrides(PipelineConfig(), curves__window_width=120, curves__offset=None)
    assert cfg.curves.window_width == 120.0
    assert cfg.curves.offset == 20.0

    with pytest.raises(InvalidParameter):
        with_overrides(PipelineConfig(), curves__offset=0)
    with pytest.raises(InvalidParameter):
        with_overrides(PipelineConfig(), nowhere__x=1)
