from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .curves import WorkCurveConfig
from .errors import InvalidParameter
from .synthetic import GaussianPeak, SyntheticActivityConfig
from .viz_helpers import SurfacePlotConfig


@dataclass(frozen=True)
class PipelineConfig:
    """
    Parameters for all three stages, as read from a YAML file such as:

        synthetic:
          n_days: 1000
          seed: 7
        curves:
          window_width: 150
          offset: 20
        plot:
          title: Synthetic Data

    Sections and keys are optional; anything missing keeps its default.
    """

    synthetic: SyntheticActivityConfig = field(default_factory=SyntheticActivityConfig)
    curves: WorkCurveConfig = field(default_factory=WorkCurveConfig)
    plot: SurfacePlotConfig = field(default_factory=SurfacePlotConfig)


def _build(cls, section: Optional[Dict[str, Any]], name: str):
    if section is None:
        return cls()
    if not isinstance(section, dict):
        raise InvalidParameter(f"config section '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise InvalidParameter(f"unknown key(s) in '{name}': {unknown}")
    return cls(**section)


def _synthetic_from_dict(section: Optional[Dict[str, Any]]) -> SyntheticActivityConfig:
    if section and "peaks" in section:
        section = dict(section)
        try:
            section["peaks"] = tuple(GaussianPeak(**p) for p in section["peaks"])
        except TypeError as e:
            raise InvalidParameter(f"bad peak definition in 'synthetic.peaks': {e}") from None
    return _build(SyntheticActivityConfig, section, "synthetic")


def config_from_dict(raw: Optional[Dict[str, Any]]) -> PipelineConfig:
    raw = raw or {}
    if not isinstance(raw, dict):
        raise InvalidParameter("top-level config must be a mapping")
    unknown = sorted(set(raw) - {"synthetic", "curves", "plot"})
    if unknown:
        raise InvalidParameter(f"unknown config section(s): {unknown}")
    return PipelineConfig(
        synthetic=_synthetic_from_dict(raw.get("synthetic")),
        curves=_build(WorkCurveConfig, raw.get("curves"), "curves"),
        plot=_build(SurfacePlotConfig, raw.get("plot"), "plot"),
    )


def load_config(path: Union[str, Path, None]) -> PipelineConfig:
    """Read a PipelineConfig from YAML. None returns the defaults."""
    if path is None:
        return PipelineConfig()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r") as f:
        return config_from_dict(yaml.safe_load(f))


def with_overrides(cfg: PipelineConfig, **overrides: Any) -> PipelineConfig:
    """
    Apply CLI overrides. Keys are 'section.field' with dots replaced by '__',
    e.g. curves__window_width=120. None values are ignored.
    """
    sections: Dict[str, Dict[str, Any]] = {}
    for key, value in overrides.items():
        if value is None:
            continue
        section, _, name = key.partition("__")
        if not name or not hasattr(cfg, section):
            raise InvalidParameter(f"bad override key {key!r}")
        sections.setdefault(section, {})[name] = value
    for section, values in sections.items():
        cfg = replace(cfg, **{section: replace(getattr(cfg, section), **values)})
    return cfg
