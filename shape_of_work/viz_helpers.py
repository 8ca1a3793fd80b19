from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.cm import ScalarMappable
from matplotlib.colors import ListedColormap, Normalize

from .dataset import HOURS_PER_DAY, ActivityDataset, WorkCurves
from .errors import InvalidParameter
from .reporting import average_profile


@dataclass(frozen=True)
class SurfacePlotConfig:
    """
    Styling for the 3D "shape of work" surface.

    The defaults reproduce the figure used in the paper: a flipped `hot`
    colormap with both extremes trimmed, viewed slightly from the side.
    """

    cmap: str = "hot"
    n_colors: int = 256
    trim: int = 20
    elev: float = 28.2
    azim: float = 17.1
    mesh_alpha: float = 0.4
    n_report_ticks: int = 5
    n_total_ticks: int = 10
    font_size: float = 10.0
    title: str = "Synthetic Data"

    def __post_init__(self) -> None:
        if self.n_colors < 2:
            raise InvalidParameter("n_colors must be >= 2")
        if self.trim < 0 or 2 * self.trim >= self.n_colors - 1:
            raise InvalidParameter(
                f"trim={self.trim} leaves fewer than 2 of {self.n_colors} colours"
            )
        if self.n_report_ticks < 2:
            raise InvalidParameter("n_report_ticks must be >= 2")


# ---------- colour helpers ----------

def trimmed_colormap(
    name: str = "hot",
    n_colors: int = 256,
    trim: int = 20,
) -> ListedColormap:
    """
    Reverse the named colormap (light = low) and drop `trim` colours from
    each end, so neither near-white nor near-black is used.
    """
    base = matplotlib.colormaps[name].reversed()
    rgba = base(np.linspace(0.0, 1.0, n_colors))
    return ListedColormap(rgba[trim : n_colors - trim], name=f"{name}_trimmed")


def report_color_indices(reports: Sequence[float], n_colors: int) -> np.ndarray:
    """
    Min-max scale reports onto colour indices 0..n_colors-1 (rounded half up).

    Identical reports all map to index 0.
    """
    r = np.asarray(reports, dtype=float)
    if r.size == 0:
        return np.empty(0, dtype=int)
    lo, hi = float(r.min()), float(r.max())
    if hi == lo:
        return np.zeros(r.shape, dtype=int)
    scaled = (r - lo) / (hi - lo) * (n_colors - 1)
    return np.floor(scaled + 0.5).astype(int)


def report_colors(reports: Sequence[float], cmap: ListedColormap) -> np.ndarray:
    """RGBA colour (len(reports) x 4) for every report value."""
    idx = report_color_indices(reports, cmap.N)
    return np.asarray(cmap.colors)[idx]


# ---------- plots ----------

def plot_curves(curves: WorkCurves, ax=None):
    """One line per work curve over hours 1..24. Returns the Figure."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 5))
    else:
        fig = ax.figure

    hours = np.arange(1, HOURS_PER_DAY + 1)
    for i in range(curves.n_curves):
        ax.plot(hours, curves.C[i, :], label=f"Curve {i + 1}")

    ax.set_xlabel("Hour of the Day")
    ax.set_ylabel("Average Minutes of Activity")
    ax.set_title("Shape of Work Curves")
    if curves.n_curves:
        ax.legend(fontsize=6, ncol=2)
    return fig


def plot_average_profile(dataset: ActivityDataset, ax=None):
    """Bar chart of the mean activity per hour (hours 0..23)."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))
    else:
        fig = ax.figure

    ax.bar(np.arange(HOURS_PER_DAY), average_profile(dataset))
    ax.set_xlabel("Hour of the Day")
    ax.set_ylabel("Average Minutes of Activity")
    ax.set_title("Average Daily Activity Profile")
    return fig


class WorkSurfacePlot:
    """
    3D surface of the work curves.

      x: hour of the day (1..24)
      y: total activity of each curve (row sum of C)
      z: minutes of activity in that hour
      colour: the curve's mean self-report

    Keeps handles to the artists it draws so callers can restyle them
    before saving.
    """

    def __init__(self, curves: WorkCurves, cfg: Optional[SurfacePlotConfig] = None):
        if curves.n_curves < 2:
            raise InvalidParameter(
                f"a surface needs at least 2 curves, got {curves.n_curves}"
            )
        self.curves = curves
        self.cfg = cfg or SurfacePlotConfig()
        self.cmap = trimmed_colormap(self.cfg.cmap, self.cfg.n_colors, self.cfg.trim)
        self.fig = None
        self.ax = None
        self._artists: List = []

    def grid(self):
        """X, Y, Z arrays (M x 24) for the surface."""
        C = self.curves.C
        X, _ = np.meshgrid(np.arange(1, C.shape[1] + 1), np.arange(1, C.shape[0] + 1))
        Y = np.repeat(self.curves.totals()[:, None], C.shape[1], axis=1)
        return X, Y, C

    def facecolors(self) -> np.ndarray:
        """Per-vertex RGBA (M x 24 x 4): every column of a row shares its curve colour."""
        colors = report_colors(self.curves.C_reports, self.cmap)
        return np.repeat(colors[:, None, :], self.curves.C.shape[1], axis=1)

    def draw(self):
        cfg = self.cfg
        X, Y, Z = self.grid()

        self.fig = plt.figure(figsize=(10, 7))
        self.ax = self.fig.add_subplot(projection="3d")

        surf = self.ax.plot_surface(
            X, Y, Z,
            facecolors=self.facecolors(),
            edgecolor="none",
            shade=False,
        )
        mesh = self.ax.plot_wireframe(
            X, Y, Z,
            color="black",
            alpha=cfg.mesh_alpha,
            linewidth=0.5,
        )
        self._artists = [surf, mesh]
        self.ax.view_init(elev=cfg.elev, azim=cfg.azim)

        self._draw_colorbar()

        self.ax.set_xlabel("Hour of the Day", fontsize=cfg.font_size)
        self.ax.set_ylabel("Total Activity per Day (minutes)", fontsize=cfg.font_size)
        self.ax.set_zlabel("Computer Activity per Hour (minutes)", fontsize=cfg.font_size)
        self.ax.set_xlim(1, HOURS_PER_DAY)
        self.ax.set_xticks(np.arange(1, HOURS_PER_DAY + 1, 2))
        self.ax.set_yticks(np.round(np.linspace(Y.min(), Y.max(), cfg.n_total_ticks)))
        self.ax.tick_params(labelsize=cfg.font_size)
        self.ax.set_title(cfg.title)
        return self.fig

    def _draw_colorbar(self) -> None:
        reports = self.curves.C_reports
        lo, hi = float(reports.min()), float(reports.max())
        if hi == lo:
            hi = lo + 1e-9
        sm = ScalarMappable(norm=Normalize(vmin=lo, vmax=hi), cmap=self.cmap)
        sm.set_array(reports)
        cbar = self.fig.colorbar(sm, ax=self.ax, shrink=0.6, pad=0.1)
        ticks = np.linspace(lo, hi, self.cfg.n_report_ticks)
        cbar.set_ticks(ticks)
        cbar.set_ticklabels([f"{t:.2f}" for t in np.round(ticks, 2)])
        cbar.set_label("Self-reported activity")
        self._artists.append(cbar)

    @property
    def artists(self) -> List:
        return list(self._artists)


def plot_work_surface(curves: WorkCurves, cfg: Optional[SurfacePlotConfig] = None):
    """Draw the 3D work surface and return its Figure."""
    return WorkSurfacePlot(curves, cfg).draw()
