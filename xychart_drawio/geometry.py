from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .schema import ChartModel, ValueAxis

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanvasConfig:
    width: int = 600
    height: int = 400
    padding: int = 60
    # Extra horizontal inset so the first/last points sit off the plot edges.
    x_offset: int = 30

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("canvas width/height must be > 0")
        if self.padding < 0 or self.x_offset < 0:
            raise ValueError("padding/x_offset must be >= 0")
        if self.graph_height <= 0 or self.usable_width <= 0:
            raise ValueError("padding/x_offset leave no drawable area")

    @property
    def graph_width(self) -> int:
        return self.width - 2 * self.padding

    @property
    def graph_height(self) -> int:
        return self.height - 2 * self.padding

    @property
    def usable_width(self) -> int:
        return self.graph_width - 2 * self.x_offset

    @property
    def baseline_y(self) -> int:
        return self.height - self.padding

    @property
    def right_x(self) -> int:
        return self.width - self.padding


DEFAULT_CANVAS = CanvasConfig()


@dataclass(frozen=True)
class PlotPoint:
    x: float
    y: float


@dataclass(frozen=True)
class ChartGeometry:
    canvas: CanvasConfig
    points: tuple[PlotPoint, ...]
    x_step: float

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    @property
    def padding(self) -> int:
        return self.canvas.padding


def compute_geometry(model: ChartModel, canvas: CanvasConfig | None = None) -> ChartGeometry:
    """Map series values to canvas pixels.

    Never raises: a zero-width value range or non-numeric values produce
    ``inf``/``nan`` coordinates, and series values past the last category are
    extrapolated with the same step instead of being clipped.
    """

    cfg = canvas or DEFAULT_CANVAS
    n_categories = len(model.category_labels)
    n_values = len(model.series)
    if n_values != n_categories:
        LOGGER.warning(
            "series length %d does not match category count %d", n_values, n_categories
        )

    x_step = category_step(n_categories, cfg)
    xs = cfg.padding + cfg.x_offset + np.arange(n_values, dtype=np.float64) * x_step
    ys = project_values(model.series, model.value_axis, cfg)

    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
        LOGGER.warning(
            "non-finite point coordinates (value range %r --> %r)",
            model.value_axis.min,
            model.value_axis.max,
        )

    points = tuple(PlotPoint(x=float(x), y=float(y)) for x, y in zip(xs.tolist(), ys.tolist()))
    return ChartGeometry(canvas=cfg, points=points, x_step=x_step)


def category_step(n_categories: int, canvas: CanvasConfig) -> float:
    if n_categories > 1:
        return canvas.usable_width / (n_categories - 1)
    return float(canvas.usable_width)


def project_values(values: Sequence[float], axis: ValueAxis, canvas: CanvasConfig) -> np.ndarray:
    """Vertical pixel position of each value; larger values sit higher on the canvas."""

    arr = np.asarray(values, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        normalized = (arr - axis.min) / np.float64(axis.max - axis.min)
        return canvas.baseline_y - normalized * canvas.graph_height
