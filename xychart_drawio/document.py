from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

import numpy as np

from .geometry import CanvasConfig, ChartGeometry, PlotPoint, project_values
from .schema import ChartModel

CellKind = Literal["root", "vertex", "edge"]

TICK_STEPS = 5
LABEL_BOX_WIDTH = 40
LABEL_BOX_HEIGHT = 20
TICK_LABEL_GAP = 45
CATEGORY_LABEL_GAP = 5
MARKER_SIZE = 8
TITLE_TOP = 10
TITLE_HEIGHT = 30


def format_style(*flags: str, **attrs: object) -> str:
    """Build a draw.io style string such as ``ellipse;fillColor=#FF0000;``."""

    parts = list(flags) + [f"{key}={value}" for key, value in attrs.items()]
    return ";".join(parts) + ";"


def parse_style(style: str) -> dict[str, str]:
    """Inverse of :func:`format_style`; bare flags map to an empty string."""

    out: dict[str, str] = {}
    for part in style.split(";"):
        part = part.strip()
        if not part:
            continue
        key, _, value = part.partition("=")
        out[key] = value
    return out


def _text_style(**attrs: object) -> str:
    return format_style("text", html=1, strokeColor="none", fillColor="none", **attrs, whiteSpace="wrap", rounded=0)


AXIS_STYLE = format_style(endArrow="classic", html=1, rounded=0, strokeWidth=2, startSize=8, endSize=8)
GRID_STYLE = format_style(endArrow="none", html=1, rounded=0, strokeColor="#E0E0E0", dashed=1)
SERIES_LINE_STYLE = format_style(endArrow="none", html=1, rounded=0, strokeWidth=2, strokeColor="#0066CC")
MARKER_STYLE = format_style(
    "ellipse",
    whiteSpace="wrap",
    html=1,
    aspect="fixed",
    fillColor="#FF0000",
    strokeColor="none",
    verticalLabelPosition="top",
    verticalAlign="bottom",
    fontSize=11,
    fontStyle=1,
    labelBackgroundColor="#ffffff",
)
CATEGORY_LABEL_STYLE = _text_style(align="center", verticalAlign="top")
TICK_LABEL_STYLE = _text_style(align="right", verticalAlign="middle")
TITLE_STYLE = _text_style(align="center", verticalAlign="middle", fontSize=18, fontStyle=1)


def format_number(value: float) -> str:
    """Render a number the way JavaScript's ``Number#toString`` would."""

    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() yields the shortest round-tripping digits, as JS does.
    shortest = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in shortest.digits)
    k = len(digits)
    n = int(shortest.exponent) + k
    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * (-n) + digits
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{n - 1:+d}"


def _all_within(values: tuple[float, ...], limit: float) -> bool:
    return all(math.isfinite(v) and abs(v) <= limit for v in values)


@dataclass(frozen=True)
class ShapeGeometry:
    x: float
    y: float
    width: float
    height: float

    def fits_within(self, limit: float) -> bool:
        return _all_within((self.x, self.y, self.width, self.height), limit)


@dataclass(frozen=True)
class EdgeGeometry:
    source: PlotPoint
    target: PlotPoint

    def fits_within(self, limit: float) -> bool:
        return _all_within((self.source.x, self.source.y, self.target.x, self.target.y), limit)


@dataclass(frozen=True)
class DiagramCell:
    cell_id: str
    value: str = ""
    style: str = ""
    parent: str | None = "1"
    kind: CellKind = "vertex"
    geometry: ShapeGeometry | EdgeGeometry | None = None

    def __post_init__(self) -> None:
        if not self.cell_id:
            raise ValueError("DiagramCell.cell_id must be non-empty")
        if self.kind == "edge" and not isinstance(self.geometry, EdgeGeometry):
            raise ValueError(f"Edge cell `{self.cell_id}` requires an EdgeGeometry")
        if self.kind == "vertex" and not isinstance(self.geometry, ShapeGeometry):
            raise ValueError(f"Vertex cell `{self.cell_id}` requires a ShapeGeometry")


@dataclass(frozen=True)
class DiagramDocument:
    canvas: CanvasConfig
    cells: tuple[DiagramCell, ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for cell in self.cells:
            if cell.cell_id in seen:
                raise ValueError(f"Duplicate cell id: {cell.cell_id}")
            seen.add(cell.cell_id)

    def cell_lookup(self) -> dict[str, DiagramCell]:
        return {cell.cell_id: cell for cell in self.cells}

    def cells_with_prefix(self, prefix: str) -> tuple[DiagramCell, ...]:
        return tuple(cell for cell in self.cells if cell.cell_id.startswith(prefix))


def build_document(model: ChartModel, geometry: ChartGeometry) -> DiagramDocument:
    """Lay out every chart primitive; list order is draw order."""

    canvas = geometry.canvas
    cells: list[DiagramCell] = [
        DiagramCell("0", parent=None, kind="root"),
        DiagramCell("1", parent="0", kind="root"),
    ]
    cells.extend(_axis_cells(canvas))
    cells.extend(_category_label_cells(model, geometry))
    cells.extend(_tick_cells(model, canvas))
    cells.extend(_series_cells(model, geometry))
    cells.append(_title_cell(model, canvas))
    return DiagramDocument(canvas=canvas, cells=tuple(cells))


def _edge(cell_id: str, style: str, source: PlotPoint, target: PlotPoint) -> DiagramCell:
    return DiagramCell(cell_id, style=style, kind="edge", geometry=EdgeGeometry(source=source, target=target))


def _axis_cells(canvas: CanvasConfig) -> list[DiagramCell]:
    origin = PlotPoint(x=canvas.padding, y=canvas.baseline_y)
    return [
        _edge("axis-y", AXIS_STYLE, origin, PlotPoint(x=canvas.padding, y=canvas.padding)),
        _edge("axis-x", AXIS_STYLE, origin, PlotPoint(x=canvas.right_x, y=canvas.baseline_y)),
    ]


def _category_label_cells(model: ChartModel, geometry: ChartGeometry) -> list[DiagramCell]:
    cells: list[DiagramCell] = []
    for i, label in enumerate(model.category_labels):
        if i >= len(geometry.points):
            break
        point = geometry.points[i]
        cells.append(
            DiagramCell(
                f"xlabel-{i}",
                value=label,
                style=CATEGORY_LABEL_STYLE,
                geometry=ShapeGeometry(
                    x=point.x - LABEL_BOX_WIDTH / 2,
                    y=geometry.canvas.baseline_y + CATEGORY_LABEL_GAP,
                    width=LABEL_BOX_WIDTH,
                    height=LABEL_BOX_HEIGHT,
                ),
            )
        )
    return cells


def tick_values(model: ChartModel, steps: int = TICK_STEPS) -> np.ndarray:
    """Evenly spaced axis values, rounded half-up to integers for display."""

    axis = model.value_axis
    fractions = np.arange(steps + 1, dtype=np.float64) / steps
    with np.errstate(invalid="ignore"):
        return np.floor(axis.min + axis.span * fractions + 0.5)


def _tick_cells(model: ChartModel, canvas: CanvasConfig) -> list[DiagramCell]:
    values = tick_values(model)
    ys = project_values(values, model.value_axis, canvas)
    cells: list[DiagramCell] = []
    for i, (value, y) in enumerate(zip(values.tolist(), ys.tolist())):
        cells.append(
            DiagramCell(
                f"ylabel-{i}",
                value=format_number(value),
                style=TICK_LABEL_STYLE,
                geometry=ShapeGeometry(
                    x=canvas.padding - TICK_LABEL_GAP,
                    y=y - LABEL_BOX_HEIGHT / 2,
                    width=LABEL_BOX_WIDTH,
                    height=LABEL_BOX_HEIGHT,
                ),
            )
        )
        # The zero tick would overdraw the x axis.
        if i > 0:
            cells.append(
                _edge(
                    f"grid-{i}",
                    GRID_STYLE,
                    PlotPoint(x=canvas.padding, y=y),
                    PlotPoint(x=canvas.right_x, y=y),
                )
            )
    return cells


def _series_cells(model: ChartModel, geometry: ChartGeometry) -> list[DiagramCell]:
    points = geometry.points
    half = MARKER_SIZE / 2
    cells: list[DiagramCell] = []
    for i, point in enumerate(points):
        if i < len(points) - 1:
            cells.append(_edge(f"line-{i}", SERIES_LINE_STYLE, point, points[i + 1]))
        cells.append(
            DiagramCell(
                f"point-{i}",
                value=format_number(model.series[i]),
                style=MARKER_STYLE,
                geometry=ShapeGeometry(x=point.x - half, y=point.y - half, width=MARKER_SIZE, height=MARKER_SIZE),
            )
        )
    return cells


def _title_cell(model: ChartModel, canvas: CanvasConfig) -> DiagramCell:
    return DiagramCell(
        "title",
        value=model.title,
        style=TITLE_STYLE,
        geometry=ShapeGeometry(
            x=canvas.padding,
            y=TITLE_TOP,
            width=canvas.graph_width,
            height=TITLE_HEIGHT,
        ),
    )
