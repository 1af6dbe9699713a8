from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_TITLE = "Untitled Chart"
DEFAULT_AXIS_MIN = 0.0
DEFAULT_AXIS_MAX = 100.0


@dataclass(frozen=True)
class ValueAxis:
    label: str = ""
    min: float = DEFAULT_AXIS_MIN
    max: float = DEFAULT_AXIS_MAX

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class ChartModel:
    """Parsed line chart: title, category axis, value axis and one series.

    ``series`` is index-aligned with ``category_labels`` by intent only; the
    parser does not enforce equal lengths.
    """

    title: str = DEFAULT_TITLE
    category_labels: tuple[str, ...] = ()
    value_axis: ValueAxis = field(default_factory=ValueAxis)
    series: tuple[float, ...] = ()

    def as_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "category_labels": list(self.category_labels),
            "value_axis": {
                "label": self.value_axis.label,
                "min": self.value_axis.min,
                "max": self.value_axis.max,
            },
            "series": list(self.series),
        }
