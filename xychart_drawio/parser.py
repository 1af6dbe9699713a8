from __future__ import annotations

import logging
import math
import re
from typing import Literal

from .schema import DEFAULT_AXIS_MAX, DEFAULT_AXIS_MIN, DEFAULT_TITLE, ChartModel, ValueAxis

LOGGER = logging.getLogger(__name__)

DirectiveKind = Literal["title", "x-axis", "y-axis", "line", "other"]

# Checked in order; the first matching prefix wins.
_DIRECTIVE_PREFIXES: tuple[DirectiveKind, ...] = ("title", "x-axis", "y-axis", "line")

_BRACKETED = re.compile(r"\[(.*?)\]")
_RANGE = re.compile(r"(\S+?)\s*-->\s*(\S+)")
_QUOTED = re.compile(r'"(.*?)"')
# Leading number prefix; trailing junk is ignored.
_NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)")


def classify_line(line: str) -> tuple[DirectiveKind, str]:
    """Split a stripped line into its directive kind and the text after the keyword."""

    for kind in _DIRECTIVE_PREFIXES:
        if line.startswith(kind):
            return kind, line.replace(kind, "", 1).strip()
    return "other", line


def parse_xychart(text: str) -> ChartModel:
    """Parse ``xychart-beta`` line chart text into a :class:`ChartModel`.

    Unknown lines are ignored and any field that cannot be extracted keeps its
    default, so this never raises for string input.
    """

    title = DEFAULT_TITLE
    categories: tuple[str, ...] = ()
    axis_label = ""
    axis_min = DEFAULT_AXIS_MIN
    axis_max = DEFAULT_AXIS_MAX
    series: tuple[float, ...] = ()

    for line in _content_lines(text):
        kind, rest = classify_line(line)
        if kind == "title":
            title = rest.replace('"', "").strip()
        elif kind == "x-axis":
            items = _bracketed_items(rest)
            if items is not None:
                categories = items
        elif kind == "y-axis":
            range_match = _RANGE.search(rest)
            if range_match:
                axis_min = _parse_float(range_match.group(1))
                axis_max = _parse_float(range_match.group(2))
            label_match = _QUOTED.search(rest)
            if label_match:
                axis_label = label_match.group(1)
        elif kind == "line":
            items = _bracketed_items(rest)
            if items is not None:
                series = tuple(_parse_float(item) for item in items)
        else:
            LOGGER.debug("ignoring chart line: %r", line)

    return ChartModel(
        title=title,
        category_labels=categories,
        value_axis=ValueAxis(label=axis_label, min=axis_min, max=axis_max),
        series=series,
    )


def _content_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def _bracketed_items(text: str) -> tuple[str, ...] | None:
    match = _BRACKETED.search(text)
    if match is None:
        return None
    return tuple(piece.strip() for piece in match.group(1).split(","))


def _parse_float(token: str) -> float:
    match = _NUMBER_PREFIX.match(token.strip())
    if match is None:
        return math.nan
    return float(match.group(0))
