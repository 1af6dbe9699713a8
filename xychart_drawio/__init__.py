"""Mermaid xychart-beta line charts to draw.io documents."""

from .document import (
    DiagramCell,
    DiagramDocument,
    EdgeGeometry,
    ShapeGeometry,
    build_document,
    format_number,
    format_style,
    parse_style,
)
from .emitter import DocumentMeta, emit_drawio, serialize_document
from .errors import ChartInputError
from .exporters import ChartExportBundle, convert_chart, export_chart_bundle, read_chart_source
from .geometry import CanvasConfig, ChartGeometry, PlotPoint, compute_geometry, project_values
from .parser import classify_line, parse_xychart
from .preview import render_preview, render_preview_png
from .schema import DEFAULT_TITLE, ChartModel, ValueAxis

__all__ = [
    "CanvasConfig",
    "ChartExportBundle",
    "ChartGeometry",
    "ChartInputError",
    "ChartModel",
    "DEFAULT_TITLE",
    "DiagramCell",
    "DiagramDocument",
    "DocumentMeta",
    "EdgeGeometry",
    "PlotPoint",
    "ShapeGeometry",
    "ValueAxis",
    "build_document",
    "classify_line",
    "compute_geometry",
    "convert_chart",
    "emit_drawio",
    "export_chart_bundle",
    "format_number",
    "format_style",
    "parse_style",
    "parse_xychart",
    "project_values",
    "read_chart_source",
    "render_preview",
    "render_preview_png",
    "serialize_document",
]
