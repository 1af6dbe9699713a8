from __future__ import annotations

import datetime as dt
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .document import DiagramCell, DiagramDocument, EdgeGeometry, ShapeGeometry, build_document, format_number
from .geometry import ChartGeometry
from .schema import ChartModel

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_GRAPH_MODEL_ATTRS: dict[str, str] = {
    "dx": "0",
    "dy": "0",
    "grid": "1",
    "gridSize": "10",
    "guides": "1",
    "tooltips": "1",
    "connect": "1",
    "arrows": "1",
    "fold": "1",
    "page": "1",
    "pageScale": "1",
    "pageWidth": "850",
    "pageHeight": "1100",
    "math": "0",
    "shadow": "0",
}


@dataclass(frozen=True)
class DocumentMeta:
    host: str = "Electron"
    agent: str = "xychart2drawio"
    file_type: str = "device"
    diagram_id: str = "diagram-1"
    page_name: str = "Page-1"

    def __post_init__(self) -> None:
        for name in ("host", "agent", "file_type", "diagram_id", "page_name"):
            if not getattr(self, name).strip():
                raise ValueError(f"DocumentMeta.{name} must be non-empty")


def emit_drawio(
    model: ChartModel,
    geometry: ChartGeometry,
    *,
    meta: DocumentMeta | None = None,
    modified: dt.datetime | None = None,
) -> str:
    return serialize_document(build_document(model, geometry), meta=meta, modified=modified)


def serialize_document(
    document: DiagramDocument,
    *,
    meta: DocumentMeta | None = None,
    modified: dt.datetime | None = None,
) -> str:
    """Render a document tree as an indented, uncompressed ``mxfile``.

    The output is not validated; non-finite coordinates appear as ``NaN`` or
    ``Infinity`` text.
    """

    info = meta or DocumentMeta()
    mxfile = ET.Element(
        "mxfile",
        {
            "host": info.host,
            "modified": iso_timestamp(modified),
            "agent": info.agent,
            "type": info.file_type,
        },
    )
    diagram = ET.SubElement(mxfile, "diagram", {"id": info.diagram_id, "name": info.page_name})
    graph_model = ET.SubElement(diagram, "mxGraphModel", dict(_GRAPH_MODEL_ATTRS))
    root = ET.SubElement(graph_model, "root")
    for cell in document.cells:
        _append_cell(root, cell)

    ET.indent(mxfile, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(mxfile, encoding="unicode") + "\n"


def iso_timestamp(moment: dt.datetime | None = None) -> str:
    when = moment or dt.datetime.now(dt.timezone.utc)
    stamp = when.astimezone(dt.timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def _append_cell(root: ET.Element, cell: DiagramCell) -> None:
    attrs: dict[str, str] = {"id": cell.cell_id}
    if cell.kind != "root":
        attrs["value"] = cell.value
        attrs["style"] = cell.style
    if cell.parent is not None:
        attrs["parent"] = cell.parent
    if cell.kind == "vertex":
        attrs["vertex"] = "1"
    elif cell.kind == "edge":
        attrs["edge"] = "1"
    node = ET.SubElement(root, "mxCell", attrs)

    geometry = cell.geometry
    if isinstance(geometry, ShapeGeometry):
        ET.SubElement(
            node,
            "mxGeometry",
            {
                "x": format_number(geometry.x),
                "y": format_number(geometry.y),
                "width": format_number(geometry.width),
                "height": format_number(geometry.height),
                "as": "geometry",
            },
        )
    elif isinstance(geometry, EdgeGeometry):
        geo = ET.SubElement(node, "mxGeometry", {"relative": "1", "as": "geometry"})
        for point, role in ((geometry.source, "sourcePoint"), (geometry.target, "targetPoint")):
            ET.SubElement(
                geo,
                "mxPoint",
                {"x": format_number(point.x), "y": format_number(point.y), "as": role},
            )
