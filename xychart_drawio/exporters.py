from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from pathlib import Path

from .document import build_document
from .emitter import DocumentMeta, serialize_document
from .errors import ChartInputError
from .geometry import CanvasConfig, compute_geometry
from .parser import parse_xychart
from .preview import render_preview_png
from .schema import ChartModel


@dataclass(frozen=True)
class ChartExportBundle:
    model: ChartModel
    drawio: Path
    png_preview: Path | None = None

    def as_dict(self) -> dict[str, str]:
        out = {"drawio": str(self.drawio)}
        if self.png_preview is not None:
            out["png_preview"] = str(self.png_preview)
        return out


def convert_chart(
    text: str,
    *,
    canvas: CanvasConfig | None = None,
    meta: DocumentMeta | None = None,
    modified: dt.datetime | None = None,
) -> str:
    """Chart text in, draw.io XML out. Irregular input never raises."""

    model = parse_xychart(text)
    geometry = compute_geometry(model, canvas)
    return serialize_document(build_document(model, geometry), meta=meta, modified=modified)


def read_chart_source(path: str | Path) -> str:
    source = Path(path)
    if not source.is_file():
        raise ChartInputError(f"File '{source}' not found.")
    return source.read_text(encoding="utf-8")


def export_chart_bundle(
    text: str,
    *,
    out_path: str | Path,
    preview_path: str | Path | None = None,
    canvas: CanvasConfig | None = None,
    modified: dt.datetime | None = None,
) -> ChartExportBundle:
    model = parse_xychart(text)
    geometry = compute_geometry(model, canvas)
    document = build_document(model, geometry)

    drawio_path = Path(out_path)
    drawio_path.parent.mkdir(parents=True, exist_ok=True)
    drawio_path.write_text(serialize_document(document, modified=modified), encoding="utf-8")

    png_path = None
    if preview_path is not None:
        png_path = render_preview_png(document, out_path=preview_path)

    return ChartExportBundle(model=model, drawio=drawio_path, png_preview=png_path)
