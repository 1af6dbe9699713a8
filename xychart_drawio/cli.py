from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .errors import ChartInputError
from .exporters import export_chart_bundle, read_chart_source


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="xychart2drawio",
        description="Convert Mermaid xychart-beta line charts to draw.io XML.",
    )
    parser.add_argument("input", type=Path, help="path to input mermaid file")
    parser.add_argument("output", type=Path, help="path to output .drawio/.xml file")
    parser.add_argument("--preview", type=Path, default=None, help="also write a PNG preview to this path")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = read_chart_source(args.input)
    except ChartInputError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    print(f"Reading {args.input}...")

    try:
        bundle = export_chart_bundle(text, out_path=args.output, preview_path=args.preview)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    print(f'Parsed chart: "{bundle.model.title}" with {len(bundle.model.series)} points.')
    print(f"Successfully created {bundle.drawio}!")
    if bundle.png_preview is not None:
        print(f"Preview written to {bundle.png_preview}")
    print("You can now open this file in https://app.diagrams.net/")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
