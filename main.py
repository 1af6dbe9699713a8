from __future__ import annotations

from xychart_drawio.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
