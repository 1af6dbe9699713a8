from __future__ import annotations


class ChartInputError(FileNotFoundError):
    """Raised when a chart source file cannot be located."""
