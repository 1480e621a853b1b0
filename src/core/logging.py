"""Console progress output.

Progress and debug text goes to stdout, flushed per line, the same way the
trainer and experiment loops report. Output is best-effort: nothing in the
library depends on it, and every caller can switch it off with
``verbose=False``.
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = ["log", "format_value", "format_point"]


def log(msg: str, *, verbose: bool = True) -> None:
    if verbose:
        print(msg, flush=True)


def format_value(value: float) -> str:
    """Format a float compactly (6 significant digits, like C++ ostreams)."""
    return f"{value:g}"


def format_point(values: Iterable[float]) -> str:
    """Format point coordinates as ``(a, b, ...)``."""
    return "(" + ", ".join(format_value(v) for v in values) + ")"
