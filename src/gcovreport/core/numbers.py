"""Numeric text helpers shared by the report parsers."""

from __future__ import annotations


def parse_large_integer(text: str) -> int:
    """Parse a non-negative decimal digit string of any length.

    gcov prints raw execution counters, which can exceed 32 or 64 bits on
    long-running instrumented binaries. Python ints are unbounded, so the
    exact value is kept rather than clamped.

    Raises:
        ValueError: If text is empty or contains anything but ASCII digits.
    """
    if not text or not (text.isascii() and text.isdigit()):
        raise ValueError(f"Not a decimal digit string: {text!r}")
    return int(text)
