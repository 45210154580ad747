"""Shared text helpers for the report renderer."""

from __future__ import annotations

import math

ELLIPSIS = "..."


def truncate(text: str, limit: int) -> str:
    """Cut text to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive scores (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


def fmt_number(value: float) -> str:
    """Render a score in full, without a trailing '.0' (8.0 -> '8', 7.5 -> '7.5')."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


# Unicode -> ASCII substitutions for PDF core fonts (latin-1 only).
_UNICODE_SUBS = str.maketrans({
    "\u2014": "--",   # em dash
    "\u2013": "-",    # en dash
    "\u2018": "'",    # left single quote
    "\u2019": "'",    # right single quote
    "\u201c": '"',    # left double quote
    "\u201d": '"',    # right double quote
    "\u2026": "...",  # ellipsis
    "\u2022": "*",    # bullet
    "\u2192": "->",   # right arrow
    "\u2190": "<-",   # left arrow
    "\u2265": ">=",   # greater or equal
    "\u2264": "<=",   # less or equal
    "\u00a0": " ",    # non-breaking space
})


def latin1(text: str) -> str:
    """Sanitize text for latin-1 PDF core fonts."""
    result = text.translate(_UNICODE_SUBS)
    return result.encode("latin-1", errors="replace").decode("latin-1")
