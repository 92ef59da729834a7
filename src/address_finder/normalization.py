"""Text normalization utilities.

Two small helpers live here:
- `split_lines`: the line model used by the extractor (trimmed, non-empty)
- `normalize_address`: a presentation cleanup for a single address string

`normalize_address` is NOT applied by the extractor. Deduplication inside
extraction compares raw (trimmed) strings, so callers that want tidy output
normalize afterwards, right before sending addresses to the distance lookup.
"""

from __future__ import annotations

import re

# Match any sequence of whitespace.
_WHITESPACE_RE = re.compile(r"\s+")

# Two commas with only whitespace between them: "Austin, , TX".
_DOUBLE_COMMA_RE = re.compile(r",\s*,")

# A comma with any surrounding whitespace.
_COMMA_SPACING_RE = re.compile(r"\s*,\s*")


def split_lines(text: str) -> list[str]:
    """Split raw text into trimmed, non-empty lines.

    Splitting is done on "\\n" only; stripping each line also removes a
    trailing "\\r" from Windows line endings.

    Examples:
        "  123 Main St \\n\\n 456 Oak Ave" -> ["123 Main St", "456 Oak Ave"]
    """
    lines: list[str] = []
    for raw in text.split("\n"):
        line = raw.strip()
        if line:
            lines.append(line)
    return lines


def normalize_address(address: str) -> str:
    """Clean up spacing and commas in a single address string.

    Steps (in order):
    1) trim
    2) collapse runs of whitespace to one space
    3) collapse ",," (optionally with whitespace between) to ","
    4) rewrite every comma as ", "

    Examples:
        "  123   Main St ,Austin,, TX " -> "123 Main St, Austin, TX"

    Args:
        address: A candidate address string.

    Returns:
        The normalized string.
    """
    address = address.strip()
    address = _WHITESPACE_RE.sub(" ", address)
    address = _DOUBLE_COMMA_RE.sub(",", address)
    address = _COMMA_SPACING_RE.sub(", ", address)
    return address
