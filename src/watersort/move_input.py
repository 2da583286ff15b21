"""Utilities for parsing user-entered pour moves."""
from __future__ import annotations

import re

from .types import Move

_PATTERN = re.compile(r"^\(?\s*(\d+)\s*(?:,|->|\s)\s*(\d+)\s*\)?$")


def parse_move_text(raw: str) -> Move:
    """Parse a move typed with 1-based tube numbers and return it 0-based.

    Accepted examples:
    - "1 3"
    - "1,3" or "(1, 3)"
    - "1->3"

    Raises:
        ValueError: if the text cannot be parsed or names the same tube twice.
    """

    text = raw.strip()
    if not text:
        raise ValueError("Move text is empty")

    match = _PATTERN.match(text)
    if not match:
        raise ValueError("Could not parse move; use formats like '1 3', '1,3' or '1->3'")

    src = int(match.group(1))
    dst = int(match.group(2))
    if src < 1 or dst < 1:
        raise ValueError("Tube numbers start at 1")
    if src == dst:
        raise ValueError("Source and destination must be different tubes")
    return src - 1, dst - 1
