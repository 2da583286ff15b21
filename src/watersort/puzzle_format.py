"""Puzzle notation parsing and serialization.

A puzzle file lists optional inline palette entries, the shared tube capacity, and one
line per tube with its colors from bottom to top::

    # Level 12
    color: Red 255 0 0
    color: Sky Blue 135 206 235
    capacity: 4
    tube: Red, Sky Blue, Red, Sky Blue
    tube:

Move lists use one ``from->to`` pair per line with 1-based tube numbers.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from . import engine
from .palette import find_color, validate_palette
from .types import Color, Move, PuzzleState


@dataclass
class PuzzleFile:
    comments: List[str]
    palette: List[Color]
    state: PuzzleState


def _parse_color_line(body: str) -> Color:
    tokens = body.split()
    if len(tokens) < 4:
        raise ValueError(f"Color line needs a name and 3 channels: '{body.strip()}'")
    name = " ".join(tokens[:-3])
    try:
        r, g, b = (int(tok) for tok in tokens[-3:])
    except ValueError as exc:
        raise ValueError(f"Color channels must be integers: '{body.strip()}'") from exc
    for value in (r, g, b):
        if not 0 <= value <= 255:
            raise ValueError(f"Color channel out of range [0, 255] for '{name}'")
    return Color(name, r, g, b)


def _parse_capacity_line(body: str) -> int:
    try:
        capacity = int(body.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid capacity '{body.strip()}'") from exc
    if capacity <= 0:
        raise ValueError("capacity must be positive")
    return capacity


def _parse_tube_line(body: str, palette: Sequence[Color], tube_no: int) -> List[Color]:
    names = [part.strip() for part in body.split(",")]
    if names == [""]:
        return []
    content: List[Color] = []
    for name in names:
        if not name:
            raise ValueError(f"tube {tube_no} has an empty color slot")
        color = find_color(palette, name)
        if color is None:
            raise ValueError(f"tube {tube_no} uses unknown color '{name}'")
        content.append(color)
    return content


def parse_puzzle(text: str, palette: Optional[Sequence[Color]] = None) -> PuzzleFile:
    """Parse puzzle text; ``palette`` supplies colors not declared inline."""

    comments: List[str] = []
    inline: List[Color] = []
    capacity: Optional[int] = None
    tube_bodies: List[str] = []

    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if not stripped:
            continue
        if stripped.startswith("#"):
            comments.append(stripped)
            continue
        if ":" not in stripped:
            raise ValueError(f"Invalid puzzle line '{stripped}'")
        prefix, body = stripped.split(":", 1)
        prefix = prefix.strip().lower()
        if prefix == "color":
            inline.append(_parse_color_line(body))
        elif prefix == "capacity":
            if capacity is not None:
                raise ValueError("capacity given more than once")
            capacity = _parse_capacity_line(body)
        elif prefix == "tube":
            tube_bodies.append(body)
        else:
            raise ValueError(f"Unknown puzzle line prefix '{prefix}'")

    if capacity is None:
        raise ValueError("Missing capacity: line")
    if not tube_bodies:
        raise ValueError("Puzzle must contain at least one tube: line")

    inline = validate_palette(inline)
    colors = inline + [c for c in (palette or []) if find_color(inline, c.name) is None]

    tubes = []
    for tube_no, body in enumerate(tube_bodies, start=1):
        content = _parse_tube_line(body, colors, tube_no)
        if len(content) > capacity:
            raise ValueError(f"tube {tube_no} holds {len(content)} colors but capacity is {capacity}")
        tubes.append(content)

    return PuzzleFile(comments=comments, palette=inline, state=engine.new_puzzle(capacity, tubes))


def _used_colors(state: PuzzleState) -> List[Color]:
    used: List[Color] = []
    for tube in state.tubes:
        for color in tube.content:
            if color not in used:
                used.append(color)
    return used


def dump_puzzle(puzzle: PuzzleFile) -> str:
    """Serialize a ``PuzzleFile``; every color the tubes use is declared inline."""

    state = puzzle.state
    capacities = {tube.capacity for tube in state.tubes}
    if len(capacities) != 1:
        raise ValueError("puzzle text requires every tube to share one capacity")

    declared = list(puzzle.palette)
    for color in _used_colors(state):
        if color not in declared:
            declared.append(color)

    lines: List[str] = []
    lines.extend(puzzle.comments)
    for color in validate_palette(declared):
        lines.append(f"color: {color.name} {color.r} {color.g} {color.b}")
    lines.append(f"capacity: {capacities.pop()}")
    for tube in state.tubes:
        body = ", ".join(color.name for color in tube.content)
        lines.append(f"tube: {body}".rstrip())
    return "\n".join(lines) + "\n"


_MOVE_LINE = re.compile(r"^(\d+)\s*->\s*(\d+)$")


def format_moves(moves: Sequence[Move]) -> str:
    return "".join(f"{src + 1}->{dst + 1}\n" for src, dst in moves)


def parse_moves(text: str) -> List[Move]:
    moves: List[Move] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match = _MOVE_LINE.match(stripped)
        if not match:
            raise ValueError(f"Invalid move line '{stripped}'")
        src, dst = int(match.group(1)), int(match.group(2))
        if src < 1 or dst < 1:
            raise ValueError("tube numbers start at 1")
        moves.append((src - 1, dst - 1))
    return moves
