"""Terminal rendering of puzzle states."""

from __future__ import annotations

from typing import List, Optional

from colorama import Style

from .types import Color, Move, PuzzleState

EMPTY_RGB = (0, 0, 0)


def _background(rgb) -> str:
    r, g, b = rgb
    return f"\x1b[48;2;{r};{g};{b}m"


def _foreground(rgb) -> str:
    r, g, b = rgb
    return f"\x1b[38;2;{r};{g};{b}m"


def format_color(color: Color, color_output: bool = True) -> str:
    """Return the color name, painted in the color itself when enabled."""

    if not color_output:
        return color.name
    return f"{_foreground(color.rgb)}{color.name}{Style.RESET_ALL}"


def _cell(color: Optional[Color], color_output: bool) -> str:
    if color_output:
        rgb = EMPTY_RGB if color is None else color.rgb
        return f"{_background(rgb)}  {Style.RESET_ALL}"
    if color is None:
        return "  "
    return color.name[:2].ljust(2)


def format_state(state: PuzzleState, color_output: bool = True) -> str:
    """Draw tubes side by side, top level first, with 1-based numbers below."""

    if not state.tubes:
        return ""
    height = max(tube.capacity for tube in state.tubes)
    lines: List[str] = []
    for level in range(height - 1, -1, -1):
        parts: List[str] = []
        for tube in state.tubes:
            if level >= tube.capacity:
                parts.append("     ")
                continue
            color = tube.content[level] if level < len(tube.content) else None
            parts.append(f"│{_cell(color, color_output)}│ ")
        lines.append("".join(parts).rstrip())
    lines.append("".join("└──┘ " for _ in state.tubes).rstrip())
    lines.append("".join(f" {idx:02}  " for idx in range(1, len(state.tubes) + 1)).rstrip())
    return "\n".join(lines)


def format_direction(tube_count: int, move: Move) -> str:
    """Mark the source tube with ``↑↑`` and the destination with ``↓↓``."""

    src, dst = move
    parts: List[str] = []
    for idx in range(tube_count):
        if idx == src:
            parts.append(" ↑↑  ")
        elif idx == dst:
            parts.append(" ↓↓  ")
        else:
            parts.append("     ")
    return "".join(parts).rstrip()
