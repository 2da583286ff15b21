"""Line-oriented interactive entry of colors and tubes.

Prompts go to ``stdout`` and answers are read from ``stdin`` so the builder can be driven
by a terminal or by scripted streams in tests. Invalid answers are reported and asked
again; running out of input raises ``EOFError``.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence, Tuple

from . import engine
from .palette import find_color, validate_palette
from .types import Color, PuzzleState


class InteractiveBuilder:
    """Collect a palette and a puzzle state through prompts."""

    def __init__(self, stdin=None, stdout=None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _write(self, text: str) -> None:
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def _ask(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError("input ended before the puzzle was complete")
        return line.strip()

    def _ask_positive_int(self, prompt: str) -> int:
        while True:
            answer = self._ask(prompt)
            try:
                value = int(answer)
            except ValueError:
                self._write(f"Invalid input: '{answer}' is not a whole number")
                continue
            if value <= 0:
                self._write("Invalid input: value must be positive")
                continue
            return value

    def _parse_color(self, answer: str) -> Color:
        tokens = answer.split()
        if len(tokens) < 4:
            raise ValueError("enter R G B values followed by a name, e.g. '255 0 123 Neon Pink'")
        try:
            r, g, b = (int(tok) for tok in tokens[:3])
        except ValueError as exc:
            raise ValueError("R G B values must be integers") from exc
        if not all(0 <= value <= 255 for value in (r, g, b)):
            raise ValueError("R G B values must be within [0, 255]")
        return Color(" ".join(tokens[3:]), r, g, b)

    def read_colors(self) -> List[Color]:
        """Ask for colors until a blank line; at least one color is required."""

        self._write("Add colors as 'R G B Name', blank line to stop")
        colors: List[Color] = []
        while True:
            answer = self._ask(f"Color {len(colors) + 1}: ")
            if not answer:
                if colors:
                    return colors
                self._write("Invalid input: add at least one color")
                continue
            try:
                color = self._parse_color(answer)
                validate_palette(colors + [color])
            except ValueError as exc:
                self._write(f"Invalid input: {exc}")
                continue
            colors.append(color)

    def read_tube(self, index: int, capacity: int, palette: Sequence[Color]) -> List[Color]:
        """Ask for one tube's colors from the top down; blank stops early."""

        top_down: List[Color] = []
        while len(top_down) < capacity:
            answer = self._ask(f"Tube {index + 1}, color {len(top_down) + 1} from the top: ")
            if not answer:
                break
            color = find_color(palette, answer)
            if color is None:
                names = ", ".join(c.name for c in palette)
                self._write(f"Invalid input: unknown color '{answer}' (choose from {names})")
                continue
            top_down.append(color)
        top_down.reverse()
        return top_down

    def run(self, palette: Optional[Sequence[Color]] = None) -> Tuple[List[Color], PuzzleState]:
        colors = list(palette) if palette else self.read_colors()
        capacity = self._ask_positive_int("What is the tube capacity? ")
        tube_count = self._ask_positive_int("What is the number of tubes? ")
        tubes = []
        for index in range(tube_count):
            tubes.append(self.read_tube(index, capacity, colors))
            self._write("------------------------")
        return colors, engine.new_puzzle(capacity, tubes)
