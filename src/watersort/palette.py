"""Reading and writing named color palettes.

A palette file is a JSON list of records such as ``{"name": "Red", "r": 255, "g": 0, "b": 0}``.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .types import Color

PathLike = Union[str, Path]


def _channel(record: dict, key: str, name: str) -> int:
    value = record.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"invalid rgb value for color '{name}': {key} must be an integer")
    if not 0 <= value <= 255:
        raise ValueError(f"invalid rgb value for color '{name}': {key} not in range [0, 255]")
    return value


def color_from_record(record: dict) -> Color:
    if not isinstance(record, dict):
        raise ValueError(f"palette entry must be an object, got {record!r}")
    name = record.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValueError("palette entry needs a non-empty 'name'")
    name = name.strip()
    return Color(name, _channel(record, "r", name), _channel(record, "g", name), _channel(record, "b", name))


def color_to_record(color: Color) -> dict:
    return {"name": color.name, "r": color.r, "g": color.g, "b": color.b}


def validate_palette(colors: Sequence[Color]) -> List[Color]:
    """Return the palette as a list, rejecting names used more than once."""

    seen = set()
    for color in colors:
        folded = color.name.casefold()
        if folded in seen:
            raise ValueError(f"color name '{color.name}' is repeated in palette")
        seen.add(folded)
    return list(colors)


def palette_from_json(text: str) -> List[Color]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"palette is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError("palette must be a JSON list of colors")
    return validate_palette([color_from_record(record) for record in data])


def palette_to_json(colors: Sequence[Color]) -> str:
    return json.dumps([color_to_record(color) for color in colors], indent=2) + "\n"


def load_palette(path: PathLike) -> List[Color]:
    with open(path, "r", encoding="utf-8") as f:
        return palette_from_json(f.read())


def save_palette(path: PathLike, colors: Sequence[Color]) -> None:
    text = palette_to_json(validate_palette(colors))
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def find_color(palette: Sequence[Color], name: str) -> Optional[Color]:
    """Case-insensitive lookup by color name."""

    wanted = name.strip().casefold()
    for color in palette:
        if color.name.casefold() == wanted:
            return color
    return None
