from pathlib import Path

import pytest

from watersort.palette import find_color, load_palette, palette_from_json, palette_to_json, save_palette
from watersort.types import Color


def test_load_sample_palette():
    path = Path(__file__).parent / "data" / "palette.json"
    colors = load_palette(path)

    assert [c.name for c in colors] == ["Red", "Blue", "Neon Green"]
    assert colors[2] == Color("Neon Green", 57, 255, 20)


def test_save_and_load(tmp_path):
    colors = [Color("Red", 230, 40, 40), Color("Sky Blue", 135, 206, 235)]
    path = tmp_path / "colors.json"
    save_palette(path, colors)

    assert load_palette(path) == colors


def test_json_records_have_named_channels():
    text = palette_to_json([Color("Red", 1, 2, 3)])
    assert '"name": "Red"' in text
    assert '"r": 1' in text and '"g": 2' in text and '"b": 3' in text


@pytest.mark.parametrize(
    "text",
    [
        "{}",
        "not json",
        '[{"name": "Red", "r": 256, "g": 0, "b": 0}]',
        '[{"name": "Red", "r": 1.5, "g": 0, "b": 0}]',
        '[{"name": "Red", "r": 0, "g": 0}]',
        '[{"name": "", "r": 0, "g": 0, "b": 0}]',
        '[{"name": "Red", "r": 0, "g": 0, "b": 0}, {"name": "red", "r": 1, "g": 1, "b": 1}]',
    ],
)
def test_invalid_palettes_rejected(text):
    with pytest.raises(ValueError):
        palette_from_json(text)


def test_find_color_ignores_case():
    colors = [Color("Neon Green", 57, 255, 20)]
    assert find_color(colors, "neon green ") == colors[0]
    assert find_color(colors, "green") is None
