import io

import pytest

from watersort.entry import InteractiveBuilder
from watersort.types import Color

RED = Color("Red", 255, 0, 0)
BLUE = Color("Blue", 0, 0, 255)


def _run(lines, palette=None):
    stdin = io.StringIO("\n".join(lines) + "\n")
    stdout = io.StringIO()
    builder = InteractiveBuilder(stdin=stdin, stdout=stdout)
    colors, state = builder.run(palette=palette)
    return colors, state, stdout.getvalue()


def test_builds_palette_and_tubes_top_down():
    lines = [
        "255 0 0 Red",
        "bad",
        "0 0 255 Blue",
        "",
        "x",
        "2",
        "3",
        "Blue",
        "Red",
        "red",
        "blue",
        "",
    ]
    colors, state, out = _run(lines)

    assert colors == [RED, BLUE]
    assert [tube.content for tube in state.tubes] == [[RED, BLUE], [BLUE, RED], []]
    assert all(tube.capacity == 2 for tube in state.tubes)
    assert out.count("Invalid input") == 2


def test_reuses_given_palette_and_rejects_unknown_color():
    lines = ["1", "2", "Green", "Red", "Red"]
    colors, state, out = _run(lines, palette=[RED, BLUE])

    assert colors == [RED, BLUE]
    assert [tube.content for tube in state.tubes] == [[RED], [RED]]
    assert "unknown color 'Green'" in out


def test_duplicate_color_name_rejected():
    lines = ["255 0 0 Red", "1 1 1 red", "", "1", "1", "Red"]
    colors, state, out = _run(lines)

    assert colors == [RED]
    assert "repeated" in out


def test_end_of_input_raises():
    builder = InteractiveBuilder(stdin=io.StringIO("255 0 0 Red\n"), stdout=io.StringIO())
    with pytest.raises(EOFError):
        builder.run()
