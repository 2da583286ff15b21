import itertools

import pytest

from watersort import engine
from watersort.types import Color, InvalidMoveError, MaxCapacityError, PuzzleState

RED = Color("Red", 255, 0, 0)
BLUE = Color("Blue", 0, 0, 255)
GREEN = Color("Green", 0, 255, 0)


def test_check_win_accepts_empty_and_complete_tubes():
    state = engine.new_puzzle(2, [[RED, RED], []])
    assert engine.check_win(state)


def test_check_win_rejects_partial_single_color_tube():
    state = engine.new_puzzle(4, [[RED, RED], [BLUE, BLUE, BLUE, BLUE]])
    assert not engine.check_win(state)


def test_check_win_rejects_mixed_full_tube():
    state = engine.new_puzzle(2, [[RED, BLUE], []])
    assert not engine.check_win(state)


def test_available_moves_matches_validity_both_directions():
    state = engine.new_puzzle(
        4,
        [[RED, BLUE, BLUE], [BLUE], [GREEN, GREEN, GREEN, GREEN], [], [RED, GREEN, RED, BLUE]],
    )
    moves = engine.available_moves(state)
    expected = [
        (i, j)
        for i, j in itertools.permutations(range(len(state)), 2)
        if engine.is_pour_valid(state.tubes[i], state.tubes[j])
    ]
    assert sorted(moves) == sorted(expected)
    assert len(moves) == len(set(moves))


def test_available_moves_order_is_pairwise():
    state = engine.new_puzzle(2, [[RED], [RED], []])
    assert engine.available_moves(state) == [(0, 1), (1, 0), (0, 2), (1, 2)]


def test_no_moves_when_tops_differ_both_ways():
    state = engine.new_puzzle(2, [[BLUE, RED], [RED, BLUE]])
    assert engine.available_moves(state) == []


def test_pour_single_top_unit_onto_matching_tube():
    state = engine.new_puzzle(2, [[RED, BLUE], [BLUE]])
    after = engine.apply_move(state, (0, 1))

    assert after.tubes[0].content == [RED]
    assert after.tubes[1].content == [BLUE, BLUE]
    assert engine.is_complete(after.tubes[1])
    assert not engine.check_win(after)


def test_apply_move_is_pure():
    state = engine.new_puzzle(2, [[RED, BLUE], [BLUE]])
    key_before = state.key()
    after = engine.apply_move(state, (0, 1))

    assert state.tubes[0].content == [RED, BLUE]
    assert state.key() == key_before
    assert after.key() != key_before


def test_apply_move_inplace_mutates_and_refreshes_key():
    state = engine.new_puzzle(2, [[RED, BLUE], [BLUE]])
    key_before = state.key()
    moved = engine.apply_move_inplace(state, (0, 1))

    assert moved == 1
    assert state.tubes[1].content == [BLUE, BLUE]
    assert state.key() != key_before
    assert state.key() == engine.apply_move(engine.new_puzzle(2, [[RED, BLUE], [BLUE]]), (0, 1)).key()


@pytest.mark.parametrize("move", [(0, 5), (5, 0), (-1, 0), (0, -1), (1, 1)])
def test_invalid_indices(move):
    state = engine.new_puzzle(2, [[RED], [RED]])
    with pytest.raises(InvalidMoveError) as excinfo:
        engine.apply_move(state, move)
    assert excinfo.value.kind == "InvalidMove"
    assert excinfo.value.reason


def test_pour_errors_propagate_from_apply():
    state = engine.new_puzzle(2, [[RED], [BLUE, BLUE]])
    with pytest.raises(MaxCapacityError):
        engine.apply_move(state, (0, 1))
    with pytest.raises(MaxCapacityError):
        engine.apply_move_inplace(state, (0, 1))
    assert state.tubes[0].content == [RED]


def test_total_entropy_is_sum():
    state = engine.new_puzzle(4, [[RED, RED], [BLUE, BLUE], [GREEN, GREEN, GREEN, GREEN]])
    assert engine.total_entropy(state) == pytest.approx(1.0)
    assert engine.average_entropy(state) == pytest.approx(1.0 / 3)


def test_clone_is_independent():
    state = engine.new_puzzle(3, [[RED, BLUE], []])
    copy = state.clone()
    copy.tubes[0].content.append(RED)

    assert state.tubes[0].content == [RED, BLUE]
    assert isinstance(copy, PuzzleState)


def test_key_distinguishes_content_order():
    first = engine.new_puzzle(2, [[RED, BLUE], []])
    second = engine.new_puzzle(2, [[BLUE, RED], []])
    assert first.key() != second.key()
    assert first.key() == engine.new_puzzle(2, [[RED, BLUE], []]).key()
