"""Puzzle engine for water sort.

Rules:
- A pour moves the longest same-colored run from the top of the source, limited by the
  free space left in the destination.
- Pouring into a full tube, out of an empty tube, out of or into a completed tube
  (full and single-colored), or onto a different top color is not allowed.
- The puzzle is won when every tube is empty or completed.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import List, Sequence

from .types import (
    CantMoveError,
    Color,
    DiffColorError,
    InvalidMoveError,
    MaxCapacityError,
    Move,
    NoContentError,
    PourError,
    PuzzleState,
    Tube,
)


def is_full(tube: Tube) -> bool:
    return len(tube.content) >= tube.capacity


def is_empty(tube: Tube) -> bool:
    return not tube.content


def is_complete(tube: Tube) -> bool:
    """Whether the tube is full and holds a single color."""

    if not is_full(tube):
        return False
    bottom = tube.content[0]
    return all(color == bottom for color in tube.content)


def check_pour(source: Tube, destination: Tube) -> None:
    """Raise the first rule a pour from ``source`` into ``destination`` breaks."""

    if is_full(destination):
        raise MaxCapacityError()
    if is_empty(source):
        raise NoContentError()
    if is_complete(source) or is_complete(destination):
        raise CantMoveError()
    if not is_empty(destination) and source.content[-1] != destination.content[-1]:
        raise DiffColorError()


def is_pour_valid(source: Tube, destination: Tube) -> bool:
    try:
        check_pour(source, destination)
    except PourError:
        return False
    return True


def pour(source: Tube, destination: Tube) -> int:
    """Pour from ``source`` into ``destination`` in place and return the units moved."""

    check_pour(source, destination)

    free = destination.capacity - len(destination.content)
    staged: List[Color] = []
    while source.content:
        color = source.content.pop()
        if len(staged) >= free or (staged and staged[0] != color):
            source.content.append(color)
            break
        staged.append(color)

    destination.content.extend(staged)
    return len(staged)


def tube_entropy(tube: Tube) -> float:
    """Disorder score of a tube.

    Probabilities are taken against the tube capacity rather than its filled length, so
    they do not sum to one for partially filled tubes. The solver is tuned on this form.
    """

    counts = Counter(tube.content)
    total = 0.0
    for count in counts.values():
        prob = count / tube.capacity
        total += prob * math.log2(prob)
    return -total


def new_puzzle(capacity: int, tubes: Sequence[Sequence[Color]]) -> PuzzleState:
    """Create a puzzle whose tubes all share ``capacity``.

    Each entry of ``tubes`` lists that tube's colors from bottom to top.
    """

    if not tubes:
        raise ValueError("puzzle must contain at least one tube")
    return PuzzleState(tubes=[Tube(capacity, list(content)) for content in tubes])


def check_win(state: PuzzleState) -> bool:
    """Whether every tube is empty or completed."""

    for tube in state.tubes:
        if tube_entropy(tube) > 0.0:
            return False
        length = len(tube.content)
        if length != 0 and length != tube.capacity:
            return False
    return True


def available_moves(state: PuzzleState) -> List[Move]:
    """Return every legal pour, checking both directions of each tube pair."""

    moves: List[Move] = []
    tubes = state.tubes
    for i in range(len(tubes)):
        for j in range(i + 1, len(tubes)):
            if is_pour_valid(tubes[i], tubes[j]):
                moves.append((i, j))
            if is_pour_valid(tubes[j], tubes[i]):
                moves.append((j, i))
    return moves


def _validate_indices(state: PuzzleState, move: Move) -> None:
    src, dst = move
    if not 0 <= src < len(state.tubes):
        raise InvalidMoveError("From tube doesn't exist")
    if not 0 <= dst < len(state.tubes):
        raise InvalidMoveError("To tube doesn't exist")
    if src == dst:
        raise InvalidMoveError("Cannot pour a tube into itself")


def apply_move(state: PuzzleState, move: Move) -> PuzzleState:
    """Apply a move and return the resulting state, leaving ``state`` untouched."""

    _validate_indices(state, move)
    src, dst = move
    next_state = state.clone()
    pour(next_state.tubes[src], next_state.tubes[dst])
    next_state._key_cache = None
    return next_state


def apply_move_inplace(state: PuzzleState, move: Move) -> int:
    """Apply a move by mutating ``state``; returns the number of units poured."""

    _validate_indices(state, move)
    src, dst = move
    moved = pour(state.tubes[src], state.tubes[dst])
    state._key_cache = None
    return moved


def total_entropy(state: PuzzleState) -> float:
    """Sum of tube entropies, the solver's state heuristic."""

    return sum(tube_entropy(tube) for tube in state.tubes)


def average_entropy(state: PuzzleState) -> float:
    return total_entropy(state) / len(state.tubes)
