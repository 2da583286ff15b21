"""Replay solved move lists and narrate each step."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence

from . import engine
from .render import format_direction, format_state
from .types import Move, PourError, PuzzleState

logger = logging.getLogger(__name__)


class PlaybackError(RuntimeError):
    """Raised when a move list cannot be replayed against its own puzzle."""


@dataclass
class PlaybackStep:
    index: int
    move: Move
    before: PuzzleState
    after: PuzzleState


def iter_playback(state: PuzzleState, moves: Sequence[Move]) -> Iterator[PlaybackStep]:
    """Yield every step of ``moves`` replayed on a copy of ``state``.

    The original state is left untouched. A move that cannot be applied aborts the
    replay with :class:`PlaybackError`.
    """

    current = state.clone()
    for idx, move in enumerate(moves):
        before = current.clone()
        try:
            engine.apply_move_inplace(current, move)
        except PourError as exc:
            src, dst = move
            logger.error("Replay failed at step %d (%d -> %d): %s", idx + 1, src + 1, dst + 1, exc)
            raise PlaybackError(
                f"Step {idx + 1}: cannot pour from tube {src + 1} to tube {dst + 1} ({exc.kind}: {exc})"
            ) from exc
        yield PlaybackStep(index=idx, move=move, before=before, after=current.clone())


def replay_moves(state: PuzzleState, moves: Sequence[Move]) -> PuzzleState:
    """Replay ``moves`` and return the final state."""

    final = state.clone()
    for step in iter_playback(state, moves):
        final = step.after
    return final


def narrate(state: PuzzleState, moves: Sequence[Move], color_output: bool = True) -> str:
    """Describe each pour followed by the tubes as they are before it happens."""

    lines: List[str] = []
    for step in iter_playback(state, moves):
        src, dst = step.move
        lines.append(f"Step {step.index + 1}: Pour from tube {src + 1} to tube {dst + 1}")
        lines.append(format_direction(len(step.before), step.move))
        lines.append(format_state(step.before, color_output=color_output))
    return "\n".join(lines)
