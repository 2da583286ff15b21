"""Puzzle controller for interactive or scripted play.

This module keeps prompt and display concerns separate from core puzzle logic so move
sequencing, undo and hints can be tested without a terminal.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from . import engine
from .move_input import parse_move_text
from .solver import SolveOutcome, SolveResult, SolverConfig, solve
from .types import Move, PuzzleState


class PuzzleController:
    """Manage a single puzzle, including move history and undo."""

    def __init__(self, state: PuzzleState, config: Optional[SolverConfig] = None) -> None:
        self.initial_state = state.clone()
        self.config = config or SolverConfig()
        self.state: PuzzleState
        self.history: List[Tuple[Move, int]]
        self._snapshots: List[PuzzleState]
        self.reset()

    def reset(self) -> None:
        """Return to the starting position and clear the history."""

        self.state = self.initial_state.clone()
        self.history = []
        self._snapshots = []

    def legal_moves(self) -> List[Move]:
        return engine.available_moves(self.state)

    def is_won(self) -> bool:
        return engine.check_win(self.state)

    def apply_move(self, move: Move) -> int:
        """Pour and record the move; pour errors propagate to the caller unchanged."""

        snapshot = self.state.clone()
        moved = engine.apply_move_inplace(self.state, move)
        self._snapshots.append(snapshot)
        self.history.append((move, moved))
        return moved

    def apply_text_move(self, raw: str) -> Move:
        """Parse a 1-based move string and apply it to the current state."""

        move = parse_move_text(raw)
        self.apply_move(move)
        return move

    def undo(self) -> Move:
        if not self._snapshots:
            raise ValueError("nothing to undo")
        self.state = self._snapshots.pop()
        move, _ = self.history.pop()
        return move

    def solve(self) -> SolveResult:
        return solve(self.state, config=self.config)

    def hint(self) -> Optional[Move]:
        """First move of a solution from the current state.

        Returns ``None`` when the search finds nothing. A puzzle that is already won has
        no next move either, so callers check ``is_won()`` to tell the two apart.
        """

        result = self.solve()
        if result.outcome is not SolveOutcome.SOLVED:
            return None
        return result.moves[0]

    def moves(self) -> List[Move]:
        return [move for move, _ in self.history]
