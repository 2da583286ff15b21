"""Water sort puzzle solver package."""

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
from .engine import (
    apply_move,
    apply_move_inplace,
    available_moves,
    check_pour,
    check_win,
    is_pour_valid,
    new_puzzle,
    pour,
    total_entropy,
    tube_entropy,
)
from .solver import SolveOutcome, SolveResult, SolverConfig, preset_solver_config, solve, solve_moves
from .playback import PlaybackError, PlaybackStep, iter_playback, replay_moves

__all__ = [
    "CantMoveError",
    "Color",
    "DiffColorError",
    "InvalidMoveError",
    "MaxCapacityError",
    "Move",
    "NoContentError",
    "PlaybackError",
    "PlaybackStep",
    "PourError",
    "PuzzleState",
    "SolveOutcome",
    "SolveResult",
    "SolverConfig",
    "Tube",
    "apply_move",
    "apply_move_inplace",
    "available_moves",
    "check_pour",
    "check_win",
    "is_pour_valid",
    "iter_playback",
    "new_puzzle",
    "pour",
    "preset_solver_config",
    "replay_moves",
    "solve",
    "solve_moves",
    "total_entropy",
    "tube_entropy",
]
