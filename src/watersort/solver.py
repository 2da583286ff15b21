"""Best-first search over puzzle states.

The frontier is a min-heap keyed by ``(score, move_count, insertion_order)`` where
``score = alpha * total_entropy + (1 - alpha) * move_count``. Only expanded states are
deduplicated, so the same state may sit in the frontier more than once. The search
stops after ``max_expansions`` expansions; it is greedy and does not guarantee the
shortest solution.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Set, Tuple

from . import engine
from .types import Move, PourError, PuzzleState

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass
class SolverConfig:
    alpha: float = 0.65
    max_expansions: int = 5000
    preset: str = "custom"

    def __post_init__(self) -> None:
        if not 0.0 <= self.alpha <= 1.0:
            raise ValueError(f"alpha must be within [0, 1], got {self.alpha}")
        if self.max_expansions < 0:
            raise ValueError("max_expansions must not be negative")


def preset_solver_config(name: str) -> SolverConfig:
    preset = name.lower()
    if preset == "fast":
        return SolverConfig(alpha=0.65, max_expansions=1000, preset="fast")
    if preset == "default":
        return SolverConfig(alpha=0.65, max_expansions=5000, preset="default")
    if preset == "thorough":
        return SolverConfig(alpha=0.65, max_expansions=20000, preset="thorough")
    raise ValueError(f"Unknown solver preset '{name}'")


class SolveOutcome(str, Enum):
    SOLVED = "solved"
    ALREADY_SOLVED = "already_solved"
    NO_SOLUTION = "no_solution"


@dataclass
class SolveStats:
    """Counters from a single search."""

    expanded: int = 0
    discovered: int = 1
    skipped_visited: int = 0
    budget_exhausted: bool = False
    elapsed_ms: float = 0.0


@dataclass
class SolveResult:
    outcome: SolveOutcome
    moves: List[Move] = field(default_factory=list)
    stats: SolveStats = field(default_factory=SolveStats)

    @property
    def solved(self) -> bool:
        return self.outcome is not SolveOutcome.NO_SOLUTION


def score(state: PuzzleState, moves: List[Move], alpha: float) -> float:
    """Priority of a frontier entry; lower is expanded first."""

    return alpha * engine.total_entropy(state) + (1.0 - alpha) * len(moves)


def priority(state: PuzzleState, moves: List[Move], alpha: float) -> Tuple[float, int]:
    """Heap ordering key: score first, then fewer moves on equal score."""

    return score(state, moves, alpha), len(moves)


def solve(
    state: PuzzleState,
    config: Optional[SolverConfig] = None,
    progress: Optional[ProgressCallback] = None,
) -> SolveResult:
    """Search for a move sequence that wins the puzzle.

    ``state`` is not modified. ``progress`` receives ``(expanded, discovered)`` after
    every expansion.
    """

    cfg = config or SolverConfig()
    stats = SolveStats()
    start_time = time.monotonic()
    counter = itertools.count()

    root = state.clone()
    frontier: List[Tuple[float, int, int, List[Move], PuzzleState]] = []
    heapq.heappush(frontier, (*priority(root, [], cfg.alpha), next(counter), [], root))
    visited: Set[Tuple] = set()

    logger.debug(
        "Starting search: tubes=%d alpha=%.3f max_expansions=%d",
        len(root),
        cfg.alpha,
        cfg.max_expansions,
    )

    def _finish(outcome: SolveOutcome, moves: List[Move]) -> SolveResult:
        stats.elapsed_ms = (time.monotonic() - start_time) * 1000.0
        logger.info(
            "Search finished: outcome=%s moves=%d expanded=%d discovered=%d elapsed_ms=%.1f",
            outcome.value,
            len(moves),
            stats.expanded,
            stats.discovered,
            stats.elapsed_ms,
        )
        return SolveResult(outcome=outcome, moves=moves, stats=stats)

    while frontier and stats.expanded <= cfg.max_expansions:
        _, _, _, moves, current = heapq.heappop(frontier)
        visited.add(current.key())

        if engine.check_win(current):
            outcome = SolveOutcome.SOLVED if moves else SolveOutcome.ALREADY_SOLVED
            return _finish(outcome, list(moves))

        for move in engine.available_moves(current):
            try:
                child = engine.apply_move(current, move)
            except PourError:
                continue
            if child.key() in visited:
                stats.skipped_visited += 1
                continue
            child_moves = moves + [move]
            heapq.heappush(
                frontier,
                (*priority(child, child_moves, cfg.alpha), next(counter), child_moves, child),
            )
            stats.discovered += 1

        stats.expanded += 1
        if progress is not None:
            progress(stats.expanded, stats.discovered)

    stats.budget_exhausted = bool(frontier)
    if stats.budget_exhausted:
        logger.warning("Search budget of %d expansions exhausted", cfg.max_expansions)
    return _finish(SolveOutcome.NO_SOLUTION, [])


def solve_moves(state: PuzzleState, config: Optional[SolverConfig] = None) -> List[Move]:
    """Return only the move list; empty both when already solved and when unsolved."""

    return solve(state, config=config).moves
