"""CLI runner for the water sort solver.

Usage examples:
- Solve a puzzle file: ``python -m watersort.runner --mode solve --puzzle level.txt``
- Enter a puzzle by hand: ``python -m watersort.runner --mode enter --palette colors.json``
- Play with hints: ``python -m watersort.runner --mode play --puzzle level.txt``
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from colorama import just_fix_windows_console
from tqdm import tqdm

from .entry import InteractiveBuilder
from .game_controller import PuzzleController
from .logging_utils import LOG_LEVELS, get_level_from_string, setup_logger
from .palette import load_palette, save_palette
from .playback import narrate, replay_moves
from .puzzle_format import PuzzleFile, dump_puzzle, parse_puzzle
from .render import format_direction, format_state
from .solver import SolveOutcome, SolveResult, SolverConfig, preset_solver_config, solve
from .types import PourError, PuzzleState

logger = logging.getLogger(__name__)


def build_config(preset: str, alpha: Optional[float], max_expansions: Optional[int]) -> SolverConfig:
    """Start from a named preset and apply explicit overrides."""

    cfg = preset_solver_config(preset)
    if alpha is None and max_expansions is None:
        return cfg
    return SolverConfig(
        alpha=cfg.alpha if alpha is None else alpha,
        max_expansions=cfg.max_expansions if max_expansions is None else max_expansions,
        preset="custom",
    )


def load_puzzle(path: str, palette_path: Optional[str] = None) -> PuzzleFile:
    palette = load_palette(palette_path) if palette_path else None
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return parse_puzzle(text, palette=palette)


def run_search(state: PuzzleState, cfg: SolverConfig, show_progress: bool) -> SolveResult:
    """Solve with an optional progress bar sized by discovered states."""

    if not show_progress:
        return solve(state, config=cfg)

    with tqdm(total=1, unit="state", desc="Solving") as bar:

        def _progress(expanded: int, discovered: int) -> None:
            bar.total = discovered
            bar.update(1)

        return solve(state, config=cfg, progress=_progress)


def report_result(state: PuzzleState, result: SolveResult, color_output: bool, out: TextIO) -> int:
    """Print the outcome and the narrated solution; return the process exit code."""

    if result.outcome is SolveOutcome.ALREADY_SOLVED:
        print("Puzzle is already solved.", file=out)
        return 0
    if result.outcome is SolveOutcome.NO_SOLUTION:
        reason = "search budget exhausted" if result.stats.budget_exhausted else "no moves left to explore"
        print(f"No solution found ({reason} after {result.stats.expanded} states).", file=out)
        return 1

    print(narrate(state, result.moves, color_output=color_output), file=out)
    final = replay_moves(state, result.moves)
    print("Solved:", file=out)
    print(format_state(final, color_output=color_output), file=out)
    print(f"Num moves: {len(result.moves)}", file=out)
    return 0


def play_session(
    controller: PuzzleController,
    stdin: TextIO,
    stdout: TextIO,
    color_output: bool = True,
) -> int:
    """Read moves and commands line by line until the puzzle is won or input ends."""

    def _show() -> None:
        print(format_state(controller.state, color_output=color_output), file=stdout)

    print("Enter moves as 'from to' (1-based), or hint, undo, solve, quit.", file=stdout)
    _show()
    for raw_line in stdin:
        command = raw_line.strip().lower()
        if not command:
            continue
        if command in {"quit", "exit", "q"}:
            return 0
        if command == "hint":
            if controller.is_won():
                print("Puzzle is already solved.", file=stdout)
                continue
            move = controller.hint()
            if move is None:
                print("No solution found from here.", file=stdout)
            else:
                print(f"Hint: pour from tube {move[0] + 1} to tube {move[1] + 1}", file=stdout)
                print(format_direction(len(controller.state), move), file=stdout)
            continue
        if command == "undo":
            try:
                controller.undo()
            except ValueError as exc:
                print(f"Invalid move: {exc}", file=stdout)
                continue
            _show()
            continue
        if command == "solve":
            result = controller.solve()
            return report_result(controller.state, result, color_output, stdout)
        try:
            controller.apply_text_move(command)
        except PourError as exc:
            print(f"Invalid move ({exc.kind}): {exc}", file=stdout)
            continue
        except ValueError as exc:
            print(f"Invalid move: {exc}", file=stdout)
            continue
        _show()
        if controller.is_won():
            print(f"Solved in {len(controller.history)} moves!", file=stdout)
            return 0
    return 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Water sort puzzle solver")
    parser.add_argument("--mode", choices=["solve", "enter", "play"], default="solve")
    parser.add_argument("--puzzle", type=str, default=None, help="Path to a puzzle text file")
    parser.add_argument("--palette", type=str, default=None, help="Path to a JSON color palette")
    parser.add_argument("--save-palette", type=str, default=None, help="Write the entered palette here")
    parser.add_argument("--save-puzzle", type=str, default=None, help="Write the entered puzzle here")
    parser.add_argument("--preset", choices=["fast", "default", "thorough"], default="default")
    parser.add_argument("--alpha", type=float, default=None, help="Weight of entropy against moves taken")
    parser.add_argument("--max-expansions", type=int, default=None, help="Cap on expanded states")
    parser.add_argument("--no-color", action="store_true", help="Print color names instead of color blocks")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar while searching")
    parser.add_argument("--log-level", choices=list(LOG_LEVELS), default="warning")
    parser.add_argument("--log-file", type=str, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logger("watersort", level=get_level_from_string(args.log_level), log_file=args.log_file)
    just_fix_windows_console()
    color_output = not args.no_color

    try:
        cfg = build_config(args.preset, args.alpha, args.max_expansions)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1)
    logger.debug("Solver config: %s", cfg)

    if args.mode in {"solve", "play"} and not args.puzzle:
        print(f"--puzzle is required in {args.mode} mode")
        raise SystemExit(1)

    try:
        if args.mode == "enter":
            palette = load_palette(args.palette) if args.palette else None
            colors, state = InteractiveBuilder().run(palette=palette)
            if args.save_palette:
                save_palette(args.save_palette, colors)
            if args.save_puzzle:
                with open(args.save_puzzle, "w", encoding="utf-8") as f:
                    f.write(dump_puzzle(PuzzleFile(comments=[], palette=colors, state=state)))
        else:
            state = load_puzzle(args.puzzle, args.palette).state
    except (OSError, ValueError, EOFError) as exc:
        print(f"Invalid input: {exc}")
        raise SystemExit(1)

    print(format_state(state, color_output=color_output))
    print()

    if args.mode == "play":
        code = play_session(PuzzleController(state, config=cfg), sys.stdin, sys.stdout, color_output)
        raise SystemExit(code)

    result = run_search(state, cfg, show_progress=args.progress)
    code = report_result(state, result, color_output, sys.stdout)
    if code:
        raise SystemExit(code)


if __name__ == "__main__":
    main()
