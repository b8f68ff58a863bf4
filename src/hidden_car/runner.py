"""CLI runner for self-play games.

Usage examples:
- Single game: ``python -m hidden_car.runner --seed 42 --verbose``
- Several games on the simple rules: ``python -m hidden_car.runner --preset classic --games 20``
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from .agents import RandomEvaderPolicy, RandomSearcherAgent
from .board import Board
from .config import COMPUTER, GameConfig, preset_config
from .game_controller import GameController
from .i18n import t
from .notation import COLUMNS
from .types import CellKind, EndReason, GameSnapshot, Role


@dataclass
class GameSummary:
    winner: Role
    reason: EndReason
    rounds: int
    trail_length: int
    discovered: int


def format_board(snapshot: GameSnapshot, board: Board, reveal: bool = False) -> str:
    """Render the grid as text.

    Searcher units show as ``H1``..``H3`` and discovered trail buildings show
    their round number. With ``reveal`` the evader (``EV``) and its hidden
    trail (``t<round>``) are drawn too.
    """

    trail = {entry.position: entry.round for entry in snapshot.trail}
    discovered = snapshot.discovered_positions
    units = {pos: idx for idx, pos in enumerate(snapshot.searchers) if pos is not None}
    lines: List[str] = ["    " + " ".join(f"{COLUMNS[x]:^3}" for x in range(board.size))]
    for y in range(board.size):
        cells: List[str] = []
        for x in range(board.size):
            pos = (x, y)
            kind = board.classify(pos)
            if pos in units:
                cells.append(f"H{units[pos] + 1} ")
            elif reveal and pos == snapshot.evader:
                cells.append("EV ")
            elif pos in discovered:
                cells.append(f"{trail[pos]:>2} ")
            elif reveal and pos in trail:
                cells.append(f"t{trail[pos]:<2}")
            elif kind is CellKind.BUILDING:
                cells.append("## ")
            elif kind is CellKind.INTERSECTION:
                cells.append(" + ")
            else:
                cells.append(" . ")
        lines.append(f"{y + 1:>3} " + " ".join(cells))
    return "\n".join(lines)


def play_game(config: GameConfig, show_board: bool = False, search_bias: float = 0.5) -> GameSummary:
    """Play one computer-vs-computer game and summarize the result."""

    seed = config.seed
    controller = GameController(
        evader_policy=RandomEvaderPolicy(seed=seed),
        searcher_agent=RandomSearcherAgent(
            seed=None if seed is None else seed + 1, search_bias=search_bias
        ),
    )
    controller.new_game(config.with_overrides(evader_controller=COMPUTER))
    if show_board:
        last_round = 0

        def _show(event) -> None:
            nonlocal last_round
            snapshot = getattr(event, "snapshot", None)
            if snapshot is not None and snapshot.round != last_round:
                last_round = snapshot.round
                print(f"--- round {snapshot.round} ---")
                print(format_board(snapshot, controller.engine.board, reveal=True))
                print()

        controller.engine.subscribe(_show)

    winner = controller.play_out()
    snapshot = controller.state
    if show_board:
        print(format_board(snapshot, controller.engine.board, reveal=True))
    return GameSummary(
        winner=winner,
        reason=snapshot.end_reason,
        rounds=min(snapshot.round, config.round_limit),
        trail_length=len(snapshot.trail),
        discovered=len(snapshot.discovered),
    )


def play_series(config: GameConfig, games: int, verbose: bool, search_bias: float = 0.5) -> Dict[Role, int]:
    base_rng = random.Random(config.seed)
    wins = {Role.EVADER: 0, Role.SEARCHERS: 0}
    for game_index in range(1, games + 1):
        game_seed = base_rng.randint(0, 2**31 - 1)
        summary = play_game(config.with_overrides(seed=game_seed), show_board=verbose, search_bias=search_bias)
        wins[summary.winner] += 1
        print(
            f"Game {game_index}: {t('winner_' + summary.winner.value, config.lang)} "
            f"({summary.reason.value}, round {summary.rounds}, "
            f"trail {summary.trail_length}, discovered {summary.discovered})"
        )
    return wins


def build_config(args: argparse.Namespace) -> GameConfig:
    base = preset_config(args.preset) if args.preset else GameConfig()
    overrides = {"lang": args.lang, "seed": args.seed}
    if args.first_mover is not None:
        overrides["first_mover"] = Role(args.first_mover)
    if args.stride is not None:
        overrides["searcher_stride"] = args.stride
    if args.size is not None:
        overrides["grid_size"] = args.size
    if args.rounds is not None:
        overrides["round_limit"] = args.rounds
    return base.with_overrides(**overrides)


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--preset", choices=["classic", "hop", "standard"], default=None)
    parser.add_argument("--first-mover", choices=[r.value for r in Role], default=None)
    parser.add_argument("--stride", type=int, choices=[1, 2], default=None, help="Searcher stride rule")
    parser.add_argument("--size", type=int, default=None, help="Odd grid side length")
    parser.add_argument("--rounds", type=int, default=None, help="Round limit")
    parser.add_argument("--lang", choices=["en", "ja"], default="en")
    parser.add_argument("--seed", type=int, default=None)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hidden car self-play runner")
    add_config_arguments(parser)
    parser.add_argument("--games", type=int, default=1)
    parser.add_argument("--search-bias", type=float, default=0.5, help="Chance a searcher inspects instead of moving")
    parser.add_argument("--verbose", action="store_true", help="Print the board every round and debug logs")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = build_config(args)
        wins = play_series(config, args.games, verbose=args.verbose, search_bias=args.search_bias)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(1)
    print(f"Evader {wins[Role.EVADER]} - Searchers {wins[Role.SEARCHERS]}")


if __name__ == "__main__":
    main()
