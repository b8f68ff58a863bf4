"""Stdio text frontend.

This adapter consumes a line-oriented protocol over stdin, forwards each
command to a :class:`GameController` and prints the resulting events:

    START [preset=standard] [evader=human|computer] [first=evader|searchers]
          [stride=1|2] [size=9] [rounds=11] [order=strict|free] [lang=en|ja] [seed=N]
    PLACE [unit] <square>    EVADER <square>    SELECT <unit>
    MOVE <square>            SEARCH <square>    BOARD    RESET

Output lines are ``LOG <category> <message>``, ``STATE ...``, ``END <winner>
<reason>`` and board drawings. Malformed lines end the session with
``ERROR <message>`` and exit code 1; rule violations, off-grid squares
included, are only logged.
When the evader is computer-controlled its reply is printed after
``reveal_delay_ms`` so a human can read the searchers' result first.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Dict, Iterable, List, Optional

from .config import GameConfig, preset_config
from .events import Event, GameEnded, LogEvent, StateChanged
from .game_controller import GameController
from .i18n import t
from .notation import from_square, parse_command_text
from .runner import format_board
from .types import Role

_START_KEYS = {"preset", "evader", "first", "stride", "size", "rounds", "order", "lang", "seed"}


class AdapterInputError(Exception):
    """Raised when the adapter receives invalid input."""


def parse_start_options(tokens: List[str], default: Optional[GameConfig] = None) -> GameConfig:
    options: Dict[str, str] = {}
    for token in tokens:
        if "=" not in token:
            raise AdapterInputError(f"START options must look like key=value, got '{token}'")
        key, value = token.split("=", 1)
        key = key.lower()
        if key not in _START_KEYS:
            raise AdapterInputError(f"Unknown START option '{key}'")
        options[key] = value.lower()

    try:
        base = preset_config(options["preset"]) if "preset" in options else (default or GameConfig())
        overrides = {}
        if "evader" in options:
            overrides["evader_controller"] = options["evader"]
        if "first" in options:
            overrides["first_mover"] = Role(options["first"])
        if "stride" in options:
            overrides["searcher_stride"] = int(options["stride"])
        if "size" in options:
            overrides["grid_size"] = int(options["size"])
        if "rounds" in options:
            overrides["round_limit"] = int(options["rounds"])
        if "order" in options:
            overrides["placement_order"] = options["order"]
        if "lang" in options:
            overrides["lang"] = options["lang"]
        if "seed" in options:
            overrides["seed"] = int(options["seed"])
        return base.with_overrides(**overrides)
    except ValueError as exc:
        raise AdapterInputError(str(exc)) from exc


class StdioAdapter:
    """Line-oriented adapter that plays a game via stdin/stdout."""

    def __init__(
        self,
        *,
        config: Optional[GameConfig] = None,
        stdin=None,
        stdout=None,
        stderr=None,
        quiet: bool = False,
        reveal: bool = False,
        show_board: bool = False,
        reveal_delay_ms: int = 0,
    ) -> None:
        self.default_config = config or GameConfig()
        self.controller = GameController(self.default_config, auto_evader=False)
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.quiet = quiet
        self.reveal = reveal
        self.show_board = show_board
        self.reveal_delay_ms = reveal_delay_ms

    def _log(self, message: str, *, force: bool = False) -> None:
        if self.quiet and not force:
            return
        print(message, file=self.stderr)
        self.stderr.flush()

    def _print(self, line: str) -> None:
        print(line, file=self.stdout)
        self.stdout.flush()

    def _print_board(self) -> None:
        self._print(format_board(self.controller.state, self.controller.engine.board, reveal=self.reveal))

    def _emit(self, events: Iterable[Event]) -> None:
        lang = self.controller.config.lang
        for event in events:
            if isinstance(event, LogEvent):
                self._print(f"LOG {event.category.value} {event.message}")
            elif isinstance(event, GameEnded):
                self._print(f"END {event.winner.value} {event.reason.value}")
                self._print(t(f"winner_{event.winner.value}", lang))
            elif isinstance(event, StateChanged):
                snap = event.snapshot
                role = snap.active_role.value if snap.active_role else "-"
                self._print(
                    f"STATE status={snap.status.value} round={snap.round} role={role} "
                    f"selected={snap.selected + 1} discovered={len(snap.discovered)}"
                )
                if self.show_board:
                    self._print_board()

    def _square(self, raw: Optional[str]):
        try:
            return from_square(raw or "")
        except ValueError as exc:
            raise AdapterInputError(str(exc)) from exc

    def _handle_command(self, line: str) -> List[Event]:
        try:
            parsed = parse_command_text(line)
        except ValueError as exc:
            raise AdapterInputError(str(exc)) from exc
        if parsed.verb == "SELECT":
            return self.controller.select_searcher(parsed.unit)
        pos = self._square(parsed.square)
        if parsed.verb == "PLACE":
            return self.controller.place_searcher(pos, parsed.unit)
        if parsed.verb == "EVADER":
            try:
                return self.controller.evader_action(pos)
            except ValueError as exc:
                raise AdapterInputError(str(exc)) from exc
        if parsed.verb == "MOVE":
            return self.controller.move_searcher(pos)
        return self.controller.search_building(pos)

    def _run_computer_evader(self) -> None:
        if not self.controller.evader_due():
            return
        if self.reveal_delay_ms > 0:
            time.sleep(self.reveal_delay_ms / 1000)
        events = self.controller.step_evader()
        self._log(f"computer evader acted: round={self.controller.state.round}")
        self._emit(events)

    def _emit_error_and_exit(self, message: str) -> int:
        self._log(f"ERROR {message}", force=True)
        self._print(f"ERROR {message}")
        return 1

    def run(self) -> int:
        try:
            for raw_line in self.stdin:
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue
                tokens = line.split()
                cmd = tokens[0].upper()
                if cmd == "START":
                    config = parse_start_options(tokens[1:], self.default_config)
                    self._emit(self.controller.new_game(config))
                elif cmd == "RESET":
                    self._emit(self.controller.reset())
                elif cmd == "BOARD":
                    self._print_board()
                    continue
                else:
                    self._emit(self._handle_command(line))
                self._run_computer_evader()
            return 0
        except AdapterInputError as exc:
            return self._emit_error_and_exit(str(exc))


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Stdio frontend for the hidden car game")
    parser.add_argument("--preset", choices=["classic", "hop", "standard"], default="standard")
    parser.add_argument("--lang", choices=["en", "ja"], default="en")
    parser.add_argument("--reveal", action="store_true", help="Draw the evader and its hidden trail")
    parser.add_argument("--show-board", action="store_true", help="Draw the board after every accepted command")
    parser.add_argument(
        "--reveal-delay-ms",
        type=int,
        default=0,
        help="Pause before printing the computer evader's move",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress stderr diagnostics")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    adapter = StdioAdapter(
        config=preset_config(args.preset).with_overrides(lang=args.lang),
        quiet=args.quiet,
        reveal=args.reveal,
        show_board=args.show_board,
        reveal_delay_ms=args.reveal_delay_ms,
    )
    sys.exit(adapter.run())


if __name__ == "__main__":
    main()
