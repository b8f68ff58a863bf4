"""Game controller for UI-driven or scripted play.

This module keeps frontend concerns separate from the turn engine: it
forwards player commands, runs the computer evader exactly once per evader
turn, and records accepted actions.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .agents import EvaderChoice, EvaderPolicy, EvaderSignal, RandomEvaderPolicy, RandomSearcherAgent
from .config import GameConfig
from .engine import TurnEngine
from .events import Event, StateChanged
from .types import CellKind, Coord, GameSnapshot, Role, Status

logger = logging.getLogger(__name__)

HistoryEntry = Tuple[int, str, Optional[int], Optional[Coord]]


def accepted(events: List[Event]) -> bool:
    """Whether a command's events show it was applied."""

    return any(isinstance(event, StateChanged) for event in events)


class GameController:
    """Manage a single game, including the computer evader and the history."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        evader_policy: Optional[EvaderPolicy] = None,
        searcher_agent: Optional[RandomSearcherAgent] = None,
        auto_evader: bool = True,
    ) -> None:
        self.engine = TurnEngine(config)
        self.auto_evader = auto_evader
        self.evader_policy = evader_policy
        self._default_policy = False
        self.searcher_agent = searcher_agent
        self.history: List[HistoryEntry] = []

    @property
    def config(self) -> GameConfig:
        return self.engine.config

    @property
    def state(self) -> GameSnapshot:
        return self.engine.state

    def new_game(self, config: Optional[GameConfig] = None) -> List[Event]:
        """Start a new game; a computer evader that opens the game moves at once."""

        events = self.engine.start_game(config)
        if self.config.computer_evader and (self.evader_policy is None or self._default_policy):
            self.evader_policy = RandomEvaderPolicy(seed=self.config.seed)
            self._default_policy = True
        self.history = []
        return events + self._auto_step()

    def reset(self) -> List[Event]:
        self.history = []
        return self.engine.reset()

    def _run(self, command, kind: str, unit: Optional[int], pos: Coord) -> List[Event]:
        round_no = self.engine.state.round
        events = command(pos)
        if accepted(events):
            self.history.append((round_no, kind, unit, pos))
        return events

    def _require_human_evader(self) -> None:
        if self.config.computer_evader:
            raise ValueError("evader is computer-controlled")

    def place_searcher(self, position: Coord, unit_id: Optional[int] = None) -> List[Event]:
        events = self._run(lambda pos: self.engine.place_searcher(pos, unit_id), "place", unit_id, position)
        if unit_id is None and accepted(events):
            placed = self.engine.state.searchers.index(position)
            self.history[-1] = (self.history[-1][0], "place", placed, position)
        return events + self._auto_step()

    def evader_action(self, position: Coord) -> List[Event]:
        self._require_human_evader()
        kind = "evader_place" if self.engine.state.evader is None else "evader_move"
        return self._run(self.engine.evader_action, kind, None, position)

    def select_searcher(self, unit_id: int) -> List[Event]:
        return self.engine.select_searcher(unit_id)

    def move_searcher(self, position: Coord) -> List[Event]:
        unit = self.engine.state.selected
        events = self._run(self.engine.move_searcher, "move", unit, position)
        return events + self._auto_step()

    def search_building(self, position: Coord) -> List[Event]:
        unit = self.engine.state.selected
        events = self._run(self.engine.search_building, "search", unit, position)
        return events + self._auto_step()

    def _auto_step(self) -> List[Event]:
        return self.step_evader() if self.auto_evader else []

    def evader_due(self) -> bool:
        """Whether the computer evader is waiting to act."""

        return self.config.computer_evader and self.engine.status is Status.EVADER_TURN

    def _is_legal_choice(self, choice: EvaderChoice) -> bool:
        if choice is EvaderSignal.ENCIRCLED:
            return not self.engine.legal_evader_moves()
        if self.engine.state.evader is None:
            board = self.engine.board
            return board.in_range(choice) and board.classify(choice) is CellKind.BUILDING
        return choice in self.engine.legal_evader_moves()

    def compute_evader_move(self) -> EvaderChoice:
        if self.evader_policy is None:
            raise ValueError("No evader policy configured")
        fallback = RandomEvaderPolicy(seed=self.config.seed)
        try:
            choice = self.evader_policy.choose_move(self.engine.state, self.engine.board)
        except Exception:
            logger.exception("Evader policy failed; falling back to random policy")
            choice = fallback.choose_move(self.engine.state, self.engine.board)
        if not self._is_legal_choice(choice):
            logger.warning(f"Evader policy chose illegal move {choice}; falling back to random policy")
            choice = fallback.choose_move(self.engine.state, self.engine.board)
        return choice

    def step_evader(self) -> List[Event]:
        """Run the computer evader's single action for this turn, if it is due."""

        if not self.evader_due():
            return []
        choice = self.compute_evader_move()
        if choice is EvaderSignal.ENCIRCLED:
            return self.engine.declare_encircled()
        kind = "evader_place" if self.engine.state.evader is None else "evader_move"
        return self._run(self.engine.evader_action, kind, None, choice)

    def step_searchers(self) -> List[Event]:
        """Let the searcher agent take one unit action."""

        if self.searcher_agent is None:
            raise ValueError("No searcher agent configured")
        action = self.searcher_agent.choose_action(self.engine)
        if action.kind == "place":
            return self.place_searcher(action.position, action.unit_id)
        events = self.select_searcher(action.unit_id)
        if action.kind == "move":
            return events + self.move_searcher(action.position)
        return events + self.search_building(action.position)

    def play_out(self, max_commands: int = 10_000) -> Optional[Role]:
        """Drive both sides until the game ends; returns the winner."""

        for _ in range(max_commands):
            status = self.engine.status
            if status is Status.GAME_OVER:
                return self.engine.state.winner
            if status is Status.EVADER_TURN:
                if not self.config.computer_evader:
                    raise ValueError("play_out needs a computer-controlled evader")
                self.step_evader()
            elif status in (Status.SETTING_UP, Status.SEARCHERS_TURN):
                self.step_searchers()
            else:
                raise ValueError("game has not been started")
        raise RuntimeError("game did not finish")
