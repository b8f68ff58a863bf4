"""Turn engine for the hidden car game.

Rules:
- Setup: searcher units 0, 1, 2 are placed on distinct intersections. The
  completed placement is the searchers' opening turn; the evader acts next.
  Without a setup phase the units start on default intersections and the
  evader opens the game.
- Evader turn: exactly one placement or hop onto an unvisited building two
  cells away. Every evader action leaves a trail entry tagged with the round.
- Searchers turn: each of the three units moves or searches once. Searching
  the evader's building wins immediately; searching an old trail building
  reveals it. After the third action the round advances.
- The evader wins once the round counter exceeds the round limit and loses
  when it starts a turn with no legal hop.

The engine is the only writer of :class:`GameState`. Every command returns
the events it produced and also delivers them to subscribed listeners.
Rejected commands change nothing and produce a single error ``LogEvent``.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from . import validator
from .board import Board
from .config import FREE, GameConfig
from .events import Event, GameEnded, Listener, LogCategory, LogEvent, StateChanged
from .i18n import tf
from .notation import to_square
from .types import (
    SEARCHER_COUNT,
    Coord,
    EndReason,
    GameSnapshot,
    GameState,
    Phase,
    Reason,
    Role,
    Status,
)
from .validator import Verdict

logger = logging.getLogger(__name__)

_END_MESSAGE_KEYS = {
    EndReason.EVADER_FOUND: "end_evader_found",
    EndReason.ROUND_LIMIT_EXCEEDED: "end_round_limit",
    EndReason.EVADER_ENCIRCLED: "end_encircled",
}


class TurnEngine:
    """Phase and turn state machine owning a single game."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.board = Board(self.config.grid_size)
        self._state = GameState()
        self._listeners: List[Listener] = []
        self._pending: List[Event] = []

    @classmethod
    def from_state(cls, state: GameState, config: Optional[GameConfig] = None) -> "TurnEngine":
        """Resume from a prepared position. The engine takes ownership of ``state``."""

        engine = cls(config)
        engine._state = state
        return engine

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def state(self) -> GameSnapshot:
        return self._state.snapshot()

    @property
    def status(self) -> Status:
        return self._state.status

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def legal_evader_moves(self) -> List[Coord]:
        return validator.evader_moves(self.board, self._state)

    def legal_searcher_moves(self, unit_id: Optional[int] = None) -> List[Coord]:
        unit = self._state.selected if unit_id is None else unit_id
        if self._state.status is not Status.SEARCHERS_TURN:
            return []
        return validator.searcher_moves(self.board, self.config, self._state, unit)

    def searchable_buildings(self, unit_id: Optional[int] = None) -> List[Coord]:
        unit = self._state.selected if unit_id is None else unit_id
        return validator.searchable_buildings(self.board, self._state, unit)

    # ------------------------------------------------------------------
    # Event plumbing
    # ------------------------------------------------------------------
    def _emit(self, event: Event) -> None:
        self._pending.append(event)

    def _log(self, category: LogCategory, key: str, **fields) -> None:
        self._emit(LogEvent(message=tf(key, self.config.lang, **fields), category=category))

    def _flush(self) -> List[Event]:
        events, self._pending = self._pending, []
        for event in events:
            for listener in list(self._listeners):
                listener(event)
        return events

    def _commit(self) -> List[Event]:
        self._emit(StateChanged(self._state.snapshot()))
        return self._flush()

    def _reject(self, command: str, reason: Reason) -> List[Event]:
        logger.debug(f"Rejected {command}: {reason.value}")
        detail = tf(f"reason_{reason.value}", self.config.lang)
        self._emit(
            LogEvent(
                message=tf("rejected", self.config.lang, detail=detail),
                category=LogCategory.ERROR,
                reason=reason,
            )
        )
        return self._flush()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start_game(self, config: Optional[GameConfig] = None) -> List[Event]:
        """Reset every entity and open a new game."""

        if config is not None:
            self.config = config
            self.board = Board(config.grid_size)
        self._state = GameState()
        state = self._state
        self._log(LogCategory.SUCCESS, "game_started")
        if self.config.has_setup_phase:
            state.status = Status.SETTING_UP
            state.phase = Phase.SETUP
            state.active_role = Role.SEARCHERS
            self._log(LogCategory.SEARCHERS, "setup_turn", unit=1)
        else:
            for unit, pos in zip(state.searchers, self.config.default_searcher_positions()):
                unit.position = pos
            state.phase = Phase.PLAY
            self._begin_evader_turn(announce_round=False)
        logger.info(
            f"Game started: first={self.config.first_mover.value} "
            f"stride={self.config.searcher_stride} evader={self.config.evader_controller}"
        )
        return self._commit()

    def reset(self) -> List[Event]:
        """Return to the state before ``start_game``."""

        self._state = GameState()
        self._log(LogCategory.INFO, "game_reset")
        return self._commit()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def place_searcher(self, position: Coord, unit_id: Optional[int] = None) -> List[Event]:
        state = self._state
        if unit_id is None:
            if self.config.placement_order == FREE and not state.searchers[state.selected].placed:
                unit_id = state.selected
            else:
                unit_id = state.next_unplaced()
        if unit_id is None:
            return self._reject("place_searcher", Reason.WRONG_PHASE_OR_ROLE)
        verdict = validator.can_place_searcher(self.board, self.config, state, unit_id, position)
        if not verdict:
            return self._reject("place_searcher", verdict.reason)

        square = to_square(position)
        state.searchers[unit_id].position = position
        logger.debug(f"Searcher {unit_id} placed at {position}")
        self._log(LogCategory.SEARCHERS, "searcher_placed", unit=unit_id + 1, square=square)
        remaining = state.next_unplaced()
        if remaining is None:
            state.phase = Phase.PLAY
            state.selected = 0
            self._log(LogCategory.SEARCHERS, "setup_done")
            self._begin_evader_turn(announce_round=False)
        else:
            state.selected = remaining
            self._log(LogCategory.SEARCHERS, "setup_turn", unit=remaining + 1)
        return self._commit()

    # ------------------------------------------------------------------
    # Evader
    # ------------------------------------------------------------------
    def place_evader(self, position: Coord) -> List[Event]:
        verdict = validator.can_place_evader(self.board, self._state, position)
        if not verdict:
            return self._reject("place_evader", verdict.reason)
        self._apply_evader(position, "evader_placed")
        return self._commit()

    def move_evader(self, position: Coord) -> List[Event]:
        verdict = validator.can_move_evader(self.board, self._state, position)
        if not verdict:
            return self._reject("move_evader", verdict.reason)
        self._apply_evader(position, "evader_moved")
        return self._commit()

    def evader_action(self, position: Coord) -> List[Event]:
        """Place the evader if it is not on the board yet, otherwise move it."""

        if self._state.evader is None:
            return self.place_evader(position)
        return self.move_evader(position)

    def declare_encircled(self) -> List[Event]:
        """End the game when the evader has no legal hop left."""

        state = self._state
        if state.status is not Status.EVADER_TURN or state.evader is None or self.legal_evader_moves():
            return self._reject("declare_encircled", Reason.WRONG_PHASE_OR_ROLE)
        self._end_game(Role.SEARCHERS, EndReason.EVADER_ENCIRCLED)
        return self._commit()

    def _apply_evader(self, position: Coord, message_key: str) -> None:
        state = self._state
        state.evader = position
        entry = state.add_trail(position)
        logger.debug(f"Evader at {position} in round {entry.round}")
        self._log(LogCategory.EVADER, message_key, round=entry.round)
        self._begin_searchers_turn()

    def _begin_evader_turn(self, announce_round: bool = True) -> None:
        state = self._state
        state.status = Status.EVADER_TURN
        state.active_role = Role.EVADER
        if state.evader is not None and not self.legal_evader_moves():
            self._end_game(Role.SEARCHERS, EndReason.EVADER_ENCIRCLED)
            return
        if announce_round:
            self._log(LogCategory.INFO, "round_started", round=state.round)
        self._log(LogCategory.EVADER, "evader_turn")

    # ------------------------------------------------------------------
    # Searchers
    # ------------------------------------------------------------------
    def select_searcher(self, unit_id: int) -> List[Event]:
        """Focus the unit that ``move_searcher`` and ``search_building`` act on."""

        state = self._state
        if state.status in (Status.IDLE, Status.GAME_OVER):
            return self._reject("select_searcher", Reason.WRONG_PHASE_OR_ROLE)
        if not 0 <= unit_id < SEARCHER_COUNT:
            return self._reject("select_searcher", Reason.OUT_OF_RANGE)
        state.selected = unit_id
        self._log(LogCategory.SEARCHERS, "unit_selected", unit=unit_id + 1)
        return self._commit()

    def move_searcher(self, position: Coord) -> List[Event]:
        state = self._state
        unit_id = state.selected
        verdict = validator.can_move_searcher(self.board, self.config, state, unit_id, position)
        if not verdict:
            return self._reject("move_searcher", verdict.reason)
        square = to_square(position)
        state.searchers[unit_id].position = position
        logger.debug(f"Searcher {unit_id} moved to {position}")
        self._log(LogCategory.SEARCHERS, "unit_moved", unit=unit_id + 1, square=square)
        self._finish_unit_action(unit_id)
        return self._commit()

    def search_building(self, position: Coord) -> List[Event]:
        state = self._state
        unit_id = state.selected
        verdict: Verdict = validator.can_search(self.board, state, unit_id, position)
        if not verdict:
            return self._reject("search_building", verdict.reason)

        state.acted.add(unit_id)
        if position == state.evader:
            self._end_game(Role.SEARCHERS, EndReason.EVADER_FOUND)
            return self._commit()

        entry = state.trail_entry(position)
        if entry is None:
            self._log(LogCategory.INFO, "nothing_found")
        elif state.is_discovered(position):
            self._log(LogCategory.INFO, "trail_known", round=entry.round)
        else:
            state.discovered.append(position)
            self._log(LogCategory.SUCCESS, "trail_found", round=entry.round)
        self._finish_unit_action(unit_id)
        return self._commit()

    def _begin_searchers_turn(self) -> None:
        state = self._state
        state.status = Status.SEARCHERS_TURN
        state.active_role = Role.SEARCHERS
        state.acted.clear()
        self._log(LogCategory.SEARCHERS, "searchers_turn")

    def _finish_unit_action(self, unit_id: int) -> None:
        state = self._state
        state.acted.add(unit_id)
        if len(state.acted) < SEARCHER_COUNT:
            return
        state.round += 1
        state.acted.clear()
        if state.round > self.config.round_limit:
            self._end_game(Role.EVADER, EndReason.ROUND_LIMIT_EXCEEDED)
            return
        self._begin_evader_turn()

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------
    def _end_game(self, winner: Role, reason: EndReason) -> None:
        state = self._state
        state.status = Status.GAME_OVER
        state.active_role = None
        state.winner = winner
        state.end_reason = reason
        logger.info(f"Game over: {winner.value} win ({reason.value}) in round {state.round}")
        self._emit(GameEnded(winner=winner, reason=reason))
        message = tf(_END_MESSAGE_KEYS[reason], self.config.lang)
        self._log(LogCategory.SUCCESS, "game_over", message=message)
