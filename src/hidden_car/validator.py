"""Legality checks for every player command.

All functions are pure: they read the board, the configuration and the
current state and return a :class:`Verdict`. Checks run in a fixed order
(phase/role, per-unit bookkeeping, range, cell kind, distance, occupancy)
so a command that breaks several rules always reports the first one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, List, Optional

from .board import Board, is_diagonal_neighbour, orthogonal_stride
from .config import STRICT, GameConfig
from .types import CellKind, Coord, GameState, Phase, Reason, Status

EVADER_STRIDE = 2


@dataclass(frozen=True)
class Verdict:
    ok: bool
    reason: Optional[Reason] = None

    def __bool__(self) -> bool:
        return self.ok


ACCEPT = Verdict(True)


def reject(reason: Reason) -> Verdict:
    return Verdict(False, reason)


def _cell_kind(board: Board, pos: Coord) -> Optional[CellKind]:
    if not board.in_range(pos):
        return None
    return board.classify(pos)


def can_place_evader(board: Board, state: GameState, pos: Coord) -> Verdict:
    if state.status is not Status.EVADER_TURN or state.evader is not None:
        return reject(Reason.WRONG_PHASE_OR_ROLE)
    kind = _cell_kind(board, pos)
    if kind is None:
        return reject(Reason.OUT_OF_RANGE)
    if kind is not CellKind.BUILDING:
        return reject(Reason.WRONG_CELL_KIND)
    return ACCEPT


def check_evader_hop(board: Board, origin: Coord, visited: AbstractSet[Coord], pos: Coord) -> Verdict:
    """Whether the evader may hop from ``origin`` to ``pos`` given the visited buildings."""

    kind = _cell_kind(board, pos)
    if kind is None:
        return reject(Reason.OUT_OF_RANGE)
    if kind is not CellKind.BUILDING:
        return reject(Reason.WRONG_CELL_KIND)
    if orthogonal_stride(origin, pos) != EVADER_STRIDE:
        return reject(Reason.WRONG_STRIDE)
    if pos in visited:
        return reject(Reason.ALREADY_VISITED)
    return ACCEPT


def hop_targets(board: Board, origin: Coord, visited: AbstractSet[Coord]) -> List[Coord]:
    return [
        pos
        for pos in board.step_targets(origin, EVADER_STRIDE)
        if check_evader_hop(board, origin, visited, pos)
    ]


def can_move_evader(board: Board, state: GameState, pos: Coord) -> Verdict:
    if state.status is not Status.EVADER_TURN or state.evader is None:
        return reject(Reason.WRONG_PHASE_OR_ROLE)
    return check_evader_hop(board, state.evader, state.visited, pos)


def evader_moves(board: Board, state: GameState) -> List[Coord]:
    """Every building the evader could hop to, ignoring whose turn it is."""

    if state.evader is None:
        return []
    return hop_targets(board, state.evader, state.visited)


def can_place_searcher(
    board: Board, config: GameConfig, state: GameState, unit_id: int, pos: Coord
) -> Verdict:
    if state.status is not Status.SETTING_UP or state.phase is not Phase.SETUP:
        return reject(Reason.WRONG_PHASE_OR_ROLE)
    if not 0 <= unit_id < len(state.searchers):
        return reject(Reason.OUT_OF_RANGE)
    if state.searchers[unit_id].placed:
        return reject(Reason.UNIT_ALREADY_ACTED)
    if config.placement_order == STRICT and unit_id != state.next_unplaced():
        return reject(Reason.WRONG_PHASE_OR_ROLE)
    kind = _cell_kind(board, pos)
    if kind is None:
        return reject(Reason.OUT_OF_RANGE)
    if kind is not CellKind.INTERSECTION:
        return reject(Reason.WRONG_CELL_KIND)
    if state.searcher_at(pos) is not None:
        return reject(Reason.OCCUPIED)
    return ACCEPT


def _searcher_turn_check(state: GameState, unit_id: int) -> Verdict:
    if state.status is not Status.SEARCHERS_TURN or state.phase is not Phase.PLAY:
        return reject(Reason.WRONG_PHASE_OR_ROLE)
    if not 0 <= unit_id < len(state.searchers):
        return reject(Reason.OUT_OF_RANGE)
    if unit_id in state.acted:
        return reject(Reason.UNIT_ALREADY_ACTED)
    return ACCEPT


def can_move_searcher(
    board: Board, config: GameConfig, state: GameState, unit_id: int, pos: Coord
) -> Verdict:
    verdict = _searcher_turn_check(state, unit_id)
    if not verdict:
        return verdict
    kind = _cell_kind(board, pos)
    if kind is None:
        return reject(Reason.OUT_OF_RANGE)
    if not kind.is_road:
        return reject(Reason.WRONG_CELL_KIND)
    current = state.searchers[unit_id].position
    if orthogonal_stride(current, pos) not in config.allowed_strides():
        return reject(Reason.WRONG_STRIDE)
    if state.searcher_at(pos) is not None:
        return reject(Reason.OCCUPIED)
    return ACCEPT


def searcher_moves(board: Board, config: GameConfig, state: GameState, unit_id: int) -> List[Coord]:
    current = state.searchers[unit_id].position
    if current is None:
        return []
    targets: List[Coord] = []
    for stride in config.allowed_strides():
        for pos in board.step_targets(current, stride):
            if can_move_searcher(board, config, state, unit_id, pos):
                targets.append(pos)
    return targets


def can_search(board: Board, state: GameState, unit_id: int, pos: Coord) -> Verdict:
    verdict = _searcher_turn_check(state, unit_id)
    if not verdict:
        return verdict
    kind = _cell_kind(board, pos)
    if kind is None:
        return reject(Reason.OUT_OF_RANGE)
    if kind is not CellKind.BUILDING:
        return reject(Reason.WRONG_CELL_KIND)
    if not is_diagonal_neighbour(state.searchers[unit_id].position, pos):
        return reject(Reason.NOT_ADJACENT)
    return ACCEPT


def searchable_buildings(board: Board, state: GameState, unit_id: int) -> List[Coord]:
    current = state.searchers[unit_id].position
    if current is None or not _searcher_turn_check(state, unit_id):
        return []
    return board.adjacent_buildings(current)
