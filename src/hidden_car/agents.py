"""Computer players for the hidden car game."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Union

from .board import Board
from .config import GameConfig
from .types import Coord, GameSnapshot, Status
from .validator import hop_targets

logger = logging.getLogger(__name__)


class EvaderSignal(Enum):
    ENCIRCLED = auto()


EvaderChoice = Union[Coord, EvaderSignal]


def evader_moves_from(board: Board, snapshot: GameSnapshot) -> List[Coord]:
    """Legal hops for the evader in ``snapshot``: unvisited buildings two cells away."""

    if snapshot.evader is None:
        return []
    return hop_targets(board, snapshot.evader, snapshot.trail_positions)


class EvaderPolicy:
    """Base class for evader strategies."""

    def choose_move(self, snapshot: GameSnapshot, board: Board) -> EvaderChoice:
        """Return the evader's next position or ``EvaderSignal.ENCIRCLED``."""

        raise NotImplementedError


class RandomEvaderPolicy(EvaderPolicy):
    """Uniformly random evader with reproducible seeding."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random(seed)

    def choose_move(self, snapshot: GameSnapshot, board: Board) -> EvaderChoice:
        if snapshot.evader is None:
            return self._rng.choice(board.buildings())
        moves = evader_moves_from(board, snapshot)
        if not moves:
            logger.debug(f"Evader at {snapshot.evader} has no legal hop")
            return EvaderSignal.ENCIRCLED
        return self._rng.choice(moves)


@dataclass(frozen=True)
class SearcherAction:
    """One searcher command: ``kind`` is "place", "move" or "search"."""

    kind: str
    unit_id: int
    position: Coord


class RandomSearcherAgent:
    """Searcher team that picks a random legal action for each unit in turn.

    Used for self-play; it reads legal targets from the engine's hint queries
    and never touches the state directly.
    """

    def __init__(self, seed: Optional[int] = None, search_bias: float = 0.5):
        if not 0.0 <= search_bias <= 1.0:
            raise ValueError("search_bias must be between 0 and 1")
        self._rng = random.Random(seed)
        self.search_bias = search_bias

    def choose_action(self, engine) -> SearcherAction:
        snapshot = engine.state
        if snapshot.status is Status.SETTING_UP:
            unit_id = next(i for i, pos in enumerate(snapshot.searchers) if pos is None)
            taken = set(snapshot.searchers)
            free = [pos for pos in engine.board.intersections() if pos not in taken]
            return SearcherAction("place", unit_id, self._rng.choice(free))
        if snapshot.status is not Status.SEARCHERS_TURN:
            raise ValueError("searchers cannot act now")

        unit_id = next(i for i in range(len(snapshot.searchers)) if i not in snapshot.acted)
        searches = engine.searchable_buildings(unit_id)
        moves = engine.legal_searcher_moves(unit_id)
        if searches and (not moves or self._rng.random() < self.search_bias):
            return SearcherAction("search", unit_id, self._rng.choice(searches))
        if not moves:
            raise ValueError(f"unit {unit_id} has no legal action")
        return SearcherAction("move", unit_id, self._rng.choice(moves))


def build_evader_policy(name: str, config: Optional[GameConfig] = None) -> EvaderPolicy:
    seed = None if config is None else config.seed
    if name == "random":
        return RandomEvaderPolicy(seed=seed)
    raise ValueError(f"Unknown evader policy '{name}'")
