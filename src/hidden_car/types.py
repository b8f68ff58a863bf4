"""Core data structures for the hidden car game.

Rule reminders:
- The grid is N x N (N odd) with coordinates (x, y) from the top-left.
- Buildings sit on (even, even) cells, intersections on (odd, odd) cells;
  every non-building cell is road.
- The evader hops between buildings and never revisits one; three searcher
  units move along roads and inspect diagonally adjacent buildings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import AbstractSet, Dict, FrozenSet, List, Optional, Set, Tuple


Coord = Tuple[int, int]

SEARCHER_COUNT = 3


class CellKind(Enum):
    BUILDING = auto()
    ROAD = auto()
    INTERSECTION = auto()

    @property
    def is_road(self) -> bool:
        """Intersections are roads too."""

        return self is not CellKind.BUILDING


class Role(Enum):
    """The two sides of the game."""

    EVADER = "evader"
    SEARCHERS = "searchers"

    def opponent(self) -> "Role":
        """Return the opposing role."""

        return Role.SEARCHERS if self is Role.EVADER else Role.EVADER


class Phase(Enum):
    SETUP = "setup"
    PLAY = "play"


class Status(Enum):
    """States of the turn engine."""

    IDLE = "idle"
    SETTING_UP = "setting_up"
    EVADER_TURN = "evader_turn"
    SEARCHERS_TURN = "searchers_turn"
    GAME_OVER = "game_over"


class Reason(Enum):
    """Why a command was rejected."""

    OUT_OF_RANGE = "out_of_range"
    WRONG_CELL_KIND = "wrong_cell_kind"
    NOT_ADJACENT = "not_adjacent"
    WRONG_STRIDE = "wrong_stride"
    OCCUPIED = "occupied"
    ALREADY_VISITED = "already_visited"
    WRONG_PHASE_OR_ROLE = "wrong_phase_or_role"
    UNIT_ALREADY_ACTED = "unit_already_acted"


class EndReason(Enum):
    EVADER_FOUND = "evader found"
    ROUND_LIMIT_EXCEEDED = "round limit exceeded"
    EVADER_ENCIRCLED = "evader encircled"


@dataclass(frozen=True)
class TrailEntry:
    """A building the evader occupied, tagged with the round of the visit."""

    position: Coord
    round: int


@dataclass
class SearcherUnit:
    unit_id: int
    position: Optional[Coord] = None

    @property
    def placed(self) -> bool:
        return self.position is not None


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a :class:`GameState` handed to frontends and policies."""

    status: Status
    phase: Phase
    active_role: Optional[Role]
    round: int
    evader: Optional[Coord]
    trail: Tuple[TrailEntry, ...]
    discovered: Tuple[TrailEntry, ...]
    searchers: Tuple[Optional[Coord], ...]
    acted: FrozenSet[int]
    selected: int
    winner: Optional[Role] = None
    end_reason: Optional[EndReason] = None

    @property
    def trail_positions(self) -> FrozenSet[Coord]:
        return frozenset(entry.position for entry in self.trail)

    @property
    def discovered_positions(self) -> FrozenSet[Coord]:
        return frozenset(entry.position for entry in self.discovered)

    @property
    def game_over(self) -> bool:
        return self.status is Status.GAME_OVER


@dataclass
class GameState:
    """Complete mutable game state. Only the turn engine writes to it.

    ``trail`` is kept in visit order; ``_trail_index`` maps each visited
    position to its entry so membership checks stay O(1). ``discovered``
    holds the positions of inspected trail entries.
    """

    status: Status = Status.IDLE
    phase: Phase = Phase.SETUP
    active_role: Optional[Role] = None
    round: int = 1
    evader: Optional[Coord] = None
    trail: List[TrailEntry] = field(default_factory=list)
    discovered: List[Coord] = field(default_factory=list)
    searchers: List[SearcherUnit] = field(
        default_factory=lambda: [SearcherUnit(unit_id=i) for i in range(SEARCHER_COUNT)]
    )
    acted: Set[int] = field(default_factory=set)
    selected: int = 0
    winner: Optional[Role] = None
    end_reason: Optional[EndReason] = None
    _trail_index: Dict[Coord, TrailEntry] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for entry in self.trail:
            if entry.position in self._trail_index:
                raise ValueError(f"position {entry.position} appears twice in trail")
            self._trail_index[entry.position] = entry
        for pos in self.discovered:
            if pos not in self._trail_index:
                raise ValueError(f"discovered position {pos} is not in trail")

    @property
    def visited(self) -> AbstractSet[Coord]:
        return self._trail_index.keys()

    def in_trail(self, pos: Coord) -> bool:
        return pos in self._trail_index

    def trail_entry(self, pos: Coord) -> Optional[TrailEntry]:
        return self._trail_index.get(pos)

    def add_trail(self, pos: Coord) -> TrailEntry:
        """Append a trail entry for ``pos`` in the current round."""

        if pos in self._trail_index:
            raise ValueError(f"position {pos} already in trail")
        entry = TrailEntry(position=pos, round=self.round)
        self.trail.append(entry)
        self._trail_index[pos] = entry
        return entry

    def is_discovered(self, pos: Coord) -> bool:
        return pos in self.discovered

    def searcher_at(self, pos: Coord) -> Optional[SearcherUnit]:
        for unit in self.searchers:
            if unit.position == pos:
                return unit
        return None

    def next_unplaced(self) -> Optional[int]:
        for unit in self.searchers:
            if not unit.placed:
                return unit.unit_id
        return None

    def snapshot(self) -> GameSnapshot:
        """Return a frozen copy safe to hand out to readers."""

        return GameSnapshot(
            status=self.status,
            phase=self.phase,
            active_role=self.active_role,
            round=self.round,
            evader=self.evader,
            trail=tuple(self.trail),
            discovered=tuple(self._trail_index[pos] for pos in self.discovered),
            searchers=tuple(unit.position for unit in self.searchers),
            acted=frozenset(self.acted),
            selected=self.selected,
            winner=self.winner,
            end_reason=self.end_reason,
        )
