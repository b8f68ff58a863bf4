"""Hidden car pursuit game package."""

from .types import (
    CellKind,
    Coord,
    EndReason,
    GameSnapshot,
    GameState,
    Phase,
    Reason,
    Role,
    Status,
    TrailEntry,
)
from .board import Board, OutOfRangeError
from .config import GameConfig, preset_config
from .events import GameEnded, LogCategory, LogEvent, StateChanged
from .engine import TurnEngine
from .agents import EvaderPolicy, EvaderSignal, RandomEvaderPolicy, RandomSearcherAgent
from .game_controller import GameController

__all__ = [
    "Board",
    "CellKind",
    "Coord",
    "EndReason",
    "EvaderPolicy",
    "EvaderSignal",
    "GameConfig",
    "GameController",
    "GameEnded",
    "GameSnapshot",
    "GameState",
    "LogCategory",
    "LogEvent",
    "OutOfRangeError",
    "Phase",
    "RandomEvaderPolicy",
    "RandomSearcherAgent",
    "Reason",
    "Role",
    "StateChanged",
    "Status",
    "TrailEntry",
    "TurnEngine",
    "preset_config",
]
