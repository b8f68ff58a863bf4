"""Events the turn engine emits to frontends after each command."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from .types import EndReason, GameSnapshot, Reason, Role


class LogCategory(Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"
    EVADER = "evader"
    SEARCHERS = "searchers"


@dataclass(frozen=True)
class StateChanged:
    snapshot: GameSnapshot


@dataclass(frozen=True)
class LogEvent:
    """Human-readable feedback. ``reason`` is set only for rejections."""

    message: str
    category: LogCategory
    reason: Optional[Reason] = None


@dataclass(frozen=True)
class GameEnded:
    winner: Role
    reason: EndReason


Event = Union[StateChanged, LogEvent, GameEnded]
Listener = Callable[[Event], None]
