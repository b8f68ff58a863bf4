"""Game start configuration and rule-variant presets."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .board import DEFAULT_GRID_SIZE
from .notation import COLUMNS
from .types import Coord, Role

HUMAN = "human"
COMPUTER = "computer"
STRICT = "strict"
FREE = "free"
DEFAULT_ROUND_LIMIT = 11
MAX_GRID_SIZE = len(COLUMNS) - 1
SUPPORTED_LANGS = ("en", "ja")


@dataclass(frozen=True)
class GameConfig:
    """Options accepted by ``TurnEngine.start_game``.

    ``searcher_stride`` of 2 allows only hops over one cell; 1 also allows
    single orthogonal steps. ``placement_order`` controls whether setup
    places units strictly in index order or lets the player choose.
    """

    evader_controller: str = HUMAN
    first_mover: Role = Role.SEARCHERS
    searcher_stride: int = 2
    grid_size: int = DEFAULT_GRID_SIZE
    round_limit: int = DEFAULT_ROUND_LIMIT
    placement_order: str = STRICT
    lang: str = "en"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.evader_controller not in (HUMAN, COMPUTER):
            raise ValueError(f"evader_controller must be '{HUMAN}' or '{COMPUTER}'")
        if not isinstance(self.first_mover, Role):
            raise ValueError("first_mover must be a Role")
        if self.searcher_stride not in (1, 2):
            raise ValueError("searcher_stride must be 1 or 2")
        if self.grid_size < 5 or self.grid_size % 2 == 0:
            raise ValueError("grid_size must be an odd number >= 5")
        if self.grid_size > MAX_GRID_SIZE:
            raise ValueError(f"grid_size must be at most {MAX_GRID_SIZE} so every square has a column letter")
        if self.round_limit < 1:
            raise ValueError("round_limit must be positive")
        if self.placement_order not in (STRICT, FREE):
            raise ValueError(f"placement_order must be '{STRICT}' or '{FREE}'")
        if self.lang not in SUPPORTED_LANGS:
            raise ValueError(f"Unsupported language '{self.lang}'")

    @property
    def has_setup_phase(self) -> bool:
        return self.first_mover is Role.SEARCHERS

    @property
    def computer_evader(self) -> bool:
        return self.evader_controller == COMPUTER

    def allowed_strides(self) -> Tuple[int, ...]:
        return (1, 2) if self.searcher_stride == 1 else (2,)

    def default_searcher_positions(self) -> Tuple[Coord, ...]:
        """Intersections used when there is no placement phase."""

        far = self.grid_size - 2
        return ((1, 1), (far, 1), (1, far))

    def with_overrides(self, **changes) -> "GameConfig":
        return replace(self, **changes)


def preset_config(name: str) -> GameConfig:
    preset = name.lower()
    if preset == "classic":
        return GameConfig(first_mover=Role.EVADER, searcher_stride=1)
    if preset == "hop":
        return GameConfig(first_mover=Role.EVADER, searcher_stride=2)
    if preset == "standard":
        return GameConfig(first_mover=Role.SEARCHERS, searcher_stride=2)
    raise ValueError(f"Unknown rule preset '{name}'")
