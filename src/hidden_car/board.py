"""Static grid geometry.

Cell kinds follow coordinate parity:
- Building: x even and y even.
- Intersection: x odd and y odd.
- Road: every cell that is not a building (intersections included).
"""

from __future__ import annotations

from typing import List, Tuple

from .types import CellKind, Coord

DEFAULT_GRID_SIZE = 9
ORTHOGONAL: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))
DIAGONAL: Tuple[Tuple[int, int], ...] = ((-1, -1), (1, -1), (1, 1), (-1, 1))


class OutOfRangeError(ValueError):
    """Raised when a coordinate lies outside the grid."""


class Board:
    """Pure queries over an N x N grid; holds no game state."""

    def __init__(self, size: int = DEFAULT_GRID_SIZE) -> None:
        if size < 3 or size % 2 == 0:
            raise ValueError("grid size must be an odd number >= 3")
        self.size = size

    def __repr__(self) -> str:
        return f"Board(size={self.size})"

    def in_range(self, c: Coord) -> bool:
        x, y = c
        return 0 <= x < self.size and 0 <= y < self.size

    def classify(self, c: Coord) -> CellKind:
        """Return the cell kind at ``c`` or raise :class:`OutOfRangeError`."""

        if not self.in_range(c):
            raise OutOfRangeError(f"coordinate out of range: {c}")
        x, y = c
        if x % 2 == 0 and y % 2 == 0:
            return CellKind.BUILDING
        if x % 2 == 1 and y % 2 == 1:
            return CellKind.INTERSECTION
        return CellKind.ROAD

    def adjacent_buildings(self, c: Coord) -> List[Coord]:
        """Diagonal neighbours of ``c`` that are in-range buildings."""

        x, y = c
        result: List[Coord] = []
        for dx, dy in DIAGONAL:
            nxt = (x + dx, y + dy)
            if self.in_range(nxt) and self.classify(nxt) is CellKind.BUILDING:
                result.append(nxt)
        return result

    def step_targets(self, c: Coord, stride: int) -> List[Coord]:
        """Orthogonal cells exactly ``stride`` away from ``c``, in range."""

        if stride < 1:
            raise ValueError("stride must be positive")
        x, y = c
        result: List[Coord] = []
        for dx, dy in ORTHOGONAL:
            nxt = (x + dx * stride, y + dy * stride)
            if self.in_range(nxt):
                result.append(nxt)
        return result

    def buildings(self) -> List[Coord]:
        return [(x, y) for y in range(0, self.size, 2) for x in range(0, self.size, 2)]

    def intersections(self) -> List[Coord]:
        return [(x, y) for y in range(1, self.size, 2) for x in range(1, self.size, 2)]


def orthogonal_stride(a: Coord, b: Coord) -> int:
    """Distance between ``a`` and ``b`` when they share a row or column, else 0."""

    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    if dx and dy:
        return 0
    return dx + dy


def is_diagonal_neighbour(a: Coord, b: Coord) -> bool:
    return abs(a[0] - b[0]) == 1 and abs(a[1] - b[1]) == 1
