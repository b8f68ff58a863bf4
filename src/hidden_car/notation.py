"""Square notation and command-text parsing for text frontends.

Squares are written column letter then row number, both from the top-left:
``(0, 0) -> "A1"``, ``(2, 4) -> "C5"``. The letter is ``x`` and the number
is ``y + 1``.
"""
from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Optional

from .types import Coord

COLUMNS = string.ascii_uppercase


def to_square(pos: Coord) -> str:
    """Convert 0-based (x, y) to a square string (e.g., (2, 0) -> "C1")."""

    x, y = pos
    if not (0 <= x < len(COLUMNS) and y >= 0):
        raise ValueError(f"coordinate cannot be written as a square: {pos}")
    return f"{COLUMNS[x]}{y + 1}"


def from_square(sq: str, size: Optional[int] = None) -> Coord:
    """Convert a square string (e.g., "c3") to 0-based (x, y).

    When ``size`` is given the square must also fall inside that grid.
    """

    text = sq.strip().upper()
    match = re.match(r"^([A-Z])(\d{1,2})$", text)
    if not match:
        raise ValueError(f"Invalid square '{sq}'")
    x = COLUMNS.index(match.group(1))
    y = int(match.group(2)) - 1
    if y < 0:
        raise ValueError(f"Invalid row in square '{sq}'")
    if size is not None and not (x < size and y < size):
        raise ValueError(f"Square '{sq}' is outside a {size}x{size} grid")
    return x, y


@dataclass
class ParsedCommand:
    """Result of parsing a user-supplied command line."""

    verb: str
    unit: Optional[int] = None
    square: Optional[str] = None


def parse_command_text(raw: str) -> ParsedCommand:
    """Parse a game command.

    Accepted examples (case-insensitive):
    - "place B2" / "place 2 D4"  # unit numbers are 1-based
    - "evader C3"                # place or move the evader
    - "select 3"
    - "move B4" / "search C5"

    Raises:
        ValueError: if the text cannot be parsed.
    """

    text = raw.strip().upper()
    if not text:
        raise ValueError("Command text is empty")

    match = re.match(r"^(PLACE|EVADER|SELECT|MOVE|SEARCH)(?:\s+(\d+))?(?:\s+([A-Z]\d{1,2}))?$", text)
    if not match:
        raise ValueError("Could not parse command; use forms like 'move B4' or 'place 2 D4'")

    verb = match.group(1)
    unit_text = match.group(2)
    square = match.group(3)
    unit = None
    if unit_text is not None:
        unit = int(unit_text) - 1
        if unit < 0:
            raise ValueError("Unit numbers start at 1")

    if verb == "SELECT":
        if unit is None or square is not None:
            raise ValueError("SELECT takes a unit number only")
    elif square is None:
        raise ValueError(f"{verb} requires a square")
    elif unit is not None and verb != "PLACE":
        raise ValueError(f"{verb} does not take a unit number")
    return ParsedCommand(verb=verb, unit=unit, square=square)
