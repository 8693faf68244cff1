"""Dice primitives shared by the roll-line store and the roll engine.

Supported dice are the standard polyhedral set: d4, d6, d8, d10, d12, d20, d100.
Notation is rendered as XdY, XdY+Z or XdY-Z (e.g. 2d6, 1d20+5, 2d8-2).
"""

from __future__ import annotations

import enum
import re
from typing import Protocol

_LEADING_INT_RE = re.compile(r"^\s*(?P<value>[+-]?\d+)")

MAX_DICE_COUNT = 99


class DiceError(ValueError):
    """Raised when a roll configuration violates the engine contract."""


class DiceType(int, enum.Enum):
    """Number of sides on one die."""

    d4 = 4
    d6 = 6
    d8 = 8
    d10 = 10
    d12 = 12
    d20 = 20
    d100 = 100


class RandomSource(Protocol):
    """Anything that can draw a uniform integer in a closed range.

    ``random.Random`` satisfies this; tests substitute a scripted source.
    """

    def randint(self, a: int, b: int) -> int: ...


def format_notation(count: int, sides: int, modifier: int) -> str:
    """Render (count, sides, modifier) as canonical dice notation.

    The modifier is omitted when zero and carries an explicit sign otherwise.

    Examples:
        >>> format_notation(3, 6, 0)
        '3d6'
        >>> format_notation(1, 20, 5)
        '1d20+5'
        >>> format_notation(2, 8, -2)
        '2d8-2'
    """
    notation = f"{count}d{int(sides)}"
    if modifier:
        notation += f"{modifier:+d}"
    return notation


def parse_int(raw: object) -> int | None:
    """Leniently read an integer from user input.

    Accepts ints directly. Strings yield their leading signed integer with any
    trailing characters ignored ("12abc" -> 12). Returns None when no integer
    can be read, including digit runs past the interpreter's int conversion limit.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        return None
    m = _LEADING_INT_RE.match(raw)
    if not m:
        return None
    try:
        return int(m.group("value"))
    except ValueError:
        return None


def coerce_dice_count(raw: object, *, maximum: int = MAX_DICE_COUNT) -> int:
    """Parse a dice count, falling back to 1 and clamping to [1, maximum]."""
    value = parse_int(raw)
    if value is None or value < 1:
        return 1
    return min(value, maximum)


def coerce_modifier(raw: object) -> int:
    """Parse a flat modifier, falling back to 0."""
    value = parse_int(raw)
    return 0 if value is None else value


def coerce_dice_type(raw: object) -> DiceType | None:
    """Return the DiceType matching raw input, or None if it is not a supported die."""
    if isinstance(raw, DiceType):
        return raw
    if isinstance(raw, str):
        raw = raw.strip().lower().removeprefix("d")
    value = parse_int(raw)
    if value is None:
        return None
    try:
        return DiceType(value)
    except ValueError:
        return None
