"""Roll-line store: the ordered, user-editable collection of roll configurations.

Every line the store hands out is well formed: ``dice_count`` is at least 1 and
``dice_type`` is a supported die. Raw user input is coerced on the way in
rather than rejected.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace

from dicetray.dice import (
    MAX_DICE_COUNT,
    DiceType,
    coerce_dice_count,
    coerce_dice_type,
    coerce_modifier,
    format_notation,
)
from dicetray.engine import RollResult

logger = logging.getLogger(__name__)

IdGenerator = Callable[[], int]

DEFAULT_DICE_COUNT = 1
DEFAULT_DICE_TYPE = DiceType.d20
DEFAULT_MODIFIER = 0


def counter_ids(start: int = 1) -> IdGenerator:
    """Return an id generator yielding start, start + 1, ..."""
    return itertools.count(start).__next__


@dataclass(frozen=True)
class RollLine:
    """One roll configuration. Frozen: the store swaps in updated copies."""

    id: int
    label: str
    dice_count: int = DEFAULT_DICE_COUNT
    dice_type: DiceType = DEFAULT_DICE_TYPE
    modifier: int = DEFAULT_MODIFIER
    result: RollResult | None = None

    @property
    def notation(self) -> str:
        return format_notation(self.dice_count, self.dice_type, self.modifier)


# ---------------------------------------------------------------------------
# Update actions: one per mutable field. Each returns the updated line.
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetLabel:
    label: str

    def apply(self, line: RollLine, *, max_dice_count: int) -> RollLine:
        return replace(line, label=self.label)


@dataclass(frozen=True)
class SetDiceCount:
    """Raw count input; unparseable or non-positive values become 1."""

    value: object

    def apply(self, line: RollLine, *, max_dice_count: int) -> RollLine:
        return replace(line, dice_count=coerce_dice_count(self.value, maximum=max_dice_count))


@dataclass(frozen=True)
class SetDiceType:
    """Raw die input; anything outside the supported set leaves the line unchanged."""

    value: object

    def apply(self, line: RollLine, *, max_dice_count: int) -> RollLine:
        dice_type = coerce_dice_type(self.value)
        if dice_type is None:
            logger.debug("Ignoring unsupported die %r for line %d", self.value, line.id)
            return line
        return replace(line, dice_type=dice_type)


@dataclass(frozen=True)
class SetModifier:
    """Raw modifier input; unparseable values become 0."""

    value: object

    def apply(self, line: RollLine, *, max_dice_count: int) -> RollLine:
        return replace(line, modifier=coerce_modifier(self.value))


LineUpdate = SetLabel | SetDiceCount | SetDiceType | SetModifier

_FIELD_ACTIONS: dict[str, Callable[[object], LineUpdate]] = {
    "label": lambda value: SetLabel(str(value)),
    "dice_count": SetDiceCount,
    "dice_type": SetDiceType,
    "modifier": SetModifier,
}

EDITABLE_FIELDS: tuple[str, ...] = tuple(_FIELD_ACTIONS)


def action_for_field(field: str, value: object) -> LineUpdate:
    """Build the update action for a named field.

    Raises:
        KeyError: If field is not one of EDITABLE_FIELDS.
    """
    try:
        factory = _FIELD_ACTIONS[field]
    except KeyError:
        raise KeyError(f"Unknown roll line field: {field!r}") from None
    return factory(value)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class RollLineStore:
    def __init__(
        self,
        *,
        id_generator: IdGenerator | None = None,
        max_dice_count: int = MAX_DICE_COUNT,
    ) -> None:
        self._lines: list[RollLine] = []
        self._next_id = id_generator or counter_ids()
        self._max_dice_count = max_dice_count

    @property
    def lines(self) -> tuple[RollLine, ...]:
        return tuple(self._lines)

    def __iter__(self) -> Iterator[RollLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self._lines)

    def get(self, line_id: int) -> RollLine | None:
        for line in self._lines:
            if line.id == line_id:
                return line
        return None

    def add_line(self) -> RollLine:
        """Append a default 1d20 line labelled "Roll {N}".

        N is the collection size after the add, so labels can repeat once lines
        have been removed.
        """
        line = RollLine(id=self._next_id(), label=f"Roll {len(self._lines) + 1}")
        self._lines.append(line)
        return line

    def remove_line(self, line_id: int) -> None:
        self._lines = [line for line in self._lines if line.id != line_id]

    def update(self, line_id: int, action: LineUpdate) -> None:
        """Apply one update action to the matching line; no-op for an unknown id."""
        index = self._index(line_id)
        if index is None:
            return
        self._lines[index] = action.apply(self._lines[index], max_dice_count=self._max_dice_count)

    def update_field(self, line_id: int, field: str, value: object) -> None:
        self.update(line_id, action_for_field(field, value))

    def record_result(self, line_id: int, result: RollResult) -> None:
        index = self._index(line_id)
        if index is not None:
            self._lines[index] = replace(self._lines[index], result=result)

    def _index(self, line_id: int) -> int | None:
        for index, line in enumerate(self._lines):
            if line.id == line_id:
                return index
        return None

