"""Per-session dice table: roll lines, roll history and the player's name.

A DiceTable wires the roll-line store, the engine and the history log together.
Every operation runs to completion synchronously, so a table never sees
overlapping mutations. Tables live in a process-local TableRegistry keyed by
the browser session token and are dropped on logout; nothing is persisted.
"""

from __future__ import annotations

import logging
import random
import secrets

from dicetray.config import settings
from dicetray.dice import RandomSource
from dicetray.engine import Clock, RollResult, evaluate, evaluate_all, local_now
from dicetray.history import HistoryEntry, HistoryLog
from dicetray.identity import IdentityProvider
from dicetray.roll_lines import IdGenerator, LineUpdate, RollLine, RollLineStore, counter_ids

logger = logging.getLogger(__name__)


class DiceTable:
    def __init__(
        self,
        *,
        identity: IdentityProvider | None = None,
        rng: RandomSource | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
        history_capacity: int | None = None,
        max_dice_count: int | None = None,
        initial_line: bool | None = None,
    ) -> None:
        # Lines and history entries draw from one generator so their ids never collide.
        self._next_id = id_generator or counter_ids()
        self._rng = rng or random.Random(settings.random_seed)
        self._clock = clock or local_now
        self.lines = RollLineStore(
            id_generator=self._next_id,
            max_dice_count=settings.max_dice_count if max_dice_count is None else max_dice_count,
        )
        self.history = HistoryLog(
            settings.history_capacity if history_capacity is None else history_capacity
        )
        self.username = _read_username(identity)

        if settings.initial_line if initial_line is None else initial_line:
            self.lines.add_line()

    # -- roll lines ---------------------------------------------------------

    def add_line(self) -> RollLine:
        return self.lines.add_line()

    def remove_line(self, line_id: int) -> None:
        self.lines.remove_line(line_id)

    def update(self, line_id: int, action: LineUpdate) -> None:
        self.lines.update(line_id, action)

    def update_field(self, line_id: int, field: str, value: object) -> None:
        self.lines.update_field(line_id, field, value)

    # -- rolling ------------------------------------------------------------

    def roll_line(self, line_id: int) -> HistoryEntry | None:
        """Roll one line, store the result on it and push a snapshot onto history.

        Returns the new history entry, or None if the line no longer exists.
        """
        line = self.lines.get(line_id)
        if line is None:
            return None

        return self._record(line, evaluate(line, rng=self._rng, clock=self._clock))

    def roll_all(self) -> list[HistoryEntry]:
        """Roll every line in collection order; the last line rolled ends up at the head."""
        lines = self.lines.lines
        results = evaluate_all(lines, rng=self._rng, clock=self._clock)
        return [self._record(line, result) for line, result in zip(lines, results)]

    def _record(self, line: RollLine, result: RollResult) -> HistoryEntry:
        """Store result on the line and push a snapshot of it onto history."""
        self.lines.record_result(line.id, result)
        entry = HistoryEntry(
            id=self._next_id(),
            label=line.label,
            dice_notation=line.notation,
            result=result,
        )
        self.history.append(entry)
        return entry

    def clear_history(self) -> None:
        self.history.clear()


def _read_username(identity: IdentityProvider | None) -> str | None:
    if identity is None:
        return None
    try:
        return identity.get_username()
    except Exception:
        logger.exception("Failed to read username; continuing without one")
        return None


class TableRegistry:
    """Process-local map from session token to DiceTable."""

    def __init__(self) -> None:
        self._tables: dict[str, DiceTable] = {}

    def new_token(self) -> str:
        return secrets.token_urlsafe(16)

    def get(self, token: str) -> DiceTable | None:
        return self._tables.get(token)

    def open(self, token: str, *, identity: IdentityProvider | None = None) -> DiceTable:
        """Return the table for token, creating it on first use."""
        table = self._tables.get(token)
        if table is None:
            table = DiceTable(identity=identity)
            self._tables[token] = table
            logger.info("Opened dice table for %s", table.username or "anonymous player")
        return table

    def close(self, token: str) -> None:
        if self._tables.pop(token, None) is not None:
            logger.info("Closed dice table")

    def clear(self) -> None:
        self._tables.clear()

    def __len__(self) -> int:
        return len(self._tables)


registry = TableRegistry()
