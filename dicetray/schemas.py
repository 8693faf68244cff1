"""Pydantic response models for the read-only state endpoint."""

from __future__ import annotations

from pydantic import BaseModel

from dicetray.dice import DiceType
from dicetray.engine import RollResult
from dicetray.history import HistoryEntry
from dicetray.roll_lines import RollLine
from dicetray.table import DiceTable


class RollResultOut(BaseModel):
    rolls: list[int]
    total: int
    modifier: int
    timestamp: str

    @classmethod
    def from_result(cls, result: RollResult) -> RollResultOut:
        return cls(
            rolls=list(result.rolls),
            total=result.total,
            modifier=result.modifier,
            timestamp=result.timestamp,
        )


class RollLineOut(BaseModel):
    id: int
    label: str
    dice_count: int
    dice_type: DiceType
    modifier: int
    notation: str
    result: RollResultOut | None = None

    @classmethod
    def from_line(cls, line: RollLine) -> RollLineOut:
        return cls(
            id=line.id,
            label=line.label,
            dice_count=line.dice_count,
            dice_type=line.dice_type,
            modifier=line.modifier,
            notation=line.notation,
            result=RollResultOut.from_result(line.result) if line.result else None,
        )


class HistoryEntryOut(BaseModel):
    id: int
    label: str
    dice_notation: str
    result: RollResultOut

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> HistoryEntryOut:
        return cls(
            id=entry.id,
            label=entry.label,
            dice_notation=entry.dice_notation,
            result=RollResultOut.from_result(entry.result),
        )


class TableState(BaseModel):
    username: str | None
    dice_types: list[int]
    lines: list[RollLineOut]
    history: list[HistoryEntryOut]

    @classmethod
    def from_table(cls, table: DiceTable) -> TableState:
        return cls(
            username=table.username,
            dice_types=[die.value for die in DiceType],
            lines=[RollLineOut.from_line(line) for line in table.lines],
            history=[HistoryEntryOut.from_entry(entry) for entry in table.history],
        )
