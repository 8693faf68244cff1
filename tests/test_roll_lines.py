"""Unit tests for the roll-line store."""

import pytest

from dicetray.dice import DiceType
from dicetray.engine import RollResult
from dicetray.roll_lines import (
    EDITABLE_FIELDS,
    RollLine,
    RollLineStore,
    SetDiceCount,
    SetDiceType,
    SetLabel,
    SetModifier,
    action_for_field,
    counter_ids,
)

RESULT = RollResult(rolls=(7,), total=7, modifier=0, timestamp="09:30:00")


class TestAddLine:
    def test_defaults(self) -> None:
        store = RollLineStore()
        line = store.add_line()
        assert line.label == "Roll 1"
        assert line.dice_count == 1
        assert line.dice_type is DiceType.d20
        assert line.modifier == 0
        assert line.result is None
        assert line.notation == "1d20"

    def test_labels_follow_collection_size(self) -> None:
        store = RollLineStore()
        labels = [store.add_line().label for _ in range(3)]
        assert labels == ["Roll 1", "Roll 2", "Roll 3"]

    def test_labels_can_repeat_after_removal(self) -> None:
        store = RollLineStore()
        first = store.add_line()
        store.add_line()
        store.remove_line(first.id)
        store.add_line()
        assert [line.label for line in store] == ["Roll 2", "Roll 2"]

    def test_ids_unique(self) -> None:
        store = RollLineStore()
        ids = [store.add_line().id for _ in range(10)]
        assert len(set(ids)) == 10

    def test_injected_id_generator(self) -> None:
        store = RollLineStore(id_generator=counter_ids(100))
        assert [store.add_line().id for _ in range(2)] == [100, 101]


class TestRemoveLine:
    def test_preserves_order(self) -> None:
        store = RollLineStore()
        a, b, c = (store.add_line() for _ in range(3))
        store.remove_line(b.id)
        assert [line.id for line in store] == [a.id, c.id]

    def test_unknown_id_is_noop(self) -> None:
        store = RollLineStore()
        store.add_line()
        store.remove_line(999)
        assert len(store) == 1

    def test_update_after_remove_is_noop(self) -> None:
        store = RollLineStore()
        line = store.add_line()
        store.remove_line(line.id)
        store.update_field(line.id, "dice_count", "4")
        store.update(line.id, SetLabel("gone"))
        store.record_result(line.id, RESULT)
        assert len(store) == 0


class TestUpdate:
    @pytest.fixture
    def store(self) -> RollLineStore:
        store = RollLineStore(id_generator=counter_ids())
        store.add_line()
        return store

    def test_label(self, store: RollLineStore) -> None:
        store.update(1, SetLabel("Longsword"))
        assert store.get(1).label == "Longsword"

    def test_dice_count(self, store: RollLineStore) -> None:
        store.update(1, SetDiceCount("3"))
        assert store.get(1).dice_count == 3

    def test_dice_count_garbage_becomes_one(self, store: RollLineStore) -> None:
        store.update(1, SetDiceCount("5"))
        store.update(1, SetDiceCount("x"))
        assert store.get(1).dice_count == 1

    def test_dice_count_clamped_to_store_maximum(self) -> None:
        store = RollLineStore(id_generator=counter_ids(), max_dice_count=10)
        store.add_line()
        store.update(1, SetDiceCount(50))
        assert store.get(1).dice_count == 10

    def test_dice_type(self, store: RollLineStore) -> None:
        store.update(1, SetDiceType("8"))
        assert store.get(1).dice_type is DiceType.d8

    def test_unsupported_dice_type_ignored(self, store: RollLineStore) -> None:
        store.update(1, SetDiceType("6"))
        store.update(1, SetDiceType("7"))
        assert store.get(1).dice_type is DiceType.d6

    def test_modifier(self, store: RollLineStore) -> None:
        store.update(1, SetModifier("-2"))
        assert store.get(1).modifier == -2
        assert store.get(1).notation == "1d20-2"

    def test_modifier_garbage_becomes_zero(self, store: RollLineStore) -> None:
        store.update(1, SetModifier("4"))
        store.update(1, SetModifier(""))
        assert store.get(1).modifier == 0

    def test_update_field_maps_to_actions(self, store: RollLineStore) -> None:
        store.update_field(1, "label", "Fireball")
        store.update_field(1, "dice_count", "8")
        store.update_field(1, "dice_type", 6)
        store.update_field(1, "modifier", "+1")
        line = store.get(1)
        assert (line.label, line.notation) == ("Fireball", "8d6+1")

    def test_update_field_rejects_unknown_field(self, store: RollLineStore) -> None:
        with pytest.raises(KeyError, match="result"):
            store.update_field(1, "result", RESULT)


class TestRecordResult:
    def test_replaces_previous(self) -> None:
        store = RollLineStore(id_generator=counter_ids())
        store.add_line()
        store.record_result(1, RESULT)
        later = RollResult(rolls=(2,), total=2, modifier=0, timestamp="09:31:00")
        store.record_result(1, later)
        assert store.get(1).result is later


def test_action_for_field() -> None:
    assert EDITABLE_FIELDS == ("label", "dice_count", "dice_type", "modifier")
    assert action_for_field("label", 12) == SetLabel("12")
    assert action_for_field("modifier", "3") == SetModifier("3")


def test_lines_snapshot_is_read_only() -> None:
    store = RollLineStore()
    store.add_line()
    snapshot = store.lines
    store.add_line()
    assert len(snapshot) == 1
    assert isinstance(snapshot[0], RollLine)


def test_lines_cannot_be_mutated_from_outside() -> None:
    store = RollLineStore(id_generator=counter_ids())
    store.add_line()
    with pytest.raises(AttributeError):
        store.lines[0].dice_count = 0  # type: ignore[misc]
    for line in store:
        with pytest.raises(AttributeError):
            line.modifier = 5  # type: ignore[misc]
    assert store.get(1).dice_count == 1
    assert store.get(1).modifier == 0


def test_update_swaps_in_new_line() -> None:
    store = RollLineStore(id_generator=counter_ids())
    before = store.add_line()
    store.update(1, SetDiceCount("4"))
    assert before.dice_count == 1
    assert store.get(1).dice_count == 4
    assert store.get(1).id == before.id
