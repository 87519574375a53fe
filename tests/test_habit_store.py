"""Tests for the persisted habit store."""

from __future__ import annotations

import json

import pytest

from habitpulse.domain.repositories import HabitStore
from habitpulse.infra.repositories import LocalHabitStore
from habitpulse.models import Habit


def _records(habits):
    return [habit.to_record() for habit in habits]


def test_store_provides_every_protocol_member(habit_store):
    members = [name for name in vars(HabitStore) if not name.startswith("_")]
    members += list(HabitStore.__annotations__)

    missing = [name for name in members if not hasattr(habit_store, name)]

    assert "pending_ids" in members
    assert missing == []


class TestPersistence:
    """Load/save round trips and fail-closed loading."""

    def test_round_trip_preserves_every_field(self, habit_store, storage_repo, habit_factory):
        habits = [
            habit_factory(name="Run", category="fitness", completed_dates=["2024-01-01", "2024-01-02"]),
            habit_factory(name="Journal", category="writing", description="Three lines"),
        ]
        habit_store.save(habits)

        reloaded = LocalHabitStore(storage_repo, key="habits").load()

        assert _records(reloaded) == _records(habits)
        assert reloaded[1].completed_dates == []

    def test_persisted_layout_uses_record_field_names(self, habit_store, storage_repo):
        habit_store.add("Read")

        data = json.loads(storage_repo.get("habits"))

        assert isinstance(data, list)
        assert list(data[0].keys()) == list(Habit.RECORD_FIELDS)
        assert data[0]["completedDates"] == []

    def test_missing_slot_loads_empty(self, habit_store):
        assert habit_store.load() == []

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            '{"id": "x"}',
            "42",
            '[{"id": "a", "name": "Run"}]',
            '[{"id": "a", "name": "Run", "category": "health", "createdAt": "2024-01-01T00:00:00", "completedDates": "2024-01-01"}]',
            '[{"id": "a", "name": "", "category": "health", "createdAt": "2024-01-01T00:00:00", "completedDates": []}]',
            '[{"id": "a", "name": "Run", "category": "health", "createdAt": "not a time", "completedDates": []}]',
            '[{"id": "a", "name": "Run", "category": "health", "createdAt": "2024-01-01T00:00:00", "completedDates": [1]}]',
            '["just a string"]',
        ],
    )
    def test_malformed_data_fails_closed(self, storage_repo, raw):
        storage_repo.set("habits", raw)
        store = LocalHabitStore(storage_repo, key="habits")

        assert store.load() == []
        assert store.get() == []

    def test_duplicate_day_keys_collapse_on_load(self, storage_repo):
        storage_repo.set(
            "habits",
            json.dumps(
                [
                    {
                        "id": "a",
                        "name": "Run",
                        "description": "",
                        "category": "fitness",
                        "createdAt": "2024-01-01T08:00:00.000Z",
                        "completedDates": ["2024-01-01", "2024-01-02", "2024-01-01"],
                    }
                ]
            ),
        )

        habits = LocalHabitStore(storage_repo, key="habits").load()

        assert habits[0].completed_dates == ["2024-01-01", "2024-01-02"]

    def test_duplicate_ids_keep_first_record(self, storage_repo):
        record = {
            "id": "same",
            "name": "First",
            "category": "health",
            "createdAt": "2024-01-01T08:00:00+00:00",
            "completedDates": [],
        }
        storage_repo.set("habits", json.dumps([record, {**record, "name": "Second"}]))

        habits = LocalHabitStore(storage_repo, key="habits").load()

        assert [habit.name for habit in habits] == ["First"]

    def test_missing_description_defaults_to_empty(self, storage_repo):
        record = {
            "id": "a",
            "name": "Run",
            "category": "health",
            "createdAt": "2024-01-01T08:00:00+00:00",
            "completedDates": [],
        }
        storage_repo.set("habits", json.dumps([record]))

        assert LocalHabitStore(storage_repo, key="habits").load()[0].description == ""

    def test_save_rejects_duplicate_ids(self, habit_store, habit_factory):
        habit = habit_factory()
        with pytest.raises(ValueError):
            habit_store.save([habit, habit])

    def test_snapshots_are_isolated_from_later_mutations(self, habit_store):
        habit = habit_store.add("Run")
        snapshot = habit_store.get()

        habit_store.toggle(habit.id)
        habit_store.update(habit.id, name="Sprint")

        assert snapshot[0].completed_dates == []
        assert snapshot[0].name == "Run"

    def test_mutating_a_snapshot_does_not_touch_the_store(self, habit_store):
        habit_store.add("Run")
        snapshot = habit_store.get()
        snapshot[0].completed_dates.append("2024-01-01")

        assert habit_store.get()[0].completed_dates == []


class TestMutations:
    """Add, edit and toggle behaviour."""

    def test_add_creates_empty_history(self, habit_store):
        habit = habit_store.add("  Meditate  ", description="Ten minutes", category="mindfulness")

        assert habit.name == "Meditate"
        assert habit.completed_dates == []
        assert habit.category == "mindfulness"
        assert habit_store.find(habit.id).description == "Ten minutes"

    def test_add_defaults_to_health(self, habit_store):
        assert habit_store.add("Water").category == "health"

    def test_add_requires_name(self, habit_store):
        with pytest.raises(ValueError, match="name is required"):
            habit_store.add("   ")

    def test_ids_are_unique(self, habit_store):
        ids = {habit_store.add(f"Habit {i}").id for i in range(20)}
        assert len(ids) == 20

    def test_update_keeps_id_created_at_and_history(self, habit_store):
        habit = habit_store.add("Run", category="fitness")
        habit_store.toggle(habit.id, "2024-01-02")

        updated = habit_store.update(habit.id, name="Jog", description="Easy pace", category="custom")

        assert updated.id == habit.id
        assert updated.created_at == habit.created_at
        assert updated.completed_dates == ["2024-01-02"]
        assert (updated.name, updated.description, updated.category) == ("Jog", "Easy pace", "custom")

    def test_update_leaves_unspecified_fields(self, habit_store):
        habit = habit_store.add("Run", description="Outside", category="fitness")

        updated = habit_store.update(habit.id, name="Jog")

        assert updated.description == "Outside"
        assert updated.category == "fitness"

    def test_update_unknown_habit(self, habit_store):
        with pytest.raises(ValueError, match="not found"):
            habit_store.update("missing", name="x")

    def test_toggle_defaults_to_today_and_flips(self, habit_store):
        habit = habit_store.add("Run")

        assert habit_store.toggle(habit.id) is True
        assert habit_store.find(habit.id).completed_dates == ["2024-01-03"]
        assert habit_store.toggle(habit.id) is False
        assert habit_store.find(habit.id).completed_dates == []

    def test_toggle_never_duplicates(self, habit_store):
        habit = habit_store.add("Run")
        for _ in range(5):
            habit_store.toggle(habit.id, "2024-01-01")

        assert habit_store.find(habit.id).completed_dates == ["2024-01-01"]

    def test_toggle_rejects_invalid_day(self, habit_store):
        habit = habit_store.add("Run")
        with pytest.raises(ValueError):
            habit_store.toggle(habit.id, "2024-02-30")

    def test_mutations_are_persisted(self, habit_store, storage_repo):
        habit = habit_store.add("Run")
        habit_store.toggle(habit.id, "2024-01-01")

        reloaded = LocalHabitStore(storage_repo, key="habits").load()

        assert reloaded[0].completed_dates == ["2024-01-01"]


class TestDeleteAndUndo:
    """Deletion opens an undo window that restores the exact habit."""

    def test_undo_restores_exact_habit(self, habit_store):
        habit = habit_store.add("Run", description="Daily", category="fitness")
        habit_store.toggle(habit.id, "2024-01-01")
        habit_store.toggle(habit.id, "2024-01-02")
        before = habit_store.find(habit.id).to_record()

        habit_store.delete(habit.id)
        assert habit_store.find(habit.id) is None

        restored = habit_store.undo_delete()

        assert restored.to_record() == before
        assert habit_store.find(habit.id).to_record() == before

    def test_restored_habit_is_appended(self, habit_store):
        first = habit_store.add("First")
        habit_store.add("Second")

        habit_store.delete(first.id)
        habit_store.undo_delete()

        assert [h.name for h in habit_store.get()] == ["Second", "First"]

    def test_undo_after_window_fails(self, habit_store, clock):
        habit = habit_store.add("Run")
        habit_store.delete(habit.id)

        clock.advance(31)

        with pytest.raises(ValueError, match="expired"):
            habit_store.undo_delete()
        assert habit_store.get() == []

    def test_undo_with_nothing_pending(self, habit_store):
        with pytest.raises(ValueError, match="Nothing to undo"):
            habit_store.undo_delete()

    def test_undo_specific_habit(self, habit_store):
        a = habit_store.add("A")
        b = habit_store.add("B")
        habit_store.delete(a.id)
        habit_store.delete(b.id)

        assert habit_store.undo_delete(a.id).name == "A"
        assert habit_store.undo_delete().name == "B"

    def test_pending_ids_lists_restorable_deletions(self, habit_store, clock):
        a = habit_store.add("A")
        b = habit_store.add("B")
        habit_store.delete(a.id)
        clock.advance(20)
        habit_store.delete(b.id)

        assert habit_store.pending_ids() == [a.id, b.id]

        clock.advance(15)
        assert habit_store.pending_ids() == [b.id]

    def test_undo_window_survives_reload(self, habit_store, storage_repo, clock):
        habit = habit_store.add("Run")
        habit_store.delete(habit.id)

        clock.advance(10)
        other = LocalHabitStore(storage_repo, key="habits", undo_window=30.0, clock=clock)
        other.load()

        assert other.undo_delete().id == habit.id
        assert storage_repo.get(other.pending_key) is None

    def test_delete_unknown_habit(self, habit_store):
        with pytest.raises(ValueError, match="not found"):
            habit_store.delete("missing")

    def test_malformed_pending_deletions_are_discarded(self, habit_store, storage_repo):
        storage_repo.set(habit_store.pending_key, "[1, 2, 3]")

        with pytest.raises(ValueError, match="Nothing to undo"):
            habit_store.undo_delete()
