from decimal import Decimal

import pytest

from consistency.core.errors import ValidationError
from consistency.core.models import BooleanValue, Habit, HabitType, NumericValue
from consistency.store import HabitStore, sample_habits


@pytest.fixture
def store():
    s = HabitStore()
    s.add_habit(Habit(id="1", name="Wake up early", type=HabitType.BOOLEAN))
    s.add_habit(Habit(id="2", name="Run", type=HabitType.DECIMAL, unit="miles"))
    s.add_habit(Habit(id="3", name="Read", type=HabitType.WHOLE_NUMBER, unit="pages"))
    return s


def test_add_habit_appends_in_order(store):
    assert [h.id for h in store.habits] == ["1", "2", "3"]


def test_add_habit_does_not_check_duplicate_ids():
    s = HabitStore()
    s.add_habit(Habit(id="1", name="a"))
    s.add_habit(Habit(id="1", name="b"))
    assert len(s) == 2
    assert s.get_habit("1").name == "a"


def test_toggle_boolean_scenario():
    s = HabitStore()
    s.add_habit(Habit(id="1", name="Meditate", type=HabitType.BOOLEAN))

    s.toggle_boolean("1", "2025-03-01")
    assert s.get_entry("1", "2025-03-01") == BooleanValue(True)

    s.toggle_boolean("1", "2025-03-01")
    assert s.get_entry("1", "2025-03-01") == BooleanValue(False)


@pytest.mark.parametrize("initial", [None, BooleanValue(True), BooleanValue(False)])
def test_toggle_boolean_twice_is_identity(initial):
    entries = {"2025-03-01": initial} if initial else {}
    s = HabitStore([Habit(id="1", name="x", entries=entries)])
    s.toggle_boolean("1", "2025-03-01")
    s.toggle_boolean("1", "2025-03-01")
    assert s.get_entry("1", "2025-03-01") == (initial or BooleanValue(False))


def test_toggle_boolean_ignores_numeric_habit(store):
    before = store.habits
    assert store.toggle_boolean("2", "2025-03-01") is None
    assert store.habits == before


def test_set_numeric_decimal_scenario():
    s = HabitStore()
    s.add_habit(Habit(id="1", name="Run", type=HabitType.DECIMAL, unit="miles"))

    s.set_numeric("1", "2025-02-08", 1.2)

    entry = s.get_entry("1", "2025-02-08")
    assert entry == NumericValue(Decimal("1.2"), False)
    assert entry.display_value == "1.2"


def test_set_numeric_whole_truncates(store):
    store.set_numeric("3", "2025-02-08", 12.7)
    assert store.get_entry("3", "2025-02-08") == NumericValue(Decimal(12), True)


def test_set_numeric_missing_habit_is_noop():
    s = HabitStore()
    assert s.set_numeric("missingId", "2025-01-01", 5) is None
    assert s.habits == ()


def test_set_numeric_ignores_boolean_habit(store):
    assert store.set_numeric("1", "2025-02-08", 3) is None
    assert store.get_entry("1", "2025-02-08") is None


def test_mutation_returns_replacement_at_same_position(store):
    updated = store.set_numeric("2", "2025-02-08", 3.4)
    assert store.habits[1] is updated
    assert updated.id == "2"


def test_mutation_leaves_old_snapshot_untouched(store):
    snapshot = store.habits
    old_run = snapshot[1]
    store.set_numeric("2", "2025-02-08", 3.4)
    assert snapshot[1] is old_run
    assert old_run.entries == {}


def test_mutation_isolates_other_dates_and_habits():
    s = HabitStore(sample_habits())
    before = {h.id: dict(h.entries) for h in s.habits}

    s.set_numeric("2", "2025-02-07", 9.9)

    after = {h.id: dict(h.entries) for h in s.habits}
    assert after["1"] == before["1"]
    assert after["3"] == before["3"]
    changed = {k for k in before["2"] if before["2"][k] != after["2"][k]}
    assert changed == {"2025-02-07"}
    assert after["2"]["2025-02-07"].value == Decimal("9.9")


def test_increment_entry_boolean_toggles(store):
    store.increment_entry("1", "2025-02-08")
    assert store.get_entry("1", "2025-02-08") == BooleanValue(True)


def test_increment_entry_whole_adds_one(store):
    store.increment_entry("3", "2025-02-08")
    store.increment_entry("3", "2025-02-08")
    assert store.get_entry("3", "2025-02-08") == NumericValue(Decimal(2), True)


def test_increment_entry_decimal_adds_one_tenth(store):
    for _ in range(3):
        store.increment_entry("2", "2025-02-08")
    entry = store.get_entry("2", "2025-02-08")
    assert entry.value == Decimal("0.3")
    assert entry.display_value == "0.3"


def test_increment_entry_missing_habit_is_noop(store):
    assert store.increment_entry("nope", "2025-02-08") is None


def test_adjust_entry_down_clamps_at_zero(store):
    store.adjust_entry("3", "2025-02-08", increment=False)
    assert store.get_entry("3", "2025-02-08").value == 0


def test_adjust_entry_ignores_boolean(store):
    assert store.adjust_entry("1", "2025-02-08") is None


def test_create_habit_assigns_count_based_id(store):
    habit = store.create_habit("Stretch")
    assert habit.id == "4"
    assert store.habits[-1] is habit


def test_create_habit_keeps_unit_for_boolean():
    habit = HabitStore().create_habit("Floss", HabitType.BOOLEAN, unit="times")
    assert habit.unit == "times"


def test_create_habit_keeps_unit_for_numeric():
    habit = HabitStore().create_habit("Swim", HabitType.DECIMAL, unit=" km ")
    assert habit.unit == "km"


def test_create_habit_rejects_blank_name():
    with pytest.raises(ValidationError):
        HabitStore().create_habit("   ")


def test_sample_habits_types():
    habits = sample_habits()
    assert [h.type for h in habits] == [
        HabitType.BOOLEAN,
        HabitType.DECIMAL,
        HabitType.WHOLE_NUMBER,
    ]
    assert habits[1].entries["2025-02-07"].display_value == "1.2"
    assert habits[2].entries["2025-02-08"].display_value == "50"
