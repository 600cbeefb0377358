from concurrent.futures import ThreadPoolExecutor

import pytest

from healthbot.reminders import DEFAULT_DOSAGE, MissingFieldsError, ReminderStore


def test_create_applies_defaults():
    store = ReminderStore()
    reminder = store.create("Paracetamol", "daily", "08:00")
    assert reminder.dosage == DEFAULT_DOSAGE
    assert reminder.active is True
    assert reminder.start_date == reminder.created_at
    assert store.list() == [reminder]


def test_create_requires_fields():
    store = ReminderStore()
    with pytest.raises(MissingFieldsError) as exc:
        store.create("Paracetamol", "", None)
    assert exc.value.fields == ["frequency", "time"]
    assert len(store) == 0


def test_ids_unique_with_frozen_clock():
    store = ReminderStore(clock=lambda: 1000.0)
    ids = [store.create("A", "daily", "08:00").id for _ in range(5)]
    assert ids == ["1000000", "1000001", "1000002", "1000003", "1000004"]


def test_delete_unknown_id_is_noop():
    store = ReminderStore()
    store.create("A", "daily", "08:00")
    assert store.delete("does-not-exist") == 0
    assert len(store) == 1


def test_delete_and_insertion_order():
    store = ReminderStore()
    first = store.create("A", "daily", "08:00")
    second = store.create("B", "daily", "09:00")
    third = store.create("C", "daily", "10:00")
    assert store.delete(second.id) == 1
    assert [r.id for r in store.list()] == [first.id, third.id]


def test_list_is_a_snapshot():
    store = ReminderStore()
    store.create("A", "daily", "08:00")
    snapshot = store.list()
    snapshot.clear()
    assert len(store) == 1


def test_concurrent_create_delete_list():
    store = ReminderStore()
    keep = [store.create("keep", "daily", "08:00") for _ in range(10)]

    def churn(i):
        r = store.create(f"tmp-{i}", "daily", "08:00")
        for item in store.list():
            assert item.medicine_name and item.id
        store.delete(r.id)
        return r.id

    def add(i):
        return store.create(f"added-{i}", "daily", "08:00").id

    with ThreadPoolExecutor(max_workers=16) as pool:
        churned = list(pool.map(churn, range(200)))
        added = list(pool.map(add, range(200)))

    assert len(set(churned + added + [r.id for r in keep])) == 410
    remaining = store.list()
    assert len(remaining) == 210
    assert {r.id for r in remaining} == set(added) | {r.id for r in keep}


def test_create_by_keyword():
    store = ReminderStore()
    reminder = store.create(medicine_name="Insulin", frequency="daily", time_of_day="07:30")
    assert reminder.time == "07:30"
    assert reminder.model_dump(by_alias=True)["medicineName"] == "Insulin"
