"""Tests for the day service."""

import json
from datetime import date

from conftest import paint
from timeblocker.database.mappers import dump_slots
from timeblocker.domain.days import LEGACY_DAY_KEY, TEMPLATE_KEY, day_key
from timeblocker.domain.entities import Track
from timeblocker.domain.time_grid import generate_canonical_day, slot_index

TODAY = date(2024, 5, 1)


def _legacy_day_value(category_id):
    records = [
        {"hour": hour, "minute": minute, "planCategoryId": category_id, "actualCategoryId": None}
        for hour in range(24)
        for minute in range(0, 60, 10)
    ]
    return json.dumps(records)


def test_unsaved_day_is_empty(day_service):
    assert day_service.load_day("2024-05-01", today=TODAY) == generate_canonical_day()


def test_save_and_load_day(day_service, empty_day):
    day = paint(empty_day, "08:00", "09:00", "work", sub_activity_id="abc", note="plan sprint")
    day = paint(day, "08:00", "08:30", "waste", track=Track.ACTUAL)

    day_service.save_day("2024-04-30", day, today=TODAY)

    assert day_service.load_day("2024-04-30", today=TODAY) == day
    assert day_service.get_stored_day(date(2024, 4, 30)) == day


def test_saving_today_mirrors_legacy_key(temp_db, day_service, empty_day):
    day = paint(empty_day, "08:00", "09:00", "work")

    day_service.save_day(TODAY, day, today=TODAY)

    assert temp_db.get(LEGACY_DAY_KEY) == temp_db.get(day_key(TODAY))


def test_saving_other_day_leaves_legacy_key(temp_db, day_service, empty_day):
    day_service.save_day("2024-04-01", empty_day, today=TODAY)

    assert temp_db.get(LEGACY_DAY_KEY) is None


def test_legacy_key_is_only_used_for_today(temp_db, day_service):
    temp_db.set(LEGACY_DAY_KEY, _legacy_day_value("work_deep"))

    today = day_service.load_day(TODAY, today=TODAY)
    other = day_service.load_day("2024-05-02", today=TODAY)

    assert len(today) == 288
    assert all(slot.plan_category_id == "work" for slot in today)
    assert other == generate_canonical_day()


def test_template_fills_new_day(day_service, empty_day):
    template = paint(empty_day, "08:00", "08:05", "sleep", note="template note")
    day_service.save_template(template)

    day = day_service.load_day("2024-05-10", today=TODAY)

    eight = day[slot_index(8, 0)]
    assert eight.plan_category_id == "sleep"
    assert eight.actual_category_id == "sleep"
    assert eight.note is None


def test_saved_day_wins_over_template(day_service, empty_day):
    day_service.save_template(paint(empty_day, "08:00", "12:00", "sleep"))
    saved = paint(empty_day, "08:00", "12:00", "work")
    day_service.save_day("2024-05-10", saved, today=TODAY)

    assert day_service.load_day("2024-05-10", today=TODAY) == saved


def test_damaged_day_loads_empty(temp_db, day_service, empty_day):
    day_service.save_template(paint(empty_day, "08:00", "12:00", "sleep"))
    temp_db.set(day_key("2024-05-10"), "not json at all")

    assert day_service.load_day("2024-05-10", today=TODAY) == generate_canonical_day()


def test_damaged_legacy_and_template_are_skipped(temp_db, day_service):
    temp_db.set(LEGACY_DAY_KEY, '{"slots": []}')
    temp_db.set(TEMPLATE_KEY, "[1, 2, 3]")

    assert day_service.load_day(TODAY, today=TODAY) == generate_canonical_day()
    assert day_service.get_stored_template() is None
    assert day_service.load_template() == generate_canonical_day()


def test_clear_template(day_service, empty_day):
    assert day_service.clear_template() is False

    day_service.save_template(paint(empty_day, "08:00", "12:00", "sleep"))

    assert day_service.clear_template() is True
    assert day_service.get_stored_template() is None


def test_list_saved_dates(temp_db, day_service, empty_day):
    for day in ("2024-05-03", "2023-12-31", "2024-05-01"):
        day_service.save_day(day, empty_day, today=TODAY)
    temp_db.set("slots_garbage", "[]")

    assert day_service.list_saved_dates() == [
        date(2023, 12, 31),
        date(2024, 5, 1),
        date(2024, 5, 3),
    ]


def test_upgrade_stored_values(temp_db, day_service, empty_day):
    temp_db.set(day_key("2024-01-01"), _legacy_day_value("transit"))
    day_service.save_day("2024-01-02", empty_day, today=TODAY)
    temp_db.set(day_key("2024-01-03"), "oops")
    temp_db.set(TEMPLATE_KEY, _legacy_day_value("work_shallow"))

    dry = day_service.upgrade_stored_values(dry_run=True)
    assert temp_db.get(day_key("2024-01-01")) == _legacy_day_value("transit")

    result = day_service.upgrade_stored_values()

    assert dry == result
    assert result["upgraded"] == [day_key("2024-01-01"), TEMPLATE_KEY]
    assert result["unchanged"] == [day_key("2024-01-02")]
    assert result["failed"] == [day_key("2024-01-03")]

    upgraded = json.loads(temp_db.get(day_key("2024-01-01")))
    assert len(upgraded) == 288
    assert {record["planCategoryId"] for record in upgraded} == {"routine"}
    assert temp_db.get(TEMPLATE_KEY) == dump_slots(day_service.load_template())

    again = day_service.upgrade_stored_values()
    assert again["upgraded"] == []


def test_clear_sub_activity_references(temp_db, day_service, empty_day):
    painted = paint(empty_day, "09:00", "10:00", "work", sub_activity_id="s1")
    day_service.save_day("2024-04-30", painted, today=TODAY)
    day_service.save_day("2024-04-29", paint(empty_day, "09:00", "10:00", "work"), today=TODAY)
    temp_db.set(day_key("2024-04-28"), "not json")

    rewritten = day_service.clear_sub_activity_references("s1")

    assert rewritten == [day_key("2024-04-30")]
    assert temp_db.get(day_key("2024-04-28")) == "not json"
    cleared = day_service.get_stored_day("2024-04-30")
    assert cleared == paint(empty_day, "09:00", "10:00", "work")
