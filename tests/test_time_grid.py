"""Tests for the canonical time grid and slot transforms."""

import pytest

from conftest import paint
from timeblocker.domain.entities import TimeSlot, Track
from timeblocker.domain.errors import ValidationError
from timeblocker.domain.time_grid import (
    SLOTS_PER_DAY,
    apply_template,
    assign_slots,
    clear_sub_activity,
    generate_canonical_day,
    index_to_label,
    parse_time_label,
    set_note,
    slot_index,
)


def test_canonical_day_has_288_sorted_unique_slots():
    day = generate_canonical_day()

    assert len(day) == SLOTS_PER_DAY == 288
    keys = [(slot.hour, slot.minute) for slot in day]
    assert keys == sorted(keys)
    assert len({slot.time_label for slot in day}) == 288
    assert day[0].time_label == "00:00"
    assert day[1].time_label == "00:05"
    assert day[-1].time_label == "23:55"


def test_canonical_day_is_empty():
    for slot in generate_canonical_day():
        assert slot.plan_category_id is None
        assert slot.actual_category_id is None
        assert slot.plan_sub_activity_id is None
        assert slot.actual_sub_activity_id is None
        assert slot.note is None


def test_slot_identity_is_derived_from_time():
    slot = TimeSlot(hour=9, minute=5)
    assert slot.id == "09:05"
    assert slot.time_label == "09:05"


def test_index_labels():
    assert slot_index(8, 25) == 101
    assert index_to_label(0) == "00:00"
    assert index_to_label(101) == "08:25"
    assert index_to_label(288) == "24:00"


@pytest.mark.parametrize(
    "label, expected",
    [("00:00", 0), ("08:25", 101), ("8:30", 102), ("23:55", 287), ("24:00", 288)],
)
def test_parse_time_label(label, expected):
    assert parse_time_label(label) == expected


@pytest.mark.parametrize("label", ["08:07", "25:00", "24:05", "12:60", "noon", ""])
def test_parse_time_label_rejects_off_grid(label):
    with pytest.raises(ValidationError):
        parse_time_label(label)


def test_apply_template_copies_plan_to_actual_and_clears_notes(empty_day):
    template = paint(empty_day, "08:00", "08:05", "sleep", note="keep quiet")
    template = paint(template, "09:00", "10:00", "work", sub_activity_id="sub-1")

    day = apply_template(template)

    eight = day[slot_index(8, 0)]
    assert eight.plan_category_id == "sleep"
    assert eight.actual_category_id == "sleep"
    assert eight.note is None

    nine = day[slot_index(9, 30)]
    assert nine.actual_category_id == "work"
    assert nine.actual_sub_activity_id == "sub-1"
    assert len(day) == 288


def test_apply_template_ignores_template_actual(empty_day):
    template = paint(empty_day, "10:00", "11:00", "leisure", track=Track.ACTUAL)

    day = apply_template(template)

    assert all(slot.actual_category_id is None for slot in day)


def test_assign_slots_paints_one_track(empty_day):
    day = assign_slots(empty_day, 96, 102, Track.ACTUAL, "work", "sub-1")

    assert [slot.actual_category_id for slot in day[96:102]] == ["work"] * 6
    assert day[95].actual_category_id is None
    assert day[102].actual_category_id is None
    assert all(slot.plan_category_id is None for slot in day)
    assert day[96].actual_sub_activity_id == "sub-1"


def test_assign_slots_erase_clears_sub_activity(empty_day):
    day = assign_slots(empty_day, 0, 12, Track.PLAN, "work", "sub-1")
    day = assign_slots(day, 0, 6, Track.PLAN, None, "sub-1")

    assert day[0].plan_category_id is None
    assert day[0].plan_sub_activity_id is None
    assert day[6].plan_sub_activity_id == "sub-1"


@pytest.mark.parametrize("start, end", [(5, 5), (10, 3), (-1, 4), (280, 289)])
def test_assign_slots_rejects_bad_range(empty_day, start, end):
    with pytest.raises(ValidationError):
        assign_slots(empty_day, start, end, Track.PLAN, "work")


def test_assign_slots_rejects_unknown_category(empty_day):
    with pytest.raises(ValidationError, match="not found"):
        assign_slots(empty_day, 0, 1, Track.PLAN, "gardening")


def test_set_note_and_clear(empty_day):
    day = set_note(empty_day, 3, "  standup ")
    assert day[3].note == "standup"

    day = set_note(day, 3, "")
    assert day[3].note is None


def test_clear_sub_activity_keeps_category(empty_day):
    day = paint(empty_day, "08:00", "09:00", "work", sub_activity_id="gone")
    day = paint(day, "08:00", "09:00", "work", track=Track.ACTUAL, sub_activity_id="gone")

    cleared = clear_sub_activity(day, "gone")

    assert cleared[slot_index(8, 0)].plan_category_id == "work"
    assert cleared[slot_index(8, 0)].plan_sub_activity_id is None
    assert cleared[slot_index(8, 0)].actual_sub_activity_id is None
