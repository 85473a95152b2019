"""Canonical 5-minute time grid and pure slot transforms."""

import re
from dataclasses import replace
from typing import Optional, Sequence

from timeblocker.domain.categories import is_known_category
from timeblocker.domain.entities import TimeSlot, Track
from timeblocker.domain.errors import (
    ValidationError,
    category_not_found,
    invalid_slot_range,
    invalid_time_label,
)

SLOT_MINUTES = 5
SLOTS_PER_HOUR = 60 // SLOT_MINUTES
HOURS_PER_DAY = 24
SLOTS_PER_DAY = HOURS_PER_DAY * SLOTS_PER_HOUR

_TIME_LABEL_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def format_time_label(hour: int, minute: int) -> str:
    """Format an hour and minute as a zero-padded HH:MM label."""
    return f"{hour:02d}:{minute:02d}"


def slot_index(hour: int, minute: int) -> int:
    """Return the position of the slot starting at hour:minute."""
    return hour * SLOTS_PER_HOUR + minute // SLOT_MINUTES


def index_to_label(index: int) -> str:
    """Return the time label at a slot boundary.

    Index 288 is the end of the day and is labelled 24:00.
    """
    hour, minute = divmod(index * SLOT_MINUTES, 60)
    return format_time_label(hour, minute)


def parse_time_label(label: str) -> int:
    """Parse an HH:MM label into a slot boundary index (0..288).

    Raises:
        ValidationError: If the label is malformed or not on the 5-minute grid
    """
    match = _TIME_LABEL_RE.match(label.strip())
    if match is None:
        raise ValidationError(invalid_time_label(label))
    hour, minute = int(match.group(1)), int(match.group(2))
    if minute % SLOT_MINUTES != 0 or minute >= 60:
        raise ValidationError(invalid_time_label(label))
    if hour > HOURS_PER_DAY or (hour == HOURS_PER_DAY and minute != 0):
        raise ValidationError(invalid_time_label(label))
    return slot_index(hour, minute)


def generate_canonical_day() -> tuple[TimeSlot, ...]:
    """Build the empty day: 288 slots ordered from 00:00 to 23:55."""
    return tuple(
        TimeSlot(hour=hour, minute=minute)
        for hour in range(HOURS_PER_DAY)
        for minute in range(0, 60, SLOT_MINUTES)
    )


def hour_window(slots: Sequence[TimeSlot], hour: int) -> Sequence[TimeSlot]:
    """Return the 12 slots belonging to one hour."""
    start = hour * SLOTS_PER_HOUR
    return slots[start : start + SLOTS_PER_HOUR]


def apply_template(template_slots: Sequence[TimeSlot]) -> tuple[TimeSlot, ...]:
    """Turn a template's plan into a new day.

    The template plan is copied onto both the plan and the actual track and
    notes are cleared. The template must already be in canonical shape.
    """
    return tuple(
        replace(
            slot,
            actual_category_id=slot.plan_category_id,
            actual_sub_activity_id=slot.sub_activity_for(Track.PLAN),
            plan_sub_activity_id=slot.sub_activity_for(Track.PLAN),
            note=None,
        )
        for slot in template_slots
    )


def assign_slots(
    slots: Sequence[TimeSlot],
    start: int,
    end: int,
    track: Track,
    category_id: Optional[str],
    sub_activity_id: Optional[str] = None,
) -> tuple[TimeSlot, ...]:
    """Paint slots [start, end) of one track.

    A category_id of None erases the range; the sub-activity is always
    cleared together with the category.

    Raises:
        ValidationError: If the range is empty or out of bounds, or the
            category is not in the category table
    """
    if not 0 <= start < end <= len(slots):
        raise ValidationError(invalid_slot_range(start, end))
    if category_id is not None and not is_known_category(category_id):
        raise ValidationError(category_not_found(category_id))

    sub_id = sub_activity_id if category_id is not None else None
    if track == Track.PLAN:
        changes = {"plan_category_id": category_id, "plan_sub_activity_id": sub_id}
    else:
        changes = {"actual_category_id": category_id, "actual_sub_activity_id": sub_id}

    return tuple(
        replace(slot, **changes) if start <= index < end else slot
        for index, slot in enumerate(slots)
    )


def set_note(
    slots: Sequence[TimeSlot], index: int, note: Optional[str]
) -> tuple[TimeSlot, ...]:
    """Set or clear (empty/None) the note of one slot."""
    if not 0 <= index < len(slots):
        raise ValidationError(invalid_slot_range(index, index + 1))
    cleaned = note.strip() if note else None
    return tuple(
        replace(slot, note=cleaned or None) if position == index else slot
        for position, slot in enumerate(slots)
    )


def clear_sub_activity(
    slots: Sequence[TimeSlot], sub_activity_id: str
) -> tuple[TimeSlot, ...]:
    """Drop every reference to a deleted sub-activity, keeping the categories."""
    cleared = []
    for slot in slots:
        if slot.plan_sub_activity_id == sub_activity_id:
            slot = replace(slot, plan_sub_activity_id=None)
        if slot.actual_sub_activity_id == sub_activity_id:
            slot = replace(slot, actual_sub_activity_id=None)
        cleared.append(slot)
    return tuple(cleared)
