"""Upgrade stored slot arrays to the current day shape.

Two historical layouts are still found in stores:

- days saved with 10-minute slots (144 entries per day)
- slots referencing category ids that were later retired

``migrate_slots`` accepts either and always returns a canonical 288-slot day.
It is idempotent, so it is safe to run on every load.
"""

import logging
from dataclasses import replace
from typing import Sequence

from timeblocker.domain.categories import remap_legacy_category_id
from timeblocker.domain.entities import TimeSlot
from timeblocker.domain.time_grid import generate_canonical_day

logger = logging.getLogger(__name__)

LEGACY_SLOTS_PER_DAY = 144
LEGACY_SLOT_MINUTES = 10


def _index_by_time(slots: Sequence[TimeSlot]) -> dict[tuple[int, int], TimeSlot]:
    index: dict[tuple[int, int], TimeSlot] = {}
    for slot in slots:
        index.setdefault((slot.hour, slot.minute), slot)
    return index


def expand_legacy_slots(legacy_slots: Sequence[TimeSlot]) -> tuple[TimeSlot, ...]:
    """Split 10-minute slots into pairs of 5-minute slots.

    Both halves copy the category ids and note of their 10-minute parent.
    Sub-activities did not exist in that layout and are not carried over.
    """
    legacy_index = _index_by_time(legacy_slots)
    expanded = []
    for slot in generate_canonical_day():
        parent_minute = (slot.minute // LEGACY_SLOT_MINUTES) * LEGACY_SLOT_MINUTES
        parent = legacy_index.get((slot.hour, parent_minute))
        if parent is not None:
            slot = replace(
                slot,
                plan_category_id=parent.plan_category_id,
                actual_category_id=parent.actual_category_id,
                note=parent.note,
            )
        expanded.append(slot)
    return tuple(expanded)


def align_to_grid(slots: Sequence[TimeSlot]) -> tuple[TimeSlot, ...]:
    """Place slots onto the canonical grid by their hour and minute.

    Grid positions with no stored slot stay empty; when a time appears more
    than once the first occurrence wins.
    """
    stored = _index_by_time(slots)
    return tuple(
        stored.get((slot.hour, slot.minute), slot) for slot in generate_canonical_day()
    )


def remap_slot_categories(slot: TimeSlot) -> TimeSlot:
    """Replace retired category ids on both tracks."""
    return replace(
        slot,
        plan_category_id=remap_legacy_category_id(slot.plan_category_id),
        actual_category_id=remap_legacy_category_id(slot.actual_category_id),
    )


def normalize_slot(slot: TimeSlot) -> TimeSlot:
    """Drop sub-activities orphaned by a null category and empty notes."""
    return replace(
        slot,
        plan_sub_activity_id=(
            slot.plan_sub_activity_id if slot.plan_category_id is not None else None
        ),
        actual_sub_activity_id=(
            slot.actual_sub_activity_id if slot.actual_category_id is not None else None
        ),
        note=slot.note or None,
    )


def migrate_slots(raw_slots: Sequence[TimeSlot]) -> tuple[TimeSlot, ...]:
    """Upgrade a stored slot array to the canonical 288-slot day.

    Args:
        raw_slots: Slots decoded from a stored array, in stored order

    Returns:
        Tuple of 288 TimeSlot ordered from 00:00
    """
    slots = list(raw_slots)

    if len(slots) == LEGACY_SLOTS_PER_DAY:
        logger.debug("Expanding %d legacy 10-minute slots", len(slots))
        day = expand_legacy_slots(slots)
    else:
        day = align_to_grid(slots)

    return tuple(normalize_slot(remap_slot_categories(slot)) for slot in day)
