"""Mapper functions to convert between domain entities and stored JSON.

Days and sub-activities are stored as JSON text in the key-value store, using
the camelCase record layout the planner has always written. This layer keeps
that layout out of the domain code.
"""

import json
from typing import Any, Mapping, Optional, Sequence

from timeblocker.domain.entities import SubActivity, TimeSlot
from timeblocker.domain.errors import DeserializationError


def _optional_id(value: Any) -> Optional[str]:
    # Stored ids are strings; anything falsy means "unassigned".
    if value is None or value == "":
        return None
    return str(value)


def _slot_time(record: Mapping[str, Any]) -> tuple[int, int]:
    hour = record.get("hour")
    minute = record.get("minute")
    if isinstance(hour, int) and isinstance(minute, int):
        return hour, minute

    label = record.get("timeLabel") or record.get("id")
    if isinstance(label, str) and ":" in label:
        hour_text, minute_text = label.split(":", 1)
        try:
            return int(hour_text), int(minute_text)
        except ValueError:
            pass
    raise DeserializationError(f"Slot record has no usable time: {dict(record)!r}")


def slot_from_record(record: Mapping[str, Any]) -> TimeSlot:
    """Convert a stored slot record to a TimeSlot entity."""
    if not isinstance(record, Mapping):
        raise DeserializationError(f"Slot record must be an object, got {type(record).__name__}")
    hour, minute = _slot_time(record)
    note = record.get("note")
    return TimeSlot(
        hour=hour,
        minute=minute,
        plan_category_id=_optional_id(record.get("planCategoryId")),
        plan_sub_activity_id=_optional_id(record.get("planSubActivityId")),
        actual_category_id=_optional_id(record.get("actualCategoryId")),
        actual_sub_activity_id=_optional_id(record.get("actualSubActivityId")),
        note=str(note) if note else None,
    )


def slot_to_record(slot: TimeSlot) -> dict[str, Any]:
    """Convert a TimeSlot entity to its stored record."""
    record: dict[str, Any] = {
        "id": slot.id,
        "timeLabel": slot.time_label,
        "hour": slot.hour,
        "minute": slot.minute,
        "planCategoryId": slot.plan_category_id,
        "planSubActivityId": slot.plan_sub_activity_id,
        "actualCategoryId": slot.actual_category_id,
        "actualSubActivityId": slot.actual_sub_activity_id,
    }
    if slot.note:
        record["note"] = slot.note
    return record


def dump_slots(slots: Sequence[TimeSlot]) -> str:
    """Serialize a day for the store."""
    return json.dumps([slot_to_record(slot) for slot in slots], ensure_ascii=False)


def load_slot_records(value: str) -> list[dict[str, Any]]:
    """Decode a stored day into its raw slot records.

    Raises:
        DeserializationError: If the value is not JSON or not a list of objects
    """
    try:
        data = json.loads(value)
    except (TypeError, ValueError, RecursionError) as e:
        raise DeserializationError(f"Stored day is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise DeserializationError(f"Stored day must be a list, got {type(data).__name__}")
    for record in data:
        if not isinstance(record, dict):
            raise DeserializationError("Stored day contains a non-object slot")
    return data


def load_slots(value: str) -> list[TimeSlot]:
    """Decode a stored day into slots, in stored order and not yet migrated."""
    return [slot_from_record(record) for record in load_slot_records(value)]


def sub_activity_to_record(sub_activity: SubActivity) -> dict[str, str]:
    return {
        "id": sub_activity.id,
        "parentId": sub_activity.parent_id,
        "name": sub_activity.name,
    }


def sub_activity_from_record(record: Mapping[str, Any]) -> SubActivity:
    try:
        return SubActivity(
            id=str(record["id"]),
            parent_id=str(record["parentId"]),
            name=str(record["name"]),
        )
    except (KeyError, TypeError) as e:
        raise DeserializationError(f"Invalid sub-activity record: {e}") from e


def dump_sub_activities(sub_activities: Sequence[SubActivity]) -> str:
    return json.dumps(
        [sub_activity_to_record(sub) for sub in sub_activities], ensure_ascii=False
    )


def load_sub_activities(value: str) -> list[SubActivity]:
    """Decode the stored sub-activity list.

    Raises:
        DeserializationError: If the value is not a JSON list of records
    """
    try:
        data = json.loads(value)
    except (TypeError, ValueError, RecursionError) as e:
        raise DeserializationError(f"Stored sub-activities are not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise DeserializationError("Stored sub-activities must be a list")
    return [sub_activity_from_record(record) for record in data]
