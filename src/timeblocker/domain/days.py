"""Day and template domain service."""

import logging
from datetime import date
from typing import Optional, Sequence, Union

from timeblocker.database.base import KeyValueStore
from timeblocker.database.mappers import dump_slots, load_slots
from timeblocker.domain.entities import TimeSlot
from timeblocker.domain.errors import DeserializationError
from timeblocker.domain.migration import migrate_slots
from timeblocker.domain.time_grid import (
    apply_template,
    clear_sub_activity,
    generate_canonical_day,
)
from timeblocker.utils.date_parser import to_date, to_date_string

logger = logging.getLogger(__name__)

DAY_KEY_PREFIX = "slots_"
# Written by releases that only kept "today"; still mirrored for them.
LEGACY_DAY_KEY = "timeblocker_data"
TEMPLATE_KEY = "timeblocker_template"


def day_key(day: Union[date, str]) -> str:
    """Return the store key of a day."""
    return f"{DAY_KEY_PREFIX}{to_date_string(to_date(day))}"


class DayService:
    """Service for loading and saving days and the day template."""

    def __init__(self, store: KeyValueStore):
        """Initialize day service.

        Args:
            store: Key-value store instance
        """
        self.store = store

    def _decode(self, value: str) -> tuple[TimeSlot, ...]:
        return migrate_slots(load_slots(value))

    def get_stored_day(self, day: Union[date, str]) -> Optional[tuple[TimeSlot, ...]]:
        """Get the day stored under its own key.

        Args:
            day: Date or YYYY-MM-DD string

        Returns:
            Migrated slots, or None if the day was never saved

        Raises:
            DeserializationError: If the stored value cannot be decoded
        """
        value = self.store.get(day_key(day))
        if value is None:
            return None
        return self._decode(value)

    def load_day(
        self, day: Union[date, str], today: Optional[date] = None
    ) -> tuple[TimeSlot, ...]:
        """Load a day for editing.

        Falls back in order: the day's own key, the legacy key (only when the
        day is today), the template applied to a new day, an empty day.
        A damaged value under the day's own key yields an empty day; a damaged
        legacy value or template is skipped.

        Args:
            day: Date or YYYY-MM-DD string
            today: Override for the current date

        Returns:
            Canonical 288-slot day
        """
        target = to_date(day)
        today = today or date.today()

        try:
            stored = self.get_stored_day(target)
        except DeserializationError as e:
            logger.warning("Damaged day %s, starting from an empty day: %s", target, e)
            return generate_canonical_day()
        if stored is not None:
            return stored

        if target == today:
            legacy = self.store.get(LEGACY_DAY_KEY)
            if legacy is not None:
                try:
                    return self._decode(legacy)
                except DeserializationError as e:
                    logger.warning("Ignoring damaged legacy day: %s", e)

        template = self.get_stored_template()
        if template is not None:
            logger.debug("Applying template to new day %s", target)
            return apply_template(template)

        return generate_canonical_day()

    def save_day(
        self,
        day: Union[date, str],
        slots: Sequence[TimeSlot],
        today: Optional[date] = None,
    ) -> None:
        """Persist a whole day.

        Saving today's day also refreshes the legacy key.
        """
        target = to_date(day)
        today = today or date.today()
        value = dump_slots(slots)

        self.store.set(day_key(target), value)
        if target == today:
            self.store.set(LEGACY_DAY_KEY, value)

    def list_saved_dates(self) -> list[date]:
        """List dates that have a stored day, ascending."""
        dates = []
        for key in self.store.list_keys(prefix=DAY_KEY_PREFIX):
            try:
                dates.append(to_date(key[len(DAY_KEY_PREFIX) :]))
            except ValueError:
                logger.warning("Ignoring store key with a bad date: %s", key)
        return sorted(dates)

    def get_stored_template(self) -> Optional[tuple[TimeSlot, ...]]:
        """Get the saved template, or None if none is saved or it is damaged."""
        value = self.store.get(TEMPLATE_KEY)
        if value is None:
            return None
        try:
            return self._decode(value)
        except DeserializationError as e:
            logger.warning("Ignoring damaged template: %s", e)
            return None

    def load_template(self) -> tuple[TimeSlot, ...]:
        """Load the template for editing; an empty day if none is saved."""
        return self.get_stored_template() or generate_canonical_day()

    def save_template(self, slots: Sequence[TimeSlot]) -> None:
        self.store.set(TEMPLATE_KEY, dump_slots(slots))

    def clear_template(self) -> bool:
        """Remove the template. Returns True if one was saved."""
        return self.store.delete(TEMPLATE_KEY)

    def _stored_slot_keys(self) -> list[str]:
        """Keys of every stored day, the legacy day and the template."""
        keys = self.store.list_keys(prefix=DAY_KEY_PREFIX)
        keys.extend(key for key in (LEGACY_DAY_KEY, TEMPLATE_KEY) if self.store.get(key) is not None)
        return keys

    def clear_sub_activity_references(self, sub_activity_id: str) -> list[str]:
        """Remove a sub-activity from every stored day, the legacy day and
        the template. Categories are kept.

        Values that cannot be decoded are left untouched.

        Returns:
            Store keys that were rewritten
        """
        rewritten = []
        for key in self._stored_slot_keys():
            try:
                slots = self._decode(self.store.get(key))
            except DeserializationError as e:
                logger.warning("Cannot clear sub-activity from %s: %s", key, e)
                continue

            cleared = clear_sub_activity(slots, sub_activity_id)
            if cleared != slots:
                self.store.set(key, dump_slots(cleared))
                rewritten.append(key)
        logger.debug("Cleared sub-activity %s from %d stored values", sub_activity_id, len(rewritten))
        return rewritten

    def upgrade_stored_values(self, dry_run: bool = False) -> dict[str, list[str]]:
        """Rewrite every stored day, the legacy day and the template in the
        current layout.

        Args:
            dry_run: If True, only report what would change

        Returns:
            Dict with "upgraded", "unchanged" and "failed" lists of store keys
        """
        keys = self._stored_slot_keys()

        result: dict[str, list[str]] = {"upgraded": [], "unchanged": [], "failed": []}
        for key in keys:
            value = self.store.get(key)
            try:
                upgraded = dump_slots(self._decode(value))
            except DeserializationError as e:
                logger.warning("Cannot upgrade %s: %s", key, e)
                result["failed"].append(key)
                continue

            if upgraded == value:
                result["unchanged"].append(key)
                continue
            if not dry_run:
                self.store.set(key, upgraded)
            result["upgraded"].append(key)
        return result
