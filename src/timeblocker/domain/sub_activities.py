"""Sub-activity domain service."""

import logging
import uuid
from typing import Optional

from timeblocker.database.base import KeyValueStore
from timeblocker.database.mappers import dump_sub_activities, load_sub_activities
from timeblocker.domain.categories import is_known_category
from timeblocker.domain.days import DayService
from timeblocker.domain.entities import SubActivity
from timeblocker.domain.errors import (
    DeserializationError,
    NotFoundError,
    ValidationError,
    category_not_found,
    sub_activity_not_found,
)

logger = logging.getLogger(__name__)

SUB_ACTIVITIES_KEY = "timeblocker_subactivities"


class SubActivityService:
    """Service for managing the global sub-activity list."""

    def __init__(self, store: KeyValueStore):
        """Initialize sub-activity service.

        Args:
            store: Key-value store instance
        """
        self.store = store

    def _load_all(self) -> list[SubActivity]:
        value = self.store.get(SUB_ACTIVITIES_KEY)
        if value is None:
            return []
        try:
            return load_sub_activities(value)
        except DeserializationError as e:
            logger.warning("Ignoring damaged sub-activity list: %s", e)
            return []

    def _save_all(self, sub_activities: list[SubActivity]) -> None:
        self.store.set(SUB_ACTIVITIES_KEY, dump_sub_activities(sub_activities))

    def list_sub_activities(self, parent_id: Optional[str] = None) -> list[SubActivity]:
        """List sub-activities in creation order.

        Args:
            parent_id: Optional category id to filter by

        Returns:
            List of SubActivity
        """
        sub_activities = self._load_all()
        if parent_id is not None:
            sub_activities = [sub for sub in sub_activities if sub.parent_id == parent_id]
        return sub_activities

    def as_mapping(self) -> dict[str, SubActivity]:
        """Return sub-activities keyed by id."""
        return {sub.id: sub for sub in self._load_all()}

    def find_sub_activity(self, parent_id: str, value: str) -> Optional[SubActivity]:
        """Find a sub-activity of a category by id or by name."""
        for sub in self.list_sub_activities(parent_id=parent_id):
            if sub.id == value or sub.name == value:
                return sub
        return None

    def create_sub_activity(self, parent_id: str, name: str) -> SubActivity:
        """Create a sub-activity under a category.

        Args:
            parent_id: Owning category id
            name: Display name

        Returns:
            The created SubActivity

        Raises:
            ValidationError: If the category is unknown or the name is empty
        """
        name = name.strip()
        if not name:
            raise ValidationError("Sub-activity name cannot be empty")
        if not is_known_category(parent_id):
            raise ValidationError(category_not_found(parent_id))

        sub = SubActivity(id=uuid.uuid4().hex, parent_id=parent_id, name=name)
        sub_activities = self._load_all()
        sub_activities.append(sub)
        self._save_all(sub_activities)
        return sub

    def delete_sub_activity(self, sub_activity_id: str) -> SubActivity:
        """Delete a sub-activity.

        Slots referencing it in stored days and the template keep their
        category and lose the sub-activity.

        Raises:
            NotFoundError: If no sub-activity has that id
        """
        sub_activities = self._load_all()
        remaining = [sub for sub in sub_activities if sub.id != sub_activity_id]
        if len(remaining) == len(sub_activities):
            raise NotFoundError(sub_activity_not_found(sub_activity_id))
        self._save_all(remaining)
        DayService(self.store).clear_sub_activity_references(sub_activity_id)
        return next(sub for sub in sub_activities if sub.id == sub_activity_id)
