"""Domain model entities for timeblocker.

These are pure data classes describing a planned/tracked day, independent of
how the day is serialized in the key-value store.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


def _index_label(index: int) -> str:
    hour, minute = divmod(index * 5, 60)
    return f"{hour:02d}:{minute:02d}"


class Track(str, Enum):
    """Which half of a slot is being read or painted."""

    PLAN = "plan"
    ACTUAL = "actual"


@dataclass(frozen=True)
class Category:
    """Activity category from the fixed category table."""

    id: str
    name: str
    color_class: str
    text_color_class: str

    @property
    def is_resolved(self) -> bool:
        return True


@dataclass(frozen=True)
class UnresolvedCategory:
    """Lookup result for a category id that is not in the category table."""

    id: str
    name: str = "Unknown"

    @property
    def is_resolved(self) -> bool:
        return False


@dataclass(frozen=True)
class SubActivity:
    """User-defined child activity of exactly one category."""

    id: str
    parent_id: str
    name: str


@dataclass(frozen=True)
class TimeSlot:
    """One 5-minute slot of a day, carrying both plan and actual values."""

    hour: int
    minute: int
    plan_category_id: Optional[str] = None
    plan_sub_activity_id: Optional[str] = None
    actual_category_id: Optional[str] = None
    actual_sub_activity_id: Optional[str] = None
    note: Optional[str] = None

    @property
    def time_label(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    @property
    def id(self) -> str:
        return self.time_label

    def category_for(self, track: Track) -> Optional[str]:
        """Return the category id stored on the given track."""
        if track == Track.PLAN:
            return self.plan_category_id
        return self.actual_category_id

    def sub_activity_for(self, track: Track) -> Optional[str]:
        """Return the sub-activity id on the given track.

        A slot without a category never reports a sub-activity, whatever
        value happens to be stored.
        """
        if self.category_for(track) is None:
            return None
        if track == Track.PLAN:
            return self.plan_sub_activity_id
        return self.actual_sub_activity_id


@dataclass(frozen=True)
class Segment:
    """Run of consecutive slots sharing category and sub-activity on one track."""

    category_id: Optional[str]
    sub_activity_id: Optional[str]
    start_index: int
    count: int
    note: Optional[str] = None

    @property
    def end_index(self) -> int:
        """Index of the first slot after the run."""
        return self.start_index + self.count

    @property
    def start_hour(self) -> int:
        return self.start_index // 12

    @property
    def start_label(self) -> str:
        return _index_label(self.start_index)

    @property
    def end_label(self) -> str:
        """Label of the boundary after the run; a run ending the day ends at 24:00."""
        return _index_label(self.end_index)

    @property
    def minutes(self) -> int:
        return self.count * 5


@dataclass(frozen=True)
class AggregatedCategoryStat:
    """Slot count and share of one category over a scanned date range."""

    category_id: str
    count: int
    total_minutes: int
    percentage: float


@dataclass(frozen=True)
class StatisticsReport:
    """Result of aggregating one track over a range of stored days."""

    track: Track
    start_date: date
    end_date: date
    categories: tuple[AggregatedCategoryStat, ...] = field(default_factory=tuple)
    total_minutes: int = 0
    days_scanned: int = 0
    days_found: int = 0
    days_skipped: int = 0
