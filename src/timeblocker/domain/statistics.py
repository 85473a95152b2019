"""Multi-day category statistics."""

import logging
from collections import Counter
from datetime import date
from typing import Callable, Optional, Sequence, Union

from timeblocker.database.base import KeyValueStore
from timeblocker.domain.days import DayService
from timeblocker.domain.entities import (
    AggregatedCategoryStat,
    StatisticsReport,
    TimeSlot,
    Track,
)
from timeblocker.domain.errors import DeserializationError
from timeblocker.domain.time_grid import SLOT_MINUTES
from timeblocker.utils.date_parser import iter_dates, to_date, to_date_string

logger = logging.getLogger(__name__)

DayLookup = Callable[[str], Optional[Sequence[TimeSlot]]]


def build_category_stats(counts: Counter) -> tuple[AggregatedCategoryStat, ...]:
    """Turn per-category slot counts into sorted stats.

    Sorted by count descending; equal counts are ordered by category id.
    """
    total = sum(counts.values())
    stats = [
        AggregatedCategoryStat(
            category_id=category_id,
            count=count,
            total_minutes=count * SLOT_MINUTES,
            percentage=(count / total * 100) if total > 0 else 0.0,
        )
        for category_id, count in counts.items()
    ]
    stats.sort(key=lambda stat: (-stat.count, stat.category_id))
    return tuple(stats)


def aggregate(
    start_date: Union[date, str],
    end_date: Union[date, str],
    track: Track,
    day_lookup: DayLookup,
) -> StatisticsReport:
    """Aggregate category usage of one track over an inclusive date range.

    Args:
        start_date: First day of the range
        end_date: Last day of the range; a range ending before it starts is
            empty
        track: Plan or actual track
        day_lookup: Returns the slots stored for a YYYY-MM-DD date, None when
            nothing is stored, or raises DeserializationError for a damaged
            value (that date is skipped)

    Returns:
        StatisticsReport with per-category stats and total tracked minutes
    """
    start = to_date(start_date)
    end = to_date(end_date)

    counts: Counter = Counter()
    days_scanned = days_found = days_skipped = 0

    for day in iter_dates(start, end):
        days_scanned += 1
        date_str = to_date_string(day)
        try:
            slots = day_lookup(date_str)
        except DeserializationError as e:
            logger.warning("Skipping %s in statistics: %s", date_str, e)
            days_skipped += 1
            continue
        if slots is None:
            continue

        days_found += 1
        for slot in slots:
            category_id = slot.category_for(track)
            if category_id is not None:
                counts[category_id] += 1

    return StatisticsReport(
        track=track,
        start_date=start,
        end_date=end,
        categories=build_category_stats(counts),
        total_minutes=sum(counts.values()) * SLOT_MINUTES,
        days_scanned=days_scanned,
        days_found=days_found,
        days_skipped=days_skipped,
    )


class StatisticsService:
    """Service for aggregating stored days."""

    def __init__(self, store: KeyValueStore):
        """Initialize statistics service.

        Args:
            store: Key-value store holding the days
        """
        self.store = store

    def aggregate(
        self,
        start_date: Union[date, str],
        end_date: Union[date, str],
        track: Track = Track.ACTUAL,
    ) -> StatisticsReport:
        """Aggregate stored days between two dates (inclusive)."""
        day_service = DayService(self.store)
        return aggregate(start_date, end_date, track, day_service.get_stored_day)
