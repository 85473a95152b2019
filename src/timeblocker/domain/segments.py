"""Compress per-slot assignments into contiguous segments.

Two forms exist because their consumers need different things:

- ``compress_hour`` works inside one 12-slot hour window and keeps empty
  runs, so an hour row of the grid is always fully covered.
- ``compress_day`` scans the whole day, so an activity crossing an hour
  boundary stays one block; empty runs are dropped and notes are collected.

In both forms two slots share a segment iff their category id and effective
sub-activity id are equal (None equals None).
"""

from typing import Optional, Sequence

from timeblocker.domain.entities import Segment, TimeSlot, Track
from timeblocker.domain.time_grid import HOURS_PER_DAY, SLOTS_PER_HOUR, hour_window


def _slot_key(slot: TimeSlot, track: Track) -> tuple[Optional[str], Optional[str]]:
    return slot.category_for(track), slot.sub_activity_for(track)


def compress_hour(slots: Sequence[TimeSlot], hour: int, track: Track) -> list[Segment]:
    """Compress the 12 slots of one hour.

    Segment start indexes are positions in the full day. Counts always add up
    to the number of slots in the window.
    """
    window = hour_window(slots, hour)
    offset = hour * SLOTS_PER_HOUR
    segments: list[Segment] = []
    if not window:
        return segments

    run_key = _slot_key(window[0], track)
    run_start = 0
    for position, slot in enumerate(window[1:], start=1):
        key = _slot_key(slot, track)
        if key != run_key:
            segments.append(
                Segment(run_key[0], run_key[1], offset + run_start, position - run_start)
            )
            run_key, run_start = key, position
    segments.append(
        Segment(run_key[0], run_key[1], offset + run_start, len(window) - run_start)
    )
    return segments


def compress_grid(slots: Sequence[TimeSlot], track: Track) -> list[list[Segment]]:
    """Compress every hour of the day; one list of segments per hour row."""
    return [compress_hour(slots, hour, track) for hour in range(HOURS_PER_DAY)]


class _Run:
    """Open run while scanning the whole day."""

    def __init__(self, key: tuple[Optional[str], Optional[str]], start: int):
        self.key = key
        self.start = start
        # dict keeps first-seen order and drops duplicates
        self.notes: dict[str, None] = {}

    def add_note(self, note: Optional[str]) -> None:
        if note:
            self.notes.setdefault(note, None)

    def finish(self, end: int) -> Optional[Segment]:
        category_id, sub_activity_id = self.key
        if category_id is None:
            return None
        return Segment(
            category_id=category_id,
            sub_activity_id=sub_activity_id,
            start_index=self.start,
            count=end - self.start,
            note="; ".join(self.notes) or None,
        )


def compress_day(slots: Sequence[TimeSlot], track: Track) -> list[Segment]:
    """Compress a whole day into activity blocks, ignoring hour boundaries.

    Runs without a category are gaps and produce no segment. Distinct
    non-empty notes inside a run are joined with "; " in first-seen order.
    """
    segments: list[Segment] = []
    run: Optional[_Run] = None

    for index, slot in enumerate(slots):
        key = _slot_key(slot, track)
        if run is None or key != run.key:
            if run is not None:
                segment = run.finish(index)
                if segment is not None:
                    segments.append(segment)
            run = _Run(key, index)
        run.add_note(slot.note)

    if run is not None:
        segment = run.finish(len(slots))
        if segment is not None:
            segments.append(segment)
    return segments
