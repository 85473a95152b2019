"""Day report generator.

Builds the Markdown document copied out of the planner: a human-readable
plan/actual listing split into morning and afternoon, followed by one Mermaid
Gantt block per track. The layout is consumed by other tools and must stay
byte-stable.
"""

from typing import Optional, Sequence

from timeblocker.domain.categories import resolve_category
from timeblocker.domain.entities import Segment, SubActivity, TimeSlot, Track
from timeblocker.domain.segments import compress_day

NOON_HOUR = 12

TRACK_TITLES = {
    Track.PLAN: "计划 Plan",
    Track.ACTUAL: "实际 Actual",
}
MORNING_TITLE = "上午"
AFTERNOON_TITLE = "下午"
NO_RECORDS = "无记录"
# Mermaid cannot parse 24:00 with dateFormat HH:mm.
GANTT_END_OF_DAY = "23:59"
GANTT_PLACEHOLDER = f"{NO_RECORDS} : 00:00, 00:05"

_GANTT_UNSAFE = str.maketrans("", "", ":#")


def segment_display_name(
    segment: Segment, sub_activities: dict[str, SubActivity]
) -> str:
    """Name a segment as "category - sub-activity", "category" or "Unknown"."""
    category = resolve_category(segment.category_id)
    if not category.is_resolved:
        return category.name

    sub = None
    if segment.sub_activity_id is not None:
        sub = sub_activities.get(segment.sub_activity_id)
    if sub is not None and sub.parent_id == category.id:
        return f"{category.name} - {sub.name}"
    return category.name


def format_segment_line(segment: Segment, name: str) -> str:
    """Render one listing entry, with each note line quoted below it."""
    lines = [f"{segment.start_label} - {segment.end_label} {name}"]
    if segment.note:
        lines.extend(f"> {note_line}".rstrip() for note_line in segment.note.splitlines())
    return "\n".join(lines)


def gantt_task_name(name: str) -> str:
    """Strip characters that break a Mermaid task line."""
    cleaned = name.translate(_GANTT_UNSAFE).strip()
    return cleaned or "Unknown"


def format_gantt_task(segment: Segment, name: str) -> str:
    end_label = segment.end_label
    if end_label == "24:00":
        end_label = GANTT_END_OF_DAY
    return f"{gantt_task_name(name)} : {segment.start_label}, {end_label}"


def _period_lines(lines: list[str]) -> list[str]:
    return lines if lines else [NO_RECORDS]


def render_track_section(
    track: Track,
    segments: Sequence[Segment],
    sub_activities: dict[str, SubActivity],
) -> list[str]:
    """Render the listing of one track."""
    morning: list[str] = []
    afternoon: list[str] = []
    for segment in segments:
        line = format_segment_line(
            segment, segment_display_name(segment, sub_activities)
        )
        if segment.start_hour < NOON_HOUR:
            morning.append(line)
        else:
            afternoon.append(line)

    return [
        f"### {TRACK_TITLES[track]}",
        f"#### {MORNING_TITLE}",
        *_period_lines(morning),
        "",
        f"#### {AFTERNOON_TITLE}",
        *_period_lines(afternoon),
        "",
    ]


def render_gantt_block(
    track: Track,
    date: str,
    segments: Sequence[Segment],
    sub_activities: dict[str, SubActivity],
) -> list[str]:
    """Render the Mermaid Gantt block of one track."""
    tasks = [
        format_gantt_task(segment, segment_display_name(segment, sub_activities))
        for segment in segments
    ]
    if not tasks:
        tasks = [GANTT_PLACEHOLDER]

    return [
        "```mermaid",
        "gantt",
        f"    title {TRACK_TITLES[track]} {date}",
        "    dateFormat HH:mm",
        "    axisFormat %H:%M",
        f"    section {TRACK_TITLES[track]}",
        *(f"    {task}" for task in tasks),
        "```",
        "",
    ]


def export_day(
    slots: Sequence[TimeSlot],
    date: str,
    sub_activities: Optional[Sequence[SubActivity]] = None,
) -> str:
    """Export one day as Markdown with plan/actual listings and Gantt blocks.

    Args:
        slots: Canonical slots of the day
        date: Date string printed in the header, used verbatim
        sub_activities: Known sub-activities; ids that no longer resolve fall
            back to the category name

    Returns:
        The report text, ending with a newline
    """
    sub_index = {sub.id: sub for sub in sub_activities or ()}
    segments = {track: compress_day(slots, track) for track in Track}

    lines = [
        "## Day Planner",
        f"**这是{date}的日计划**",
        "",
    ]
    for track in Track:
        lines.extend(render_track_section(track, segments[track], sub_index))
    for track in Track:
        lines.extend(render_gantt_block(track, date, segments[track], sub_index))

    return "\n".join(lines)
