#!/usr/bin/env python3
"""
Report helpers for the statistics and timeline views.
Turns ledger snapshots into labels and geometry the presentation layer draws.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .ledger import SECONDS_PER_DAY

START_HOUR = 8
END_HOUR = 19  # exclusive

OFFSET_STEP = 30 * 60
OFFSET_FINE_STEP = 10 * 60


@dataclass
class StatisticsRow:
    name: str
    seconds: int
    proportion: float

    @property
    def label(self) -> str:
        hours = self.seconds // 3600
        minutes = (self.seconds % 3600) // 60
        return f"{hours:2}h{minutes:2} ● {self.name}"

    def bar(self, width: int = 20) -> str:
        """Proportion bar; the longest activity fills ``width`` cells."""
        return "█" * round(self.proportion * width)


# Coloured markers for six equal hue sectors, starting at red
HUE_MARKERS = ("🔴", "🟡", "🟢", "🔵", "🟣", "🟠")


@dataclass
class TimelineSegment:
    """Position of an interval on the day timeline, in percent."""

    name: str
    left: float
    width: float
    hue: int
    is_open: bool = False

    @property
    def marker(self) -> str:
        """Coloured dot for the hue; a hollow one while still running."""
        if self.is_open:
            return "○"
        return HUE_MARKERS[self.hue * len(HUE_MARKERS) // 360]


def statistics_rows(times: Dict[str, int]) -> List[StatisticsRow]:
    """Activities sorted longest first, sized relative to the longest one."""
    ordered = sorted(times.items(), key=lambda item: item[1], reverse=True)
    max_time = max((seconds for _, seconds in ordered), default=1) or 1
    return [
        StatisticsRow(name, seconds, seconds / max_time) for name, seconds in ordered
    ]


def name_hue(name: str) -> int:
    """Stable colour hue for an activity name."""
    hue = 0
    for byte in name.encode("utf-8"):
        hue += byte * 360 // 255
    return hue % 360


def _timeline_bounds(instant: int, start_hour: int, end_hour: int) -> Tuple[int, int]:
    day_start = instant - instant % SECONDS_PER_DAY
    return day_start + start_hour * 3600, day_start + end_hour * 3600


def timeline_segment(
    name: str,
    start: int,
    end: Optional[int],
    now: int,
    start_hour: int = START_HOUR,
    end_hour: int = END_HOUR,
) -> TimelineSegment:
    """Place an interval on the timeline of the day it started in."""
    timeline_start, timeline_end = _timeline_bounds(start, start_hour, end_hour)
    duration = timeline_end - timeline_start
    stop = now if end is None else end
    return TimelineSegment(
        name=name,
        left=(start - timeline_start) / duration * 100.0,
        width=(stop - start) / duration * 100.0,
        hue=name_hue(name),
        is_open=end is None,
    )


def timeline_segments(
    activities: Iterable[Tuple[str, int, Optional[int]]],
    now: int,
    start_hour: int = START_HOUR,
    end_hour: int = END_HOUR,
) -> List[TimelineSegment]:
    return [
        timeline_segment(name, start, end, now, start_hour, end_hour)
        for name, start, end in activities
    ]


def now_marker(now: int, start_hour: int = START_HOUR, end_hour: int = END_HOUR) -> float:
    """Left position of the current instant, in percent."""
    timeline_start, timeline_end = _timeline_bounds(now, start_hour, end_hour)
    return (now - timeline_start) / (timeline_end - timeline_start) * 100.0


def hour_labels(start_hour: int = START_HOUR, end_hour: int = END_HOUR) -> List[Tuple[str, float]]:
    span = end_hour - start_hour
    return [
        (f"{hour:02}:00", (hour - start_hour) / span * 100.0)
        for hour in range(start_hour, end_hour + 1)
    ]


def format_offset(offset: int) -> str:
    """Describe an offset relative to now, e.g. "in 1h and 30m" or "45m ago"."""
    if offset == 0:
        return "now"

    future = offset > 0
    offset = abs(offset)
    hours = offset // 3600
    minutes = (offset % 3600) // 60

    if hours and minutes:
        text = f"{hours}h and {minutes}m"
    elif hours:
        text = f"{hours}h"
    elif minutes:
        text = f"{minutes}m"
    else:
        text = ""

    return f"in {text}" if future else f"{text} ago"


def adjust_offset(
    offset: int,
    forward: bool,
    fine: bool = False,
    step: int = OFFSET_STEP,
    fine_step: int = OFFSET_FINE_STEP,
) -> int:
    """Move an offset one step forward or back."""
    delta = fine_step if fine else step
    return offset + delta if forward else offset - delta
