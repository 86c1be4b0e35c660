"""Classify event timing as timed, all-day or multi-day."""
import enum
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Optional

from processor.models import LocalDateTime


ALL_DAY_THRESHOLD_HOURS = 4


class TimeKind(enum.Enum):
    """How an event's timing is represented in the calendar."""
    TIMED = "timed"
    ALL_DAY = "all_day"
    MULTI_DAY = "multi_day"


@dataclass(frozen=True)
class TimeClassification:
    """Result of classifying an event's start/end."""
    kind: TimeKind
    start: LocalDateTime
    end: LocalDateTime
    duration_hours: float
    time_note: Optional[str] = None

    @property
    def is_all_day(self) -> bool:
        return self.kind is not TimeKind.TIMED

    @property
    def end_date_exclusive(self) -> date:
        """Day after the last included day, for date-only DTEND values."""
        return self.end.date + timedelta(days=1)


def _decimal_hours(value: time) -> float:
    return value.hour + value.minute / 60 + value.second / 3600


def format_12_hour(value: time) -> str:
    """
    Format a clock time for humans, e.g. "5 PM" or "7:30 AM".

    Args:
        value: Local clock time

    Returns:
        12-hour time without leading zero, minutes omitted on the hour
    """
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    if value.minute:
        return f"{hour}:{value.minute:02d} {suffix}"
    return f"{hour} {suffix}"


def classify(start: LocalDateTime, end: Optional[LocalDateTime] = None) -> TimeClassification:
    """
    Decide how an event should be represented.

    Start and end on different dates is a multi-day span. On the same date,
    a duration of four hours or more is shown as an all-day entry. Anything
    shorter is a timed block. The duration is the literal difference of the
    two clock times, so an end earlier than the start stays negative.

    Args:
        start: Local start date and time
        end: Local end date and time, defaults to start

    Returns:
        TimeClassification with a time note for all-day kinds
    """
    if end is None:
        end = start

    duration = _decimal_hours(end.time) - _decimal_hours(start.time)

    if start.date != end.date:
        kind = TimeKind.MULTI_DAY
    elif duration >= ALL_DAY_THRESHOLD_HOURS:
        kind = TimeKind.ALL_DAY
    else:
        kind = TimeKind.TIMED

    time_note = None
    if kind is not TimeKind.TIMED:
        time_note = f"{format_12_hour(start.time)} – {format_12_hour(end.time)}"

    return TimeClassification(
        kind=kind,
        start=start,
        end=end,
        duration_hours=duration,
        time_note=time_note
    )

