"""Render a single event record into a VEVENT block."""
import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from processor.description import compose_description
from processor.models import DEFAULT_EVENT_TITLE, CalendarSettings, EventRecord, LocalDateTime
from processor.text import escape_ics_text
from processor.time_classifier import TimeClassification, classify

logger = logging.getLogger(__name__)


def format_utc_timestamp(value: datetime) -> str:
    """Format a timestamp as UTC YYYYMMDDTHHMMSSZ."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def _format_local(value: LocalDateTime) -> str:
    return datetime.combine(value.date, value.time).strftime("%Y%m%dT%H%M%S")


class EventRenderer:
    """Renderer turning EventRecord objects into VEVENT content lines."""

    def __init__(self, settings: CalendarSettings):
        """
        Initialize the renderer.

        Args:
            settings: Calendar settings (base URL, UID domain, time zone)
        """
        self.settings = settings

    def render(
        self,
        record: EventRecord,
        generated_at: datetime
    ) -> Optional[Tuple[str, ...]]:
        """
        Render one event as unfolded content lines.

        Args:
            record: Event record to render
            generated_at: Generation timestamp used for DTSTAMP

        Returns:
            Tuple of content lines from BEGIN:VEVENT to END:VEVENT, or None
            when the record has no start date
        """
        if record.start is None:
            logger.info(f"Skipping event {record.id}: no start date")
            return None

        classification = classify(record.start, record.end)
        if classification.duration_hours < 0 and not classification.is_all_day:
            logger.warning(
                f"Event {record.id} ends before it starts on the same date "
                f"({classification.duration_hours:.2f} hours)"
            )

        description = compose_description(record, classification, self.settings)

        lines = [
            "BEGIN:VEVENT",
            f"UID:{self.settings.event_uid(record.id)}",
            f"DTSTAMP:{format_utc_timestamp(generated_at)}",
        ]
        lines.extend(self._date_lines(classification))
        lines.append(f"SUMMARY:{escape_ics_text(record.title or DEFAULT_EVENT_TITLE)}")

        venue = (record.venue or "").strip()
        if venue:
            lines.append(f"LOCATION:{escape_ics_text(venue)}")

        lines.append(f"DESCRIPTION:{escape_ics_text(description)}")
        lines.append(f"URL:{self.settings.event_url(record.id)}")

        category_names = [c.name for c in record.categories if c.name]
        if category_names:
            escaped = ",".join(escape_ics_text(name) for name in category_names)
            lines.append(f"CATEGORIES:{escaped}")

        lines.append("END:VEVENT")
        return tuple(lines)

    def _date_lines(self, classification: TimeClassification) -> List[str]:
        """
        Build DTSTART/DTEND lines for a classification.

        All-day kinds use date values with an exclusive end date; timed
        events carry local times qualified with the calendar's zone.
        """
        if classification.is_all_day:
            return [
                f"DTSTART;VALUE=DATE:{_format_date(classification.start.date)}",
                f"DTEND;VALUE=DATE:{_format_date(classification.end_date_exclusive)}",
            ]

        tzid = self.settings.timezone
        return [
            f"DTSTART;TZID={tzid}:{_format_local(classification.start)}",
            f"DTEND;TZID={tzid}:{_format_local(classification.end)}",
        ]
