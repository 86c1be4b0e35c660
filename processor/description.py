"""Compose the free-text body of a calendar entry."""
from typing import List, Optional

from processor.models import CalendarSettings, EventRecord
from processor.status import resolve_status
from processor.text import strip_html
from processor.time_classifier import TimeClassification


def _price_line(record: EventRecord) -> str:
    if not record.tickets:
        return "Price: Free / Included"

    price = record.tickets[0].price
    if price is None:
        return "Price: RSVP (see event page)"
    if price > 0:
        return f"Price: ${price:.2f} per person"
    if price == 0:
        return "Price: Free"
    return "Price: RSVP (see event page)"


def _availability_line(record: EventRecord) -> Optional[str]:
    if not record.tickets:
        return None

    remaining = record.tickets[0].available_quantity or 0
    if remaining <= 0:
        return None
    plural = "s" if remaining != 1 else ""
    return f"Availability: {remaining} spot{plural} left"


def compose_description(
    record: EventRecord,
    classification: TimeClassification,
    settings: CalendarSettings
) -> str:
    """
    Build the unescaped DESCRIPTION text for an event.

    Args:
        record: Event record
        classification: Timing classification of the event
        settings: Calendar settings used for the event URL

    Returns:
        Newline-joined description text
    """
    parts: List[str] = []

    category_names = [c.name for c in record.categories if c.name]
    if category_names:
        parts.append(f"Category: {', '.join(category_names)}")

    parts.append(_price_line(record))

    availability = _availability_line(record)
    if availability:
        parts.append(availability)

    status = resolve_status(record)
    if status:
        parts.append(f"Status: {status}")

    if classification.is_all_day and classification.time_note:
        parts.append(f"Time: {classification.time_note}")

    parts.append(f"Event URL: {settings.event_url(record.id)}")
    parts.append("")

    body = strip_html(record.description)
    if body:
        parts.append(body)

    return "\n".join(parts)
