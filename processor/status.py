"""Resolve the status line shown for an event."""
from typing import Optional

from processor.models import EventRecord


CONFIRMED = "You are Confirmed"
ON_WAITLIST = "You are on Waitlist"

PERSONAL_STATUSES = (CONFIRMED, ON_WAITLIST)

_AVAILABILITY_LABELS = {
    "sold_out": "Sold Out",
    "waitlist": "Waitlist Only",
    "available": "Available",
}


def resolve_status(record: EventRecord) -> Optional[str]:
    """
    Pick the single status to display for an event.

    Personal status (registered, then waitlist submitted) wins over the
    event's general availability. Unrecognized availability codes are
    passed through verbatim.

    Args:
        record: Event record

    Returns:
        Status text, or None when nothing is known
    """
    if record.registered is True:
        return CONFIRMED
    if record.waitlist_submitted is True:
        return ON_WAITLIST

    availability = record.availability_status
    if not availability or not isinstance(availability, str):
        return None

    if availability in _AVAILABILITY_LABELS:
        return _AVAILABILITY_LABELS[availability]
    if "unavailable" in availability.lower():
        return "Unavailable"
    return availability


def is_personal(record: EventRecord) -> bool:
    """True when the viewer is confirmed or waitlisted for the event."""
    return record.registered is True or record.waitlist_submitted is True
