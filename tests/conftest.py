"""Shared fixtures for calendar tests."""
from datetime import date, datetime, time, timezone

import pytest

from processor.models import (
    CalendarSettings,
    Category,
    EventRecord,
    LocalDateTime,
    TicketOption,
)


@pytest.fixture
def settings():
    """Default calendar settings."""
    return CalendarSettings()


@pytest.fixture
def generated_at():
    """Fixed generation timestamp."""
    return datetime(2026, 2, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_record():
    """Factory for EventRecord objects with a timed evening slot."""

    def _make(event_id=1, day=date(2026, 2, 27), start=time(18, 0), end=time(20, 0), **kwargs):
        fields = {
            'title': 'Wine Tasting',
            'start': LocalDateTime(date=day, time=start),
            'end': LocalDateTime(date=day, time=end),
        }
        fields.update(kwargs)
        return EventRecord(id=event_id, **fields)

    return _make


@pytest.fixture
def full_record(make_record):
    """Record with every optional field populated."""
    return make_record(
        event_id=42,
        title='Chef\'s Table',
        description='<p>Five courses.</p><p>Wine pairing &amp; dessert.</p>',
        venue='The Library',
        categories=(Category('Dining'), Category('Members Only')),
        tickets=(TicketOption(price=95.0, available_quantity=3),),
        availability_status='available'
    )
