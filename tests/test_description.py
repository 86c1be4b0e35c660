"""Unit tests for description composition."""
from datetime import time

from processor.description import compose_description
from processor.models import TicketOption
from processor.time_classifier import classify


def describe(record, settings):
    return compose_description(record, classify(record.start, record.end), settings)


class TestComposeDescription:
    """Test cases for compose_description."""

    def test_full_description(self, full_record, settings):
        """Test ordering of every description part."""
        description = describe(full_record, settings)

        assert description == (
            "Category: Dining, Members Only\n"
            "Price: $95.00 per person\n"
            "Availability: 3 spots left\n"
            "Status: Available\n"
            "Event URL: https://members.thequinhouse.com/events/42\n"
            "\n"
            "Five courses.\n"
            "Wine pairing & dessert."
        )

    def test_minimal_description(self, make_record, settings):
        """Test that absent optional data is omitted."""
        description = describe(make_record(event_id=7), settings)

        assert description == (
            "Price: Free / Included\n"
            "Event URL: https://members.thequinhouse.com/events/7\n"
        )

    def test_all_day_time_note(self, make_record, settings):
        """Test the Time line for an all-day event."""
        record = make_record(start=time(17, 0), end=time(23, 30), registered=True)

        lines = describe(record, settings).split("\n")

        assert lines[1] == "Status: You are Confirmed"
        assert lines[2] == "Time: 5 PM – 11:30 PM"

    def test_timed_event_has_no_time_line(self, make_record, settings):
        """Test that timed events do not repeat their times."""
        assert "Time:" not in describe(make_record(), settings)

    def test_free_ticket(self, make_record, settings):
        record = make_record(tickets=(TicketOption(price=0.0),))

        assert "Price: Free\n" in describe(record, settings)

    def test_ticket_without_price(self, make_record, settings):
        """Test that a missing price asks members to RSVP."""
        record = make_record(tickets=(TicketOption(price=None, available_quantity=5),))

        description = describe(record, settings)

        assert "Price: RSVP (see event page)" in description
        assert "Availability: 5 spots left" in description

    def test_single_spot_left(self, make_record, settings):
        """Test singular spot wording."""
        record = make_record(tickets=(TicketOption(price=20.5, available_quantity=1),))

        description = describe(record, settings)

        assert "Price: $20.50 per person" in description
        assert "Availability: 1 spot left" in description

    def test_only_first_ticket_consulted(self, make_record, settings):
        """Test that later ticket options are ignored."""
        record = make_record(tickets=(
            TicketOption(price=10.0, available_quantity=0),
            TicketOption(price=99.0, available_quantity=50),
        ))

        description = describe(record, settings)

        assert "Price: $10.00 per person" in description
        assert "Availability" not in description

    def test_status_precedence(self, make_record, settings):
        """Test that a confirmed place hides the sold-out status."""
        record = make_record(registered=True, availability_status="sold_out")

        description = describe(record, settings)

        assert "Status: You are Confirmed" in description
        assert "Sold Out" not in description

    def test_description_not_escaped(self, make_record, settings):
        """Test that composition leaves escaping to serialization."""
        record = make_record(description="Bring a friend; dress code, smart")

        assert describe(record, settings).endswith("Bring a friend; dress code, smart")
