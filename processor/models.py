"""Data models for event rendering."""
from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Tuple, Union

from processor.text import escape_ics_text, fold_line


DEFAULT_EVENT_TITLE = "Quin House Event"


@dataclass(frozen=True)
class LocalDateTime:
    """Calendar date plus local clock time in the calendar's zone."""
    date: date
    time: time


@dataclass(frozen=True)
class Category:
    """Named tag attached to an event."""
    name: str


@dataclass(frozen=True)
class TicketOption:
    """Ticket option; price None means inquire on the event page."""
    price: Optional[float] = None
    available_quantity: int = 0


@dataclass(frozen=True)
class EventRecord:
    """Event as returned by the member portal API."""
    id: Union[str, int]
    title: str = DEFAULT_EVENT_TITLE
    description: Optional[str] = None
    venue: Optional[str] = None
    start: Optional[LocalDateTime] = None
    end: Optional[LocalDateTime] = None
    categories: Tuple[Category, ...] = ()
    tickets: Tuple[TicketOption, ...] = ()
    availability_status: Optional[str] = None
    registered: bool = False
    waitlist_submitted: bool = False


@dataclass(frozen=True)
class CalendarSettings:
    """Calendar-level configuration threaded through the builder."""
    base_url: str = "https://members.thequinhouse.com"
    uid_domain: str = "thequinhouse.com"
    timezone: str = "America/New_York"
    calendar_name: str = "The 'Quin House Events"
    calendar_description: str = "Upcoming programming at The 'Quin House member club"
    personal_calendar_name: str = "Quin"
    prodid: str = "-//Quin House Calendar//EN"

    def event_url(self, event_id: Union[str, int]) -> str:
        """Canonical per-event link on the member portal."""
        return f"{self.base_url.rstrip('/')}/events/{event_id}"

    def event_uid(self, event_id: Union[str, int]) -> str:
        """Globally unique entry identifier for an event id."""
        return f"quin-event-{event_id}@{self.uid_domain}"


@dataclass(frozen=True)
class CalendarDocument:
    """Calendar envelope plus its rendered entry blocks."""
    name: str
    timezone: str
    prodid: str
    description: Optional[str] = None
    entries: Tuple[Tuple[str, ...], ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def to_ics(self) -> str:
        """Serialize to folded, CRLF-terminated calendar text."""
        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:{self.prodid}",
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
            f"X-WR-CALNAME:{escape_ics_text(self.name)}",
            f"X-WR-TIMEZONE:{self.timezone}",
        ]
        if self.description:
            lines.append(f"X-WR-CALDESC:{escape_ics_text(self.description)}")
        for entry in self.entries:
            lines.extend(entry)
        lines.append("END:VCALENDAR")

        return "".join(fold_line(line) for line in lines)


@dataclass(frozen=True)
class PersonalFilterResult:
    """Outcome of filtering a rendered calendar down to personal entries."""
    document: CalendarDocument
    matched: int
    total: int

    @property
    def is_empty(self) -> bool:
        return self.matched == 0


@dataclass
class PublishResult:
    """Where an output artifact was written."""
    location: str
    bytes_written: int
