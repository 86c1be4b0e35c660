"""Build calendar documents from event records."""
import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from processor.event_renderer import EventRenderer
from processor.models import CalendarDocument, CalendarSettings, EventRecord
from processor.status import is_personal

logger = logging.getLogger(__name__)


class CalendarBuilder:
    """Builder wrapping rendered events in a calendar envelope."""

    def __init__(self, settings: Optional[CalendarSettings] = None):
        """
        Initialize the builder.

        Args:
            settings: Calendar settings (defaults to CalendarSettings())
        """
        self.settings = settings or CalendarSettings()
        self.renderer = EventRenderer(self.settings)

    def build(
        self,
        records: Iterable[EventRecord],
        generated_at: Optional[datetime] = None,
        name: Optional[str] = None
    ) -> CalendarDocument:
        """
        Render records into a calendar document, preserving input order.

        Records without a start date are dropped; the build never fails
        because of a single record.

        Args:
            records: Event records to render
            generated_at: DTSTAMP for every entry (defaults to now, UTC)
            name: Calendar display name (defaults to settings.calendar_name)

        Returns:
            Immutable CalendarDocument
        """
        if generated_at is None:
            generated_at = datetime.now(timezone.utc).replace(microsecond=0)

        entries: List[Tuple[str, ...]] = []
        total = 0
        for record in records:
            total += 1
            entry = self.renderer.render(record, generated_at)
            if entry is not None:
                entries.append(entry)

        logger.info(
            f"Rendered {len(entries)} events out of {total} records "
            f"({total - len(entries)} dropped)"
        )

        return CalendarDocument(
            name=name or self.settings.calendar_name,
            timezone=self.settings.timezone,
            prodid=self.settings.prodid,
            description=self.settings.calendar_description,
            entries=tuple(entries)
        )

    def build_personal(
        self,
        records: Iterable[EventRecord],
        generated_at: Optional[datetime] = None
    ) -> CalendarDocument:
        """
        Build the personal calendar from records the viewer is
        confirmed or waitlisted for.

        Args:
            records: All event records
            generated_at: DTSTAMP for every entry

        Returns:
            CalendarDocument named after settings.personal_calendar_name
        """
        personal = [record for record in records if is_personal(record)]
        logger.info(f"Selected {len(personal)} personal events")
        return self.build(
            personal,
            generated_at=generated_at,
            name=self.settings.personal_calendar_name
        )
