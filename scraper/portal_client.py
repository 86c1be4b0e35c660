"""Event source for the Quin House member portal JSON API."""
import logging
import re
import time
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from processor.models import (
    DEFAULT_EVENT_TITLE,
    Category,
    EventRecord,
    LocalDateTime,
    TicketOption,
)

logger = logging.getLogger(__name__)

_CLOCK = re.compile(r"^(\d{1,2}:\d{2}(?::\d{2})?)")


def parse_local_datetime(value: Any) -> Optional[LocalDateTime]:
    """
    Parse a portal local timestamp such as "2026-02-27T17:00:00".

    Values are already in the calendar's zone, so fractional seconds and
    any offset suffix are ignored. A bare date yields midnight.

    Args:
        value: Timestamp string

    Returns:
        LocalDateTime or None if missing or unparseable
    """
    if not value or not isinstance(value, str):
        return None

    date_part, _, time_part = value.strip().partition("T")
    try:
        event_date = datetime.strptime(date_part, "%Y-%m-%d").date()
    except ValueError:
        return None

    if not time_part:
        return LocalDateTime(date=event_date, time=datetime.min.time())

    match = _CLOCK.match(time_part)
    if not match:
        return None

    clock = match.group(1)
    fmt = "%H:%M:%S" if clock.count(":") == 2 else "%H:%M"
    try:
        return LocalDateTime(date=event_date, time=datetime.strptime(clock, fmt).time())
    except ValueError:
        return None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value.strip() else None


class PortalEventSource:
    """Client fetching event listings and details from the portal API."""

    DEFAULT_BASE_URL = "https://members.thequinhouse.com"
    MAX_RETRIES = 3
    BASE_DELAY = 1  # seconds

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
        page_size: int = 200
    ):
        """
        Initialize the event source.

        Args:
            base_url: Portal base URL
            timeout: HTTP request timeout in seconds (default: 30)
            page_size: Number of events requested from the listing (default: 200)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.page_size = page_size

    def fetch_events(self, token: str) -> List[EventRecord]:
        """
        Fetch all events with their details.

        Args:
            token: Bearer token for the portal API

        Returns:
            List of EventRecord objects in listing order

        Raises:
            requests.RequestException: If the listing cannot be fetched
        """
        session = requests.Session()
        session.headers.update({
            'Authorization': f'Bearer {token}',
            'Accept': 'application/json'
        })

        listing = self._fetch_listing(session)
        logger.info(f"Fetched {len(listing)} events from listing")

        detailed = [self._fetch_detail(session, item) for item in listing]

        records = self._parse_events(detailed)
        logger.info(f"Successfully parsed {len(records)} events")
        return records

    def _fetch_listing(self, session: requests.Session) -> List[Dict[str, Any]]:
        """
        Fetch the event listing with retry logic.

        Args:
            session: Authorized HTTP session

        Returns:
            List of raw event dicts

        Raises:
            requests.RequestException: If all retry attempts fail
        """
        url = f"{self.base_url}/api/events"
        params = {
            'group': 'events',
            'order_by': 'start_date',
            'page_size': self.page_size,
            'page_number': 1
        }

        for attempt in range(self.MAX_RETRIES):
            try:
                logger.info(
                    f"Fetching event listing (attempt {attempt + 1}/{self.MAX_RETRIES})"
                )
                response = session.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                payload = response.json()
                break

            except requests.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.BASE_DELAY * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.MAX_RETRIES} retry attempts failed. Last error: {e}"
                    )
                    raise

        if not isinstance(payload, list):
            logger.warning(
                f"Unexpected listing payload type: {type(payload).__name__}"
            )
            return []
        return payload

    def _fetch_detail(
        self,
        session: requests.Session,
        item: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Fetch the detail record for a listed event.

        Falls back to the listing record when the detail request fails.

        Args:
            session: Authorized HTTP session
            item: Raw listing record

        Returns:
            Detail record, or the listing record on failure
        """
        event_id = item.get('id') if isinstance(item, dict) else None
        if event_id is None:
            return item

        try:
            response = session.get(
                f"{self.base_url}/api/events/{event_id}",
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"Error fetching event {event_id}: {e}")
            return item

        if not response.ok:
            logger.warning(
                f"Could not fetch detail for event {event_id}: {response.status_code}"
            )
            return item

        try:
            detail = response.json()
        except ValueError as e:
            logger.warning(f"Invalid detail JSON for event {event_id}: {e}")
            return item

        return detail if isinstance(detail, dict) else item

    def _parse_events(self, raw_events: List[Dict[str, Any]]) -> List[EventRecord]:
        """
        Convert raw event dicts to EventRecord objects.

        Args:
            raw_events: Raw event dicts from the API

        Returns:
            List of EventRecord objects
        """
        records = []

        for raw in raw_events:
            try:
                record = self.parse_event_record(raw)
                if record:
                    records.append(record)
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Failed to parse event record: {e}")
                continue

        return records

    def parse_event_record(self, raw: Dict[str, Any]) -> Optional[EventRecord]:
        """
        Map one API event dict to an EventRecord.

        Args:
            raw: Raw event dict

        Returns:
            EventRecord or None if the event has no id
        """
        if not isinstance(raw, dict) or raw.get('id') in (None, ''):
            logger.warning("Skipping event without id")
            return None

        start = parse_local_datetime((raw.get('start_date_local') or {}).get('date'))
        end = parse_local_datetime((raw.get('end_date_local') or {}).get('date'))

        categories = tuple(
            Category(name=str(c['name']))
            for c in raw.get('categories') or []
            if isinstance(c, dict) and c.get('name')
        )

        tickets = tuple(
            self._parse_ticket(t)
            for t in raw.get('tickets') or []
            if isinstance(t, dict)
        )

        return EventRecord(
            id=raw['id'],
            title=_text(raw.get('title')) or DEFAULT_EVENT_TITLE,
            description=_text(raw.get('description')),
            venue=_text(raw.get('venue')),
            start=start,
            end=end,
            categories=categories,
            tickets=tickets,
            availability_status=raw.get('availability'),
            registered=raw.get('registered') is True,
            waitlist_submitted=raw.get('waitlistSubmitted') is True
        )

    def _parse_ticket(self, raw: Dict[str, Any]) -> TicketOption:
        pricing = raw.get('pricing') or {}
        price = pricing.get('base_price')
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            price = None

        quantity = raw.get('available_quantity')
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            quantity = 0

        return TicketOption(
            price=float(price) if price is not None else None,
            available_quantity=quantity
        )
