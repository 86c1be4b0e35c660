"""Reduce an already rendered calendar to the viewer's own events."""
import logging
import re
from typing import List, Optional, Tuple

from processor.models import CalendarDocument, CalendarSettings, PersonalFilterResult
from processor.status import PERSONAL_STATUSES
from processor.text import unfold_lines

logger = logging.getLogger(__name__)

_VEVENT_BLOCK = re.compile(r"BEGIN:VEVENT[\s\S]*?END:VEVENT")
_LINE_BREAK = re.compile(r"\r?\n")
_DESCRIPTION_PROPERTY = re.compile(r"DESCRIPTION[;:]")

PERSONAL_MARKERS = tuple(f"Status: {status}" for status in PERSONAL_STATUSES)


def extract_event_blocks(ics_text: str) -> List[str]:
    """
    Extract VEVENT blocks from calendar text.

    Folded lines are joined first; each match runs to the nearest
    END:VEVENT so malformed input cannot swallow neighbouring entries.

    Args:
        ics_text: Calendar document text

    Returns:
        Unfolded VEVENT blocks in document order
    """
    unfolded = unfold_lines(ics_text)
    return [match.group(0) for match in _VEVENT_BLOCK.finditer(unfolded)]


def is_personal_block(block: str) -> bool:
    """True when an entry's description carries a personal-status marker."""
    for line in _LINE_BREAK.split(block):
        if _DESCRIPTION_PROPERTY.match(line):
            return any(marker in line for marker in PERSONAL_MARKERS)
    return False


def filter_personal_document(
    ics_text: str,
    settings: Optional[CalendarSettings] = None,
    name: Optional[str] = None
) -> PersonalFilterResult:
    """
    Keep only the entries the viewer is confirmed or waitlisted for.

    Args:
        ics_text: Previously generated calendar document
        settings: Settings for the new envelope (defaults to CalendarSettings())
        name: Display name of the new calendar (defaults to the personal name)

    Returns:
        PersonalFilterResult; zero matches is a normal outcome
    """
    settings = settings or CalendarSettings()

    blocks = extract_event_blocks(ics_text)
    personal = [block for block in blocks if is_personal_block(block)]

    logger.info(
        f"Kept {len(personal)} personal events out of {len(blocks)} entries"
    )

    entries: Tuple[Tuple[str, ...], ...] = tuple(
        tuple(_LINE_BREAK.split(block)) for block in personal
    )
    document = CalendarDocument(
        name=name or settings.personal_calendar_name,
        timezone=settings.timezone,
        prodid=settings.prodid,
        entries=entries
    )
    return PersonalFilterResult(
        document=document,
        matched=len(personal),
        total=len(blocks)
    )
