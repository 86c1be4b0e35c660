"""Generate a personal quin.ics from the published calendar.ics.

No credentials required. Fetches the published calendar, keeps only events
you are confirmed for or waitlisted on, and writes the result for import
into a desktop calendar.

Usage:
    python filter_calendar.py --url URL [--output PATH]

The source URL may also be given in the CALENDAR_URL environment variable.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

import requests

from logging_config import setup_logging
from processor.personal_filter import filter_personal_document

logger = logging.getLogger(__name__)

CALENDAR_URL_ENV = 'CALENDAR_URL'
OUT_FILE = './quin.ics'


def fetch_calendar(url: str, timeout: int = 30) -> str:
    """
    Download a published calendar document.

    Args:
        url: Calendar URL
        timeout: HTTP request timeout in seconds

    Returns:
        Calendar text

    Raises:
        requests.RequestException: On network errors or non-2xx responses
    """
    logger.info(f"Fetching {url} ...")
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    response.encoding = 'utf-8'
    return response.text


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command-line entry point.

    Args:
        argv: Arguments to parse (defaults to sys.argv)

    Returns:
        Process exit code: 0 on success or when nothing matched, 1 when the
        calendar cannot be fetched

    Raises:
        SystemExit: If no calendar URL is given
    """
    parser = argparse.ArgumentParser(
        description='Build a personal calendar from the published calendar.ics'
    )
    parser.add_argument(
        '--url',
        default=os.environ.get(CALENDAR_URL_ENV),
        help=f'Published calendar URL (defaults to ${CALENDAR_URL_ENV})'
    )
    parser.add_argument('--output', default=OUT_FILE, help='Output file path')
    parser.add_argument('--name', default=None, help='Display name of the personal calendar')
    parser.add_argument('--log-level', default='INFO')
    args = parser.parse_args(argv)

    if not args.url:
        parser.error(f'no calendar URL given; pass --url or set {CALENDAR_URL_ENV}')

    setup_logging(args.log_level)

    try:
        ics_text = fetch_calendar(args.url)
    except requests.RequestException as e:
        logger.error(f"Failed to fetch calendar: {e}")
        return 1

    result = filter_personal_document(ics_text, name=args.name)

    if result.is_empty:
        logger.info("No confirmed or waitlisted events found in calendar.ics.")
        logger.info("Make sure the calendar has been regenerated recently.")
        return 0

    # CRLF terminators must reach disk unchanged
    with open(args.output, 'wb') as f:
        f.write(result.document.to_ics().encode('utf-8'))

    plural = 's' if result.matched != 1 else ''
    logger.info(f"Written: {args.output} ({result.matched} personal event{plural})")
    return 0


if __name__ == '__main__':
    sys.exit(main())
