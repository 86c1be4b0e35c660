"""Runtime configuration read from environment variables."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from processor.models import CalendarSettings


DEFAULT_BASE_URL = 'https://members.thequinhouse.com'


@dataclass(frozen=True)
class AppConfig:
    """Configuration for one calendar generation run."""
    base_url: str = DEFAULT_BASE_URL
    token: Optional[str] = None
    stored_token: Optional[str] = None
    uid_domain: str = 'thequinhouse.com'
    calendar_name: str = "The 'Quin House Events"
    personal_calendar_name: str = 'Quin'
    output_bucket: Optional[str] = None
    output_prefix: str = ''
    output_dir: str = 'public'
    calendar_filename: str = 'calendar.ics'
    personal_filename: str = 'quin.ics'
    log_level: str = 'INFO'
    timeout_seconds: int = 30
    page_size: int = 200

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'AppConfig':
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            AppConfig instance

        Raises:
            ValueError: If a numeric variable is not an integer
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        return cls(
            base_url=env.get('PORTAL_BASE_URL', defaults.base_url),
            token=env.get('PORTAL_TOKEN') or None,
            stored_token=env.get('PORTAL_STORED_TOKEN') or None,
            uid_domain=env.get('UID_DOMAIN', defaults.uid_domain),
            calendar_name=env.get('CALENDAR_NAME', defaults.calendar_name),
            personal_calendar_name=env.get(
                'PERSONAL_CALENDAR_NAME', defaults.personal_calendar_name
            ),
            output_bucket=env.get('OUTPUT_BUCKET') or None,
            output_prefix=env.get('OUTPUT_PREFIX', defaults.output_prefix),
            output_dir=env.get('OUT_DIR', defaults.output_dir),
            log_level=env.get('LOG_LEVEL', defaults.log_level),
            timeout_seconds=int(env.get('TIMEOUT_SECONDS', defaults.timeout_seconds)),
            page_size=int(env.get('PAGE_SIZE', defaults.page_size))
        )

    def calendar_settings(self) -> CalendarSettings:
        """Calendar settings derived from this configuration."""
        return CalendarSettings(
            base_url=self.base_url,
            uid_domain=self.uid_domain,
            calendar_name=self.calendar_name,
            personal_calendar_name=self.personal_calendar_name
        )
