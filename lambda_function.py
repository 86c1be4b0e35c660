"""AWS Lambda handler for the Quin House events calendar."""
import json
import logging
import time
from datetime import datetime, timezone
from typing import Dict, Any

from config import AppConfig
from logging_config import setup_logging
from processor.calendar_builder import CalendarBuilder
from scraper.authenticator import TokenAuthenticator
from scraper.portal_client import PortalEventSource
from storage.calendar_publisher import CalendarPublisher


def _error_response(message: str, error: Exception, start_time: float, **extra) -> Dict[str, Any]:
    body = {
        'message': message,
        'error': str(error),
        'error_type': type(error).__name__,
        'duration_seconds': round(time.time() - start_time, 2)
    }
    body.update(extra)
    return {'statusCode': 500, 'body': json.dumps(body)}


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler: fetch portal events and publish the calendars.

    Args:
        event: EventBridge event payload
        context: Lambda context object

    Returns:
        Response dict with statusCode and summary statistics
    """
    config = AppConfig.from_env()

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Lambda execution started",
        extra={
            'base_url': config.base_url,
            'output_bucket': config.output_bucket,
            'timeout_seconds': config.timeout_seconds
        }
    )

    try:
        authenticator = TokenAuthenticator(
            token=config.token,
            stored_token=config.stored_token
        )
        source = PortalEventSource(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            page_size=config.page_size
        )
        builder = CalendarBuilder(config.calendar_settings())
        publisher = CalendarPublisher(
            bucket=config.output_bucket,
            prefix=config.output_prefix,
            output_dir=config.output_dir
        )

        try:
            logger.info("Authenticating with member portal")
            token = authenticator.authenticate()
        except Exception as e:
            logger.error(
                f"Authentication failed: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response('Authentication failed', e, start_time)

        try:
            logger.info("Fetching events from portal API")
            records = source.fetch_events(token)
            logger.info(f"Fetched {len(records)} events from portal")
        except Exception as e:
            logger.error(
                f"Failed to fetch portal events after retries: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response('Failed to fetch portal events', e, start_time)

        logger.info("Building calendars")
        generated_at = datetime.now(timezone.utc).replace(microsecond=0)
        calendar = builder.build(records, generated_at=generated_at)
        personal = builder.build_personal(records, generated_at=generated_at)

        try:
            logger.info("Publishing calendars")
            calendar_result = publisher.publish(calendar, config.calendar_filename)
            personal_result = publisher.publish(personal, config.personal_filename)
        except Exception as e:
            logger.error(
                f"Error publishing calendars: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response(
                'Failed to publish calendars',
                e,
                start_time,
                note='Previously published calendars remain in place'
            )

        duration = time.time() - start_time

        logger.info(
            "Lambda execution completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'events_rendered': len(calendar),
                'personal_events': len(personal)
            }
        )

        return {
            'statusCode': 200,
            'body': json.dumps({
                'message': 'Calendars published successfully',
                'statistics': {
                    'events_fetched': len(records),
                    'events_rendered': len(calendar),
                    'events_dropped': len(records) - len(calendar),
                    'personal_events': len(personal),
                    'duration_seconds': round(duration, 2)
                },
                'outputs': {
                    'calendar': calendar_result.location,
                    'personal': personal_result.location
                }
            })
        }

    except Exception as e:
        duration = time.time() - start_time

        logger.error(
            f"Lambda execution failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )

        return _error_response('Calendar generation failed', e, start_time)


if __name__ == '__main__':
    print(json.dumps(lambda_handler({}, None), indent=2))
