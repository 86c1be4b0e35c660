"""Unit tests for JSON logging setup."""
import json
import logging

from logging_config import JsonFormatter, setup_logging


class TestSetupLogging:
    """Test cases for logging setup."""

    def test_setup_logging_default_level(self):
        """Test logging setup with default INFO level."""
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_debug_level(self):
        """Test logging setup with DEBUG level."""
        setup_logging('DEBUG')
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_unknown_level(self):
        """Test fallback to INFO for unknown levels."""
        setup_logging('CHATTY')
        assert logging.getLogger().level == logging.INFO

    def test_json_formatter(self):
        """Test JSON log record layout."""
        record = logging.LogRecord('calendar', logging.WARNING, __file__, 1, 'Hello %s', ('world',), None)

        payload = json.loads(JsonFormatter().format(record))

        assert payload['level'] == 'WARNING'
        assert payload['message'] == 'Hello world'
        assert payload['logger'] == 'calendar'
        assert 'timestamp' in payload
