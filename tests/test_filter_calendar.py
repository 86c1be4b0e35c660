"""Tests for the standalone personal calendar filter tool."""
import pytest
import responses

from filter_calendar import main
from processor.calendar_builder import CalendarBuilder
from processor.text import unfold_lines


URL = 'https://example.github.io/quin-calendar/calendar.ics'


class TestFilterCalendarMain:
    """Test cases for filter_calendar.main."""

    @responses.activate
    def test_writes_personal_calendar(self, tmp_path, make_record, generated_at):
        """Test that only personal entries are written."""
        source = CalendarBuilder().build(
            [
                make_record(event_id=1, registered=True, title='Café Social'),
                make_record(event_id=2, availability_status='available'),
            ],
            generated_at=generated_at
        ).to_ics()
        responses.add(
            responses.GET,
            URL,
            body=source.encode('utf-8'),
            content_type='text/calendar'
        )
        output = tmp_path / 'quin.ics'

        exit_code = main(['--url', URL, '--output', str(output)])

        assert exit_code == 0
        written = unfold_lines(output.read_bytes().decode('utf-8'))
        assert 'X-WR-CALNAME:Quin\r\n' in written
        assert 'SUMMARY:Café Social\r\n' in written
        assert 'quin-event-2@' not in written

    @responses.activate
    def test_no_personal_events(self, tmp_path, make_record, generated_at):
        """Test the informational nothing-to-do outcome."""
        source = CalendarBuilder().build([make_record()], generated_at=generated_at).to_ics()
        responses.add(responses.GET, URL, body=source)
        output = tmp_path / 'quin.ics'

        exit_code = main(['--url', URL, '--output', str(output)])

        assert exit_code == 0
        assert not output.exists()

    @responses.activate
    def test_http_error(self, tmp_path):
        """Test that a failed download exits with an error code."""
        responses.add(responses.GET, URL, status=404)
        output = tmp_path / 'quin.ics'

        exit_code = main(['--url', URL, '--output', str(output)])

        assert exit_code == 1
        assert not output.exists()

    @responses.activate
    def test_url_from_environment(self, tmp_path, monkeypatch):
        """Test that CALENDAR_URL supplies the source feed."""
        monkeypatch.setenv('CALENDAR_URL', URL)
        responses.add(responses.GET, URL, body='BEGIN:VCALENDAR\r\nEND:VCALENDAR\r\n')

        exit_code = main(['--output', str(tmp_path / 'quin.ics')])

        assert exit_code == 0
        assert responses.calls[0].request.url == URL

    @responses.activate
    def test_missing_url(self, tmp_path, monkeypatch, capsys):
        """Test that running without a source URL is a usage error."""
        monkeypatch.delenv('CALENDAR_URL', raising=False)

        with pytest.raises(SystemExit) as exc_info:
            main(['--output', str(tmp_path / 'quin.ics')])

        assert exc_info.value.code == 2
        assert 'CALENDAR_URL' in capsys.readouterr().err
        assert len(responses.calls) == 0
