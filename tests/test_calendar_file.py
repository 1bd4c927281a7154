"""
Tests for the calendar file adapter.
"""

import json
import logging

import pytest

from meetingfinder.adapters.calendar_file import (
    CalendarFileSource,
    format_minute_of_day,
    parse_minute_of_day,
)
from meetingfinder.domain.exceptions import CalendarSourceError
from meetingfinder.domain.models import Event, TimeRange


class TestTimeParsing:
    """Tests for minute-of-day conversion."""

    @pytest.mark.parametrize(
        "value,expected",
        [("00:00", 0), ("09:30", 570), ("23:59", 1439), ("24:00", 1440), (90, 90), (" 10:15 ", 615)],
    )
    def test_parse(self, value, expected):
        assert parse_minute_of_day(value) == expected

    @pytest.mark.parametrize("value", ["9 o'clock", "25:00", -1, 1441, True])
    def test_parse_invalid(self, value):
        with pytest.raises(ValueError):
            parse_minute_of_day(value)

    @pytest.mark.parametrize("minute,expected", [(0, "00:00"), (570, "09:30"), (1439, "23:59"), (1440, "24:00")])
    def test_format(self, minute, expected):
        assert format_minute_of_day(minute) == expected


class TestCalendarFileSource:
    """Tests for CalendarFileSource."""

    def test_load_json_mapping(self, tmp_path):
        path = tmp_path / "calendar.json"
        path.write_text(json.dumps({
            "events": [
                {"title": "Standup", "start": "09:00", "end": "09:15", "attendees": ["alice", "bob"]},
                {"start": 600, "end": "24:00", "attendees": ["carol"]},
            ]
        }), encoding="utf-8")

        events = CalendarFileSource(path).get_events()

        assert events == [
            Event(when=TimeRange(start=540, end=555), attendees=frozenset({"alice", "bob"}), title="Standup"),
            Event(when=TimeRange(start=600, end=1440), attendees=frozenset({"carol"})),
        ]

    def test_load_yaml_list(self, tmp_path):
        path = tmp_path / "calendar.yaml"
        path.write_text(
            "- title: Lunch\n"
            "  start: '12:00'\n"
            "  end: '13:00'\n"
            "  attendees: [alice]\n"
            "- start: 0\n"
            "  end: 60\n",
            encoding="utf-8"
        )

        events = CalendarFileSource(path).get_events()

        assert [event.when for event in events] == [TimeRange(start=720, end=780), TimeRange(start=0, end=60)]
        assert events[1].attendees == frozenset()

    def test_empty_file_has_no_events(self, tmp_path):
        path = tmp_path / "calendar.yml"
        path.write_text("", encoding="utf-8")

        assert CalendarFileSource(path).get_events() == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(CalendarSourceError, match="not found"):
            CalendarFileSource(tmp_path / "nope.json").get_events()

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "calendar.txt"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(CalendarSourceError, match="Unsupported"):
            CalendarFileSource(path).get_events()

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "calendar.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CalendarSourceError, match="Could not parse"):
            CalendarFileSource(path).get_events()

    def test_wrong_root_type(self, tmp_path):
        path = tmp_path / "calendar.json"
        path.write_text('"events"', encoding="utf-8")

        with pytest.raises(CalendarSourceError, match="must contain a list"):
            CalendarFileSource(path).get_events()

    def test_invalid_event_fails_in_strict_mode(self, tmp_path):
        path = tmp_path / "calendar.json"
        path.write_text(json.dumps([
            {"start": "10:00", "end": "09:00", "attendees": ["alice"]},
        ]), encoding="utf-8")

        with pytest.raises(CalendarSourceError, match="Invalid event #0"):
            CalendarFileSource(path).get_events()

    def test_invalid_event_is_skipped_when_requested(self, tmp_path, caplog):
        path = tmp_path / "calendar.json"
        path.write_text(json.dumps([
            {"start": "nonsense", "end": "09:00"},
            {"start": "09:00", "end": "10:00", "attendees": ["alice"]},
        ]), encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            events = CalendarFileSource(path, skip_invalid=True).get_events()

        assert [event.when for event in events] == [TimeRange(start=540, end=600)]
        assert "Skipping invalid event #0" in caplog.text

    def test_duration_instead_of_end(self, tmp_path):
        path = tmp_path / "calendar.json"
        path.write_text(json.dumps([
            {"title": "Lunch", "start": "12:00", "duration": 45, "attendees": ["alice"]},
        ]), encoding="utf-8")

        events = CalendarFileSource(path).get_events()

        assert events == [
            Event(when=TimeRange(start=720, end=765), attendees=frozenset({"alice"}), title="Lunch"),
        ]

    @pytest.mark.parametrize(
        "record,message",
        [
            ({"start": "09:00"}, "exactly one of end or duration"),
            ({"start": "09:00", "end": "10:00", "duration": 60}, "exactly one of end or duration"),
            ({"start": "23:30", "duration": 60}, "past the end of the day"),
            ({"start": "09:00", "duration": -5}, "must not be negative"),
        ],
    )
    def test_invalid_end_or_duration(self, tmp_path, record, message):
        path = tmp_path / "calendar.json"
        path.write_text(json.dumps([record]), encoding="utf-8")

        with pytest.raises(CalendarSourceError, match=message):
            CalendarFileSource(path).get_events()
