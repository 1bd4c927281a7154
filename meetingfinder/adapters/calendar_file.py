"""
Calendar adapter that reads events from a local JSON or YAML file.

File format (JSON shown, YAML is equivalent)::

    {
        "events": [
            {"title": "Standup", "start": "09:00", "end": "09:15", "attendees": ["alice", "bob"]},
            {"title": "Focus", "start": 600, "end": 720, "attendees": ["carol"]},
            {"title": "Lunch", "start": "12:00", "duration": 45, "attendees": ["alice"]}
        ]
    }

A bare list of events at the root is accepted as well. Times are either
minutes since midnight or ``HH:mm`` strings; ``24:00`` marks the end of the day.
Instead of ``end`` an event may give its ``duration`` in minutes.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import pendulum
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..domain.exceptions import CalendarSourceError
from ..domain.models import MINUTES_PER_DAY, Event, TimeRange

logger = logging.getLogger(__name__)


def parse_minute_of_day(value: Union[int, str]) -> int:
    """
    Convert an ``HH:mm`` string or a minute count into minutes since midnight.

    Raises:
        ValueError: If the value is not a valid time of day
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a time of day: {value!r}")

    if isinstance(value, int):
        minute = value
    else:
        text = value.strip()
        if text == "24:00":
            return MINUTES_PER_DAY
        parsed = pendulum.from_format(text, "HH:mm")
        minute = parsed.hour * 60 + parsed.minute

    if not 0 <= minute <= MINUTES_PER_DAY:
        raise ValueError(f"Minute {minute} lies outside the day")
    return minute


def format_minute_of_day(minute: int) -> str:
    """Format minutes since midnight as ``HH:mm``; the end of the day is ``24:00``."""
    if minute >= MINUTES_PER_DAY:
        return "24:00"
    return pendulum.today("UTC").add(minutes=minute).format("HH:mm")


class EventRecord(BaseModel):
    """One event entry as stored in a calendar file."""
    title: str = ""
    start: int
    end: Optional[int] = None
    duration: Optional[int] = None
    attendees: List[str] = Field(default_factory=list)

    @field_validator("start", "end", mode="before")
    @classmethod
    def validate_time(cls, value: Any) -> Optional[int]:
        """Accept minutes or ``HH:mm`` strings."""
        if value is None:
            return None
        if not isinstance(value, (int, str)):
            raise ValueError(f"Expected minutes or HH:mm, got {value!r}")
        return parse_minute_of_day(value)

    @field_validator("attendees", mode="before")
    @classmethod
    def validate_attendees(cls, value: Any) -> List[str]:
        """Treat a missing attendee list as empty."""
        if value is None:
            return []
        return value

    @model_validator(mode="after")
    def validate_order(self) -> "EventRecord":
        """Ensure exactly one of end and duration is given and the event fits the day."""
        if (self.end is None) == (self.duration is None):
            raise ValueError("exactly one of end or duration must be given")
        if self.duration is not None:
            if self.duration < 0:
                raise ValueError("duration must not be negative")
            if self.start + self.duration > MINUTES_PER_DAY:
                raise ValueError("event runs past the end of the day")
        elif self.end < self.start:
            raise ValueError("end must not be before start")
        return self

    def to_event(self) -> Event:
        if self.duration is not None:
            when = TimeRange.from_start_duration(self.start, self.duration)
        else:
            when = TimeRange(start=self.start, end=self.end)
        return Event(
            when=when,
            attendees=frozenset(self.attendees),
            title=self.title
        )


class CalendarFileSource:
    """
    Loads calendar events from a JSON or YAML file.

    Matches the event source protocol used by the service layer, so a file
    can stand in for any other calendar backend.
    """

    SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")

    def __init__(self, path: Path, skip_invalid: bool = False):
        """
        Initialize the source.

        Args:
            path: Location of the calendar file
            skip_invalid: Log and skip malformed events instead of failing
        """
        self.path = Path(path)
        self.skip_invalid = skip_invalid

    def get_events(self) -> List[Event]:
        """
        Read and validate all events from the file.

        Returns:
            List of Event objects in file order

        Raises:
            CalendarSourceError: If the file is missing, unreadable or invalid
        """
        records = self._load_records()
        events: List[Event] = []

        for index, raw in enumerate(records):
            try:
                events.append(EventRecord.model_validate(raw).to_event())
            except ValidationError as exc:
                if not self.skip_invalid:
                    raise CalendarSourceError(
                        f"Invalid event #{index} in {self.path}: {exc}"
                    ) from exc
                logger.warning("Skipping invalid event #%d in %s: %s", index, self.path, exc)

        logger.debug("Loaded %d event(s) from %s", len(events), self.path)
        return events

    def _load_records(self) -> List[Any]:
        if not self.path.exists():
            raise CalendarSourceError(f"Calendar file not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix not in self.SUPPORTED_SUFFIXES:
            raise CalendarSourceError(
                f"Unsupported calendar file type '{suffix}'. "
                f"Use one of: {', '.join(self.SUPPORTED_SUFFIXES)}"
            )

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise CalendarSourceError(f"Could not parse {self.path}: {exc}") from exc

        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("events") or []
        if not isinstance(data, list):
            raise CalendarSourceError(
                f"Calendar file {self.path} must contain a list of events "
                "or a mapping with an 'events' key."
            )
        return data
