"""
Domain layer - Pure business logic without external dependencies.
"""

from .attendance_sweep import AttendanceSegment, AttendanceSweep
from .exceptions import CalendarSourceError, InvalidMeetingRequestError, MeetingFinderError
from .interval_merger import IntervalMerger
from .meeting_resolver import MeetingResolver
from .models import (
    END_OF_DAY,
    MINUTES_PER_DAY,
    START_OF_DAY,
    WHOLE_DAY,
    Event,
    MeetingRequest,
    TimeRange,
)

__all__ = [
    "AttendanceSegment",
    "AttendanceSweep",
    "CalendarSourceError",
    "END_OF_DAY",
    "Event",
    "IntervalMerger",
    "InvalidMeetingRequestError",
    "MINUTES_PER_DAY",
    "MeetingFinderError",
    "MeetingRequest",
    "MeetingResolver",
    "START_OF_DAY",
    "TimeRange",
    "WHOLE_DAY",
]
