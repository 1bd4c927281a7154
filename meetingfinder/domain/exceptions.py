"""
Domain-specific exception hierarchy for the meeting finder application.
"""


class MeetingFinderError(Exception):
    """Base class for all application-level errors."""


class InvalidMeetingRequestError(MeetingFinderError, ValueError):
    """Raised when a meeting request cannot be scheduled by definition."""


class CalendarSourceError(MeetingFinderError):
    """Raised when calendar data cannot be loaded or parsed."""
