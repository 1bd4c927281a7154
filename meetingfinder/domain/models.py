"""
Domain models for minute-of-day time ranges, events and meeting requests.

A day is modelled as the minutes ``0 .. END_OF_DAY``. Ranges are half-open
``[start, end)``; a range that runs through the last minute of the day ends
at ``END_OF_DAY + 1``.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from .exceptions import InvalidMeetingRequestError

START_OF_DAY = 0
END_OF_DAY = 23 * 60 + 59
MINUTES_PER_DAY = END_OF_DAY + 1


@dataclass(frozen=True, order=True)
class TimeRange:
    """
    Represents an immutable half-open range of minutes within one day.

    Ordering is by start, ties broken by end.
    Invariant: START_OF_DAY <= start <= end <= END_OF_DAY + 1.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Start minute {self.start} must not be after end minute {self.end}")
        if self.start < START_OF_DAY or self.end > MINUTES_PER_DAY:
            raise ValueError(
                f"Range [{self.start}, {self.end}) lies outside the day "
                f"[{START_OF_DAY}, {MINUTES_PER_DAY})"
            )

    @classmethod
    def from_start_end(cls, start: int, end: int, inclusive: bool) -> "TimeRange":
        """
        Create a range from two minutes.

        Args:
            start: First minute of the range
            end: Last minute (inclusive) or the minute after the range
            inclusive: Whether ``end`` itself belongs to the range. Used for
                ranges that touch the end of the day, e.g. ``[0, END_OF_DAY]``.
        """
        return cls(start=start, end=end + 1 if inclusive else end)

    @classmethod
    def from_start_duration(cls, start: int, duration: int) -> "TimeRange":
        """Create a range of ``duration`` minutes beginning at ``start``."""
        return cls(start=start, end=start + duration)

    def duration(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another."""
        return self.start < other.end and other.start < self.end

    def contains(self, point: int) -> bool:
        """Check if a minute lies inside this range."""
        return self.start <= point < self.end

    def intersect(self, other: "TimeRange") -> "TimeRange | None":
        """
        Calculate the intersection of two time ranges.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return TimeRange(start=max(self.start, other.start), end=min(self.end, other.end))

    def touches_end_of_day(self) -> bool:
        return self.end == MINUTES_PER_DAY

    def __str__(self) -> str:
        if self.touches_end_of_day():
            return f"[{self.start}, {END_OF_DAY}]"
        return f"[{self.start}, {self.end})"


WHOLE_DAY = TimeRange.from_start_end(START_OF_DAY, END_OF_DAY, True)


def order_by_start(time_range: TimeRange):
    """Sort key: ascending start, ties broken by end."""
    return (time_range.start, time_range.end)


def _normalize_attendees(attendees: Optional[Iterable[str]]) -> FrozenSet[str]:
    if attendees is None:
        return frozenset()
    if isinstance(attendees, str):
        return frozenset([attendees])
    return frozenset(attendees)


@dataclass(frozen=True)
class Event:
    """
    A pre-existing calendar commitment.

    Attendees are matched by plain string equality.
    """
    when: TimeRange
    attendees: FrozenSet[str] = field(default_factory=frozenset)
    title: str = ""

    def __post_init__(self):
        object.__setattr__(self, "attendees", _normalize_attendees(self.attendees))

    def involves_any(self, attendees: FrozenSet[str]) -> bool:
        """Check if at least one of the given attendees takes part in this event."""
        return not self.attendees.isdisjoint(attendees)


@dataclass(frozen=True)
class MeetingRequest:
    """
    A request to find room for a meeting of ``duration`` minutes.

    Mandatory attendees constrain the result, optional attendees only rank it.
    Durations longer than a day are accepted and simply cannot be satisfied.
    """
    mandatory_attendees: FrozenSet[str] = field(default_factory=frozenset)
    optional_attendees: FrozenSet[str] = field(default_factory=frozenset)
    duration: int = 30

    def __post_init__(self):
        object.__setattr__(
            self, "mandatory_attendees", _normalize_attendees(self.mandatory_attendees)
        )
        object.__setattr__(
            self, "optional_attendees", _normalize_attendees(self.optional_attendees)
        )
        if self.duration <= 0:
            raise InvalidMeetingRequestError(
                f"Meeting duration must be greater than zero, got {self.duration}"
            )

    def is_satisfiable_within_a_day(self) -> bool:
        return self.duration <= MINUTES_PER_DAY
