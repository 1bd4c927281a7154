"""
Sweep-line bookkeeping of how many optional attendees are free over a day.

Each optional attendee's free windows are encoded as +1 at the window start
and -1 at the window end. Accumulating the deltas in minute order yields the
number of optional attendees free during every stretch between two
consecutive boundaries.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping

from .interval_merger import IntervalMerger
from .models import MINUTES_PER_DAY, START_OF_DAY, Event, TimeRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceSegment:
    """A stretch of the day during which ``attendance`` optional attendees are free."""
    window: TimeRange
    attendance: int


class AttendanceSweep:
    """
    Builds and reads the change log of optional-attendee availability.
    """

    def __init__(self, interval_merger: IntervalMerger | None = None):
        self.interval_merger = interval_merger or IntervalMerger()

    def optional_free_times(
        self,
        events: Iterable[Event],
        optional_attendees: Iterable[str]
    ) -> Dict[str, List[TimeRange]]:
        """
        Find every free window of each optional attendee.

        No duration filter is applied: a short gap for one attendee may still
        line up with a long gap of another. Attendees who are booked for the
        whole day are left out.

        Args:
            events: Calendar events to consider
            optional_attendees: Names of the optional attendees

        Returns:
            Dict mapping attendee name to their free windows
        """
        events = list(events)
        free_times: Dict[str, List[TimeRange]] = {}

        # Sorted so that the result does not depend on set iteration order
        for attendee in sorted(set(optional_attendees)):
            windows = self.interval_merger.free_windows(events, {attendee}, min_duration=0)
            if not windows:
                logger.debug("Optional attendee %s is booked all day, ignoring", attendee)
                continue
            free_times[attendee] = windows

        return free_times

    @staticmethod
    def change_log(free_times_by_attendee: Mapping[str, Iterable[TimeRange]]) -> Dict[int, int]:
        """
        Encode free windows as attendance deltas keyed by minute.

        Every window start and end becomes a key, even when the deltas at that
        minute cancel out.

        Returns:
            Dict from minute to delta, ordered by ascending minute
        """
        changes: Dict[int, int] = defaultdict(int)

        for windows in free_times_by_attendee.values():
            for window in windows:
                changes[window.start] += 1
                changes[window.end] -= 1

        return dict(sorted(changes.items()))

    @staticmethod
    def segments(change_log: Mapping[int, int]) -> Iterator[AttendanceSegment]:
        """
        Walk the change log and yield the attendance of every stretch of the day.

        Segments cover the whole day without gaps, the last one running up to
        the end of the day with the count left after the final entry. A
        negative running count means the log is unbalanced; it is logged and
        clamped to zero.
        """
        previous = START_OF_DAY
        attendance = 0

        for minute in sorted(change_log):
            if minute > previous:
                yield AttendanceSegment(TimeRange(start=previous, end=minute), attendance)
                previous = minute

            attendance += change_log[minute]
            if attendance < 0:
                logger.warning(
                    "Optional attendance dropped to %d at minute %d, clamping to zero",
                    attendance, minute
                )
                attendance = 0

        if attendance != 0:
            logger.warning("Change log is unbalanced, %d attendee(s) left open", attendance)

        if previous < MINUTES_PER_DAY:
            yield AttendanceSegment(TimeRange(start=previous, end=MINUTES_PER_DAY), attendance)
