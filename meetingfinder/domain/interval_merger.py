"""
Free-window calculation for a set of attendees.

Pure domain logic: the busy intervals of everyone in the attendee set are
merged and the gaps between them, within one day, are returned.
"""

import logging
from typing import Iterable, List

from .models import END_OF_DAY, START_OF_DAY, Event, TimeRange, order_by_start

logger = logging.getLogger(__name__)


class IntervalMerger:
    """
    Calculates the windows of a day in which none of a set of attendees is busy.

    Algorithm:
    1. Keep only non-empty events attended by at least one attendee of the set
    2. Sort them by start time
    3. Sweep left to right, merging overlapping or touching events
    4. Every gap between merged busy blocks (and before the first and after
       the last one) is a free window
    5. Drop windows shorter than the minimum duration
    """

    def free_windows(
        self,
        events: Iterable[Event],
        attendees: Iterable[str],
        min_duration: int = 0
    ) -> List[TimeRange]:
        """
        Find all free windows for the given attendees.

        Args:
            events: Calendar events to consider, in any order
            attendees: Attendee names whose events block time
            min_duration: Minimum length of a window in minutes

        Returns:
            Free windows sorted ascending by start
        """
        relevant = self.relevant_events(events, attendees)
        windows: List[TimeRange] = []

        if not relevant:
            self._add_if_long_enough(
                TimeRange.from_start_end(START_OF_DAY, END_OF_DAY, True),
                windows,
                min_duration
            )
            return windows

        relevant.sort(key=lambda event: order_by_start(event.when))

        # Gap before the first busy block
        self._add_if_long_enough(
            TimeRange.from_start_end(START_OF_DAY, relevant[0].when.start, False),
            windows,
            min_duration
        )

        busy_end = relevant[0].when.end
        for event in relevant:
            if event.when.start <= busy_end:
                busy_end = max(busy_end, event.when.end)
                continue

            self._add_if_long_enough(
                TimeRange.from_start_end(busy_end, event.when.start, False),
                windows,
                min_duration
            )
            busy_end = event.when.end

        # Trailing window, touching the end of the day
        if busy_end <= END_OF_DAY:
            self._add_if_long_enough(
                TimeRange.from_start_end(busy_end, END_OF_DAY, True),
                windows,
                min_duration
            )

        logger.debug(
            "Merged %d relevant event(s) into %d free window(s) of at least %d min",
            len(relevant), len(windows), min_duration
        )
        return windows

    @staticmethod
    def relevant_events(events: Iterable[Event], attendees: Iterable[str]) -> List[Event]:
        """
        Return the non-empty events attended by at least one of the given attendees.

        Events without any such attendee impose no constraint. Neither do
        zero-length events, which block no minute of the day.
        """
        attendee_set = frozenset(attendees)
        if not attendee_set:
            return []
        return [
            event for event in events
            if event.when.duration() > 0 and event.involves_any(attendee_set)
        ]

    @staticmethod
    def _add_if_long_enough(
        window: TimeRange,
        windows: List[TimeRange],
        min_duration: int
    ) -> None:
        # Empty gaps, e.g. before an event starting at midnight, are not windows
        if window.duration() > 0 and window.duration() >= min_duration:
            windows.append(window)
