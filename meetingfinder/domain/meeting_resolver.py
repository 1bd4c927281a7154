"""
Core business logic for choosing meeting times.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from typing import Iterable, List

from .attendance_sweep import AttendanceSegment, AttendanceSweep
from .interval_merger import IntervalMerger
from .models import Event, MeetingRequest, TimeRange

logger = logging.getLogger(__name__)


class MeetingResolver:
    """
    Finds the meeting windows that suit all mandatory attendees and as many
    optional attendees as possible.

    Algorithm:
    1. Get the free windows of the mandatory attendees, long enough for the meeting
    2. Get the free windows of each optional attendee and build the attendance change log
    3. Walk the change log and the mandatory windows side by side, clipping
       each mandatory window to every stretch of constant attendance
    4. Keep the clipped windows that are long enough and have the best attendance
    5. Fall back to the mandatory windows if nothing was kept
    """

    def __init__(
        self,
        interval_merger: IntervalMerger | None = None,
        attendance_sweep: AttendanceSweep | None = None
    ):
        self.interval_merger = interval_merger or IntervalMerger()
        self.attendance_sweep = attendance_sweep or AttendanceSweep(self.interval_merger)

    def query(self, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """
        Return the windows in which the requested meeting could take place.

        Args:
            events: Existing calendar events, in any order
            request: The meeting to schedule

        Returns:
            Windows sorted ascending by start. Each window is at least
            ``request.duration`` long. Windows with equal attendance are all
            returned, even when they touch.
        """
        events = list(events)

        if not request.is_satisfiable_within_a_day():
            logger.debug("Requested duration %d exceeds a day", request.duration)
            return []

        mandatory_windows = self.interval_merger.free_windows(
            events,
            request.mandatory_attendees,
            request.duration
        )
        if not mandatory_windows:
            logger.debug("No window fits all mandatory attendees")
            return []

        free_times = self.attendance_sweep.optional_free_times(events, request.optional_attendees)
        if not free_times:
            return mandatory_windows

        change_log = self.attendance_sweep.change_log(free_times)
        optimal_windows = self._optimal_windows(
            mandatory_windows,
            self.attendance_sweep.segments(change_log),
            request.duration
        )

        # No optional attendee can join any long enough window
        if not optimal_windows:
            return mandatory_windows

        return optimal_windows

    def _optimal_windows(
        self,
        mandatory_windows: List[TimeRange],
        segments: Iterable[AttendanceSegment],
        min_duration: int
    ) -> List[TimeRange]:
        """
        Merge-join the mandatory windows with the attendance segments.

        Both sequences are sorted, so one pointer per sequence is enough. The
        mandatory pointer steps back at most once per segment, to revisit the
        last window when it continues into the next segment.

        Segments without any optional attendee are never kept here, unlike a
        best-attendance search seeded at zero. When no segment with optional
        attendance is long enough the caller returns the mandatory windows
        whole instead of their zero-attendance fragments.
        """
        optimal_windows: List[TimeRange] = []
        best_attendance = 0
        index = 0

        for segment in segments:
            if index > 0 and mandatory_windows[index - 1].end > segment.window.start:
                index -= 1

            while index < len(mandatory_windows) and mandatory_windows[index].start < segment.window.end:
                clipped = mandatory_windows[index].intersect(segment.window)
                index += 1

                if clipped is None or clipped.duration() < min_duration:
                    continue

                # Stretches nobody optional can join are covered by the fallback
                if segment.attendance == 0:
                    continue

                if segment.attendance > best_attendance:
                    best_attendance = segment.attendance
                    optimal_windows = [clipped]
                elif segment.attendance == best_attendance:
                    optimal_windows.append(clipped)

        logger.debug(
            "%d window(s) with %d optional attendee(s) found",
            len(optimal_windows), best_attendance
        )
        return optimal_windows
