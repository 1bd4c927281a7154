"""
Tests for the free-window calculation.
"""

from meetingfinder.domain.interval_merger import IntervalMerger
from meetingfinder.domain.models import WHOLE_DAY, Event, TimeRange


def _event(start, end, *attendees):
    return Event(when=TimeRange(start=start, end=end), attendees=frozenset(attendees))


class TestIntervalMerger:
    """Tests for IntervalMerger."""

    def test_no_events_gives_whole_day(self):
        """Without events the entire day is free."""
        windows = IntervalMerger().free_windows([], {"A"}, 60)

        assert windows == [WHOLE_DAY]

    def test_irrelevant_events_are_ignored(self):
        events = [_event(60, 120, "B")]

        assert IntervalMerger().free_windows(events, {"A"}, 30) == [WHOLE_DAY]

    def test_empty_attendee_set_is_unconstrained(self):
        events = [_event(60, 120, "B")]

        assert IntervalMerger().free_windows(events, set(), 30) == [WHOLE_DAY]

    def test_gaps_around_single_event(self):
        windows = IntervalMerger().free_windows([_event(60, 120, "A")], {"A"}, 30)

        assert windows == [TimeRange(start=0, end=60), TimeRange(start=120, end=1440)]

    def test_overlapping_and_touching_events_are_merged(self):
        """Events that overlap or touch form one busy block."""
        events = [
            _event(300, 400, "B"),
            _event(100, 200, "A"),
            _event(150, 250, "A"),
            _event(250, 300, "B"),
            _event(600, 700, "A"),
        ]

        windows = IntervalMerger().free_windows(events, {"A", "B"}, 0)

        assert windows == [
            TimeRange(start=0, end=100),
            TimeRange(start=400, end=600),
            TimeRange(start=700, end=1440),
        ]

    def test_nested_event_does_not_shrink_busy_block(self):
        events = [_event(100, 500, "A"), _event(200, 300, "A")]

        windows = IntervalMerger().free_windows(events, {"A"}, 0)

        assert windows == [TimeRange(start=0, end=100), TimeRange(start=500, end=1440)]

    def test_short_windows_are_dropped_not_truncated(self):
        """Windows below the minimum duration are filtered out."""
        events = [_event(0, 540, "A"), _event(555, 1440, "A")]

        assert IntervalMerger().free_windows(events, {"A"}, 30) == []
        assert IntervalMerger().free_windows(events, {"A"}, 15) == [TimeRange(start=540, end=555)]

    def test_event_at_midnight_leaves_no_empty_window(self):
        windows = IntervalMerger().free_windows([_event(0, 60, "A")], {"A"}, 0)

        assert windows == [TimeRange(start=60, end=1440)]

    def test_double_booked_all_day_gives_nothing(self):
        events = [_event(0, 1440, "A"), _event(0, 1440, "A", "B")]

        assert IntervalMerger().free_windows(events, {"A", "B"}, 0) == []

    def test_windows_are_sorted_and_disjoint(self):
        events = [_event(900, 950, "A"), _event(10, 20, "A"), _event(400, 410, "A")]

        windows = IntervalMerger().free_windows(events, {"A"}, 0)

        assert windows == sorted(windows)
        for earlier, later in zip(windows, windows[1:]):
            assert not earlier.overlaps(later)

    def test_relevant_events(self):
        events = [_event(0, 10, "A"), _event(10, 20, "B", "C"), _event(20, 30)]

        relevant = IntervalMerger.relevant_events(events, {"C"})

        assert relevant == [events[1]]

    def test_zero_length_event_does_not_split_free_time(self):
        """An empty event blocks no minute of the day."""
        events = [_event(600, 600, "A")]

        assert IntervalMerger().free_windows(events, {"A"}, 0) == [WHOLE_DAY]
        assert IntervalMerger.relevant_events(events, {"A"}) == []

    def test_zero_length_event_inside_busy_block(self):
        events = [_event(100, 200, "A"), _event(300, 300, "A"), _event(150, 150, "A")]

        windows = IntervalMerger().free_windows(events, {"A"}, 0)

        assert windows == [TimeRange(start=0, end=100), TimeRange(start=200, end=1440)]
