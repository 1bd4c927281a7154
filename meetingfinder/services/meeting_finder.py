"""
Application service for finding meeting times.

The service coordinates loading events via an event source adapter and
delegates the actual window selection to the domain-level
``MeetingResolver``. This keeps the CLI thin and improves testability by
allowing the calendar dependency to be replaced via a simple protocol.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from ..domain.meeting_resolver import MeetingResolver
from ..domain.models import Event, MeetingRequest, TimeRange

logger = logging.getLogger(__name__)


class EventSourceProtocol(Protocol):
    """Protocol describing the event source behaviour needed by the service."""

    def get_events(self) -> List[Event]:
        """Return all events of the day."""


class MeetingFinderService:
    """
    Orchestrates event retrieval and meeting-time resolution.

    Dependency inversion toward a protocol makes it easy to plug in the file
    adapter or an in-memory stub in tests.
    """

    def __init__(
        self,
        event_source: EventSourceProtocol,
        resolver: MeetingResolver | None = None,
    ) -> None:
        self._event_source = event_source
        self._resolver = resolver or MeetingResolver()

    def find_meeting_times(
        self,
        *,
        mandatory_attendees: Iterable[str],
        optional_attendees: Iterable[str] = (),
        duration_minutes: int,
    ) -> List[TimeRange]:
        """
        Load events, build the request and compute the best meeting windows.

        Raises:
            InvalidMeetingRequestError: If the duration is not positive
        """
        request = MeetingRequest(
            mandatory_attendees=frozenset(mandatory_attendees),
            optional_attendees=frozenset(optional_attendees),
            duration=duration_minutes,
        )
        return self.resolve(events=self.fetch_events(), request=request)

    def fetch_events(self) -> List[Event]:
        """Fetch all events from the configured source."""
        events = list(self._event_source.get_events())
        logger.debug("Fetched %d event(s)", len(events))
        return events

    def resolve(self, *, events: Iterable[Event], request: MeetingRequest) -> List[TimeRange]:
        """Compute meeting windows from already loaded events."""
        return self._resolver.query(events, request)
