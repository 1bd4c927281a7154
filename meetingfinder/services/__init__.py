"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .meeting_finder import EventSourceProtocol, MeetingFinderService

__all__ = ["EventSourceProtocol", "MeetingFinderService"]
