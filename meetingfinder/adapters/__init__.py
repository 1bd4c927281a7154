"""
Adapters layer - Calendar data sources.
"""

from .calendar_file import CalendarFileSource, EventRecord, format_minute_of_day, parse_minute_of_day

__all__ = ["CalendarFileSource", "EventRecord", "format_minute_of_day", "parse_minute_of_day"]
