"""
meetingfinder - find the best meeting windows within a day.
"""

__version__ = "1.0.0"
