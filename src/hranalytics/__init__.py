"""Recruitment analytics: categorized, time-bucketed interview statistics."""

__version__ = "0.1.0"
