"""Utility functions for timeblocker."""

from timeblocker.utils.date_parser import parse_date, get_date_range, to_date, to_date_string

__all__ = ["parse_date", "get_date_range", "to_date", "to_date_string"]
