"""Utility functions for relstore."""

from relstore.utils.date_parser import parse_datetime
from relstore.utils.text import truncate

__all__ = ["parse_datetime", "truncate"]
