"""Shared helpers."""

from .formatting import (
    format_pace,
    format_split,
    format_time,
    parse_time,
    time_from_parts,
)

__all__ = [
    "format_pace",
    "format_split",
    "format_time",
    "parse_time",
    "time_from_parts",
]
