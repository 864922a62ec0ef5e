"""Utility functions for record operations.

This module contains reusable helpers for identifier generation, clock
access, date-bound conversion and distance scoring that don't depend on
specific store state.
"""

from __future__ import annotations

import time
import uuid
from datetime import date, datetime, time as dt_time, timezone

DATE_FORMAT = "%Y-%m-%d"


def generate_record_id() -> str:
    """Generate a new unique record identifier.

    Uses a random UUID4, so no coordination or persisted state is needed.

    Returns:
        32-character hex string

    Example:
        >>> generate_record_id()
        '3f2b8c1d9e4a4f6b8a7c0d1e2f3a4b5c'
    """
    return uuid.uuid4().hex


def now_ms() -> int:
    """Current time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string.

    Raises:
        ValueError: If the value is not a valid calendar date in that format
    """
    return datetime.strptime(value, DATE_FORMAT).date()


def date_start_ms(value: str) -> int:
    """Milliseconds at 00:00:00.000 UTC of the given YYYY-MM-DD day.

    Example:
        >>> date_start_ms("2024-01-02")
        1704153600000
    """
    start = datetime.combine(parse_date(value), dt_time.min, tzinfo=timezone.utc)
    return int(start.timestamp() * 1000)


def date_end_ms(value: str) -> int:
    """Milliseconds at 23:59:59.999 UTC of the given YYYY-MM-DD day.

    Example:
        >>> date_end_ms("2024-01-02")
        1704239999999
    """
    return date_start_ms(value) + 86_400_000 - 1


def distance_to_similarity(distance: float) -> float:
    """Convert a cosine distance to a similarity score.

    Cosine distance between unit vectors lies in [0, 2].

    Args:
        distance: Distance reported by the record table

    Returns:
        Similarity score in range [0, 1]

    Example:
        >>> distance_to_similarity(0.0)  # Identical
        1.0
        >>> distance_to_similarity(1.0)  # Orthogonal
        0.5
        >>> distance_to_similarity(2.0)  # Opposite
        0.0
    """
    similarity = 1.0 - distance / 2.0
    return max(0.0, min(1.0, similarity))


def format_similarity(distance: float) -> str:
    """Format a distance as a similarity percentage, e.g. '87.5%'."""
    return f"{distance_to_similarity(distance) * 100:.1f}%"
