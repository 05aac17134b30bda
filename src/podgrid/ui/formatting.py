"""Text formatting helpers for the render layer."""

from __future__ import annotations

from datetime import UTC, datetime

# Bucket sizes in seconds, largest first
TIME_INTERVALS: tuple[tuple[str, int], ...] = (
    ("year", 31536000),
    ("month", 2592000),
    ("week", 604800),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
)


def pluralize(count: int, noun: str) -> str:
    """Return "1 Season", "0 Seasons", "2 Seasons"..."""
    return f"{count} {noun}{'' if count == 1 else 's'}"


def season_label(count: int) -> str:
    return pluralize(count, "Season")


def episode_label(count: int) -> str:
    return pluralize(count, "Episode")


def format_relative_time(timestamp: datetime | None, now: datetime | None = None) -> str:
    """Format a timestamp relative to now, e.g. "2 days ago".

    Args:
        timestamp: The moment to describe. Naive values are taken as UTC.
        now: Reference time, defaults to the current time.

    Returns:
        "<n> <unit>(s) ago" for the largest unit that fits at least once,
        "just now" below one minute or for future timestamps, and "Unknown"
        when the timestamp is missing.
    """
    if timestamp is None:
        return "Unknown"

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    diff_seconds = int((now - timestamp).total_seconds())

    for unit, seconds in TIME_INTERVALS:
        interval = diff_seconds // seconds
        if interval >= 1:
            return f"{pluralize(interval, unit)} ago"

    return "just now"
