"""
Formatting utilities for race times.

Used by the API layer and by record summaries.
"""

import re


_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?:\.(\d{1,2}))?$")
_SECONDS_PATTERN = re.compile(r"^(\d+)(?:\.(\d{1,2}))?$")


def format_time(seconds: float | None) -> str:
    """
    Format seconds as 'M:SS.ss'.

    Args:
        seconds: Time in seconds (e.g., 1005.4)

    Returns:
        Formatted string (e.g., '16:45.40'), or '—' when there is no time
    """
    if seconds is None or seconds <= 0:
        return "—"

    centis = round(seconds * 100)
    minutes, centis = divmod(centis, 6000)
    return f"{minutes}:{centis / 100:05.2f}"


def parse_time(value: str) -> float:
    """
    Parse 'MM:SS', 'MM:SS.ss' or 'SS.ss' into seconds.

    Raises:
        ValueError: If the string is not a recognised time
    """
    text = value.strip()

    match = _TIME_PATTERN.match(text)
    if match:
        minutes, secs, frac = match.groups()
        return int(minutes) * 60 + int(secs) + _centis(frac)

    match = _SECONDS_PATTERN.match(text)
    if match:
        secs, frac = match.groups()
        return int(secs) + _centis(frac)

    raise ValueError(f"Invalid time format: {value!r}")


def format_percent(value: float | None) -> str:
    """Format an improvement percentage, e.g. '-6.3%'."""
    if value is None:
        return "—"
    return f"-{value:.1f}%"


def _centis(frac: str | None) -> float:
    if not frac:
        return 0.0
    return int(frac.ljust(2, "0")) / 100
