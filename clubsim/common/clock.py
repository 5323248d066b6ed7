"""
Conversion between HH:MM wall-clock text and minutes since midnight.
"""

from clubsim.common.constants import CLOCK_PATTERN, MINUTES_PER_HOUR, MINUTES_PER_DAY


def parse_clock(text: str) -> int:
    """
    Parse a HH:MM timestamp.

    Args:
        text: Timestamp with two-digit hours (00-23) and minutes (00-59)

    Returns:
        Minutes since midnight

    Raises:
        ValueError: If text is not a valid HH:MM timestamp
    """
    match = CLOCK_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Invalid clock value: {text!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours >= 24 or minutes >= MINUTES_PER_HOUR:
        raise ValueError(f"Clock value out of range: {text!r}")
    return hours * MINUTES_PER_HOUR + minutes


def format_clock(minutes: int) -> str:
    """Format minutes since midnight as HH:MM."""
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Clock minutes must be within a day, got {minutes}")
    return format_duration(minutes)


def format_duration(minutes: int) -> str:
    """Format a non-negative duration as HH:MM (hours are not capped)."""
    hours, rest = divmod(minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{rest:02d}"
