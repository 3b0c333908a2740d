"""
Session clock utilities.

Ticks are the engine's unit of time. These helpers map tick indices to the
wall-clock time of day they represent, for action records and reports.
"""

from datetime import datetime, timedelta

from ..config.defaults import SessionParams

_CLOCK_FORMAT = "%H:%M"


def parse_session_start(session_start: str) -> datetime:
    """
    Parse an HH:MM session start time.

    Args:
        session_start: Time of day formatted as HH:MM

    Returns:
        datetime on an arbitrary fixed date carrying the time of day

    Raises:
        ValueError: If the string is not a valid HH:MM time
    """
    return datetime.strptime(session_start, _CLOCK_FORMAT)


def tick_to_session_time(tick: int, params: SessionParams) -> str:
    """
    Wall-clock time of day for a tick.

    Args:
        tick: Tick index, 0 is the session start
        params: Session timing parameters

    Returns:
        Time of day formatted as HH:MM
    """
    if tick < 0:
        raise ValueError(f"tick must be non-negative, got {tick}")

    start = parse_session_start(params.session_start)
    return (start + timedelta(minutes=tick * params.tick_minutes)).strftime(_CLOCK_FORMAT)


def session_duration_minutes(params: SessionParams) -> int:
    """Total session length covered by the configured ticks."""
    return params.ticks_per_session * params.tick_minutes
