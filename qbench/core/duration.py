"""
Human-readable rendering of nanosecond durations.

Uses fixed 60/60/24/365 divisors (no leap-year correction).
"""

NANOS_PER_MILLI = 1_000_000
MILLIS_PER_SECOND = 1000
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
DAYS_PER_YEAR = 365


def format_duration(nanos: int) -> str:
    """
    Render a duration as e.g. ``"1d 2h 3m 4s 5ms"``.

    Zero-valued units are omitted and sub-millisecond remainders truncated;
    anything below one millisecond renders as ``"0ms"``.
    """
    if nanos < 0:
        raise ValueError(f"duration must be non-negative, got {nanos}")

    millis = nanos // NANOS_PER_MILLI
    seconds, ms = divmod(millis, MILLIS_PER_SECOND)
    minutes, secs = divmod(seconds, SECONDS_PER_MINUTE)
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    days, hrs = divmod(hours, HOURS_PER_DAY)
    years, dys = divmod(days, DAYS_PER_YEAR)

    parts = [
        f"{value}{unit}"
        for value, unit in (
            (years, "y"),
            (dys, "d"),
            (hrs, "h"),
            (mins, "m"),
            (secs, "s"),
            (ms, "ms"),
        )
        if value
    ]
    return " ".join(parts) if parts else "0ms"
