"""Human readable sizes and durations for status lines."""

from __future__ import annotations

_SIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB")


def format_size(nbytes: int) -> str:
    """Format a byte count with decimal units, e.g. 1500000 -> '1.5 MB'."""
    if nbytes < 1000:
        return f"{nbytes} B"

    value = float(nbytes)
    unit = 0
    while value >= 1000 and unit < len(_SIZE_UNITS) - 1:
        value /= 1000
        unit += 1
    return f"{value:.1f} {_SIZE_UNITS[unit]}"


def format_duration(seconds: float) -> str:
    """
    Format a duration in seconds, e.g. 2 -> '2s', 1.5 -> '1.5s',
    0.25 -> '250ms', 300 -> '5m0s', 3720 -> '1h2m0s'.
    """
    if seconds <= 0:
        return "0s"
    if seconds < 1:
        return f"{seconds * 1000:g}ms"

    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    secs_text = f"{round(secs, 3):g}s"
    if hours:
        return f"{int(hours)}h{int(minutes)}m{secs_text}"
    if minutes:
        return f"{int(minutes)}m{secs_text}"
    return secs_text
