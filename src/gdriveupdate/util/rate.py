from __future__ import annotations


def calc_rate(nbytes: int, started: float, finished: float) -> int:
    """
    Return the average transfer rate in bytes per second.

    `started` / `finished` are clock readings in seconds (time.monotonic()).
    Transfers that complete in under a second are treated as instantaneous:
    the rate is the byte count itself.
    """
    elapsed = finished - started
    if elapsed < 1.0:
        return nbytes
    return round(nbytes / elapsed)
