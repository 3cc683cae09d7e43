"""Rabbit pacer: virtual progress of a synthetic user toward its target.

Progress is linear between the challenge start and end but advances only at
whole interval boundaries. An interval of 0 gives continuous linear progress.
"""

import math
from datetime import datetime


def _minutes(delta_seconds: float) -> float:
    return delta_seconds / 60.0


def virtual_total(
    target: int,
    interval_minutes: float,
    start: datetime,
    end: datetime,
    now: datetime,
) -> int:
    """
    Virtual total at ``now`` for a rabbit aiming at ``target`` by ``end``.

    0 at or before start, ``target`` at or after end, otherwise
    floor(target * intervals_elapsed / total_intervals). When a single interval
    is longer than the whole challenge the rabbit jumps to target right after start.
    """
    if target < 0:
        raise ValueError("target must be non-negative")
    if interval_minutes < 0:
        raise ValueError("interval_minutes must be non-negative")

    if now <= start:
        return 0
    if now >= end:
        return target

    span = _minutes((end - start).total_seconds())
    elapsed = _minutes((now - start).total_seconds())

    if interval_minutes == 0:
        return min(target, math.floor(target * elapsed / span))

    total_intervals = math.floor(span / interval_minutes)
    if total_intervals <= 0:
        return target
    intervals_elapsed = math.floor(elapsed / interval_minutes)
    return min(target, (target * intervals_elapsed) // total_intervals)
