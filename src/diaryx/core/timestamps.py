"""Millisecond timestamps used for last-writer-wins."""

import math
import time
from typing import Any, Optional


def now_ms() -> int:
    """Current time in milliseconds since epoch."""
    return int(time.time() * 1000)


def resolve_last_modified(value: Any, now: Optional[int] = None) -> int:
    """Turn a client or stored timestamp into integer milliseconds.

    Missing, non-numeric, NaN and infinite values become the current time.
    """
    fallback = now if now is not None else now_ms()
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return int(number)
