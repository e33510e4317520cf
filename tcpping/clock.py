# tcpping/clock.py
import time
from typing import Callable

# Anything returning monotonic seconds as a float. Tests pass a scripted one.
Clock = Callable[[], float]


def monotonic() -> float:
    """Highest-resolution monotonic clock, unaffected by wall-clock changes."""
    return time.perf_counter_ns() / 1e9


def elapsed_ms(start: float, end: float) -> float:
    return (end - start) * 1000.0
