import time
import threading
from typing import Callable, Optional


class IdGenerator:
    """
    Generates record identifiers from the current time in milliseconds.
    Two calls within the same clock tick would collide on a plain timestamp,
    so every id is at least one greater than the previously issued id.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, floor: int = 0) -> int:
        """Returns a new id strictly greater than both the last issued id and `floor`."""
        with self._lock:
            candidate = int(self._clock() * 1000)
            candidate = max(candidate, self._last + 1, floor + 1)
            self._last = candidate
            return candidate


id_generator = IdGenerator()


def format_percentage(part: int, total: int) -> str:
    """One-decimal percentage string. A zero total yields '0.0'."""
    if total <= 0:
        return "0.0"
    return f"{(part / total) * 100:.1f}"
