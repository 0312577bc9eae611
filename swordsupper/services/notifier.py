import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from swordsupper.core.constants import MESSAGE_TIMEOUT_SECONDS, SEVERITIES

logger = logging.getLogger(__name__)


@dataclass
class Message:
    text: str
    severity: str
    created_at: float
    timeout: float = MESSAGE_TIMEOUT_SECONDS

    @property
    def expires_at(self) -> float:
        return self.created_at + self.timeout

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class Notifier:
    """
    Single user-facing message channel. A new message replaces the current one,
    and each message auto-dismisses after `timeout` seconds.
    """

    def __init__(self, timeout: float = MESSAGE_TIMEOUT_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self.clock = clock
        self.listeners: List[Callable[[Message], None]] = []
        self._current: Optional[Message] = None

    def register(self, listener: Callable[[Message], None]):
        self.listeners.append(listener)

    def unregister(self, listener: Callable[[Message], None]):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def show_message(self, text: str, severity: str = "info") -> Message:
        if severity not in SEVERITIES:
            logger.warning(f"Unknown message severity {severity}, using info")
            severity = "info"

        message = Message(text=text, severity=severity, created_at=self.clock(), timeout=self.timeout)
        self._current = message
        logger.log(logging.ERROR if severity == "error" else logging.INFO, f"[{severity}] {text}")

        for listener in list(self.listeners):
            try:
                listener(message)
            except Exception as e:
                logger.error(f"Message listener failed: {e}")
        return message

    @property
    def current(self) -> Optional[Message]:
        """The visible message, or None once it has expired or been dismissed."""
        if self._current and self._current.is_expired(self.clock()):
            self._current = None
        return self._current

    def dismiss(self):
        self._current = None
