from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

SEVERITIES = ("info", "success", "error")

TimerFactory = Callable[[float, Callable[[], None]], "threading.Timer"]


@dataclass(frozen=True)
class Notification:
    message: str
    severity: str = "info"


class Notifier:
    """
    Holds the single visible notification and hides it after `dismiss_after`
    seconds.

    A new notification replaces the current one and cancels its pending
    dismissal, so a fresh message is never hidden early by an older timer.
    """

    def __init__(
        self,
        dismiss_after: float = 3.0,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        self._dismiss_after = dismiss_after
        self._timer_factory = timer_factory or threading.Timer
        self._lock = threading.RLock()
        self._current: Optional[Notification] = None
        self._timer: Optional[threading.Timer] = None

    @property
    def current(self) -> Optional[Notification]:
        with self._lock:
            return self._current

    def notify(self, message: str, severity: str = "info") -> Notification:
        if severity not in SEVERITIES:
            severity = "info"
        notification = Notification(message=message, severity=severity)
        with self._lock:
            self._cancel_timer()
            self._current = notification
            timer = self._timer_factory(self._dismiss_after, lambda: self._expire(notification))
            timer.daemon = True
            self._timer = timer
            timer.start()
        logger.debug("notify severity=%s message=%s", severity, message)
        return notification

    def dismiss(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._current = None

    def _expire(self, notification: Notification) -> None:
        with self._lock:
            # Only hide the notification this timer was scheduled for.
            if self._current is notification:
                self._current = None
                self._timer = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
