"""Notification sinks for the cart store"""

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from .models import NotificationKind

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Anything that can surface a cart message to the user"""

    def notify(self, message: str, kind: NotificationKind) -> None:
        ...


class CallbackSink:
    """Adapts a plain callable to the sink interface"""

    def __init__(self, callback: Callable[[str, NotificationKind], None]):
        self._callback = callback

    def notify(self, message: str, kind: NotificationKind) -> None:
        self._callback(message, kind)


class LoggingSink:
    """Writes notifications to a logger"""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._logger = log or logger

    def notify(self, message: str, kind: NotificationKind) -> None:
        level = logging.WARNING if kind == NotificationKind.ERROR else logging.INFO
        self._logger.log(level, f"[{kind.value}] {message}")


class FanOutSink:
    """Forwards every notification to several sinks"""

    def __init__(self, *sinks: NotificationSink):
        self.sinks = list(sinks)

    def notify(self, message: str, kind: NotificationKind) -> None:
        for sink in self.sinks:
            sink.notify(message, kind)


@dataclass
class Toast:
    """A dismissible notification waiting to be shown"""
    message: str
    kind: NotificationKind
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: float = field(default_factory=time.monotonic)


class ToastQueue:
    """
    In-memory toast list.

    Keeps at most `limit` toasts, evicting the oldest first. When
    `dismiss_after` is set, toasts older than that many seconds are
    dropped the next time the queue is read.
    """

    def __init__(
        self,
        limit: int = 5,
        dismiss_after: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if limit < 1:
            raise ValueError("Toast limit must be at least 1")
        self.limit = limit
        self.dismiss_after = dismiss_after
        self._clock = clock
        self._toasts: list[Toast] = []

    def notify(self, message: str, kind: NotificationKind) -> None:
        self._toasts.append(Toast(message=message, kind=kind, created_at=self._clock()))
        if len(self._toasts) > self.limit:
            del self._toasts[: len(self._toasts) - self.limit]

    def _expire(self) -> None:
        if self.dismiss_after is None:
            return
        cutoff = self._clock() - self.dismiss_after
        self._toasts = [t for t in self._toasts if t.created_at > cutoff]

    @property
    def toasts(self) -> list[Toast]:
        """Visible toasts, oldest first"""
        self._expire()
        return list(self._toasts)

    def dismiss(self, toast_id: str) -> bool:
        """Remove a toast, returning whether it was present"""
        remaining = [t for t in self._toasts if t.id != toast_id]
        found = len(remaining) != len(self._toasts)
        self._toasts = remaining
        return found

    def drain(self) -> list[Toast]:
        """Return the visible toasts and clear the queue"""
        toasts = self.toasts
        self._toasts = []
        return toasts

    def __len__(self) -> int:
        return len(self.toasts)
