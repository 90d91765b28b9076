from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from PySide6.QtCore import QObject, QTimer


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(
        self, delay_ms: int, callback: Callable[[], None]
    ) -> ScheduledCall: ...


class _QtScheduledCall:
    def __init__(self, timer: QTimer, callback: Callable[[], None]) -> None:
        self._timer = timer
        self._callback = callback
        self._done = False
        timer.timeout.connect(self._fire)

    def _fire(self) -> None:
        if self._done:
            return
        self._done = True
        self._timer.deleteLater()
        self._callback()

    def cancel(self) -> None:
        if self._done:
            return
        self._done = True
        self._timer.stop()
        self._timer.deleteLater()


class QtScheduler:
    """Single-shot timers owned by a QObject, cancellable before they fire."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def call_later(
        self, delay_ms: int, callback: Callable[[], None]
    ) -> ScheduledCall:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        call = _QtScheduledCall(timer, callback)
        timer.start(max(int(delay_ms), 0))
        return call
