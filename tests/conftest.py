from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from jalali_picker.ui.picker.controller import DatePickerController
from jalali_picker.ui.picker.state import PickerOptions
from jalali_picker.utils.calendar_math import JalaaliDate


class ManualCall:
    def __init__(self, due: int, callback) -> None:  # noqa: ANN001
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose clock only moves when a test calls ``advance``."""

    def __init__(self) -> None:
        self.now = 0
        self.calls: list[ManualCall] = []

    def call_later(self, delay_ms: int, callback) -> ManualCall:  # noqa: ANN001
        call = ManualCall(self.now + max(int(delay_ms), 0), callback)
        self.calls.append(call)
        return call

    def pending(self) -> list[ManualCall]:
        return [c for c in self.calls if not c.cancelled and not c.fired]

    def advance(self, ms: int) -> None:
        target = self.now + ms
        while True:
            due = [c for c in self.pending() if c.due <= target]
            if not due:
                break
            call = min(due, key=lambda c: c.due)
            self.now = call.due
            call.fired = True
            call.callback()
        self.now = target


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_controller(qapp, scheduler):
    def factory(today: JalaaliDate = JalaaliDate(1403, 1, 1), **options):
        controller = DatePickerController(
            PickerOptions(**options),
            scheduler=scheduler,
            today_provider=lambda: today,
        )
        emitted: list[str] = []
        controller.value_changed.connect(emitted.append)
        return controller, emitted

    return factory
