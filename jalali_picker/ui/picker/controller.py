from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QObject, Signal

from jalali_picker.ui.picker.scheduler import QtScheduler, ScheduledCall, Scheduler
from jalali_picker.ui.picker.state import (
    PickerMode,
    PickerOptions,
    SelectionState,
    SyncState,
    ViewState,
)
from jalali_picker.utils import calendar_math
from jalali_picker.utils.calendar_format import (
    TimeOfDay,
    format_for_display,
    format_value,
    parse_value,
)
from jalali_picker.utils.calendar_math import JalaaliDate


class DatePickerController(QObject):
    """State machine behind the Jalaali date picker.

    The popup moves between ``CLOSED``, ``DAY_GRID`` and ``YEAR_PICKER``.
    Browsing only touches the view; the selection changes on a day click,
    the today shortcut, a time edit, or when the owner pushes a new value
    through :meth:`set_value`. After every local commit the owner's value is
    not reconciled until the guard window has elapsed, so an echo of the
    value just emitted cannot flip the selection back.
    """

    value_changed = Signal(str)
    mode_changed = Signal(object)
    view_changed = Signal(int, int)
    selection_changed = Signal()
    dismiss_armed_changed = Signal(bool)

    def __init__(
        self,
        options: PickerOptions | None = None,
        scheduler: Scheduler | None = None,
        today_provider: Callable[[], JalaaliDate] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(self.__class__.__name__)
        self.options = options or PickerOptions()
        self._scheduler = scheduler or QtScheduler(self)
        self._today_provider = today_provider or calendar_math.today
        self._mode = PickerMode.CLOSED
        self._selection = SelectionState()
        self._sync = SyncState()
        self._dismiss_armed = False
        self._cycle = 0
        self._guard_token = 0
        self._disposed = False
        self._pending: list[ScheduledCall] = []
        self.set_value(self.options.value)
        self._view = self._initial_view()

    # -- read-only state -------------------------------------------------

    @property
    def mode(self) -> PickerMode:
        return self._mode

    @property
    def is_open(self) -> bool:
        return self._mode.is_open

    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def sync_state(self) -> SyncState:
        return self._sync

    @property
    def user_is_selecting(self) -> bool:
        return self._sync.user_is_selecting

    @property
    def dismiss_armed(self) -> bool:
        return self._dismiss_armed

    def value(self) -> str:
        time = self._selection.time if self.options.show_time else None
        return format_value(self._selection.date, time)

    def display_text(self) -> str:
        if self._selection.date is None:
            return self.options.placeholder
        return format_for_display(
            self._selection.date,
            self._selection.time,
            include_time=self.options.show_time,
            persian_digits=self.options.persian_digits,
        )

    def today(self) -> JalaaliDate:
        return self._today_provider()

    def grid_cells(self) -> list[int | None]:
        year, month = self._view.year, self._view.month
        offset = calendar_math.first_weekday_offset(year, month)
        days = calendar_math.days_in_month(year, month)
        return [None] * offset + list(range(1, days + 1))

    def is_selected(self, day: int) -> bool:
        selected = self._selection.date
        return (
            selected is not None
            and selected.year == self._view.year
            and selected.month == self._view.month
            and selected.day == day
        )

    def year_options(self) -> list[int]:
        return list(
            range(self.options.max_year, self.options.min_year - 1, -1)
        )

    def in_range(self, year: int) -> bool:
        return self.options.min_year <= year <= self.options.max_year

    def can_navigate_month(self, step: int) -> bool:
        return step != 0 and self.in_range(self._view.shifted(step).year)

    def can_navigate_year(self, step: int) -> bool:
        if not self.options.enable_year_selection:
            return False
        if step < 0:
            return self._view.year > self.options.min_year
        if step > 0:
            return self._view.year < self.options.max_year
        return False

    # -- lifecycle ---------------------------------------------------------

    def toggle(self) -> None:
        if self._mode.is_open:
            self.close()
        else:
            self.open()

    def open(self) -> bool:
        if self._disposed or self.options.disabled:
            return False
        if self._mode.is_open:
            return False
        self._cycle += 1
        self._set_view(self._initial_view())
        self._set_mode(PickerMode.DAY_GRID)
        cycle = self._cycle
        self._schedule(
            self.options.listener_delay_ms, lambda: self._arm_dismiss(cycle)
        )
        self._logger.debug("Picker opened at %s", self._view)
        return True

    def close(self) -> bool:
        if not self._mode.is_open:
            return False
        self._cycle += 1
        self._set_dismiss_armed(False)
        self._set_mode(PickerMode.CLOSED)
        self._logger.debug("Picker closed")
        return True

    def cancel(self) -> bool:
        return self.close()

    def confirm(self) -> bool:
        return self.close()

    def anchor_lost(self) -> None:
        if self.close():
            self._logger.warning("Anchor lost while picker was open; closed")

    def request_dismiss(self) -> None:
        """Outside press seen by the host; the close lands after a short delay."""
        if not self._dismiss_armed or not self._mode.is_open:
            return
        cycle = self._cycle
        self._schedule(
            self.options.dismiss_delay_ms, lambda: self._dismiss(cycle)
        )

    def dispose(self) -> None:
        self._disposed = True
        for call in self._pending:
            call.cancel()
        self._pending.clear()
        self._dismiss_armed = False
        self._mode = PickerMode.CLOSED

    # -- navigation --------------------------------------------------------

    def navigate_month(self, step: int) -> bool:
        if not self.can_navigate_month(step):
            return False
        self._set_view(self._view.shifted(step))
        return True

    def navigate_year(self, step: int) -> bool:
        if not self.options.enable_year_selection or step == 0:
            return False
        target = self._view.year + step
        target = max(self.options.min_year, min(self.options.max_year, target))
        if target == self._view.year:
            return False
        self._set_view(ViewState(target, self._view.month))
        return True

    def enter_year_picker(self) -> bool:
        if not self.options.enable_year_selection:
            return False
        if self._mode is not PickerMode.DAY_GRID:
            return False
        self._set_mode(PickerMode.YEAR_PICKER)
        return True

    def toggle_year_picker(self) -> bool:
        if self._mode is PickerMode.YEAR_PICKER:
            self._set_mode(PickerMode.DAY_GRID)
            return True
        return self.enter_year_picker()

    def pick_year(self, year: int) -> bool:
        if self._mode is not PickerMode.YEAR_PICKER:
            return False
        if not self.in_range(year):
            return False
        self._set_view(ViewState(year, self._view.month))
        self._set_mode(PickerMode.DAY_GRID)
        return True

    # -- selection ---------------------------------------------------------

    def select_day(self, day: int) -> bool:
        if self._mode is not PickerMode.DAY_GRID:
            return False
        if not self.in_range(self._view.year):
            return False
        selected = JalaaliDate(self._view.year, self._view.month, day)
        self._commit(selected, self._selection.time)
        self.close()
        return True

    def can_select_today(self) -> bool:
        return self.in_range(self.today().year)

    def select_today(self) -> bool:
        if not self._mode.is_open:
            return False
        today = self.today()
        if not self.in_range(today.year):
            self._logger.debug("Today %s is outside the year range", today)
            return False
        self._commit(today, self._selection.time)
        self.close()
        return True

    def set_time(self, time: TimeOfDay | None) -> bool:
        if not self.options.show_time or time == self._selection.time:
            return False
        if self._selection.date is None:
            self._selection = SelectionState(None, time)
            return False
        self._commit(self._selection.date, time)
        return True

    def set_value(self, value: str | None) -> bool:
        """Reconcile the owner's value with the local selection."""
        text = (value or "").strip()
        if text == (self._sync.last_external_value or ""):
            return False
        if self._sync.user_is_selecting:
            self._logger.debug("Ignoring external value %r during guard", text)
            return False
        if text == self.value():
            self._sync.last_external_value = text
            return False
        if not text:
            self._sync.last_external_value = text
            self._set_selection(SelectionState())
            return True
        parsed = parse_value(text)
        if parsed is None:
            self._logger.debug("Ignoring unparsable external value %r", text)
            return False
        date, time = parsed
        if not self.options.show_time:
            time = None
        elif time is None:
            time = self._selection.time
        self._sync.last_external_value = text
        self._set_selection(SelectionState(date, time))
        return True

    # -- internals ---------------------------------------------------------

    def _initial_view(self) -> ViewState:
        anchor = self._selection.date or self.today()
        year = max(self.options.min_year, min(self.options.max_year, anchor.year))
        return ViewState(year, anchor.month)

    def _commit(self, date: JalaaliDate, time: TimeOfDay | None) -> None:
        if not self.options.show_time:
            time = None
        self._start_guard()
        self._set_selection(SelectionState(date, time))
        value = self.value()
        self._sync.last_external_value = value
        self._logger.info("Date committed: %s", value)
        self.value_changed.emit(value)

    def _start_guard(self) -> None:
        self._guard_token += 1
        token = self._guard_token
        self._sync.user_is_selecting = True
        self._schedule(
            self.options.guard_window_ms, lambda: self._end_guard(token)
        )

    def _end_guard(self, token: int) -> None:
        if self._disposed or token != self._guard_token:
            return
        self._sync.user_is_selecting = False

    def _arm_dismiss(self, cycle: int) -> None:
        if self._disposed or cycle != self._cycle or not self._mode.is_open:
            return
        self._set_dismiss_armed(True)

    def _dismiss(self, cycle: int) -> None:
        if self._disposed or cycle != self._cycle:
            return
        self.close()

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        if self._disposed:
            return
        call: ScheduledCall | None = None

        def run() -> None:
            if call in self._pending:
                self._pending.remove(call)
            callback()

        call = self._scheduler.call_later(delay_ms, run)
        self._pending.append(call)

    def _set_mode(self, mode: PickerMode) -> None:
        if mode is self._mode:
            return
        self._mode = mode
        self.mode_changed.emit(mode)

    def _set_view(self, view: ViewState) -> None:
        if view == self._view:
            return
        self._view = view
        self.view_changed.emit(view.year, view.month)

    def _set_selection(self, selection: SelectionState) -> None:
        if selection == self._selection:
            return
        self._selection = selection
        self.selection_changed.emit()

    def _set_dismiss_armed(self, armed: bool) -> None:
        if armed == self._dismiss_armed:
            return
        self._dismiss_armed = armed
        self.dismiss_armed_changed.emit(armed)
