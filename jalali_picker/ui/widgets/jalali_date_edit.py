from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QEvent, QObject, QPoint, QRect, Qt, QTime, Signal
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QAbstractScrollArea,
    QApplication,
    QFrame,
    QHBoxLayout,
    QLabel,
    QTimeEdit,
    QWidget,
)

from jalali_picker.ui.picker.controller import DatePickerController
from jalali_picker.ui.picker.placement import Rect, Size, compute_placement
from jalali_picker.ui.picker.scheduler import Scheduler
from jalali_picker.ui.picker.state import PickerMode, PickerOptions
from jalali_picker.ui.widgets.jalali_calendar_popup import JalaliCalendarPopup
from jalali_picker.utils.calendar_format import TimeOfDay
from jalali_picker.utils.calendar_math import JalaaliDate


class _PopupEventFilter(QObject):
    """Application-wide listener installed only while the popup is armed."""

    def __init__(self, field: "JalaliDateEdit") -> None:
        super().__init__(field)
        self._field = field

    def eventFilter(self, watched, event) -> bool:  # noqa: N802, ANN001
        event_type = event.type()
        if event_type == QEvent.MouseButtonPress:
            point = event.globalPosition().toPoint()
            if not self._field.contains_global_point(point):
                self._field.controller.request_dismiss()
            return False
        if event_type == QEvent.KeyPress and event.key() == Qt.Key_Escape:
            if self._field.controller.is_open:
                self._field.controller.cancel()
                return True
            return False
        if event_type in (QEvent.Resize, QEvent.Move):
            if watched is self._field.window():
                self._field.reposition_popup()
        return False


class JalaliDateEdit(QFrame):
    """Clickable field that opens a Jalaali calendar popup.

    The owner keeps the authoritative value: it listens to ``value_changed``
    and may push values back with :meth:`set_value`.
    """

    value_changed = Signal(str)

    def __init__(
        self,
        options: PickerOptions | None = None,
        parent: QWidget | None = None,
        *,
        scheduler: Scheduler | None = None,
        today_provider: Callable[[], JalaaliDate] | None = None,
    ) -> None:
        super().__init__(parent)
        self._logger = logging.getLogger(self.__class__.__name__)
        self.setObjectName("JalaliDateEdit")
        self.setCursor(Qt.PointingHandCursor)
        self.setFocusPolicy(Qt.StrongFocus)

        self.controller = DatePickerController(
            options,
            scheduler=scheduler,
            today_provider=today_provider,
            parent=self,
        )
        self._popup: JalaliCalendarPopup | None = None
        self._event_filter = _PopupEventFilter(self)
        self._filter_installed = False
        self._scroll_bars: list = []
        self._suppress_time_updates = False

        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 6, 12, 6)
        layout.setSpacing(8)

        icon = QLabel("📅")
        icon.setObjectName("CalendarIcon")
        layout.addWidget(icon)

        self.text_label = QLabel("")
        self.text_label.setObjectName("DateText")
        layout.addWidget(self.text_label, 1)

        self.time_edit = QTimeEdit()
        self.time_edit.setObjectName("TimeEdit")
        self.time_edit.setDisplayFormat("HH:mm")
        self.time_edit.timeChanged.connect(self._on_time_changed)
        layout.addWidget(self.time_edit)

        self.chevron = QLabel("‹")
        self.chevron.setObjectName("Chevron")
        layout.addWidget(self.chevron)

        self.controller.value_changed.connect(self.value_changed.emit)
        self.controller.selection_changed.connect(self._refresh_field)
        self.controller.mode_changed.connect(self._on_mode_changed)
        self.controller.dismiss_armed_changed.connect(
            self._on_dismiss_armed_changed
        )

        self.setEnabled(not self.controller.options.disabled)
        self._refresh_field()

    # -- owner API -----------------------------------------------------------

    def value(self) -> str:
        return self.controller.value()

    def set_value(self, value: str | None) -> None:
        self.controller.set_value(value)

    def set_disabled(self, disabled: bool) -> None:
        self.controller.options.disabled = disabled
        if disabled:
            self.controller.close()
        self.setEnabled(not disabled)
        self._refresh_field()

    def popup(self) -> JalaliCalendarPopup | None:
        return self._popup

    def dispose(self) -> None:
        """Tear down before the owning window goes away.

        Closing first disarms the dismissal listener and hides the popup;
        timers still pending after that fire as no-ops.
        """
        self.controller.close()
        self.controller.dispose()
        self._on_dismiss_armed_changed(False)
        if self._popup is not None:
            self._popup.close()
            self._popup.deleteLater()
            self._popup = None
        self.setEnabled(False)

    # -- geometry ------------------------------------------------------------

    def contains_global_point(self, point: QPoint) -> bool:
        anchor = QRect(self.mapToGlobal(QPoint(0, 0)), self.size())
        if anchor.contains(point):
            return True
        popup = self._popup
        return popup is not None and popup.isVisible() and (
            popup.frameGeometry().contains(point)
        )

    def reposition_popup(self) -> None:
        if self._popup is None or not self.controller.is_open:
            return
        if not self.isVisible() or self.window() is None:
            self.controller.anchor_lost()
            return
        screen = self.screen() or QGuiApplication.primaryScreen()
        if screen is None:
            self.controller.anchor_lost()
            return
        available = screen.availableGeometry()
        origin = self.mapToGlobal(QPoint(0, 0))
        anchor = Rect(
            left=origin.x() - available.x(),
            top=origin.y() - available.y(),
            width=self.width(),
            height=self.height(),
        )
        placement = compute_placement(
            anchor,
            Size(available.width(), available.height()),
            self.controller.mode,
        )
        self._popup.apply_placement(placement, available.x(), available.y())

    # -- Qt events -----------------------------------------------------------

    def mousePressEvent(self, event) -> None:  # noqa: N802
        if event.button() == Qt.LeftButton and self.isEnabled():
            self.controller.toggle()
            event.accept()
            return
        super().mousePressEvent(event)

    def keyPressEvent(self, event) -> None:  # noqa: N802
        if event.key() in (Qt.Key_Return, Qt.Key_Enter, Qt.Key_Space):
            self.controller.toggle()
            event.accept()
            return
        if event.key() == Qt.Key_Escape and self.controller.is_open:
            self.controller.cancel()
            event.accept()
            return
        super().keyPressEvent(event)

    def hideEvent(self, event) -> None:  # noqa: N802
        super().hideEvent(event)
        if self.controller.is_open:
            self.controller.anchor_lost()

    # -- controller wiring ---------------------------------------------------

    def _on_mode_changed(self, mode: PickerMode) -> None:
        self.setProperty("open", mode.is_open)
        self.style().unpolish(self)
        self.style().polish(self)
        if not mode.is_open:
            if self._popup is not None:
                self._popup.hide()
            return
        if self._popup is None:
            self._popup = JalaliCalendarPopup(self.controller, self)
        # Show or hide the year panel before measuring the size hint.
        self._popup.render()
        self.reposition_popup()
        if self.controller.is_open:
            self._popup.show()
            self._popup.raise_()

    def _on_dismiss_armed_changed(self, armed: bool) -> None:
        app = QApplication.instance()
        if armed and not self._filter_installed and app is not None:
            app.installEventFilter(self._event_filter)
            self._filter_installed = True
            self._connect_scroll_bars()
        elif not armed and self._filter_installed:
            if app is not None:
                app.removeEventFilter(self._event_filter)
            self._filter_installed = False
            self._disconnect_scroll_bars()

    def _connect_scroll_bars(self) -> None:
        parent = self.parentWidget()
        while parent is not None:
            if isinstance(parent, QAbstractScrollArea):
                for bar in (
                    parent.verticalScrollBar(),
                    parent.horizontalScrollBar(),
                ):
                    bar.valueChanged.connect(self._on_scrolled)
                    self._scroll_bars.append(bar)
            parent = parent.parentWidget()

    def _disconnect_scroll_bars(self) -> None:
        for bar in self._scroll_bars:
            try:
                bar.valueChanged.disconnect(self._on_scrolled)
            except (RuntimeError, TypeError):
                self._logger.debug("Scroll bar already disconnected")
        self._scroll_bars.clear()

    def _on_scrolled(self, _value: int) -> None:
        self.reposition_popup()

    def _refresh_field(self) -> None:
        controller = self.controller
        selection = controller.selection
        has_date = selection.date is not None
        self.text_label.setText(controller.display_text())
        self.text_label.setProperty("placeholder", not has_date)
        self.text_label.style().unpolish(self.text_label)
        self.text_label.style().polish(self.text_label)

        show_time = controller.options.show_time and has_date
        self.time_edit.setVisible(show_time)
        if show_time:
            current = selection.time or TimeOfDay(0, 0)
            self._suppress_time_updates = True
            self.time_edit.setTime(QTime(current.hour, current.minute))
            self._suppress_time_updates = False

    def _on_time_changed(self, value: QTime) -> None:
        if self._suppress_time_updates:
            return
        self.controller.set_time(TimeOfDay(value.hour(), value.minute()))

