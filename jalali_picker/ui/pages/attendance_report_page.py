from __future__ import annotations

import logging
from collections.abc import Callable

import pandas as pd
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from jalali_picker.core.config import PickerConfig
from jalali_picker.ui.widgets.jalali_date_edit import JalaliDateEdit
from jalali_picker.utils.calendar_format import format_machine
from jalali_picker.utils.calendar_math import JalaaliDate
from jalali_picker.utils.frames import (
    filter_by_jalali_range,
    jalali_column,
    zoned_timestamps,
)
from jalali_picker.utils.numeric import localize_digits
from jalali_picker.utils.table_models import DataFrameTableModel

TIMESTAMP_COLUMN = "check_in"

_HEADER_LABELS = {
    "employee": "نام",
    "date": "تاریخ",
    "check_in": "ورود",
    "check_out": "خروج",
}


class AttendanceReportPage(QWidget):
    """Attendance records filtered by a Jalaali date range.

    The page owns the start/end values; the pickers only report changes and
    receive the stored values back, the way a form re-renders its fields.
    """

    def __init__(
        self,
        config: PickerConfig,
        records: pd.DataFrame,
        parent: QWidget | None = None,
        today_provider: Callable[[], JalaaliDate] | None = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self._logger = logging.getLogger(self.__class__.__name__)
        self._records = records.copy()
        today = today_provider() if today_provider else None
        self._start = format_machine(today) if today else ""
        self._end = self._start

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        title = QLabel(self.tr("گزارش حضور و غیاب"))
        title.setObjectName("PageTitle")
        layout.addWidget(title)

        filters = QHBoxLayout()
        filters.setSpacing(10)
        filters.addWidget(QLabel(self.tr("از تاریخ")))
        self.start_picker = JalaliDateEdit(
            config.picker_options(value=self._start),
            today_provider=today_provider,
        )
        self.start_picker.value_changed.connect(self._on_start_changed)
        filters.addWidget(self.start_picker, 1)

        filters.addWidget(QLabel(self.tr("تا تاریخ")))
        self.end_picker = JalaliDateEdit(
            config.picker_options(value=self._end),
            today_provider=today_provider,
        )
        self.end_picker.value_changed.connect(self._on_end_changed)
        filters.addWidget(self.end_picker, 1)

        self.clear_button = QPushButton(self.tr("پاک کردن بازه"))
        self.clear_button.clicked.connect(self.clear_range)
        filters.addWidget(self.clear_button)
        layout.addLayout(filters)

        card = QFrame()
        card.setObjectName("Card")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(16, 16, 16, 16)
        card_layout.setSpacing(8)

        self.summary_label = QLabel("")
        self.summary_label.setProperty("textRole", "muted")
        card_layout.addWidget(self.summary_label)

        self.model = DataFrameTableModel(header_labels=_HEADER_LABELS)
        self.table = QTableView()
        self.table.setModel(self.model)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(
            QHeaderView.Stretch
        )
        card_layout.addWidget(self.table)
        layout.addWidget(card, 1)

        self.refresh()

    def date_range(self) -> tuple[str, str]:
        return self._start, self._end

    def set_records(self, records: pd.DataFrame) -> None:
        self._records = records.copy()
        self.refresh()

    def clear_range(self) -> None:
        self._start = ""
        self._end = ""
        self.start_picker.set_value(self._start)
        self.end_picker.set_value(self._end)
        self._logger.info("Attendance range cleared")
        self.refresh()

    def refresh(self) -> None:
        filtered = filter_by_jalali_range(
            self._records,
            TIMESTAMP_COLUMN,
            self._start,
            self._end,
            self.config.timezone,
        )
        self.model.set_dataframe(self._display_frame(filtered))
        self.summary_label.setText(
            self.tr("{count} رکورد").format(
                count=localize_digits(len(filtered), self.config.persian_digits)
            )
        )

    def _on_start_changed(self, value: str) -> None:
        self._start = value
        self.start_picker.set_value(self._start)
        self.refresh()

    def _on_end_changed(self, value: str) -> None:
        self._end = value
        self.end_picker.set_value(self._end)
        self.refresh()

    def _display_frame(self, frame: pd.DataFrame) -> pd.DataFrame:
        tz = self.config.timezone
        digits = self.config.persian_digits
        display = pd.DataFrame(
            {
                "employee": frame.get("employee", pd.Series(dtype=str)),
                "date": jalali_column(
                    frame[TIMESTAMP_COLUMN], tz=tz, persian_digits=digits
                ),
            }
        )
        for column in ("check_in", "check_out"):
            if column not in frame.columns:
                continue
            stamps = zoned_timestamps(frame[column], tz)
            display[column] = stamps.map(
                lambda stamp: ""
                if pd.isna(stamp)
                else localize_digits(f"{stamp:%H:%M}", digits)
            )
        return display
