from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, time, timedelta

import pandas as pd
from PySide6.QtWidgets import QApplication, QMainWindow, QTabWidget

from jalali_picker.core.config import PickerConfig
from jalali_picker.ui.pages.attendance_report_page import AttendanceReportPage
from jalali_picker.ui.pages.picker_form_page import PickerFormPage
from jalali_picker.ui.theme import get_stylesheet
from jalali_picker.ui.widgets.jalali_date_edit import JalaliDateEdit
from jalali_picker.utils.calendar_math import JalaaliDate, to_gregorian

_EMPLOYEES = ("علی رضایی", "مریم احمدی", "حسین کریمی")


def build_sample_attendance(today: JalaaliDate, days: int = 30) -> pd.DataFrame:
    rows: list[dict[str, object]] = []
    last_day = to_gregorian(today)
    for offset in range(days):
        day = last_day - timedelta(days=offset)
        for index, employee in enumerate(_EMPLOYEES):
            check_in = datetime.combine(day, time(8, 0)) + timedelta(
                minutes=7 * index + offset % 11
            )
            rows.append(
                {
                    "employee": employee,
                    "check_in": check_in,
                    "check_out": check_in + timedelta(hours=8, minutes=30),
                }
            )
    return pd.DataFrame(rows, columns=["employee", "check_in", "check_out"])


class MainWindow(QMainWindow):
    def __init__(
        self,
        config: PickerConfig,
        today_provider: Callable[[], JalaaliDate],
    ) -> None:
        super().__init__()
        self.config = config
        self._logger = logging.getLogger(self.__class__.__name__)
        self.setWindowTitle("تقویم شمسی")
        self.resize(960, 680)

        self.tabs = QTabWidget()
        self.form_page = PickerFormPage(config, today_provider=today_provider)
        self.report_page = AttendanceReportPage(
            config,
            build_sample_attendance(today_provider()),
            today_provider=today_provider,
        )
        self.tabs.addTab(self.form_page, self.tr("فرم"))
        self.tabs.addTab(self.report_page, self.tr("گزارش حضور"))
        self.setCentralWidget(self.tabs)

        self.apply_theme(self.config.theme)

    def apply_theme(self, theme: str) -> None:
        app = QApplication.instance()
        font_stack = app.property("ui_font_stack") if app else None
        stylesheet = get_stylesheet(theme, font_stack)
        if app is not None:
            app.setStyleSheet(stylesheet)
        else:
            self.setStyleSheet(stylesheet)
        self._logger.info("Theme applied: %s", theme)

    def closeEvent(self, event) -> None:  # noqa: N802
        pickers = self.findChildren(JalaliDateEdit)
        for picker in pickers:
            picker.dispose()
        self._logger.info("Main window closing; disposed %s pickers", len(pickers))
        super().closeEvent(event)
