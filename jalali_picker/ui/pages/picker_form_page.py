from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtWidgets import (
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from jalali_picker.core.config import PickerConfig
from jalali_picker.ui.widgets.jalali_date_edit import JalaliDateEdit
from jalali_picker.utils.calendar_math import JalaaliDate


class PickerFormPage(QWidget):
    """A small form holding picker variants and the values they committed."""

    def __init__(
        self,
        config: PickerConfig,
        parent: QWidget | None = None,
        today_provider: Callable[[], JalaaliDate] | None = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self._logger = logging.getLogger(self.__class__.__name__)
        self.values: dict[str, str] = {
            "contract_date": "",
            "birth_date": "",
            "mission_start": "",
        }

        layout = QVBoxLayout(self)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        title = QLabel(self.tr("ثبت قرارداد"))
        title.setObjectName("PageTitle")
        layout.addWidget(title)

        card = QFrame()
        card.setObjectName("Card")
        form = QFormLayout(card)
        form.setContentsMargins(16, 16, 16, 16)
        form.setSpacing(12)

        self.pickers: dict[str, JalaliDateEdit] = {
            "contract_date": JalaliDateEdit(
                config.picker_options(), today_provider=today_provider
            ),
            "birth_date": JalaliDateEdit(
                config.picker_options(
                    enable_year_selection=True,
                    placeholder=self.tr("تاریخ تولد"),
                ),
                today_provider=today_provider,
            ),
            "mission_start": JalaliDateEdit(
                config.picker_options(show_time=True),
                today_provider=today_provider,
            ),
        }
        labels = {
            "contract_date": self.tr("تاریخ قرارداد"),
            "birth_date": self.tr("تاریخ تولد"),
            "mission_start": self.tr("شروع ماموریت"),
        }
        for key, picker in self.pickers.items():
            picker.value_changed.connect(
                lambda value, field=key: self._on_value_changed(field, value)
            )
            form.addRow(labels[key], picker)

        self.locked_picker = JalaliDateEdit(
            config.picker_options(disabled=True),
            today_provider=today_provider,
        )
        form.addRow(self.tr("تاریخ تایید (قفل)"), self.locked_picker)
        layout.addWidget(card)

        self.summary_label = QLabel("")
        self.summary_label.setProperty("textRole", "muted")
        layout.addWidget(self.summary_label)

        buttons = QHBoxLayout()
        buttons.addStretch(1)
        self.reset_button = QPushButton(self.tr("پاک کردن فرم"))
        self.reset_button.clicked.connect(self.reset)
        buttons.addWidget(self.reset_button)
        layout.addLayout(buttons)
        layout.addStretch(1)

        self._refresh_summary()

    def reset(self) -> None:
        for key in self.values:
            self.values[key] = ""
            self.pickers[key].set_value("")
        self._logger.info("Form reset")
        self._refresh_summary()

    def _on_value_changed(self, field: str, value: str) -> None:
        self.values[field] = value
        self.pickers[field].set_value(value)
        self._refresh_summary()

    def _refresh_summary(self) -> None:
        lines = [
            f"{key}: {value or '-'}" for key, value in self.values.items()
        ]
        self.summary_label.setText("\n".join(lines))
