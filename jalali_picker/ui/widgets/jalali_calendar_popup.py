from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from jalali_picker.ui.picker.controller import DatePickerController
from jalali_picker.ui.picker.placement import Placement
from jalali_picker.ui.picker.state import PickerMode
from jalali_picker.utils.calendar_format import DAY_SHORT_NAMES, month_name
from jalali_picker.utils.numeric import localize_digits

_GRID_ROWS = 6
_YEAR_COLUMNS = 4


class JalaliCalendarPopup(QFrame):
    """Floating month view rendered from a :class:`DatePickerController`."""

    def __init__(
        self, controller: DatePickerController, parent: QWidget | None = None
    ) -> None:
        super().__init__(
            parent,
            Qt.Tool | Qt.FramelessWindowHint | Qt.WindowStaysOnTopHint,
        )
        self.controller = controller
        self.setObjectName("JalaliCalendarPopup")
        self.setAttribute(Qt.WA_ShowWithoutActivating)
        self.setLayoutDirection(Qt.RightToLeft)
        self.setFocusPolicy(Qt.StrongFocus)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(10)

        layout.addLayout(self._build_header())

        self.year_panel = self._build_year_panel()
        layout.addWidget(self.year_panel)

        weekday_row = QHBoxLayout()
        weekday_row.setSpacing(4)
        for name in DAY_SHORT_NAMES:
            label = QLabel(name)
            label.setObjectName("WeekdayLabel")
            label.setAlignment(Qt.AlignCenter)
            weekday_row.addWidget(label)
        layout.addLayout(weekday_row)

        self.day_grid = QGridLayout()
        self.day_grid.setSpacing(4)
        self.day_buttons: list[QPushButton] = []
        for index in range(_GRID_ROWS * 7):
            button = QPushButton("")
            button.setObjectName("DayButton")
            button.setProperty("selected", False)
            button.setCursor(Qt.PointingHandCursor)
            button.setFocusPolicy(Qt.NoFocus)
            button.clicked.connect(
                lambda _checked=False, b=button: self._on_day_clicked(b)
            )
            self.day_grid.addWidget(button, index // 7, index % 7)
            self.day_buttons.append(button)
        layout.addLayout(self.day_grid)

        footer = QHBoxLayout()
        self.today_button = QPushButton(self.tr("امروز"))
        self.today_button.setObjectName("TodayButton")
        self.today_button.clicked.connect(self.controller.select_today)
        footer.addWidget(self.today_button)
        footer.addStretch(1)
        self.confirm_button = QPushButton(self.tr("تایید"))
        self.confirm_button.setObjectName("ConfirmButton")
        self.confirm_button.clicked.connect(self.controller.confirm)
        footer.addWidget(self.confirm_button)
        layout.addLayout(footer)

        self.controller.view_changed.connect(lambda *_: self.render())
        self.controller.selection_changed.connect(self.render)
        self.controller.mode_changed.connect(lambda _mode: self.render())
        self.render()

    def _build_header(self) -> QHBoxLayout:
        header = QHBoxLayout()
        header.setSpacing(6)

        self.prev_month_button = QPushButton("›")
        self.prev_month_button.setObjectName("NavButton")
        self.prev_month_button.setToolTip(self.tr("ماه قبل"))
        self.prev_month_button.clicked.connect(
            lambda: self.controller.navigate_month(-1)
        )
        header.addWidget(self.prev_month_button)
        header.addStretch(1)

        self.month_label = QLabel("")
        self.month_label.setObjectName("MonthLabel")
        header.addWidget(self.month_label)

        self.prev_year_button = QPushButton("›")
        self.prev_year_button.setObjectName("YearNavButton")
        self.prev_year_button.clicked.connect(
            lambda: self.controller.navigate_year(-1)
        )
        header.addWidget(self.prev_year_button)

        self.year_button = QPushButton("")
        self.year_button.setObjectName("YearButton")
        self.year_button.setFlat(True)
        self.year_button.clicked.connect(self.controller.toggle_year_picker)
        header.addWidget(self.year_button)

        self.next_year_button = QPushButton("‹")
        self.next_year_button.setObjectName("YearNavButton")
        self.next_year_button.clicked.connect(
            lambda: self.controller.navigate_year(1)
        )
        header.addWidget(self.next_year_button)

        header.addStretch(1)
        self.next_month_button = QPushButton("‹")
        self.next_month_button.setObjectName("NavButton")
        self.next_month_button.setToolTip(self.tr("ماه بعد"))
        self.next_month_button.clicked.connect(
            lambda: self.controller.navigate_month(1)
        )
        header.addWidget(self.next_month_button)
        return header

    def _build_year_panel(self) -> QFrame:
        panel = QFrame()
        panel.setObjectName("YearPanel")
        panel_layout = QVBoxLayout(panel)
        panel_layout.setContentsMargins(8, 8, 8, 8)
        panel_layout.setSpacing(6)

        title = QLabel(self.tr("انتخاب سال"))
        title.setAlignment(Qt.AlignCenter)
        title.setProperty("textRole", "muted")
        panel_layout.addWidget(title)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setMaximumHeight(128)
        container = QWidget()
        grid = QGridLayout(container)
        grid.setSpacing(4)
        self.year_buttons: dict[int, QPushButton] = {}
        digits = self.controller.options.persian_digits
        for index, year in enumerate(self.controller.year_options()):
            button = QPushButton(localize_digits(year, digits))
            button.setObjectName("YearOption")
            button.setProperty("selected", False)
            button.setFocusPolicy(Qt.NoFocus)
            button.clicked.connect(
                lambda _checked=False, y=year: self.controller.pick_year(y)
            )
            grid.addWidget(button, index // _YEAR_COLUMNS, index % _YEAR_COLUMNS)
            self.year_buttons[year] = button
        scroll.setWidget(container)
        self._year_scroll = scroll
        panel_layout.addWidget(scroll)
        panel.setVisible(False)
        return panel

    def render(self) -> None:
        controller = self.controller
        view = controller.view
        digits = controller.options.persian_digits
        year_selection = controller.options.enable_year_selection

        self.month_label.setText(month_name(view.month))
        self.year_button.setText(localize_digits(view.year, digits))
        self.year_button.setEnabled(year_selection)
        self.prev_year_button.setVisible(year_selection)
        self.next_year_button.setVisible(year_selection)
        self.prev_month_button.setEnabled(controller.can_navigate_month(-1))
        self.next_month_button.setEnabled(controller.can_navigate_month(1))
        self.today_button.setEnabled(controller.can_select_today())
        self.prev_year_button.setEnabled(controller.can_navigate_year(-1))
        self.next_year_button.setEnabled(controller.can_navigate_year(1))

        show_years = controller.mode is PickerMode.YEAR_PICKER
        self.year_panel.setVisible(show_years)
        if show_years:
            for year, button in self.year_buttons.items():
                self._set_selected(button, year == view.year)
            current = self.year_buttons.get(view.year)
            if current is not None:
                self._year_scroll.ensureWidgetVisible(current)

        cells = controller.grid_cells()
        for index, button in enumerate(self.day_buttons):
            day = cells[index] if index < len(cells) else None
            button.setProperty("day", day)
            if day is None:
                button.setText("")
                button.setEnabled(False)
                button.setVisible(index < len(cells))
                self._set_selected(button, False)
                continue
            button.setText(localize_digits(day, digits))
            button.setEnabled(not show_years)
            button.setVisible(True)
            self._set_selected(button, controller.is_selected(day))

    def apply_placement(self, placement: Placement, origin_x: int, origin_y: int) -> None:
        self.setFixedWidth(int(placement.width))
        self.setMaximumHeight(int(placement.max_height))
        height = min(self.sizeHint().height(), int(placement.max_height))
        self.resize(int(placement.width), max(height, 0))
        self.move(origin_x + int(placement.left), origin_y + int(placement.top))

    def keyPressEvent(self, event) -> None:  # noqa: N802
        if event.key() == Qt.Key_Escape:
            self.controller.cancel()
            event.accept()
            return
        super().keyPressEvent(event)

    def _on_day_clicked(self, button: QPushButton) -> None:
        day = button.property("day")
        if day is None:
            return
        self.controller.select_day(int(day))

    @staticmethod
    def _set_selected(button: QPushButton, selected: bool) -> None:
        if bool(button.property("selected")) == selected:
            return
        button.setProperty("selected", selected)
        button.style().unpolish(button)
        button.style().polish(button)
