from __future__ import annotations

import pytest
from PySide6.QtCore import Qt, QTime
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QPushButton, QVBoxLayout, QWidget

from jalali_picker.core.config import PickerConfig
from jalali_picker.ui.main_window import MainWindow, build_sample_attendance
from jalali_picker.ui.pages.attendance_report_page import AttendanceReportPage
from jalali_picker.ui.pages.picker_form_page import PickerFormPage
from jalali_picker.ui.picker.state import PickerMode, PickerOptions, ViewState
from jalali_picker.ui.widgets.jalali_date_edit import JalaliDateEdit
from jalali_picker.utils.calendar_math import JalaaliDate

TODAY = JalaaliDate(1403, 1, 1)


@pytest.fixture
def host(qapp):
    window = QWidget()
    layout = QVBoxLayout(window)
    outside = QPushButton("outside")
    layout.addWidget(outside)
    window.move(0, 0)
    yield window, layout, outside
    for widget in window.findChildren(JalaliDateEdit):
        if widget.popup() is not None:
            widget.popup().close()
    window.close()
    window.deleteLater()


@pytest.fixture
def make_field(host, scheduler, qapp):
    window, layout, _ = host

    def factory(**options):
        field = JalaliDateEdit(
            PickerOptions(**options),
            scheduler=scheduler,
            today_provider=lambda: TODAY,
        )
        layout.addWidget(field)
        window.show()
        qapp.processEvents()
        emitted: list[str] = []
        field.value_changed.connect(emitted.append)
        return field, emitted

    return factory


def _day_button(field: JalaliDateEdit, day: int):
    popup = field.popup()
    for button in popup.day_buttons:
        if button.property("day") == day:
            return button
    raise AssertionError(f"day {day} not rendered")


def test_field_shows_placeholder_then_value(make_field) -> None:
    field, _ = make_field()
    assert field.text_label.text() == "تاریخ را انتخاب کنید"
    assert field.text_label.property("placeholder") is True
    field.set_value("1403/01/05")
    assert field.text_label.text() == "یکشنبه ۱۴۰۳/۰۱/۰۵"
    assert field.value() == "1403/01/05"


def test_click_opens_and_day_click_commits(make_field) -> None:
    field, emitted = make_field()
    QTest.mouseClick(field, Qt.LeftButton)

    popup = field.popup()
    assert field.controller.mode is PickerMode.DAY_GRID
    assert popup is not None and popup.isVisible()
    assert popup.month_label.text() == "فروردین"
    assert sum(1 for b in popup.day_buttons if b.property("day") is None and b.isVisible()) == 4

    _day_button(field, 5).click()

    assert emitted == ["1403/01/05"]
    assert not popup.isVisible()
    assert field.text_label.text() == "یکشنبه ۱۴۰۳/۰۱/۰۵"


def test_second_click_on_field_closes(make_field, scheduler) -> None:
    field, emitted = make_field()
    QTest.mouseClick(field, Qt.LeftButton)
    scheduler.advance(100)
    QTest.mouseClick(field, Qt.LeftButton)
    scheduler.advance(100)
    assert not field.controller.is_open
    assert emitted == []


def test_outside_press_dismisses_after_delay(make_field, host, scheduler) -> None:
    field, emitted = make_field()
    _, _, outside = host
    QTest.mouseClick(field, Qt.LeftButton)

    QTest.mouseClick(outside, Qt.LeftButton)
    assert field.controller.is_open

    scheduler.advance(100)
    assert field._filter_installed
    QTest.mouseClick(outside, Qt.LeftButton)
    assert field.controller.is_open

    scheduler.advance(100)
    assert not field.controller.is_open
    assert not field._filter_installed
    assert emitted == []


def test_escape_cancels(make_field) -> None:
    field, emitted = make_field(value="1403/01/10")
    QTest.mouseClick(field, Qt.LeftButton)
    QTest.keyClick(field, Qt.Key_Escape)
    assert not field.controller.is_open
    assert field.value() == "1403/01/10"
    assert emitted == []


def test_hidden_anchor_closes_popup(make_field) -> None:
    field, _ = make_field()
    QTest.mouseClick(field, Qt.LeftButton)
    field.hide()
    assert not field.controller.is_open
    assert not field.popup().isVisible()


def test_disabled_field_does_not_open(make_field) -> None:
    field, _ = make_field(disabled=True)
    QTest.mouseClick(field, Qt.LeftButton)
    assert field.popup() is None
    assert not field.controller.is_open


def test_set_disabled_closes_open_popup(make_field) -> None:
    field, _ = make_field()
    QTest.mouseClick(field, Qt.LeftButton)
    field.set_disabled(True)
    assert not field.controller.is_open
    assert not field.isEnabled()


def test_header_navigation(make_field) -> None:
    field, emitted = make_field()
    QTest.mouseClick(field, Qt.LeftButton)
    popup = field.popup()
    popup.next_month_button.click()
    assert field.controller.view == ViewState(1403, 2)
    assert popup.month_label.text() == "اردیبهشت"
    assert popup.prev_year_button.isHidden()
    popup.prev_month_button.click()
    popup.prev_month_button.click()
    assert field.controller.view == ViewState(1402, 12)
    assert popup.year_button.text() == "۱۴۰۲"
    assert emitted == []


def test_year_picker_from_header(make_field) -> None:
    field, emitted = make_field(enable_year_selection=True)
    QTest.mouseClick(field, Qt.LeftButton)
    popup = field.popup()

    popup.year_button.click()
    assert field.controller.mode is PickerMode.YEAR_PICKER
    assert not popup.year_panel.isHidden()
    assert popup.year_buttons[1403].property("selected") is True

    popup.year_buttons[1390].click()
    assert field.controller.mode is PickerMode.DAY_GRID
    assert popup.year_panel.isHidden()
    assert popup.year_button.text() == "۱۳۹۰"
    assert emitted == []


def test_today_button(make_field) -> None:
    field, emitted = make_field()
    QTest.mouseClick(field, Qt.LeftButton)
    field.popup().next_month_button.click()
    field.popup().today_button.click()
    assert emitted == ["1403/01/01"]
    assert not field.controller.is_open


def test_owner_echo_keeps_selection(make_field) -> None:
    field, emitted = make_field(value="1403/01/10")
    field.value_changed.connect(field.set_value)
    QTest.mouseClick(field, Qt.LeftButton)
    _day_button(field, 20).click()
    field.set_value("1403/01/10")
    assert emitted == ["1403/01/20"]
    assert field.value() == "1403/01/20"


def test_time_edit_commits_time(make_field) -> None:
    field, emitted = make_field(value="1403/01/10 08:30", show_time=True)
    assert not field.time_edit.isHidden()
    assert field.time_edit.time() == QTime(8, 30)
    field.time_edit.setTime(QTime(9, 15))
    assert emitted == ["1403/01/10 09:15"]


def test_time_edit_hidden_without_date(make_field) -> None:
    field, _ = make_field(show_time=True)
    assert field.time_edit.isHidden()


def test_attendance_report_filters_by_range(qapp) -> None:
    records = build_sample_attendance(TODAY, days=5)
    page = AttendanceReportPage(PickerConfig(), records, today_provider=lambda: TODAY)

    assert page.date_range() == ("1403/01/01", "1403/01/01")
    assert page.model.rowCount() == 3
    assert page.model.headerData(0, Qt.Horizontal) == "نام"
    assert page.summary_label.text() == "۳ رکورد"

    page.clear_range()
    assert page.date_range() == ("", "")
    assert page.model.rowCount() == 15
    assert page.start_picker.value() == ""

    controller = page.start_picker.controller
    controller.open()
    controller.navigate_month(-1)
    controller.select_day(28)
    assert page.date_range() == ("1402/12/28", "")
    assert page.model.rowCount() == 9


def test_form_page_tracks_values(qapp) -> None:
    page = PickerFormPage(PickerConfig(), today_provider=lambda: TODAY)
    assert not page.locked_picker.isEnabled()
    assert page.pickers["birth_date"].controller.options.enable_year_selection
    assert page.pickers["mission_start"].controller.options.show_time

    controller = page.pickers["contract_date"].controller
    controller.open()
    controller.select_day(3)
    assert page.values["contract_date"] == "1403/01/03"
    assert "1403/01/03" in page.summary_label.text()

    page.reset()
    assert all(value == "" for value in page.values.values())


def test_main_window_builds_both_pages(qapp) -> None:
    window = MainWindow(PickerConfig(), today_provider=lambda: TODAY)
    assert window.tabs.count() == 2
    assert window.report_page.model.rowCount() == 3
    window.deleteLater()


def test_month_buttons_disabled_at_year_bounds(make_field) -> None:
    field, _ = make_field(min_year=1403, max_year=1403)
    QTest.mouseClick(field, Qt.LeftButton)
    popup = field.popup()
    assert not popup.prev_month_button.isEnabled()
    assert popup.next_month_button.isEnabled()
    popup.prev_month_button.click()
    assert field.controller.view == ViewState(1403, 1)


def test_today_button_disabled_outside_year_range(make_field) -> None:
    field, _ = make_field(max_year=1390)
    QTest.mouseClick(field, Qt.LeftButton)
    popup = field.popup()
    assert field.controller.view.year == 1390
    assert not popup.today_button.isEnabled()


def test_popup_is_resized_for_each_mode(make_field) -> None:
    field, _ = make_field(enable_year_selection=True)
    QTest.mouseClick(field, Qt.LeftButton)
    popup = field.popup()

    def expected_height() -> int:
        return min(popup.sizeHint().height(), popup.maximumHeight())

    day_grid_height = popup.height()
    assert day_grid_height == expected_height()

    popup.year_button.click()
    assert popup.height() == expected_height()
    assert all(not button.isEnabled() for button in popup.day_buttons)

    popup.year_buttons[1403].click()
    assert field.controller.mode is PickerMode.DAY_GRID
    assert popup.height() == expected_height()
    assert popup.height() == day_grid_height


def test_time_editor_resets_after_external_clear(make_field) -> None:
    field, emitted = make_field(value="1403/01/10 08:30", show_time=True)
    field.set_value("")
    assert field.time_edit.isHidden()

    QTest.mouseClick(field, Qt.LeftButton)
    _day_button(field, 12).click()
    assert emitted == ["1403/01/12"]
    assert not field.time_edit.isHidden()
    assert field.time_edit.time() == QTime(0, 0)


def test_dispose_cancels_timers_and_closes(make_field, scheduler) -> None:
    field, emitted = make_field()
    QTest.mouseClick(field, Qt.LeftButton)
    scheduler.advance(100)
    assert field._filter_installed
    field.controller.request_dismiss()
    assert len(scheduler.pending()) == 1

    field.dispose()
    assert not field.controller.is_open
    assert not field._filter_installed
    assert field.popup() is None
    assert scheduler.pending() == []

    QTest.mouseClick(field, Qt.LeftButton)
    assert not field.controller.is_open
    assert emitted == []


def test_main_window_close_disposes_pickers(qapp) -> None:
    window = MainWindow(PickerConfig(), today_provider=lambda: TODAY)
    pickers = window.findChildren(JalaliDateEdit)
    assert len(pickers) == 6
    window.show()
    window.close()
    assert all(not picker.controller.open() for picker in pickers)
    window.deleteLater()
