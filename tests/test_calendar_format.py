from __future__ import annotations

import pytest

from jalali_picker.utils.calendar_format import (
    TimeOfDay,
    day_names,
    format_for_display,
    format_machine,
    format_value,
    format_with_month_names,
    is_valid,
    month_name,
    month_names,
    parse_time,
    parse_value,
    to_jalali_datetime,
    to_jalali_month,
    weekday_name,
)
from jalali_picker.utils.calendar_math import JalaaliDate
from jalali_picker.utils.numeric import latin_digits, localize_digits


def test_name_tables() -> None:
    assert len(month_names()) == 12
    assert month_names()[0] == "فروردین"
    assert month_names()[-1] == "اسفند"
    assert month_name(7) == "مهر"
    assert len(day_names()) == 7
    assert day_names()[0] == "شنبه"
    assert day_names()[-1] == "جمعه"


def test_weekday_name() -> None:
    assert weekday_name(JalaaliDate(1403, 1, 1)) == "چهارشنبه"
    assert weekday_name(JalaaliDate(1403, 1, 5)) == "یکشنبه"


def test_format_machine_pads_fields() -> None:
    assert format_machine(JalaaliDate(1403, 1, 5)) == "1403/01/05"


def test_format_value() -> None:
    assert format_value(None) == ""
    assert format_value(JalaaliDate(1403, 1, 5)) == "1403/01/05"
    assert format_value(JalaaliDate(1403, 1, 5), TimeOfDay(8, 5)) == "1403/01/05 08:05"


def test_format_for_display() -> None:
    day = JalaaliDate(1403, 1, 1)
    assert format_for_display(day) == "چهارشنبه ۱۴۰۳/۰۱/۰۱"
    assert format_for_display(day, persian_digits=False) == "چهارشنبه 1403/01/01"
    assert (
        format_for_display(day, TimeOfDay(8, 30), include_time=True)
        == "چهارشنبه ۱۴۰۳/۰۱/۰۱ - ۰۸:۳۰"
    )
    assert format_for_display(day, None, include_time=True) == "چهارشنبه ۱۴۰۳/۰۱/۰۱"
    assert format_for_display(day, TimeOfDay(8, 30)) == "چهارشنبه ۱۴۰۳/۰۱/۰۱"


def test_format_with_month_names() -> None:
    day = JalaaliDate(1403, 1, 5)
    assert format_with_month_names(day, persian_digits=False) == "05 فروردین 1403"
    assert format_with_month_names(day) == "۰۵ فروردین ۱۴۰۳"


def test_parse_value() -> None:
    assert parse_value("1403/01/05") == (JalaaliDate(1403, 1, 5), None)
    assert parse_value("1403/1/5 8:30") == (JalaaliDate(1403, 1, 5), TimeOfDay(8, 30))
    assert parse_value("۱۴۰۳/۰۲/۱۵") == (JalaaliDate(1403, 2, 15), None)
    assert parse_value("١٤٠٣/٠٢/١٥") == (JalaaliDate(1403, 2, 15), None)
    assert parse_value(" 1403/01/05 ") == (JalaaliDate(1403, 1, 5), None)


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "garbage",
        "1403-01-05",
        "1402/12/30",
        "1403/13/01",
        "1403/01/05 25:00",
        "1,403/01/05",
        "1403/01/05,",
        "١٬٤٠٣/٠١/٠٥",
        "१४०३/01/05",
    ],
)
def test_parse_value_rejects_invalid_text(text: str | None) -> None:
    assert parse_value(text) is None


def test_parse_time() -> None:
    assert parse_time("09:15") == TimeOfDay(9, 15)
    assert parse_time("۰۹:۱۵") == TimeOfDay(9, 15)
    assert parse_time("9") is None
    assert parse_time("24:00") is None


def test_time_of_day_validation() -> None:
    with pytest.raises(ValueError):
        TimeOfDay(24, 0)
    with pytest.raises(ValueError):
        TimeOfDay(10, 60)
    assert str(TimeOfDay(7, 5)) == "07:05"


def test_is_valid_is_strict() -> None:
    assert is_valid("1403/01/05")
    assert is_valid("۱۴۰۳/۰۱/۰۵")
    assert not is_valid("1403/1/5")
    assert not is_valid("1403/01/05 10:00")
    assert not is_valid("1402/12/30")
    assert not is_valid("1,403/01/05")
    assert not is_valid("")


def test_to_jalali_datetime() -> None:
    assert to_jalali_datetime("2024-03-20T08:15:00") == "1403/01/01 08:15"
    assert to_jalali_datetime("2024-03-19T21:00:00+00:00") == "1403/01/01 00:30"
    assert to_jalali_datetime("not a date") == "not a date"


def test_to_jalali_month() -> None:
    assert to_jalali_month("2024-04") == "1403/01"
    assert to_jalali_month("bad") == "bad"


def test_digit_helpers() -> None:
    assert latin_digits("۱۴۰۳/٠١/05") == "1403/01/05"
    assert latin_digits("1,403") == "1,403"
    assert localize_digits(1403) == "۱۴۰۳"
    assert localize_digits(1403, persian_digits=False) == "1403"
    assert localize_digits(None) == ""
