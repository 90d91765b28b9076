from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from jalali_picker.utils.calendar_math import (
    DEFAULT_TIMEZONE,
    JalaaliDate,
    to_jalaali,
    weekday_index,
)
from jalali_picker.utils.numeric import latin_digits, localize_digits

MONTH_NAMES: tuple[str, ...] = (
    "فروردین",
    "اردیبهشت",
    "خرداد",
    "تیر",
    "مرداد",
    "شهریور",
    "مهر",
    "آبان",
    "آذر",
    "دی",
    "بهمن",
    "اسفند",
)

# Saturday first.
DAY_NAMES: tuple[str, ...] = (
    "شنبه",
    "یکشنبه",
    "دوشنبه",
    "سه‌شنبه",
    "چهارشنبه",
    "پنج‌شنبه",
    "جمعه",
)

DAY_SHORT_NAMES: tuple[str, ...] = ("ش", "ی", "د", "س", "چ", "پ", "ج")

_VALUE_RE = re.compile(
    r"^(?P<year>\d{4})/(?P<month>\d{1,2})/(?P<day>\d{1,2})"
    r"(?:\s+(?P<hour>\d{1,2}):(?P<minute>\d{2}))?$",
    re.ASCII,
)
_STRICT_DATE_RE = re.compile(r"^\d{4}/\d{2}/\d{2}$", re.ASCII)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError(f"Invalid hour: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"Invalid minute: {self.minute}")

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


def month_names() -> tuple[str, ...]:
    return MONTH_NAMES


def day_names() -> tuple[str, ...]:
    return DAY_NAMES


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def weekday_name(value: JalaaliDate) -> str:
    return DAY_NAMES[weekday_index(value)]


def format_machine(value: JalaaliDate) -> str:
    """Canonical ``YYYY/MM/DD`` form exchanged with forms.

    String order follows date order only while every year has four digits,
    so callers compare ``JalaaliDate`` objects rather than these strings.
    """
    return f"{value.year:04d}/{value.month:02d}/{value.day:02d}"


def format_value(value: JalaaliDate | None, time: TimeOfDay | None = None) -> str:
    if value is None:
        return ""
    text = format_machine(value)
    if time is not None:
        text = f"{text} {time}"
    return text


def format_for_display(
    value: JalaaliDate,
    time: TimeOfDay | None = None,
    include_time: bool = False,
    persian_digits: bool = True,
) -> str:
    text = f"{weekday_name(value)} {format_machine(value)}"
    if include_time and time is not None:
        text = f"{text} - {time}"
    return localize_digits(text, persian_digits)


def format_with_month_names(
    value: JalaaliDate, persian_digits: bool = True
) -> str:
    text = f"{value.day:02d} {month_name(value.month)} {value.year}"
    return localize_digits(text, persian_digits)


def parse_value(text: str | None) -> tuple[JalaaliDate, TimeOfDay | None] | None:
    if not text:
        return None
    normalized = latin_digits(str(text)).strip()
    match = _VALUE_RE.match(normalized)
    if match is None:
        return None
    try:
        parsed = JalaaliDate(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
        )
        time = None
        if match.group("hour") is not None:
            time = TimeOfDay(int(match.group("hour")), int(match.group("minute")))
    except ValueError:
        return None
    return parsed, time


def parse_time(text: str | None) -> TimeOfDay | None:
    if not text:
        return None
    normalized = latin_digits(str(text)).strip()
    hour, sep, minute = normalized.partition(":")
    if not sep or not hour.isdigit() or not minute.isdigit():
        return None
    try:
        return TimeOfDay(int(hour), int(minute))
    except ValueError:
        return None


def is_valid(text: str | None) -> bool:
    if not text:
        return False
    normalized = latin_digits(str(text)).strip()
    if not _STRICT_DATE_RE.match(normalized):
        return False
    return parse_value(normalized) is not None


def to_jalali_datetime(value: str, tz: str = DEFAULT_TIMEZONE) -> str:
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return value

    if dt.tzinfo is not None:
        dt = dt.astimezone(ZoneInfo(tz))

    return f"{format_machine(to_jalaali(dt.date()))} {dt:%H:%M}"


def to_jalali_month(value: str) -> str:
    try:
        year_str, month_str = value.split("-")
        converted = to_jalaali(datetime(int(year_str), int(month_str), 1).date())
    except ValueError:
        return value
    return f"{converted.year:04d}/{converted.month:02d}"
