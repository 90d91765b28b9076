from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Asia/Tehran"

# Residues of (year + 1595) % 33 that close a 366-day year in the
# arithmetic cycle used by the conversions below.
_LEAP_RESIDUES = frozenset((0, 4, 8, 12, 16, 20, 24, 28))


@dataclass(frozen=True, order=True)
class JalaaliDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Invalid Jalaali month: {self.month}")
        limit = days_in_month(self.year, self.month)
        if not 1 <= self.day <= limit:
            raise ValueError(
                f"Invalid day {self.day} for {self.year}/{self.month:02d}"
            )

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}/{self.day:02d}"


def _gregorian_to_jalali(gy: int, gm: int, gd: int) -> tuple[int, int, int]:
    g_d_m = [0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334]

    if gy > 1600:
        jy = 979
        gy -= 1600
    else:
        jy = 0
        gy -= 621

    gy2 = gy + 1 if gm > 2 else gy
    days = (
        365 * gy
        + (gy2 + 3) // 4
        - (gy2 + 99) // 100
        + (gy2 + 399) // 400
        - 80
        + gd
        + g_d_m[gm - 1]
    )

    jy += 33 * (days // 12053)
    days %= 12053
    jy += 4 * (days // 1461)
    days %= 1461

    if days > 365:
        jy += (days - 1) // 365
        days = (days - 1) % 365

    if days < 186:
        jm = 1 + days // 31
        jd = 1 + days % 31
    else:
        jm = 7 + (days - 186) // 30
        jd = 1 + (days - 186) % 30

    return jy, jm, jd


def _is_gregorian_leap(gy: int) -> bool:
    return gy % 4 == 0 and (gy % 100 != 0 or gy % 400 == 0)


def _jalali_to_gregorian(jy: int, jm: int, jd: int) -> tuple[int, int, int]:
    jy += 1595
    days = -355668 + (365 * jy) + (jy // 33) * 8 + ((jy % 33) + 3) // 4 + jd
    if jm < 7:
        days += (jm - 1) * 31
    else:
        days += ((jm - 7) * 30) + 186

    gy = 400 * (days // 146097)
    days %= 146097

    if days > 36524:
        days -= 1
        gy += 100 * (days // 36524)
        days %= 36524
        if days >= 365:
            days += 1

    gy += 4 * (days // 1461)
    days %= 1461

    if days > 365:
        gy += (days - 1) // 365
        days = (days - 1) % 365

    gd = days + 1
    g_d_m = [
        0,
        31,
        29 if _is_gregorian_leap(gy) else 28,
        31,
        30,
        31,
        30,
        31,
        31,
        30,
        31,
        30,
        31,
    ]
    gm = 1
    while gm <= 12 and gd > g_d_m[gm]:
        gd -= g_d_m[gm]
        gm += 1

    return gy, gm, gd


def is_leap_year(year: int) -> bool:
    return (year + 1595) % 33 in _LEAP_RESIDUES


def days_in_month(year: int, month: int) -> int:
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if is_leap_year(year) else 29


def to_gregorian(value: JalaaliDate) -> date:
    gy, gm, gd = _jalali_to_gregorian(value.year, value.month, value.day)
    return date(gy, gm, gd)


def to_jalaali(value: date) -> JalaaliDate:
    jy, jm, jd = _gregorian_to_jalali(value.year, value.month, value.day)
    return JalaaliDate(jy, jm, jd)


def sunday_first_weekday(value: date) -> int:
    """Weekday with Sunday=0 ... Saturday=6."""
    return (value.weekday() + 1) % 7


def weekday_offset(sunday_first: int) -> int:
    """Map a Sunday-first weekday to its column in a Saturday-first week."""
    if not 0 <= sunday_first <= 6:
        raise ValueError(f"Invalid weekday: {sunday_first}")
    return 0 if sunday_first == 6 else sunday_first + 1


def first_weekday_offset(year: int, month: int) -> int:
    first = to_gregorian(JalaaliDate(year, month, 1))
    return weekday_offset(sunday_first_weekday(first))


def weekday_index(value: JalaaliDate) -> int:
    """Saturday=0 ... Friday=6."""
    return weekday_offset(sunday_first_weekday(to_gregorian(value)))


def today(tz: str = DEFAULT_TIMEZONE) -> JalaaliDate:
    return to_jalaali(datetime.now(ZoneInfo(tz)).date())


def now_time(tz: str = DEFAULT_TIMEZONE) -> str:
    return f"{datetime.now(ZoneInfo(tz)):%H:%M}"


def add_days(value: JalaaliDate, days: int) -> JalaaliDate:
    return to_jalaali(to_gregorian(value) + timedelta(days=days))


def subtract_days(value: JalaaliDate, days: int) -> JalaaliDate:
    return add_days(value, -days)


def day_range(
    value: JalaaliDate, tz: str = DEFAULT_TIMEZONE
) -> tuple[datetime, datetime]:
    """Start and end of a Jalaali day as zone-aware Gregorian datetimes."""
    zone = ZoneInfo(tz)
    gregorian = to_gregorian(value)
    start = datetime.combine(gregorian, time.min, tzinfo=zone)
    end = datetime.combine(gregorian, time.max, tzinfo=zone)
    return start, end

