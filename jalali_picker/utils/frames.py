from __future__ import annotations

import pandas as pd

from jalali_picker.utils.calendar_format import format_machine, parse_value
from jalali_picker.utils.calendar_math import DEFAULT_TIMEZONE, day_range, to_jalaali
from jalali_picker.utils.numeric import localize_digits


def zoned_timestamps(values: pd.Series, tz: str = DEFAULT_TIMEZONE) -> pd.Series:
    """Parse a column of timestamps; naive values are taken as local to ``tz``."""
    stamps = pd.to_datetime(values, errors="coerce")
    if stamps.dt.tz is None:
        return stamps.dt.tz_localize(tz)
    return stamps.dt.tz_convert(tz)


def jalali_column(
    values: pd.Series,
    include_time: bool = False,
    tz: str = DEFAULT_TIMEZONE,
    persian_digits: bool = False,
) -> pd.Series:
    stamps = zoned_timestamps(values, tz)

    def render(stamp) -> str:  # noqa: ANN001
        if pd.isna(stamp):
            return ""
        text = format_machine(to_jalaali(stamp.date()))
        if include_time:
            text = f"{text} {stamp:%H:%M}"
        return localize_digits(text, persian_digits)

    return stamps.map(render)


def filter_by_jalali_range(
    frame: pd.DataFrame,
    column: str,
    start: str | None,
    end: str | None,
    tz: str = DEFAULT_TIMEZONE,
) -> pd.DataFrame:
    """Rows whose ``column`` falls on or between two Jalaali days.

    Bounds use the picker's value format; a missing or unparsable bound
    leaves that side open.
    """
    if column not in frame.columns:
        raise KeyError(column)
    stamps = zoned_timestamps(frame[column], tz)
    mask = stamps.notna()
    start_parsed = parse_value(start)
    if start_parsed is not None:
        lower, _ = day_range(start_parsed[0], tz)
        mask &= stamps >= pd.Timestamp(lower)
    end_parsed = parse_value(end)
    if end_parsed is not None:
        _, upper = day_range(end_parsed[0], tz)
        mask &= stamps <= pd.Timestamp(upper)
    return frame.loc[mask].reset_index(drop=True)
