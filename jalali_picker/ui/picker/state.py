from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from jalali_picker.utils.calendar_format import TimeOfDay
from jalali_picker.utils.calendar_math import JalaaliDate

DEFAULT_PLACEHOLDER = "تاریخ را انتخاب کنید"
DEFAULT_MIN_YEAR = 1300
DEFAULT_MAX_YEAR = 1410


class PickerMode(Enum):
    CLOSED = "closed"
    DAY_GRID = "day_grid"
    YEAR_PICKER = "year_picker"

    @property
    def is_open(self) -> bool:
        return self is not PickerMode.CLOSED


@dataclass(frozen=True)
class ViewState:
    year: int
    month: int

    def shifted(self, months: int) -> "ViewState":
        index = self.year * 12 + (self.month - 1) + months
        return ViewState(index // 12, index % 12 + 1)


@dataclass(frozen=True)
class SelectionState:
    date: JalaaliDate | None = None
    time: TimeOfDay | None = None


@dataclass
class SyncState:
    last_external_value: str | None = None
    user_is_selecting: bool = False


@dataclass
class PickerOptions:
    value: str = ""
    min_year: int = DEFAULT_MIN_YEAR
    max_year: int = DEFAULT_MAX_YEAR
    enable_year_selection: bool = False
    show_time: bool = False
    disabled: bool = False
    placeholder: str = DEFAULT_PLACEHOLDER
    persian_digits: bool = True
    guard_window_ms: int = 100
    listener_delay_ms: int = 100
    dismiss_delay_ms: int = 100

    def __post_init__(self) -> None:
        if self.min_year > self.max_year:
            self.min_year, self.max_year = self.max_year, self.min_year
