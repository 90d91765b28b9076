from __future__ import annotations

from collections.abc import Sequence
from string import Template

from jalali_picker.ui.fonts import format_qss_font_stack

LIGHT_PALETTE: dict[str, str] = {
    "window": "#F5F7FA",
    "text": "#111827",
    "muted": "#6B7280",
    "faint": "#9CA3AF",
    "surface": "#FFFFFF",
    "surface_alt": "#F3F4F6",
    "panel": "#F9FAFB",
    "border": "#E5E7EB",
    "field_border": "#D1D5DB",
    "hover": "#F0FDFA",
    "accent": "#14B8A6",
    "accent_text": "#0D9488",
    "disabled": "#D1D5DB",
}

DARK_PALETTE: dict[str, str] = {
    "window": "#0F172A",
    "text": "#E5E7EB",
    "muted": "#94A3B8",
    "faint": "#64748B",
    "surface": "#111827",
    "surface_alt": "#1F2937",
    "panel": "#0B1220",
    "border": "#1F2937",
    "field_border": "#334155",
    "hover": "#1E293B",
    "accent": "#14B8A6",
    "accent_text": "#2DD4BF",
    "disabled": "#475569",
}

# Rules for the picker field, its popup and the demo pages.
_STYLESHEET = Template(
    """
* { font-family: $font_stack; font-size: 12px; }
QMainWindow, QDialog { background: $window; color: $text; }
QWidget { color: $text; }
QLabel#PageTitle { font-size: 20px; font-weight: 600; }
QLabel[textRole="muted"], QLabel#WeekdayLabel { color: $muted; }
QLabel#WeekdayLabel { padding: 4px 0px; }
QFrame#Card { background: $surface; border: 1px solid $border; border-radius: 16px; }

QFrame#JalaliDateEdit {
    background: $surface;
    border: 1px solid $field_border;
    border-radius: 10px;
    min-height: 34px;
}
QFrame#JalaliDateEdit:hover, QFrame#JalaliDateEdit[open="true"] { border-color: $accent; }
QFrame#JalaliDateEdit:disabled { background: $surface_alt; color: $faint; }
QLabel#DateText[placeholder="true"] { color: $faint; }
QLabel#CalendarIcon, QLabel#Chevron { color: $accent; }

QFrame#JalaliCalendarPopup {
    background: $surface;
    border: 1px solid $field_border;
    border-radius: 14px;
}
QLabel#MonthLabel, QPushButton#YearButton { font-size: 15px; font-weight: 700; }
QPushButton#YearButton { background: transparent; border: none; padding: 2px 8px; }
QPushButton#YearButton:hover:enabled { color: $accent_text; }
QPushButton#NavButton, QPushButton#YearNavButton {
    background: $surface_alt;
    border: 1px solid $border;
    border-radius: 8px;
    min-width: 28px;
    min-height: 28px;
}
QPushButton#NavButton:hover, QPushButton#YearNavButton:hover { background: $border; }
QPushButton#YearNavButton:disabled { color: $disabled; }
QPushButton#DayButton, QPushButton#YearOption {
    background: transparent;
    border: none;
    border-radius: 8px;
    min-height: 30px;
}
QPushButton#DayButton:hover:enabled, QPushButton#YearOption:hover { background: $hover; }
QPushButton#DayButton[selected="true"], QPushButton#YearOption[selected="true"] {
    background: $accent;
    color: #FFFFFF;
    font-weight: 700;
}
QFrame#YearPanel { background: $panel; border: 1px solid $border; border-radius: 10px; }
QPushButton#TodayButton, QPushButton#ConfirmButton { border-radius: 8px; padding: 4px 12px; }
QPushButton#TodayButton { background: $surface_alt; border: 1px solid $border; }
QPushButton#ConfirmButton { background: $accent; color: #FFFFFF; border: none; }
QTableView { background: $surface; gridline-color: $border; }
"""
)


def get_stylesheet(
    theme: str, font_families: Sequence[str] | None = None
) -> str:
    palette = DARK_PALETTE if theme == "dark" else LIGHT_PALETTE
    return _STYLESHEET.substitute(
        palette, font_stack=format_qss_font_stack(font_families)
    )
