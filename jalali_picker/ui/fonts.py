from __future__ import annotations

from collections.abc import Iterable, Sequence

# Families able to render Persian digits and ZWNJ, most preferred first.
PERSIAN_FONT_PRIORITY: tuple[str, ...] = (
    "Vazirmatn",
    "IRANSansX",
    "IRANSans",
    "Shabnam",
    "Sahel",
    "Noto Sans Arabic UI",
    "Noto Sans Arabic",
    "Noto Naskh Arabic",
    "DejaVu Sans",
)
GENERIC_UI_FALLBACK = "Sans Serif"


def resolve_ui_font_stack(
    installed_families: Iterable[str], *, limit: int = 4
) -> list[str]:
    installed = set(map(str, installed_families))
    found = [name for name in PERSIAN_FONT_PRIORITY if name in installed]
    return found[:limit] or [GENERIC_UI_FALLBACK]


def format_qss_font_stack(families: Sequence[str] | None) -> str:
    names = [str(name).strip() for name in families or ()]
    stack = list(dict.fromkeys(name for name in names if name))
    if not stack:
        stack = list(PERSIAN_FONT_PRIORITY[:4])
    if GENERIC_UI_FALLBACK not in stack:
        stack.append(GENERIC_UI_FALLBACK)
    return ", ".join(f'"{name}"' for name in stack)
