from __future__ import annotations

_PERSIAN_DIGITS = str.maketrans("۰۱۲۳۴۵۶۷۸۹", "0123456789")
_ARABIC_DIGITS = str.maketrans("٠١٢٣٤٥٦٧٨٩", "0123456789")
_LATIN_TO_PERSIAN = str.maketrans("0123456789", "۰۱۲۳۴۵۶۷۸۹")


def latin_digits(value: str) -> str:
    return value.translate(_PERSIAN_DIGITS).translate(_ARABIC_DIGITS)


def to_persian_digits(value: object) -> str:
    if value is None:
        return ""
    return str(value).translate(_LATIN_TO_PERSIAN)


def localize_digits(value: object, persian_digits: bool = True) -> str:
    text = "" if value is None else str(value)
    if not persian_digits:
        return text
    return to_persian_digits(text)
