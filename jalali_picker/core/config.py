import json
import threading
from dataclasses import dataclass, fields

from jalali_picker.core.paths import config_path
from jalali_picker.ui.picker.state import (
    DEFAULT_MAX_YEAR,
    DEFAULT_MIN_YEAR,
    DEFAULT_PLACEHOLDER,
    PickerOptions,
)
from jalali_picker.utils.calendar_math import DEFAULT_TIMEZONE

CONFIG_PATH = config_path()
_CONFIG_LOCK = threading.RLock()


@dataclass
class PickerConfig:
    min_year: int = DEFAULT_MIN_YEAR
    max_year: int = DEFAULT_MAX_YEAR
    enable_year_selection: bool = False
    show_time: bool = False
    placeholder: str = DEFAULT_PLACEHOLDER
    persian_digits: bool = True
    timezone: str = DEFAULT_TIMEZONE
    guard_window_ms: int = 100
    listener_delay_ms: int = 100
    dismiss_delay_ms: int = 100
    theme: str = "light"

    @classmethod
    def _default_data(cls) -> dict[str, str | int | bool]:
        return cls().to_dict()

    @classmethod
    def _read_data_locked(cls) -> dict[str, str | int | bool]:
        if not CONFIG_PATH.exists():
            return cls._default_data()
        try:
            raw = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return cls._default_data()
        if not isinstance(raw, dict):
            return cls._default_data()
        data = cls._default_data()
        for key in data:
            if key in raw:
                data[key] = raw.get(key)
        return data

    @classmethod
    def _write_data_locked(cls, data: dict[str, str | int | bool]) -> None:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = CONFIG_PATH.with_name(f"{CONFIG_PATH.name}.tmp")
        tmp_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        tmp_path.replace(CONFIG_PATH)

    @classmethod
    def _from_data(cls, data: dict[str, str | int | bool]) -> "PickerConfig":
        defaults = cls()
        min_year = _as_int(data.get("min_year"), defaults.min_year)
        max_year = _as_int(data.get("max_year"), defaults.max_year)
        if min_year > max_year:
            min_year, max_year = max_year, min_year
        theme = str(data.get("theme") or defaults.theme)
        return cls(
            min_year=min_year,
            max_year=max_year,
            enable_year_selection=_as_bool(
                data.get("enable_year_selection"),
                defaults.enable_year_selection,
            ),
            show_time=_as_bool(data.get("show_time"), defaults.show_time),
            placeholder=str(data.get("placeholder") or defaults.placeholder),
            persian_digits=_as_bool(
                data.get("persian_digits"), defaults.persian_digits
            ),
            timezone=str(data.get("timezone") or defaults.timezone),
            guard_window_ms=max(
                _as_int(data.get("guard_window_ms"), defaults.guard_window_ms),
                0,
            ),
            listener_delay_ms=max(
                _as_int(
                    data.get("listener_delay_ms"), defaults.listener_delay_ms
                ),
                0,
            ),
            dismiss_delay_ms=max(
                _as_int(
                    data.get("dismiss_delay_ms"), defaults.dismiss_delay_ms
                ),
                0,
            ),
            theme=theme if theme in ("light", "dark") else defaults.theme,
        )

    @classmethod
    def load(cls) -> "PickerConfig":
        with _CONFIG_LOCK:
            data = cls._read_data_locked()
        return cls._from_data(data)

    def to_dict(self) -> dict[str, str | int | bool]:
        return {field.name: getattr(self, field.name) for field in fields(self)}

    def save(self) -> None:
        with _CONFIG_LOCK:
            self._write_data_locked(self.to_dict())

    @classmethod
    def save_partial(cls, **updates) -> "PickerConfig":
        with _CONFIG_LOCK:
            data = cls._read_data_locked()
            for key, value in updates.items():
                if key in data:
                    data[key] = value
            cls._write_data_locked(data)
            return cls._from_data(data)

    def picker_options(self, **overrides) -> PickerOptions:
        values = {
            "min_year": self.min_year,
            "max_year": self.max_year,
            "enable_year_selection": self.enable_year_selection,
            "show_time": self.show_time,
            "placeholder": self.placeholder,
            "persian_digits": self.persian_digits,
            "guard_window_ms": self.guard_window_ms,
            "listener_delay_ms": self.listener_delay_ms,
            "dismiss_delay_ms": self.dismiss_delay_ms,
        }
        values.update(overrides)
        return PickerOptions(**values)


def _as_int(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _as_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
    if isinstance(value, int):
        return bool(value)
    return default
