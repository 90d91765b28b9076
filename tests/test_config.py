from __future__ import annotations

import json

import pytest

from jalali_picker.core import config as config_module
from jalali_picker.core.config import PickerConfig


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_PATH", path)
    return path


def test_missing_file_loads_defaults(config_path) -> None:
    config = PickerConfig.load()
    assert config == PickerConfig()
    assert config.timezone == "Asia/Tehran"
    assert not config_path.exists()


def test_save_then_load(config_path) -> None:
    PickerConfig(show_time=True, theme="dark", min_year=1380).save()
    loaded = PickerConfig.load()
    assert loaded.show_time
    assert loaded.theme == "dark"
    assert loaded.min_year == 1380
    assert not config_path.with_name("config.json.tmp").exists()


def test_corrupt_file_falls_back_to_defaults(config_path) -> None:
    config_path.write_text("{not json", encoding="utf-8")
    assert PickerConfig.load() == PickerConfig()


def test_save_partial_keeps_other_keys(config_path) -> None:
    PickerConfig(persian_digits=False).save()
    updated = PickerConfig.save_partial(enable_year_selection=True, unknown="x")
    assert updated.enable_year_selection
    assert not updated.persian_digits
    stored = json.loads(config_path.read_text(encoding="utf-8"))
    assert "unknown" not in stored


def test_values_are_coerced(config_path) -> None:
    config_path.write_text(
        json.dumps(
            {
                "min_year": "1410",
                "max_year": 1350,
                "show_time": "yes",
                "guard_window_ms": -5,
                "dismiss_delay_ms": "abc",
                "theme": "neon",
            }
        ),
        encoding="utf-8",
    )
    config = PickerConfig.load()
    assert (config.min_year, config.max_year) == (1350, 1410)
    assert config.show_time is True
    assert config.guard_window_ms == 0
    assert config.dismiss_delay_ms == 100
    assert config.theme == "light"


def test_picker_options_apply_overrides(config_path) -> None:
    config = PickerConfig(guard_window_ms=250, persian_digits=False)
    options = config.picker_options(show_time=True, value="1403/01/01")
    assert options.guard_window_ms == 250
    assert options.persian_digits is False
    assert options.show_time is True
    assert options.value == "1403/01/01"
