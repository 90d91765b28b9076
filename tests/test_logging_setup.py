from __future__ import annotations

import logging

from jalali_picker.core.logging_setup import LOG_FORMAT, setup_logging


def test_setup_logging_creates_log_files(tmp_path) -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        log_path = setup_logging(tmp_path / "logs")
        assert log_path == tmp_path / "logs" / "app.log"
        assert log_path.exists()
        assert (tmp_path / "logs" / "crash.log").exists()
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
                handler.close()


def test_log_format_names_the_logger() -> None:
    assert "%(name)s" in LOG_FORMAT
    assert "%(levelname)s" in LOG_FORMAT
