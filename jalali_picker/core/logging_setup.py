import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from jalali_picker.core.paths import log_dir

LOG_DIR = log_dir()
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(
    directory: Path | None = None, level: int = logging.INFO
) -> Path:
    target = directory or LOG_DIR
    target.mkdir(parents=True, exist_ok=True)
    log_path = target / "app.log"
    crash_path = target / "crash.log"

    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = RotatingFileHandler(
        log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    crash_handler = RotatingFileHandler(
        crash_path, maxBytes=1_000_000, backupCount=2, encoding="utf-8"
    )
    crash_handler.setLevel(logging.ERROR)
    crash_handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[file_handler, crash_handler],
    )
    return log_path
