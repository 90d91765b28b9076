from __future__ import annotations

import faulthandler
import logging
import os
import sys
import threading
from pathlib import Path

from PySide6.QtCore import (
    QLibraryInfo,
    QLocale,
    Qt,
    QtMsgType,
    QTranslator,
    qInstallMessageHandler,
)
from PySide6.QtGui import QFont, QFontDatabase, QGuiApplication
from PySide6.QtWidgets import QApplication

if __package__ is None:
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from jalali_picker.core.config import PickerConfig
from jalali_picker.core.logging_setup import LOG_DIR, setup_logging
from jalali_picker.ui.fonts import resolve_ui_font_stack
from jalali_picker.ui.main_window import MainWindow
from jalali_picker.utils import calendar_math

_QT_LOG_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}

# faulthandler writes here directly, so the handle must outlive main().
_fault_log = None


def main() -> int:
    setup_logging()
    _install_error_hooks()
    _enable_fault_log()
    _configure_high_dpi()

    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    _localize(app)
    qInstallMessageHandler(_route_qt_message)
    lifecycle = logging.getLogger("AppLifecycle")
    app.aboutToQuit.connect(lambda: lifecycle.warning("Application about to quit"))

    config = PickerConfig.load()
    lifecycle.info(
        "Picker config loaded: years %s-%s, timezone %s, theme %s",
        config.min_year,
        config.max_year,
        config.timezone,
        config.theme,
    )

    def today() -> calendar_math.JalaaliDate:
        return calendar_math.today(config.timezone)

    window = MainWindow(config, today)
    window.show()
    return app.exec()


def _localize(app: QApplication) -> None:
    locale = QLocale("fa_IR")
    QLocale.setDefault(locale)
    app.setLayoutDirection(Qt.RightToLeft)

    font_stack = resolve_ui_font_stack(QFontDatabase.families())
    app.setProperty("ui_font_stack", font_stack)
    font = QFont(font_stack[0])
    font.setPointSize(10)
    app.setFont(font)

    translator = QTranslator(app)
    translations = QLibraryInfo.path(QLibraryInfo.TranslationsPath)
    if translator.load(locale, "qtbase", "_", translations):
        app.installTranslator(translator)
        app._qt_translator = translator  # type: ignore[attr-defined]
    else:
        logging.getLogger("AppLifecycle").info(
            "No Persian Qt translations under %s", translations
        )


def _configure_high_dpi() -> None:
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    os.environ.setdefault("QT_SCALE_FACTOR_ROUNDING_POLICY", "PassThrough")
    try:
        QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
            Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
        )
    except Exception:  # noqa: BLE001
        logging.getLogger("AppLifecycle").debug(
            "High DPI rounding policy not supported", exc_info=True
        )


def _install_error_hooks() -> None:
    def on_exception(exc_type, exc_value, exc_traceback) -> None:  # noqa: ANN001
        logging.getLogger("UnhandledException").exception(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_traceback),
        )
        sys.__excepthook__(exc_type, exc_value, exc_traceback)

    def on_thread_exception(args: threading.ExceptHookArgs) -> None:
        logging.getLogger("ThreadException").exception(
            "Unhandled exception in thread %s",
            getattr(args.thread, "name", "?"),
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )

    def on_unraisable(unraisable) -> None:  # noqa: ANN001
        logging.getLogger("UnraisableException").error(
            "Unraisable exception in %r",
            unraisable.object,
            exc_info=(
                unraisable.exc_type,
                unraisable.exc_value,
                unraisable.exc_traceback,
            ),
        )

    sys.excepthook = on_exception
    threading.excepthook = on_thread_exception
    sys.unraisablehook = on_unraisable


def _enable_fault_log() -> None:
    global _fault_log
    logger = logging.getLogger("CrashLogger")
    path = LOG_DIR / "crash.log"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _fault_log = open(path, "a", encoding="utf-8", buffering=1)
        faulthandler.enable(file=_fault_log, all_threads=True)
    except OSError:
        logger.exception("Failed to enable crash logging")
        return
    logger.info("Crash logging enabled at %s", path)


def _route_qt_message(mode, context, message) -> None:  # noqa: ANN001
    logging.getLogger("Qt").log(_QT_LOG_LEVELS.get(mode, logging.INFO), message)


if __name__ == "__main__":
    raise SystemExit(main())
