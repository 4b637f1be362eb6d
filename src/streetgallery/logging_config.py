"""
Logging Configuration
=====================
Routes the ``streetgallery`` logger, and Qt's own diagnostics, to stdout and an
optional log file.

Environment:
    STREETGALLERY_LOG_LEVEL: Level name (DEBUG, INFO, ...). Defaults to INFO.
    STREETGALLERY_DEBUG: Any non-empty value forces DEBUG.
    STREETGALLERY_LOG_FILE: Path of an additional log file.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional

from PySide6.QtCore import QMessageLogContext, QtMsgType, qInstallMessageHandler

ROOT_LOGGER = "streetgallery"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def level_from_env(environ: Mapping[str, str]) -> int:
    if environ.get("STREETGALLERY_DEBUG"):
        return logging.DEBUG
    name = environ.get("STREETGALLERY_LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.INFO


def _forward_qt_message(mode: QtMsgType, context: QMessageLogContext, message: str) -> None:
    category = context.category or "default"
    logging.getLogger(f"{ROOT_LOGGER}.qt.{category}").log(_QT_LEVELS.get(mode, logging.INFO), message)


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None,
                  environ: Optional[Mapping[str, str]] = None, capture_qt: bool = True) -> logging.Logger:
    """
    Configure the application logger.

    Args:
        level: Logging level. Read from the environment when None.
        log_file: Extra file to log to. Read from STREETGALLERY_LOG_FILE when None.
        environ: Environment to read; ``os.environ`` by default.
        capture_qt: Forward qDebug/qWarning output (e.g. positioning plugin
            errors) into the ``streetgallery.qt`` loggers.
    """
    environ = os.environ if environ is None else environ
    level = level_from_env(environ) if level is None else level
    log_file = log_file or environ.get("STREETGALLERY_LOG_FILE") or None

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    # Calling twice (tests, restarts) must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if capture_qt:
        qInstallMessageHandler(_forward_qt_message)

    logger.info(f"Logging initialized at {logging.getLevelName(level)}.")
    return logger
