"""
Application Bootstrap
=====================
Builds the QApplication for the map screen: logging, organisation/application
identity for ``QSettings``, and where the settings file lives.

Environment:
    STREETGALLERY_SETTINGS_DIR: Directory for the INI settings file instead of
        the platform's per-user location.
    STREETGALLERY_LOG_LEVEL / STREETGALLERY_DEBUG / STREETGALLERY_LOG_FILE:
        see ``streetgallery.logging_config``.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional

import pyqtgraph as pg
from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

from streetgallery.logging_config import setup_logging

logger = logging.getLogger(__name__)

ORG_ID = "bcc-filkom"
APP_ID = "street-gallery"
ORG_DOMAIN = "filkom.ub.ac.id"

VISIBLE_APP_NAME = "Street Gallery"


def configure_settings(environ: Mapping[str, str]) -> None:
    """Identity and storage for every ``QSettings()`` created afterwards."""
    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    settings_dir = environ.get("STREETGALLERY_SETTINGS_DIR")
    if settings_dir:
        QSettings.setPath(QSettings.Format.IniFormat, QSettings.Scope.UserScope, settings_dir)
        logger.info(f"Reading settings from {settings_dir}")


def create_app(argv: Optional[list[str]] = None, environ: Optional[Mapping[str, str]] = None) -> QApplication:
    """Create the QApplication, or reuse the running one."""
    environ = os.environ if environ is None else environ
    setup_logging(environ=environ)
    configure_settings(environ)

    pg.setConfigOptions(antialias=True)

    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)
    app.setApplicationDisplayName(QCoreApplication.translate("App", VISIBLE_APP_NAME))
    return app
