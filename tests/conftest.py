"""
Shared pytest fixtures for the Street Gallery tests.

Widgets are created through pytest-qt's ``qtbot`` on the offscreen Qt
platform, so no display is needed. Location services are replaced by a fake
that exposes the same signals as ``LocationManager`` and lets a test choose the
authorization status and current position.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from typing import Optional

import pytest
from PySide6.QtCore import QObject, Signal

from streetgallery.app.location import AuthorizationStatus
from streetgallery.config import MapSettings
from streetgallery.model.geo import Coordinate


class FakeLocationManager(QObject):
    """Stand-in for ``LocationManager`` with scripted state."""
    authorization_changed = Signal(object)
    locations_updated = Signal(list)

    def __init__(self, status: AuthorizationStatus = AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
                 location: Optional[Coordinate] = None) -> None:
        super().__init__()
        self.status = status
        self._location = location
        self.authorization_requests = 0
        self.updating = False

    @property
    def location(self) -> Optional[Coordinate]:
        return self._location

    def set_location(self, location: Optional[Coordinate]) -> None:
        self._location = location

    def authorization_status(self) -> AuthorizationStatus:
        return self.status

    def request_always_authorization(self) -> None:
        self.authorization_requests += 1

    def start_updating_location(self) -> None:
        self.updating = True

    def stop_updating_location(self) -> None:
        self.updating = False


@pytest.fixture
def prague() -> Coordinate:
    return Coordinate(latitude=50.0875, longitude=14.4213)


@pytest.fixture
def malang() -> Coordinate:
    return Coordinate(latitude=-7.9525, longitude=112.6144)


@pytest.fixture
def fake_location(qapp) -> FakeLocationManager:
    return FakeLocationManager()


@pytest.fixture
def map_settings() -> MapSettings:
    """Defaults, without touching the user's settings file."""
    return MapSettings()


@pytest.fixture
def window(qtbot, fake_location, map_settings):
    """A shown map screen wired to the fake location manager."""
    from streetgallery.app.ui.main_window import MapWindow

    win = MapWindow(fake_location, settings=map_settings)
    qtbot.addWidget(win)
    with qtbot.waitExposed(win):
        win.show()
    return win
