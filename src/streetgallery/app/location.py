"""
Location Services
=================
Wraps Qt Positioning and the Qt permission API behind a small manager object
that the map screen listens to.

Signals replace a delegate object: the screen connects to
``authorization_changed`` and ``locations_updated`` instead of implementing a
callback protocol.
"""
from __future__ import annotations

from enum import Enum
import logging
from typing import Callable, Optional

from PySide6.QtCore import QCoreApplication, QLocationPermission, QObject, Qt, Signal
from PySide6.QtPositioning import QGeoPositionInfo, QGeoPositionInfoSource

from streetgallery.model.geo import Coordinate

logger = logging.getLogger(__name__)

# Builds the position source for a manager; returns None without a backend.
SourceFactory = Callable[[QObject], Optional[QGeoPositionInfoSource]]


class AuthorizationStatus(Enum):
    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"

    @property
    def is_authorized(self) -> bool:
        return self in (AuthorizationStatus.AUTHORIZED_ALWAYS, AuthorizationStatus.AUTHORIZED_WHEN_IN_USE)


def _location_permission(availability: QLocationPermission.Availability) -> QLocationPermission:
    permission = QLocationPermission()
    permission.setAccuracy(QLocationPermission.Accuracy.Precise)
    permission.setAvailability(availability)
    return permission


class LocationManager(QObject):
    """Device position and location-permission state."""
    authorization_changed = Signal(object)
    locations_updated = Signal(list)

    def __init__(self, parent: QObject | None = None,
                 source_factory: SourceFactory = QGeoPositionInfoSource.createDefaultSource) -> None:
        super().__init__(parent)
        self._location: Optional[Coordinate] = None
        self._updating = False

        self._source: QGeoPositionInfoSource | None = source_factory(self)
        if self._source is None:
            logger.warning("No positioning backend available; location updates are disabled.")
        else:
            logger.info(f"Using positioning source '{self._source.sourceName()}'.")
            self._source.positionUpdated.connect(self._on_position_updated)
            self._source.errorOccurred.connect(self._on_source_error)

        self._status = self.authorization_status()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def location(self) -> Optional[Coordinate]:
        """Last known device position, or None before the first fix."""
        return self._location

    def authorization_status(self) -> AuthorizationStatus:
        app = QCoreApplication.instance()
        if app is None:
            return AuthorizationStatus.NOT_DETERMINED

        always = app.checkPermission(_location_permission(QLocationPermission.Availability.Always))
        if always == Qt.PermissionStatus.Granted:
            return AuthorizationStatus.AUTHORIZED_ALWAYS

        in_use = app.checkPermission(_location_permission(QLocationPermission.Availability.WhenInUse))
        if in_use == Qt.PermissionStatus.Granted:
            return AuthorizationStatus.AUTHORIZED_WHEN_IN_USE
        if Qt.PermissionStatus.Undetermined in (always, in_use):
            return AuthorizationStatus.NOT_DETERMINED
        return AuthorizationStatus.DENIED

    def request_always_authorization(self) -> None:
        """Ask the platform for background location access."""
        app = QCoreApplication.instance()
        if app is None:
            return
        logger.info("Requesting location authorization.")
        app.requestPermission(
            _location_permission(QLocationPermission.Availability.Always),
            self,
            self._on_permission_result,
        )

    def start_updating_location(self) -> None:
        if self._source is None or self._updating:
            return
        self._source.startUpdates()
        self._updating = True
        logger.debug("Location updates started.")

    def stop_updating_location(self) -> None:
        if self._source is None or not self._updating:
            return
        self._source.stopUpdates()
        self._updating = False
        logger.debug("Location updates stopped.")

    # ------------------------------------------------------------------
    # Internal slots
    # ------------------------------------------------------------------

    def _on_permission_result(self, *_) -> None:
        status = self.authorization_status()
        if status != self._status:
            logger.info(f"Location authorization changed: {self._status.value} -> {status.value}")
            self._status = status
        self.authorization_changed.emit(status)

    def _on_position_updated(self, info: QGeoPositionInfo) -> None:
        coord = info.coordinate()
        if not coord.isValid():
            return
        try:
            self._location = Coordinate(latitude=coord.latitude(), longitude=coord.longitude())
        except ValueError as e:
            logger.warning(f"Ignoring position update: {e}")
            return
        self.locations_updated.emit([self._location])

    def _on_source_error(self, error: QGeoPositionInfoSource.Error) -> None:
        logger.warning(f"Positioning source error: {error}")
