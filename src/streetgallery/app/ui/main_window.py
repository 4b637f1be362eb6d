"""
Map screen: a map, a double-tap that drops a single pin, and a pull-up panel
with the (placeholder) photo grid for the pin's surroundings.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QPointF, QRect, Qt, Slot
from PySide6.QtGui import QAction, QFont
from PySide6.QtWidgets import QLabel, QMainWindow, QProgressBar, QToolBar, QVBoxLayout, QWidget

from streetgallery.app.application import VISIBLE_APP_NAME
from streetgallery.app.location import AuthorizationStatus, LocationManager
from streetgallery.app.ui.gestures import DoubleTapRecognizer, SwipeDownRecognizer
from streetgallery.app.ui.map_view import MapView
from streetgallery.app.ui.photo_grid import PhotoGrid
from streetgallery.app.ui.pull_up_panel import PullUpPanel
from streetgallery.config import (
    ACCENT_COLOR, DEFAULT_CENTER, DEFAULT_REGION_METERS, LABEL_COLOR, LABEL_HEIGHT, LABEL_TOP, LABEL_WIDTH,
    PANEL_COLLAPSED_HEIGHT, PIN_IDENTIFIER, PROGRESS_FONT, PROGRESS_TEXT, SPINNER_CENTER_Y, SPINNER_COLOR,
    SPINNER_SIZE, MapSettings, load_settings,
)
from streetgallery.model.geo import MapRegion
from streetgallery.model.pin import DroppablePin, PinAnnotationView, UserLocationAnnotation

logger = logging.getLogger(__name__)


class MapWindow(QMainWindow):
    def __init__(self, location_manager: LocationManager, settings: MapSettings | None = None,
                 parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(430, 932)

        self.settings = settings if settings is not None else load_settings()
        self.location_manager = location_manager

        self.spinner: Optional[QProgressBar] = None
        self.progress_label: Optional[QLabel] = None
        self._swipe_recognizer: Optional[SwipeDownRecognizer] = None

        # ---- Central: map above, pull-up panel below ----
        central = QWidget(self)
        v = QVBoxLayout(central)
        v.setContentsMargins(0, 0, 0, 0)
        v.setSpacing(0)

        self.map_view = MapView(central, animation_ms=self.settings.animation_ms)
        self.map_view.set_region(MapRegion.around(DEFAULT_CENTER, DEFAULT_REGION_METERS))
        v.addWidget(self.map_view, 1)

        self.pull_up_panel = PullUpPanel(central, animation_ms=self.settings.animation_ms)
        v.addWidget(self.pull_up_panel, 0)

        self.setCentralWidget(central)

        # ---- Toolbar: location button ----
        toolbar = QToolBar(self.tr("Map"), self)
        toolbar.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.BottomToolBarArea, toolbar)
        self.act_locate = QAction(self.tr("Center on Me"), self)
        self.act_locate.triggered.connect(self.on_location_button_pressed)
        toolbar.addAction(self.act_locate)

        # ---- Map events ----
        self.map_view.annotation_view_provider = self.view_for_annotation

        # ---- Location events ----
        self.location_manager.authorization_changed.connect(self._on_authorization_changed)
        self.location_manager.locations_updated.connect(self._on_locations_updated)
        self.location_manager.start_updating_location()
        self.configure_location_services()

        # ---- Gestures ----
        self.double_tap = DoubleTapRecognizer(self.map_view.viewport(), parent=self)
        self.double_tap.recognized.connect(self.drop_pin)

        # ---- Photo grid ----
        self.photo_grid = PhotoGrid(self.pull_up_panel)
        self.photo_grid.set_background_color(ACCENT_COLOR)
        self.photo_grid.item_selected.connect(self._on_photo_selected)
        self.pull_up_panel.add_content(self.photo_grid)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    @Slot()
    def on_location_button_pressed(self) -> None:
        if self.location_manager.authorization_status().is_authorized:
            self.center_user_coordinates()
        else:
            logger.info("Location button ignored: not authorized.")

    @Slot(QPointF)
    def drop_pin(self, point: QPointF) -> None:
        """Replace the current pin with one at ``point`` and open the panel."""
        self.remove_all_pins()
        self.remove_spinner()
        self.remove_progress_label()

        self.animate_pull_up_view()
        self._attach_swipe_down()
        self.add_spinner()
        self.add_progress_label()

        coordinate = self.map_view.convert_point_to_coordinate(point)
        annotation = DroppablePin(identifier=PIN_IDENTIFIER, coordinate=coordinate)
        self.map_view.add_annotation(annotation)
        logger.info(f"Pin dropped at {coordinate.latitude:.6f}, {coordinate.longitude:.6f}")

        region = MapRegion.around(coordinate, self.settings.region_radius)
        self.map_view.set_region(region, animated=True)

    def remove_all_pins(self) -> None:
        self.map_view.remove_all_annotations()

    def center_user_coordinates(self) -> None:
        coordinate = self.location_manager.location
        if coordinate is None:
            return
        self.map_view.set_user_location(coordinate)
        region = MapRegion.around(coordinate, self.settings.region_radius * 2)
        self.map_view.set_region(region, animated=True)

    def view_for_annotation(self, annotation: object) -> Optional[PinAnnotationView]:
        if isinstance(annotation, UserLocationAnnotation):
            return None
        return PinAnnotationView(
            annotation=annotation,
            reuse_identifier=PIN_IDENTIFIER,
            tint_color=ACCENT_COLOR,
            animates_drop=True,
        )

    # ------------------------------------------------------------------
    # Pull-up panel
    # ------------------------------------------------------------------

    def animate_pull_up_view(self) -> None:
        self.pull_up_panel.set_height_constraint(self.settings.panel_height)

    @Slot()
    def animate_pull_down_view(self) -> None:
        self.pull_up_panel.set_height_constraint(PANEL_COLLAPSED_HEIGHT)

    def _attach_swipe_down(self) -> None:
        if self._swipe_recognizer is not None:
            return
        self._swipe_recognizer = SwipeDownRecognizer(self.pull_up_panel, parent=self)
        # the grid covers the panel, so its viewport sees the drag
        self._swipe_recognizer.attach(self.photo_grid.viewport())
        self._swipe_recognizer.swiped.connect(self.animate_pull_down_view)

    # ------------------------------------------------------------------
    # Loading overlays
    # ------------------------------------------------------------------

    def _overlay_width(self) -> int:
        return self.photo_grid.width() or self.width()

    def add_spinner(self) -> None:
        spinner = QProgressBar(self.photo_grid)
        spinner.setRange(0, 0)
        spinner.setTextVisible(False)
        spinner.setStyleSheet(
            f"QProgressBar {{ border: none; background: transparent; }}"
            f"QProgressBar::chunk {{ background-color: {SPINNER_COLOR}; }}"
        )
        spinner.resize(SPINNER_SIZE * 2, 6)
        spinner.move(self._overlay_width() // 2 - spinner.width() // 2, SPINNER_CENTER_Y - spinner.height() // 2)
        spinner.show()
        self.spinner = spinner

    def remove_spinner(self) -> None:
        if self.spinner is not None:
            self.spinner.hide()
            self.spinner.setParent(None)
            self.spinner.deleteLater()
            self.spinner = None

    def add_progress_label(self) -> None:
        label = QLabel(PROGRESS_TEXT, self.photo_grid)
        label.setGeometry(QRect(self._overlay_width() // 2 - LABEL_WIDTH // 2, LABEL_TOP, LABEL_WIDTH, LABEL_HEIGHT))
        label.setFont(QFont(*PROGRESS_FONT))
        label.setStyleSheet(f"color: {LABEL_COLOR}; background: transparent;")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        label.show()
        self.progress_label = label

    def remove_progress_label(self) -> None:
        if self.progress_label is not None:
            self.progress_label.hide()
            self.progress_label.setParent(None)
            self.progress_label.deleteLater()
            self.progress_label = None

    # ------------------------------------------------------------------
    # Location callbacks
    # ------------------------------------------------------------------

    def configure_location_services(self) -> None:
        if self.location_manager.authorization_status() == AuthorizationStatus.NOT_DETERMINED:
            self.location_manager.request_always_authorization()

    def _on_authorization_changed(self, status: AuthorizationStatus) -> None:
        self.center_user_coordinates()

    def _on_locations_updated(self, locations: list) -> None:
        self.center_user_coordinates()

    def _on_photo_selected(self, row: int) -> None:
        logger.debug(f"Photo placeholder {row} tapped; nothing to show yet.")

    def closeEvent(self, e) -> None:
        self.location_manager.stop_updating_location()
        super().closeEvent(e)
