"""
Map View
========
A pyqtgraph plot locked to a Web-Mercator plane that behaves like a minimal
map widget: it shows a region, converts viewport points to coordinates, and
draws pin annotations plus the user-location marker.

No tiles are downloaded; the background is a flat colour with a light grid.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import QAbstractAnimation, QEasingCurve, QPointF, QVariantAnimation
from PySide6.QtWidgets import QWidget

from streetgallery.config import MAP_BACKGROUND, PANEL_ANIMATION_MS, PIN_IDENTIFIER
from streetgallery.model.geo import Coordinate, MapRegion, coordinate_from_projected, project
from streetgallery.model.pin import DroppablePin, PinAnnotationView

logger = logging.getLogger(__name__)

AnnotationViewProvider = Callable[[object], Optional[PinAnnotationView]]

# Height (px) a pin falls from when its view animates the drop.
DROP_HEIGHT_PX: float = 40.0


class MapView(pg.PlotWidget):
    def __init__(self, parent: QWidget | None = None, animation_ms: int = PANEL_ANIMATION_MS) -> None:
        super().__init__(parent=parent, background=MAP_BACKGROUND)

        self.setMenuEnabled(False)
        self.setAspectLocked(True, ratio=1.0)
        self.showGrid(x=True, y=True, alpha=0.15)
        for name in ("left", "bottom"):
            axis = self.getAxis(name)
            axis.setStyle(showValues=False, tickLength=0)
            axis.setPen(pg.mkPen(MAP_BACKGROUND))

        # Consulted for every annotation added; None hides the annotation.
        self.annotation_view_provider: AnnotationViewProvider | None = None

        self._annotations: list[DroppablePin] = []
        self._views: dict[int, PinAnnotationView] = {}
        self._region: MapRegion | None = None
        self._user_location: Coordinate | None = None

        self._pin_item = pg.ScatterPlotItem(pxMode=True)
        self._pin_item.setZValue(20)
        self._user_item = pg.ScatterPlotItem(
            pxMode=True, size=14, symbol="o",
            pen=pg.mkPen("w", width=2), brush=pg.mkBrush("#0A84FF"),
        )
        self._user_item.setZValue(10)
        self.addItem(self._user_item)
        self.addItem(self._pin_item)

        self._region_start: np.ndarray | None = None
        self._region_end: np.ndarray | None = None
        self._region_animation = QVariantAnimation(self)
        self._region_animation.setDuration(animation_ms)
        self._region_animation.setEasingCurve(QEasingCurve.Type.InOutCubic)
        self._region_animation.setStartValue(0.0)
        self._region_animation.setEndValue(1.0)
        self._region_animation.valueChanged.connect(self._on_region_step)

        self._drop_progress: float = 0.0
        self._drop_animation = QVariantAnimation(self)
        self._drop_animation.setDuration(animation_ms)
        self._drop_animation.setEasingCurve(QEasingCurve.Type.OutBounce)
        self._drop_animation.setStartValue(1.0)
        self._drop_animation.setEndValue(0.0)
        self._drop_animation.valueChanged.connect(self._on_drop_step)

    # ------------------------------------------------------------------
    # Region
    # ------------------------------------------------------------------

    def region(self) -> Optional[MapRegion]:
        """The last region requested, even while an animation is running."""
        return self._region

    def set_region(self, region: MapRegion, animated: bool = False) -> None:
        self._region = region
        target = np.array(region.projected_bounds(), dtype=float)
        self._region_animation.stop()

        if not animated or not self.isVisible():
            self._apply_bounds(target)
            return

        (x0, x1), (y0, y1) = self.getViewBox().viewRange()
        self._region_start = np.array([x0, x1, y0, y1], dtype=float)
        self._region_end = target
        self._region_animation.start()

    def _on_region_step(self, t: float) -> None:
        if self._region_start is None or self._region_end is None:
            return
        t = float(t)
        self._apply_bounds(self._region_start + (self._region_end - self._region_start) * t)

    def _apply_bounds(self, bounds: np.ndarray) -> None:
        x0, x1, y0, y1 = (float(v) for v in bounds)
        self.setRange(xRange=(x0, x1), yRange=(y0, y1), padding=0.0)

    def convert_point_to_coordinate(self, point: QPointF) -> Coordinate:
        """Viewport pixel position -> geographic coordinate."""
        scene_pos = self.mapToScene(point.toPoint())
        view_pos = self.getViewBox().mapSceneToView(scene_pos)
        return coordinate_from_projected(view_pos.x(), view_pos.y())

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def annotations(self) -> list[DroppablePin]:
        return list(self._annotations)

    def add_annotation(self, annotation: DroppablePin) -> None:
        self._annotations.append(annotation)
        view = self._view_for(annotation)
        if view is not None:
            self._views[id(annotation)] = view
        logger.debug(f"Annotation '{annotation.identifier}' added at {annotation.coordinate}.")

        if view is not None and view.animates_drop and self.isVisible():
            self._drop_animation.stop()
            self._drop_animation.start()
        else:
            self._refresh_pins()

    def remove_annotation(self, annotation: DroppablePin) -> None:
        if annotation not in self._annotations:
            return
        self._annotations.remove(annotation)
        self._views.pop(id(annotation), None)
        self._refresh_pins()

    def remove_all_annotations(self) -> None:
        for annotation in self.annotations():
            self.remove_annotation(annotation)

    def annotation_view(self, annotation: DroppablePin) -> Optional[PinAnnotationView]:
        return self._views.get(id(annotation))

    def _view_for(self, annotation: DroppablePin) -> Optional[PinAnnotationView]:
        if self.annotation_view_provider is not None:
            return self.annotation_view_provider(annotation)
        return PinAnnotationView(annotation=annotation, reuse_identifier=PIN_IDENTIFIER)

    def _on_drop_step(self, value: float) -> None:
        self._drop_progress = float(value)
        self._refresh_pins()

    def _refresh_pins(self) -> None:
        spots = []
        dropping = self._drop_animation.state() == QAbstractAnimation.State.Running
        for annotation in self._annotations:
            view = self._views.get(id(annotation))
            if view is None:
                continue
            x, y = project(annotation.coordinate.latitude, annotation.coordinate.longitude)
            offset = 0.0
            if view.animates_drop and dropping:
                _, px_h = self.getViewBox().viewPixelSize()
                offset = self._drop_progress * DROP_HEIGHT_PX * px_h
            spots.append({
                "pos": (float(x), float(y) + offset),
                "size": view.size,
                "symbol": "t",
                "pen": pg.mkPen("w", width=1),
                "brush": pg.mkBrush(view.tint_color),
            })
        self._pin_item.setData(spots=spots)

    # ------------------------------------------------------------------
    # User location
    # ------------------------------------------------------------------

    def user_location(self) -> Optional[Coordinate]:
        return self._user_location

    def set_user_location(self, coordinate: Coordinate | None) -> None:
        self._user_location = coordinate
        if coordinate is None:
            self._user_item.setData([], [])
            return
        x, y = project(coordinate.latitude, coordinate.longitude)
        self._user_item.setData([float(x)], [float(y)])
