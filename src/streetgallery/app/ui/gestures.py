"""
Gesture recognizers implemented as Qt event filters.

Attach a recognizer to the widget that receives the mouse events (for
QAbstractScrollArea subclasses that is the viewport) and connect to its signal.
"""
from __future__ import annotations

from PySide6.QtCore import QEvent, QObject, QPointF, Qt, Signal
from PySide6.QtGui import QMouseEvent

from streetgallery.config import SWIPE_MIN_DISTANCE


class DoubleTapRecognizer(QObject):
    """Emits ``recognized`` with the local position of a left double click."""
    recognized = Signal(QPointF)

    def __init__(self, target: QObject, parent: QObject | None = None) -> None:
        super().__init__(parent if parent is not None else target)
        self.target = target
        target.installEventFilter(self)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self.target and event.type() == QEvent.Type.MouseButtonDblClick:
            if isinstance(event, QMouseEvent) and event.button() == Qt.MouseButton.LeftButton:
                self.recognized.emit(QPointF(event.position()))
                return True
        return False


class SwipeDownRecognizer(QObject):
    """
    Emits ``swiped`` when a press/release pair travels downward by at least
    ``min_distance`` pixels and the motion is mostly vertical.
    """
    swiped = Signal()

    def __init__(self, target: QObject, min_distance: int = SWIPE_MIN_DISTANCE,
                 parent: QObject | None = None) -> None:
        super().__init__(parent if parent is not None else target)
        self.min_distance = min_distance
        self._targets: list[QObject] = []
        self._press_pos: QPointF | None = None
        self.attach(target)

    def attach(self, target: QObject) -> None:
        """Also watch ``target``; useful when a child covers the first one."""
        if target in self._targets:
            return
        self._targets.append(target)
        target.installEventFilter(self)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched not in self._targets or not isinstance(event, QMouseEvent):
            return False

        if event.type() == QEvent.Type.MouseButtonPress and event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = QPointF(event.globalPosition())
        elif event.type() == QEvent.Type.MouseButtonRelease and self._press_pos is not None:
            delta = QPointF(event.globalPosition()) - self._press_pos
            self._press_pos = None
            if delta.y() >= self.min_distance and abs(delta.x()) < delta.y():
                self.swiped.emit()
        return False
