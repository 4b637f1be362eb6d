from __future__ import annotations

from PySide6.QtCore import Property, QEasingCurve, QPropertyAnimation
from PySide6.QtWidgets import QVBoxLayout, QWidget

from streetgallery.config import PANEL_ANIMATION_MS, PANEL_COLLAPSED_HEIGHT


class PullUpPanel(QWidget):
    """
    Container below the map whose height slides between collapsed and
    expanded.

    ``height_constraint`` is the target height and changes immediately; the
    visible height follows it through a property animation.
    """
    def __init__(self, parent: QWidget | None = None, animation_ms: int = PANEL_ANIMATION_MS) -> None:
        super().__init__(parent)
        self.height_constraint: int = PANEL_COLLAPSED_HEIGHT
        self.setFixedHeight(PANEL_COLLAPSED_HEIGHT)

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._layout.setSpacing(0)

        self._animation = QPropertyAnimation(self, b"panelHeight", self)
        self._animation.setDuration(animation_ms)
        self._animation.setEasingCurve(QEasingCurve.Type.OutCubic)

    def _get_panel_height(self) -> int:
        return self.maximumHeight()

    def _set_panel_height(self, value: int) -> None:
        self.setFixedHeight(max(0, int(value)))

    panelHeight = Property(int, _get_panel_height, _set_panel_height)

    def add_content(self, widget: QWidget) -> None:
        self._layout.addWidget(widget)

    def set_height_constraint(self, height: int, animated: bool = True) -> None:
        self.height_constraint = height
        self._animation.stop()
        if not animated:
            self._set_panel_height(height)
            return
        self._animation.setStartValue(self._get_panel_height())
        self._animation.setEndValue(height)
        self._animation.start()

    def is_expanded(self) -> bool:
        return self.height_constraint > PANEL_COLLAPSED_HEIGHT
