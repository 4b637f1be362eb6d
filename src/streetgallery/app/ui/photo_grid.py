"""
Photo grid shown inside the pull-up panel.

Nothing is fetched yet: the model always reports one section of empty
placeholder cells.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import QAbstractListModel, QModelIndex, QPersistentModelIndex, QRect, QSize, Qt, Signal
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QListView, QStyle, QStyledItemDelegate, QStyleOptionViewItem, QWidget

from streetgallery.config import (
    GRID_CELL_SIZE, GRID_ITEM_COUNT, GRID_SECTION_COUNT, PHOTO_CELL_IDENTIFIER
)

logger = logging.getLogger(__name__)


class PhotoGridModel(QAbstractListModel):
    """Placeholder data source: a fixed number of empty cells."""

    def section_count(self) -> int:
        return GRID_SECTION_COUNT

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return GRID_ITEM_COUNT

    def data(self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole):
        if role == Qt.ItemDataRole.AccessibleTextRole and index.isValid():
            return PHOTO_CELL_IDENTIFIER
        return None

    def flags(self, index: QModelIndex | QPersistentModelIndex) -> Qt.ItemFlag:
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        return Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable


class PhotoCellDelegate(QStyledItemDelegate):
    """Paints an empty photo cell for every index, known or not."""

    def __init__(self, parent=None, cell_size: int = GRID_CELL_SIZE) -> None:
        super().__init__(parent)
        self.cell_size = cell_size

    def sizeHint(self, option: QStyleOptionViewItem, index: QModelIndex) -> QSize:
        return QSize(self.cell_size, self.cell_size)

    def paint(self, painter: QPainter, option: QStyleOptionViewItem, index: QModelIndex) -> None:
        rect: QRect = option.rect.adjusted(2, 2, -2, -2)
        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        fill = QColor(255, 255, 255, 200)
        if option.state & QStyle.StateFlag.State_Selected:
            fill = QColor(255, 255, 255, 255)
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(fill)
        painter.drawRoundedRect(rect, 6, 6)
        painter.restore()


class PhotoGrid(QListView):
    """Icon-mode list of placeholder photo cells."""
    item_selected = Signal(int)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setViewMode(QListView.ViewMode.IconMode)
        self.setResizeMode(QListView.ResizeMode.Adjust)
        self.setMovement(QListView.Movement.Static)
        self.setUniformItemSizes(True)
        self.setSpacing(8)
        self.setSelectionMode(QListView.SelectionMode.SingleSelection)

        self.setModel(PhotoGridModel(self))
        self.setItemDelegate(PhotoCellDelegate(self))

        self.clicked.connect(self._on_clicked)

    def photo_model(self) -> PhotoGridModel:
        return self.model()

    def set_background_color(self, color: str) -> None:
        self.setStyleSheet(f"QListView {{ background-color: {color}; border: none; }}")

    def _on_clicked(self, index: QModelIndex) -> None:
        logger.debug(f"Photo cell {index.row()} selected.")
        self.item_selected.emit(index.row())
