"""Free-text bullet point list shown beside the canvas."""

from __future__ import annotations

from typing import Dict, List

from PySide6.QtCore import (
    QAbstractListModel,
    QModelIndex,
    Property,
    Qt,
    Signal,
    Slot,
)


class BulletListModel(QAbstractListModel):
    """Flat, ordered list of annotation strings with a single selection."""

    TextRole = Qt.UserRole + 1
    SelectedRole = Qt.UserRole + 2

    countChanged = Signal()
    selectedIndexChanged = Signal()

    def __init__(self, points: List[str] | None = None):
        super().__init__()
        self._points: List[str] = list(points or [])
        self._selected_row = -1

    def rowCount(self, parent: QModelIndex | None = QModelIndex()) -> int:  # type: ignore[override]
        return len(self._points)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):  # type: ignore[override]
        if not index.isValid() or not (0 <= index.row() < len(self._points)):
            return None
        if role == self.TextRole:
            return self._points[index.row()]
        if role == self.SelectedRole:
            return index.row() == self._selected_row
        return None

    def roleNames(self) -> Dict[int, bytes]:  # type: ignore[override]
        return {
            self.TextRole: b"text",
            self.SelectedRole: b"selected",
        }

    @Property(int, notify=countChanged)
    def count(self) -> int:
        return len(self._points)

    @Property(int, notify=selectedIndexChanged)
    def selectedIndex(self) -> int:
        return self._selected_row

    def points(self) -> List[str]:
        return list(self._points)

    @Slot(str, result=bool)
    def addBulletPoint(self, text: str) -> bool:
        if not text:
            return False
        row = len(self._points)
        self.beginInsertRows(QModelIndex(), row, row)
        self._points.append(text)
        self.endInsertRows()
        self.countChanged.emit()
        return True

    @Slot(int, result=bool)
    def selectBulletPoint(self, row: int) -> bool:
        if not (0 <= row < len(self._points)):
            return False
        if row == self._selected_row:
            return True
        previous = self._selected_row
        self._selected_row = row
        for changed in (previous, row):
            if changed >= 0:
                index = self.index(changed, 0)
                self.dataChanged.emit(index, index, [self.SelectedRole])
        self.selectedIndexChanged.emit()
        return True

    @Slot(result=bool)
    def deleteSelectedBulletPoint(self) -> bool:
        row = self._selected_row
        if row < 0:
            return False
        self.beginRemoveRows(QModelIndex(), row, row)
        self._points.pop(row)
        self.endRemoveRows()
        # Rows are rebuilt after a delete, so no entry stays selected.
        self._selected_row = -1
        self.countChanged.emit()
        self.selectedIndexChanged.emit()
        return True
