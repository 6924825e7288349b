"""Core SceneModel class for MindMap.

This module provides the Qt model owning the nodes, links and selection of
a mind map scene.
"""

from __future__ import annotations

import logging
import random
from itertools import count
from typing import Dict, Iterator, List, Optional, Tuple

from PySide6.QtCore import (
    QAbstractListModel,
    QModelIndex,
    Property,
    Qt,
    Signal,
    Slot,
)
from PySide6.QtGui import QColor

from .constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    NODE_HEIGHT,
    NODE_WIDTH,
    PLACEMENT_MARGIN,
    RANDOM_COLOR_LIGHTNESS,
    RANDOM_COLOR_SATURATION,
)
from .hit_testing import find_topmost_node_at
from .types import MindMapLink, MindMapNode, ScenePoint

logger = logging.getLogger(__name__)

NO_NODE = -1


class SceneModel(QAbstractListModel):
    """Qt model exposing mind map nodes to QML.

    Nodes are kept in insertion order, which is also the z-order used for
    rendering and hit-testing. Every mutating operation finishes by emitting
    ``sceneChanged`` so views can redraw the complete state.
    """

    IdRole = Qt.UserRole + 1
    TextRole = Qt.UserRole + 2
    XRole = Qt.UserRole + 3
    YRole = Qt.UserRole + 4
    WidthRole = Qt.UserRole + 5
    HeightRole = Qt.UserRole + 6
    ColorRole = Qt.UserRole + 7
    SelectedRole = Qt.UserRole + 8

    nodesChanged = Signal()
    linksChanged = Signal()
    selectionChanged = Signal()
    sceneChanged = Signal()

    def __init__(
        self,
        canvas_width: float = CANVAS_WIDTH,
        canvas_height: float = CANVAS_HEIGHT,
        rng: Optional[random.Random] = None,
    ):
        super().__init__()
        self._nodes: List[MindMapNode] = []
        self._links: List[MindMapLink] = []
        self._selected_id: Optional[int] = None
        self._id_source = count()
        self._canvas_width = float(canvas_width)
        self._canvas_height = float(canvas_height)
        self._rng = rng or random.Random()

    def _random_color(self) -> str:
        hue = self._rng.random()
        return QColor.fromHslF(hue, RANDOM_COLOR_SATURATION, RANDOM_COLOR_LIGHTNESS).name()

    def _resolve_color(self, color: Optional[str]) -> str:
        if color and QColor(color).isValid():
            return color
        if color:
            logger.debug("Ignoring invalid node color %r", color)
        return self._random_color()

    def _random_position(self) -> ScenePoint:
        # Keep the whole footprint visible inside the canvas margins.
        span_x = max(0.0, self._canvas_width - NODE_WIDTH - 2 * PLACEMENT_MARGIN)
        span_y = max(0.0, self._canvas_height - NODE_HEIGHT - 2 * PLACEMENT_MARGIN)
        return ScenePoint(
            PLACEMENT_MARGIN + self._rng.random() * span_x,
            PLACEMENT_MARGIN + self._rng.random() * span_y,
        )

    def _append_node(self, node: MindMapNode) -> None:
        self.beginInsertRows(QModelIndex(), len(self._nodes), len(self._nodes))
        self._nodes.append(node)
        self.endInsertRows()
        self.nodesChanged.emit()
        self.sceneChanged.emit()

    def _row_of(self, node_id: int) -> int:
        for row, node in enumerate(self._nodes):
            if node.id == node_id:
                return row
        return -1

    def _emit_selected_role(self, node_id: Optional[int]) -> None:
        if node_id is None:
            return
        row = self._row_of(node_id)
        if row >= 0:
            index = self.index(row, 0)
            self.dataChanged.emit(index, index, [self.SelectedRole])

    def _set_selection(self, node_id: Optional[int]) -> bool:
        if node_id == self._selected_id:
            return False
        previous = self._selected_id
        self._selected_id = node_id
        self._emit_selected_role(previous)
        self._emit_selected_role(node_id)
        self.selectionChanged.emit()
        return True

    # --- Qt model overrides -------------------------------------------------
    def rowCount(self, parent: QModelIndex | None = QModelIndex()) -> int:  # type: ignore[override]
        return len(self._nodes)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):  # type: ignore[override]
        if not index.isValid() or not (0 <= index.row() < len(self._nodes)):
            return None

        node = self._nodes[index.row()]
        if role == self.IdRole:
            return node.id
        if role == self.TextRole:
            return node.text
        if role == self.XRole:
            return node.x
        if role == self.YRole:
            return node.y
        if role == self.WidthRole:
            return node.width
        if role == self.HeightRole:
            return node.height
        if role == self.ColorRole:
            return node.color
        if role == self.SelectedRole:
            return node.id == self._selected_id
        return None

    def roleNames(self) -> Dict[int, bytes]:  # type: ignore[override]
        return {
            self.IdRole: b"nodeId",
            self.TextRole: b"text",
            self.XRole: b"x",
            self.YRole: b"y",
            self.WidthRole: b"width",
            self.HeightRole: b"height",
            self.ColorRole: b"color",
            self.SelectedRole: b"selected",
        }

    # --- Properties exposed to QML -----------------------------------------
    @Property(int, notify=nodesChanged)
    def count(self) -> int:
        return len(self._nodes)

    @Property(list, notify=linksChanged)
    def links(self) -> List[Dict[str, int]]:
        return [{"source": link.source, "target": link.target} for link in self._links]

    @Property(int, notify=selectionChanged)
    def selectedNodeId(self) -> int:
        return NO_NODE if self._selected_id is None else self._selected_id

    # --- Node management ----------------------------------------------------
    @Slot(str, str, result=int)
    def createNode(self, text: str, color: str = "") -> int:
        """Create a node at a random position inside the canvas.

        Returns the new node id, or -1 when ``text`` is empty.
        """
        if not text:
            return NO_NODE
        position = self._random_position()
        return self.createNodeAt(text, position.x, position.y, color)

    @Slot(str, float, float, str, result=int)
    def createNodeAt(self, text: str, x: float, y: float, color: str = "") -> int:
        if not text:
            return NO_NODE
        node = MindMapNode(
            id=next(self._id_source),
            text=text,
            x=float(x),
            y=float(y),
            color=self._resolve_color(color),
        )
        self._append_node(node)
        logger.debug("Created node %d %r at (%.1f, %.1f)", node.id, node.text, node.x, node.y)
        return node.id

    @Slot(result=bool)
    def deleteSelectedNode(self) -> bool:
        """Remove the selected node and clear the selection.

        Links touching the node are left in place and become dangling.
        """
        if self._selected_id is None:
            return False
        node_id = self._selected_id
        row = self._row_of(node_id)
        # Selection must never outlive its node.
        self._selected_id = None
        if row >= 0:
            self.beginRemoveRows(QModelIndex(), row, row)
            self._nodes.pop(row)
            self.endRemoveRows()
            self.nodesChanged.emit()
        self.selectionChanged.emit()
        self.sceneChanged.emit()
        logger.debug("Deleted node %d", node_id)
        return row >= 0

    @Slot(int, float, float, result=bool)
    def moveNode(self, node_id: int, dx: float, dy: float) -> bool:
        """Translate a node by a delta."""
        node = self.get_node(node_id)
        if node is None:
            return False
        return self.setNodePosition(node_id, node.x + dx, node.y + dy)

    @Slot(int, float, float, result=bool)
    def setNodePosition(self, node_id: int, x: float, y: float) -> bool:
        """Place a node's top-left corner at an absolute model position."""
        row = self._row_of(node_id)
        if row < 0:
            return False
        node = self._nodes[row]
        if node.x == x and node.y == y:
            return True
        node.x = float(x)
        node.y = float(y)
        index = self.index(row, 0)
        self.dataChanged.emit(index, index, [self.XRole, self.YRole])
        self.nodesChanged.emit()
        self.sceneChanged.emit()
        return True

    @Slot(str, result=bool)
    def renameSelectedNode(self, text: str) -> bool:
        """Rename hook wired to the toolbar.

        Renaming is provided by an external collaborator; the scene keeps
        node labels fixed and reports that nothing changed.
        """
        logger.debug("Rename requested for node %s; labels are fixed", self._selected_id)
        return False

    @Slot()
    def clear(self) -> None:
        """Remove every node and link and clear the selection."""
        if self._nodes:
            self.beginRemoveRows(QModelIndex(), 0, len(self._nodes) - 1)
            self._nodes.clear()
            self.endRemoveRows()
        self._links.clear()
        self._selected_id = None
        self.nodesChanged.emit()
        self.linksChanged.emit()
        self.selectionChanged.emit()
        self.sceneChanged.emit()
        logger.debug("Cleared scene")

    # --- Links --------------------------------------------------------------
    @Slot(int, int, result=bool)
    def addLink(self, source_id: int, target_id: int) -> bool:
        """Connect two live nodes. Duplicate links are allowed."""
        if self.get_node(source_id) is None or self.get_node(target_id) is None:
            return False
        self._links.append(MindMapLink(source_id, target_id))
        self.linksChanged.emit()
        self.sceneChanged.emit()
        return True

    # --- Selection ----------------------------------------------------------
    @Slot(int, result=bool)
    def selectNode(self, node_id: int) -> bool:
        if self.get_node(node_id) is None:
            return False
        if self._set_selection(node_id):
            self.sceneChanged.emit()
        return True

    @Slot(result=bool)
    def clearSelection(self) -> bool:
        """Clear the selection. Returns True if something was selected."""
        if not self._set_selection(None):
            return False
        self.sceneChanged.emit()
        return True

    @Slot(float, float, result=int)
    def nodeIdAt(self, x: float, y: float) -> int:
        node = self.find_node_at(ScenePoint(x, y))
        return NO_NODE if node is None else node.id

    # --- Utilities ----------------------------------------------------------
    @property
    def selected_id(self) -> Optional[int]:
        return self._selected_id

    @property
    def canvas_size(self) -> Tuple[float, float]:
        return self._canvas_width, self._canvas_height

    def get_node(self, node_id: int) -> Optional[MindMapNode]:
        for node in self._nodes:
            if node.id == node_id:
                return node
        return None

    def find_node_at(self, point: ScenePoint) -> Optional[MindMapNode]:
        return find_topmost_node_at(self._nodes, point)

    def iter_nodes(self) -> Iterator[MindMapNode]:
        return iter(list(self._nodes))

    def iter_links(self) -> Iterator[MindMapLink]:
        return iter(list(self._links))

    def live_links(self) -> List[MindMapLink]:
        """Links whose endpoints both resolve to live nodes."""
        live_ids = {node.id for node in self._nodes}
        return [
            link for link in self._links
            if link.source in live_ids and link.target in live_ids
        ]

    def dangling_links(self) -> List[MindMapLink]:
        live_ids = {node.id for node in self._nodes}
        return [
            link for link in self._links
            if link.source not in live_ids or link.target not in live_ids
        ]
