"""Pointer, keyboard and wheel handling for the MindMap canvas.

The controller turns canvas input into scene mutations. Pointer positions
arrive in screen space and are mapped to model space through the
``CoordinateTransform`` before any hit-testing happens.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Property, QObject, Qt, Signal, Slot

from .constants import NUDGE_STEP, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR
from .model import NO_NODE, SceneModel
from .transform import CoordinateTransform
from .types import DragSession, InteractionState

logger = logging.getLogger(__name__)

ARROW_KEY_DIRECTIONS = {
    int(Qt.Key_Up): (0, -1),
    int(Qt.Key_Down): (0, 1),
    int(Qt.Key_Left): (-1, 0),
    int(Qt.Key_Right): (1, 0),
}


class InteractionController(QObject):
    """Interaction state machine for a single scene.

    States are ``IDLE`` and ``DRAGGING``; selection lives in the scene and
    can change in either state. Each pointer gesture is hit-tested once, at
    pointer-down, and the click that closes the gesture settles selection
    from that same result.
    """

    redrawRequested = Signal()
    zoomChanged = Signal()
    dragStateChanged = Signal()

    def __init__(
        self,
        scene: Optional[SceneModel] = None,
        transform: Optional[CoordinateTransform] = None,
    ):
        super().__init__()
        self._scene = scene if scene is not None else SceneModel()
        self._transform = transform if transform is not None else CoordinateTransform()
        self._drag: Optional[DragSession] = None
        # Hit-test result of the last pointer-down, consumed by the next click.
        self._gesture_open = False
        self._pressed_id: Optional[int] = None
        self._scene.sceneChanged.connect(self.redrawRequested)

    @property
    def scene(self) -> SceneModel:
        return self._scene

    @property
    def transform(self) -> CoordinateTransform:
        return self._transform

    @property
    def state(self) -> InteractionState:
        return InteractionState.DRAGGING if self._drag is not None else InteractionState.IDLE

    @property
    def drag_session(self) -> Optional[DragSession]:
        return self._drag

    def _reset_gesture(self) -> None:
        self._gesture_open = False
        self._pressed_id = None

    def _set_drag(self, session: Optional[DragSession]) -> None:
        if session is None and self._drag is None:
            return
        self._drag = session
        self.dragStateChanged.emit()

    # --- Properties exposed to QML -----------------------------------------
    @Property(float, notify=zoomChanged)
    def zoomLevel(self) -> float:
        return self._transform.zoom

    @Property(bool, notify=dragStateChanged)
    def dragging(self) -> bool:
        return self._drag is not None

    @Property(int, notify=dragStateChanged)
    def draggedNodeId(self) -> int:
        return NO_NODE if self._drag is None else self._drag.node_id

    # --- Pointer ------------------------------------------------------------
    @Slot(float, float, result=bool)
    def pointerDown(self, x: float, y: float) -> bool:
        """Start a gesture. Returns True if a node was grabbed."""
        point = self._transform.to_model_space(x, y)
        node = self._scene.find_node_at(point)
        self._gesture_open = True
        self._pressed_id = None if node is None else node.id
        if node is None:
            return False
        self._set_drag(DragSession(node.id, point - node.position))
        self._scene.selectNode(node.id)
        logger.debug("Drag started on node %d, offset %s", node.id, self._drag.offset)
        return True

    @Slot(float, float, result=bool)
    def pointerMove(self, x: float, y: float) -> bool:
        if self._drag is None:
            return False
        point = self._transform.to_model_space(x, y)
        target = point - self._drag.offset
        if not self._scene.setNodePosition(self._drag.node_id, target.x, target.y):
            # The dragged node is gone.
            self._set_drag(None)
            return False
        return True

    @Slot()
    def pointerUp(self) -> None:
        self._set_drag(None)

    @Slot(float, float, result=bool)
    def click(self, x: float, y: float) -> bool:
        """Settle selection at the end of a gesture.

        Returns True if a node ended up selected.
        """
        if self._gesture_open:
            node_id = self._pressed_id
        else:
            node = self._scene.find_node_at(self._transform.to_model_space(x, y))
            node_id = None if node is None else node.id
        self._reset_gesture()

        if node_id is not None and self._scene.selectNode(node_id):
            return True
        self._scene.clearSelection()
        return False

    @Slot(result=bool)
    def clickOutside(self) -> bool:
        """Clear selection for a click that landed outside the canvas."""
        self._reset_gesture()
        return self._scene.clearSelection()

    # --- Keyboard -----------------------------------------------------------
    @Slot(int, result=bool)
    def keyPress(self, key: int) -> bool:
        """Nudge the selected node for arrow keys. Returns True if handled."""
        direction = ARROW_KEY_DIRECTIONS.get(int(key))
        if direction is None:
            return False
        return self.nudgeSelected(direction[0], direction[1])

    @Slot(int, int, result=bool)
    def nudgeSelected(self, dx: int, dy: int) -> bool:
        selected = self._scene.selected_id
        if selected is None:
            return False
        return self._scene.moveNode(selected, dx * NUDGE_STEP, dy * NUDGE_STEP)

    # --- Zoom ---------------------------------------------------------------
    @Slot(float, result=bool)
    def wheel(self, angle_delta_y: float) -> bool:
        """Zoom in for a positive wheel delta, out for a negative one."""
        if angle_delta_y > 0:
            factor = ZOOM_IN_FACTOR
        elif angle_delta_y < 0:
            factor = ZOOM_OUT_FACTOR
        else:
            return False
        return self.zoomBy(factor)

    @Slot(float, result=bool)
    def zoomBy(self, factor: float) -> bool:
        if not self._transform.zoom_by(factor):
            return False
        self._zoom_updated()
        return True

    @Slot(float, result=bool)
    def setZoomLevel(self, value: float) -> bool:
        if not self._transform.set_zoom(value):
            return False
        self._zoom_updated()
        return True

    def _zoom_updated(self) -> None:
        logger.debug("Zoom level %.4f", self._transform.zoom)
        self.zoomChanged.emit()
        self.redrawRequested.emit()
