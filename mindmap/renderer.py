"""Rendering of MindMap scenes with QPainter.

Rendering is a pure function of the scene, its selection and the zoom
level. Every redraw repaints the full canvas.
"""

from __future__ import annotations

from PySide6.QtCore import Property, QObject, QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QImage, QPainter, QPainterPath, QPen
from PySide6.QtQuick import QQuickPaintedItem
from shiboken6 import isValid

from .constants import (
    BORDER_COLOR,
    BORDER_WIDTH,
    LABEL_COLOR,
    LINK_COLOR,
    LINK_WIDTH,
    NODE_CORNER_RADIUS,
    SELECTED_BORDER_COLOR,
    SELECTED_BORDER_WIDTH,
)
from .model import SceneModel
from .transform import CoordinateTransform


def rounded_rect_path(
    x: float,
    y: float,
    width: float,
    height: float,
    radius: float,
) -> QPainterPath:
    """Build a rectangle outline with quadratic corners."""
    radius = max(0.0, min(radius, width / 2, height / 2))
    path = QPainterPath()
    path.moveTo(x + radius, y)
    path.lineTo(x + width - radius, y)
    path.quadTo(x + width, y, x + width, y + radius)
    path.lineTo(x + width, y + height - radius)
    path.quadTo(x + width, y + height, x + width - radius, y + height)
    path.lineTo(x + radius, y + height)
    path.quadTo(x, y + height, x, y + height - radius)
    path.lineTo(x, y + radius)
    path.quadTo(x, y, x + radius, y)
    path.closeSubpath()
    return path


def draw_rounded_rect(
    painter: QPainter,
    x: float,
    y: float,
    width: float,
    height: float,
    radius: float,
) -> None:
    """Fill and stroke a rounded rectangle with the painter's brush and pen."""
    painter.drawPath(rounded_rect_path(x, y, width, height, radius))


def render_scene(
    painter: QPainter,
    scene: SceneModel,
    transform: CoordinateTransform,
    width: float,
    height: float,
) -> None:
    """Clear the canvas, then draw links below nodes in insertion order."""
    painter.save()
    painter.setRenderHint(QPainter.Antialiasing, True)
    painter.setRenderHint(QPainter.TextAntialiasing, True)

    painter.setCompositionMode(QPainter.CompositionMode_Source)
    painter.fillRect(QRectF(0, 0, width, height), Qt.transparent)
    painter.setCompositionMode(QPainter.CompositionMode_SourceOver)

    link_pen = QPen(QColor(LINK_COLOR))
    link_pen.setWidthF(LINK_WIDTH)
    painter.setPen(link_pen)
    for link in scene.iter_links():
        source = scene.get_node(link.source)
        target = scene.get_node(link.target)
        if source is None or target is None:
            continue
        start = transform.to_screen_space(source.center())
        end = transform.to_screen_space(target.center())
        painter.drawLine(QPointF(start.x, start.y), QPointF(end.x, end.y))

    selected_id = scene.selected_id
    radius = transform.scale_length(NODE_CORNER_RADIUS)
    for node in scene.iter_nodes():
        origin = transform.to_screen_space(node.position)
        node_width = transform.scale_length(node.width)
        node_height = transform.scale_length(node.height)

        if node.id == selected_id:
            border = QPen(QColor(SELECTED_BORDER_COLOR))
            border.setWidthF(SELECTED_BORDER_WIDTH)
        else:
            border = QPen(QColor(BORDER_COLOR))
            border.setWidthF(BORDER_WIDTH)
        painter.setPen(border)
        painter.setBrush(QColor(node.color))
        draw_rounded_rect(painter, origin.x, origin.y, node_width, node_height, radius)

        painter.setPen(QColor(LABEL_COLOR))
        painter.drawText(
            QRectF(origin.x, origin.y, node_width, node_height),
            Qt.AlignCenter,
            node.text,
        )

    painter.restore()


def render_scene_image(
    scene: SceneModel,
    transform: CoordinateTransform,
    width: int,
    height: int,
) -> QImage:
    """Render the scene into a new transparent ARGB image."""
    image = QImage(int(width), int(height), QImage.Format_ARGB32_Premultiplied)
    image.fill(Qt.transparent)
    painter = QPainter(image)
    try:
        render_scene(painter, scene, transform, width, height)
    finally:
        painter.end()
    return image


class SceneCanvas(QQuickPaintedItem):
    """QML item painting the controller's scene."""

    controllerChanged = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._controller = None

    @Property(QObject, notify=controllerChanged)
    def controller(self):
        return self._controller

    @controller.setter  # type: ignore[no-redef]
    def controller(self, value) -> None:
        if self._controller is value:
            return
        # The old controller may already be destroyed during engine teardown.
        if self._controller is not None and isValid(self._controller):
            self._controller.redrawRequested.disconnect(self.update)
        self._controller = value
        if value is not None:
            value.redrawRequested.connect(self.update)
        self.controllerChanged.emit()
        self.update()

    def paint(self, painter: QPainter) -> None:  # type: ignore[override]
        if self._controller is None or not isValid(self._controller):
            return
        render_scene(
            painter,
            self._controller.scene,
            self._controller.transform,
            self.width(),
            self.height(),
        )
