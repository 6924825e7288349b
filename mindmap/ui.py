"""UI creation functions for MindMap."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from PySide6.QtCore import QEvent, QObject, QPointF, QTimer, QUrl
from PySide6.QtQml import QQmlApplicationEngine, qmlRegisterType
from PySide6.QtQuick import QQuickItem

from .bullets import BulletListModel
from .controller import InteractionController
from .export import ImageExporter
from .qml import MINDMAP_QML_PATH, QML_DIR, QML_MODULE_NAME, QML_MODULE_VERSION
from .renderer import SceneCanvas

logger = logging.getLogger(__name__)

_qml_types_registered = False

SCENE_CANVAS_OBJECT_NAME = "sceneCanvas"


def register_qml_types() -> None:
    """Make ``SceneCanvas`` importable from QML as ``MindMap 1.0``."""
    global _qml_types_registered
    if _qml_types_registered:
        return
    major, minor = QML_MODULE_VERSION
    qmlRegisterType(SceneCanvas, QML_MODULE_NAME, major, minor, "SceneCanvas")
    _qml_types_registered = True


class OutsideClickFilter(QObject):
    """Clear the node selection for clicks that do not stay on the canvas.

    A click counts as outside unless both its press and its release land on
    the canvas. The selection is cleared after the click has been delivered,
    so toolbar actions such as Delete still see the selected node.
    """

    def __init__(self, controller: InteractionController, canvas: QQuickItem):
        super().__init__()
        self._controller = controller
        self._canvas = canvas
        self._pressed_on_canvas = False

    def _on_canvas(self, event) -> bool:
        position = event.position()
        local = self._canvas.mapFromScene(QPointF(position.x(), position.y()))
        return self._canvas.contains(local)

    def eventFilter(self, watched, event) -> bool:  # type: ignore[override]
        if event.type() == QEvent.MouseButtonPress:
            self._pressed_on_canvas = self._on_canvas(event)
        elif event.type() == QEvent.MouseButtonRelease:
            if not (self._pressed_on_canvas and self._on_canvas(event)):
                QTimer.singleShot(0, self._controller.clickOutside)
            self._pressed_on_canvas = False
        return False


def create_mindmap_window(
    controller: InteractionController,
    bullet_model: Optional[BulletListModel] = None,
    image_exporter: Optional[ImageExporter] = None,
) -> QQmlApplicationEngine:
    """Create and return a QQmlApplicationEngine hosting the MindMap UI."""
    register_qml_types()
    if bullet_model is None:
        bullet_model = BulletListModel()
    if image_exporter is None:
        image_exporter = ImageExporter(controller)

    engine = QQmlApplicationEngine()
    engine.rootContext().setContextProperty("sceneModel", controller.scene)
    engine.rootContext().setContextProperty("editorController", controller)
    engine.rootContext().setContextProperty("bulletModel", bullet_model)
    engine.rootContext().setContextProperty("imageExporter", image_exporter)
    # Context properties do not keep the Python objects alive.
    engine._bullet_model = bullet_model
    engine._image_exporter = image_exporter
    engine.addImportPath(str(QML_DIR))
    engine.load(QUrl.fromLocalFile(str(MINDMAP_QML_PATH)))
    for window in engine.rootObjects():
        canvas = window.findChild(QQuickItem, SCENE_CANVAS_OBJECT_NAME)
        if canvas is None:
            logger.warning("No %s item in %s", SCENE_CANVAS_OBJECT_NAME, MINDMAP_QML_PATH)
            continue
        click_filter = OutsideClickFilter(controller, canvas)
        window.installEventFilter(click_filter)
        engine._outside_click_filter = click_filter
    return engine


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="mindmap", description="Interactive mind map editor.")
    parser.add_argument(
        "--smoke",
        action="store_true",
        default=os.environ.get("MINDMAP_SMOKE") == "1",
        help="Load the window and exit immediately.",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("MINDMAP_LOG_LEVEL", "WARNING"),
        help="Logging level name (default: WARNING).",
    )
    args, _unknown = parser.parse_known_args(argv)
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the MindMap editor."""
    from PySide6.QtWidgets import QApplication

    if argv is None:
        argv = sys.argv[1:]
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)

    controller = InteractionController()
    engine = create_mindmap_window(controller)
    if not engine.rootObjects():
        logger.error("Failed to load %s", MINDMAP_QML_PATH)
        return 1

    if args.smoke:
        return 0

    return app.exec()
