"""Raster image export for MindMap scenes."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QByteArray, QBuffer, QIODevice, QObject, QStandardPaths, QUrl, Slot
from PySide6.QtGui import QImage

from .constants import EXPORT_FILENAME
from .controller import InteractionController
from .model import SceneModel
from .renderer import render_scene_image
from .transform import CoordinateTransform

logger = logging.getLogger(__name__)


def image_to_png_bytes(image: QImage) -> bytes:
    """Return PNG-encoded bytes for a QImage, or empty bytes on failure."""
    if image.isNull():
        return b""

    byte_array = QByteArray()
    buffer = QBuffer(byte_array)
    if not buffer.open(QIODevice.WriteOnly):
        return b""
    save_ok = image.save(buffer, "PNG")
    buffer.close()
    if not save_ok:
        return b""
    return bytes(byte_array)


def default_export_directory() -> Path:
    location = QStandardPaths.writableLocation(QStandardPaths.DownloadLocation)
    if location:
        return Path(location)
    return Path.cwd()


def resolve_export_path(target: str = "") -> Path:
    """Turn a directory, file path or file:// URL into the PNG destination."""
    if target.startswith("file://"):
        target = QUrl(target).toLocalFile()
    if not target:
        return default_export_directory() / EXPORT_FILENAME
    path = Path(target)
    if path.suffix.lower() == ".png":
        return path
    return path / EXPORT_FILENAME


def export_scene_png(
    scene: SceneModel,
    transform: CoordinateTransform,
    target: str = "",
) -> str:
    """Render the canvas at the current zoom and write it as a PNG file.

    Args:
        scene: Scene to render.
        transform: Zoom in effect on the canvas.
        target: Directory, ``.png`` file path or ``file://`` URL. Empty means
            the user's download directory.

    Returns:
        The written file path, or an empty string on failure.
    """
    width, height = scene.canvas_size
    image = render_scene_image(scene, transform, int(width), int(height))
    payload = image_to_png_bytes(image)
    if not payload:
        logger.warning("Could not encode canvas as PNG")
        return ""

    path = resolve_export_path(target)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    except OSError as exc:
        logger.warning("Could not write %s: %s", path, exc)
        return ""
    logger.debug("Exported canvas to %s", path)
    return str(path)


class ImageExporter(QObject):
    """Expose canvas image export to QML."""

    def __init__(self, controller: InteractionController):
        super().__init__()
        self._controller = controller

    @Slot(str, result=str)
    def saveAsImage(self, target: str = "") -> str:
        return export_scene_png(self._controller.scene, self._controller.transform, target)
