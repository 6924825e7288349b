"""QML UI definition for MindMap."""

from __future__ import annotations

from pathlib import Path

QML_DIR = Path(__file__).with_name("qml_ui")
MINDMAP_QML_PATH = QML_DIR / "MindMapWindow.qml"

QML_MODULE_NAME = "MindMap"
QML_MODULE_VERSION = (1, 0)


def load_mindmap_qml() -> str:
    """Return the MindMap window QML source as a string."""
    return MINDMAP_QML_PATH.read_text(encoding="utf-8")


__all__ = [
    "MINDMAP_QML_PATH",
    "QML_DIR",
    "QML_MODULE_NAME",
    "QML_MODULE_VERSION",
    "load_mindmap_qml",
]
