"""MindMap diagram editor built with PySide6 and QML.

Nodes and links live in model space; pointer input and drawing go through
a single zoom transform so dragging stays aligned with the pointer at any
zoom level.
"""

from .bullets import BulletListModel
from .constants import CANVAS_HEIGHT, CANVAS_WIDTH, EXPORT_FILENAME, NODE_HEIGHT, NODE_WIDTH
from .controller import InteractionController
from .export import ImageExporter, export_scene_png
from .hit_testing import find_topmost_node_at
from .model import NO_NODE, SceneModel
from .renderer import SceneCanvas, draw_rounded_rect, render_scene, render_scene_image
from .transform import CoordinateTransform
from .types import DragSession, InteractionState, MindMapLink, MindMapNode, ScenePoint
from .ui import create_mindmap_window, main

__all__ = [
    "BulletListModel",
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "CoordinateTransform",
    "DragSession",
    "EXPORT_FILENAME",
    "ImageExporter",
    "InteractionController",
    "InteractionState",
    "MindMapLink",
    "MindMapNode",
    "NODE_HEIGHT",
    "NODE_WIDTH",
    "NO_NODE",
    "SceneCanvas",
    "SceneModel",
    "ScenePoint",
    "create_mindmap_window",
    "draw_rounded_rect",
    "export_scene_png",
    "find_topmost_node_at",
    "main",
    "render_scene",
    "render_scene_image",
]
