"""Data types for MindMap scenes.

This module contains the core data structures shared by the scene model,
the interaction controller and the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import NODE_HEIGHT, NODE_WIDTH


@dataclass(frozen=True)
class ScenePoint:
    """A 2D point, either in screen space or in model space."""

    x: float
    y: float

    def __sub__(self, other: "ScenePoint") -> "ScenePoint":
        return ScenePoint(self.x - other.x, self.y - other.y)


@dataclass
class MindMapNode:
    """A labeled, colored box placed on the canvas."""

    id: int
    text: str
    x: float
    y: float
    color: str

    @property
    def width(self) -> float:
        return NODE_WIDTH

    @property
    def height(self) -> float:
        return NODE_HEIGHT

    @property
    def position(self) -> ScenePoint:
        return ScenePoint(self.x, self.y)

    def center(self) -> ScenePoint:
        return ScenePoint(self.x + NODE_WIDTH / 2, self.y + NODE_HEIGHT / 2)


@dataclass
class MindMapLink:
    """An anonymous connection between two node ids.

    Links only reference their endpoints; removing a node leaves the link
    in place, dangling.
    """

    source: int
    target: int


class InteractionState(Enum):
    """States of the pointer interaction machine."""

    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass
class DragSession:
    """Active drag: the node being moved and the pointer-to-node offset."""

    node_id: int
    offset: ScenePoint
