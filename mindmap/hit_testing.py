"""Point-in-node queries over the scene's z-order."""

from __future__ import annotations

from typing import Optional, Sequence

from .types import MindMapNode, ScenePoint


def node_contains(node: MindMapNode, point: ScenePoint) -> bool:
    """Return True if ``point`` lies strictly inside the node's box."""
    return (
        node.x < point.x < node.x + node.width
        and node.y < point.y < node.y + node.height
    )


def find_topmost_node_at(
    nodes: Sequence[MindMapNode],
    point: ScenePoint,
) -> Optional[MindMapNode]:
    """Find the node drawn on top at a model-space point.

    Args:
        nodes: Nodes in insertion (render) order.
        point: Position in model space.

    Returns:
        The most recently inserted node containing the point, or None.
    """
    for node in reversed(nodes):
        if node_contains(node, point):
            return node
    return None
