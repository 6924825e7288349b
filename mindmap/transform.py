"""Screen/model coordinate mapping under a scalar zoom factor."""

from __future__ import annotations

import math

from .types import ScenePoint


class CoordinateTransform:
    """Map pointer coordinates to model space and back.

    Zoom is applied exactly once: when pointer input enters the model and
    when model geometry is drawn. Stored node positions never change with it.
    """

    def __init__(self, zoom: float = 1.0, origin: ScenePoint = ScenePoint(0.0, 0.0)):
        self._zoom = 1.0
        self.origin = origin
        self.set_zoom(zoom)

    @property
    def zoom(self) -> float:
        return self._zoom

    def set_zoom(self, value: float) -> bool:
        if not math.isfinite(value) or value <= 0:
            return False
        self._zoom = float(value)
        return True

    def zoom_by(self, factor: float) -> bool:
        """Compound the current zoom level by ``factor``."""
        if not math.isfinite(factor) or factor <= 0:
            return False
        return self.set_zoom(self._zoom * factor)

    def to_model_space(self, x: float, y: float) -> ScenePoint:
        return ScenePoint(
            (x - self.origin.x) / self._zoom,
            (y - self.origin.y) / self._zoom,
        )

    def to_screen_space(self, point: ScenePoint) -> ScenePoint:
        return ScenePoint(
            point.x * self._zoom + self.origin.x,
            point.y * self._zoom + self.origin.y,
        )

    def scale_length(self, value: float) -> float:
        return value * self._zoom
