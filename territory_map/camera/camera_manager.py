# camera_manager.py
"""
Camera for the map view.

The base scale lays the logical square over the viewport with slice
semantics (cover, centered); zoom multiplies that base scale. The view is
always centered on ``center`` so a resize keeps the same area in sight.
"""

import numpy as np
from PyQt5.QtCore import QPointF
from PyQt5.QtGui import QTransform

from territory_map.config import LOGICAL_SIZE, ZOOM_IN_FACTOR, ZOOM_OUT_FACTOR, MIN_ZOOM, MAX_ZOOM
from territory_map.geometry.coordinate_mapper import slice_scale


class CameraManager:
    """Manage zoom and centering of the map view.

    Parameters
    ----------
    view : QGraphicsView
        View showing the logical scene.
    """

    def __init__(self, view):
        self.view = view
        self.zoom = 1.0
        self.center = QPointF(LOGICAL_SIZE / 2, LOGICAL_SIZE / 2)

    def apply(self):
        """Recompute the view transform for the current viewport size."""
        viewport = self.view.viewport().rect()
        scale = slice_scale(viewport.width(), viewport.height()) * self.zoom
        if scale <= 0:
            return
        self.view.setTransform(QTransform.fromScale(scale, scale))
        self.view.centerOn(self.center)

    def set_zoom(self, zoom):
        self.zoom = float(np.clip(zoom, MIN_ZOOM, MAX_ZOOM))
        self.apply()
        return self.zoom

    def zoom_in(self, factor=ZOOM_IN_FACTOR):
        return self.set_zoom(self.zoom * factor)

    def zoom_out(self, factor=ZOOM_OUT_FACTOR):
        return self.set_zoom(self.zoom * factor)

    def reset_zoom(self):
        """Back to the full map, centered."""
        self.center = QPointF(LOGICAL_SIZE / 2, LOGICAL_SIZE / 2)
        return self.set_zoom(1.0)
