# coordinate_mapper.py
"""
Mapping between pointer (device) coordinates and logical canvas coordinates.

The rendering surface always shows the same fixed ``LOGICAL_SIZE`` square,
scaled to cover its widget ("xMidYMid slice": uniform scale, centered, the
overflowing axis cropped) and then zoomed/panned by the camera. Whatever the
window size, inverting the surface's current screen transform brings a click
back to the same logical point.
"""

import logging

from PyQt5.QtCore import QPointF
from PyQt5.QtGui import QTransform

from territory_map.config import LOGICAL_SIZE
from territory_map.models import Point

logger = logging.getLogger(__name__)


def slice_scale(width, height):
    """Scale that makes the logical square cover a ``width`` x ``height`` area."""
    if width <= 0 or height <= 0:
        return 0.0
    return max(width, height) / LOGICAL_SIZE


def slice_transform(width, height, zoom=1.0):
    """Logical-to-device transform of a surface of the given pixel size.

    Parameters
    ----------
    width, height : float
        Size of the surface in device pixels.
    zoom : float, default 1.0
        Extra camera zoom applied around the surface center.

    Returns
    -------
    QTransform
        Uniform scale plus the translation that centers the logical square.
    """
    scale = slice_scale(width, height) * zoom
    dx = (width - LOGICAL_SIZE * scale) / 2.0
    dy = (height - LOGICAL_SIZE * scale) / 2.0
    return QTransform(scale, 0.0, 0.0, scale, dx, dy)


class CoordinateMapper:
    """Convert device coordinates to logical points through a surface.

    Parameters
    ----------
    surface : object, optional
        Anything exposing ``screen_transform() -> QTransform`` (logical to
        device). The map canvas is the usual surface.
    """

    def __init__(self, surface=None):
        self.surface = surface

    def attach(self, surface):
        self.surface = surface

    def detach(self):
        self.surface = None

    @property
    def is_mounted(self):
        return self.surface is not None

    def to_logical(self, device_x, device_y):
        """Return the logical :class:`Point` under a device position.

        Returns None when no surface is mounted or its transform cannot be
        inverted (e.g. a zero-sized widget).
        """
        if self.surface is None:
            return None
        inverse, invertible = self.surface.screen_transform().inverted()
        if not invertible:
            logger.debug("Surface transform not invertible; click ignored")
            return None
        mapped = inverse.map(QPointF(device_x, device_y))
        return Point(mapped.x(), mapped.y())

    def to_device(self, point):
        """Return the ``(x, y)`` device position of a logical point, or None."""
        if self.surface is None:
            return None
        mapped = self.surface.screen_transform().map(QPointF(point.x, point.y))
        return mapped.x(), mapped.y()
