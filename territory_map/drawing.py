# drawing.py
"""
Drawing state machine: turns canvas clicks into zones.

Modes
-----
- ``idle``: nothing in progress, no selection
- ``drawing``: background clicks append vertices to the in-progress list
- ``editing``: a zone is selected; clicks do not add vertices

Every transition is triggered by the user; there are no timers.
"""
# drawing.py

import logging

from territory_map.config import MIN_ZONE_POINTS
from territory_map.errors import ValidationError

logger = logging.getLogger(__name__)

IDLE = "idle"
DRAWING = "drawing"
EDITING = "editing"


class DrawingStateMachine:
    """Own the current mode, the in-progress vertices and the selection.

    Parameters
    ----------
    zone_store : ZoneStore
        Receives the zones produced by :meth:`finish`.
    """

    def __init__(self, zone_store):
        self.zone_store = zone_store
        self.mode = IDLE
        self.zone_points = []
        self.selected_index = None

    @property
    def is_drawing(self):
        return self.mode == DRAWING

    def start(self):
        """Enter drawing mode with an empty vertex list and no selection."""
        self.mode = DRAWING
        self.zone_points = []
        self.selected_index = None

    def add_point(self, point):
        """Append a vertex; only accepted while drawing.

        Returns
        -------
        bool
            True if the point was appended.
        """
        if self.mode != DRAWING or point is None:
            return False
        self.zone_points.append(point)
        return True

    def finish(self):
        """Close the in-progress polygon into a new zone.

        Returns
        -------
        Zone
            The zone appended to the store.

        Raises
        ------
        ValidationError
            Not drawing, or fewer than ``MIN_ZONE_POINTS`` vertices. The mode
            and the vertex list are left as they were.
        """
        if self.mode != DRAWING:
            raise ValidationError("Not drawing a zone.")
        if len(self.zone_points) < MIN_ZONE_POINTS:
            raise ValidationError(f"A zone needs at least {MIN_ZONE_POINTS} points.")
        zone = self.zone_store.create(self.zone_points)
        self.zone_points = []
        self.mode = IDLE
        return zone

    def cancel(self):
        """Drop the in-progress vertices without creating a zone."""
        if self.mode != DRAWING:
            return False
        self.zone_points = []
        self.mode = IDLE
        return True

    def select(self, index):
        """Select the zone at ``index`` (ignored while drawing)."""
        if self.mode == DRAWING:
            logger.debug("Selection of zone %s ignored while drawing", index)
            return False
        if not 0 <= index < len(self.zone_store):
            return False
        self.selected_index = index
        self.mode = EDITING
        return True

    def clear_selection(self):
        self.selected_index = None
        if self.mode == EDITING:
            self.mode = IDLE

    def reset(self):
        """Back to idle, dropping selection and vertices (store reload)."""
        self.mode = IDLE
        self.zone_points = []
        self.selected_index = None
