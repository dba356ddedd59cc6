"""
Graphics items for zones on the map canvas.

`ZonePolygonItem` draws a committed zone (filled with its alliance color,
labelled with its name); `DraftPolygonItem` draws the polygon being drawn
with a marker on each vertex.
"""
# zone_items.py

from PyQt5.QtCore import Qt, QPointF
from PyQt5.QtGui import QPen, QColor, QBrush, QPolygonF, QFont
from PyQt5.QtWidgets import (
    QGraphicsItemGroup, QGraphicsPolygonItem, QGraphicsEllipseItem, QGraphicsSimpleTextItem
)

from territory_map.config import (
    ZONE_OPACITY_ASSIGNED, ZONE_OPACITY_UNASSIGNED, ZONE_STROKE_COLOR, ZONE_STROKE_WIDTH,
    SELECTED_STROKE_COLOR, SELECTED_STROKE_WIDTH, ZONE_LABEL_FONT_SIZE, ZONE_LABEL_OUTLINE_WIDTH,
    DRAFT_FILL_RGBA, DRAFT_STROKE_COLOR, DRAFT_STROKE_WIDTH, VERTEX_RADIUS
)
from territory_map.palette import label_color


def to_polygon(points):
    return QPolygonF([QPointF(p.x, p.y) for p in points])


class ZonePolygonItem(QGraphicsItemGroup):
    """Committed zone: polygon plus name label.

    Parameters
    ----------
    zone : Zone
    zone_index : int
        Position of the zone in the store; clicks report it back.
    alliance : Alliance or None
        Resolved alliance (None when unassigned or the id is dangling).
    selected : bool
    """

    def __init__(self, zone, zone_index, alliance=None, selected=False, parent=None):
        super().__init__(parent)
        self.zone = zone
        self.zone_index = zone_index
        self.alliance = alliance
        self.is_selected_zone = selected

        self._create_polygon()
        self._create_label()

    def _create_polygon(self):
        self.polygon_item = QGraphicsPolygonItem(to_polygon(self.zone.points))

        if self.is_selected_zone:
            pen = QPen(QColor(SELECTED_STROKE_COLOR), SELECTED_STROKE_WIDTH)
        else:
            pen = QPen(QColor(ZONE_STROKE_COLOR), ZONE_STROKE_WIDTH)
        pen.setCosmetic(True)
        self.polygon_item.setPen(pen)

        if self.alliance is not None:
            self.polygon_item.setBrush(QBrush(QColor(self.alliance.color)))
            self.polygon_item.setOpacity(ZONE_OPACITY_ASSIGNED)
        else:
            # Transparent fill still catches clicks inside the shape
            self.polygon_item.setBrush(QBrush(QColor(255, 255, 255, 0)))
            self.polygon_item.setOpacity(ZONE_OPACITY_UNASSIGNED)
        self.addToGroup(self.polygon_item)

    def _create_label(self):
        anchor = self.zone.label_anchor
        if anchor is None:
            self.label_item = None
            return
        fill = label_color(self.alliance.color if self.alliance else None)
        outline = "#000000" if fill == "#ffffff" else "#ffffff"

        font = QFont("Arial")
        font.setPixelSize(ZONE_LABEL_FONT_SIZE)
        self.label_item = QGraphicsSimpleTextItem(self.zone.name)
        self.label_item.setFont(font)
        self.label_item.setBrush(QBrush(QColor(fill)))
        self.label_item.setPen(QPen(QColor(outline), ZONE_LABEL_OUTLINE_WIDTH))
        # Text baseline sits on the first vertex
        self.label_item.setPos(anchor.x, anchor.y - self.label_item.boundingRect().height())
        self.addToGroup(self.label_item)


class DraftPolygonItem(QGraphicsItemGroup):
    """In-progress polygon with a marker on every vertex."""

    def __init__(self, points, parent=None):
        super().__init__(parent)
        self.points = list(points)

        polygon = QGraphicsPolygonItem(to_polygon(self.points))
        pen = QPen(QColor(DRAFT_STROKE_COLOR), DRAFT_STROKE_WIDTH)
        pen.setCosmetic(True)
        polygon.setPen(pen)
        polygon.setBrush(QBrush(QColor(*DRAFT_FILL_RGBA)))
        self.addToGroup(polygon)

        for p in self.points:
            marker = QGraphicsEllipseItem(p.x - VERTEX_RADIUS, p.y - VERTEX_RADIUS,
                                          VERTEX_RADIUS * 2, VERTEX_RADIUS * 2)
            marker.setPen(QPen(Qt.black, 1))
            marker.setBrush(QBrush(Qt.white))
            self.addToGroup(marker)

        self.setAcceptedMouseButtons(Qt.NoButton)
