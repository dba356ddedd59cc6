# map_canvas.py
"""
Map canvas: the background image and the zones in logical space.

The scene is the fixed logical square; the view scales it to the widget
through the `CameraManager`. The canvas is the rendering surface of the
editor's `CoordinateMapper` (``screen_transform``), and routes viewport
clicks either to zone selection (click on a zone shape) or to the drawing
state machine (click on the background).
"""

from PyQt5.QtWidgets import (
    QWidget, QGraphicsScene, QGraphicsView, QVBoxLayout, QGraphicsRectItem, QGraphicsPixmapItem
)
from PyQt5.QtGui import QPen, QBrush, QColor, QPainter, QPixmap
from PyQt5.QtCore import Qt, QEvent, pyqtSignal

from territory_map.annotation.zone_items import ZonePolygonItem, DraftPolygonItem
from territory_map.camera.camera_manager import CameraManager
from territory_map.drawing import DRAWING
from territory_map.config import LOGICAL_SIZE, CANVAS_BACKGROUND, CANVAS_MIN_HEIGHT


class MapCanvas(QWidget):
    """Widget showing the map and zones of a `ZoneEditor`.

    Parameters
    ----------
    editor : ZoneEditor
        Source of zones/alliances/draft; receives clicks.
    parent : QWidget, optional
    """

    zoomChanged = pyqtSignal(float)

    def __init__(self, editor, parent=None):
        super().__init__(parent)
        self.editor = editor

        self.scene = QGraphicsScene(self)
        self.scene.setSceneRect(0, 0, LOGICAL_SIZE, LOGICAL_SIZE)
        self.view = QGraphicsView(self.scene)
        self.view.setRenderHints(QPainter.Antialiasing | QPainter.SmoothPixmapTransform)
        self.view.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.view.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.view.setBackgroundBrush(QBrush(QColor(CANVAS_BACKGROUND)))
        self.view.setMinimumHeight(CANVAS_MIN_HEIGHT)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.view)

        self.camera = CameraManager(self.view)

        # Background frame clips the image to the logical square
        self.frame = QGraphicsRectItem(0, 0, LOGICAL_SIZE, LOGICAL_SIZE)
        self.frame.setPen(QPen(Qt.NoPen))
        self.frame.setFlag(QGraphicsRectItem.ItemClipsChildrenToShape, True)
        self.frame.setZValue(-10)
        self.scene.addItem(self.frame)
        self.background_item = None

        self.zone_items = []
        self.draft_item = None

        self.view.viewport().installEventFilter(self)
        self.editor.mapper.attach(self)

        self.editor.zonesChanged.connect(self.draw_zones)
        self.editor.alliancesChanged.connect(self.draw_zones)
        self.editor.selectionChanged.connect(lambda _: self.draw_zones())
        self.editor.draftChanged.connect(self.draw_draft)
        self.editor.modeChanged.connect(self._on_mode_changed)
        self.editor.backgroundChanged.connect(self.set_background)

        if self.editor.background is not None:
            self.set_background(self.editor.background)
        self.draw_zones()
        self.draw_draft()

    # Coordinate mapper surface
    def screen_transform(self):
        """Logical-to-viewport transform of the view."""
        return self.view.viewportTransform()

    def set_background(self, image):
        """Cover the logical square with ``image`` (centered, cropped)."""
        if self.background_item is not None:
            self.scene.removeItem(self.background_item)
            self.background_item = None
        pixmap = QPixmap.fromImage(image)
        if pixmap.isNull():
            return
        scale = max(LOGICAL_SIZE / pixmap.width(), LOGICAL_SIZE / pixmap.height())
        item = QGraphicsPixmapItem(pixmap, self.frame)
        item.setTransformationMode(Qt.SmoothTransformation)
        item.setScale(scale)
        item.setPos((LOGICAL_SIZE - pixmap.width() * scale) / 2,
                    (LOGICAL_SIZE - pixmap.height() * scale) / 2)
        self.background_item = item

    def draw_zones(self):
        for item in self.zone_items:
            self.scene.removeItem(item)
        self.zone_items = []

        selected = self.editor.selected_index
        for idx, zone in enumerate(self.editor.zones):
            item = ZonePolygonItem(zone, idx, self.editor.alliance_for(zone), selected == idx)
            item.setZValue(10 + idx)
            self.scene.addItem(item)
            self.zone_items.append(item)

    def draw_draft(self):
        if self.draft_item is not None:
            self.scene.removeItem(self.draft_item)
            self.draft_item = None
        points = self.editor.draft_points
        if points:
            self.draft_item = DraftPolygonItem(points)
            self.draft_item.setZValue(1000)
            self.scene.addItem(self.draft_item)

    def _on_mode_changed(self, mode):
        self.view.viewport().setCursor(Qt.CrossCursor if mode == DRAWING else Qt.ArrowCursor)

    def zoom_in(self):
        self.zoomChanged.emit(self.camera.zoom_in())

    def zoom_out(self):
        self.zoomChanged.emit(self.camera.zoom_out())

    def reset_zoom(self):
        self.zoomChanged.emit(self.camera.reset_zoom())

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.camera.apply()

    def showEvent(self, event):
        super().showEvent(event)
        self.camera.apply()

    def find_zone_item_at(self, viewport_pos):
        """Top-most zone item under a viewport position, or None."""
        scene_pos = self.view.mapToScene(viewport_pos)
        for item in self.scene.items(scene_pos):
            parent = item
            while parent:
                if isinstance(parent, ZonePolygonItem):
                    return parent
                parent = parent.parentItem()
        return None

    def eventFilter(self, obj, event):
        if obj is not self.view.viewport():
            return False

        if event.type() == QEvent.MouseButtonPress and event.button() == Qt.LeftButton:
            zone_item = self.find_zone_item_at(event.pos())
            if zone_item is not None:
                self.editor.select_zone(zone_item.zone_index)
            else:
                self.editor.click_canvas(event.pos().x(), event.pos().y())
            return True

        if event.type() == QEvent.Wheel:
            if event.angleDelta().y() > 0:
                self.zoom_in()
            else:
                self.zoom_out()
            return True

        return False
