# main.py

import argparse
import logging
import sys

from PyQt5.QtWidgets import (
    QApplication, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel, QFileDialog, QMessageBox
)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QImage

from territory_map.annotation.alliance_panel import AlliancePanel
from territory_map.camera.camera_controls import ZoomControlWidget
from territory_map.config import (
    APP_NAME, EXPORT_FILE_NAME, LEFT_PANEL_SIZE, THEME, WINDOW_WIDTH, WINDOW_HEIGHT
)
from territory_map.drawing import DRAWING
from territory_map.editor import ZoneEditor
from territory_map.log import configure_logging
from territory_map.map_canvas import MapCanvas
from territory_map.persistence import AllianceRepository, ZoneRepository, QSettingsStore
from territory_map.widgets import create_tool_button

from qt_material import apply_stylesheet

logger = logging.getLogger(__name__)

DANGER_STYLE = "background-color: #ff4444; color: white;"


class MainWindow(QWidget):
    def __init__(self, editor):
        super().__init__()
        self.editor = editor
        self.setWindowTitle(APP_NAME)
        self.resize(WINDOW_WIDTH, WINDOW_HEIGHT)

        self._setup_ui()
        self._connect_signals()

        self.alliance_panel.set_alliances(self.editor.alliances)
        self.alliance_panel.reset_new_alliance(self.editor.suggest_alliance_color())
        self._update_mode_buttons(self.editor.mode)
        self._update_selection_label()

    def _setup_ui(self):
        """Tools panel on the left, map canvas on the right."""
        main_layout = QHBoxLayout(self)

        left_container = QWidget()
        left_container.setFixedWidth(LEFT_PANEL_SIZE)
        left_panel = QVBoxLayout(left_container)

        title = QLabel(APP_NAME)
        title.setStyleSheet("font-size: 16px; font-weight: bold;")
        title.setWordWrap(True)
        left_panel.addWidget(title)

        # === Map ===
        left_panel.addWidget(create_tool_button("Upload Map Image", self.upload_image))

        # === Drawing ===
        left_panel.addWidget(QLabel("────────────────"))
        left_panel.addWidget(QLabel("Zones"))
        draw_layout = QHBoxLayout()
        self.add_zone_btn = create_tool_button("Add Zone", lambda: self.editor.start_drawing(),
                                               "Click on the map to place vertices")
        self.finish_btn = create_tool_button("Finish", lambda: self.editor.finish_zone())
        self.cancel_btn = create_tool_button("Cancel", lambda: self.editor.cancel_drawing())
        draw_layout.addWidget(self.add_zone_btn)
        draw_layout.addWidget(self.finish_btn)
        draw_layout.addWidget(self.cancel_btn)
        left_panel.addLayout(draw_layout)

        # === Selection ===
        self.selection_label = QLabel()
        self.selection_label.setWordWrap(True)
        left_panel.addWidget(self.selection_label)
        select_layout = QHBoxLayout()
        self.delete_btn = create_tool_button("Delete", self.delete_selected_zone, style=DANGER_STYLE)
        self.clear_all_btn = create_tool_button("Clear All", self.clear_all_zones, style=DANGER_STYLE)
        select_layout.addWidget(self.delete_btn)
        select_layout.addWidget(self.clear_all_btn)
        left_panel.addLayout(select_layout)

        # === Alliances ===
        left_panel.addWidget(QLabel("────────────────"))
        self.alliance_panel = AlliancePanel()
        left_panel.addWidget(self.alliance_panel)

        # === Session file ===
        left_panel.addWidget(QLabel("────────────────"))
        io_layout = QHBoxLayout()
        io_layout.addWidget(create_tool_button("Export JSON", self.export_json))
        io_layout.addWidget(create_tool_button("Import JSON", self.import_json))
        left_panel.addLayout(io_layout)

        # === Zoom ===
        left_panel.addWidget(QLabel("────────────────"))
        self.zoom_controls = ZoomControlWidget()
        left_panel.addWidget(self.zoom_controls)

        left_panel.addStretch(1)

        self.canvas = MapCanvas(self.editor)

        main_layout.addWidget(left_container)
        main_layout.addWidget(self.canvas, 1)

    def _connect_signals(self):
        self.editor.modeChanged.connect(self._update_mode_buttons)
        self.editor.selectionChanged.connect(lambda _: self._update_selection_label())
        self.editor.zonesChanged.connect(self._update_selection_label)
        self.editor.alliancesChanged.connect(self._on_alliances_changed)
        self.editor.registryReplaced.connect(self._on_registry_replaced)
        self.editor.noticeRaised.connect(self.show_notice)

        self.alliance_panel.nameEdited.connect(
            lambda index, name: self.editor.update_alliance(index, "name", name))
        self.alliance_panel.colorEdited.connect(
            lambda index, color: self.editor.update_alliance(index, "color", color))
        self.alliance_panel.paintRequested.connect(self.editor.assign_alliance)
        self.alliance_panel.removeRequested.connect(self.remove_alliance)
        self.alliance_panel.addRequested.connect(self.add_alliance)

        self.zoom_controls.zoomInRequested.connect(self.canvas.zoom_in)
        self.zoom_controls.zoomOutRequested.connect(self.canvas.zoom_out)
        self.zoom_controls.resetZoomRequested.connect(self.canvas.reset_zoom)
        self.canvas.zoomChanged.connect(self.zoom_controls.set_zoom_level)

    # ------------------------------------------------------------------
    # State display
    # ------------------------------------------------------------------
    def _update_mode_buttons(self, mode):
        drawing = mode == DRAWING
        self.add_zone_btn.setEnabled(not drawing)
        self.finish_btn.setEnabled(drawing)
        self.cancel_btn.setEnabled(drawing)

    def _update_selection_label(self):
        zone = self.editor.selected_zone
        if zone is None:
            self.selection_label.setText("No zone selected")
            self.delete_btn.setEnabled(False)
            return
        alliance = self.editor.alliance_for(zone)
        owner = alliance.name if alliance else (zone.alliance or "unassigned")
        self.selection_label.setText(f"Selected: {zone.name} ({owner})")
        self.delete_btn.setEnabled(True)

    def _on_alliances_changed(self):
        # Rebuilding the rows would drop focus from a name field being typed in
        if len(self.alliance_panel.rows) != len(self.editor.alliances):
            self.alliance_panel.set_alliances(self.editor.alliances)
        self._update_selection_label()

    def _on_registry_replaced(self):
        self.alliance_panel.set_alliances(self.editor.alliances)
        self.alliance_panel.reset_new_alliance(self.editor.suggest_alliance_color())

    def show_notice(self, message):
        QMessageBox.information(self, APP_NAME, message)

    # ------------------------------------------------------------------
    # Confirmations
    # ------------------------------------------------------------------
    def _ask(self, pending):
        """Resolve a pending confirmation with a yes/no dialog."""
        if pending is None:
            return False
        answer = QMessageBox.question(self, APP_NAME, pending.message,
                                      QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
        if answer == QMessageBox.Yes:
            self.editor.confirm(pending.token)
            return True
        self.editor.cancel(pending.token)
        return False

    def delete_selected_zone(self):
        self._ask(self.editor.request_delete_zone())

    def clear_all_zones(self):
        self._ask(self.editor.request_clear_all())

    def remove_alliance(self, index):
        if self._ask(self.editor.request_remove_alliance(index)):
            self.alliance_panel.reset_new_alliance(self.editor.suggest_alliance_color())

    # ------------------------------------------------------------------
    # Alliances
    # ------------------------------------------------------------------
    def add_alliance(self, name, color):
        if self.editor.add_alliance(name, color) is not None:
            self.alliance_panel.reset_new_alliance(self.editor.suggest_alliance_color())

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------
    def upload_image(self):
        request_id = self.editor.begin_background_load()
        path, _ = QFileDialog.getOpenFileName(
            self, "Upload Map Image", "", "Images (*.png *.jpg *.jpeg *.bmp *.gif *.webp)")
        if not path:
            return
        self.editor.complete_background_load(request_id, QImage(path))

    def export_json(self):
        path, _ = QFileDialog.getSaveFileName(self, "Export JSON", EXPORT_FILE_NAME, "JSON (*.json)")
        if not path:
            return
        try:
            with open(path, "wb") as f:
                f.write(self.editor.export_session())
        except OSError as exc:
            logger.warning("Export to %s failed: %s", path, exc)
            self.show_notice(f"Could not write file: {exc}")
            return
        logger.info("Exported session to %s", path)

    def import_json(self):
        request_id = self.editor.begin_import()
        path, _ = QFileDialog.getOpenFileName(self, "Import JSON", "", "JSON (*.json)")
        if not path:
            return
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as exc:
            logger.warning("Import from %s failed: %s", path, exc)
            self.show_notice(f"Invalid file: {exc}")
            return
        self.editor.complete_import(request_id, data)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape and self.editor.mode == DRAWING:
            self.editor.cancel_drawing()
            return
        super().keyPressEvent(event)


def build_editor(store=None):
    """Editor over the persisted alliance and zone records."""
    store = store if store is not None else QSettingsStore()
    return ZoneEditor(AllianceRepository(store), ZoneRepository(store))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="territory-map", description=APP_NAME)
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging level (default: INFO)")
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    app = QApplication(sys.argv)
    apply_stylesheet(app, theme=THEME, invert_secondary=False)
    win = MainWindow(build_editor())
    win.show()
    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
