"""
Zoom buttons for the tools panel.

The widget only emits requests; the main window forwards them to the map
canvas and feeds the resulting zoom level back through `set_zoom_level`.
"""
# camera_controls.py

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QPushButton, QLabel
from PyQt5.QtCore import pyqtSignal


class ZoomControlWidget(QWidget):
    """Zoom out, zoom in, reset and the current zoom factor."""

    zoomInRequested = pyqtSignal()
    zoomOutRequested = pyqtSignal()
    resetZoomRequested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)

        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(3)
        row.addWidget(QLabel("Map zoom"))

        for text, tip, signal in (
            ("-", "Zoom out of the map", self.zoomOutRequested),
            ("+", "Zoom into the map", self.zoomInRequested),
            ("Reset", "Show the whole map", self.resetZoomRequested),
        ):
            button = QPushButton(text)
            button.setToolTip(tip)
            if len(text) == 1:
                button.setFixedWidth(28)
            button.clicked.connect(signal)
            row.addWidget(button)

        self.zoom_label = QLabel()
        self.zoom_label.setFixedWidth(44)
        row.addWidget(self.zoom_label)
        row.addStretch()

        self.set_zoom_level(1.0)

    def set_zoom_level(self, zoom):
        self.zoom_label.setText(f"{zoom:.2f}x")
