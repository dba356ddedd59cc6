# widgets.py
"""
Small reusable widgets for the tools panel.
"""

from PyQt5.QtWidgets import QPushButton, QColorDialog
from PyQt5.QtCore import pyqtSignal
from PyQt5.QtGui import QColor

from territory_map.config import DEFAULT_NEW_ALLIANCE_COLOR

SWATCH_STYLE = """
    QPushButton {{
        background-color: {color};
        border: 1px solid #222;
        border-radius: 3px;
    }}
    QPushButton:hover {{
        border: 1px solid #aaa;
    }}
"""


class ColorButton(QPushButton):
    """Color swatch; clicking it opens a color picker.

    ``colorChanged`` is emitted only when the user picks a color, never on
    programmatic updates through :meth:`update_color`.
    """

    colorChanged = pyqtSignal(str)

    def __init__(self, color=DEFAULT_NEW_ALLIANCE_COLOR, parent=None):
        super().__init__(parent)
        self.setFixedSize(36, 24)
        self.update_color(color)
        self.clicked.connect(self.pick_color)

    def pick_color(self):
        chosen = QColorDialog.getColor(QColor(self._color), self, "Alliance color")
        if not chosen.isValid():
            return
        self.update_color(chosen.name())
        self.colorChanged.emit(self._color)

    def update_color(self, color):
        self._color = color
        self.setToolTip(color)
        self.setStyleSheet(SWATCH_STYLE.format(color=color))

    def get_color(self):
        return self._color


def create_tool_button(label, callback, tooltip=None, style=None):
    """Tools panel button wired to ``callback``."""
    button = QPushButton(label)
    if tooltip:
        button.setToolTip(tooltip)
    if style:
        button.setStyleSheet(style)
    button.clicked.connect(callback)
    return button
