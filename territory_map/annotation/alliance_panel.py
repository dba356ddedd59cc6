"""
Alliance manager panel.

One row per alliance (name field, color button, Paint, Remove) plus a row to
add a new alliance. The panel only emits signals; the main window forwards
them to the `ZoneEditor`.
"""
# alliance_panel.py

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLineEdit, QPushButton, QScrollArea, QGroupBox
)
from PyQt5.QtCore import pyqtSignal

from territory_map.widgets import ColorButton


class AllianceRow(QWidget):
    """Editable row for one alliance."""

    nameEdited = pyqtSignal(int, str)
    colorEdited = pyqtSignal(int, str)
    paintRequested = pyqtSignal(str)
    removeRequested = pyqtSignal(int)

    def __init__(self, index, alliance, parent=None):
        super().__init__(parent)
        self.index = index
        self.alliance_id = alliance.id

        layout = QHBoxLayout(self)
        layout.setContentsMargins(2, 2, 2, 2)

        self.name_edit = QLineEdit(alliance.name)
        self.name_edit.setFixedWidth(90)
        self.name_edit.textEdited.connect(lambda text: self.nameEdited.emit(self.index, text))
        layout.addWidget(self.name_edit)

        self.color_btn = ColorButton(alliance.color)
        self.color_btn.colorChanged.connect(lambda color: self.colorEdited.emit(self.index, color))
        layout.addWidget(self.color_btn)

        layout.addStretch()

        paint_btn = QPushButton("Paint")
        paint_btn.setToolTip("Paint the selected zone with this alliance")
        paint_btn.clicked.connect(lambda: self.paintRequested.emit(self.alliance_id))
        layout.addWidget(paint_btn)

        remove_btn = QPushButton("Remove")
        remove_btn.setStyleSheet("background-color: #ff4444; color: white;")
        remove_btn.clicked.connect(lambda: self.removeRequested.emit(self.index))
        layout.addWidget(remove_btn)


class AlliancePanel(QWidget):
    """List of alliances with add/rename/recolor/paint/remove controls."""

    nameEdited = pyqtSignal(int, str)
    colorEdited = pyqtSignal(int, str)
    paintRequested = pyqtSignal(str)
    removeRequested = pyqtSignal(int)
    addRequested = pyqtSignal(str, str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.rows = []
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        group = QGroupBox("Alliances")
        group_layout = QVBoxLayout(group)

        self.rows_container = QWidget()
        self.rows_layout = QVBoxLayout(self.rows_container)
        self.rows_layout.setContentsMargins(0, 0, 0, 0)
        self.rows_layout.setSpacing(4)
        self.rows_layout.addStretch()

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setMaximumHeight(180)
        scroll.setWidget(self.rows_container)
        group_layout.addWidget(scroll)

        # === Add alliance ===
        self.new_name_edit = QLineEdit()
        self.new_name_edit.setPlaceholderText("Alliance name")
        group_layout.addWidget(self.new_name_edit)

        add_layout = QHBoxLayout()
        self.new_color_btn = ColorButton()
        add_layout.addWidget(self.new_color_btn)
        add_btn = QPushButton("Add Alliance")
        add_btn.clicked.connect(self._on_add_clicked)
        add_layout.addWidget(add_btn)
        add_layout.addStretch()
        group_layout.addLayout(add_layout)

        layout.addWidget(group)

    def set_alliances(self, alliances):
        """Rebuild the rows from a list of alliances."""
        for row in self.rows:
            self.rows_layout.removeWidget(row)
            row.deleteLater()
        self.rows = []

        for idx, alliance in enumerate(alliances):
            row = AllianceRow(idx, alliance)
            row.nameEdited.connect(self.nameEdited)
            row.colorEdited.connect(self.colorEdited)
            row.paintRequested.connect(self.paintRequested)
            row.removeRequested.connect(self.removeRequested)
            self.rows_layout.insertWidget(self.rows_layout.count() - 1, row)
            self.rows.append(row)

    def reset_new_alliance(self, suggested_color):
        self.new_name_edit.clear()
        self.new_color_btn.update_color(suggested_color)

    def _on_add_clicked(self):
        self.addRequested.emit(self.new_name_edit.text(), self.new_color_btn.get_color())
