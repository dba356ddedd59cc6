# config.py
"""
Static configuration for the territory map editor.

All zone geometry lives in a fixed logical square of ``LOGICAL_SIZE`` units,
whatever the size of the window the map is displayed in.
"""

APP_NAME = "S147 Territory Management"

# Logical canvas
LOGICAL_SIZE = 1000.0
MIN_ZONE_POINTS = 3
ALLIANCE_ID_LENGTH = 6

# Persistence (QSettings organization/application and record keys)
SETTINGS_ORGANIZATION = "S147"
SETTINGS_APPLICATION = "TerritoryMap"
ALLIANCES_KEY = "s147_alliances_v1"
ZONES_KEY = "s147_zones_v1"

DEFAULT_ALLIANCES = [
    {"id": "UTD", "name": "UTD", "color": "#e02424"},
    {"id": "LØV", "name": "LØV", "color": "#ff69b4"},
    {"id": "DRK!", "name": "DRK!", "color": "#22c55e"},
    {"id": "NW_", "name": "NW_", "color": "#14b8a6"},
    {"id": "CAP", "name": "CAP", "color": "#9ca3af"},
]

# Import / export
EXPORT_FILE_NAME = "s147_map_export.json"
EXPORT_INDENT = 2

# Alliance editing
DEFAULT_NEW_ALLIANCE_COLOR = "#ffffff"

# Zone rendering
ZONE_OPACITY_ASSIGNED = 0.7
ZONE_OPACITY_UNASSIGNED = 0.35
ZONE_STROKE_COLOR = "#000000"
ZONE_STROKE_WIDTH = 1
SELECTED_STROKE_COLOR = "#ffffff"
SELECTED_STROKE_WIDTH = 3
ZONE_LABEL_FONT_SIZE = 20
ZONE_LABEL_OUTLINE_WIDTH = 0.5

# In-progress polygon rendering
DRAFT_FILL_RGBA = (100, 100, 255, 64)
DRAFT_STROKE_COLOR = "#66a3ff"
DRAFT_STROKE_WIDTH = 2
VERTEX_RADIUS = 4

# Canvas / camera
CANVAS_BACKGROUND = "#000000"
CANVAS_MIN_HEIGHT = 720
LEFT_PANEL_SIZE = 320
ZOOM_IN_FACTOR = 1.2
ZOOM_OUT_FACTOR = 0.83
MIN_ZOOM = 0.25
MAX_ZOOM = 8.0

# Window
WINDOW_WIDTH = 1400
WINDOW_HEIGHT = 900
THEME = "dark_blue.xml"
