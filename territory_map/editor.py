# editor.py
"""
Zone editor facade.

Composes the alliance registry, the zone store, the drawing state machine,
the coordinate mapper, the persistence repositories and the session codec,
and exposes the operations the UI calls. Every mutation is saved right away
and announced through Qt signals.

Boundary operations (finish zone, add alliance, import) never raise on bad
input: validation and parse errors become a ``noticeRaised`` message.
Destructive operations are two-phase: ``request_*`` returns a
:class:`PendingConfirmation`, then ``confirm(token)`` or ``cancel(token)``.
"""

import logging

from PyQt5.QtCore import QObject, pyqtSignal

from territory_map.alliances import AllianceRegistry, truncate_alliance_id
from territory_map.confirmation import ConfirmationGate
from territory_map.drawing import DrawingStateMachine
from territory_map.errors import ParseError, StorageError, ValidationError
from territory_map.geometry.coordinate_mapper import CoordinateMapper
from territory_map.palette import suggest_distinct_color
from territory_map.read_gate import LatestRequestGate
from territory_map.session_codec import export_document, import_document
from territory_map.zones import ZoneStore

logger = logging.getLogger(__name__)

IMPORT_OK_MESSAGE = "Imported zones successfully."
IMAGE_ERROR_MESSAGE = "Could not read image."


class ZoneEditor(QObject):
    """Single-session zone editor.

    Parameters
    ----------
    alliance_repository, zone_repository : JsonRecordRepository
        Loaded once at construction, saved after every mutation.
    zone_id_factory : callable, optional
        Zero-argument zone id generator (default: timestamp ids).
    alliance_id_strategy : callable, default truncate_alliance_id
        ``name -> id`` for new alliances.
    """

    zonesChanged = pyqtSignal()
    alliancesChanged = pyqtSignal()
    registryReplaced = pyqtSignal()
    modeChanged = pyqtSignal(str)
    selectionChanged = pyqtSignal(object)
    draftChanged = pyqtSignal()
    backgroundChanged = pyqtSignal(object)
    noticeRaised = pyqtSignal(str)

    def __init__(self, alliance_repository, zone_repository, zone_id_factory=None,
                 alliance_id_strategy=truncate_alliance_id, parent=None):
        super().__init__(parent)
        self.alliance_repository = alliance_repository
        self.zone_repository = zone_repository

        self.registry = AllianceRegistry(alliance_repository.load(), id_strategy=alliance_id_strategy)
        self.store = ZoneStore(zone_repository.load(), id_factory=zone_id_factory)
        self.machine = DrawingStateMachine(self.store)
        self.mapper = CoordinateMapper()
        self.confirmations = ConfirmationGate()
        self.image_reads = LatestRequestGate("image")
        self.import_reads = LatestRequestGate("import")
        self.background = None

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------
    @property
    def mode(self):
        return self.machine.mode

    @property
    def selected_index(self):
        return self.machine.selected_index

    @property
    def selected_zone(self):
        index = self.machine.selected_index
        return None if index is None else self.store[index]

    @property
    def draft_points(self):
        return list(self.machine.zone_points)

    @property
    def zones(self):
        return list(self.store)

    @property
    def alliances(self):
        return list(self.registry)

    def alliance_for(self, zone):
        """Alliance a zone is painted with, or None (unassigned or dangling)."""
        return self.registry.find(zone.alliance)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _save_zones(self):
        try:
            self.zone_repository.save(self.store)
        except StorageError as exc:
            logger.warning("Zones not saved: %s", exc)
        self.zonesChanged.emit()

    def _save_alliances(self):
        try:
            self.alliance_repository.save(self.registry)
        except StorageError as exc:
            logger.warning("Alliances not saved: %s", exc)
        self.alliancesChanged.emit()

    def _emit_state(self):
        self.modeChanged.emit(self.machine.mode)
        self.selectionChanged.emit(self.machine.selected_index)
        self.draftChanged.emit()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def start_drawing(self):
        self.machine.start()
        self._emit_state()

    def click_canvas(self, device_x, device_y):
        """Background click at a device position; a vertex only while drawing."""
        if not self.machine.is_drawing:
            return False
        return self.add_point(self.mapper.to_logical(device_x, device_y))

    def add_point(self, point):
        """Append a logical point to the in-progress polygon."""
        if not self.machine.add_point(point):
            return False
        self.draftChanged.emit()
        return True

    def finish_zone(self):
        """Commit the in-progress polygon; returns the new zone or None."""
        try:
            zone = self.machine.finish()
        except ValidationError as exc:
            logger.info("Finish rejected: %s", exc)
            self.noticeRaised.emit(str(exc))
            return None
        logger.info("Created %s (%s)", zone.name, zone.id)
        self._save_zones()
        self._emit_state()
        return zone

    def cancel_drawing(self):
        if self.machine.cancel():
            self._emit_state()

    # ------------------------------------------------------------------
    # Zones
    # ------------------------------------------------------------------
    def select_zone(self, index):
        if not self.machine.select(index):
            return False
        self.modeChanged.emit(self.machine.mode)
        self.selectionChanged.emit(index)
        return True

    def clear_selection(self):
        self.machine.clear_selection()
        self.modeChanged.emit(self.machine.mode)
        self.selectionChanged.emit(None)

    def assign_alliance(self, alliance_id):
        """Paint the selected zone; no-op without a selection."""
        index = self.machine.selected_index
        if index is None:
            return False
        self.store.assign_alliance(index, alliance_id)
        self._save_zones()
        return True

    def rename_zone(self, index, name):
        if not 0 <= index < len(self.store):
            return False
        self.store.rename(index, name)
        self._save_zones()
        return True

    def request_delete_zone(self, index=None):
        """Ask to delete a zone (default: the selected one).

        Returns None when there is nothing to delete.
        """
        if index is None:
            index = self.machine.selected_index
        if index is None or not 0 <= index < len(self.store):
            return None
        zone = self.store[index]
        return self.confirmations.request(
            "delete_zone", f"Delete {zone.name}?", lambda: self._delete_zone(zone.id)
        )

    def _delete_zone(self, zone_id):
        index = next((i for i, z in enumerate(self.store) if z.id == zone_id), None)
        if index is None:
            return None
        selected = self.machine.selected_index
        zone = self.store.delete(index)
        if selected == index:
            self.machine.clear_selection()
        elif selected is not None and selected > index:
            self.machine.selected_index = selected - 1
        self._save_zones()
        self._emit_state()
        return zone

    def request_clear_all(self):
        return self.confirmations.request("clear_all", "Clear all zones?", self._clear_all)

    def _clear_all(self):
        self.store.clear()
        self.machine.clear_selection()
        self._save_zones()
        self._emit_state()

    # ------------------------------------------------------------------
    # Alliances
    # ------------------------------------------------------------------
    def add_alliance(self, name, color):
        """Add an alliance; returns it, or None after a notice."""
        try:
            alliance = self.registry.add(name, color)
        except ValidationError as exc:
            self.noticeRaised.emit(str(exc))
            return None
        self._save_alliances()
        return alliance

    def update_alliance(self, index, field, value):
        """Edit name or color in place; False for an index out of range."""
        if not 0 <= index < len(self.registry):
            return False
        self.registry.update(index, field, value)
        self._save_alliances()
        if field == "color":
            self.zonesChanged.emit()
        return True

    def request_remove_alliance(self, index):
        if not 0 <= index < len(self.registry):
            return None
        alliance = self.registry[index]
        painted = len(self.store.referencing(alliance.id))
        message = (
            f"Remove alliance {alliance.name}? "
            f"This will not change existing zone alliance values ({painted} zone(s) keep {alliance.id!r})."
        )
        return self.confirmations.request(
            "remove_alliance", message, lambda: self._remove_alliance(alliance)
        )

    def _remove_alliance(self, alliance):
        for i, candidate in enumerate(self.registry):
            if candidate is alliance:
                self.registry.remove(i)
                self._save_alliances()
                self.zonesChanged.emit()
                return alliance
        return None

    def suggest_alliance_color(self):
        return suggest_distinct_color(a.color for a in self.registry)

    # ------------------------------------------------------------------
    # Confirmations
    # ------------------------------------------------------------------
    def confirm(self, token):
        return self.confirmations.confirm(token)

    def cancel(self, token):
        return self.confirmations.cancel(token)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------
    def export_session(self):
        return export_document(self.registry, self.store)

    def begin_import(self):
        return self.import_reads.issue()

    def complete_import(self, request_id, data):
        """Apply an import read if it is still the latest one."""
        return self.import_reads.complete(request_id, self._apply_import, data)

    def import_session(self, data):
        return self.complete_import(self.begin_import(), data)

    def _apply_import(self, data):
        try:
            alliances, zones = import_document(data)
        except (ParseError, ValidationError) as exc:
            logger.info("Import rejected: %s", exc)
            self.noticeRaised.emit(f"Invalid file: {exc}")
            return
        self.confirmations.cancel_all()
        if alliances is not None:
            self.registry.replace(alliances)
            self._save_alliances()
            self.registryReplaced.emit()
        self.store.replace(zones)
        self.machine.reset()
        self._save_zones()
        self._emit_state()
        logger.info("Imported %d zones", len(zones))
        self.noticeRaised.emit(IMPORT_OK_MESSAGE)

    # ------------------------------------------------------------------
    # Background image
    # ------------------------------------------------------------------
    def begin_background_load(self):
        return self.image_reads.issue()

    def complete_background_load(self, request_id, image):
        return self.image_reads.complete(request_id, self._apply_background, image)

    def _apply_background(self, image):
        if image is None or image.isNull():
            self.noticeRaised.emit(IMAGE_ERROR_MESSAGE)
            return
        self.background = image
        self.backgroundChanged.emit(image)
