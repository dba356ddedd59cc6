"""
Tests for the ZoneEditor facade.

The editor runs over an in-memory store with deterministic zone ids and an
identity rendering surface, so device clicks land on the same logical point.
"""

import json

import pytest
from PyQt5.QtGui import QColor, QImage

from conftest import CounterIds, FixedSurface, draw_zone
from territory_map.config import ALLIANCES_KEY, ZONES_KEY
from territory_map.drawing import DRAWING, EDITING, IDLE
from territory_map.editor import IMAGE_ERROR_MESSAGE, IMPORT_OK_MESSAGE, ZoneEditor
from territory_map.errors import StorageError
from territory_map.geometry import slice_transform
from territory_map.models import Point
from territory_map.persistence import AllianceRepository, MemoryStore, ZoneRepository


def _stored(store, key):
    return json.loads(store.data[key])


class TestDrawing:

    def test_clicks_become_vertices_only_while_drawing(self, editor):
        assert editor.click_canvas(10, 10) is False
        editor.start_drawing()
        assert editor.click_canvas(10, 20) is True
        assert editor.draft_points == [Point(10, 20)]

    def test_clicks_are_mapped_to_logical_space(self, editor):
        editor.mapper.attach(FixedSurface(slice_transform(2000, 1000)))
        editor.start_drawing()
        editor.click_canvas(1000, 500)
        point = editor.draft_points[0]
        assert point.x == pytest.approx(500)
        assert point.y == pytest.approx(500)

    def test_unmounted_surface_drops_clicks(self, editor):
        editor.mapper.detach()
        editor.start_drawing()
        assert editor.click_canvas(10, 10) is False
        assert editor.draft_points == []

    def test_finish_creates_and_saves_zone(self, editor, store, triangle):
        zone = draw_zone(editor, triangle)

        assert zone.id == "zone_1"
        assert editor.mode == IDLE
        assert editor.zones == [zone]
        assert _stored(store, ZONES_KEY)[0]["name"] == "Zone 1"

    def test_finish_with_two_points_raises_notice(self, editor, store, notices):
        result = draw_zone(editor, [Point(0, 0), Point(1, 1)])

        assert result is None
        assert notices == ["A zone needs at least 3 points."]
        assert editor.mode == DRAWING
        assert len(editor.draft_points) == 2
        assert editor.zones == []
        assert ZONES_KEY not in store.data

    def test_cancel_drawing(self, editor, triangle):
        editor.start_drawing()
        for p in triangle:
            editor.add_point(p)
        editor.cancel_drawing()
        assert editor.mode == IDLE
        assert editor.draft_points == []
        assert editor.zones == []

    def test_signals_on_finish(self, editor, triangle):
        modes, zone_events = [], []
        editor.modeChanged.connect(modes.append)
        editor.zonesChanged.connect(lambda: zone_events.append(True))

        draw_zone(editor, triangle)

        assert modes == [DRAWING, IDLE]
        assert zone_events == [True]


class TestSelectionAndPainting:

    def test_select_and_paint(self, editor, store, triangle):
        draw_zone(editor, triangle)
        assert editor.select_zone(0) is True
        assert editor.mode == EDITING

        assert editor.assign_alliance("DRK!") is True
        assert editor.zones[0].alliance == "DRK!"
        assert editor.alliance_for(editor.zones[0]).color == "#22c55e"
        assert _stored(store, ZONES_KEY)[0]["alliance"] == "DRK!"

    def test_paint_without_selection_is_noop(self, editor, triangle):
        draw_zone(editor, triangle)
        assert editor.assign_alliance("UTD") is False
        assert editor.zones[0].alliance is None

    def test_select_ignored_while_drawing(self, editor, triangle):
        draw_zone(editor, triangle)
        editor.start_drawing()
        assert editor.select_zone(0) is False
        assert editor.selected_zone is None

    def test_rename_zone(self, editor, store, triangle):
        draw_zone(editor, triangle)
        assert editor.rename_zone(0, "Harbor") is True
        assert _stored(store, ZONES_KEY)[0]["name"] == "Harbor"

    def test_rename_out_of_range(self, editor, store, triangle):
        draw_zone(editor, triangle)
        before = store.data[ZONES_KEY]
        assert editor.rename_zone(5, "Harbor") is False
        assert editor.rename_zone(-1, "Harbor") is False
        assert store.data[ZONES_KEY] == before


class TestConfirmedDeletes:

    def test_declined_delete_changes_nothing(self, editor, store, triangle):
        draw_zone(editor, triangle)
        editor.select_zone(0)
        before = store.data[ZONES_KEY]

        pending = editor.request_delete_zone()
        assert pending.message == "Delete Zone 1?"
        editor.cancel(pending.token)

        assert len(editor.zones) == 1
        assert editor.selected_index == 0
        assert store.data[ZONES_KEY] == before

    def test_confirmed_delete_clears_selection(self, editor, store, triangle):
        draw_zone(editor, triangle)
        editor.select_zone(0)
        editor.confirm(editor.request_delete_zone().token)

        assert editor.zones == []
        assert editor.selected_index is None
        assert editor.mode == IDLE
        assert _stored(store, ZONES_KEY) == []

    def test_delete_other_zone_shifts_selection(self, editor, triangle):
        for _ in range(3):
            draw_zone(editor, triangle)
        editor.select_zone(2)
        editor.confirm(editor.request_delete_zone(0).token)

        assert [z.id for z in editor.zones] == ["zone_2", "zone_3"]
        assert editor.selected_zone.id == "zone_3"

    def test_delete_without_selection(self, editor, triangle):
        draw_zone(editor, triangle)
        assert editor.request_delete_zone() is None

    def test_clear_all(self, editor, store, triangle):
        draw_zone(editor, triangle)
        draw_zone(editor, triangle)

        pending = editor.request_clear_all()
        editor.cancel(pending.token)
        assert len(editor.zones) == 2

        editor.confirm(editor.request_clear_all().token)
        assert editor.zones == []
        assert _stored(store, ZONES_KEY) == []


class TestAlliances:

    def test_defaults_loaded(self, editor):
        assert [a.id for a in editor.alliances] == ["UTD", "LØV", "DRK!", "NW_", "CAP"]

    def test_add_alliance(self, editor, store):
        alliance = editor.add_alliance("  Ravens  ", "#123456")
        assert alliance.id == "Ravens"
        assert _stored(store, ALLIANCES_KEY)[-1] == {"id": "Ravens", "name": "Ravens", "color": "#123456"}

    def test_add_alliance_without_name(self, editor, notices):
        assert editor.add_alliance("   ", "#123456") is None
        assert notices == ["Alliance needs a name"]
        assert len(editor.alliances) == 5

    def test_recolor_redraws_zones(self, editor, store):
        zone_events = []
        editor.zonesChanged.connect(lambda: zone_events.append(True))
        assert editor.update_alliance(0, "color", "#000080") is True
        assert zone_events == [True]
        assert _stored(store, ALLIANCES_KEY)[0]["color"] == "#000080"

    def test_removal_does_not_cascade(self, editor, store, triangle):
        draw_zone(editor, triangle)
        editor.select_zone(0)
        editor.assign_alliance("UTD")

        pending = editor.request_remove_alliance(0)
        assert "1 zone(s) keep 'UTD'" in pending.message
        editor.confirm(pending.token)

        assert "UTD" not in [a.id for a in editor.alliances]
        assert editor.zones[0].alliance == "UTD"
        assert editor.alliance_for(editor.zones[0]) is None
        assert _stored(store, ZONES_KEY)[0]["alliance"] == "UTD"

    def test_declined_removal(self, editor, store):
        editor.add_alliance("Ravens", "#123456")
        before = store.data[ALLIANCES_KEY]
        editor.cancel(editor.request_remove_alliance(0).token)
        assert len(editor.alliances) == 6
        assert store.data[ALLIANCES_KEY] == before

    def test_update_out_of_range(self, editor, store):
        alliance_events = []
        editor.alliancesChanged.connect(lambda: alliance_events.append(True))
        assert editor.update_alliance(5, "name", "Ghost") is False
        assert editor.update_alliance(-1, "color", "#000000") is False
        assert alliance_events == []
        assert ALLIANCES_KEY not in store.data

    def test_remove_out_of_range(self, editor):
        assert editor.request_remove_alliance(42) is None

    def test_suggested_color_is_new(self, editor):
        assert editor.suggest_alliance_color() not in [a.color for a in editor.alliances]


class TestImportExport:

    def test_round_trip_into_fresh_editor(self, editor, triangle):
        editor.add_alliance("Ravens", "#123456")
        draw_zone(editor, triangle)
        editor.select_zone(0)
        editor.assign_alliance("Ravens")
        data = editor.export_session()

        other_store = MemoryStore()
        other = ZoneEditor(AllianceRepository(other_store), ZoneRepository(other_store),
                           zone_id_factory=CounterIds())
        other.import_session(data)

        assert other.alliances == editor.alliances
        assert other.zones == editor.zones
        assert _stored(other_store, ZONES_KEY)[0]["alliance"] == "Ravens"

    def test_import_resets_drawing_state(self, editor, notices, triangle):
        draw_zone(editor, triangle)
        data = editor.export_session()
        editor.start_drawing()
        editor.add_point(Point(1, 1))

        editor.import_session(data)

        assert editor.mode == IDLE
        assert editor.draft_points == []
        assert notices == [IMPORT_OK_MESSAGE]

    def test_registry_replacement_is_signalled(self, editor, triangle):
        replaced = []
        editor.registryReplaced.connect(lambda: replaced.append(True))
        data = editor.export_session()

        editor.import_session(b'{"zones": []}')
        assert replaced == []

        editor.import_session(data)
        assert replaced == [True]

    def test_import_without_alliances_keeps_registry(self, editor):
        editor.add_alliance("Ravens", "#123456")
        doc = {"zones": [{"points": [{"x": 0, "y": 0}, {"x": 5, "y": 0}, {"x": 5, "y": 5}]}]}
        editor.import_session(json.dumps(doc).encode("utf-8"))

        assert len(editor.alliances) == 6
        assert editor.zones[0].id == "zone_import_1"

    @pytest.mark.parametrize("data,reason", [
        (b'{"foo": 1}', "No zones found"),
        (b"not json", "Not valid JSON"),
        (b'{"zones": [{"points": []}]}', "at least 3 points"),
    ])
    def test_invalid_import_leaves_state(self, editor, store, notices, triangle, data, reason):
        draw_zone(editor, triangle)
        snapshot = dict(store.data)

        editor.import_session(data)

        assert len(notices) == 1
        assert notices[0].startswith("Invalid file: ")
        assert reason in notices[0]
        assert len(editor.zones) == 1
        assert store.data == snapshot

    def test_import_drops_pending_confirmations(self, editor, triangle):
        draw_zone(editor, triangle)
        data = editor.export_session()
        editor.select_zone(0)
        pending = editor.request_delete_zone()

        editor.import_session(data)

        assert not editor.confirmations.is_pending(pending.token)

    def test_stale_import_dropped(self, editor, triangle):
        draw_zone(editor, triangle)
        first = editor.begin_import()
        second = editor.begin_import()

        assert editor.complete_import(second, b'{"zones": []}') is True
        assert editor.complete_import(first, editor.export_session()) is False
        assert editor.zones == []


class TestBackground:

    def test_latest_image_wins(self, editor):
        received = []
        editor.backgroundChanged.connect(received.append)
        old = QImage(4, 4, QImage.Format_RGB32)
        new = QImage(8, 8, QImage.Format_RGB32)
        new.fill(QColor("#336699"))

        first = editor.begin_background_load()
        second = editor.begin_background_load()
        editor.complete_background_load(second, new)
        editor.complete_background_load(first, old)

        assert editor.background is new
        assert received == [new]

    def test_unreadable_image(self, editor, notices):
        request_id = editor.begin_background_load()
        editor.complete_background_load(request_id, QImage())
        assert notices == [IMAGE_ERROR_MESSAGE]
        assert editor.background is None


class TestStorageFailure:

    def test_write_failure_is_logged_not_raised(self, editor, triangle, monkeypatch, caplog):
        def fail(items):
            raise StorageError("quota exceeded")

        monkeypatch.setattr(editor.zone_repository, "save", fail)
        zone = draw_zone(editor, triangle)

        assert zone is not None
        assert editor.zones == [zone]
        assert "quota exceeded" in caplog.text
