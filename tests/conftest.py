"""Shared fixtures: offscreen Qt application, in-memory stores, editor."""

import itertools
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt5.QtGui import QTransform
from PyQt5.QtWidgets import QApplication

from territory_map.editor import ZoneEditor
from territory_map.models import Point
from territory_map.persistence import AllianceRepository, MemoryStore, ZoneRepository


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


class CounterIds:
    """Deterministic zone ids: zone_1, zone_2, ..."""

    def __init__(self, prefix="zone_"):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self):
        return f"{self.prefix}{next(self._counter)}"


class FixedSurface:
    """Rendering surface with a settable logical-to-device transform."""

    def __init__(self, transform=None):
        self.transform = transform if transform is not None else QTransform()

    def screen_transform(self):
        return self.transform


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def editor(store):
    ed = ZoneEditor(AllianceRepository(store), ZoneRepository(store), zone_id_factory=CounterIds())
    ed.mapper.attach(FixedSurface())
    return ed


@pytest.fixture
def notices(editor):
    received = []
    editor.noticeRaised.connect(received.append)
    return received


@pytest.fixture
def triangle():
    return [Point(100, 100), Point(200, 100), Point(150, 200)]


def draw_zone(editor, points):
    """Draw and finish a zone through the editor; returns the new zone."""
    editor.start_drawing()
    for p in points:
        editor.add_point(p)
    return editor.finish_zone()
