# persistence.py
"""
Persistence adapter.

Two JSON-encoded records live in a key-value store under fixed keys: the
alliance list and the zone list. The editor depends on the repositories, the
repositories on a :class:`KeyValueStore`; the desktop app plugs in
:class:`QSettingsStore`, tests plug in :class:`MemoryStore`.

Reading never fails: a missing or unreadable record falls back to the
built-in default.
"""

import json
import logging
from abc import ABC, abstractmethod

from PyQt5.QtCore import QSettings

from territory_map.alliances import default_alliances
from territory_map.config import (
    ALLIANCES_KEY,
    SETTINGS_APPLICATION,
    SETTINGS_ORGANIZATION,
    ZONES_KEY,
)
from territory_map.errors import StorageError
from territory_map.models import Alliance, Zone

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal string key-value interface."""

    @abstractmethod
    def get(self, key):
        """Stored text for ``key``, or None."""

    @abstractmethod
    def set(self, key, value):
        """Store text under ``key``; raise :class:`StorageError` on failure."""


class MemoryStore(KeyValueStore):
    """Dictionary-backed store."""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class QSettingsStore(KeyValueStore):
    """Store backed by ``QSettings``.

    Parameters
    ----------
    path : str, optional
        INI file to use instead of the platform's native settings location.
    """

    def __init__(self, path=None):
        if path:
            self.settings = QSettings(str(path), QSettings.IniFormat)
        else:
            self.settings = QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)

    def get(self, key):
        value = self.settings.value(key)
        return value if isinstance(value, str) else None

    def set(self, key, value):
        self.settings.setValue(key, value)
        self.settings.sync()
        if self.settings.status() != QSettings.NoError:
            raise StorageError(f"Could not write {key} to {self.settings.fileName()}")


class JsonRecordRepository:
    """A list of model objects stored as one JSON text under ``key``."""

    key = None
    model = None

    def __init__(self, store):
        self.store = store

    def default(self):
        return []

    def load(self):
        raw = self.store.get(self.key)
        if raw is None:
            return self.default()
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise TypeError(f"expected a list, got {type(items).__name__}")
            return [self.model.from_dict(item) for item in items]
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            logger.info("Record %s unreadable (%s); using default", self.key, exc)
            return self.default()

    def save(self, items):
        payload = json.dumps([item.to_dict() for item in items], ensure_ascii=False)
        try:
            self.store.set(self.key, payload)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(f"Could not write {self.key}: {exc}") from exc


class AllianceRepository(JsonRecordRepository):
    key = ALLIANCES_KEY
    model = Alliance

    def default(self):
        return default_alliances()


class ZoneRepository(JsonRecordRepository):
    key = ZONES_KEY
    model = Zone
