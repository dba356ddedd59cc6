# zones.py
"""
Zone store and zone id generation.
"""

import logging
import time

from territory_map.config import MIN_ZONE_POINTS
from territory_map.errors import ValidationError
from territory_map.models import Zone

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 1000


class ZoneIdFactory:
    """Timestamp-derived zone ids, strictly increasing.

    Two zones created within the same millisecond still get distinct ids:
    the millisecond counter is bumped past the last one issued.

    Parameters
    ----------
    clock : callable, default time.time
        Returns seconds since the epoch; injectable for tests.
    prefix : str, default "zone_"
    """

    def __init__(self, clock=time.time, prefix="zone_"):
        self.clock = clock
        self.prefix = prefix
        self._last = None

    def __call__(self):
        stamp = int(self.clock() * 1000)
        if self._last is not None and stamp <= self._last:
            stamp = self._last + 1
        self._last = stamp
        return f"{self.prefix}{stamp}"


class ZoneStore:
    """Ordered collection of :class:`Zone`.

    Parameters
    ----------
    zones : iterable of Zone, optional
    id_factory : callable, optional
        Zero-argument callable returning a new id (default :class:`ZoneIdFactory`).
    """

    def __init__(self, zones=None, id_factory=None):
        self.zones = list(zones or [])
        self.id_factory = id_factory or ZoneIdFactory()

    def __len__(self):
        return len(self.zones)

    def __iter__(self):
        return iter(self.zones)

    def __getitem__(self, index):
        return self.zones[index]

    def _new_id(self):
        used = {z.id for z in self.zones}
        for _ in range(MAX_ID_ATTEMPTS):
            zone_id = self.id_factory()
            if zone_id not in used:
                return zone_id
        raise ValidationError(f"No free zone id after {MAX_ID_ATTEMPTS} attempts (last: {zone_id})")

    def create(self, points):
        """Append a zone built from ``points`` and return it.

        The default name is "Zone N" with N = 1 + number of zones now.
        """
        points = tuple(points)
        if len(points) < MIN_ZONE_POINTS:
            raise ValidationError(f"A zone needs at least {MIN_ZONE_POINTS} points.")
        zone = Zone(
            id=self._new_id(),
            name=f"Zone {len(self.zones) + 1}",
            points=points,
            alliance=None,
        )
        self.zones.append(zone)
        logger.debug("Created %s with %d points", zone.id, len(points))
        return zone

    def rename(self, index, name):
        zone = self.zones[index]
        zone.name = name
        return zone

    def assign_alliance(self, index, alliance_id):
        """Paint the zone at ``index``; the id is not checked against any registry."""
        zone = self.zones[index]
        zone.alliance = alliance_id
        return zone

    def delete(self, index):
        zone = self.zones.pop(index)
        logger.debug("Deleted %s", zone.id)
        return zone

    def clear(self):
        self.zones = []

    def replace(self, zones):
        self.zones = list(zones)

    def referencing(self, alliance_id):
        """Zones currently painted with ``alliance_id``."""
        return [z for z in self.zones if z.alliance == alliance_id]

    def to_list(self):
        return [z.to_dict() for z in self.zones]
