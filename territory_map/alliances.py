# alliances.py
"""
Alliance registry.

Ordered list of alliances with add/update/remove rules. Removing an alliance
never touches zones: zones painted with it keep the (now dangling) id.
"""

import logging

from territory_map.config import ALLIANCE_ID_LENGTH, DEFAULT_ALLIANCES
from territory_map.errors import ValidationError
from territory_map.models import Alliance

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "color")


def truncate_alliance_id(name):
    """Derive an alliance id from its (trimmed) name.

    Deterministic but collision-prone: "Alliance One" and "Alliance Two" both
    become "Allian". A colliding id makes zone lookups ambiguous; the first
    alliance in the registry wins.
    """
    return name[:ALLIANCE_ID_LENGTH]


def default_alliances():
    """Fresh copies of the built-in alliances."""
    return [Alliance.from_dict(a) for a in DEFAULT_ALLIANCES]


class AllianceRegistry:
    """Ordered, mutable collection of :class:`Alliance`.

    Parameters
    ----------
    alliances : iterable of Alliance, optional
        Initial content (kept in order).
    id_strategy : callable, default truncate_alliance_id
        ``name -> id`` used by :meth:`add`.
    """

    def __init__(self, alliances=None, id_strategy=truncate_alliance_id):
        self.alliances = list(alliances or [])
        self.id_strategy = id_strategy

    def __len__(self):
        return len(self.alliances)

    def __iter__(self):
        return iter(self.alliances)

    def __getitem__(self, index):
        return self.alliances[index]

    def find(self, alliance_id):
        """Return the first alliance with ``alliance_id`` or None."""
        if alliance_id is None:
            return None
        for alliance in self.alliances:
            if alliance.id == alliance_id:
                return alliance
        return None

    def add(self, name, color):
        """Append a new alliance.

        Raises
        ------
        ValidationError
            If ``name`` is empty once trimmed.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Alliance needs a name")
        alliance = Alliance(id=self.id_strategy(name), name=name, color=color)
        if self.find(alliance.id) is not None:
            logger.info("Alliance id %r already in use; lookups will hit the first one", alliance.id)
        self.alliances.append(alliance)
        logger.debug("Added alliance %s", alliance)
        return alliance

    def update(self, index, field, value):
        """Set ``name`` or ``color`` of the alliance at ``index`` (no format check)."""
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Unknown alliance field: {field}")
        alliance = self.alliances[index]
        setattr(alliance, field, value)
        return alliance

    def remove(self, index):
        """Remove and return the alliance at ``index``."""
        alliance = self.alliances.pop(index)
        logger.debug("Removed alliance %s", alliance.id)
        return alliance

    def replace(self, alliances):
        """Swap the whole content (import, reload)."""
        self.alliances = list(alliances)

    def to_list(self):
        return [a.to_dict() for a in self.alliances]
