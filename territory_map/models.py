# models.py
"""
Data model: points, alliances and zones.

Plain dataclasses with ``to_dict``/``from_dict`` helpers that produce and read
the JSON shapes used both by the persisted records and by the session
document.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Point:
    """A point in logical canvas space (0..1000 on both axes, not clamped)."""

    x: float
    y: float

    def to_dict(self):
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data):
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass
class Alliance:
    """Named, colored faction a zone can be painted with.

    ``id`` is the foreign key zones refer to; ``name`` and ``color`` can be
    edited in place.
    """

    id: str
    name: str
    color: str

    def to_dict(self):
        return {"id": self.id, "name": self.name, "color": self.color}

    @classmethod
    def from_dict(cls, data):
        return cls(id=data["id"], name=data["name"], color=data["color"])


@dataclass
class Zone:
    """User-drawn closed polygon.

    ``points`` is a tuple and never changes once the zone exists; only
    ``name`` and ``alliance`` are edited after creation.
    """

    id: str
    name: str
    points: Tuple[Point, ...] = field(default_factory=tuple)
    alliance: Optional[str] = None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "points": [p.to_dict() for p in self.points],
            "alliance": self.alliance,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data["id"],
            name=data["name"],
            points=tuple(Point.from_dict(p) for p in data["points"]),
            alliance=data.get("alliance"),
        )

    @property
    def label_anchor(self):
        """Point the zone name is drawn at (first vertex)."""
        return self.points[0] if self.points else None
