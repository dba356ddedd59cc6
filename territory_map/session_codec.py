# session_codec.py
"""
Import/export of the session document.

Document shape::

    {
      "meta": {"app": "<name>", "alliances": [{"id", "name", "color"}, ...]},
      "zones": [{"id", "name", "points": [{"x", "y"}, ...], "alliance": id|null}, ...]
    }

Export always writes ``meta.app``. Import only requires ``zones``; when
``meta.alliances`` is present it replaces the alliance registry wholesale.
Every imported entry is checked before anything is returned, so a rejected
document never partially applies.
"""

import json
import numbers

import numpy as np

from territory_map.config import APP_NAME, EXPORT_INDENT, MIN_ZONE_POINTS
from territory_map.errors import ParseError, ValidationError
from territory_map.models import Alliance, Point, Zone


def export_document(alliances, zones, app_name=APP_NAME):
    """Serialize alliances and zones to UTF-8 JSON bytes."""
    payload = {
        "meta": {"app": app_name, "alliances": [a.to_dict() for a in alliances]},
        "zones": [z.to_dict() for z in zones],
    }
    return json.dumps(payload, indent=EXPORT_INDENT, ensure_ascii=False).encode("utf-8")


def parse_document(data):
    """Decode ``data`` (bytes or str) into a JSON value.

    Raises
    ------
    ParseError
        If ``data`` is not UTF-8 or not valid JSON.
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Not UTF-8 text: {exc}") from exc
    try:
        return json.loads(data)
    except ValueError as exc:
        raise ParseError(f"Not valid JSON: {exc}") from exc


def import_document(data):
    """Validate a session document.

    Returns
    -------
    tuple[list[Alliance] | None, list[Zone]]
        Alliances (None when the document carries none) and zones.

    Raises
    ------
    ParseError
        Malformed JSON.
    ValidationError
        No ``zones`` field, or an entry with the wrong shape.
    """
    doc = parse_document(data)
    if not isinstance(doc, dict) or doc.get("zones") is None:
        raise ValidationError("No zones found")

    raw_zones = doc["zones"]
    if not isinstance(raw_zones, list):
        raise ValidationError("zones must be a list")
    zones = [_read_zone(i, item) for i, item in enumerate(raw_zones)]

    alliances = None
    meta = doc.get("meta")
    if isinstance(meta, dict) and meta.get("alliances") is not None:
        raw_alliances = meta["alliances"]
        if not isinstance(raw_alliances, list):
            raise ValidationError("meta.alliances must be a list")
        alliances = [_read_alliance(i, item) for i, item in enumerate(raw_alliances)]

    return alliances, zones


def _read_alliance(index, item):
    if not isinstance(item, dict):
        raise ValidationError(f"Alliance {index + 1} is not an object")
    for key in ("id", "name", "color"):
        if not isinstance(item.get(key), str):
            raise ValidationError(f"Alliance {index + 1} has no valid {key!r}")
    return Alliance.from_dict(item)


def _read_zone(index, item):
    label = f"Zone entry {index + 1}"
    if not isinstance(item, dict):
        raise ValidationError(f"{label} is not an object")

    zone_id = item.get("id", f"zone_import_{index + 1}")
    name = item.get("name", f"Zone {index + 1}")
    alliance = item.get("alliance")
    if not isinstance(zone_id, str) or not isinstance(name, str):
        raise ValidationError(f"{label} has a non-text id or name")
    if alliance is not None and not isinstance(alliance, str):
        raise ValidationError(f"{label} has an invalid alliance")

    raw_points = item.get("points")
    if not isinstance(raw_points, list) or len(raw_points) < MIN_ZONE_POINTS:
        raise ValidationError(f"{label} needs at least {MIN_ZONE_POINTS} points")
    points = tuple(_read_point(label, p) for p in raw_points)

    return Zone(id=zone_id, name=name, points=points, alliance=alliance)


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _read_point(label, item):
    if not isinstance(item, dict):
        raise ValidationError(f"{label} has a point that is not an object")
    x, y = item.get("x"), item.get("y")
    if not (_is_number(x) and _is_number(y)) or not np.isfinite([x, y]).all():
        raise ValidationError(f"{label} has a point without numeric x/y")
    return Point(float(x), float(y))
