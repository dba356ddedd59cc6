"""
Alliance color palette helpers.

- suggest a color for a new alliance that stays distinguishable from the
  alliances already on the map (CIEDE2000 distance, LCH hue sweep)
- pick a readable label color (black or white) over a zone fill
"""
# palette.py
from typing import Iterable, Optional

from territory_map.config import DEFAULT_NEW_ALLIANCE_COLOR
from territory_map.utils.color_utils import (
    contrast_ratio,
    delta_e_lab,
    hex_to_lab,
    lch_to_hex,
    normalize_color,
)

LABEL_DARK = "#000000"
LABEL_LIGHT = "#ffffff"
HUE_STEPS = (60, 30, 15, 5)


def suggest_distinct_color(existing: Iterable[str], chroma: float = 60, luminance: float = 60,
                           threshold: float = 35) -> str:
    """Pick a color far (ΔE00 > threshold) from every ``existing`` color.

    Hues are swept with a shrinking step; the first step that yields
    candidates above ``threshold`` returns the farthest one. If none clears
    the threshold the overall farthest candidate is returned. Unparsable
    existing colors are ignored; with nothing to compare against the default
    new-alliance color is returned.
    """
    taken = [normalize_color(c) for c in existing]
    forbidden_labs = [hex_to_lab(c) for c in taken if c]
    if not forbidden_labs:
        return DEFAULT_NEW_ALLIANCE_COLOR

    best = None
    best_min_dist = -1.0
    for step in HUE_STEPS:
        candidates = [lch_to_hex(luminance, chroma, h) for h in range(0, 360, step)]
        scored = []
        for c in candidates:
            if not c:
                continue
            c_lab = hex_to_lab(c)
            min_dist = min(delta_e_lab(c_lab, ref_lab) for ref_lab in forbidden_labs)
            scored.append((min_dist, c))

        ok = [(d, c) for d, c in scored if d > threshold]
        if ok:
            ok.sort(reverse=True)
            return ok[0][1]

        if scored:
            top = max(scored)
            if top[0] > best_min_dist:
                best_min_dist, best = top

    return best or DEFAULT_NEW_ALLIANCE_COLOR


def label_color(fill: Optional[str]) -> str:
    """Black or white, whichever contrasts more with ``fill``.

    White for a missing or unparsable fill (unassigned zones sit on the map
    image).
    """
    fill_hex = normalize_color(fill) if fill else None
    if fill_hex is None:
        return LABEL_LIGHT
    if contrast_ratio(fill_hex, LABEL_DARK) >= contrast_ratio(fill_hex, LABEL_LIGHT):
        return LABEL_DARK
    return LABEL_LIGHT
