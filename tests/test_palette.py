"""
Tests for color suggestion and label contrast.
"""

import pytest

from territory_map.alliances import default_alliances
from territory_map.config import DEFAULT_NEW_ALLIANCE_COLOR
from territory_map.palette import label_color, suggest_distinct_color
from territory_map.utils.color_utils import (
    contrast_ratio,
    delta_e_lab,
    hex_to_lab,
    hex_to_rgb,
    normalize_color,
)


class TestColorUtils:

    @pytest.mark.parametrize("raw,expected", [
        ("#E02424", "#e02424"),
        ("#fff", "#ffffff"),
        ("red", "#ff0000"),
        ("not-a-color", None),
        (None, None),
    ])
    def test_normalize_color(self, raw, expected):
        assert normalize_color(raw) == expected

    def test_hex_to_rgb_rejects_short_hex(self):
        with pytest.raises(ValueError):
            hex_to_rgb("#fff")

    def test_contrast_extremes(self):
        assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
        assert contrast_ratio("#123456", "#123456") == pytest.approx(1.0)

    def test_delta_e_identical_is_zero(self):
        lab = hex_to_lab("#22c55e")
        assert delta_e_lab(lab, lab) == pytest.approx(0.0)
        assert delta_e_lab(lab, hex_to_lab("#e02424")) > 30


class TestSuggestDistinctColor:

    def test_no_existing_colors(self):
        assert suggest_distinct_color([]) == DEFAULT_NEW_ALLIANCE_COLOR
        assert suggest_distinct_color(["bogus"]) == DEFAULT_NEW_ALLIANCE_COLOR

    def test_far_from_default_alliances(self):
        existing = [a.color for a in default_alliances()]
        suggestion = suggest_distinct_color(existing)

        assert normalize_color(suggestion) == suggestion
        assert suggestion not in existing
        distances = [delta_e_lab(hex_to_lab(suggestion), hex_to_lab(c)) for c in existing]
        assert min(distances) > 10


class TestLabelColor:

    @pytest.mark.parametrize("fill,expected", [
        ("#ffffff", "#000000"),
        ("#ff69b4", "#000000"),
        ("#000000", "#ffffff"),
        ("#1e3a8a", "#ffffff"),
        (None, "#ffffff"),
        ("bogus", "#ffffff"),
    ])
    def test_label_color(self, fill, expected):
        assert label_color(fill) == expected
