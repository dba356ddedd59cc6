#color_utils.py
"""
Color math for alliance colors.

Alliance colors are free text (whatever the user typed or imported), so every
helper here goes through :func:`normalize_color` first and works on
``#rrggbb`` strings afterwards. Perceptual distance is CIEDE2000 from
colormath; contrast follows WCAG 2.x.
"""
from typing import Optional, Sequence, Tuple

from colormath import color_diff_matrix
from colormath.color_conversions import convert_color
from colormath.color_diff import _get_lab_color1_vector, _get_lab_color2_matrix
from colormath.color_objects import LabColor, LCHabColor, sRGBColor
from PyQt5.QtGui import QColor

Lab = Tuple[float, float, float]


def normalize_color(color) -> Optional[str]:
    """``#rrggbb`` for any color string Qt can parse (hex, CSS name), else None."""
    if not isinstance(color, str):
        return None
    qcolor = QColor(color.strip())
    return qcolor.name() if qcolor.isValid() else None


def hex_to_rgb(color: str) -> Tuple[float, float, float]:
    """sRGB channels in [0, 1] of a ``#rrggbb`` color.

    Raises
    ------
    ValueError
        If ``color`` is not a 6-digit hex string.
    """
    digits = color[1:] if color.startswith("#") else color
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color: {color}")
    try:
        value = int(digits, 16)
    except ValueError:
        raise ValueError(f"Invalid hex color: {color}") from None
    return ((value >> 16) / 255.0, ((value >> 8) & 0xFF) / 255.0, (value & 0xFF) / 255.0)


def _linear(channel):
    if channel <= 0.04045:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    """WCAG relative luminance of a hex color."""
    r, g, b = (_linear(c) for c in hex_to_rgb(color))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: str, second: str) -> float:
    """WCAG contrast ratio between two hex colors, in [1, 21]."""
    lighter, darker = sorted((relative_luminance(first), relative_luminance(second)), reverse=True)
    return (lighter + 0.05) / (darker + 0.05)


def hex_to_lab(color: str) -> Lab:
    """CIE Lab (D65) of a hex color."""
    lab = convert_color(sRGBColor(*hex_to_rgb(color)), LabColor)
    return lab.lab_l, lab.lab_a, lab.lab_b


def delta_e_lab(first: Sequence[float], second: Sequence[float]) -> float:
    """CIEDE2000 distance between two Lab triples."""
    return delta_e_cie2000_patched(LabColor(*first), LabColor(*second))


def delta_e_cie2000_patched(color1, color2, Kl=1, Kc=1, Kh=1):
    """CIEDE2000 between two ``LabColor`` objects.

    Same computation as ``colormath.color_diff.delta_e_cie2000``, which
    still calls ``numpy.asscalar`` (removed from numpy).
    """
    distances = color_diff_matrix.delta_e_cie2000(
        _get_lab_color1_vector(color1), _get_lab_color2_matrix(color2), Kl=Kl, Kc=Kc, Kh=Kh)
    return float(distances[0])


def lch_to_hex(lightness: float, chroma: float, hue: float) -> Optional[str]:
    """Hex color of an LCHab triple, or None when it falls outside sRGB."""
    rgb = convert_color(LCHabColor(lightness, chroma, hue), sRGBColor)
    channels = (rgb.rgb_r, rgb.rgb_g, rgb.rgb_b)
    if any(c < 0.0 or c > 1.0 for c in channels):
        return None
    return rgb.get_rgb_hex()
