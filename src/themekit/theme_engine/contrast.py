"""WCAG 2.1 contrast utilities for the theme engine.

This module provides hex/RGB conversion, relative luminance and contrast ratio
calculation, and the WCAG compliance levels every validator and analyzer in
the package is measured against.
"""

import re
from enum import Enum
from typing import Tuple


# Minimum contrast ratios defined by WCAG 2.1
MIN_AA = 4.5
MIN_AA_LARGE = 3.0
MIN_AAA = 7.0
MIN_AAA_LARGE = 4.5
MIN_UI_COMPONENT = 3.0

_HEX_PATTERN = re.compile(r'^([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$')


class WCAGLevel(int, Enum):
    """Highest WCAG level a color pair achieves"""
    FAIL = 0
    AA_LARGE = 1
    AA = 2
    AAA_LARGE = 3
    AAA = 4

    @property
    def label(self) -> str:
        return {
            WCAGLevel.AAA: "AAA",
            WCAGLevel.AAA_LARGE: "AAA (large text only)",
            WCAGLevel.AA: "AA",
            WCAGLevel.AA_LARGE: "AA (large text only)",
        }.get(self, "Fail")

    def __str__(self) -> str:
        return self.label


class ContrastLevel(str, Enum):
    """Compliance level requested from the contrast validator"""
    AA = "AA"
    AAA = "AAA"

    @property
    def required_ratio(self) -> float:
        """Normal-text threshold for this level."""
        return MIN_AAA if self is ContrastLevel.AAA else MIN_AA

    @classmethod
    def parse(cls, value) -> "ContrastLevel":
        """Parse a level from a string such as 'aa' or 'AAA'.

        Raises:
            ValueError: If the value names no known level
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            raise ValueError(f"Unknown contrast level: {value!r} (expected AA or AAA)") from e


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Parse '#RGB', '#RRGGBB' or '#RRGGBBAA' (prefix optional) into channels.

    Any alpha digits are dropped.

    Raises:
        ValueError: If the string is not a hex color
    """
    if not isinstance(hex_color, str):
        raise ValueError(f"Invalid hex color: {hex_color!r}")

    digits = hex_color.lstrip('#')
    if not _HEX_PATTERN.match(digits):
        raise ValueError(f"Invalid hex color: {hex_color!r}")
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)

    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format 0-255 channels as '#rrggbb'."""
    return "#" + "".join(f"{channel:02x}" for channel in (r, g, b))


def _linearize(channel: int) -> float:
    """sRGB channel (0-255) to linear light."""
    c = channel / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def calculate_luminance(r: int, g: int, b: int) -> float:
    """WCAG 2.1 relative luminance of 0-255 channels, from 0.0 to 1.0."""
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def ratio_from_luminance(lum1: float, lum2: float) -> float:
    """Contrast ratio between two relative luminances (order-independent)."""
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def calculate_contrast_ratio(color1: str, color2: str) -> float:
    """Contrast ratio of two hex colors, from 1.0 to 21.0.

    Unparsable input yields 1.0, the same as two identical colors.
    """
    try:
        first = calculate_luminance(*hex_to_rgb(color1))
        second = calculate_luminance(*hex_to_rgb(color2))
    except ValueError:
        return 1.0
    return ratio_from_luminance(first, second)


def meets_wcag_contrast(fg_color: str, bg_color: str, level: str = 'AA',
                        large_text: bool = False) -> bool:
    """Whether two hex colors reach a WCAG level.

    Args:
        fg_color: Text color
        bg_color: Color behind the text
        level: 'AA' or 'AAA'
        large_text: Apply the large-text thresholds (3:1 for AA, 4.5:1 for AAA)
    """
    if ContrastLevel.parse(level) is ContrastLevel.AAA:
        required = MIN_AAA_LARGE if large_text else MIN_AAA
    else:
        required = MIN_AA_LARGE if large_text else MIN_AA
    return calculate_contrast_ratio(fg_color, bg_color) >= required


def meets_ui_component(fg_color: str, bg_color: str) -> bool:
    """Check the 3:1 minimum for UI components and graphical objects."""
    return calculate_contrast_ratio(fg_color, bg_color) >= MIN_UI_COMPONENT


def classify(ratio: float) -> WCAGLevel:
    """Return the highest WCAG level cleared by a contrast ratio.

    Levels are checked from the strictest down. AA and AAA large text share
    the 4.5 threshold, so a ratio of exactly 4.5 reports AAA_LARGE.
    """
    if ratio >= MIN_AAA:
        return WCAGLevel.AAA
    if ratio >= MIN_AAA_LARGE:
        return WCAGLevel.AAA_LARGE
    if ratio >= MIN_AA:
        return WCAGLevel.AA
    if ratio >= MIN_AA_LARGE:
        return WCAGLevel.AA_LARGE
    return WCAGLevel.FAIL


def check_hex(fg_color: str, bg_color: str) -> WCAGLevel:
    """Classify the contrast between two hex colors."""
    return classify(calculate_contrast_ratio(fg_color, bg_color))
