"""Immutable color values for the theme engine.

A Color stores a lowercase hex string (6 or 8 digits, no '#') and derives
every other representation from it: RGB(A), HSL, an OKLCH-style cylindrical
space built on CIE Luv, and CSS strings. Manipulation methods never modify the
receiver; they return new Color values.

The empty color stands for an unset theme slot. It is falsy, renders as an
empty string, and reads as black wherever a numeric value is required.
"""

import re
from dataclasses import dataclass
from typing import Any, Tuple

import colour
import numpy as np
from pydantic_core import core_schema

from .contrast import calculate_luminance, ratio_from_luminance


_HEX_PATTERN = re.compile(r'^([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$')


def _normalize_hex(value: Any) -> str:
    """Normalize a hex string to 6 or 8 lowercase digits, or '' if invalid."""
    if isinstance(value, Color):
        return value.value
    if not isinstance(value, str):
        return ""

    value = value.strip().lower()
    if value.startswith('#'):
        value = value[1:]
    if not _HEX_PATTERN.match(value):
        return ""

    # Expand shorthand hex (rgb -> rrggbb)
    if len(value) == 3:
        value = ''.join(ch * 2 for ch in value)
    return value


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _to_byte(unit: float) -> int:
    """Convert a 0-1 channel to 0-255 with round-half-up."""
    return int(_clamp(float(unit)) * 255.0 + 0.5)


def _to_channel(value: float) -> int:
    return int(_clamp(int(value), 0, 255))


@dataclass(frozen=True)
class Color:
    """A theme color stored as a normalized hex value."""

    value: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'value', _normalize_hex(self.value))

    # Construction

    @classmethod
    def from_hex(cls, hex_color: str) -> "Color":
        """Create a Color from '#RGB', '#RRGGBB' or '#RRGGBBAA' (prefix optional).

        Invalid input yields the empty color.
        """
        return cls(hex_color)

    @classmethod
    def empty(cls) -> "Color":
        return cls()

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> "Color":
        """Create a Color from red, green and blue channels (0-255)."""
        return cls(f"{_to_channel(r):02x}{_to_channel(g):02x}{_to_channel(b):02x}")

    @classmethod
    def from_rgba(cls, r: int, g: int, b: int, a: int) -> "Color":
        """Create a Color from red, green, blue and alpha channels (0-255)."""
        return cls(
            f"{_to_channel(r):02x}{_to_channel(g):02x}"
            f"{_to_channel(b):02x}{_to_channel(a):02x}"
        )

    @classmethod
    def from_hsl(cls, h: float, s: float, l: float) -> "Color":
        """Create a Color from hue (degrees), saturation (0-1) and lightness (0-1)."""
        hsl = np.array([(h % 360.0) / 360.0, _clamp(s), _clamp(l)], dtype=float)
        r, g, b = np.clip(np.nan_to_num(colour.HSL_to_RGB(hsl)), 0.0, 1.0)
        return cls.from_rgb(_to_byte(r), _to_byte(g), _to_byte(b))

    @classmethod
    def from_oklch(cls, l: float, c: float, h: float) -> "Color":
        """Create a Color from lightness (0-1), chroma (0-0.4) and hue (0-360).

        The values are interpreted as CIE LCh(uv) scaled by 100 and the result
        is clamped into the sRGB gamut rather than rejected.
        """
        lchuv = np.array([l * 100.0, c * 100.0, h], dtype=float)
        xyz = colour.Luv_to_XYZ(colour.LCHuv_to_Luv(lchuv))
        rgb = np.nan_to_num(colour.XYZ_to_sRGB(xyz))
        return cls.from_rgb(*(_to_byte(channel) for channel in rgb))

    # Pydantic integration: hex strings validate into Color, Color dumps as hex

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda color: color.hex
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> "Color":
        if isinstance(value, Color):
            return value
        if value is None:
            return cls()
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"expected a hex color string, got {type(value).__name__}")

    # Representations

    @property
    def is_empty(self) -> bool:
        return self.value == ""

    @property
    def hex(self) -> str:
        """Hex string with '#' prefix, or '' for the empty color."""
        return f"#{self.value}" if self.value else ""

    @property
    def hex_no_prefix(self) -> str:
        return self.value

    def rgb(self) -> Tuple[int, int, int]:
        """Red, green and blue channels (0-255)."""
        if not self.value:
            return (0, 0, 0)
        return (int(self.value[0:2], 16), int(self.value[2:4], 16), int(self.value[4:6], 16))

    def rgba(self) -> Tuple[int, int, int, int]:
        """Red, green, blue and alpha channels; alpha is 255 when not stored."""
        r, g, b = self.rgb()
        a = int(self.value[6:8], 16) if len(self.value) == 8 else 255
        return (r, g, b, a)

    def _unit_rgb(self) -> np.ndarray:
        return np.array(self.rgb(), dtype=float) / 255.0

    def hsl(self) -> Tuple[float, float, float]:
        """Hue (0-360), saturation (0-1) and lightness (0-1)."""
        h, s, l = np.nan_to_num(colour.RGB_to_HSL(self._unit_rgb()))
        return (float(h) * 360.0, float(s), float(l))

    def oklch(self) -> Tuple[float, float, float]:
        """Lightness (0-1), chroma and hue (degrees) in the LCh(uv) space."""
        xyz = colour.sRGB_to_XYZ(self._unit_rgb())
        lch = np.nan_to_num(colour.Luv_to_LCHuv(colour.XYZ_to_Luv(xyz)))
        return (float(lch[0]) / 100.0, float(lch[1]) / 100.0, float(lch[2]))

    def css(self) -> str:
        return self.hex

    def css_var(self, name: str, prefix: str = "theme") -> str:
        """CSS variable reference, e.g. var(--theme-background)."""
        return f"var(--{prefix}-{name})"

    def css_rgb(self) -> str:
        r, g, b = self.rgb()
        return f"rgb({r}, {g}, {b})"

    def css_rgba(self) -> str:
        r, g, b, a = self.rgba()
        return f"rgba({r}, {g}, {b}, {a / 255.0:.3f})"

    def css_hsl(self) -> str:
        h, s, l = self.hsl()
        return f"hsl({h:.1f}, {s * 100:.1f}%, {l * 100:.1f}%)"

    def css_oklch(self) -> str:
        l, c, h = self.oklch()
        return f"oklch({l:.3f} {c:.3f} {h:.1f})"

    # Manipulation

    def with_alpha(self, alpha: float) -> "Color":
        """Return this color with an alpha channel; alpha is clamped to 0-1."""
        r, g, b = self.rgb()
        return Color.from_rgba(r, g, b, int(_clamp(alpha) * 255))

    def lighten(self, amount: float) -> "Color":
        h, s, l = self.hsl()
        return Color.from_hsl(h, s, min(1.0, l + amount))

    def darken(self, amount: float) -> "Color":
        h, s, l = self.hsl()
        return Color.from_hsl(h, s, max(0.0, l - amount))

    def saturate(self, amount: float) -> "Color":
        h, s, l = self.hsl()
        return Color.from_hsl(h, min(1.0, s + amount), l)

    def desaturate(self, amount: float) -> "Color":
        h, s, l = self.hsl()
        return Color.from_hsl(h, max(0.0, s - amount), l)

    def rotate_hue(self, degrees: float) -> "Color":
        h, s, l = self.hsl()
        return Color.from_hsl(h + degrees, s, l)

    def complement(self) -> "Color":
        """Opposite color on the color wheel."""
        return self.rotate_hue(180.0)

    def invert(self) -> "Color":
        r, g, b = self.rgb()
        return Color.from_rgb(255 - r, 255 - g, 255 - b)

    def mix(self, other: "Color", ratio: float) -> "Color":
        """Blend with another color in CIE Lab space.

        A ratio of 0.0 returns this color, 1.0 returns other, 0.5 is an
        equal mix.
        """
        other = Color._validate(other)
        if ratio <= 0.0:
            return self
        if ratio >= 1.0:
            return other

        lab1 = colour.XYZ_to_Lab(colour.sRGB_to_XYZ(self._unit_rgb()))
        lab2 = colour.XYZ_to_Lab(colour.sRGB_to_XYZ(other._unit_rgb()))
        blended = lab1 + (lab2 - lab1) * ratio
        rgb = np.nan_to_num(colour.XYZ_to_sRGB(colour.Lab_to_XYZ(blended)))
        return Color.from_rgb(*(_to_byte(channel) for channel in rgb))

    # Luminance and contrast

    def relative_luminance(self) -> float:
        """WCAG 2.1 relative luminance, 0 (black) to 1 (white)."""
        return calculate_luminance(*self.rgb())

    def is_dark(self) -> bool:
        return self.relative_luminance() < 0.5

    def is_light(self) -> bool:
        return not self.is_dark()

    def contrast_ratio(self, other: "Color") -> float:
        """WCAG contrast ratio against another color (1-21)."""
        return ratio_from_luminance(self.relative_luminance(), other.relative_luminance())

    def __bool__(self) -> bool:
        return not self.is_empty

    def __str__(self) -> str:
        return self.hex

    def __repr__(self) -> str:
        return f"Color({self.hex!r})"
