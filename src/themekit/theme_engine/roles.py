"""Symbolic color roles and the standard contrast pair taxonomy.

Every consumer that measures readability (the contrast validator, the
accessibility analyzer, the auto-fixer) resolves colors through the role table
in this module and iterates the same STANDARD_PAIRS tuple, so their results are
directly comparable.
"""

from enum import Enum
from operator import attrgetter
from typing import Callable, Dict, Iterator, NamedTuple, Optional, Tuple, Union

from .color import Color
from .schema import Theme


class ColorRole(str, Enum):
    """Named theme color that can appear in a contrast pair"""
    BACKGROUND = "Background"
    BACKGROUND_SECONDARY = "BackgroundSecondary"
    SURFACE = "Surface"
    SURFACE_SECONDARY = "SurfaceSecondary"
    TEXT_PRIMARY = "TextPrimary"
    TEXT_SECONDARY = "TextSecondary"
    TEXT_MUTED = "TextMuted"
    TEXT_INVERTED = "TextInverted"
    ACCENT = "Accent"
    ACCENT_SECONDARY = "AccentSecondary"
    BRAND = "Brand"
    BORDER = "Border"
    BORDER_SUBTLE = "BorderSubtle"
    BORDER_STRONG = "BorderStrong"
    CODE_TEXT = "CodeText"
    CODE_BACKGROUND = "CodeBackground"
    CODE_COMMENT = "CodeComment"
    CODE_KEYWORD = "CodeKeyword"
    CODE_STRING = "CodeString"
    SUCCESS_TEXT = "Success.Text"
    SUCCESS_BACKGROUND = "Success.Background"
    WARNING_TEXT = "Warning.Text"
    WARNING_BACKGROUND = "Warning.Background"
    ERROR_TEXT = "Error.Text"
    ERROR_BACKGROUND = "Error.Background"
    INFO_TEXT = "Info.Text"
    INFO_BACKGROUND = "Info.Background"

    def __str__(self) -> str:
        return self.value

    @property
    def field_name(self) -> str:
        """Dotted attribute path of this role on a Theme, e.g. 'success.text'."""
        return _ROLE_FIELDS[self]

    @classmethod
    def lookup(cls, name: Union["ColorRole", str]) -> Optional["ColorRole"]:
        """Return the role for a symbolic name, or None when unknown."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            return None


_ROLE_FIELDS: Dict[ColorRole, str] = {
    ColorRole.BACKGROUND: "background",
    ColorRole.BACKGROUND_SECONDARY: "background_secondary",
    ColorRole.SURFACE: "surface",
    ColorRole.SURFACE_SECONDARY: "surface_secondary",
    ColorRole.TEXT_PRIMARY: "text_primary",
    ColorRole.TEXT_SECONDARY: "text_secondary",
    ColorRole.TEXT_MUTED: "text_muted",
    ColorRole.TEXT_INVERTED: "text_inverted",
    ColorRole.ACCENT: "accent",
    ColorRole.ACCENT_SECONDARY: "accent_secondary",
    ColorRole.BRAND: "brand",
    ColorRole.BORDER: "border",
    ColorRole.BORDER_SUBTLE: "border_subtle",
    ColorRole.BORDER_STRONG: "border_strong",
    ColorRole.CODE_TEXT: "code_text",
    ColorRole.CODE_BACKGROUND: "code_background",
    ColorRole.CODE_COMMENT: "code_comment",
    ColorRole.CODE_KEYWORD: "code_keyword",
    ColorRole.CODE_STRING: "code_string",
    ColorRole.SUCCESS_TEXT: "success.text",
    ColorRole.SUCCESS_BACKGROUND: "success.background",
    ColorRole.WARNING_TEXT: "warning.text",
    ColorRole.WARNING_BACKGROUND: "warning.background",
    ColorRole.ERROR_TEXT: "error.text",
    ColorRole.ERROR_BACKGROUND: "error.background",
    ColorRole.INFO_TEXT: "info.text",
    ColorRole.INFO_BACKGROUND: "info.background",
}

# Accessor for every role; attrgetter follows dotted paths into semantic groups
ROLE_ACCESSORS: Dict[ColorRole, Callable[[Theme], Color]] = {
    role: attrgetter(path) for role, path in _ROLE_FIELDS.items()
}


def resolve_role(theme: Theme, role: Union[ColorRole, str]) -> Color:
    """Resolve a role (or its symbolic name) to the theme's color.

    Unknown names resolve to the empty color so callers can skip them
    uniformly instead of handling a lookup failure.
    """
    resolved = ColorRole.lookup(role)
    if resolved is None:
        return Color()
    return ROLE_ACCESSORS[resolved](theme)


class PairSpec(NamedTuple):
    """Foreground/background roles whose contrast affects readability"""
    fg: ColorRole
    bg: ColorRole


class ResolvedPair(NamedTuple):
    """A PairSpec resolved against one theme"""
    fg_name: str
    bg_name: str
    fg: Color
    bg: Color

    @property
    def is_complete(self) -> bool:
        return bool(self.fg) and bool(self.bg)


STANDARD_PAIRS: Tuple[PairSpec, ...] = (
    # Text on backgrounds
    PairSpec(ColorRole.TEXT_PRIMARY, ColorRole.BACKGROUND),
    PairSpec(ColorRole.TEXT_SECONDARY, ColorRole.BACKGROUND),
    PairSpec(ColorRole.TEXT_MUTED, ColorRole.BACKGROUND),
    PairSpec(ColorRole.TEXT_PRIMARY, ColorRole.BACKGROUND_SECONDARY),
    PairSpec(ColorRole.TEXT_PRIMARY, ColorRole.SURFACE),

    # Accent/interactive colors
    PairSpec(ColorRole.ACCENT, ColorRole.BACKGROUND),

    # Semantic text on semantic backgrounds
    PairSpec(ColorRole.SUCCESS_TEXT, ColorRole.SUCCESS_BACKGROUND),
    PairSpec(ColorRole.WARNING_TEXT, ColorRole.WARNING_BACKGROUND),
    PairSpec(ColorRole.ERROR_TEXT, ColorRole.ERROR_BACKGROUND),
    PairSpec(ColorRole.INFO_TEXT, ColorRole.INFO_BACKGROUND),

    # Code colors
    PairSpec(ColorRole.CODE_TEXT, ColorRole.CODE_BACKGROUND),
    PairSpec(ColorRole.CODE_COMMENT, ColorRole.CODE_BACKGROUND),
    PairSpec(ColorRole.CODE_KEYWORD, ColorRole.CODE_BACKGROUND),
    PairSpec(ColorRole.CODE_STRING, ColorRole.CODE_BACKGROUND),
)


def resolve_pairs(theme: Theme) -> Iterator[ResolvedPair]:
    """Yield every standard pair resolved against a theme, in taxonomy order."""
    for spec in STANDARD_PAIRS:
        yield ResolvedPair(
            fg_name=spec.fg.value,
            bg_name=spec.bg.value,
            fg=resolve_role(theme, spec.fg),
            bg=resolve_role(theme, spec.bg),
        )
