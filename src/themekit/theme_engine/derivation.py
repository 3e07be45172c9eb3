"""Color derivation for partially specified themes.

derive_theme() fills every unset slot it can from the colors a theme author
supplied, using a fixed chain of rules: dark flag, background variants, text
variants, accent variants, borders, semantic groups, then syntax colors. A rule
only ever writes an empty slot and only when its source slot is set, so the
function is safe to run on any theme, any number of times.

The builder and helpers below construct themes from sparse input and always
return new Theme values; nothing in this module mutates a Theme.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .color import Color
from .schema import ANSI_FIELDS, SEMANTIC_FIELDS, Palette, SemanticColor, Theme

logger = logging.getLogger(__name__)


# Fallback bases for semantic groups when the matching ANSI color is unset
SEMANTIC_SOURCES: Dict[str, tuple] = {
    "success": ("green", Color("#22c55e")),
    "warning": ("yellow", Color("#eab308")),
    "error": ("red", Color("#ef4444")),
    "info": ("blue", Color("#3b82f6")),
}

# Syntax slots copied straight from another slot: target -> source
CODE_SOURCES: Dict[str, str] = {
    "code_text": "text_primary",
    "code_comment": "text_muted",
    "code_keyword": "purple",
    "code_string": "green",
    "code_number": "yellow",
    "code_function": "blue",
    "code_operator": "cyan",
    "code_punctuation": "text_secondary",
    "code_variable": "text_primary",
    "code_constant": "yellow",
    "code_type": "cyan",
}

METADATA_FIELDS = ("id", "display_name", "description", "author", "license", "source", "is_dark")


def _fill(values: Dict[str, Any], target: str, source: str,
          transform: Callable[[Color], Color] = lambda c: c) -> None:
    """Set values[target] from values[source] when target is empty and source set."""
    if values[target].is_empty and not values[source].is_empty:
        values[target] = transform(values[source])


def _derive_semantic(existing: SemanticColor, base: Color, fallback: Color) -> SemanticColor:
    """Fill an unset semantic group from its ANSI base or the fallback color.

    A group whose text is already set is returned untouched. Otherwise only
    the empty parts of the group are filled.
    """
    if not existing.text.is_empty:
        return existing

    derived = SemanticColor.from_base(base if not base.is_empty else fallback)
    return SemanticColor(
        background=existing.background or derived.background,
        border=existing.border or derived.border,
        text=derived.text,
    )


def derive_theme(theme: Theme) -> Theme:
    """Return a copy of theme with every derivable unset color filled in.

    Args:
        theme: Theme with any subset of slots set

    Returns:
        New Theme; slots that were already set are unchanged and slots with
        no derivable source stay empty
    """
    values: Dict[str, Any] = {name: getattr(theme, name) for name in Theme.model_fields}

    # Detect dark mode if not explicitly set
    if values["is_dark"] is None and not values["background"].is_empty:
        values["is_dark"] = values["background"].is_dark()
    dark = bool(values["is_dark"])

    # Background variants
    _fill(values, "background_secondary", "background",
          lambda c: c.lighten(0.03) if dark else c.darken(0.03))
    _fill(values, "surface", "background",
          lambda c: c.lighten(0.05) if dark else c.darken(0.02))
    _fill(values, "surface_secondary", "surface",
          lambda c: c.lighten(0.03) if dark else c.darken(0.02))

    # Text variants
    _fill(values, "text_secondary", "text_primary", lambda c: c.with_alpha(0.7))
    _fill(values, "text_muted", "text_primary", lambda c: c.with_alpha(0.5))
    _fill(values, "text_inverted", "background")

    # Accent variants: analogous hue for the secondary accent
    _fill(values, "accent_secondary", "accent", lambda c: c.rotate_hue(30.0))
    _fill(values, "brand", "accent")

    # Border variants
    _fill(values, "border", "text_primary", lambda c: c.with_alpha(0.2))
    _fill(values, "border_subtle", "border", lambda c: c.with_alpha(0.1))
    _fill(values, "border_strong", "border", lambda c: c.with_alpha(0.4))

    # Semantic colors from ANSI colors or defaults
    for group, (ansi_name, fallback) in SEMANTIC_SOURCES.items():
        values[group] = _derive_semantic(values[group], values[ansi_name], fallback)

    # Code colors
    _fill(values, "code_background", "background",
          lambda c: c.darken(0.02) if dark else c.darken(0.05))
    for target, source in CODE_SOURCES.items():
        _fill(values, target, source)

    filled = [
        name for name in Theme.color_fields()
        if getattr(theme, name).is_empty and not values[name].is_empty
    ]
    if filled:
        logger.debug(f"Derived {len(filled)} colors for theme '{theme.id}'")

    return theme.model_copy(update=values)


class ThemeBuilder:
    """Accumulates explicitly set theme values and builds a derived Theme.

    Example:
        theme = (ThemeBuilder("mytheme", "My Theme")
                 .colors(background="#1e1e2e", text_primary="#cdd6f4", accent="#cba6f7")
                 .build())
    """

    def __init__(self, theme_id: str, display_name: str):
        self._values: Dict[str, Any] = {"id": theme_id, "display_name": display_name}

    def set(self, name: str, value: Any) -> "ThemeBuilder":
        """Set a single metadata field, color slot or semantic group.

        Raises:
            ValueError: If name is not a Theme field
        """
        if name not in Theme.model_fields:
            raise ValueError(f"Unknown theme field: {name}")
        self._values[name] = value
        return self

    def colors(self, **values: Any) -> "ThemeBuilder":
        """Set several color slots at once, e.g. colors(background='#282a36')."""
        for name, value in values.items():
            self.set(name, value)
        return self

    def metadata(self, **values: Any) -> "ThemeBuilder":
        """Set metadata fields such as description, author or is_dark."""
        for name, value in values.items():
            if name not in METADATA_FIELDS:
                raise ValueError(f"Not a metadata field: {name}")
            self.set(name, value)
        return self

    def semantic(self, name: str, text: Any = None, background: Any = None,
                 border: Any = None) -> "ThemeBuilder":
        """Set a semantic group; parts left as None are derived on build."""
        if name not in SEMANTIC_FIELDS:
            raise ValueError(f"Unknown semantic group: {name}")
        return self.set(name, SemanticColor(
            text=Color._validate(text),
            background=Color._validate(background),
            border=Color._validate(border),
        ))

    def build(self) -> Theme:
        """Validate the accumulated values and return the derived Theme.

        Raises:
            pydantic.ValidationError: If a value cannot be coerced
        """
        return derive_theme(Theme.model_validate(self._values))


def generate_theme_from_palette(theme_id: str, display_name: str, palette: Palette) -> Theme:
    """Create a complete theme from a minimal color palette."""
    builder = ThemeBuilder(theme_id, display_name).colors(
        background=palette.background,
        text_primary=palette.foreground,
        accent=palette.accent,
    )

    for name in ANSI_FIELDS:
        color = getattr(palette, name)
        if not color.is_empty:
            builder.set(name, color)

    return builder.build()


def derive_variant(base: Theme, theme_id: str, display_name: str,
                   overrides: Optional[Mapping[str, Any]] = None) -> Theme:
    """Create a new theme from an existing one with color overrides.

    Every color and metadata field of base is carried over, then overrides
    keyed by plain color slot name (e.g. 'accent', 'code_keyword') replace
    the base values. Unknown override names are ignored.
    """
    values: Dict[str, Any] = {name: getattr(base, name) for name in Theme.model_fields}
    color_fields = set(Theme.color_fields())

    for name, color in (overrides or {}).items():
        if name not in color_fields:
            logger.debug(f"Ignoring unknown color override '{name}' for '{theme_id}'")
            continue
        values[name] = Color._validate(color)

    values.update(id=theme_id, display_name=display_name)
    return derive_theme(Theme.model_validate(values))


def copy_theme(theme: Theme, theme_id: str, display_name: str,
               description: Optional[str] = None) -> Theme:
    """Copy a theme under a new id and display name; colors are unchanged."""
    update: Dict[str, Any] = {"id": theme_id, "display_name": display_name}
    if description is not None:
        update["description"] = description
    return theme.model_copy(update=update)
