"""Theme schema definitions for the theme engine.

This module defines the Pydantic models that structure all theme data: the
resolved Theme with its background, text, accent, border, semantic, ANSI and
syntax-highlighting slots, the SemanticColor groups, and the minimal Palette a
theme can be generated from. Every color slot defaults to the empty Color,
which marks it as unset.
"""

from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .color import Color


class Severity(str, Enum):
    """Severity of a structural validation issue"""
    ERROR = "error"
    WARNING = "warning"


class SemanticColor(BaseModel):
    """Background, border and text colors for one UI state"""

    model_config = ConfigDict(frozen=True, extra='forbid')

    background: Color = Color()
    border: Color = Color()
    text: Color = Color()

    @classmethod
    def from_base(cls, base: Color) -> "SemanticColor":
        """Build the standard group: tinted background and border, solid text."""
        return cls(
            background=base.with_alpha(0.1),
            border=base.with_alpha(0.3),
            text=base,
        )

    def is_empty(self) -> bool:
        return self.background.is_empty and self.border.is_empty and self.text.is_empty


SEMANTIC_FIELDS: Tuple[str, ...] = ("success", "warning", "error", "info")

ANSI_FIELDS: Tuple[str, ...] = (
    "black", "red", "green", "yellow", "blue", "purple", "cyan", "white",
    "bright_black", "bright_red", "bright_green", "bright_yellow",
    "bright_blue", "bright_purple", "bright_cyan", "bright_white",
)

CODE_FIELDS: Tuple[str, ...] = (
    "code_background", "code_text", "code_comment", "code_keyword",
    "code_string", "code_number", "code_function", "code_operator",
    "code_punctuation", "code_variable", "code_constant", "code_type",
)


class Theme(BaseModel):
    """A named bundle of UI colors plus metadata"""

    model_config = ConfigDict(frozen=True, extra='forbid')

    # Metadata
    id: str = Field("", description="Unique theme identifier, e.g. 'dracula'")
    display_name: str = Field("", description="Human-readable theme name")
    description: str = ""
    author: str = ""
    license: str = ""
    source: str = Field("", description="URL or reference to the original theme")
    is_dark: Optional[bool] = Field(None, description="None until set or derived")

    # Background colors
    background: Color = Color()
    background_secondary: Color = Color()
    surface: Color = Color()
    surface_secondary: Color = Color()

    # Text colors
    text_primary: Color = Color()
    text_secondary: Color = Color()
    text_muted: Color = Color()
    text_inverted: Color = Color()

    # Accent/brand colors
    accent: Color = Color()
    accent_secondary: Color = Color()
    brand: Color = Color()

    # Border colors
    border: Color = Color()
    border_subtle: Color = Color()
    border_strong: Color = Color()

    # Semantic colors
    success: SemanticColor = Field(default_factory=SemanticColor)
    warning: SemanticColor = Field(default_factory=SemanticColor)
    error: SemanticColor = Field(default_factory=SemanticColor)
    info: SemanticColor = Field(default_factory=SemanticColor)

    # ANSI colors
    black: Color = Color()
    red: Color = Color()
    green: Color = Color()
    yellow: Color = Color()
    blue: Color = Color()
    purple: Color = Color()
    cyan: Color = Color()
    white: Color = Color()
    bright_black: Color = Color()
    bright_red: Color = Color()
    bright_green: Color = Color()
    bright_yellow: Color = Color()
    bright_blue: Color = Color()
    bright_purple: Color = Color()
    bright_cyan: Color = Color()
    bright_white: Color = Color()

    # Code/syntax highlighting colors
    code_background: Color = Color()
    code_text: Color = Color()
    code_comment: Color = Color()
    code_keyword: Color = Color()
    code_string: Color = Color()
    code_number: Color = Color()
    code_function: Color = Color()
    code_operator: Color = Color()
    code_punctuation: Color = Color()
    code_variable: Color = Color()
    code_constant: Color = Color()
    code_type: Color = Color()

    @field_validator(*SEMANTIC_FIELDS, mode='before')
    @classmethod
    def expand_semantic_shorthand(cls, v):
        """Allow a single hex string as shorthand for a full semantic group"""
        if isinstance(v, (str, Color)):
            base = Color(v)
            return SemanticColor.from_base(base) if base else SemanticColor()
        return v

    @classmethod
    def color_fields(cls) -> Tuple[str, ...]:
        """Names of the plain Color slots in schema order."""
        return tuple(
            name for name, info in cls.model_fields.items() if info.annotation is Color
        )

    @property
    def dark(self) -> bool:
        return bool(self.is_dark)

    def iter_colors(self) -> Iterator[Tuple[str, Color]]:
        """Yield (name, color) for every color slot in schema order.

        Semantic group parts are named with a dot, e.g. 'success.text'.
        """
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, Color):
                yield name, value
            elif isinstance(value, SemanticColor):
                for part in ("background", "border", "text"):
                    yield f"{name}.{part}", getattr(value, part)

    def to_file_dict(self) -> Dict[str, Any]:
        """Serialize for YAML/JSON theme files, omitting unset values."""
        data = self.model_dump(mode='json', exclude_none=True)
        result: Dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, dict):
                value = {k: v for k, v in value.items() if v}
                if not value:
                    continue
            elif value == "":
                continue
            result[key] = value
        return result


class Palette(BaseModel):
    """Minimal seed palette a complete theme can be generated from"""

    model_config = ConfigDict(frozen=True, extra='forbid')

    background: Color = Color()
    foreground: Color = Color()
    accent: Color = Color()

    # ANSI colors, all optional
    black: Color = Color()
    red: Color = Color()
    green: Color = Color()
    yellow: Color = Color()
    blue: Color = Color()
    purple: Color = Color()
    cyan: Color = Color()
    white: Color = Color()
    bright_black: Color = Color()
    bright_red: Color = Color()
    bright_green: Color = Color()
    bright_yellow: Color = Color()
    bright_blue: Color = Color()
    bright_purple: Color = Color()
    bright_cyan: Color = Color()
    bright_white: Color = Color()
