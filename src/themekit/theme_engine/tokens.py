"""Design token export in the W3C Design Tokens Community Group format.

Each color becomes a token object with "$value", "$type" and an optional
"$description"; tokens are nested into background, surface, text, accent,
border, semantic, ansi and code groups, with theme metadata under "meta".
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .color import Color
from .output import format_color
from .schema import SemanticColor, Theme


@dataclass(frozen=True)
class TokenOptions:
    """Options for design token output."""
    include_descriptions: bool = True
    indent: Optional[int] = 2


# (group, token, slot, description); group None puts the token at the top level
_COLOR_TOKENS = (
    ("background", "primary", "background", "Primary background color"),
    ("background", "secondary", "background_secondary", "Secondary background color"),
    ("surface", "primary", "surface", "Primary surface color for cards/modals"),
    ("surface", "secondary", "surface_secondary", "Secondary surface color"),
    ("text", "primary", "text_primary", "Primary text color"),
    ("text", "secondary", "text_secondary", "Secondary text color"),
    ("text", "muted", "text_muted", "Muted text color for placeholders"),
    ("text", "inverted", "text_inverted", "Inverted text for colored backgrounds"),
    ("accent", "primary", "accent", "Primary accent color"),
    ("accent", "secondary", "accent_secondary", "Secondary accent color"),
    (None, "brand", "brand", "Brand/logo color"),
    ("border", "default", "border", "Default border color"),
    ("border", "subtle", "border_subtle", "Subtle border color"),
    ("border", "strong", "border_strong", "Strong/emphasized border color"),
)

_ANSI_DESCRIPTIONS = {
    "black": "ANSI black",
    "red": "ANSI red",
    "green": "ANSI green",
    "yellow": "ANSI yellow",
    "blue": "ANSI blue",
    "purple": "ANSI purple/magenta",
    "cyan": "ANSI cyan",
    "white": "ANSI white",
}

_CODE_DESCRIPTIONS = {
    "background": "Code block background",
    "text": "Default code text",
    "comment": "Code comment color",
    "keyword": "Code keyword color",
    "string": "Code string literal color",
    "number": "Code number literal color",
    "function": "Code function name color",
    "operator": "Code operator color",
    "punctuation": "Code punctuation color",
    "variable": "Code variable color",
    "constant": "Code constant color",
    "type": "Code type name color",
}


def _token(color: Color, description: str, options: TokenOptions) -> Dict[str, Any]:
    token: Dict[str, Any] = {"$value": format_color(color), "$type": "color"}
    if options.include_descriptions and description:
        token["$description"] = description
    return token


def _semantic_group(group: SemanticColor, label: str, options: TokenOptions) -> Dict[str, Any]:
    return {
        part: _token(getattr(group, part), f"{label} {part} color", options)
        for part in ("background", "border", "text")
    }


def build_token_structure(theme: Theme, options: TokenOptions = TokenOptions()) -> Dict[str, Any]:
    """Build the nested token dictionary for a theme."""
    colors: Dict[str, Any] = {"$type": "color"}

    for group, name, slot, description in _COLOR_TOKENS:
        token = _token(getattr(theme, slot), description, options)
        if group is None:
            colors[name] = token
        else:
            colors.setdefault(group, {})[name] = token

    colors["semantic"] = {
        name: _semantic_group(getattr(theme, name), name.capitalize(), options)
        for name in ("success", "warning", "error", "info")
    }

    ansi: Dict[str, Any] = {}
    for name, description in _ANSI_DESCRIPTIONS.items():
        ansi[name] = _token(getattr(theme, name), description, options)
    for name, description in _ANSI_DESCRIPTIONS.items():
        bright = f"Bright {description.split('/')[0]}"
        ansi[f"bright-{name}"] = _token(getattr(theme, f"bright_{name}"), bright, options)
    colors["ansi"] = ansi

    colors["code"] = {
        name: _token(getattr(theme, f"code_{name}"), description, options)
        for name, description in _CODE_DESCRIPTIONS.items()
    }

    meta = {
        "id": {"$value": theme.id, "$type": "string"},
        "name": {"$value": theme.display_name, "$type": "string"},
        "description": {"$value": theme.description, "$type": "string"},
        "author": {"$value": theme.author, "$type": "string"},
        "license": {"$value": theme.license, "$type": "string"},
        "source": {"$value": theme.source, "$type": "string"},
        "isDark": {"$value": theme.dark, "$type": "boolean"},
    }

    return {
        "$description": f"Design tokens for {theme.display_name} theme",
        "color": colors,
        "meta": meta,
    }


def _dumps(data: Dict[str, Any], options: TokenOptions) -> str:
    if options.indent is None:
        return json.dumps(data, separators=(",", ":"))
    return json.dumps(data, indent=options.indent)


def generate_design_tokens(theme: Theme, options: TokenOptions = TokenOptions()) -> str:
    """Render a theme as DTCG design tokens JSON."""
    return _dumps(build_token_structure(theme, options), options)


def generate_all_design_tokens(themes: Iterable[Theme],
                               options: TokenOptions = TokenOptions()) -> str:
    """Render several themes into one token document keyed by theme id."""
    data: Dict[str, Any] = {"$description": "Design tokens collection"}
    for theme in themes:
        data[theme.id] = build_token_structure(theme, options)
    return _dumps(data, options)
