"""Text renderers for resolved themes.

Every renderer reads a theme through Theme.iter_colors() and never derives
colors itself. Unset colors are written as 'transparent' so output always
contains the full variable set.
"""

import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, List, Tuple

from .color import Color
from .schema import Theme


class OutputFormat(str, Enum):
    """Output formats the engine can render"""
    CSS = "css"
    SCSS = "scss"
    JSON = "json"
    TOKENS = "tokens"
    SYNTAX = "syntax"


class ColorSpace(str, Enum):
    """Notation used for color values in generated output"""
    HEX = "hex"
    RGB = "rgb"
    HSL = "hsl"
    OKLCH = "oklch"


class SyntaxFormat(str, Enum):
    """Syntax highlighting library targeted by generate_syntax_css"""
    PRISM = "prism"
    HIGHLIGHT_JS = "highlightjs"
    CHROMA = "chroma"


@dataclass(frozen=True)
class CSSOptions:
    """Options for CSS, SCSS and JSON output."""
    prefix: str = "theme"
    include_root: bool = True
    use_data_attribute: bool = False
    color_space: ColorSpace = ColorSpace.HEX
    minify: bool = False
    include_metadata: bool = True


@dataclass(frozen=True)
class SyntaxOptions:
    """Options for syntax highlighting CSS."""
    format: SyntaxFormat = SyntaxFormat.PRISM
    prefix: str = "theme"
    use_variables: bool = True
    minify: bool = False


def format_color(color: Color, color_space: ColorSpace = ColorSpace.HEX) -> str:
    """Render a color in the requested notation; unset colors are 'transparent'."""
    if color.is_empty:
        return "transparent"
    if color_space is ColorSpace.RGB:
        return color.css_rgb()
    if color_space is ColorSpace.HSL:
        return color.css_hsl()
    if color_space is ColorSpace.OKLCH:
        return color.css_oklch()
    return color.hex


def variable_name(slot: str) -> str:
    """CSS variable stem for a color slot, e.g. 'success.text' -> 'success-text'."""
    return slot.replace("_", "-").replace(".", "-")


def theme_variables(theme: Theme, color_space: ColorSpace = ColorSpace.HEX) -> List[Tuple[str, str]]:
    """All (name, value) variable pairs for a theme in schema order."""
    return [
        (variable_name(slot), format_color(color, color_space))
        for slot, color in theme.iter_colors()
    ]


def _prefix(options) -> str:
    return options.prefix or "theme"


def generate_css(theme: Theme, options: CSSOptions = CSSOptions()) -> str:
    """Generate CSS custom properties for a theme.

    Args:
        theme: Resolved theme
        options: Selector, prefix, color space and formatting options

    Returns:
        CSS text with one --{prefix}-{name} property per color slot
    """
    prefix = _prefix(options)
    parts: List[str] = []

    if options.include_metadata and not options.minify:
        parts.append(f"/* Theme: {theme.display_name} ({theme.id}) */\n")
        if theme.author:
            parts.append(f"/* Author: {theme.author} */\n")
        if theme.license:
            parts.append(f"/* License: {theme.license} */\n")
        parts.append("\n")

    if options.use_data_attribute:
        selector = f"[data-theme={json.dumps(theme.id)}]"
    elif options.include_root:
        selector = ":root"
    else:
        selector = ""

    if selector:
        parts.append(selector + ("{" if options.minify else " {\n"))

    for name, value in theme_variables(theme, options.color_space):
        if options.minify:
            parts.append(f"--{prefix}-{name}:{value};")
        else:
            parts.append(f"    --{prefix}-{name}: {value};\n")

    if selector:
        parts.append("}" if options.minify else "}\n")

    return "".join(parts)


def generate_all_themes_css(themes: Iterable[Theme], options: CSSOptions = CSSOptions()) -> str:
    """Generate CSS for several themes, each scoped by a data-theme selector."""
    options = replace(options, use_data_attribute=True, include_root=False)
    separator = "" if options.minify else "\n"
    return separator.join(generate_css(theme, options) for theme in themes)


def generate_scss(theme: Theme, options: CSSOptions = CSSOptions()) -> str:
    """Generate SCSS variables ($prefix-name) for a theme."""
    prefix = _prefix(options)
    parts: List[str] = []

    if options.include_metadata and not options.minify:
        parts.append(f"// Theme: {theme.display_name} ({theme.id})\n")
        if theme.author:
            parts.append(f"// Author: {theme.author}\n")
        parts.append("\n")

    for name, value in theme_variables(theme, options.color_space):
        if options.minify:
            parts.append(f"${prefix}-{name}:{value};")
        else:
            parts.append(f"${prefix}-{name}: {value};\n")

    return "".join(parts)


def generate_json(theme: Theme, options: CSSOptions = CSSOptions()) -> str:
    """Generate a flat JSON object mapping variable names to color values."""
    data = dict(theme_variables(theme, options.color_space))
    if options.minify:
        return json.dumps(data, separators=(",", ":"))
    return json.dumps(data, indent=4)


# Token selectors per highlighter, each mapped to the color slot it uses
SYNTAX_RULES = {
    SyntaxFormat.PRISM: (
        (".token.comment, .token.prolog, .token.doctype, .token.cdata", "code_comment"),
        (".token.punctuation", "code_punctuation"),
        (".token.property, .token.tag, .token.boolean, .token.number, .token.constant, "
         ".token.symbol", "code_number"),
        (".token.selector, .token.attr-name, .token.string, .token.char, .token.builtin",
         "code_string"),
        (".token.operator, .token.entity, .token.url", "code_operator"),
        (".token.atrule, .token.attr-value, .token.keyword", "code_keyword"),
        (".token.function, .token.class-name", "code_function"),
        (".token.regex, .token.important, .token.variable", "code_variable"),
    ),
    SyntaxFormat.HIGHLIGHT_JS: (
        (".hljs-comment, .hljs-quote", "code_comment"),
        (".hljs-keyword, .hljs-selector-tag", "code_keyword"),
        (".hljs-string, .hljs-doctag", "code_string"),
        (".hljs-number, .hljs-literal", "code_number"),
        (".hljs-title, .hljs-section, .hljs-selector-id", "code_function"),
        (".hljs-variable, .hljs-template-variable", "code_variable"),
        (".hljs-type, .hljs-class .hljs-title", "code_type"),
        (".hljs-symbol, .hljs-bullet", "code_constant"),
        (".hljs-attribute", "code_operator"),
    ),
    SyntaxFormat.CHROMA: (
        (".chroma .c, .chroma .cm, .chroma .c1, .chroma .cs", "code_comment"),
        (".chroma .k, .chroma .kc, .chroma .kd, .chroma .kn, .chroma .kp, .chroma .kr",
         "code_keyword"),
        (".chroma .s, .chroma .sa, .chroma .sb, .chroma .sc, .chroma .dl, .chroma .sd, "
         ".chroma .s2, .chroma .se, .chroma .sh, .chroma .si, .chroma .sx, .chroma .sr, "
         ".chroma .s1, .chroma .ss", "code_string"),
        (".chroma .m, .chroma .mb, .chroma .mf, .chroma .mh, .chroma .mi, .chroma .il, "
         ".chroma .mo", "code_number"),
        (".chroma .nf, .chroma .fm", "code_function"),
        (".chroma .nv, .chroma .vc, .chroma .vg, .chroma .vi, .chroma .vm", "code_variable"),
        (".chroma .nc, .chroma .no, .chroma .nd, .chroma .ni, .chroma .ne, .chroma .nl, "
         ".chroma .nn, .chroma .nt", "code_type"),
        (".chroma .o, .chroma .ow", "code_operator"),
        (".chroma .p", "code_punctuation"),
    ),
}


def generate_syntax_css(theme: Theme, options: SyntaxOptions = SyntaxOptions()) -> str:
    """Generate token color rules for Prism, Highlight.js or Chroma.

    With use_variables the rules reference the theme's CSS variables, so the
    output pairs with generate_css() using the same prefix.
    """
    prefix = _prefix(options)
    nl = "" if options.minify else "\n"
    indent = "" if options.minify else "    "

    parts: List[str] = []
    for selector, slot in SYNTAX_RULES[SyntaxFormat(options.format)]:
        if options.use_variables:
            value = getattr(theme, slot).css_var(variable_name(slot), prefix)
        else:
            value = format_color(getattr(theme, slot))
        parts.append(f"{selector} {{{nl}{indent}color: {value};{nl}}}{nl}")

    return "".join(parts)
