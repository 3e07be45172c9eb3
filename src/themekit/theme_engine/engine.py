"""Theme engine facade.

This module provides the ThemeEngine class that resolves themes from a
registry, renders them into any supported output format with caching, and
runs contrast audits and fixes. It also compiles a theme into a Rich theme so
terminal output can use the theme's own colors.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from rich.theme import Theme as RichTheme

from .analysis import ThemeStats, analyze_theme
from .autofix import auto_fix_contrast
from .color import Color
from .contrast import ContrastLevel
from .errors import ThemeNotFoundError
from .output import (
    ColorSpace,
    CSSOptions,
    OutputFormat,
    SyntaxOptions,
    generate_css,
    generate_json,
    generate_scss,
    generate_syntax_css,
)
from .registry import ThemeRegistry
from .schema import Severity, Theme
from .tokens import TokenOptions, generate_design_tokens
from .validation import ContrastIssue, ValidationError, validate_contrast, validate_theme

logger = logging.getLogger(__name__)


RenderOptions = Union[CSSOptions, SyntaxOptions, TokenOptions]


@dataclass(frozen=True)
class AuditReport:
    """Structural issues, contrast issues and statistics for one theme."""
    theme: Theme
    level: ContrastLevel
    structural: List[ValidationError]
    contrast: List[ContrastIssue]
    stats: ThemeStats

    @property
    def errors(self) -> List[ValidationError]:
        return [e for e in self.structural if e.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationError]:
        return [e for e in self.structural if e.severity is Severity.WARNING]

    @property
    def passed(self) -> bool:
        """True when there are no structural errors and no contrast issues."""
        return not self.errors and not self.contrast


def _rich_color(color: Color) -> str:
    # Rich has no alpha channel; use the opaque RGB value
    return Color.from_rgb(*color.rgb()).hex


def to_rich_theme(theme: Theme) -> RichTheme:
    """Compile a theme into Rich styles named after its color slots.

    Every set color becomes a foreground style ('theme.accent') and every
    color is also exposed as a background style ('theme.on.background').
    """
    styles: Dict[str, str] = {}
    for slot, color in theme.iter_colors():
        if color.is_empty:
            continue
        styles[f"theme.{slot}"] = _rich_color(color)
        styles[f"theme.on.{slot}"] = f"on {_rich_color(color)}"

    if theme.text_primary and theme.background:
        styles["theme.body"] = f"{_rich_color(theme.text_primary)} on {_rich_color(theme.background)}"
    return RichTheme(styles)


class ThemeEngine:
    """Resolves, renders, audits and fixes themes from a registry."""

    def __init__(self, registry: ThemeRegistry,
                 css_options: Optional[CSSOptions] = None,
                 contrast_level: ContrastLevel = ContrastLevel.AA):
        """Initialize the theme engine.

        Args:
            registry: Registry the engine resolves theme names against
            css_options: Defaults for CSS, SCSS and JSON rendering
            contrast_level: Default level for audit() and fix()
        """
        self.registry = registry
        self.css_options = css_options or CSSOptions()
        self.contrast_level = contrast_level

        # Rendered output cache ((theme, format, options) -> text)
        self._render_cache: Dict[Tuple[Theme, OutputFormat, RenderOptions], str] = {}

        logger.debug(f"ThemeEngine initialized with {len(registry)} themes")

    @classmethod
    def from_config(cls, config, themes_dir: Optional[Path] = None) -> "ThemeEngine":
        """Create theme engine from application config.

        Args:
            config: ConfigModel instance
            themes_dir: Optional extra themes directory, loaded last

        Returns:
            ThemeEngine instance
        """
        extra_dirs = []
        if config.user_themes_dir and Path(config.user_themes_dir).is_dir():
            extra_dirs.append(config.user_themes_dir)
        if themes_dir is not None:
            extra_dirs.append(themes_dir)

        registry = ThemeRegistry.with_builtin_themes(config.default_theme, extra_dirs)
        css_options = CSSOptions(prefix=config.css_prefix, color_space=ColorSpace(config.color_space))
        return cls(registry, css_options, ContrastLevel.parse(config.contrast_level))

    def get_theme(self, name: Optional[str] = None) -> Theme:
        """Resolve a theme by id; None means the registry's current theme.

        Raises:
            ThemeNotFoundError: If no such theme is registered
        """
        theme = self.registry.current if name is None else self.registry.get(name)
        if theme is None:
            raise ThemeNotFoundError(f"Theme '{name}' not found" if name else "No current theme")
        return theme

    def list_themes(self) -> List[Theme]:
        return self.registry.themes()

    def render(self, name: Optional[str] = None, fmt: OutputFormat = OutputFormat.CSS,
               options: Optional[RenderOptions] = None) -> str:
        """Render a theme in the requested format.

        Args:
            name: Theme id, or None for the current theme
            fmt: Output format
            options: CSSOptions, SyntaxOptions or TokenOptions matching fmt;
                defaults are used when omitted

        Returns:
            Rendered text

        Raises:
            ThemeNotFoundError: If the theme is not registered
            TypeError: If options do not match the format
        """
        theme = self.get_theme(name)
        fmt = OutputFormat(fmt)
        options = self._resolve_options(fmt, options)

        cache_key = (theme, fmt, options)
        if cache_key in self._render_cache:
            return self._render_cache[cache_key]

        if fmt is OutputFormat.CSS:
            text = generate_css(theme, options)
        elif fmt is OutputFormat.SCSS:
            text = generate_scss(theme, options)
        elif fmt is OutputFormat.JSON:
            text = generate_json(theme, options)
        elif fmt is OutputFormat.TOKENS:
            text = generate_design_tokens(theme, options)
        else:
            text = generate_syntax_css(theme, options)

        self._render_cache[cache_key] = text
        return text

    def _resolve_options(self, fmt: OutputFormat, options: Optional[RenderOptions]) -> RenderOptions:
        expected = {
            OutputFormat.TOKENS: TokenOptions,
            OutputFormat.SYNTAX: SyntaxOptions,
        }.get(fmt, CSSOptions)

        if options is None:
            if expected is CSSOptions:
                return self.css_options
            if expected is SyntaxOptions:
                return SyntaxOptions(prefix=self.css_options.prefix)
            return TokenOptions()

        if not isinstance(options, expected):
            raise TypeError(f"{fmt.value} output expects {expected.__name__}, "
                            f"got {type(options).__name__}")
        return options

    def audit(self, name: Optional[str] = None,
              level: Optional[Union[ContrastLevel, str]] = None) -> AuditReport:
        """Run structural and contrast validation plus analysis on a theme."""
        theme = self.get_theme(name)
        level = ContrastLevel.parse(level) if level is not None else self.contrast_level

        return AuditReport(
            theme=theme,
            level=level,
            structural=validate_theme(theme),
            contrast=validate_contrast(theme, level),
            stats=analyze_theme(theme),
        )

    def fix(self, name: Optional[str] = None,
            level: Optional[Union[ContrastLevel, str]] = None) -> Theme:
        """Auto-fix a theme's contrast and register the result."""
        theme = self.get_theme(name)
        level = ContrastLevel.parse(level) if level is not None else self.contrast_level

        fixed = auto_fix_contrast(theme, level)
        if fixed.id != theme.id:
            self.registry.register(fixed)
            logger.info(f"Registered fixed theme '{fixed.id}'")
        return fixed

    def rich_theme(self, name: Optional[str] = None) -> RichTheme:
        return to_rich_theme(self.get_theme(name))

    def clear_cache(self) -> None:
        """Clear the rendered output cache."""
        self._render_cache.clear()
        logger.debug("Theme engine cache cleared")
