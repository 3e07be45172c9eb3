"""themekit Theme Engine Package.

This package provides the theme data model with color derivation from a seed
palette, WCAG contrast validation over a fixed set of color pairs, automatic
contrast fixing, accessibility analysis, and renderers for CSS, SCSS, JSON,
design tokens and syntax highlighting CSS.
"""

from .analysis import (
    ThemeComparison,
    ThemeStats,
    analyze_all,
    analyze_theme,
    compare_themes,
    filter_accessible,
    sort_by_accessibility,
)
from .autofix import FIXABLE_ROLES, adjust_color_for_contrast, auto_fix_contrast
from .color import Color
from .contrast import (
    MIN_AA,
    MIN_AA_LARGE,
    MIN_AAA,
    MIN_AAA_LARGE,
    MIN_UI_COMPONENT,
    ContrastLevel,
    WCAGLevel,
    calculate_contrast_ratio,
    calculate_luminance,
    check_hex,
    classify,
    hex_to_rgb,
    meets_ui_component,
    meets_wcag_contrast,
    rgb_to_hex,
)
from .derivation import (
    ThemeBuilder,
    copy_theme,
    derive_theme,
    derive_variant,
    generate_theme_from_palette,
)
from .engine import AuditReport, ThemeEngine, to_rich_theme
from .errors import StrictValidationError, ThemeKitError, ThemeLoadError, ThemeNotFoundError
from .output import (
    ColorSpace,
    CSSOptions,
    OutputFormat,
    SyntaxFormat,
    SyntaxOptions,
    generate_all_themes_css,
    generate_css,
    generate_json,
    generate_scss,
    generate_syntax_css,
)
from .registry import ThemeRegistry, load_theme_file, save_theme_file
from .roles import STANDARD_PAIRS, ColorRole, PairSpec, ResolvedPair, resolve_pairs, resolve_role
from .schema import Palette, SemanticColor, Severity, Theme
from .tokens import TokenOptions, generate_all_design_tokens, generate_design_tokens
from .validation import (
    ContrastIssue,
    StrictReport,
    ValidationError,
    validate_contrast,
    validate_strict,
    validate_strict_aaa,
    validate_theme,
)

__all__ = [
    # Main classes
    "ThemeEngine",
    "ThemeRegistry",
    "ThemeBuilder",
    "AuditReport",

    # Data model
    "Color",
    "Theme",
    "SemanticColor",
    "Palette",
    "Severity",

    # Enums
    "ColorRole",
    "ContrastLevel",
    "WCAGLevel",
    "OutputFormat",
    "ColorSpace",
    "SyntaxFormat",

    # Pair taxonomy
    "PairSpec",
    "ResolvedPair",
    "STANDARD_PAIRS",
    "resolve_pairs",
    "resolve_role",

    # Derivation
    "derive_theme",
    "derive_variant",
    "copy_theme",
    "generate_theme_from_palette",

    # Validation and fixing
    "ValidationError",
    "ContrastIssue",
    "StrictReport",
    "validate_theme",
    "validate_contrast",
    "validate_strict",
    "validate_strict_aaa",
    "FIXABLE_ROLES",
    "adjust_color_for_contrast",
    "auto_fix_contrast",

    # Analysis
    "ThemeStats",
    "ThemeComparison",
    "analyze_theme",
    "analyze_all",
    "compare_themes",
    "filter_accessible",
    "sort_by_accessibility",

    # Output
    "CSSOptions",
    "SyntaxOptions",
    "TokenOptions",
    "generate_css",
    "generate_all_themes_css",
    "generate_scss",
    "generate_json",
    "generate_syntax_css",
    "generate_design_tokens",
    "generate_all_design_tokens",
    "to_rich_theme",

    # Files
    "load_theme_file",
    "save_theme_file",

    # Errors
    "ThemeKitError",
    "ThemeLoadError",
    "ThemeNotFoundError",
    "StrictValidationError",

    # Contrast utilities
    "MIN_AA",
    "MIN_AA_LARGE",
    "MIN_AAA",
    "MIN_AAA_LARGE",
    "MIN_UI_COMPONENT",
    "hex_to_rgb",
    "rgb_to_hex",
    "calculate_luminance",
    "calculate_contrast_ratio",
    "meets_wcag_contrast",
    "meets_ui_component",
    "classify",
    "check_hex",
]
