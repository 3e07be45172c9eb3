"""themekit - Theme data, color derivation and WCAG contrast tooling."""

__version__ = "0.1.0"

from .theme_engine import (
    Color,
    Theme,
    ThemeBuilder,
    ThemeEngine,
    ThemeRegistry,
    auto_fix_contrast,
    derive_theme,
    validate_contrast,
    validate_theme,
)

__all__ = [
    "Color",
    "Theme",
    "ThemeBuilder",
    "ThemeEngine",
    "ThemeRegistry",
    "auto_fix_contrast",
    "derive_theme",
    "validate_contrast",
    "validate_theme",
    "__version__",
]
