"""Structural and WCAG contrast validation for themes.

All findings are returned as plain lists of values. An empty list means the
theme passed; nothing here raises for an expected problem with a theme.
StrictReport.raise_for_failure() exists for callers that gate on exceptions.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Union

from .color import Color
from .contrast import ContrastLevel
from .errors import StrictValidationError
from .roles import resolve_pairs
from .schema import Severity, Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationError:
    """A structural problem with a theme's metadata or colors."""
    field: str
    message: str
    severity: Severity

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.field}: {self.message}"


@dataclass(frozen=True)
class ContrastIssue:
    """A standard color pair that falls below the required contrast ratio."""
    foreground_name: str
    background_name: str
    foreground: Color
    background: Color
    ratio: float
    required_ratio: float
    level: str

    def __str__(self) -> str:
        return (f"{self.foreground_name} on {self.background_name}: "
                f"{self.ratio:.2f}:1 (requires {self.required_ratio:.1f}:1 for {self.level})")


# ANSI slots a terminal theme is expected to define
_REQUIRED_ANSI = (
    ("Black", "black"),
    ("Red", "red"),
    ("Green", "green"),
    ("Blue", "blue"),
    ("White", "white"),
)


def validate_theme(theme: Theme) -> List[ValidationError]:
    """Check a theme for missing required values and suspicious settings.

    Args:
        theme: Theme to check

    Returns:
        Errors for missing id, display name, background or primary text;
        warnings for missing ANSI colors and light/dark inconsistencies
    """
    errors: List[ValidationError] = []

    # Required fields
    if not theme.id:
        errors.append(ValidationError("ID", "theme ID is required", Severity.ERROR))
    if not theme.display_name:
        errors.append(ValidationError("DisplayName", "display name is required", Severity.ERROR))
    if theme.background.is_empty:
        errors.append(ValidationError("Background", "background color is required", Severity.ERROR))
    if theme.text_primary.is_empty:
        errors.append(ValidationError("TextPrimary", "primary text color is required", Severity.ERROR))

    # ANSI presence
    for label, name in _REQUIRED_ANSI:
        if getattr(theme, name).is_empty:
            errors.append(ValidationError(label, "ANSI color is empty or transparent", Severity.WARNING))

    # Mode/color consistency
    if not theme.background.is_empty and not theme.text_primary.is_empty:
        dark_bg = theme.background.is_dark()
        dark_text = theme.text_primary.is_dark()

        if theme.is_dark is True and not dark_bg:
            errors.append(ValidationError(
                "IsDark", "theme is marked as dark but has a light background", Severity.WARNING))
        if theme.is_dark is False and dark_bg:
            errors.append(ValidationError(
                "IsDark", "theme is marked as light but has a dark background", Severity.WARNING))
        if dark_bg == dark_text:
            errors.append(ValidationError(
                "TextPrimary", "text and background have similar luminance, may be hard to read",
                Severity.WARNING))

    return errors


def validate_contrast(theme: Theme,
                      level: Union[ContrastLevel, str] = ContrastLevel.AA) -> List[ContrastIssue]:
    """Check every standard color pair against a WCAG level.

    Pairs where either color is unset are skipped. Only normal-text thresholds
    apply: 4.5:1 for AA and 7:1 for AAA.

    Args:
        theme: Theme to check
        level: ContrastLevel or its name ('AA', 'AAA')

    Returns:
        Failing pairs in taxonomy order
    """
    level = ContrastLevel.parse(level)
    required = level.required_ratio
    issues: List[ContrastIssue] = []

    for pair in resolve_pairs(theme):
        if not pair.is_complete:
            continue

        ratio = pair.fg.contrast_ratio(pair.bg)
        if ratio < required:
            issues.append(ContrastIssue(
                foreground_name=pair.fg_name,
                background_name=pair.bg_name,
                foreground=pair.fg,
                background=pair.bg,
                ratio=ratio,
                required_ratio=required,
                level=level.value,
            ))

    if issues:
        logger.debug(f"Theme '{theme.id}' has {len(issues)} {level.value} contrast issues")
    return issues


@dataclass(frozen=True)
class StrictReport:
    """Combined result of structural errors and contrast issues."""
    messages: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.messages

    @property
    def message(self) -> str:
        return "; ".join(self.messages)

    def raise_for_failure(self) -> None:
        """Raise StrictValidationError if any problem was found."""
        if self.messages:
            raise StrictValidationError(self.messages)

    def __bool__(self) -> bool:
        return self.passed


def _validate_strict(theme: Theme, level: ContrastLevel) -> StrictReport:
    # Warnings never fail strict validation
    messages = [str(e) for e in validate_theme(theme) if e.severity is Severity.ERROR]
    messages.extend(str(issue) for issue in validate_contrast(theme, level))
    return StrictReport(messages)


def validate_strict(theme: Theme) -> StrictReport:
    """Structural errors plus AA contrast issues as a single pass/fail report."""
    return _validate_strict(theme, ContrastLevel.AA)


def validate_strict_aaa(theme: Theme) -> StrictReport:
    """Structural errors plus AAA contrast issues as a single pass/fail report."""
    return _validate_strict(theme, ContrastLevel.AAA)
