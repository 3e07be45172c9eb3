"""Accessibility statistics for themes.

Scores are computed over the same standard pairs the contrast validator
checks, so a theme's accessibility percent and its AA issue count always
agree.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .color import Color
from .contrast import MIN_AA
from .roles import STANDARD_PAIRS, resolve_pairs
from .schema import Theme


@dataclass(frozen=True)
class ThemeStats:
    """Color usage and accessibility figures for one theme."""
    theme_id: str
    color_count: int
    unique_colors: int
    contrast_score: float
    accessible_pairs: int
    total_pairs: int
    accessibility_percent: float
    is_dark: bool
    average_text_luminance: float
    background_luminance: float


@dataclass(frozen=True)
class ThemeComparison:
    """Side-by-side statistics for two themes; diffs are b minus a."""
    theme_a: str
    theme_b: str
    stats_a: ThemeStats
    stats_b: ThemeStats
    contrast_diff: float
    access_diff: float
    unique_diff: int
    same_dark_mode: bool
    more_accessible: str


def _average_luminance(colors: Iterable[Color]) -> float:
    values = [c.relative_luminance() for c in colors if not c.is_empty]
    if not values:
        return 0.0
    return sum(values) / len(values)


def analyze_theme(theme: Theme) -> ThemeStats:
    """Return statistics about a theme's colors and AA accessibility.

    The contrast score is the sum of the measured pair ratios divided by the
    full number of standard pairs, so unset pairs pull the score down.
    """
    colors = [color for _, color in theme.iter_colors() if not color.is_empty]

    total_ratio = 0.0
    accessible = 0
    for pair in resolve_pairs(theme):
        if not pair.is_complete:
            continue
        ratio = pair.fg.contrast_ratio(pair.bg)
        total_ratio += ratio
        if ratio >= MIN_AA:
            accessible += 1

    total_pairs = len(STANDARD_PAIRS)

    return ThemeStats(
        theme_id=theme.id,
        color_count=len(colors),
        unique_colors=len({c.hex for c in colors}),
        contrast_score=total_ratio / total_pairs,
        accessible_pairs=accessible,
        total_pairs=total_pairs,
        accessibility_percent=accessible / total_pairs * 100,
        is_dark=theme.dark,
        average_text_luminance=_average_luminance(
            (theme.text_primary, theme.text_secondary, theme.text_muted)
        ),
        background_luminance=(
            0.0 if theme.background.is_empty else theme.background.relative_luminance()
        ),
    )


def compare_themes(a: Theme, b: Theme) -> ThemeComparison:
    """Compare two themes; ties in accessibility favor a."""
    stats_a = analyze_theme(a)
    stats_b = analyze_theme(b)

    if stats_a.accessibility_percent >= stats_b.accessibility_percent:
        more_accessible = a.id
    else:
        more_accessible = b.id

    return ThemeComparison(
        theme_a=a.id,
        theme_b=b.id,
        stats_a=stats_a,
        stats_b=stats_b,
        contrast_diff=stats_b.contrast_score - stats_a.contrast_score,
        access_diff=stats_b.accessibility_percent - stats_a.accessibility_percent,
        unique_diff=stats_b.unique_colors - stats_a.unique_colors,
        same_dark_mode=stats_a.is_dark == stats_b.is_dark,
        more_accessible=more_accessible,
    )


def analyze_all(themes: Iterable[Theme]) -> List[ThemeStats]:
    return [analyze_theme(t) for t in themes]


def filter_accessible(themes: Iterable[Theme], min_percent: float) -> List[Theme]:
    """Themes whose accessibility percent is at least min_percent (0-100)."""
    return [t for t in themes if analyze_theme(t).accessibility_percent >= min_percent]


def sort_by_accessibility(themes: Sequence[Theme]) -> List[Theme]:
    """Themes ordered from most to least accessible; equal scores keep input order."""
    scored = [(analyze_theme(t).accessibility_percent, t) for t in themes]
    scored.sort(key=lambda item: item[0], reverse=True)
    return [t for _, t in scored]
