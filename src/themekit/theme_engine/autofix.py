"""Automatic correction of failing contrast pairs.

Foreground colors are nudged in lightness, lighter on dark themes and darker
on light ones, until they clear the required ratio against their background.
Backgrounds and semantic groups are never touched so the theme keeps its
identity. Running out of steps is not an error: the best color seen is
used as-is.
"""

import logging
from typing import Dict, FrozenSet, Set, Union

from .color import Color
from .contrast import ContrastLevel
from .derivation import copy_theme
from .roles import ColorRole
from .schema import Theme
from .validation import validate_contrast

logger = logging.getLogger(__name__)


# Lightness change applied per adjustment step
ADJUST_STEP = 0.05

# Upper bound on adjustment steps for a single color
MAX_ADJUST_STEPS = 50

# Foreground roles the fixer may rewrite
FIXABLE_ROLES: FrozenSet[ColorRole] = frozenset({
    ColorRole.TEXT_PRIMARY,
    ColorRole.TEXT_SECONDARY,
    ColorRole.TEXT_MUTED,
    ColorRole.TEXT_INVERTED,
    ColorRole.ACCENT,
    ColorRole.ACCENT_SECONDARY,
    ColorRole.BRAND,
    ColorRole.BORDER,
    ColorRole.BORDER_SUBTLE,
    ColorRole.BORDER_STRONG,
    ColorRole.CODE_TEXT,
    ColorRole.CODE_COMMENT,
    ColorRole.CODE_KEYWORD,
    ColorRole.CODE_STRING,
})


def adjust_color_for_contrast(fg: Color, bg: Color, required_ratio: float,
                              is_dark: bool) -> Color:
    """Step a foreground color's lightness until it meets a contrast ratio.

    Args:
        fg: Foreground color to adjust
        bg: Background it is measured against (never changed)
        required_ratio: Target contrast ratio, e.g. 4.5
        is_dark: Lighten the foreground when True, darken it when False

    Returns:
        fg itself if it already passes, otherwise the first color that does;
        when MAX_ADJUST_STEPS run out, the color with the best ratio seen
        (possibly fg itself) is returned even if it still falls short
    """
    best, best_ratio = fg, fg.contrast_ratio(bg)
    if best_ratio >= required_ratio:
        return fg

    adjusted = fg
    for _ in range(MAX_ADJUST_STEPS):
        adjusted = adjusted.lighten(ADJUST_STEP) if is_dark else adjusted.darken(ADJUST_STEP)
        ratio = adjusted.contrast_ratio(bg)
        if ratio >= required_ratio:
            return adjusted
        if ratio > best_ratio:
            best, best_ratio = adjusted, ratio

    return best


def auto_fix_contrast(theme: Theme,
                      level: Union[ContrastLevel, str] = ContrastLevel.AA) -> Theme:
    """Return a theme whose fixable foreground colors meet a WCAG level.

    A theme without contrast issues comes back as an unchanged copy with the
    same id. Otherwise the result is a new theme with id '<id>-fixed' and
    display name '<name> (Fixed)'. An adjustment is only kept when it does
    not raise the theme's issue count, since one foreground is shared by
    several pairs.
    """
    level = ContrastLevel.parse(level)
    issues = validate_contrast(theme, level)
    if not issues:
        return copy_theme(theme, theme.id, theme.display_name)

    updates: Dict[str, Color] = {}
    seen: Set[str] = set()
    issue_count = len(issues)

    for issue in issues:
        # Each foreground is fixed once, against the first pair it fails
        if issue.foreground_name in seen:
            continue
        seen.add(issue.foreground_name)

        role = ColorRole.lookup(issue.foreground_name)
        if role not in FIXABLE_ROLES:
            logger.debug(f"Skipping {issue.foreground_name}: role is not auto-fixable")
            continue

        adjusted = adjust_color_for_contrast(
            issue.foreground, issue.background, issue.required_ratio, theme.dark
        )
        if adjusted == issue.foreground:
            continue

        candidate = theme.model_copy(update={**updates, role.field_name: adjusted})
        candidate_count = len(validate_contrast(candidate, level))
        if candidate_count > issue_count:
            logger.debug(
                f"Keeping {issue.foreground_name} {issue.foreground}: adjusting it "
                f"would raise issues from {issue_count} to {candidate_count}"
            )
            continue

        updates[role.field_name] = adjusted
        issue_count = candidate_count
        logger.debug(
            f"Adjusted {issue.foreground_name} {issue.foreground} -> {adjusted} "
            f"({issue.ratio:.2f}:1 -> {adjusted.contrast_ratio(issue.background):.2f}:1)"
        )

    logger.info(f"Auto-fixed {len(updates)} colors in theme '{theme.id}' for {level.value}")

    updates_meta = {
        "id": f"{theme.id}-fixed",
        "display_name": f"{theme.display_name} (Fixed)",
        "description": f"{theme.description} - WCAG contrast adjusted",
    }
    return theme.model_copy(update={**updates, **updates_meta})
