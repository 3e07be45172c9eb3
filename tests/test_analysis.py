"""Tests for theme accessibility analysis."""

import pytest

from themekit.theme_engine import (
    Theme,
    analyze_all,
    analyze_theme,
    compare_themes,
    copy_theme,
    filter_accessible,
    resolve_pairs,
    sort_by_accessibility,
    validate_contrast,
)


class TestAnalyzeTheme:
    """Test single theme statistics."""

    def test_mono_stats(self, mono_theme):
        """Test figures for a theme where every set pair passes."""
        stats = analyze_theme(mono_theme)
        assert stats.theme_id == "mono"
        assert stats.total_pairs == 14
        # Code keyword and string have no source in mono
        assert stats.accessible_pairs == 12
        assert stats.accessibility_percent == pytest.approx(12 / 14 * 100)
        assert stats.is_dark is True
        assert stats.background_luminance == pytest.approx(0.0)

    def test_low_stats(self, low_theme):
        """Test figures for a theme where nothing passes AA."""
        stats = analyze_theme(low_theme)
        assert stats.accessible_pairs == 0
        assert stats.accessibility_percent == 0.0

    def test_agrees_with_validator(self, dracula_seed, low_theme, mono_theme):
        """Test that accessible pairs plus AA issues cover every complete pair."""
        for theme in (dracula_seed, low_theme, mono_theme):
            complete = sum(1 for p in resolve_pairs(theme) if p.is_complete)
            stats = analyze_theme(theme)
            assert stats.accessible_pairs + len(validate_contrast(theme, "AA")) == complete

    def test_color_counts(self):
        """Test counting set and unique colors."""
        theme = Theme(background="#000000", text_primary="#ffffff", accent="#ffffff")
        stats = analyze_theme(theme)
        assert stats.color_count == 3
        assert stats.unique_colors == 2

    def test_empty_theme(self):
        """Test statistics of a theme with no colors."""
        stats = analyze_theme(Theme(id="empty"))
        assert stats.color_count == 0
        assert stats.contrast_score == 0.0
        assert stats.average_text_luminance == 0.0
        assert stats.is_dark is False

    def test_average_text_luminance(self):
        """Test averaging over the set text colors only."""
        theme = Theme(text_primary="#ffffff", text_muted="#000000")
        assert analyze_theme(theme).average_text_luminance == pytest.approx(0.5)


class TestCompareThemes:
    """Test theme comparison."""

    def test_compare(self, mono_theme, low_theme):
        """Test comparing an accessible and an inaccessible theme."""
        result = compare_themes(low_theme, mono_theme)
        assert result.theme_a == "low"
        assert result.theme_b == "mono"
        assert result.more_accessible == "mono"
        assert result.access_diff == pytest.approx(
            result.stats_b.accessibility_percent - result.stats_a.accessibility_percent)
        assert result.access_diff > 0
        assert result.same_dark_mode is True

    def test_tie_favors_first(self, mono_theme):
        """Test that equal scores report the first theme."""
        other = copy_theme(mono_theme, "mono2", "Mono 2")
        assert compare_themes(mono_theme, other).more_accessible == "mono"
        assert compare_themes(other, mono_theme).more_accessible == "mono2"


class TestCollections:
    """Test analysis over several themes."""

    def test_analyze_all(self, mono_theme, low_theme):
        """Test analyzing a list of themes."""
        stats = analyze_all([mono_theme, low_theme])
        assert [s.theme_id for s in stats] == ["mono", "low"]

    def test_filter_accessible(self, mono_theme, low_theme):
        """Test filtering by accessibility percent."""
        assert filter_accessible([low_theme, mono_theme], 50) == [mono_theme]
        assert filter_accessible([low_theme, mono_theme], 0) == [low_theme, mono_theme]

    def test_sort_by_accessibility(self, mono_theme, low_theme):
        """Test descending order with stable ties."""
        low2 = copy_theme(low_theme, "low2", "Low 2")
        ordered = sort_by_accessibility([low_theme, mono_theme, low2])
        assert [t.id for t in ordered] == ["mono", "low", "low2"]
