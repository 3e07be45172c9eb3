"""Tests for the ThemeEngine facade."""

import json

import pytest
from rich.theme import Theme as RichTheme

from themekit.config import ConfigModel
from themekit.theme_engine import (
    ColorSpace,
    ContrastLevel,
    CSSOptions,
    OutputFormat,
    SyntaxOptions,
    ThemeEngine,
    ThemeNotFoundError,
    TokenOptions,
    to_rich_theme,
)


class TestThemeEngine:
    """Test rendering, auditing and fixing through the engine."""

    def setup_method(self):
        self.css_options = CSSOptions(prefix="app")

    def test_get_theme(self, registry):
        """Test resolving by id and the current theme."""
        engine = ThemeEngine(registry)
        assert engine.get_theme("low").id == "low"
        assert engine.get_theme().id == "mono"

    def test_get_missing_theme(self, registry):
        """Test that unknown ids raise ThemeNotFoundError."""
        engine = ThemeEngine(registry)
        with pytest.raises(ThemeNotFoundError) as exc_info:
            engine.get_theme("nope")
        assert str(exc_info.value) == "Theme 'nope' not found"
        with pytest.raises(KeyError):
            engine.get_theme("nope")

    def test_list_themes(self, registry):
        """Test listing themes in id order."""
        assert [t.id for t in ThemeEngine(registry).list_themes()] == ["dracula", "low", "mono"]

    def test_render_formats(self, registry):
        """Test rendering each output format."""
        engine = ThemeEngine(registry, self.css_options)
        assert "--app-background: #000000;" in engine.render("mono", OutputFormat.CSS)
        assert "$app-background: #000000;" in engine.render("mono", "scss")
        assert json.loads(engine.render("mono", OutputFormat.JSON))["background"] == "#000000"
        tokens = json.loads(engine.render("mono", OutputFormat.TOKENS))
        assert tokens["meta"]["id"]["$value"] == "mono"
        assert "var(--app-code-comment)" in engine.render("mono", OutputFormat.SYNTAX)

    def test_render_with_options(self, registry):
        """Test explicit options override the engine defaults."""
        engine = ThemeEngine(registry, self.css_options)
        css = engine.render("mono", OutputFormat.CSS, CSSOptions(color_space=ColorSpace.RGB))
        assert "--theme-background: rgb(0, 0, 0);" in css
        tokens = engine.render("mono", OutputFormat.TOKENS, TokenOptions(indent=None))
        assert "\n" not in tokens

    def test_render_cache(self, registry):
        """Test that repeated renders are cached until cleared."""
        engine = ThemeEngine(registry)
        first = engine.render("mono")
        assert engine.render("mono") is first
        engine.clear_cache()
        assert engine.render("mono") == first

    def test_render_mismatched_options(self, registry):
        """Test that options of the wrong type raise TypeError."""
        engine = ThemeEngine(registry)
        with pytest.raises(TypeError):
            engine.render("mono", OutputFormat.CSS, SyntaxOptions())

    def test_audit(self, registry):
        """Test audit reports for passing and failing themes."""
        engine = ThemeEngine(registry)

        report = engine.audit("mono")
        assert report.passed
        assert report.level is ContrastLevel.AA
        assert report.errors == []
        assert report.warnings
        assert report.stats.theme_id == "mono"

        report = engine.audit("low", "AAA")
        assert not report.passed
        assert report.level is ContrastLevel.AAA
        assert report.contrast

    def test_fix_registers_result(self, registry):
        """Test that fixing registers the fixed theme."""
        engine = ThemeEngine(registry)
        fixed = engine.fix("low")
        assert fixed.id == "low-fixed"
        assert registry.get("low-fixed") == fixed

    def test_fix_passing_theme(self, registry):
        """Test that a passing theme is returned without registering a copy."""
        engine = ThemeEngine(registry, contrast_level=ContrastLevel.AAA)
        fixed = engine.fix("mono")
        assert fixed.id == "mono"
        assert len(registry) == 3

    def test_from_config(self, tmp_path):
        """Test building an engine from configuration."""
        config = ConfigModel(default_theme="nord", user_themes_dir=str(tmp_path / "none"),
                             contrast_level="AAA", css_prefix="ui", color_space="rgb")
        engine = ThemeEngine.from_config(config)
        assert engine.get_theme().id == "nord"
        assert engine.contrast_level is ContrastLevel.AAA
        assert engine.css_options.prefix == "ui"
        assert engine.css_options.color_space is ColorSpace.RGB

    def test_from_config_themes_dir(self, themes_dir):
        """Test that an extra themes directory is loaded."""
        config = ConfigModel(default_theme="ocean", user_themes_dir=None)
        engine = ThemeEngine.from_config(config, themes_dir=themes_dir)
        assert engine.get_theme().id == "ocean"
        assert engine.get_theme("dracula").id == "dracula"


class TestRichTheme:
    """Test compiling themes into Rich styles."""

    def test_styles(self, dracula_seed):
        """Test foreground, background and body styles."""
        rich_theme = to_rich_theme(dracula_seed)
        assert isinstance(rich_theme, RichTheme)
        assert rich_theme.styles["theme.accent"].color.triplet.hex == "#bd93f9"
        assert "theme.on.background" in rich_theme.styles
        assert "theme.success.text" in rich_theme.styles
        assert "theme.body" in rich_theme.styles

    def test_unset_colors_skipped(self, dracula_seed):
        """Test that unset slots have no style."""
        assert "theme.red" not in to_rich_theme(dracula_seed).styles

    def test_alpha_dropped(self, dracula_seed):
        """Test that translucent colors become opaque styles."""
        style = to_rich_theme(dracula_seed).styles["theme.text_secondary"]
        assert style.color.triplet.hex == "#f8f8f2"
