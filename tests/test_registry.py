"""Tests for the theme registry and theme files."""

import threading

import pytest

from themekit.theme_engine import (
    Severity,
    ThemeLoadError,
    ThemeRegistry,
    load_theme_file,
    save_theme_file,
    validate_theme,
)
from themekit.theme_engine.registry import BUILTIN_THEMES_DIR


class TestThemeFiles:
    """Test loading and saving theme files."""

    def test_load_yaml(self, themes_dir):
        """Test loading YAML with id and dark flag defaults."""
        theme = load_theme_file(themes_dir / "ocean.yaml")
        assert theme.id == "ocean"
        assert theme.display_name == "Ocean"
        assert theme.background.hex == "#0b1d2a"
        # Derived on load
        assert theme.surface
        assert theme.success.text.hex == "#3ddc97"

    def test_load_json(self, themes_dir):
        """Test loading JSON."""
        theme = load_theme_file(themes_dir / "paper.json")
        assert theme.id == "paper"
        assert theme.is_dark is False

    def test_default_display_name(self, tmp_path):
        """Test display name generated from the file name."""
        path = tmp_path / "solar_flare.yaml"
        path.write_text('background: "#000000"\n', encoding="utf-8")
        theme = load_theme_file(path)
        assert theme.id == "solar_flare"
        assert theme.display_name == "Solar Flare"

    def test_semantic_shorthand(self, tmp_path):
        """Test a single hex value for a semantic group."""
        path = tmp_path / "short.yaml"
        path.write_text('success: "#00ff00"\n', encoding="utf-8")
        theme = load_theme_file(path)
        assert theme.success.text.hex == "#00ff00"
        assert theme.success.border.hex == "#00ff004c"

    def test_invalid_yaml(self, tmp_path):
        """Test that malformed YAML raises ThemeLoadError."""
        path = tmp_path / "broken.yaml"
        path.write_text("background: [unclosed\n", encoding="utf-8")
        with pytest.raises(ThemeLoadError):
            load_theme_file(path)

    def test_invalid_definition(self, tmp_path):
        """Test that unknown fields and bad values raise ThemeLoadError."""
        path = tmp_path / "bad.yaml"
        path.write_text("colour: red\n", encoding="utf-8")
        with pytest.raises(ThemeLoadError):
            load_theme_file(path)

        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ThemeLoadError):
            load_theme_file(path)

    def test_missing_and_unsupported(self, tmp_path):
        """Test missing files and unknown extensions."""
        with pytest.raises(ThemeLoadError):
            load_theme_file(tmp_path / "missing.yaml")
        with pytest.raises(ThemeLoadError):
            load_theme_file(tmp_path / "theme.toml")

    def test_load_error_is_value_error(self, tmp_path):
        """Test that load errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            load_theme_file(tmp_path / "theme.txt")

    def test_save_and_reload(self, tmp_path, dracula_seed):
        """Test that a saved theme loads back unchanged."""
        path = save_theme_file(dracula_seed, tmp_path / "out" / "dracula.yaml")
        assert path.exists()
        assert load_theme_file(path) == dracula_seed


class TestThemeRegistry:
    """Test registry operations."""

    def test_current_and_lookup(self, registry):
        """Test the initial current theme and lookups."""
        assert registry.current.id == "mono"
        assert len(registry) == 3
        assert "low" in registry
        assert registry.get("low").id == "low"
        assert registry.get("nope") is None

    def test_sorted_ids(self, registry):
        """Test that themes are listed by id."""
        assert registry.theme_ids() == ["dracula", "low", "mono"]
        assert [t.id for t in registry.themes()] == ["dracula", "low", "mono"]

    def test_set_current(self, registry, low_theme):
        """Test selecting by id and by value."""
        assert registry.set_current("dracula")
        assert registry.current.id == "dracula"
        assert registry.set_current(low_theme)
        assert registry.current.id == "low"
        assert not registry.set_current("nope")
        assert registry.current.id == "low"

    def test_next_wraps(self, registry):
        """Test cycling forward past the last theme."""
        assert registry.next_theme().id == "dracula"
        assert registry.next_theme().id == "low"
        assert registry.next_theme().id == "mono"

    def test_previous_wraps(self, registry):
        """Test cycling backward past the first theme."""
        registry.set_current("dracula")
        assert registry.previous_theme().id == "mono"
        assert registry.previous_theme().id == "low"

    def test_cycle_without_current(self, low_theme):
        """Test that cycling a registry without a current theme does nothing."""
        registry = ThemeRegistry(themes=[low_theme])
        assert registry.current is None
        assert registry.next_theme() is None

    def test_register_replaces(self, registry, mono_theme):
        """Test that registering the same id replaces the theme."""
        renamed = mono_theme.model_copy(update={"display_name": "Mono Renamed"})
        registry.register(renamed)
        assert len(registry) == 3
        assert registry.get("mono").display_name == "Mono Renamed"
        assert registry.current.display_name == "Mono Renamed"

    def test_unregister_current(self, registry):
        """Test that removing the current theme selects the first remaining."""
        registry.unregister("mono")
        assert "mono" not in registry
        assert registry.current.id == "dracula"

    def test_unregister_all(self, registry, low_theme):
        """Test that removing every theme clears the current theme."""
        registry.unregister("mono", low_theme, "dracula")
        assert len(registry) == 0
        assert registry.current is None

    def test_clear(self, registry):
        """Test clearing the registry."""
        registry.clear()
        assert registry.theme_ids() == []
        assert registry.current is None

    def test_load_directory(self, themes_dir):
        """Test loading a directory with a broken file."""
        (themes_dir / "broken.yaml").write_text("background: [\n", encoding="utf-8")
        (themes_dir / "notes.txt").write_text("not a theme", encoding="utf-8")

        registry = ThemeRegistry()
        loaded = registry.load_directory(themes_dir)

        assert sorted(t.id for t in loaded) == ["ocean", "paper"]
        assert registry.theme_ids() == ["ocean", "paper"]
        errors = registry.load_errors()
        assert len(errors) == 1
        assert next(iter(errors)).endswith("broken.yaml")

    def test_load_missing_directory(self, tmp_path):
        """Test that a missing directory loads nothing."""
        assert ThemeRegistry().load_directory(tmp_path / "missing") == []

    def test_concurrent_access(self, registry, mono_theme):
        """Test writers and readers running at the same time."""
        errors = []
        new_themes = [mono_theme.model_copy(update={"id": f"thread-{i}"}) for i in range(40)]

        def writer(chunk):
            try:
                for theme in chunk:
                    registry.register(theme)
                    registry.set_current(theme.id)
                    registry.next_theme()
            except Exception as e:
                errors.append(e)

        def reader():
            try:
                for _ in range(200):
                    for theme in registry.themes():
                        assert registry.get(theme.id) is not None
                    assert len(registry) >= 3
                    assert registry.current is not None
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=writer, args=(new_themes[i::4],)) for i in range(4)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(registry) == 43
        assert registry.current.id in registry.theme_ids()


class TestBuiltinThemes:
    """Test the bundled presets."""

    def test_presets_load(self):
        """Test that every preset file loads without errors."""
        registry = ThemeRegistry.with_builtin_themes()
        assert registry.load_errors() == {}
        assert len(registry) == len(list(BUILTIN_THEMES_DIR.glob("*.yaml")))
        assert registry.current.id == "dracula"

    def test_presets_are_complete(self):
        """Test that presets have no structural errors."""
        for theme in ThemeRegistry.with_builtin_themes().themes():
            errors = [e for e in validate_theme(theme) if e.severity is Severity.ERROR]
            assert errors == [], theme.id
            assert theme.is_dark is not None

    def test_unknown_default(self):
        """Test fallback to the first theme when the default is missing."""
        registry = ThemeRegistry.with_builtin_themes("nope")
        assert registry.current.id == registry.theme_ids()[0]

    def test_user_directory_overrides(self, themes_dir):
        """Test that extra directories add and replace themes."""
        (themes_dir / "nord.yaml").write_text(
            'display_name: My Nord\nbackground: "#000000"\ntext_primary: "#ffffff"\n',
            encoding="utf-8",
        )
        registry = ThemeRegistry.with_builtin_themes("ocean", [themes_dir])
        assert registry.current.id == "ocean"
        assert registry.get("nord").display_name == "My Nord"
