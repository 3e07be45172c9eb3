"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from themekit.theme_engine import ThemeBuilder, ThemeRegistry  # noqa: E402


@pytest.fixture
def dracula_seed():
    """Dracula built from its three seed colors only."""
    return (ThemeBuilder("dracula", "Dracula")
            .colors(background="#282a36", text_primary="#f8f8f2", accent="#bd93f9")
            .metadata(is_dark=True)
            .build())


@pytest.fixture
def low_theme():
    """Dark theme whose primary text is far too close to the background."""
    return (ThemeBuilder("low", "Low")
            .colors(background="#1a1a1a", text_primary="#444444")
            .metadata(is_dark=True, description="Low contrast")
            .build())


@pytest.fixture
def mono_theme():
    """Black and white theme that passes AA and AAA on every set pair."""
    builder = (ThemeBuilder("mono", "Mono")
               .colors(background="#000000", text_primary="#ffffff", accent="#ffffff")
               .metadata(is_dark=True))
    for group in ("success", "warning", "error", "info"):
        builder.semantic(group, text="#ffffff", background="#000000")
    return builder.build()


@pytest.fixture
def registry(mono_theme, low_theme, dracula_seed):
    """Registry with three themes and mono selected."""
    return ThemeRegistry(default=mono_theme, themes=[low_theme, dracula_seed])


@pytest.fixture
def themes_dir(tmp_path):
    """Directory holding one YAML and one JSON theme file."""
    directory = tmp_path / "themes"
    directory.mkdir()

    (directory / "ocean.yaml").write_text(
        "display_name: Ocean\n"
        "is_dark: true\n"
        "background: \"#0b1d2a\"\n"
        "text_primary: \"#e6f1f8\"\n"
        "accent: \"#4fb3ff\"\n"
        "green: \"#3ddc97\"\n",
        encoding="utf-8",
    )
    (directory / "paper.json").write_text(
        '{"id": "paper", "display_name": "Paper", "is_dark": false,'
        ' "background": "#fafafa", "text_primary": "#202020"}',
        encoding="utf-8",
    )
    return directory
