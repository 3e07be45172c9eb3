"""Command-line interface package for themekit."""

__all__ = ["main"]


def main(*args, **kwargs):
    """Entry point that defers heavy imports until needed."""
    from .theme_cmds import main as theme_main

    return theme_main(*args, **kwargs)
