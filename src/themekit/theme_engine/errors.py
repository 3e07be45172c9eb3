"""Exceptions raised at the I/O and lookup boundaries of the theme engine."""

from typing import List


class ThemeKitError(Exception):
    """Base exception for theme engine operations."""
    pass


class ThemeLoadError(ThemeKitError, ValueError):
    """A theme file could not be read or does not describe a valid theme."""
    pass


class ThemeNotFoundError(ThemeKitError, KeyError):
    """No theme is registered under the requested id."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class StrictValidationError(ThemeKitError):
    """Strict validation found structural errors or contrast issues."""

    def __init__(self, messages: List[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))
