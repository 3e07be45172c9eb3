"""Theme registry and theme file loading.

This module provides the ThemeRegistry class, a thread-safe keyed collection
of themes with a current-theme cursor, plus helpers for reading and writing
theme definitions as YAML or JSON files. Registries are always constructed
explicitly; ThemeRegistry.with_builtin_themes() loads the bundled presets.
"""

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml
from pydantic import ValidationError

from .derivation import derive_theme
from .errors import ThemeKitError, ThemeLoadError
from .schema import Theme

logger = logging.getLogger(__name__)


BUILTIN_THEMES_DIR = Path(__file__).parent.parent / "theme_presets"
DEFAULT_THEME_ID = "dracula"
THEME_FILE_SUFFIXES = (".yaml", ".yml", ".json")


def _load_yaml_file(file_path: Path) -> Any:
    """Load YAML file safely."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ThemeLoadError(f"Invalid YAML in {file_path}: {e}") from e
    except OSError as e:
        raise ThemeLoadError(f"Error reading {file_path}: {e}") from e


def _load_json_file(file_path: Path) -> Any:
    """Load JSON file safely."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ThemeLoadError(f"Invalid JSON in {file_path}: {e}") from e
    except OSError as e:
        raise ThemeLoadError(f"Error reading {file_path}: {e}") from e


def parse_theme_data(theme_data: Any, theme_name: str) -> Theme:
    """Validate raw theme data and derive its missing colors.

    Args:
        theme_data: Mapping loaded from a theme file
        theme_name: Fallback id (usually the file stem)

    Returns:
        Derived Theme

    Raises:
        ThemeLoadError: If the data does not describe a valid theme
    """
    if not isinstance(theme_data, dict):
        raise ThemeLoadError(f"Invalid theme definition for '{theme_name}': expected a mapping")

    theme_data = dict(theme_data)
    theme_data.setdefault('id', theme_name)
    theme_data.setdefault('display_name', theme_name.replace('_', ' ').title())

    try:
        theme = Theme.model_validate(theme_data)
    except ValidationError as e:
        raise ThemeLoadError(f"Invalid theme definition for '{theme_name}': {e}") from e

    return derive_theme(theme)


def load_theme_file(path: Union[str, Path]) -> Theme:
    """Load a theme from a YAML (.yaml/.yml) or JSON file.

    Raises:
        ThemeLoadError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in ('.yaml', '.yml'):
        data = _load_yaml_file(path)
    elif suffix == '.json':
        data = _load_json_file(path)
    else:
        raise ThemeLoadError(f"Unsupported theme file format: {path.suffix}")

    theme = parse_theme_data(data, path.stem)
    logger.debug(f"Loaded theme '{theme.id}' from {path}")
    return theme


def save_theme_file(theme: Theme, path: Union[str, Path]) -> Path:
    """Write a theme to a YAML file, omitting unset colors.

    Raises:
        ThemeKitError: If the file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(theme.to_file_dict(), f, default_flow_style=False,
                           sort_keys=False, indent=2)
    except OSError as e:
        raise ThemeKitError(f"Error saving theme '{theme.id}': {e}") from e

    logger.info(f"Saved theme '{theme.id}' to {path}")
    return path


class _ReadWriteLock:
    """Many concurrent readers or a single writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self):
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ThemeRegistry:
    """Thread-safe collection of themes keyed by id with a current theme."""

    def __init__(self, default: Optional[Theme] = None, themes: Iterable[Theme] = ()):
        """Initialize the registry.

        Args:
            default: Theme to register and select as current
            themes: Additional themes to register
        """
        self._lock = _ReadWriteLock()
        self._themes: Dict[str, Theme] = {}
        self._sorted: List[str] = []
        self._current: Optional[Theme] = default
        self._load_errors: Dict[str, str] = {}

        if default is not None:
            self._themes[default.id] = default
        for theme in themes:
            self._themes[theme.id] = theme
        self._update_sorted()

    @classmethod
    def with_builtin_themes(cls, default_id: str = DEFAULT_THEME_ID,
                            extra_dirs: Iterable[Union[str, Path]] = ()) -> "ThemeRegistry":
        """Build a registry from the bundled presets plus optional user directories.

        Themes in later directories replace presets with the same id. The
        current theme is default_id when present, otherwise the first theme.
        """
        registry = cls()
        registry.load_directory(BUILTIN_THEMES_DIR)
        for directory in extra_dirs:
            registry.load_directory(directory)

        if not registry.set_current(default_id):
            ids = registry.theme_ids()
            if ids:
                logger.warning(f"Default theme '{default_id}' not found, using '{ids[0]}'")
                registry.set_current(ids[0])
        return registry

    def _update_sorted(self) -> None:
        self._sorted = sorted(self._themes)

    def load_directory(self, directory: Union[str, Path]) -> List[Theme]:
        """Load and register every theme file in a directory.

        Files that fail to load are skipped; their errors are logged and
        available from load_errors().

        Returns:
            Themes that were loaded
        """
        directory = Path(directory)
        if not directory.is_dir():
            logger.warning(f"Themes directory not found: {directory}")
            return []

        loaded: List[Theme] = []
        for theme_file in sorted(directory.iterdir()):
            if theme_file.suffix.lower() not in THEME_FILE_SUFFIXES:
                continue
            try:
                loaded.append(load_theme_file(theme_file))
            except ThemeLoadError as e:
                logger.error(f"Error loading theme {theme_file.name}: {e}")
                with self._lock.write():
                    self._load_errors[str(theme_file)] = str(e)

        self.register(*loaded)
        return loaded

    def load_errors(self) -> Dict[str, str]:
        """Files that failed to load, mapped to their error messages."""
        with self._lock.read():
            return dict(self._load_errors)

    def register(self, *themes: Theme) -> None:
        """Add themes, replacing any registered under the same id."""
        with self._lock.write():
            for theme in themes:
                self._themes[theme.id] = theme
                if self._current is not None and self._current.id == theme.id:
                    self._current = theme
            self._update_sorted()

    def unregister(self, *themes: Union[Theme, str]) -> None:
        """Remove themes by value or id.

        If the current theme is removed, the first remaining theme (by id)
        becomes current, or None when the registry is empty.
        """
        with self._lock.write():
            for theme in themes:
                theme_id = theme.id if isinstance(theme, Theme) else theme
                self._themes.pop(theme_id, None)
            self._update_sorted()

            if self._current is not None and self._current.id not in self._themes:
                self._current = self._themes[self._sorted[0]] if self._sorted else None

    def clear(self) -> None:
        with self._lock.write():
            self._themes.clear()
            self._sorted = []
            self._current = None

    def get(self, theme_id: str) -> Optional[Theme]:
        with self._lock.read():
            return self._themes.get(theme_id)

    def set_current(self, theme: Union[Theme, str]) -> bool:
        """Select the current theme by value or id.

        Returns:
            False if no theme with that id is registered
        """
        theme_id = theme.id if isinstance(theme, Theme) else theme
        with self._lock.write():
            found = self._themes.get(theme_id)
            if found is None:
                return False
            self._current = found
            return True

    @property
    def current(self) -> Optional[Theme]:
        with self._lock.read():
            return self._current

    def themes(self) -> List[Theme]:
        """All registered themes sorted by id."""
        with self._lock.read():
            return [self._themes[theme_id] for theme_id in self._sorted]

    def theme_ids(self) -> List[str]:
        with self._lock.read():
            return list(self._sorted)

    def _current_index(self) -> int:
        if self._current is None:
            return 0
        try:
            return self._sorted.index(self._current.id)
        except ValueError:
            return 0

    def next_theme(self) -> Optional[Theme]:
        """Advance to the next theme by id, wrapping around; returns the new current."""
        with self._lock.write():
            if not self._sorted or self._current is None:
                return self._current
            index = (self._current_index() + 1) % len(self._sorted)
            self._current = self._themes[self._sorted[index]]
            return self._current

    def previous_theme(self) -> Optional[Theme]:
        """Step back to the previous theme by id, wrapping around."""
        with self._lock.write():
            if not self._sorted or self._current is None:
                return self._current
            index = (self._current_index() - 1) % len(self._sorted)
            self._current = self._themes[self._sorted[index]]
            return self._current

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._themes)

    def __contains__(self, theme_id: object) -> bool:
        with self._lock.read():
            return theme_id in self._themes
