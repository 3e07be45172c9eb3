"""Configuration management for themekit."""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .theme_engine.contrast import ContrastLevel
from .theme_engine.output import ColorSpace

logger = logging.getLogger(__name__)


CONFIG_ENV_VAR = "THEMEKIT_CONFIG"
DEFAULT_CONFIG_PATH = "~/.themekit/config.yaml"


@dataclass
class ConfigModel:
    """Global configuration model for themekit."""

    # Theme selection
    default_theme: str = "dracula"
    user_themes_dir: Optional[str] = "~/.themekit/themes"

    # Validation and output defaults
    contrast_level: str = "AA"  # AA, AAA
    css_prefix: str = "theme"
    color_space: str = "hex"  # hex, rgb, hsl, oklch

    # Diagnostics
    log_level: str = "WARNING"

    def __post_init__(self):
        """Normalize values; invalid enum names fall back to defaults."""
        if self.user_themes_dir:
            self.user_themes_dir = os.path.expanduser(self.user_themes_dir)

        try:
            self.contrast_level = ContrastLevel.parse(self.contrast_level).value
        except ValueError:
            logger.warning(f"Unknown contrast level '{self.contrast_level}', using AA")
            self.contrast_level = ContrastLevel.AA.value

        try:
            self.color_space = ColorSpace(str(self.color_space).lower()).value
        except ValueError:
            logger.warning(f"Unknown color space '{self.color_space}', using hex")
            self.color_space = ColorSpace.HEX.value

        self.log_level = str(self.log_level).upper()

    @property
    def level(self) -> ContrastLevel:
        return ContrastLevel(self.contrast_level)

    @property
    def space(self) -> ColorSpace:
        return ColorSpace(self.color_space)

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        return yaml.safe_dump(asdict(self), default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML; unknown keys are ignored."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("config file must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in data.items() if k in known})


def get_config_path(config_path: Optional[Path] = None) -> Path:
    """Resolve the config file path: explicit argument, THEMEKIT_CONFIG, then default."""
    if config_path is not None:
        return Path(config_path).expanduser()
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)).expanduser()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file, falling back to defaults.

    A missing file is not an error. An unreadable or invalid file is logged
    as a warning and the defaults are used instead.
    """
    config_path = get_config_path(config_path)

    if not config_path.exists():
        logger.debug(f"No config file at {config_path}, using defaults")
        return ConfigModel()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = ConfigModel.from_yaml(f.read())
        logger.debug(f"Loaded configuration from {config_path}")
        return config
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}; using defaults")
        return ConfigModel()


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> Path:
    """Save configuration to file.

    Raises:
        OSError: If the file cannot be written
    """
    config_path = get_config_path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        f.write(config.to_yaml())
    logger.info(f"Configuration saved to {config_path}")
    return config_path
