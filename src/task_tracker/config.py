"""Configuration management for the task tracker."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .task import DISPLAY_DATE_FORMAT

logger = logging.getLogger(__name__)


@dataclass
class ConfigModel:
    """Configuration model for the task tracker."""

    # File paths; the data directory is relative to the working directory
    data_dir: str = "data"
    save_file: str = "save.txt"

    # Display preferences
    date_display_format: str = DISPLAY_DATE_FORMAT
    show_banner: bool = True
    no_color: bool = False

    def __post_init__(self):
        self.data_dir = os.path.expanduser(str(self.data_dir))

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "data_dir": self.data_dir,
            "save_file": self.save_file,
            "date_display_format": self.date_display_format,
            "show_banner": self.show_banner,
            "no_color": self.no_color,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys.

        Raises:
            ValueError: If the document is not a mapping or a known key has
                a value of the wrong type
        """
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("config file must contain a mapping")

        known = {f.name: f.type for f in fields(cls)}
        unknown = sorted(str(key) for key in set(data) - set(known))
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

        values = {key: value for key, value in data.items() if key in known}
        for key, value in values.items():
            expected = known[key]
            if not isinstance(value, expected):
                raise ValueError(
                    f"config key '{key}' must be a {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
        return cls(**values)

    def get_save_path(self) -> Path:
        """Get the save file path."""
        return Path(self.data_dir) / self.save_file

    def get_config_path(self) -> Path:
        """Get the default config file path."""
        return Path(self.data_dir) / "config.yaml"


def resolve_config_path(config_path: Optional[Path] = None,
                        data_dir: Optional[str] = None) -> Path:
    """Return the config file that would be read for these options."""
    if config_path is not None:
        return Path(config_path)
    config = ConfigModel() if data_dir is None else ConfigModel(data_dir=data_dir)
    return config.get_config_path()


def load_config(config_path: Optional[Path] = None,
                data_dir: Optional[str] = None) -> ConfigModel:
    """Load configuration from file, or defaults if there is none.

    ``data_dir`` overrides the data directory, both as the place to look for
    ``config.yaml`` and in the returned config.
    """
    config = ConfigModel()
    config_path = resolve_config_path(config_path, data_dir)

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = ConfigModel.from_yaml(f.read())
            logger.debug(f"Loaded configuration from {config_path}")
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}. Using defaults.")
            config = ConfigModel()

    if data_dir is not None:
        config.data_dir = os.path.expanduser(data_dir)
    return config


def save_config(config: ConfigModel, config_path: Optional[Path] = None):
    """Save configuration to file."""
    if config_path is None:
        config_path = config.get_config_path()
    config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        f.write(config.to_yaml())
    logger.debug(f"Configuration saved to {config_path}")
