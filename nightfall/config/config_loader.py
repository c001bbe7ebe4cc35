"""
Configuration loader for YAML-based game configurations.
"""

import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigError
from .game_config import GameConfig, default_config
from ..core.roles import parse_role_type

logger = logging.getLogger(__name__)

_PROBABILITY_KEYS = ("modifier_chance", "paranoid_chance")


def validate_config(config: GameConfig) -> GameConfig:
    """
    Check value ranges and role names.

    Raises:
        ConfigError: If any value is out of range or names an unknown role
    """
    for key in _PROBABILITY_KEYS:
        value = getattr(config, key)
        if not isinstance(value, (int, float)) or not 0 <= value <= 1:
            raise ConfigError(key, value, f"'{key}' must be a probability between 0 and 1, got {value!r}")

    if not isinstance(config.total_players, int) or config.total_players < 2:
        raise ConfigError("total_players", config.total_players)

    if not isinstance(config.max_rounds, int) or config.max_rounds < 1:
        raise ConfigError("max_rounds", config.max_rounds)

    if config.role_distribution is not None:
        for name in config.role_distribution:
            try:
                parse_role_type(name)
            except ValueError:
                raise ConfigError("role_distribution", name, f"Unknown role in role_distribution: {name}")

    return config


def config_from_dict(config_dict: Dict[str, Any]) -> GameConfig:
    """Build a config from a plain dict, using defaults for missing values."""
    config = GameConfig()

    for key, value in config_dict.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            # Warn about unknown keys but don't fail
            logger.warning("Unknown config key '%s' in YAML file", key)

    return validate_config(config)


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Load game configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        GameConfig instance with values from YAML file

    Raises:
        FileNotFoundError: If the config file doesn't exist
        yaml.YAMLError: If the YAML file is invalid
        ConfigError: If a value is out of range
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        return GameConfig()

    if not isinstance(config_dict, dict):
        raise ConfigError("<root>", config_dict, "Config file must contain a mapping")

    return config_from_dict(config_dict)


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load configuration from YAML file or return default.

    Args:
        config_path: Optional path to YAML config file. If None, returns default config.

    Returns:
        GameConfig instance
    """
    if config_path is None:
        return default_config

    return load_config_from_yaml(config_path)
