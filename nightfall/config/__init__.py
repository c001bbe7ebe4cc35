"""
Game configuration: dataclass defaults and the YAML loader.
"""

from .game_config import GameConfig, default_config
from .config_loader import load_config, load_config_from_yaml, config_from_dict
from .exceptions import ConfigError

__all__ = [
    'GameConfig',
    'default_config',
    'load_config',
    'load_config_from_yaml',
    'config_from_dict',
    'ConfigError',
]
