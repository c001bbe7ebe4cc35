"""
Game configuration and constants.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class GameConfig:
    """Configuration for game parameters."""

    # Table
    total_players: int = 10
    role_distribution: Optional[List[str]] = None  # Role names; None uses the standard distribution
    modifier_chance: float = 0.2  # Chance that an eligible player is dealt a modifier

    # Night resolution
    paranoid_chance: float = 0.5  # Chance that a Paranoid player sees a fake visitor

    # Day voting
    first_day_mayor_election: bool = False  # Round 1 vote elects a mayor instead of executing

    # Game settings
    max_rounds: int = 10  # Maximum number of night/day cycles before the simulation stops
    log_level: str = "INFO"
    random_seed: Optional[int] = None  # Random seed for reproducible games

    # Simulation
    agent_type: str = "dummy_agent"
    record_runs: bool = True
    runs_dir: str = "runs"


# Default configuration instance
default_config = GameConfig()
