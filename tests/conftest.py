"""
Pytest fixtures for Nightfall tests.
"""

import random

import pytest
from typing import Optional

from nightfall.config.game_config import GameConfig
from nightfall.core import GameState, Modifier, NightContext, Player, RoleType
from nightfall.phases import NightPhaseHandler, VotingHandler
from nightfall.recording import EventEmitter


def make_player(player_id: str, role: RoleType, name: Optional[str] = None,
                modifier: Optional[Modifier] = None, alive: bool = True) -> Player:
    """Build a player; the name defaults to the role name plus the id."""
    return Player(
        player_id=player_id,
        name=name or f"{role.value}{player_id}",
        role=role,
        alive=alive,
        modifier=modifier,
    )


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def game_config():
    """Test game configuration."""
    return GameConfig(random_seed=1234, record_runs=False, paranoid_chance=0.5)


@pytest.fixture
def night_handler(game_config, rng):
    """Night handler with a seeded random source."""
    return NightPhaseHandler(game_config, rng)


@pytest.fixture
def voting_handler(game_config, rng):
    """Voting handler with a seeded random source."""
    return VotingHandler(game_config, rng)


@pytest.fixture
def night_one():
    """Context for the first night without a mayor."""
    return NightContext(round_number=1)


@pytest.fixture
def emitter():
    """In-memory audit sink."""
    return EventEmitter()


@pytest.fixture
def day_game():
    """Game state on day one, without a mayor."""
    return GameState(game_id="test", round_number=1)
