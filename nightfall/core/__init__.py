"""
Core game components: roles, effects, players, game state and victory rules.
"""

from .roles import (
    ActionKind,
    Modifier,
    Role,
    RoleType,
    Team,
    get_role,
    get_role_distribution,
    get_roles_by_team,
    parse_role_type,
)
from .effects import Effect, EffectStore, EffectType
from .results import ResultKind, format_result, parse_result
from .player import InvestigationRecord, NightAction, Player, RoleData
from .victory import Victory, evaluate_victory
from .game_engine import GamePhase, GameState, NightContext, setup_game
from .exceptions import GameSetupError

__all__ = [
    'ActionKind',
    'Modifier',
    'Role',
    'RoleType',
    'Team',
    'get_role',
    'get_role_distribution',
    'get_roles_by_team',
    'parse_role_type',
    'Effect',
    'EffectStore',
    'EffectType',
    'ResultKind',
    'format_result',
    'parse_result',
    'InvestigationRecord',
    'NightAction',
    'Player',
    'RoleData',
    'Victory',
    'evaluate_victory',
    'GamePhase',
    'GameState',
    'NightContext',
    'setup_game',
    'GameSetupError',
]
