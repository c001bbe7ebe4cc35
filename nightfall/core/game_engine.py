"""
Core game state: setup, phase transitions and bookkeeping around the engines.
"""

import logging
import random
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional, TYPE_CHECKING
from dataclasses import dataclass, field

from .exceptions import GameSetupError
from .player import Player
from .roles import MODIFIER_TEAMS, RoleType, Team, get_role_distribution, parse_role_type
from .victory import Victory, evaluate_victory
from ..config.game_config import GameConfig, default_config

if TYPE_CHECKING:
    from ..phases.night_phase import NightSummary
    from ..phases.voting import VoteResult

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Current game phase."""
    SETUP = "setup"
    NIGHT = "night"
    DAY = "day"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class NightContext:
    """Read-only view of the game handed to the night engine."""
    round_number: int
    mayor_id: Optional[str] = None


@dataclass
class GameState:
    """Complete game state."""
    game_id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    phase: GamePhase = GamePhase.SETUP
    round_number: int = 0
    mayor_id: Optional[str] = None
    players: List[Player] = field(default_factory=list)

    # Game history
    action_log: List[Dict[str, Any]] = field(default_factory=list)

    # Win condition
    winner: Optional[Victory] = None

    def get_alive_players(self) -> List[Player]:
        """Get all alive players."""
        return [p for p in self.players if p.alive]

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_players_by_team(self, team: Team) -> List[Player]:
        """Get all alive players of a team."""
        return [p for p in self.get_alive_players() if p.team == team]

    @property
    def mayor(self) -> Optional[Player]:
        return self.get_player(self.mayor_id) if self.mayor_id else None

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def night_context(self) -> NightContext:
        return NightContext(round_number=self.round_number, mayor_id=self.mayor_id)

    def start_night(self) -> None:
        """Transition to night phase; every night opens a new round."""
        self.phase = GamePhase.NIGHT
        self.round_number += 1
        self._log_action("night_start", {"round": self.round_number})

    def start_day(self) -> None:
        """Transition to day phase."""
        self.phase = GamePhase.DAY
        for player in self.players:
            player.clear_action()
        self._log_action("day_start", {"round": self.round_number})

    def apply_night_summary(self, summary: 'NightSummary') -> Optional[Victory]:
        """Record the night's deaths and drop the mayor designation if the mayor died."""
        if summary.mayor_died:
            self.mayor_id = None
        for death in summary.deaths:
            self._log_action("player_killed", {"player": death.player_id, "cause": death.cause})
        return self._check_and_end()

    def apply_vote_result(self, result: 'VoteResult') -> Optional[Victory]:
        """Record the day's vote and end the game on a Jester execution or a win."""
        if result.mayor_elected:
            self._log_action("mayor_elected", {"player": result.mayor_id})
        if result.executed:
            self._log_action("player_executed", {
                "player": result.executed,
                "votes_for": result.votes_for,
                "voters": result.players_voting_for,
            })
        if result.jester_win:
            self.end_game(Victory(winner="solo", player_ids=[result.executed], teams=[Team.NEUTRAL]))
            return self.winner
        return self._check_and_end()

    def check_win_condition(self) -> Optional[Victory]:
        """
        Check if game has ended and return the victory.
        Returns None if game continues.
        """
        return evaluate_victory(self.players)

    def end_game(self, victory: Victory) -> None:
        """End the game with a winner."""
        self.phase = GamePhase.GAME_OVER
        self.winner = victory
        self._log_action("game_over", {
            "winner": victory.winner,
            "players": victory.player_ids,
            "round": self.round_number,
        })

    def _check_and_end(self) -> Optional[Victory]:
        victory = self.check_win_condition()
        if victory:
            self.end_game(victory)
        return victory

    def _log_action(self, action_type: str, data: Dict[str, Any]) -> None:
        """Log a game action."""
        self.action_log.append({
            "type": action_type,
            "phase": self.phase.value,
            "round": self.round_number,
            "data": data
        })

    def get_game_summary(self) -> Dict[str, Any]:
        """Get a summary of the current game state."""
        alive_players = self.get_alive_players()
        return {
            "game_id": self.game_id,
            "phase": self.phase.value,
            "round": self.round_number,
            "alive_players": len(alive_players),
            "alive_good": len(self.get_players_by_team(Team.GOOD)),
            "alive_evil": len(self.get_players_by_team(Team.EVIL)),
            "alive_neutral": len(self.get_players_by_team(Team.NEUTRAL)),
            "mayor": self.mayor_id,
            "winner": self.winner.winner if self.winner else None,
        }


def resolve_distribution(config: GameConfig) -> List[RoleType]:
    """Role list for a config: the explicit distribution if given, else the standard one."""
    if config.role_distribution:
        return [parse_role_type(name) for name in config.role_distribution]
    return get_role_distribution(config.total_players)


def setup_game(config: GameConfig = default_config, rng: Optional[random.Random] = None,
               names: Optional[List[str]] = None) -> GameState:
    """
    Create a game with shuffled roles, limited-use counters and modifiers.

    Raises:
        GameSetupError: If the role distribution does not seat every player
    """
    rng = rng or random.Random(config.random_seed)
    distribution = resolve_distribution(config)
    if len(distribution) != config.total_players:
        raise GameSetupError(config.total_players, len(distribution))

    rng.shuffle(distribution)
    names = names or [f"Player {i}" for i in range(1, config.total_players + 1)]

    state = GameState()
    for index, role_type in enumerate(distribution):
        player = Player(player_id=str(index + 1), name=names[index], role=role_type)
        player.uses_left()
        state.players.append(player)

    _deal_modifiers(state.players, config.modifier_chance, rng)

    state.phase = GamePhase.DAY
    state._log_action("game_start", {
        "players": len(state.players),
        "roles": {p.player_id: p.role.value for p in state.players},
        "modifiers": {p.player_id: p.modifier.value for p in state.players if p.modifier},
    })
    logger.info("[SETUP] Game %s created with %d players", state.game_id, len(state.players))
    return state


def _deal_modifiers(players: List[Player], chance: float, rng: random.Random) -> None:
    """Give each player at most one modifier allowed for their team."""
    for player in players:
        if rng.random() >= chance:
            continue
        allowed = [m for m, teams in MODIFIER_TEAMS.items() if player.team in teams]
        if allowed:
            player.modifier = rng.choice(allowed)
