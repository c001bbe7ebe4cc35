"""
Base agent interface for Nightfall players.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..core import ActionKind, GamePhase, GameState, Player
from ..config.game_config import GameConfig, default_config


@dataclass
class AgentContext:
    """Context information provided to an agent."""
    player: Player
    game_state: GameState
    private_results: List[str]
    current_phase: GamePhase
    available_actions: List[ActionKind]


class BaseAgent(ABC):
    """
    Abstract base class for all player agents.

    This defines the interface that all agent implementations must follow.
    """

    def __init__(self, player: Player, config: GameConfig = default_config):
        """
        Initialize the agent.

        Args:
            player: The player this agent represents
            config: Game configuration
        """
        self.player = player
        self.config = config

    @abstractmethod
    def choose_night_action(self, context: AgentContext) -> Optional[Dict[str, Any]]:
        """
        Pick tonight's action.

        Args:
            context: Current game context

        Returns:
            Dictionary with "action" and "target" (and "puppet" for control),
            or None to skip the night
        """
        pass

    @abstractmethod
    def choose_vote(self, context: AgentContext) -> Optional[str]:
        """
        Pick who to vote for.

        Args:
            context: Current game context

        Returns:
            Player id to vote for, or None to abstain
        """
        pass

    def build_context(self, game_state: GameState) -> AgentContext:
        """Build context for the agent."""
        return AgentContext(
            player=self.player,
            game_state=game_state,
            private_results=list(self.player.results),
            current_phase=game_state.phase,
            available_actions=self._get_available_actions(game_state),
        )

    def _get_available_actions(self, game_state: GameState) -> List[ActionKind]:
        """Night actions the player can still use; empty outside the night."""
        if game_state.phase != GamePhase.NIGHT or not self.player.alive:
            return []

        role = self.player.role_info
        return [
            action for action in role.actions
            if not role.is_limited(action) or self.player.uses_left() > 0
        ]
