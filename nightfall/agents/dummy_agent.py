"""
Dummy Agent implementation with seeded random behavior.
"""

import random
from typing import Any, Dict, List, Optional

from .base_agent import AgentContext, BaseAgent
from ..core import ActionKind, Player, Team
from ..config.game_config import GameConfig, default_config

# Actions aimed at the dead rather than the living
_CORPSE_ACTIONS = (ActionKind.AUTOPSY, ActionKind.REVIVE)


class DummyAgent(BaseAgent):
    """
    Simple dummy agent making random but legal choices:
    - Evil and hostile roles: attack a random player outside their team
    - Coroner and Priest: pick a random dead player whose role is not hidden
    - Witch: bend a random living player with an ability toward a random victim
    - Everybody else: target a random living player other than themselves
    - Voting: abstain now and then, otherwise vote for a random suspect
    """

    def __init__(self, player: Player, config: GameConfig = default_config):
        super().__init__(player, config)
        # Seed combined with player id: different but reproducible per player
        seed = config.random_seed
        if seed is not None:
            self.random = random.Random(f"{seed}-{player.player_id}")
        else:
            self.random = random.Random()

    def _others(self, context: AgentContext) -> List[Player]:
        return [p for p in context.game_state.get_alive_players() if p.player_id != self.player.player_id]

    def _outsiders(self, context: AgentContext) -> List[Player]:
        """Living players outside this agent's team, or every other living player if none."""
        others = self._others(context)
        outsiders = [p for p in others if p.team != self.player.team]
        return outsiders or others

    def choose_night_action(self, context: AgentContext) -> Optional[Dict[str, Any]]:
        """
        Pick a random legal night action.

        Args:
            context: Current game context

        Returns:
            Dictionary containing action, target and optionally puppet
        """
        available = context.available_actions
        if not available:
            return None

        if ActionKind.CONTROL in available:
            return self._choose_control(context)

        action = self.random.choice(available)
        if action in _CORPSE_ACTIONS:
            corpses = [p for p in context.game_state.players if not p.alive and not p.role_hidden]
            if not corpses:
                return None
            return {"action": action, "target": self.random.choice(corpses).player_id}

        if self.player.team == Team.EVIL or self.player.role_info.unstoppable:
            candidates = self._outsiders(context)
        else:
            candidates = self._others(context)
        if not candidates:
            return None
        return {"action": action, "target": self.random.choice(candidates).player_id}

    def _choose_control(self, context: AgentContext) -> Optional[Dict[str, Any]]:
        puppets = [p for p in self._others(context) if p.role_info.has_night_action]
        victims = self._others(context)
        if not puppets or not victims:
            return None
        return {
            "action": ActionKind.CONTROL,
            "puppet": self.random.choice(puppets).player_id,
            "target": self.random.choice(victims).player_id,
        }

    def choose_vote(self, context: AgentContext) -> Optional[str]:
        """
        Vote for a random suspect.

        Args:
            context: Current game context

        Returns:
            Player id to vote for, or None to abstain
        """
        if self.random.random() < 0.2:
            return None
        suspects = self._outsiders(context) if self.player.team == Team.EVIL else self._others(context)
        if not suspects:
            return None
        return self.random.choice(suspects).player_id
