"""
Witch control pre-pass.

Runs before any other night action is collected. A successful control simply
rewrites the puppet's submitted action, so the rest of the pipeline resolves it
as the puppet's own action and never needs to know about the Witch.
"""

import logging
from typing import Dict, Optional, Set

from ..core import ActionKind, Player, ResultKind

logger = logging.getLogger(__name__)


def _puppet_action(puppet: Player) -> Optional[ActionKind]:
    """The action a controlled puppet performs."""
    role = puppet.role_info
    chosen = puppet.night_action.kind
    if role.is_dual and chosen is not None and role.can_perform(chosen) and chosen != ActionKind.CONTROL:
        return chosen
    return role.default_action


def apply_puppeteering(players: Dict[str, Player]) -> Set[str]:
    """
    Rewrite puppets' actions for every living Witch that submitted a control.

    Args:
        players: All players keyed by id

    Returns:
        Ids of the controllers that successfully took control.
    """
    controllers: Set[str] = set()

    for witch in players.values():
        submitted = witch.night_action
        if not witch.alive or submitted.kind != ActionKind.CONTROL:
            continue
        if not witch.role_info.can_perform(ActionKind.CONTROL):
            logger.debug("[WITCH] %s cannot control anyone", witch.name)
            continue

        puppet = players.get(submitted.puppet_id) if submitted.puppet_id else None
        target = players.get(submitted.target_id) if submitted.target_id else None

        if puppet is None or not puppet.alive:
            witch.add_result(ResultKind.FAILED, "Your puppet is not alive - the spell fizzled")
            continue
        if puppet.player_id == witch.player_id or not puppet.role_info.has_night_action:
            witch.add_result(ResultKind.FAILED, f"{puppet.name} has no ability you can bend")
            continue
        if target is None or not target.alive:
            witch.add_result(ResultKind.FAILED, "The chosen victim is not alive - the spell fizzled")
            continue

        action = _puppet_action(puppet)
        puppet.role_data.controlled_by = witch.player_id
        puppet.role_data.original_target_id = puppet.night_action.target_id
        puppet.role_data.original_action = puppet.night_action.kind
        puppet.submit_action(action, target.player_id)

        controllers.add(witch.player_id)
        witch.add_result(ResultKind.SUCCESS, f"You took control of {puppet.name}")
        logger.info("[WITCH] %s forces %s to %s %s", witch.name, puppet.name, action.value, target.name)

    return controllers
