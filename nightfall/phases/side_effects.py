"""
Death side effects shared by the night and voting engines.
"""

import logging
import random
from typing import Optional, Sequence

from ..core import Modifier, Player

logger = logging.getLogger(__name__)


def apply_sweetheart(victim: Player, players: Sequence[Player], rng: random.Random) -> Optional[Player]:
    """
    When a Sweetheart dies, a random living player becomes Drunk.

    Drunk and Sweetheart holders are never picked.

    Returns:
        The player who became Drunk, or None.
    """
    if victim.modifier != Modifier.SWEETHEART:
        return None

    candidates = [
        p for p in players
        if p.alive
        and p.player_id != victim.player_id
        and p.modifier not in (Modifier.DRUNK, Modifier.SWEETHEART)
    ]
    if not candidates:
        return None

    chosen = rng.choice(candidates)
    chosen.modifier = Modifier.DRUNK
    logger.info("[SWEETHEART] %s died - %s became Drunk", victim.name, chosen.name)
    return chosen


def strip_mayor(player: Player, mayor_id: Optional[str]) -> bool:
    """Drop the mayor's extra vote. Returns True if the player held the office."""
    if player.player_id != mayor_id and player.vote_weight <= 1:
        return False
    player.strip_mayor()
    logger.info("[MAYOR] %s lost the mayor's vote", player.name)
    return True
