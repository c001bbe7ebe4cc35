"""
Victory evaluation.

Priority order:
1. Solo wins (a solo role is the last one alive)
2. Custom rules (SerialKiller, Infected)
3. Good wins once no evil and no hostile neutral remains
4. Evil wins on majority, 1v1, or two players left with one evil
5. Last player standing
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .effects import EffectType
from .player import Player
from .roles import CustomRule, HOSTILE_NEUTRALS, Team


@dataclass
class Victory:
    """Outcome of a finished game."""
    winner: str  # "good", "evil", "solo", "custom" or "neutral"
    player_ids: List[str] = field(default_factory=list)
    teams: List[Team] = field(default_factory=list)


def live_team_counts(players: Sequence[Player]) -> Dict[Team, int]:
    counts = Counter(p.team for p in players if p.alive)
    return {team: counts.get(team, 0) for team in Team}


def is_hostile_neutral(player: Player) -> bool:
    return player.role in HOSTILE_NEUTRALS


def evaluate_custom_rule(rule: CustomRule, players: Sequence[Player], me: Player,
                         counts: Dict[Team, int]) -> bool:
    if rule.rule_type == "aliveExactly":
        return counts.get(rule.team, 0) == rule.count

    if rule.rule_type == "allOthersHaveEffect":
        effect_type = EffectType(rule.effect)
        others = [p for p in players if p.alive and p.player_id != me.player_id]
        return all(p.effects.has(effect_type) for p in others)

    return False


def _satisfies_custom_rules(player: Player, players: Sequence[Player], counts: Dict[Team, int]) -> bool:
    rules = player.role_info.victory.custom_rules
    return bool(rules) and all(evaluate_custom_rule(r, players, player, counts) for r in rules)


def _coalition(alive: List[Player], team: Team) -> List[str]:
    return [p.player_id for p in alive if team in p.role_info.victory.can_win_with]


def evaluate_victory(players: Sequence[Player]) -> Optional[Victory]:
    """
    Check if the game has ended.

    Returns:
        The Victory, or None if the game continues.
    """
    alive = [p for p in players if p.alive]
    if not alive:
        return Victory(winner="evil", teams=[Team.EVIL])

    counts = live_team_counts(players)

    # 1) Solo wins
    for p in alive:
        if p.role_info.victory.solo_win and len(alive) == 1:
            return Victory(winner="solo", player_ids=[p.player_id], teams=[p.team])

    # 2) Custom rules
    for p in alive:
        if _satisfies_custom_rules(p, players, counts):
            winners = [w.player_id for w in alive if _satisfies_custom_rules(w, players, counts)]
            return Victory(winner="custom", player_ids=winners, teams=[p.team])

    evil_alive = counts[Team.EVIL]
    good_alive = counts[Team.GOOD]
    has_hostile_neutrals = any(is_hostile_neutral(p) for p in alive)

    # 3) Good wins when nobody dangerous is left
    if evil_alive == 0 and not has_hostile_neutrals:
        winners = _coalition(alive, Team.GOOD)
        if winners:
            return Victory(winner="good", player_ids=winners, teams=[Team.GOOD])

    # Hostile neutrals must meet their own conditions first
    if evil_alive == 0 and has_hostile_neutrals:
        return None

    # 4) Evil wins
    evil_wins = (
        (evil_alive > good_alive and evil_alive > 0)
        or (evil_alive == 1 and good_alive == 1 and len(alive) == 2)
        or (len(alive) == 2 and evil_alive >= 1)
    )
    if evil_wins:
        winners = _coalition(alive, Team.EVIL)
        if winners:
            return Victory(winner="evil", player_ids=winners, teams=[Team.EVIL])

    # 5) Last player standing
    if len(alive) == 1:
        last = alive[0]
        return Victory(winner=last.team.value, player_ids=[last.player_id], teams=[last.team])

    return None
