"""
Role definitions, night capabilities and victory rules.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple
from dataclasses import dataclass, field


class Team(Enum):
    """Player alignment."""
    GOOD = "good"
    EVIL = "evil"
    NEUTRAL = "neutral"


class RoleType(Enum):
    """Player role types. Values are the display names shown to players."""
    # Town
    DOCTOR = "Doctor"
    JAILER = "Jailer"
    INVESTIGATOR = "Investigator"
    CORONER = "Coroner"
    LOOKOUT = "Lookout"
    GUARDIAN = "Guardian"
    TRACKER = "Tracker"
    HUNTER = "Hunter"
    PRIEST = "Priest"
    CITIZEN = "Citizen"
    # Mafia
    KILLER = "Killer"
    CLEANER = "Cleaner"
    ACCUSER = "Accuser"
    CONSIGLIERE = "Consigliere"
    POISONER = "Poisoner"
    JANITOR = "Janitor"
    # Neutral
    SERIAL_KILLER = "SerialKiller"
    INFECTED = "Infected"
    JESTER = "Jester"
    WITCH = "Witch"


class ActionKind(Enum):
    """Every night action a role can submit."""
    PROTECT = "protect"
    BLOCK = "block"
    GUARD = "guard"
    WATCH = "watch"
    TRACK = "track"
    INVESTIGATE = "investigate"
    AUTOPSY = "autopsy"
    REVIVE = "revive"
    INFECT = "infect"
    KILL = "kill"
    HUNTER_KILL = "hunter_kill"
    CLEAN_ROLE = "clean_role"
    JANITOR_CLEAN = "janitor_clean"
    FRAME = "frame"
    CONSIG_INVESTIGATE = "consig_investigate"
    POISON = "poison"
    STRONG_POISON = "strong_poison"
    CONTROL = "witch_control"


class Modifier(Enum):
    """Hidden personal traits assigned once at game start."""
    DRUNK = "Drunk"
    SHADY = "Shady"
    INNOCENT = "Innocent"
    PARANOID = "Paranoid"
    INSOMNIAC = "Insomniac"
    SWEETHEART = "Sweetheart"


# Kinds that validate the target's state themselves and are therefore
# collected even when the target is dead.
DEAD_TARGET_ACTIONS: FrozenSet[ActionKind] = frozenset({
    ActionKind.AUTOPSY,
    ActionKind.CLEAN_ROLE,
    ActionKind.JANITOR_CLEAN,
    ActionKind.REVIVE,
    ActionKind.INVESTIGATE,
    ActionKind.CONSIG_INVESTIGATE,
    ActionKind.INFECT,
})

# Kinds that feed the poison/kill pipeline.
KILLING_ACTIONS: FrozenSet[ActionKind] = frozenset({
    ActionKind.KILL,
    ActionKind.HUNTER_KILL,
    ActionKind.POISON,
    ActionKind.STRONG_POISON,
})


@dataclass(frozen=True)
class CustomRule:
    """A single custom victory predicate evaluated by the victory evaluator."""
    rule_type: str  # "aliveExactly" or "allOthersHaveEffect"
    team: Optional[Team] = None
    count: int = 0
    effect: Optional[str] = None


@dataclass(frozen=True)
class VictoryRule:
    """Which coalitions a role wins with, and any extra conditions."""
    can_win_with: Tuple[Team, ...] = ()
    solo_win: bool = False
    custom_rules: Tuple[CustomRule, ...] = ()


@dataclass(frozen=True)
class Role:
    """Static capability entry for a role."""
    role_type: RoleType
    team: Team
    actions: Tuple[ActionKind, ...] = ()
    priority: Optional[int] = None
    visits_target: bool = False
    unstoppable: bool = False
    max_uses: Optional[int] = None
    limited_actions: FrozenSet[ActionKind] = field(default_factory=frozenset)
    victory: VictoryRule = field(default_factory=VictoryRule)

    def __str__(self) -> str:
        return f"{self.role_type.value} (Team: {self.team.value})"

    @property
    def name(self) -> str:
        return self.role_type.value

    @property
    def is_evil(self) -> bool:
        return self.team == Team.EVIL

    @property
    def is_good(self) -> bool:
        return self.team == Team.GOOD

    @property
    def has_night_action(self) -> bool:
        """Check if role has a night action other than controlling someone else."""
        return any(action != ActionKind.CONTROL for action in self.actions)

    @property
    def is_dual(self) -> bool:
        """Check if role chooses between two actions each night."""
        return len(self.actions) > 1

    @property
    def default_action(self) -> Optional[ActionKind]:
        """The always-available action: the first one without a use limit."""
        for action in self.actions:
            if action not in self.limited_actions:
                return action
        return self.actions[0] if self.actions else None

    def can_perform(self, action: ActionKind) -> bool:
        return action in self.actions

    def is_limited(self, action: ActionKind) -> bool:
        return action in self.limited_actions


_GOOD_WIN = VictoryRule(can_win_with=(Team.GOOD,))
_EVIL_WIN = VictoryRule(can_win_with=(Team.EVIL,))


ROLES: Dict[RoleType, Role] = {
    # Town
    RoleType.DOCTOR: Role(
        RoleType.DOCTOR, Team.GOOD, (ActionKind.PROTECT,), priority=9,
        visits_target=True, victory=_GOOD_WIN,
    ),
    RoleType.JAILER: Role(
        RoleType.JAILER, Team.GOOD, (ActionKind.BLOCK,), priority=2,
        visits_target=True, victory=_GOOD_WIN,
    ),
    RoleType.INVESTIGATOR: Role(
        RoleType.INVESTIGATOR, Team.GOOD, (ActionKind.INVESTIGATE,), priority=5,
        visits_target=True, victory=_GOOD_WIN,
    ),
    RoleType.CORONER: Role(
        RoleType.CORONER, Team.GOOD, (ActionKind.AUTOPSY,), priority=6,
        victory=_GOOD_WIN,
    ),
    RoleType.LOOKOUT: Role(
        RoleType.LOOKOUT, Team.GOOD, (ActionKind.WATCH,), priority=4,
        victory=_GOOD_WIN,
    ),
    RoleType.GUARDIAN: Role(
        RoleType.GUARDIAN, Team.GOOD, (ActionKind.GUARD,), priority=3,
        victory=_GOOD_WIN,
    ),
    RoleType.TRACKER: Role(
        RoleType.TRACKER, Team.GOOD, (ActionKind.TRACK,), priority=4,
        victory=_GOOD_WIN,
    ),
    RoleType.HUNTER: Role(
        RoleType.HUNTER, Team.GOOD, (ActionKind.HUNTER_KILL,), priority=0,
        visits_target=True, unstoppable=True, victory=_GOOD_WIN,
    ),
    RoleType.PRIEST: Role(
        RoleType.PRIEST, Team.GOOD, (ActionKind.REVIVE,), priority=8,
        max_uses=1, limited_actions=frozenset({ActionKind.REVIVE}),
        victory=_GOOD_WIN,
    ),
    RoleType.CITIZEN: Role(RoleType.CITIZEN, Team.GOOD, victory=_GOOD_WIN),

    # Mafia
    RoleType.KILLER: Role(
        RoleType.KILLER, Team.EVIL, (ActionKind.KILL,), priority=7,
        visits_target=True, victory=_EVIL_WIN,
    ),
    RoleType.CLEANER: Role(
        RoleType.CLEANER, Team.EVIL, (ActionKind.KILL, ActionKind.CLEAN_ROLE), priority=7,
        visits_target=True, max_uses=3, limited_actions=frozenset({ActionKind.CLEAN_ROLE}),
        victory=_EVIL_WIN,
    ),
    RoleType.ACCUSER: Role(
        RoleType.ACCUSER, Team.EVIL, (ActionKind.KILL, ActionKind.FRAME), priority=7,
        visits_target=True, max_uses=3, limited_actions=frozenset({ActionKind.FRAME}),
        victory=_EVIL_WIN,
    ),
    RoleType.CONSIGLIERE: Role(
        RoleType.CONSIGLIERE, Team.EVIL, (ActionKind.KILL, ActionKind.CONSIG_INVESTIGATE),
        priority=5, visits_target=True, max_uses=3,
        limited_actions=frozenset({ActionKind.CONSIG_INVESTIGATE}), victory=_EVIL_WIN,
    ),
    RoleType.POISONER: Role(
        RoleType.POISONER, Team.EVIL, (ActionKind.POISON, ActionKind.STRONG_POISON),
        priority=7, visits_target=True, max_uses=1,
        limited_actions=frozenset({ActionKind.STRONG_POISON}), victory=_EVIL_WIN,
    ),
    RoleType.JANITOR: Role(
        RoleType.JANITOR, Team.EVIL, (ActionKind.JANITOR_CLEAN,), priority=7,
        max_uses=3, limited_actions=frozenset({ActionKind.JANITOR_CLEAN}),
        victory=_EVIL_WIN,
    ),

    # Neutral
    RoleType.SERIAL_KILLER: Role(
        RoleType.SERIAL_KILLER, Team.NEUTRAL, (ActionKind.KILL,), priority=0,
        visits_target=True, unstoppable=True,
        victory=VictoryRule(
            solo_win=True,
            custom_rules=(
                CustomRule("aliveExactly", team=Team.NEUTRAL, count=1),
                CustomRule("aliveExactly", team=Team.GOOD, count=0),
                CustomRule("aliveExactly", team=Team.EVIL, count=0),
            ),
        ),
    ),
    RoleType.INFECTED: Role(
        RoleType.INFECTED, Team.NEUTRAL, (ActionKind.INFECT,), priority=6,
        visits_target=True,
        victory=VictoryRule(custom_rules=(CustomRule("allOthersHaveEffect", effect="infected"),)),
    ),
    RoleType.JESTER: Role(
        RoleType.JESTER, Team.NEUTRAL, victory=VictoryRule(solo_win=True),
    ),
    RoleType.WITCH: Role(
        RoleType.WITCH, Team.NEUTRAL, (ActionKind.CONTROL,), priority=-1,
        victory=VictoryRule(can_win_with=(Team.GOOD, Team.EVIL)),
    ),
}

# Neutrals that keep the town from winning while they live.
HOSTILE_NEUTRALS: FrozenSet[RoleType] = frozenset({RoleType.SERIAL_KILLER, RoleType.INFECTED})

# Teams each modifier may be dealt to.
MODIFIER_TEAMS: Dict[Modifier, Tuple[Team, ...]] = {
    Modifier.DRUNK: (Team.GOOD, Team.NEUTRAL),
    Modifier.SHADY: (Team.GOOD,),
    Modifier.INNOCENT: (Team.EVIL,),
    Modifier.PARANOID: (Team.GOOD, Team.NEUTRAL),
    Modifier.INSOMNIAC: (Team.GOOD, Team.NEUTRAL),
    Modifier.SWEETHEART: (Team.GOOD, Team.NEUTRAL),
}


def get_role(role_type: RoleType) -> Role:
    """Look up the capability entry for a role."""
    return ROLES[role_type]


def get_roles_by_team(*teams: Team) -> List[RoleType]:
    """All role types belonging to any of the given teams, in registry order."""
    return [role_type for role_type, role in ROLES.items() if role.team in teams]


def parse_role_type(name: str) -> RoleType:
    """Resolve a role from its display name ("SerialKiller") or enum name ("SERIAL_KILLER")."""
    for role_type in RoleType:
        if name in (role_type.value, role_type.name):
            return role_type
    raise ValueError(f"Unknown role: {name}")


def get_role_distribution(total_players: int) -> List[RoleType]:
    """
    Get a standard role distribution for the given table size.
    Roughly a quarter of the table is mafia, one neutral joins from 8 players up,
    the rest is town.
    """
    town_order = [
        RoleType.DOCTOR, RoleType.INVESTIGATOR, RoleType.JAILER, RoleType.LOOKOUT,
        RoleType.TRACKER, RoleType.GUARDIAN, RoleType.CORONER, RoleType.HUNTER,
        RoleType.PRIEST,
    ]
    mafia_order = [RoleType.KILLER, RoleType.CLEANER, RoleType.ACCUSER, RoleType.POISONER]
    neutral_order = [RoleType.JESTER, RoleType.SERIAL_KILLER, RoleType.WITCH]

    mafia_count = max(1, total_players // 4)
    neutral_count = 0 if total_players < 8 else min(len(neutral_order), (total_players - 4) // 4)
    town_count = total_players - mafia_count - neutral_count

    distribution = [mafia_order[i % len(mafia_order)] for i in range(mafia_count)]
    distribution += neutral_order[:neutral_count]
    distribution += [
        town_order[i] if i < len(town_order) else RoleType.CITIZEN
        for i in range(town_count)
    ]
    return distribution
