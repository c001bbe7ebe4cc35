"""
Player class representing a game participant.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .effects import EffectStore
from .results import ResultKind, format_result
from .roles import ActionKind, Modifier, Role, RoleType, Team, get_role


@dataclass
class NightAction:
    """The action a player submitted for the coming night."""
    target_id: Optional[str] = None
    action: Optional[ActionKind] = None
    puppet_id: Optional[str] = None  # Witch only: the player being controlled

    @property
    def is_submitted(self) -> bool:
        return self.action is not None and self.target_id is not None

    @property
    def kind(self) -> Optional[ActionKind]:
        """The submitted action as an ActionKind; None when missing or unknown."""
        if self.action is None or isinstance(self.action, ActionKind):
            return self.action
        try:
            return ActionKind(self.action)
        except ValueError:
            return None


@dataclass
class InvestigationRecord:
    """What an information role learned about one target."""
    kind: str
    round_number: int
    revealed_roles: List[str] = field(default_factory=list)


@dataclass
class RoleData:
    """Role-scoped state that survives across nights."""
    uses_remaining: Optional[int] = None
    investigation_history: Dict[str, InvestigationRecord] = field(default_factory=dict)  # {target_id: record}
    visited_targets: Set[str] = field(default_factory=set)

    # Provenance when a Witch rewrote this player's action
    controlled_by: Optional[str] = None
    original_target_id: Optional[str] = None
    original_action: Optional[ActionKind] = None


@dataclass
class Player:
    """Represents a player in the game."""
    player_id: str
    name: str
    role: RoleType
    alive: bool = True
    modifier: Optional[Modifier] = None
    role_hidden: bool = False
    effects: EffectStore = field(default_factory=EffectStore)
    role_data: RoleData = field(default_factory=RoleData)

    # Night
    night_action: NightAction = field(default_factory=NightAction)
    results: List[str] = field(default_factory=list)

    # Day voting
    vote_for: Optional[str] = None
    has_voted: bool = False
    vote_weight: int = 1

    def __str__(self) -> str:
        return f"{self.name} ({self.role.value})"

    @property
    def role_info(self) -> Role:
        return get_role(self.role)

    @property
    def team(self) -> Team:
        return self.role_info.team

    @property
    def is_alive(self) -> bool:
        return self.alive

    @property
    def is_evil(self) -> bool:
        return self.team == Team.EVIL

    @property
    def is_good(self) -> bool:
        return self.team == Team.GOOD

    def add_result(self, kind: ResultKind, text: str) -> None:
        """Append a tagged entry to this night's result log."""
        self.results.append(format_result(kind, text))

    def has_result(self, *kinds: ResultKind) -> bool:
        prefixes = tuple(f"{kind.value}:" for kind in kinds)
        return any(entry.startswith(prefixes) for entry in self.results)

    def get_results(self, kind: ResultKind) -> List[str]:
        prefix = f"{kind.value}:"
        return [entry for entry in self.results if entry.startswith(prefix)]

    def submit_action(self, action: ActionKind, target_id: str, puppet_id: Optional[str] = None) -> None:
        """Record the night action; a later submission replaces an earlier one."""
        self.night_action = NightAction(target_id=target_id, action=action, puppet_id=puppet_id)

    def clear_action(self) -> None:
        self.night_action = NightAction()

    def uses_left(self) -> int:
        """Remaining limited uses, initialised from the role on first access."""
        if self.role_data.uses_remaining is None:
            self.role_data.uses_remaining = self.role_info.max_uses or 0
        return self.role_data.uses_remaining

    def consume_use(self) -> int:
        """Spend one limited use. Returns the uses left afterwards."""
        self.role_data.uses_remaining = max(0, self.uses_left() - 1)
        return self.role_data.uses_remaining

    def record_investigation(self, target_id: str, kind: str, round_number: int,
                             revealed_roles: List[str]) -> None:
        self.role_data.investigation_history[target_id] = InvestigationRecord(
            kind=kind, round_number=round_number, revealed_roles=list(revealed_roles)
        )

    def hide_role(self) -> None:
        """Conceal this player's role for good. There is no way back."""
        self.role_hidden = True

    def eliminate(self) -> None:
        """Mark player as dead."""
        self.alive = False

    def revive(self) -> None:
        self.alive = True

    def cast_vote(self, target_id: Optional[str]) -> None:
        """Record a day vote; None abstains."""
        self.vote_for = target_id
        self.has_voted = True

    def clear_vote(self) -> None:
        self.vote_for = None
        self.has_voted = False

    def make_mayor(self) -> None:
        self.vote_weight = 2

    def strip_mayor(self) -> None:
        self.vote_weight = 1
