"""
Night phase handler: resolves every submitted night action in one pass.

Pipeline:
0. Witch control pre-pass
1. Collect actions and sort them by priority
2. Execute in order (drunk, block and guard checks come first)
3. Deferred observation feedback (Lookout, Tracker, Jailer, Guardian)
4. Visit notifications (Paranoid, Insomniac)
5. Poison maturation and kill resolution
6. Doctor feedback and Hunter alignment check
7. Posthumous role concealment
8. Default "quiet night" messages
"""

import logging
import random
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Set

from ..config.game_config import GameConfig, default_config
from ..core import (
    ActionKind,
    EffectType,
    Modifier,
    NightContext,
    Player,
    ResultKind,
    RoleType,
    Team,
    get_role,
)
from ..core.results import ATTACKED_KINDS
from ..core.roles import DEAD_TARGET_ACTIONS
from .fabrication import fabricate_result, pick_decoy_roles, pick_evil_role
from .puppeteering import apply_puppeteering
from .side_effects import apply_sweetheart, strip_mayor

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 5

# Frame must commit before any same-night investigation reads it.
FRAME_PRIORITY = get_role(RoleType.INVESTIGATOR).priority - 1

ATTACK_MESSAGES = {
    "killer": (ResultKind.ATTACKED_KILLER, "Someone attacked you in the night"),
    "hunter": (ResultKind.ATTACKED_HUNTER, "A hunter shot at you"),
    "poison": (ResultKind.ATTACKED_POISON, "Poison was spreading through your body"),
}


@dataclass
class ActionRecord:
    """One collected night action. Rebuilt on every resolution pass."""
    actor_id: str
    target_id: str
    action: ActionKind
    priority: int
    puppeteered: bool = False


@dataclass
class Death:
    """A death that happened during the night."""
    player_id: str
    cause: str  # "kill", "poison" or "guilt"
    attacker_ids: List[str] = field(default_factory=list)


@dataclass
class NightSummary:
    """What the night changed, for the caller's bookkeeping."""
    round_number: int
    deaths: List[Death] = field(default_factory=list)
    mayor_died: bool = False
    actions: List[ActionRecord] = field(default_factory=list)

    @property
    def killed_ids(self) -> List[str]:
        return [d.player_id for d in self.deaths]


@dataclass
class _Night:
    """Scratch state for a single resolution pass."""
    context: NightContext
    players: Dict[str, Player]
    order: List[Player]
    summary: NightSummary

    records: List[ActionRecord] = field(default_factory=list)
    visits: List[ActionRecord] = field(default_factory=list)
    controllers: Set[str] = field(default_factory=set)

    drunk: Set[str] = field(default_factory=set)
    blocked: Set[str] = field(default_factory=set)
    guarded: Set[str] = field(default_factory=set)
    repelled: Dict[str, List[str]] = field(default_factory=dict)  # {target_id: [actor_id]}

    jail_targets: Dict[str, str] = field(default_factory=dict)  # {jailer_id: target_id}
    guard_targets: Dict[str, str] = field(default_factory=dict)  # {guardian_id: target_id}
    protections: Dict[str, str] = field(default_factory=dict)  # {doctor_id: target_id}
    hunter_kills: Dict[str, str] = field(default_factory=dict)  # {hunter_id: target_id}
    cleaning_targets: Set[str] = field(default_factory=set)

    honor_kills_landed: Dict[str, Team] = field(default_factory=dict)  # {hunter_id: victim team}
    healed_from: Dict[str, List[str]] = field(default_factory=lambda: defaultdict(list))

    @property
    def round(self) -> int:
        return self.context.round_number


class NightPhaseHandler:
    """Resolves a night: all submitted actions, their interactions and their feedback."""

    def __init__(self, config: GameConfig = default_config, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or random.Random(config.random_seed)
        self._handlers: Dict[ActionKind, Callable[[_Night, Player, Player], None]] = {
            ActionKind.PROTECT: self._protect,
            ActionKind.BLOCK: self._block,
            ActionKind.GUARD: self._guard,
            ActionKind.WATCH: self._observe,
            ActionKind.TRACK: self._observe,
            ActionKind.INVESTIGATE: self._investigate,
            ActionKind.AUTOPSY: self._autopsy,
            ActionKind.REVIVE: self._revive,
            ActionKind.INFECT: self._infect,
            ActionKind.KILL: self._kill,
            ActionKind.HUNTER_KILL: self._hunter_kill,
            ActionKind.CLEAN_ROLE: self._clean,
            ActionKind.JANITOR_CLEAN: self._clean,
            ActionKind.FRAME: self._frame,
            ActionKind.CONSIG_INVESTIGATE: self._consig_investigate,
            ActionKind.POISON: self._poison,
            ActionKind.STRONG_POISON: self._strong_poison,
        }

    def resolve(self, context: NightContext, players: Sequence[Player]) -> NightSummary:
        """
        Resolve one night. Players are mutated in place; the caller persists them.

        Args:
            context: Round number and current mayor
            players: Every player in the game, dead ones included

        Returns:
            Summary of deaths and whether the mayor died.
        """
        night = _Night(
            context=context,
            players={p.player_id: p for p in players},
            order=list(players),
            summary=NightSummary(round_number=context.round_number),
        )
        logger.info("[NIGHT] Round %d: resolving night actions", context.round_number)

        self._prepare(night)
        night.controllers = apply_puppeteering(night.players)
        night.records = self.collect_actions(night)
        for record in night.records:
            self._execute(night, record)

        self._resolve_observations(night)
        self._notify_visits(night)
        self._resolve_kills(night)
        self._protector_feedback(night)
        self._honor_kill_check(night)
        self._apply_concealment(night)
        self._default_feedback(night)

        night.summary.actions = list(night.records)
        logger.info("[NIGHT] Round %d resolved: %d death(s)", context.round_number, len(night.summary.deaths))
        return night.summary

    # ------------------------------------------------------------------
    # Preparation and collection
    # ------------------------------------------------------------------

    def _prepare(self, night: _Night) -> None:
        """Reset result logs and drop effects from earlier nights."""
        for player in night.order:
            player.results = []
            player.effects.expire(night.round)
            player.role_data.controlled_by = None
            player.role_data.original_target_id = None
            player.role_data.original_action = None

    def _priority(self, actor: Player, action: ActionKind) -> int:
        if action == ActionKind.FRAME:
            return FRAME_PRIORITY
        priority = actor.role_info.priority
        return DEFAULT_PRIORITY if priority is None else priority

    def collect_actions(self, night: _Night) -> List[ActionRecord]:
        """Build the priority-ordered list of actions that will be executed."""
        records: List[ActionRecord] = []

        for actor in night.order:
            if not actor.alive:
                continue
            submitted = actor.night_action
            if not submitted.is_submitted:
                continue

            action = submitted.kind
            if action is None:
                logger.debug("[NIGHT] %s: unknown action %r", actor.name, submitted.action)
                continue
            if action == ActionKind.CONTROL:
                continue
            if not actor.role_info.can_perform(action):
                logger.debug("[NIGHT] %s: role %s cannot %s", actor.name, actor.role.value, action.value)
                continue

            target = night.players.get(submitted.target_id)
            if target is None:
                logger.debug("[NIGHT] %s: invalid target %s", actor.name, submitted.target_id)
                continue
            if not target.alive and action not in DEAD_TARGET_ACTIONS:
                logger.debug("[NIGHT] %s: target must be alive for %s", actor.name, action.value)
                continue

            records.append(ActionRecord(
                actor_id=actor.player_id,
                target_id=target.player_id,
                action=action,
                priority=self._priority(actor, action),
                puppeteered=actor.role_data.controlled_by is not None,
            ))

        # Stable: equal priorities keep seating order
        records.sort(key=lambda r: r.priority)
        for index, r in enumerate(records, 1):
            logger.debug("[NIGHT]   %d. [P%d] %s -> %s -> %s", index, r.priority,
                         night.players[r.actor_id].name, r.action.value, night.players[r.target_id].name)
        return records

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _execute(self, night: _Night, record: ActionRecord) -> None:
        actor = night.players[record.actor_id]
        target = night.players[record.target_id]
        role = actor.role_info

        if actor.modifier == Modifier.DRUNK and not role.unstoppable:
            night.drunk.add(actor.player_id)
            actor.results.append(fabricate_result(record.action, actor, target, night.order, self.rng))
            logger.debug("[NIGHT] %s is too drunk to leave home", actor.name)
            return

        if actor.effects.has(EffectType.BLOCKED, night.round) and not role.unstoppable:
            if actor.player_id not in night.blocked:
                night.blocked.add(actor.player_id)
                actor.add_result(ResultKind.JAILER_PREVENTED, "You tried to leave but you were detained")
                logger.debug("[NIGHT] %s is detained", actor.name)
            return

        guard = target.effects.first(EffectType.GUARD, night.round)
        if guard is not None and not role.unstoppable and guard.source_id != actor.player_id:
            if actor.player_id not in night.guarded:
                night.guarded.add(actor.player_id)
                actor.effects.add(EffectType.GUARDED, guard.source_id, night.round)
                actor.add_result(ResultKind.GUARDIAN_PREVENTED,
                                 f"A guard outside {target.name}'s house turned you away")
            night.repelled.setdefault(target.player_id, []).append(actor.player_id)
            logger.debug("[NIGHT] %s was turned away from %s", actor.name, target.name)
            return

        night.visits.append(record)
        self._handlers[record.action](night, actor, target)

    def _protect(self, night: _Night, actor: Player, target: Player) -> None:
        target.effects.add(EffectType.PROTECTED, actor.player_id, night.round)
        night.protections[actor.player_id] = target.player_id

    def _block(self, night: _Night, actor: Player, target: Player) -> None:
        if target.role_info.unstoppable:
            actor.add_result(ResultKind.FAILED, f"{target.name} cannot be detained")
            return
        target.effects.add(EffectType.BLOCKED, actor.player_id, night.round)
        night.jail_targets[actor.player_id] = target.player_id

    def _guard(self, night: _Night, actor: Player, target: Player) -> None:
        target.effects.add(EffectType.GUARD, actor.player_id, night.round)
        night.guard_targets[actor.player_id] = target.player_id

    def _observe(self, night: _Night, actor: Player, target: Player) -> None:
        # Watch and track report once every visit is known
        logger.debug("[NIGHT] %s keeps an eye on %s", actor.name, target.name)

    def _investigation_roles(self, night: _Night, target: Player) -> List[str]:
        """The two roles an Investigator is shown for a target."""
        true_role = target.role
        framed = target.effects.first(EffectType.FRAMED, night.round)

        if not target.alive and target.role_hidden:
            roles = pick_decoy_roles(self.rng, exclude=[true_role], count=2)
        elif target.effects.has(EffectType.MARKED_FOR_CLEANING, night.round):
            roles = pick_decoy_roles(self.rng, exclude=[true_role], count=2)
        elif target.modifier == Modifier.SHADY:
            # Shady never shows the true role: a random evil role stands in for it
            disguise = pick_evil_role(self.rng, exclude=[true_role])
            decoy = pick_decoy_roles(self.rng, exclude=[true_role, RoleType(disguise)])[0]
            roles = [disguise, decoy]
        elif target.modifier == Modifier.INNOCENT:
            roles = pick_decoy_roles(self.rng, exclude=[true_role], count=2, teams=(Team.GOOD, Team.NEUTRAL))
        elif framed is not None:
            fake = framed.metadata.get("fake_aligned_role") or RoleType.KILLER.value
            decoy = pick_decoy_roles(self.rng, exclude=[true_role, RoleType(fake)])[0]
            roles = [fake, decoy]
        else:
            decoy = pick_decoy_roles(self.rng, exclude=[true_role])[0]
            roles = [true_role.value, decoy]

        self.rng.shuffle(roles)
        return roles

    def _investigate(self, night: _Night, actor: Player, target: Player) -> None:
        if not target.alive and not target.role_hidden:
            actor.add_result(ResultKind.FAILED,
                             f"You cannot investigate {target.name} - the dead are the Coroner's work")
            return
        roles = self._investigation_roles(night, target)
        actor.add_result(ResultKind.INVESTIGATE, f"{target.name} = {roles[0]} / {roles[1]}")
        actor.record_investigation(target.player_id, ActionKind.INVESTIGATE.value, night.round, roles)

    def _autopsy(self, night: _Night, actor: Player, target: Player) -> None:
        if target.alive:
            actor.add_result(ResultKind.FAILED, f"{target.name} is still alive - there is nothing to examine")
            return
        if target.role_hidden:
            actor.add_result(ResultKind.AUTOPSY, f"{target.name} = Unknown (the role was cleaned)")
            actor.record_investigation(target.player_id, ActionKind.AUTOPSY.value, night.round, ["Unknown"])
            return

        # A framed body shows the role the Investigator was fed
        framed = target.effects.first(EffectType.FRAMED)
        role_name = framed.metadata.get("fake_aligned_role", target.role.value) if framed else target.role.value
        actor.add_result(ResultKind.AUTOPSY, f"{target.name} = {role_name}")
        actor.record_investigation(target.player_id, ActionKind.AUTOPSY.value, night.round, [role_name])

    def _revive(self, night: _Night, actor: Player, target: Player) -> None:
        if target.alive:
            actor.add_result(ResultKind.FAILED, f"{target.name} is not dead")
            return
        if actor.uses_left() <= 0:
            actor.add_result(ResultKind.FAILED, "You have no uses left")
            return
        left = actor.consume_use()
        target.revive()
        actor.add_result(ResultKind.SUCCESS, f"You brought {target.name} back to life ({left} left)")
        target.add_result(ResultKind.REVIVED, "You were brought back to life")
        logger.info("[NIGHT] %s revived %s", actor.name, target.name)

    def _infect(self, night: _Night, actor: Player, target: Player) -> None:
        if not target.alive:
            actor.add_result(ResultKind.FAILED, f"{target.name} is not alive")
            return
        actor.role_data.visited_targets.add(target.player_id)
        if target.effects.has(EffectType.INFECTED):
            actor.add_result(ResultKind.SUCCESS, f"{target.name} already carries the infection")
            return
        target.effects.add(EffectType.INFECTED, actor.player_id, night.round)
        actor.add_result(ResultKind.SUCCESS, f"You infected {target.name}")

    def _kill(self, night: _Night, actor: Player, target: Player) -> None:
        target.effects.add(EffectType.PENDING_KILL, actor.player_id, night.round,
                           cause="kill", is_honor_kill=False)
        actor.add_result(ResultKind.SUCCESS, f"You attacked {target.name}")

    def _hunter_kill(self, night: _Night, actor: Player, target: Player) -> None:
        target.effects.add(EffectType.PENDING_KILL, actor.player_id, night.round,
                           cause="kill", is_honor_kill=True)
        night.hunter_kills[actor.player_id] = target.player_id
        actor.add_result(ResultKind.HUNTER_KILL, f"You shot at {target.name}")

    def _clean(self, night: _Night, actor: Player, target: Player) -> None:
        if not target.alive and target.role_hidden:
            actor.add_result(ResultKind.FAILED, f"{target.name}'s role is already concealed")
            return
        if actor.uses_left() <= 0:
            actor.add_result(ResultKind.FAILED, "You have no uses left")
            return

        left = actor.consume_use()
        if target.alive:
            target.effects.add(EffectType.MARKED_FOR_CLEANING, actor.player_id, night.round)
            actor.add_result(ResultKind.SUCCESS,
                             f"You marked {target.name} - investigators will see false results ({left} left)")
        else:
            night.cleaning_targets.add(target.player_id)
            actor.add_result(ResultKind.SUCCESS,
                             f"You will clean {target.name} - their role stays hidden ({left} left)")

    def _frame(self, night: _Night, actor: Player, target: Player) -> None:
        if actor.uses_left() <= 0:
            actor.add_result(ResultKind.FAILED, "You have no uses left")
            return

        left = actor.consume_use()
        fake_role = pick_evil_role(self.rng, exclude=[target.role])
        target.effects.remove(EffectType.FRAMED)
        target.effects.add(EffectType.FRAMED, actor.player_id, night.round, fake_aligned_role=fake_role)
        actor.add_result(ResultKind.SUCCESS,
                         f"You framed {target.name} - they will look guilty to investigators ({left} left)")
        logger.debug("[NIGHT] %s framed %s as %s", actor.name, target.name, fake_role)

    def _consig_investigate(self, night: _Night, actor: Player, target: Player) -> None:
        if not target.alive:
            actor.add_result(ResultKind.FAILED, f"You cannot investigate {target.name} - they are dead")
            return
        if actor.uses_left() <= 0:
            actor.add_result(ResultKind.FAILED, "You have no uses left")
            return

        left = actor.consume_use()
        actor.add_result(ResultKind.CONSIG, f"{target.name} is {target.role.value} ({left} left)")
        actor.record_investigation(target.player_id, ActionKind.CONSIG_INVESTIGATE.value,
                                   night.round, [target.role.value])

    def _poison(self, night: _Night, actor: Player, target: Player) -> None:
        target.effects.add(EffectType.POISONED, actor.player_id, night.round, round=night.round)
        actor.add_result(ResultKind.SUCCESS, f"You poisoned {target.name}")

    def _strong_poison(self, night: _Night, actor: Player, target: Player) -> None:
        if actor.uses_left() <= 0:
            actor.add_result(ResultKind.FAILED, "You have no uses left")
            return
        left = actor.consume_use()
        target.effects.add(EffectType.STRONG_POISONED, actor.player_id, night.round,
                           round=night.round, activated=False)
        actor.add_result(ResultKind.SUCCESS, f"You laced {target.name}'s drink with strong poison ({left} left)")

    # ------------------------------------------------------------------
    # Deferred observation
    # ------------------------------------------------------------------

    def _visitors_of(self, night: _Night, target_id: str, exclude_id: Optional[str] = None) -> List[Player]:
        """Players who actually reached a target, in the order they arrived."""
        seen: Dict[str, Player] = {}
        for visit in night.visits:
            if visit.target_id == target_id and visit.actor_id != exclude_id:
                seen.setdefault(visit.actor_id, night.players[visit.actor_id])
        return list(seen.values())

    def _resolve_observations(self, night: _Night) -> None:
        stopped = night.drunk | night.blocked | night.guarded

        for visit in night.visits:
            actor = night.players[visit.actor_id]
            target = night.players[visit.target_id]

            if visit.action == ActionKind.WATCH:
                names = [p.name for p in self._visitors_of(night, target.player_id, exclude_id=actor.player_id)]
                if names:
                    actor.add_result(ResultKind.LOOKOUT_VISITORS, f"Visitors at {target.name}: {', '.join(names)}")
                else:
                    actor.add_result(ResultKind.LOOKOUT_QUIET, f"Nobody visited {target.name}")

            elif visit.action == ActionKind.TRACK:
                destination = None
                if target.player_id not in stopped:
                    destination = next((v for v in night.visits if v.actor_id == target.player_id), None)
                if destination is not None:
                    actor.add_result(ResultKind.TRACKER_FOLLOWED,
                                     f"{target.name} went to {night.players[destination.target_id].name}")
                else:
                    actor.add_result(ResultKind.TRACKER_STAYED, f"{target.name} stayed home")

        for jailer_id, target_id in night.jail_targets.items():
            jailer = night.players[jailer_id]
            target = night.players[target_id]
            # A drunk never leaves home, so it reads as staying in
            tried_to_act = any(r.actor_id == target_id for r in night.records) and target_id not in night.drunk
            if tried_to_act:
                jailer.add_result(ResultKind.JAILER_BLOCKED, f"You detained {target.name} - they tried to leave")
            else:
                jailer.add_result(ResultKind.JAILER_HOME, f"You detained {target.name} - they stayed home")

        for guardian_id, target_id in night.guard_targets.items():
            guardian = night.players[guardian_id]
            target = night.players[target_id]
            repelled = [night.players[pid].name for pid in dict.fromkeys(night.repelled.get(target_id, []))]
            if repelled:
                guardian.add_result(ResultKind.GUARDIAN_STOPPED,
                                    f"Your guard at {target.name} turned away: {', '.join(repelled)}")
            else:
                guardian.add_result(ResultKind.GUARDIAN_QUIET, f"Nobody came near {target.name}")

    # ------------------------------------------------------------------
    # Visit notifications
    # ------------------------------------------------------------------

    def _notify_visits(self, night: _Night) -> None:
        targets = list(dict.fromkeys(v.target_id for v in night.visits))

        for target_id in targets:
            target = night.players[target_id]
            if not target.alive:
                continue
            visitors = self._visitors_of(night, target_id, exclude_id=target_id)

            if target.modifier == Modifier.INSOMNIAC:
                names = [p.name for p in visitors]
            else:
                footprints = [p for p in visitors if p.role_info.visits_target]
                only_detainer = (
                    len(footprints) == 1
                    and footprints[0].role_info.can_perform(ActionKind.BLOCK)
                    and target.effects.has(EffectType.BLOCKED, night.round)
                )
                if only_detainer:
                    continue
                names = [p.name for p in footprints]

            if names:
                target.add_result(ResultKind.VISITED, f"You were visited by: {', '.join(names)}")

        for player in night.order:
            if player.alive and player.modifier == Modifier.PARANOID:
                if self.rng.random() < self.config.paranoid_chance:
                    self._add_paranoid_visitor(night, player)

    def _add_paranoid_visitor(self, night: _Night, player: Player) -> None:
        prefix = f"{ResultKind.VISITED.value}:You were visited by: "
        index = next((i for i, r in enumerate(player.results) if r.startswith(prefix)), None)
        listed = player.results[index][len(prefix):].split(", ") if index is not None else []

        candidates = [p.name for p in night.order
                      if p.alive and p.player_id != player.player_id and p.name not in listed]
        if not candidates:
            return
        fake = self.rng.choice(candidates)

        if index is not None:
            player.results[index] = f"{player.results[index]}, {fake}"
        else:
            player.add_result(ResultKind.VISITED, f"You were visited by: {fake}")
        logger.debug("[NIGHT] %s (Paranoid) imagines a visit from %s", player.name, fake)

    # ------------------------------------------------------------------
    # Kills
    # ------------------------------------------------------------------

    def _mature_poisons(self, night: _Night, player: Player) -> None:
        protected = player.effects.has(EffectType.PROTECTED, night.round)

        for effect in player.effects.get(EffectType.POISONED):
            if effect.metadata.get("round", effect.added_at) >= night.round:
                continue
            player.effects.remove(predicate=lambda e, poisoned=effect: e is poisoned)
            if protected:
                night.healed_from[player.player_id].append("poison")
            else:
                player.effects.add(EffectType.PENDING_KILL, effect.source_id, night.round, cause="poison")

        # Protection is what sets strong poison off
        if protected:
            for effect in player.effects.get(EffectType.STRONG_POISONED):
                armed = player.effects.replace(effect, metadata={"activated": True})
                player.effects.add(EffectType.PENDING_KILL, armed.source_id, night.round,
                                   cause="poison", unhealable=True)

    @staticmethod
    def _attack_category(effect) -> str:
        if effect.metadata.get("is_honor_kill"):
            return "hunter"
        if effect.metadata.get("cause") == "poison":
            return "poison"
        return "killer"

    def _resolve_kills(self, night: _Night) -> None:
        for player in night.order:
            if player.alive:
                self._mature_poisons(night, player)

        for player in night.order:
            if not player.alive:
                continue
            pending = player.effects.get(EffectType.PENDING_KILL)
            if not pending:
                continue

            protected = player.effects.has(EffectType.PROTECTED, night.round)
            unhealable = any(e.metadata.get("unhealable") for e in pending)

            if protected and not unhealable:
                night.healed_from[player.player_id].extend(self._attack_category(e) for e in pending)
                logger.info("[NIGHT] %s was attacked but saved", player.name)
            else:
                # Protection still voids every healable attack
                lethal = [e for e in pending if e.metadata.get("unhealable")] if protected else pending
                self._kill_player(night, player, lethal)

            player.effects.remove(EffectType.PENDING_KILL)
            player.effects.remove(EffectType.STRONG_POISONED, predicate=lambda e: e.metadata.get("activated"))

        for player_id, categories in night.healed_from.items():
            player = night.players[player_id]
            if not player.alive:
                continue
            for category in dict.fromkeys(categories):
                kind, text = ATTACK_MESSAGES[category]
                player.add_result(kind, text)
            player.add_result(ResultKind.HEALED, "A doctor saved you!")

    def _kill_player(self, night: _Night, player: Player, pending) -> None:
        player.eliminate()
        by_poison = all(e.metadata.get("cause") == "poison" for e in pending)
        if by_poison:
            player.add_result(ResultKind.POISONED_KILLED, "You succumbed to poison")
        else:
            player.add_result(ResultKind.KILLED, "You were killed in the night")

        for effect in pending:
            if effect.metadata.get("is_honor_kill") and effect.source_id:
                night.honor_kills_landed[effect.source_id] = player.team

        attackers = list(dict.fromkeys(e.source_id for e in pending if e.source_id))
        self._on_death(night, player, "poison" if by_poison else "kill", attackers)
        logger.info("[NIGHT] %s was killed", player.name)

    def _on_death(self, night: _Night, player: Player, cause: str, attackers: List[str]) -> None:
        night.summary.deaths.append(Death(player_id=player.player_id, cause=cause, attacker_ids=attackers))
        apply_sweetheart(player, night.order, self.rng)
        if strip_mayor(player, night.context.mayor_id):
            night.summary.mayor_died = True

    # ------------------------------------------------------------------
    # Post-kill feedback
    # ------------------------------------------------------------------

    def _protector_feedback(self, night: _Night) -> None:
        for doctor_id, target_id in night.protections.items():
            doctor = night.players[doctor_id]
            target = night.players[target_id]
            if target.has_result(*ATTACKED_KINDS) and target.has_result(ResultKind.HEALED):
                doctor.add_result(ResultKind.DOCTOR_SAVED, f"You saved {target.name} from death!")
            else:
                doctor.add_result(ResultKind.DOCTOR_QUIET, f"You protected {target.name} - nobody attacked them")

    def _honor_kill_check(self, night: _Night) -> None:
        for hunter_id, target_id in night.hunter_kills.items():
            hunter = night.players[hunter_id]
            target = night.players[target_id]
            if not hunter.alive:
                continue

            victim_team = night.honor_kills_landed.get(hunter_id)
            if victim_team is None:
                hunter.add_result(ResultKind.HUNTER_MISSED, f"Your shot did not bring down {target.name}")
            elif victim_team == Team.GOOD:
                hunter.eliminate()
                hunter.add_result(ResultKind.HUNTER_GUILT, "You killed an innocent - guilt takes your life")
                self._on_death(night, hunter, "guilt", [])
                logger.info("[NIGHT] %s died from guilt after killing %s", hunter.name, target.name)
            else:
                hunter.add_result(ResultKind.HUNTER_SUCCESS, f"You took down {target.name}")

    def _apply_concealment(self, night: _Night) -> None:
        for target_id in night.cleaning_targets:
            target = night.players[target_id]
            if not target.alive:
                target.hide_role()
                logger.info("[NIGHT] %s's role was cleaned", target.name)

        for player in night.order:
            if not player.alive and player.effects.has(EffectType.MARKED_FOR_CLEANING):
                player.hide_role()
                player.effects.remove(EffectType.MARKED_FOR_CLEANING)
                logger.info("[NIGHT] %s's role was cleaned (marked before death)", player.name)

    def _default_feedback(self, night: _Night) -> None:
        for player in night.order:
            if not player.alive or player.results:
                continue
            if player.player_id in night.controllers:
                continue
            player.add_result(ResultKind.SAFE, "Nothing happened to you tonight")
