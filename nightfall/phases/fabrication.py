"""
Plausible-but-false night results for Drunk players and decoy-role sampling.
"""

import random
from typing import Iterable, List, Optional, Sequence

from ..core import ActionKind, Player, ResultKind, RoleType, Team, format_result, get_roles_by_team


def pick_decoy_roles(rng: random.Random, exclude: Iterable[RoleType] = (), count: int = 1,
                     teams: Optional[Sequence[Team]] = None) -> List[str]:
    """
    Sample role names that are none of ``exclude``.

    Distinct names are drawn while the pool allows it; a pool smaller than
    ``count`` repeats names rather than falling back to an excluded role.
    """
    excluded = set(exclude)
    pool = [r for r in get_roles_by_team(*(teams or tuple(Team))) if r not in excluded]
    if not pool:
        return ["Unknown"] * count

    picks = rng.sample(pool, min(count, len(pool)))
    while len(picks) < count:
        picks.append(rng.choice(pool))
    return [r.value for r in picks]


def pick_evil_role(rng: random.Random, exclude: Iterable[RoleType] = ()) -> str:
    """A random evil role name, used for framing and Shady disguises."""
    return pick_decoy_roles(rng, exclude, count=1, teams=(Team.EVIL,))[0]


def _random_names(rng: random.Random, players: Sequence[Player], exclude_ids: Iterable[str],
                  count: int) -> List[str]:
    excluded = set(exclude_ids)
    candidates = [p.name for p in players if p.alive and p.player_id not in excluded]
    return rng.sample(candidates, min(count, len(candidates)))


def fabricate_result(action: ActionKind, actor: Player, target: Player,
                     players: Sequence[Player], rng: random.Random) -> str:
    """
    Build a fake result for a Drunk actor who never left home.

    The message mimics what the real action would report, but every detail is
    invented and nothing reveals the target's true state.
    """
    name = target.name

    if action == ActionKind.INVESTIGATE:
        roles = pick_decoy_roles(rng, exclude=[target.role], count=2)
        return format_result(ResultKind.INVESTIGATE, f"{name} = {roles[0]} / {roles[1]}")

    if action == ActionKind.AUTOPSY:
        role = pick_decoy_roles(rng, exclude=[target.role])[0]
        return format_result(ResultKind.AUTOPSY, f"{name} = {role}")

    if action == ActionKind.CONSIG_INVESTIGATE:
        role = pick_decoy_roles(rng, exclude=[target.role])[0]
        return format_result(ResultKind.CONSIG, f"{name} is {role}")

    if action == ActionKind.WATCH:
        names = _random_names(rng, players, (actor.player_id, target.player_id), rng.randint(0, 2))
        if names:
            return format_result(ResultKind.LOOKOUT_VISITORS, f"Visitors at {name}: {', '.join(names)}")
        return format_result(ResultKind.LOOKOUT_QUIET, f"Nobody visited {name}")

    if action == ActionKind.TRACK:
        destinations = _random_names(rng, players, (target.player_id,), 1)
        if destinations and rng.random() < 0.5:
            return format_result(ResultKind.TRACKER_FOLLOWED, f"{name} went to {destinations[0]}")
        return format_result(ResultKind.TRACKER_STAYED, f"{name} stayed home")

    if action == ActionKind.BLOCK:
        return format_result(ResultKind.JAILER_HOME, rng.choice([
            f"You detained {name} - they stayed home",
            f"You locked up {name} - they never tried to leave",
        ]))

    if action == ActionKind.GUARD:
        return format_result(ResultKind.GUARDIAN_QUIET, f"Nobody came near {name}")

    if action == ActionKind.PROTECT:
        return format_result(ResultKind.DOCTOR_QUIET, rng.choice([
            f"You protected {name} - nobody attacked them",
            f"You watched over {name} - the night was quiet",
        ]))

    success_texts = {
        ActionKind.KILL: [f"You attacked {name}", f"You struck {name} down"],
        ActionKind.INFECT: [f"You infected {name}"],
        ActionKind.FRAME: [f"You framed {name}"],
        ActionKind.CLEAN_ROLE: [f"You marked {name} for cleaning"],
        ActionKind.JANITOR_CLEAN: [f"You will clean {name}"],
        ActionKind.POISON: [f"You poisoned {name}"],
        ActionKind.STRONG_POISON: [f"You laced {name}'s drink with strong poison"],
        ActionKind.REVIVE: [f"You prayed over {name}"],
    }
    texts = success_texts.get(action, ["Action performed"])
    return format_result(ResultKind.SUCCESS, rng.choice(texts))
