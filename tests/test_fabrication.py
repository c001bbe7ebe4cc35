"""
Tests for decoy sampling and drunk fabrication.
"""

import random

import pytest

from conftest import make_player
from nightfall.core import ActionKind, ResultKind, RoleType, Team, get_roles_by_team, parse_result
from nightfall.phases.fabrication import fabricate_result, pick_decoy_roles, pick_evil_role


def test_decoys_exclude_roles_and_are_distinct(rng):
    """Decoys never repeat an excluded role and are distinct while possible."""
    for _ in range(200):
        picks = pick_decoy_roles(rng, exclude=[RoleType.DOCTOR], count=2)
        assert "Doctor" not in picks
        assert picks[0] != picks[1]


def test_decoys_restricted_to_teams(rng):
    """A team filter limits the pool."""
    evil = {r.value for r in get_roles_by_team(Team.EVIL)}
    for _ in range(50):
        assert pick_evil_role(rng, exclude=[RoleType.KILLER]) in evil - {"Killer"}


def test_small_pool_repeats_instead_of_leaking(rng):
    """When only one role is left it is repeated, never swapped for an excluded one."""
    evil = get_roles_by_team(Team.EVIL)
    keep = evil[0]
    picks = pick_decoy_roles(rng, exclude=evil[1:], count=2, teams=(Team.EVIL,))
    assert picks == [keep.value, keep.value]


def test_empty_pool(rng):
    """With nothing to choose from the role reads Unknown."""
    picks = pick_decoy_roles(rng, exclude=list(RoleType), count=2)
    assert picks == ["Unknown", "Unknown"]


@pytest.mark.parametrize("action, role, kinds", [
    (ActionKind.INVESTIGATE, RoleType.INVESTIGATOR, {ResultKind.INVESTIGATE}),
    (ActionKind.AUTOPSY, RoleType.CORONER, {ResultKind.AUTOPSY}),
    (ActionKind.CONSIG_INVESTIGATE, RoleType.CONSIGLIERE, {ResultKind.CONSIG}),
    (ActionKind.WATCH, RoleType.LOOKOUT, {ResultKind.LOOKOUT_VISITORS, ResultKind.LOOKOUT_QUIET}),
    (ActionKind.TRACK, RoleType.TRACKER, {ResultKind.TRACKER_FOLLOWED, ResultKind.TRACKER_STAYED}),
    (ActionKind.BLOCK, RoleType.JAILER, {ResultKind.JAILER_HOME}),
    (ActionKind.GUARD, RoleType.GUARDIAN, {ResultKind.GUARDIAN_QUIET}),
    (ActionKind.PROTECT, RoleType.DOCTOR, {ResultKind.DOCTOR_QUIET}),
    (ActionKind.KILL, RoleType.KILLER, {ResultKind.SUCCESS}),
])
def test_fabricated_result_mimics_real_kind(action, role, kinds):
    """Every fabrication carries the tag the real action would."""
    actor = make_player("1", role)
    target = make_player("2", RoleType.SERIAL_KILLER, name="Sid")
    others = [make_player(str(i), RoleType.CITIZEN) for i in range(3, 6)]
    players = [actor, target] + others

    for seed in range(20):
        entry = fabricate_result(action, actor, target, players, random.Random(seed))
        kind, text = parse_result(entry)
        assert ResultKind(kind) in kinds
        assert "SerialKiller" not in text
