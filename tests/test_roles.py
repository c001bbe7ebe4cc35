"""
Tests for the role registry and player record.
"""

import pytest

from conftest import make_player
from nightfall.core import (
    ActionKind,
    ResultKind,
    RoleType,
    Team,
    get_role,
    get_role_distribution,
    get_roles_by_team,
    parse_role_type,
)
from nightfall.core.roles import ROLES


def test_every_role_has_an_entry():
    """The registry covers the whole enum."""
    assert set(ROLES) == set(RoleType)


def test_dual_roles_have_a_limited_second_action():
    """Dual roles default to their unlimited action."""
    cleaner = get_role(RoleType.CLEANER)
    assert cleaner.is_dual
    assert cleaner.default_action == ActionKind.KILL
    assert cleaner.is_limited(ActionKind.CLEAN_ROLE)
    assert not cleaner.is_limited(ActionKind.KILL)
    assert cleaner.max_uses == 3


def test_unstoppable_roles():
    """Only the Hunter and Serial Killer bypass interference."""
    unstoppable = {role_type for role_type, role in ROLES.items() if role.unstoppable}
    assert unstoppable == {RoleType.HUNTER, RoleType.SERIAL_KILLER}


def test_witch_has_no_ordinary_night_action():
    """Control is not a regular action."""
    witch = get_role(RoleType.WITCH)
    assert witch.can_perform(ActionKind.CONTROL)
    assert not witch.has_night_action
    assert not get_role(RoleType.CITIZEN).has_night_action


def test_roles_by_team():
    """Teams partition the registry."""
    good = set(get_roles_by_team(Team.GOOD))
    evil = set(get_roles_by_team(Team.EVIL))
    neutral = set(get_roles_by_team(Team.NEUTRAL))
    assert RoleType.DOCTOR in good
    assert RoleType.POISONER in evil
    assert RoleType.JESTER in neutral
    assert good | evil | neutral == set(RoleType)
    assert not good & evil


def test_parse_role_type_accepts_display_and_enum_names():
    """Both "SerialKiller" and "SERIAL_KILLER" resolve."""
    assert parse_role_type("SerialKiller") == RoleType.SERIAL_KILLER
    assert parse_role_type("SERIAL_KILLER") == RoleType.SERIAL_KILLER
    with pytest.raises(ValueError):
        parse_role_type("Werewolf")


@pytest.mark.parametrize("total", [5, 7, 10, 15])
def test_role_distribution_size(total):
    """The standard distribution seats every player and has at least one mafioso."""
    distribution = get_role_distribution(total)
    assert len(distribution) == total
    assert any(get_role(r).team == Team.EVIL for r in distribution)


def test_player_limited_uses_initialise_lazily():
    """Uses start at the role's maximum and never go negative."""
    priest = make_player("1", RoleType.PRIEST)
    assert priest.role_data.uses_remaining is None
    assert priest.uses_left() == 1
    assert priest.consume_use() == 0
    assert priest.consume_use() == 0


def test_player_result_helpers():
    """Results are stored as kind:text and can be filtered by kind."""
    player = make_player("1", RoleType.CITIZEN)
    player.add_result(ResultKind.VISITED, "You were visited by: Kim")
    player.add_result(ResultKind.SAFE, "quiet")

    assert player.results[0] == "visited:You were visited by: Kim"
    assert player.has_result(ResultKind.SAFE, ResultKind.KILLED)
    assert not player.has_result(ResultKind.KILLED)
    assert player.get_results(ResultKind.VISITED) == ["visited:You were visited by: Kim"]


def test_hide_role_is_one_way():
    """Revival does not undo concealment."""
    player = make_player("1", RoleType.DOCTOR, alive=False)
    player.hide_role()
    player.revive()
    assert player.alive
    assert player.role_hidden
