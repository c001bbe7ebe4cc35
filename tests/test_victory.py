"""
Tests for victory evaluation.
"""

from conftest import make_player
from nightfall.core import EffectType, RoleType, Team, evaluate_victory


def test_game_continues_with_mixed_table():
    """Good outnumbering evil is not a finished game."""
    players = [
        make_player("1", RoleType.KILLER),
        make_player("2", RoleType.DOCTOR),
        make_player("3", RoleType.CITIZEN),
        make_player("4", RoleType.INVESTIGATOR),
    ]
    assert evaluate_victory(players) is None


def test_good_wins_when_evil_is_gone():
    """Town wins, and the Witch wins along with it."""
    players = [
        make_player("1", RoleType.KILLER, alive=False),
        make_player("2", RoleType.DOCTOR),
        make_player("3", RoleType.WITCH),
    ]
    victory = evaluate_victory(players)
    assert victory.winner == "good"
    assert set(victory.player_ids) == {"2", "3"}


def test_hostile_neutral_blocks_town_win():
    """A living Serial Killer keeps the game going."""
    players = [
        make_player("1", RoleType.SERIAL_KILLER),
        make_player("2", RoleType.DOCTOR),
        make_player("3", RoleType.CITIZEN),
    ]
    assert evaluate_victory(players) is None


def test_evil_wins_on_majority():
    """More evil than good alive."""
    players = [
        make_player("1", RoleType.KILLER),
        make_player("2", RoleType.POISONER),
        make_player("3", RoleType.CITIZEN),
    ]
    victory = evaluate_victory(players)
    assert victory.winner == "evil"
    assert victory.teams == [Team.EVIL]


def test_evil_wins_one_on_one():
    """A mafioso facing a single townsperson wins."""
    players = [
        make_player("1", RoleType.KILLER),
        make_player("2", RoleType.DOCTOR),
        make_player("3", RoleType.CITIZEN, alive=False),
    ]
    assert evaluate_victory(players).winner == "evil"


def test_serial_killer_wins_alone():
    """The Serial Killer wins once everybody else is gone."""
    players = [
        make_player("1", RoleType.SERIAL_KILLER),
        make_player("2", RoleType.KILLER, alive=False),
        make_player("3", RoleType.CITIZEN, alive=False),
    ]
    victory = evaluate_victory(players)
    assert victory.winner == "solo"
    assert victory.player_ids == ["1"]


def test_serial_killer_keeps_fighting_with_a_jester_alive():
    """A second neutral means the Serial Killer's conditions are not met yet."""
    players = [
        make_player("1", RoleType.SERIAL_KILLER),
        make_player("2", RoleType.JESTER),
        make_player("3", RoleType.CITIZEN, alive=False),
    ]
    assert evaluate_victory(players) is None


def test_infected_wins_when_everyone_is_infected():
    """Every other living player carrying the infection is a win."""
    infected = make_player("1", RoleType.INFECTED)
    doctor = make_player("2", RoleType.DOCTOR)
    citizen = make_player("3", RoleType.CITIZEN)
    for target in (doctor, citizen):
        target.effects.add(EffectType.INFECTED, "1", 1)

    victory = evaluate_victory([infected, doctor, citizen])
    assert victory.winner == "custom"
    assert victory.player_ids == ["1"]


def test_solo_role_last_alive():
    """A Jester left alone wins solo."""
    players = [
        make_player("1", RoleType.JESTER),
        make_player("2", RoleType.KILLER, alive=False),
    ]
    assert evaluate_victory(players).winner == "solo"


def test_nobody_alive():
    """An empty table goes to evil."""
    players = [make_player("1", RoleType.DOCTOR, alive=False)]
    assert evaluate_victory(players).winner == "evil"
