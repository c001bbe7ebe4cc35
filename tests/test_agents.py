"""
Tests for the dummy agent.
"""

from conftest import make_player
from nightfall.agents import DummyAgent
from nightfall.config.game_config import GameConfig
from nightfall.core import ActionKind, GamePhase, GameState, RoleType


def night_state(*players):
    state = GameState(players=list(players))
    state.start_night()
    return state


def test_killer_targets_someone_outside_the_mafia():
    """Evil agents never attack their own team."""
    killer = make_player("1", RoleType.KILLER)
    partner = make_player("2", RoleType.POISONER)
    citizen = make_player("3", RoleType.CITIZEN)
    state = night_state(killer, partner, citizen)

    for seed in range(20):
        agent = DummyAgent(killer, GameConfig(random_seed=seed))
        choice = agent.choose_night_action(agent.build_context(state))
        assert choice == {"action": ActionKind.KILL, "target": "3"}


def test_exhausted_limited_action_is_not_offered():
    """A Priest without uses has nothing to do."""
    priest = make_player("1", RoleType.PRIEST)
    priest.role_data.uses_remaining = 0
    corpse = make_player("2", RoleType.CITIZEN, alive=False)
    state = night_state(priest, corpse)

    agent = DummyAgent(priest, GameConfig(random_seed=1))
    context = agent.build_context(state)

    assert context.available_actions == []
    assert agent.choose_night_action(context) is None


def test_coroner_picks_visible_corpse():
    """Autopsies go to dead players whose role is still visible."""
    coroner = make_player("1", RoleType.CORONER)
    hidden = make_player("2", RoleType.CITIZEN, alive=False)
    hidden.hide_role()
    visible = make_player("3", RoleType.KILLER, alive=False)
    state = night_state(coroner, hidden, visible)

    agent = DummyAgent(coroner, GameConfig(random_seed=4))
    choice = agent.choose_night_action(agent.build_context(state))

    assert choice == {"action": ActionKind.AUTOPSY, "target": "3"}


def test_witch_chooses_puppet_with_ability():
    """The Witch only bends players who can act."""
    witch = make_player("1", RoleType.WITCH)
    citizen = make_player("2", RoleType.CITIZEN)
    doctor = make_player("3", RoleType.DOCTOR)
    state = night_state(witch, citizen, doctor)

    agent = DummyAgent(witch, GameConfig(random_seed=9))
    choice = agent.choose_night_action(agent.build_context(state))

    assert choice["action"] == ActionKind.CONTROL
    assert choice["puppet"] == "3"
    assert choice["target"] in {"2", "3"}


def test_no_night_actions_during_the_day():
    """Outside the night nothing is available."""
    doctor = make_player("1", RoleType.DOCTOR)
    state = GameState(players=[doctor], phase=GamePhase.DAY)

    agent = DummyAgent(doctor, GameConfig(random_seed=1))
    assert agent.build_context(state).available_actions == []


def test_votes_are_for_living_others():
    """Votes go to a living player other than the voter, or abstain."""
    players = [make_player(str(i), RoleType.CITIZEN) for i in range(1, 5)]
    players[3].eliminate()
    state = GameState(players=players, phase=GamePhase.DAY)

    agent = DummyAgent(players[0], GameConfig(random_seed=3))
    for _ in range(50):
        vote = agent.choose_vote(agent.build_context(state))
        assert vote in {None, "2", "3"}


def test_same_seed_same_choices():
    """Agents are reproducible per seed and player."""
    players = [make_player(str(i), RoleType.CITIZEN) for i in range(1, 6)]
    state = GameState(players=players, phase=GamePhase.DAY)

    first = DummyAgent(players[0], GameConfig(random_seed=8))
    second = DummyAgent(players[0], GameConfig(random_seed=8))
    context = first.build_context(state)

    assert [first.choose_vote(context) for _ in range(10)] == [second.choose_vote(context) for _ in range(10)]
