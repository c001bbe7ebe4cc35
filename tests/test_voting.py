"""
Tests for the day voting handler.
"""

from unittest.mock import Mock

from conftest import make_player
from nightfall.config.game_config import GameConfig
from nightfall.core import GameState, Modifier, RoleType
from nightfall.phases import VoteResult, VotingHandler


def citizens(count):
    return [make_player(str(i), RoleType.CITIZEN) for i in range(1, count + 1)]


def test_majority_executes(voting_handler, day_game, emitter):
    """Four of seven distinct voters are enough to execute."""
    players = citizens(7)
    for voter in players[1:5]:
        voter.cast_vote("1")

    result = voting_handler.resolve(day_game, players, emitter)

    assert result.executed == "1"
    assert result.votes_for == 4
    assert result.votes_against == 3
    assert result.total_alive == 7
    assert not players[0].alive
    assert all(p.vote_for is None and not p.has_voted for p in players)
    assert emitter.messages() == ["Executed: Citizen1 (4/7 players, 4 weighted votes)"]


def test_three_of_seven_is_insufficient(voting_handler, day_game, emitter):
    """Three of seven voters do not reach the threshold."""
    players = citizens(7)
    for voter in players[1:4]:
        voter.cast_vote("1")

    result = voting_handler.resolve(day_game, players, emitter)

    assert result.executed is None
    assert result.reason == "insufficient_votes"
    assert result.players_voting_for == 3
    assert players[0].alive
    assert "insufficient votes: 3/7" in emitter.messages()[0]


def test_even_split_is_a_tie(voting_handler, day_game, emitter):
    """A 2/2 split executes nobody and names both candidates."""
    players = citizens(4)
    players[0].cast_vote("3")
    players[1].cast_vote("3")
    players[2].cast_vote("1")
    players[3].cast_vote("1")

    result = voting_handler.resolve(day_game, players, emitter)

    assert result.reason == "tie"
    assert set(result.tied) == {"1", "3"}
    assert result.tied_votes == 2
    assert all(p.alive for p in players)


def test_no_votes(voting_handler, day_game, emitter):
    """Abstaining everywhere executes nobody."""
    players = citizens(3)
    for p in players:
        p.cast_vote(None)

    result = voting_handler.resolve(day_game, players, emitter)

    assert result.reason == "no_votes"
    assert emitter.messages() == ["No execution (no votes cast)."]


def test_no_alive_players(voting_handler, day_game, emitter):
    """An empty table is reported."""
    players = [make_player("1", RoleType.CITIZEN, alive=False)]

    result = voting_handler.resolve(day_game, players, emitter)

    assert result.reason == "no_players"


def test_dead_players_cannot_vote(voting_handler, day_game, emitter):
    """Votes left on dead players are ignored."""
    players = citizens(3)
    players[2].eliminate()
    players[2].cast_vote("1")
    players[1].cast_vote("1")

    result = voting_handler.resolve(day_game, players, emitter)

    assert result.total_alive == 2
    assert result.executed is None
    assert result.reason == "insufficient_votes"


def test_mayor_weight_breaks_leader_but_not_threshold(voting_handler, emitter):
    """The mayor's double vote decides the leader; majority still counts heads."""
    game = GameState(game_id="g", round_number=2, mayor_id="1")
    players = citizens(5)
    players[0].make_mayor()
    players[0].cast_vote("4")
    players[1].cast_vote("5")

    result = voting_handler.resolve(game, players, emitter)

    assert result.reason == "insufficient_votes"
    assert result.votes_for == 2
    assert result.votes_against == 4


def test_mayor_weight_ties_two_voters(voting_handler, emitter):
    """Two voters against the mayor's single double vote is a tie."""
    game = GameState(game_id="g", round_number=2, mayor_id="1")
    players = citizens(5)
    players[0].make_mayor()
    players[0].cast_vote("2")
    players[2].cast_vote("1")
    players[3].cast_vote("1")

    result = voting_handler.resolve(game, players, emitter)

    assert result.reason == "tie"
    assert result.tied_votes == 2


def test_executing_mayor_clears_designation(voting_handler, emitter):
    """An executed mayor loses the office and the extra vote."""
    game = GameState(game_id="g", round_number=2, mayor_id="1")
    players = citizens(3)
    players[0].make_mayor()
    players[1].cast_vote("1")
    players[2].cast_vote("1")

    result = voting_handler.resolve(game, players, emitter)

    assert result.executed == "1"
    assert game.mayor_id is None
    assert players[0].vote_weight == 1
    assert "Mayor Citizen1 was executed" in emitter.messages()


def test_jester_execution_flags_win(voting_handler, day_game, emitter):
    """Executing the Jester is the Jester's win."""
    jester = make_player("1", RoleType.JESTER, name="Joker")
    players = [jester] + [make_player(str(i), RoleType.CITIZEN) for i in range(2, 4)]
    for voter in players[1:]:
        voter.cast_vote("1")

    result = voting_handler.resolve(day_game, players, emitter)

    assert result.jester_win
    assert not jester.alive
    assert "Jester Joker was executed - Jester wins!" in emitter.messages()


def test_sweetheart_execution_makes_someone_drunk(voting_handler, day_game, emitter):
    """The Sweetheart side effect also applies to executions."""
    sweetheart = make_player("1", RoleType.CITIZEN, modifier=Modifier.SWEETHEART)
    voter_a = make_player("2", RoleType.CITIZEN)
    voter_b = make_player("3", RoleType.CITIZEN, modifier=Modifier.DRUNK)
    voter_a.cast_vote("1")
    voter_b.cast_vote("1")

    voting_handler.resolve(day_game, [sweetheart, voter_a, voter_b], emitter)

    assert voter_a.modifier == Modifier.DRUNK
    assert "Sweetheart died... someone became Drunk!" in emitter.messages()


def test_vote_for_dead_candidate(voting_handler, day_game, emitter):
    """A majority for an already dead player executes nobody."""
    players = citizens(4)
    players[0].eliminate()
    for voter in players[1:]:
        voter.cast_vote("1")

    result = voting_handler.resolve(day_game, players, emitter)

    assert result.reason == "candidate_not_alive"
    assert result.executed is None


def test_every_outcome_writes_one_audit_entry(voting_handler, day_game):
    """The log sink hears about the outcome."""
    sink = Mock()
    players = citizens(3)

    voting_handler.resolve(day_game, players, sink)

    sink.emit_log.assert_called_once_with("test", "No execution (no votes cast).")


def test_first_day_elects_mayor(rng, emitter):
    """With the election enabled, day one picks a mayor instead of executing."""
    handler = VotingHandler(GameConfig(first_day_mayor_election=True), rng)
    game = GameState(game_id="g", round_number=1)
    players = citizens(4)
    players[1].modifier = Modifier.PARANOID
    for voter in (players[0], players[2], players[3]):
        voter.cast_vote("2")

    result = handler.resolve(game, players, emitter)

    assert result.mayor_elected
    assert result.mayor_id == "2"
    assert result.executed is None
    assert game.mayor_id == "2"
    assert players[1].vote_weight == 2
    assert players[1].modifier is None
    assert all(p.alive for p in players)
    assert all(not p.has_voted for p in players)


def test_election_without_votes_picks_someone_alive(rng, emitter):
    """Nobody voting still yields a living mayor."""
    handler = VotingHandler(GameConfig(first_day_mayor_election=True), rng)
    game = GameState(game_id="g", round_number=1)
    players = citizens(4)
    players[3].eliminate()

    result = handler.resolve(game, players, emitter)

    assert result.mayor_elected
    assert result.mayor_id in {"1", "2", "3"}
    assert result.votes_for == 0
    assert emitter.messages()[0] == "No votes cast for mayor - selecting randomly"


def test_no_election_once_mayor_exists(rng, emitter):
    """An existing mayor means day one is an ordinary execution vote."""
    handler = VotingHandler(GameConfig(first_day_mayor_election=True), rng)
    game = GameState(game_id="g", round_number=1, mayor_id="3")
    players = citizens(3)
    players[0].cast_vote("2")
    players[2].cast_vote("2")

    result = handler.resolve(game, players, emitter)

    assert not result.mayor_elected
    assert result.executed == "2"


def test_vote_result_to_dict_drops_unset_fields():
    """Only the fields an outcome sets are serialized."""
    assert VoteResult(reason="no_votes").to_dict() == {"executed": None, "reason": "no_votes"}
    assert VoteResult(reason="candidate_not_alive", votes_for=0).to_dict() == {
        "executed": None, "reason": "candidate_not_alive", "votes_for": 0,
    }
