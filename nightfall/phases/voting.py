"""
Day voting: weighted tally, majority check and execution.
"""

import logging
import random
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ..config.game_config import GameConfig, default_config
from ..core import GameState, Player, RoleType
from .side_effects import apply_sweetheart, strip_mayor

logger = logging.getLogger(__name__)


class LogSink(Protocol):
    """Anything that accepts audit messages for a game."""

    def emit_log(self, game_id: str, message: str) -> None:
        ...


@dataclass
class VoteResult:
    """Outcome of one day's vote."""
    executed: Optional[str] = None
    executed_name: Optional[str] = None
    votes_for: Optional[int] = None
    votes_against: Optional[int] = None
    total_alive: Optional[int] = None
    reason: Optional[str] = None
    tied: List[str] = field(default_factory=list)
    tied_votes: Optional[int] = None
    jester_win: bool = False
    players_voting_for: Optional[int] = None
    mayor_elected: bool = False
    mayor_id: Optional[str] = None
    mayor_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary form with unset fields left out; ``executed`` is always present."""
        data = {k: v for k, v in asdict(self).items() if v is not None and v is not False and v != []}
        data["executed"] = self.executed
        return data


def tally_votes(voters: Sequence[Player]) -> Counter:
    """Weighted votes per candidate id. Abstentions count for nobody."""
    counts: Counter = Counter()
    for voter in voters:
        if voter.vote_for:
            counts[voter.vote_for] += voter.vote_weight
    return counts


def leaders(counts: Counter) -> List[str]:
    """Candidates sharing the highest tally, in first-vote order."""
    if not counts:
        return []
    top = max(counts.values())
    return [candidate for candidate, votes in counts.items() if votes == top]


class VotingHandler:
    """Resolves the day vote for the whole table in a single pass."""

    def __init__(self, config: GameConfig = default_config, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or random.Random(config.random_seed)

    def resolve(self, game: GameState, players: Sequence[Player], log_sink: LogSink) -> VoteResult:
        """
        Tally the day's votes and execute the winner if they hold a majority.

        On the first day of a game configured for it, and while nobody holds
        the office, the vote elects a mayor instead.

        Args:
            game: Game the vote belongs to; its mayor designation may change
            players: Every player, dead ones included
            log_sink: Receives one audit message per outcome

        Returns:
            VoteResult describing what happened.
        """
        alive = [p for p in players if p.alive]
        if not alive:
            self._audit(log_sink, game, "No execution (no alive players).")
            return VoteResult(reason="no_players")

        if self.config.first_day_mayor_election and game.round_number == 1 and not game.mayor_id:
            return self._elect_mayor(game, players, alive, log_sink)
        return self._resolve_execution(game, players, alive, log_sink)

    def _audit(self, log_sink: LogSink, game: GameState, message: str) -> None:
        logger.info("[VOTE] %s", message)
        log_sink.emit_log(game.game_id, message)

    @staticmethod
    def _clear_votes(voters: Sequence[Player]) -> None:
        for voter in voters:
            voter.clear_vote()

    @staticmethod
    def _name(players: Sequence[Player], player_id: str) -> str:
        return next((p.name for p in players if p.player_id == player_id), "?")

    def _resolve_execution(self, game: GameState, players: Sequence[Player], alive: List[Player],
                           log_sink: LogSink) -> VoteResult:
        total_alive = len(alive)
        counts = tally_votes(alive)

        if not counts:
            self._audit(log_sink, game, "No execution (no votes cast).")
            return VoteResult(reason="no_votes", total_alive=total_alive)

        top = leaders(counts)
        top_votes = counts[top[0]]
        if len(top) > 1:
            names = ", ".join(self._name(players, pid) for pid in top)
            self._audit(log_sink, game, f"No execution (tie: {names} with {top_votes} weighted votes each)")
            return VoteResult(reason="tie", tied=top, tied_votes=top_votes, total_alive=total_alive)

        candidate_id = top[0]
        total_weight = sum(p.vote_weight for p in alive)
        votes_against = total_weight - top_votes
        voting_for = sum(1 for p in alive if p.vote_for == candidate_id)
        threshold = total_alive // 2 + 1

        logger.debug("[VOTE] %d alive, %d weighted votes, %d for, %d player(s) for, need %d",
                     total_alive, total_weight, top_votes, voting_for, threshold)

        target = next((p for p in players if p.player_id == candidate_id), None)
        if voting_for < threshold:
            name = target.name if target else "?"
            self._audit(log_sink, game,
                        f"No execution (insufficient votes: {voting_for}/{total_alive} players "
                        f"voted for {name}, need {threshold})")
            return VoteResult(reason="insufficient_votes", votes_for=top_votes, votes_against=votes_against,
                              total_alive=total_alive, players_voting_for=voting_for)

        if target is None or not target.alive:
            self._audit(log_sink, game, "No execution (the chosen candidate is not alive)")
            return VoteResult(reason="candidate_not_alive", votes_for=top_votes, total_alive=total_alive)

        return self._execute(game, players, alive, target, top_votes, votes_against, voting_for, log_sink)

    def _execute(self, game: GameState, players: Sequence[Player], alive: List[Player], target: Player,
                 votes_for: int, votes_against: int, voting_for: int, log_sink: LogSink) -> VoteResult:
        total_alive = len(alive)
        target.eliminate()
        self._clear_votes(alive)

        if strip_mayor(target, game.mayor_id) and game.mayor_id == target.player_id:
            game.mayor_id = None
            self._audit(log_sink, game, f"Mayor {target.name} was executed")

        result = VoteResult(
            executed=target.player_id,
            executed_name=target.name,
            votes_for=votes_for,
            votes_against=votes_against,
            total_alive=total_alive,
            players_voting_for=voting_for,
        )

        if target.role == RoleType.JESTER:
            result.jester_win = True
            self._audit(log_sink, game, f"Jester {target.name} was executed - Jester wins!")
        else:
            self._audit(log_sink, game,
                        f"Executed: {target.name} ({voting_for}/{total_alive} players, {votes_for} weighted votes)")

        if apply_sweetheart(target, players, self.rng):
            self._audit(log_sink, game, "Sweetheart died... someone became Drunk!")

        return result

    def _elect_mayor(self, game: GameState, players: Sequence[Player], alive: List[Player],
                     log_sink: LogSink) -> VoteResult:
        counts = tally_votes(alive)

        if counts:
            candidates = leaders(counts)
        else:
            self._audit(log_sink, game, "No votes cast for mayor - selecting randomly")
            candidates = [p.player_id for p in alive]

        winner_id = candidates[0]
        if len(candidates) > 1:
            winner_id = self.rng.choice(candidates)
            if counts:
                names = ", ".join(self._name(players, pid) for pid in candidates)
                self._audit(log_sink, game,
                            f"Tie for mayor ({names}) - {self._name(players, winner_id)} selected randomly")
        votes_for = counts.get(winner_id, 0)

        mayor = next((p for p in players if p.player_id == winner_id), None)
        if mayor is None or not mayor.alive:
            self._clear_votes(alive)
            self._audit(log_sink, game, "Cannot elect mayor - selected candidate is not alive")
            return VoteResult(reason="candidate_not_alive", votes_for=votes_for)

        if mayor.modifier is not None:
            logger.info("[MAYOR] %s's modifier %s was overwritten", mayor.name, mayor.modifier.value)
        mayor.modifier = None
        mayor.make_mayor()
        game.mayor_id = mayor.player_id
        self._clear_votes(alive)

        if votes_for:
            self._audit(log_sink, game, f"{mayor.name} was elected Mayor ({votes_for} weighted votes)")
        else:
            self._audit(log_sink, game, f"{mayor.name} was randomly selected as Mayor (no votes cast)")

        return VoteResult(mayor_elected=True, mayor_id=mayor.player_id, mayor_name=mayor.name,
                          votes_for=votes_for)
