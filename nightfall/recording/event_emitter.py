"""
Event emitter: the audit log sink handed to the engines.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .run_recorder import RunRecorder

if TYPE_CHECKING:
    from ..core import GameState, Victory
    from ..phases import NightSummary, VoteResult

logger = logging.getLogger(__name__)


@dataclass
class LogEntry:
    """One audit message."""
    game_id: str
    message: str


class EventEmitter:
    """Keeps audit entries in memory and forwards every event to an optional recorder."""

    def __init__(self, run_recorder: Optional[RunRecorder] = None):
        self.run_recorder = run_recorder
        self.entries: List[LogEntry] = []

    def _emit(self, event_type: str, data: Dict[str, Any]) -> None:
        """Emit an event by recording it to file."""
        if self.run_recorder:
            try:
                self.run_recorder.record_event(event_type, data)
            except OSError as e:
                # Recording problems never stop a game
                logger.error("Error recording event %s: %s", event_type, e)

    def emit_log(self, game_id: str, message: str) -> None:
        """Record an audit message for a game."""
        self.entries.append(LogEntry(game_id=game_id, message=message))
        self._emit("log", {"game_id": game_id, "message": message})

    def messages(self, game_id: Optional[str] = None) -> List[str]:
        """Audit messages, optionally for one game only."""
        return [e.message for e in self.entries if game_id is None or e.game_id == game_id]

    def emit_game_start(self, game: 'GameState') -> None:
        """Emit game start event."""
        self._emit("game_start", {
            "game_id": game.game_id,
            "players": [
                {
                    "id": p.player_id,
                    "name": p.name,
                    "role": p.role.value,
                    "team": p.team.value,
                    "modifier": p.modifier.value if p.modifier else None,
                }
                for p in game.players
            ],
        })

    def emit_night_summary(self, game: 'GameState', summary: 'NightSummary') -> None:
        """Emit what happened during a night, including each player's private results."""
        self._emit("night_resolved", {
            "game_id": game.game_id,
            "round": summary.round_number,
            "deaths": [{"player": d.player_id, "cause": d.cause} for d in summary.deaths],
            "mayor_died": summary.mayor_died,
            "results": {p.player_id: list(p.results) for p in game.players if p.results},
        })

    def emit_vote_result(self, game: 'GameState', result: 'VoteResult') -> None:
        """Emit voting results event."""
        self._emit("vote_result", {"game_id": game.game_id, "round": game.round_number, **result.to_dict()})

    def emit_game_over(self, game: 'GameState', victory: Optional['Victory']) -> None:
        """Emit game over event."""
        self._emit("game_over", {
            "game_id": game.game_id,
            "round": game.round_number,
            "winner": victory.winner if victory else None,
            "players": victory.player_ids if victory else [],
        })
