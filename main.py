"""
Main game loop for Nightfall simulations.
"""

import argparse
import logging
import random
from collections import Counter
from dataclasses import replace
from typing import Any, Dict, Optional

from nightfall.agents import BaseAgent, DummyAgent
from nightfall.config import GameConfig, default_config, load_config
from nightfall.core import GameState, Player, setup_game
from nightfall.phases import NightPhaseHandler, VotingHandler
from nightfall.recording import EventEmitter, RunRecorder

logger = logging.getLogger(__name__)


class NightfallGame:
    """Main game controller: alternates nights and days until somebody wins."""

    def __init__(self, config: Optional[GameConfig] = None, event_emitter: Optional[EventEmitter] = None,
                 run_name: Optional[str] = None):
        self.config = config or default_config

        # Generate seed if not provided
        if self.config.random_seed is None:
            self.config = replace(self.config, random_seed=random.randint(0, 2**31 - 1))

        if event_emitter is None:
            run_recorder = None
            if self.config.record_runs:
                run_recorder = RunRecorder(self.config.runs_dir)
                run_name = run_recorder.create_run(run_name, seed=self.config.random_seed)
                logger.info("Recording game to: %s/%s/", self.config.runs_dir, run_name)
            event_emitter = EventEmitter(run_recorder)
        self.event_emitter = event_emitter
        self.run_recorder = event_emitter.run_recorder

        self.rng = random.Random(self.config.random_seed)
        self.game_state: GameState = setup_game(self.config, self.rng)
        self.night_handler = NightPhaseHandler(self.config, self.rng)
        self.voting_handler = VotingHandler(self.config, self.rng)

        self.agents: Dict[str, BaseAgent] = {}
        self._initialize_agents()

    def _initialize_agents(self) -> None:
        """Initialize agents for all players based on config."""
        agent_type = self.config.agent_type.lower()
        for player in self.game_state.players:
            self.agents[player.player_id] = self._create_agent(player, agent_type)

    def _create_agent(self, player: Player, agent_type: str) -> BaseAgent:
        """Create an agent of the specified type for a player."""
        if agent_type == "dummy_agent":
            return DummyAgent(player, self.config)
        raise ValueError(f"Unknown agent_type: {agent_type}. Must be 'dummy_agent'")

    def run_game(self) -> str:
        """
        Run the complete game until a win condition or the round limit.

        Returns:
            The winner ("good", "evil", "solo", ...) or "draw".
        """
        state = self.game_state
        self.event_emitter.emit_game_start(state)
        if self.run_recorder:
            self.run_recorder.save_metadata({
                "game_id": state.game_id,
                "players": {p.player_id: p.role.value for p in state.players},
                "config": {
                    "total_players": self.config.total_players,
                    "agent_type": self.config.agent_type,
                    "max_rounds": self.config.max_rounds,
                    "random_seed": self.config.random_seed,
                    "first_day_mayor_election": self.config.first_day_mayor_election,
                },
            })

        logger.info("[GAME] %s started: %s", state.game_id,
                    ", ".join(str(p) for p in state.players))

        while not state.is_over and state.round_number < self.config.max_rounds:
            self._run_night()
            if state.is_over:
                break
            self._run_day()

        victory = state.winner
        self.event_emitter.emit_game_over(state, victory)
        if self.run_recorder:
            self.run_recorder.save_metadata({
                "winner": victory.winner if victory else "draw",
                "rounds": state.round_number,
            })
        if victory is None:
            logger.info("[GAME] %s ended without a winner after %d rounds", state.game_id, state.round_number)
            return "draw"

        names = [state.get_player(pid).name for pid in victory.player_ids if state.get_player(pid)]
        logger.info("[GAME] %s over after %d rounds - %s wins (%s)", state.game_id,
                    state.round_number, victory.winner, ", ".join(names))
        return victory.winner

    def _run_night(self) -> None:
        state = self.game_state
        state.start_night()

        for player in state.get_alive_players():
            agent = self.agents[player.player_id]
            choice = agent.choose_night_action(agent.build_context(state))
            if choice:
                player.submit_action(choice["action"], choice["target"], choice.get("puppet"))

        summary = self.night_handler.resolve(state.night_context(), state.players)
        self.event_emitter.emit_night_summary(state, summary)
        for player in state.players:
            for entry in player.results:
                logger.debug("[NIGHT] %s: %s", player.name, entry)
        state.apply_night_summary(summary)

    def _run_day(self) -> None:
        state = self.game_state
        state.start_day()

        for player in state.get_alive_players():
            agent = self.agents[player.player_id]
            player.cast_vote(agent.choose_vote(agent.build_context(state)))

        result = self.voting_handler.resolve(state, state.players, self.event_emitter)
        self.event_emitter.emit_vote_result(state, result)
        state.apply_vote_result(result)

    def get_game_summary(self) -> Dict[str, Any]:
        """Get final game summary as dictionary."""
        return {
            "winner": self.game_state.winner.winner if self.game_state.winner else None,
            "rounds": self.game_state.round_number,
            "random_seed": self.config.random_seed,
            "final_state": self.game_state.get_game_summary(),
            "action_log": self.game_state.action_log[-10:],  # Last 10 actions
        }


def main():
    """Entry point for running one or more games."""
    parser = argparse.ArgumentParser(
        description="Run Nightfall game simulations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                  # Use default config
  python main.py --config configs/default.yaml    # Use a YAML config
  python main.py --players 8 --seed 42            # Smaller, reproducible table
  python main.py --games 100 --no-record          # Batch run, no files written
        """
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file (default: use default config)"
    )
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=None,
        help="Random seed for reproducible games (overrides the config file)"
    )
    parser.add_argument(
        "--players",
        "-p",
        type=int,
        default=None,
        help="Number of players (overrides the config file)"
    )
    parser.add_argument(
        "--games",
        "-g",
        type=int,
        default=1,
        help="Number of games to run (default: 1)"
    )
    parser.add_argument(
        "--no-record",
        action="store_true",
        help="Do not write events to the runs directory"
    )
    parser.add_argument(
        "--run-name",
        "-r",
        type=str,
        default=None,
        help="Custom name for the run directory (single game only)"
    )

    args = parser.parse_args()

    config = load_config(args.config)
    overrides: Dict[str, Any] = {}
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.players is not None:
        overrides["total_players"] = args.players
    if args.no_record:
        overrides["record_runs"] = False
    config = replace(config, **overrides)

    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    winners: Counter = Counter()
    for index in range(args.games):
        game_config = config
        if config.random_seed is not None:
            game_config = replace(config, random_seed=config.random_seed + index)
        run_name = args.run_name if args.games == 1 else None

        game = NightfallGame(config=game_config, run_name=run_name)
        winners[game.run_game()] += 1

        summary = game.get_game_summary()
        print(f"Game {index + 1}: {summary['winner'] or 'draw'} after {summary['rounds']} rounds "
              f"(seed {summary['random_seed']})")
        if game.run_recorder and game.run_recorder.get_run_path():
            print(f"  events saved to: {game.run_recorder.get_run_path()}")

    if args.games > 1:
        print("=" * 60)
        for winner, count in winners.most_common():
            print(f"{winner}: {count}/{args.games}")


if __name__ == "__main__":
    main()
