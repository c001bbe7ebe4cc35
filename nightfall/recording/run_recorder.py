"""
Run recorder: one directory per simulated game run.

Layout of a run directory:
    events.jsonl   one JSON object per event, tagged with game id and round
    metadata.json  seed, configuration and final outcome
"""

import json
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterator, List, Optional

EVENTS_FILE = "events.jsonl"
METADATA_FILE = "metadata.json"


class RunRecorder:
    """Appends game events and audit messages to a run directory."""

    def __init__(self, runs_dir: str = "runs"):
        self.runs_dir = Path(runs_dir)
        self.runs_dir.mkdir(parents=True, exist_ok=True)
        self.current_run_dir: Optional[Path] = None
        self._lock = Lock()
        self._sequence = 0

    @property
    def events_file(self) -> Optional[Path]:
        return self.current_run_dir / EVENTS_FILE if self.current_run_dir else None

    @property
    def metadata_file(self) -> Optional[Path]:
        return self.current_run_dir / METADATA_FILE if self.current_run_dir else None

    def create_run(self, run_name: Optional[str] = None, seed: Optional[int] = None) -> str:
        """
        Open a run directory. Without a name one is built from the seed and the clock,
        so repeated runs of one seed never overwrite each other.

        Returns:
            The run name (directory name)
        """
        if run_name is None:
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            run_name = f"seed{seed}_{stamp}" if seed is not None else f"run_{stamp}"

        self.current_run_dir = self.runs_dir / run_name
        self.current_run_dir.mkdir(exist_ok=True)
        self._sequence = 0
        return run_name

    def record_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Append an event. Game id and round are lifted out of the payload for filtering."""
        if not self.events_file:
            return

        with self._lock:
            event = {
                "sequence": self._sequence,
                "timestamp": datetime.now().isoformat(),
                "event_type": event_type,
                "game_id": data.get("game_id"),
                "round": data.get("round"),
                "data": data,
            }
            self._sequence += 1
            with open(self.events_file, 'a') as f:
                f.write(json.dumps(event, default=str) + '\n')

    def save_metadata(self, metadata: Dict[str, Any]) -> None:
        """Merge fields into metadata.json; later calls add the outcome to the setup."""
        if not self.metadata_file:
            return

        with self._lock:
            merged = self.load_metadata()
            merged.update(metadata)
            with open(self.metadata_file, 'w') as f:
                json.dump(merged, f, indent=2, default=str)

    def load_metadata(self) -> Dict[str, Any]:
        if not self.metadata_file or not self.metadata_file.exists():
            return {}
        with open(self.metadata_file, 'r') as f:
            return json.load(f)

    def get_run_path(self) -> Optional[Path]:
        """Get the current run directory path."""
        return self.current_run_dir

    def _iter_events(self) -> Iterator[Dict[str, Any]]:
        if not self.events_file or not self.events_file.exists():
            return
        with open(self.events_file, 'r') as f:
            for line in f:
                if line.strip():
                    yield json.loads(line)

    def read_events(self, event_type: Optional[str] = None, game_id: Optional[str] = None,
                    round_number: Optional[int] = None) -> List[Dict[str, Any]]:
        """Recorded events of the current run, optionally filtered."""
        return [
            event for event in self._iter_events()
            if (event_type is None or event["event_type"] == event_type)
            and (game_id is None or event.get("game_id") == game_id)
            and (round_number is None or event.get("round") == round_number)
        ]

    def audit_log(self, game_id: Optional[str] = None) -> List[str]:
        """The audit messages written during the run, in order."""
        return [event["data"]["message"] for event in self.read_events("log", game_id=game_id)]
