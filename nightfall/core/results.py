"""
Tagged result-log entries ("kind:text") shown to players after each night.

The kind values are read by the presentation layer, so they must not change.
"""

from enum import Enum
from typing import Tuple


class ResultKind(Enum):
    """Every result tag the engines emit."""
    # General
    KILLED = "killed"
    POISONED_KILLED = "poisoned_killed"
    ATTACKED_KILLER = "attacked_killer"
    ATTACKED_HUNTER = "attacked_hunter"
    ATTACKED_POISON = "attacked_poison"
    HEALED = "healed"
    REVIVED = "revived"
    VISITED = "visited"
    SAFE = "safe"
    SUCCESS = "success"
    FAILED = "failed"

    # Interference
    JAILER_PREVENTED = "jailer_prevented"
    GUARDIAN_PREVENTED = "guardian_prevented"

    # Deferred observation
    JAILER_BLOCKED = "jailer_blocked"
    JAILER_HOME = "jailer_home"
    GUARDIAN_STOPPED = "guardian_stopped"
    GUARDIAN_QUIET = "guardian_quiet"
    LOOKOUT_VISITORS = "lookout_visitors"
    LOOKOUT_QUIET = "lookout_quiet"
    TRACKER_FOLLOWED = "tracker_followed"
    TRACKER_STAYED = "tracker_stayed"

    # Protector / honor kill
    DOCTOR_SAVED = "doctor_saved"
    DOCTOR_QUIET = "doctor_quiet"
    HUNTER_KILL = "hunter_kill"
    HUNTER_SUCCESS = "hunter_success"
    HUNTER_GUILT = "hunter_guilt"
    HUNTER_MISSED = "hunter_missed"

    # Information
    INVESTIGATE = "investigate"
    AUTOPSY = "autopsy"
    CONSIG = "consig"


ATTACKED_KINDS = (
    ResultKind.ATTACKED_KILLER,
    ResultKind.ATTACKED_HUNTER,
    ResultKind.ATTACKED_POISON,
)


def format_result(kind: ResultKind, text: str) -> str:
    return f"{kind.value}:{text}"


def parse_result(entry: str) -> Tuple[str, str]:
    """Split a result entry into (kind, text)."""
    kind, _, text = entry.partition(":")
    return kind, text
