"""
Timed, sourced status effects and the per-player store that holds them.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional


class EffectType(Enum):
    """Effect tags a player can carry."""
    BLOCKED = "blocked"
    GUARDED = "guarded"
    GUARD = "guard"
    PROTECTED = "protected"
    INFECTED = "infected"
    FRAMED = "framed"
    MARKED_FOR_CLEANING = "marked_for_cleaning"
    POISONED = "poisoned"
    STRONG_POISONED = "strong_poisoned"
    PENDING_KILL = "pendingKill"
    TRAP = "trap"


# Effects that only last for the night they were applied in.
NIGHTLY_EFFECTS = frozenset({
    EffectType.BLOCKED,
    EffectType.GUARDED,
    EffectType.GUARD,
    EffectType.PROTECTED,
    EffectType.TRAP,
})


@dataclass(frozen=True)
class Effect:
    """
    A single status effect.

    Times are round numbers. An effect is active while ``expires_at`` is None
    or the current round is strictly before it.
    """
    type: EffectType
    source_id: Optional[str] = None
    added_at: int = 0
    expires_at: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)

    def is_active(self, round_number: Optional[int] = None) -> bool:
        if round_number is None or self.expires_at is None:
            return True
        return round_number < self.expires_at

    @property
    def persistent(self) -> bool:
        return self.expires_at is None


class EffectStore:
    """Ordered list of effects held by one player, with query helpers."""

    def __init__(self, effects: Optional[List[Effect]] = None):
        self._effects: List[Effect] = list(effects or [])

    def __iter__(self) -> Iterator[Effect]:
        return iter(self._effects)

    def __len__(self) -> int:
        return len(self._effects)

    def __repr__(self) -> str:
        return f"EffectStore({[e.type.value for e in self._effects]})"

    def add(self, effect_type: EffectType, source_id: Optional[str] = None,
            round_number: int = 0, expires_at: Optional[int] = None,
            **metadata: Any) -> Effect:
        """
        Add an effect and return it.

        Nightly effects default to expiring at the next round; everything else
        persists until explicitly removed.
        """
        if expires_at is None and effect_type in NIGHTLY_EFFECTS:
            expires_at = round_number + 1
        effect = Effect(
            type=effect_type,
            source_id=source_id,
            added_at=round_number,
            expires_at=expires_at,
            metadata=dict(metadata),
        )
        self._effects.append(effect)
        return effect

    def get(self, effect_type: EffectType, round_number: Optional[int] = None) -> List[Effect]:
        """All active effects of a type, oldest first."""
        return [e for e in self._effects if e.type == effect_type and e.is_active(round_number)]

    def first(self, effect_type: EffectType, round_number: Optional[int] = None) -> Optional[Effect]:
        matches = self.get(effect_type, round_number)
        return matches[0] if matches else None

    def has(self, effect_type: EffectType, round_number: Optional[int] = None) -> bool:
        return any(e.type == effect_type and e.is_active(round_number) for e in self._effects)

    def remove(self, effect_type: Optional[EffectType] = None,
               predicate: Optional[Callable[[Effect], bool]] = None) -> int:
        """Remove effects of a type and/or matching a predicate. Returns the number removed."""
        def matches(effect: Effect) -> bool:
            if effect_type is not None and effect.type != effect_type:
                return False
            return predicate(effect) if predicate else True

        before = len(self._effects)
        self._effects = [e for e in self._effects if not matches(e)]
        return before - len(self._effects)

    def replace(self, old: Effect, **changes: Any) -> Effect:
        """Swap an effect for a copy with updated fields (metadata is merged)."""
        if "metadata" in changes:
            changes["metadata"] = {**old.metadata, **changes["metadata"]}
        new = replace(old, **changes)
        for index, effect in enumerate(self._effects):
            if effect is old:
                self._effects[index] = new
                break
        return new

    def expire(self, round_number: int) -> int:
        """Drop every effect that is no longer active at ``round_number``."""
        return self.remove(predicate=lambda e: not e.is_active(round_number))

    def to_list(self) -> List[Effect]:
        return list(self._effects)
