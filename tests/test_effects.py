"""
Tests for the effect store.
"""

from nightfall.core import EffectStore, EffectType


def test_nightly_effects_expire_next_round():
    """Protection added on round 3 is gone on round 4."""
    store = EffectStore()
    store.add(EffectType.PROTECTED, "doc", 3)

    assert store.has(EffectType.PROTECTED, 3)
    assert not store.has(EffectType.PROTECTED, 4)

    assert store.expire(4) == 1
    assert len(store) == 0


def test_persistent_effects_survive_expiry():
    """Infection and poison have no expiry."""
    store = EffectStore()
    infected = store.add(EffectType.INFECTED, "inf", 1)
    store.add(EffectType.POISONED, "poi", 1, round=1)

    store.expire(10)

    assert infected.persistent
    assert store.has(EffectType.INFECTED, 10)
    assert store.first(EffectType.POISONED).metadata == {"round": 1}


def test_explicit_expiry_overrides_default():
    """A caller-given expiry wins over the nightly default."""
    store = EffectStore()
    store.add(EffectType.BLOCKED, "jailer", 1, expires_at=5)
    assert store.has(EffectType.BLOCKED, 4)
    assert not store.has(EffectType.BLOCKED, 5)


def test_remove_by_type_and_predicate():
    """Removal can be narrowed with a predicate."""
    store = EffectStore()
    store.add(EffectType.PENDING_KILL, "a", 1, cause="kill")
    store.add(EffectType.PENDING_KILL, "b", 1, cause="poison")
    store.add(EffectType.FRAMED, "c", 1)

    removed = store.remove(EffectType.PENDING_KILL, predicate=lambda e: e.metadata["cause"] == "poison")

    assert removed == 1
    assert [e.source_id for e in store.get(EffectType.PENDING_KILL)] == ["a"]
    assert store.remove(EffectType.PENDING_KILL) == 1
    assert store.has(EffectType.FRAMED)


def test_replace_merges_metadata_in_place():
    """Replacing keeps the position and merges metadata."""
    store = EffectStore()
    first = store.add(EffectType.STRONG_POISONED, "p", 2, round=2, activated=False)
    store.add(EffectType.INFECTED, "i", 2)

    updated = store.replace(first, metadata={"activated": True})

    assert store.to_list()[0] is updated
    assert updated.metadata == {"round": 2, "activated": True}
    assert first.metadata["activated"] is False
