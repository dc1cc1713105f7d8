from geocoin.memento import capture
from geocoin.systems.transfer import (
    GUARD_MESSAGES,
    drop_guard,
    drop_system,
    pickup_guard,
    pickup_system,
)
from geocoin.types import TransferGuard
from tests.test_utils import make_cache_state


def test_pickup_takes_top_coin() -> None:
    state, key = make_cache_state(min_coins=2)
    before = state.caches[key]
    top = before.coins[-1]

    new_state = pickup_system(state, key)

    cache = new_state.caches[key]
    assert list(new_state.inventory.coins) == [top]
    assert len(cache.coins) == len(before.coins) - 1
    assert top not in cache.coins
    assert new_state.mementos.load(key) == capture(cache)
    assert new_state.message is None
    # Previous state untouched
    assert state.caches[key] == before
    assert len(state.inventory) == 0


def test_drop_pushes_on_top() -> None:
    state, key = make_cache_state(min_coins=2)
    state = pickup_system(state, key)
    state = pickup_system(state, key)
    held_top = state.inventory.coins[-1]

    new_state = drop_system(state, key)

    cache = new_state.caches[key]
    assert cache.coins[-1] == held_top
    assert len(new_state.inventory) == 1
    assert new_state.mementos.load(key) == capture(cache)


def test_pickup_then_drop_restores_cache() -> None:
    state, key = make_cache_state(min_coins=1)
    restored = drop_system(pickup_system(state, key), key)
    assert restored.caches[key] == state.caches[key]
    assert len(restored.inventory) == 0
    assert restored.mementos == state.mementos


def test_pickup_from_empty_cache_is_guarded() -> None:
    state, key = make_cache_state(min_coins=0, max_coins=0)
    assert pickup_guard(state, key) == TransferGuard.EMPTY_CACHE

    new_state = pickup_system(state, key)

    assert new_state.caches == state.caches
    assert new_state.mementos == state.mementos
    assert len(new_state.inventory) == 0
    assert new_state.message == GUARD_MESSAGES[TransferGuard.EMPTY_CACHE].format(key=key)


def test_drop_with_empty_inventory_is_guarded() -> None:
    state, key = make_cache_state()
    assert drop_guard(state, key) == TransferGuard.EMPTY_INVENTORY

    new_state = drop_system(state, key)

    assert new_state.caches == state.caches
    assert new_state.mementos == state.mementos
    assert new_state.message == GUARD_MESSAGES[TransferGuard.EMPTY_INVENTORY]


def test_transfer_with_detached_cache_is_guarded() -> None:
    state, key = make_cache_state()
    state = pickup_system(state, key)
    assert pickup_guard(state, "999,999") == TransferGuard.DETACHED_CACHE
    assert drop_guard(state, "999,999") == TransferGuard.DETACHED_CACHE

    after_pickup = pickup_system(state, "999,999")
    after_drop = drop_system(state, "999,999")

    for new_state in (after_pickup, after_drop):
        assert new_state.inventory == state.inventory
        assert new_state.mementos == state.mementos
        assert "999,999" in (new_state.message or "")


def test_successful_transfer_clears_message() -> None:
    state, key = make_cache_state()
    guarded = drop_system(state, key)
    assert guarded.message is not None
    assert pickup_system(guarded, key).message is None
