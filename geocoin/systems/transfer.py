"""Coin transfer system.

Moves single coins between an active cache and the player's inventory. Both
directions take the most recently added coin (stack / last-in-first-out).

Each successful transfer saves the affected cache's memento before the new
state is returned, so the memento table never lags behind a mutation.

Refused transfers are *guards*, not errors: if the cache is empty, the
inventory is empty, or the cache is no longer materialized (for example a
popup left open while a location update regenerated the view), the state is
returned with coins and mementos untouched and only ``message`` set.
"""

import logging
from dataclasses import replace
from typing import Optional

from geocoin.memento import capture
from geocoin.state import GameState
from geocoin.types import PositionKey, TransferGuard
from geocoin.utils.inventory import add_coin, pop_coin, push_coin, take_coin

logger = logging.getLogger(__name__)

GUARD_MESSAGES = {
    TransferGuard.EMPTY_CACHE: "There are no coins left in cache {key}.",
    TransferGuard.EMPTY_INVENTORY: "You have no coins to drop.",
    TransferGuard.DETACHED_CACHE: "Cache {key} is no longer in view.",
}


def pickup_guard(state: GameState, key: PositionKey) -> Optional[TransferGuard]:
    """Return why a pickup from ``key`` would be refused, or ``None``."""
    cache = state.caches.get(key)
    if cache is None:
        return TransferGuard.DETACHED_CACHE
    if cache.is_empty:
        return TransferGuard.EMPTY_CACHE
    return None


def drop_guard(state: GameState, key: PositionKey) -> Optional[TransferGuard]:
    """Return why a drop into ``key`` would be refused, or ``None``."""
    if key not in state.caches:
        return TransferGuard.DETACHED_CACHE
    if len(state.inventory) == 0:
        return TransferGuard.EMPTY_INVENTORY
    return None


def pickup_system(state: GameState, key: PositionKey) -> GameState:
    """Move the top coin of cache ``key`` into the inventory.

    Arguments:
        state:
            Current immutable state.
        key:
            Position key of an active cache.

    Returns:
        GameState
            Updated state with the coin transferred and the cache memento
            saved, or the guarded state if the pickup is not possible.
    """
    guard = pickup_guard(state, key)
    if guard is not None:
        return _guarded(state, guard, key)

    cache = state.caches[key]
    coin, remaining = pop_coin(cache.coins)
    assert coin is not None
    cache = replace(cache, coins=remaining)

    return replace(
        state,
        caches=state.caches.set(key, cache),
        inventory=add_coin(state.inventory, coin),
        mementos=state.mementos.save(key, capture(cache)),
        message=None,
    )


def drop_system(state: GameState, key: PositionKey) -> GameState:
    """Move the top inventory coin into cache ``key``.

    Arguments:
        state:
            Current immutable state.
        key:
            Position key of an active cache.

    Returns:
        GameState
            Updated state with the coin transferred and the cache memento
            saved, or the guarded state if the drop is not possible.
    """
    guard = drop_guard(state, key)
    if guard is not None:
        return _guarded(state, guard, key)

    coin, inventory = take_coin(state.inventory)
    assert coin is not None
    cache = state.caches[key]
    cache = replace(cache, coins=push_coin(cache.coins, coin))

    return replace(
        state,
        caches=state.caches.set(key, cache),
        inventory=inventory,
        mementos=state.mementos.save(key, capture(cache)),
        message=None,
    )


def _guarded(state: GameState, guard: TransferGuard, key: PositionKey) -> GameState:
    logger.debug("Transfer at %s refused: %s", key, guard)
    return replace(state, message=GUARD_MESSAGES[guard].format(key=key))
