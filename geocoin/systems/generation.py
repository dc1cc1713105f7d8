"""Cache generation system.

Materializes the caches around the player and flushes them back to the
memento table when they leave the view. Two layers are provided:

1. Plain functions (:func:`populate`, :func:`clear`, :func:`spawn_cache`)
    that operate on a registry and a :class:`CacheStateStore` directly.
2. State-level systems (:func:`populate_system`, :func:`clear_system`,
    :func:`regenerate_system`) used by the reducer.

Materialization policy for every neighborhood cell whose spawn luck is below
the spawn probability:

* A stored memento wins: the cache is restored exactly as last saved, even if
    fresh generation would produce something else.
* Otherwise the cache is generated fresh from :func:`geocoin.luck.luck` and
    its memento is saved immediately, so even the first sighting of a cache is
    memento-backed.
* A memento that cannot be decoded is logged and the cell is treated as never
    visited.

Because luck is keyed only by coordinates, populating the same neighborhood
twice with no mutation in between yields identical caches.
"""

import logging
import math
from dataclasses import replace
from typing import Dict, Optional, Tuple

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap

from geocoin.components import Cache, Cell, Coin
from geocoin.errors import MementoFormatError
from geocoin.luck import initial_value_key, luck, spawn_key
from geocoin.memento import CacheStateStore, capture, restore
from geocoin.registry import CellRegistry
from geocoin.state import GameState
from geocoin.types import PositionKey
from geocoin.utils.grid import neighborhood

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_COIN_SCALE = 10


def spawn_cache(cell: Cell, scale: int = DEFAULT_INITIAL_COIN_SCALE) -> Cache:
    """Generate a never-seen cache at ``cell``.

    The coin count is ``floor(luck("i,j,initialValue") * scale)`` and coins
    carry serials ``0..count-1``.
    """
    count = math.floor(luck(initial_value_key(cell)) * scale)
    coins = pvector(Coin(cell=cell, serial=serial) for serial in range(count))
    return Cache(cell=cell, coins=coins)


def hosts_cache(cell: Cell, spawn_probability: float) -> bool:
    """Return True if ``cell`` spawns a cache at the given probability."""
    return luck(spawn_key(cell)) < spawn_probability


def populate(
    cells: CellRegistry,
    store: CacheStateStore,
    center: Cell,
    radius: int,
    spawn_probability: float,
    scale: int = DEFAULT_INITIAL_COIN_SCALE,
) -> Tuple[PMap[PositionKey, Cache], CacheStateStore]:
    """Materialize every cache within Manhattan ``radius`` of ``center``.

    Arguments:
        cells: Flyweight registry used for every cell lookup.
        store: Memento table consulted (and extended for fresh caches).
        center: Neighborhood center.
        radius: Manhattan radius in cells.
        spawn_probability: Threshold compared against each cell's spawn luck.
        scale: Initial coin scale for fresh caches.

    Returns:
        ``(caches, store)``: the active caches keyed by position and the store
        including mementos of any freshly generated caches.
    """
    caches: Dict[PositionKey, Cache] = {}
    restored = 0
    for i, j in neighborhood(center, radius):
        cell = cells.get(i, j)
        if not hosts_cache(cell, spawn_probability):
            continue
        cache = _restore_cache(cells, store, cell)
        if cache is None:
            cache = spawn_cache(cell, scale)
            store = store.save(cell.key, capture(cache))
        else:
            restored += 1
        caches[cell.key] = cache
    logger.debug(
        "Populated %d caches around %s (%d restored, %d fresh)",
        len(caches),
        center.key,
        restored,
        len(caches) - restored,
    )
    return pmap(caches), store


def clear(
    caches: PMap[PositionKey, Cache], store: CacheStateStore
) -> CacheStateStore:
    """Flush the current contents of every active cache into ``store``."""
    for key, cache in caches.items():
        store = store.save(key, capture(cache))
    return store


def _restore_cache(
    cells: CellRegistry, store: CacheStateStore, cell: Cell
) -> Optional[Cache]:
    memento = store.load(cell.key)
    if memento is None:
        return None
    try:
        return restore(memento, cells)
    except MementoFormatError as exc:
        logger.warning("Discarding unreadable memento for %s: %s", cell.key, exc)
        return None


def populate_system(state: GameState) -> GameState:
    """Materialize caches around the player's cell.

    Expects no active caches; callers that already have some must run
    :func:`clear_system` first (see :func:`regenerate_system`).
    """
    config = state.config
    caches, store = populate(
        state.cells,
        state.mementos,
        state.player_cell,
        config.neighborhood_radius,
        config.spawn_probability,
        config.initial_coin_scale,
    )
    return replace(state, caches=caches, mementos=store)


def clear_system(state: GameState) -> GameState:
    """Flush and discard every active cache."""
    if not state.caches:
        return state
    store = clear(state.caches, state.mementos)
    return replace(state, caches=pmap(), mementos=store)


def regenerate_system(state: GameState) -> GameState:
    """Clear then populate, the only safe order for a view refresh."""
    return populate_system(clear_system(state))
