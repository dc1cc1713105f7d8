import logging
from dataclasses import replace

import pytest
from pyrsistent import pvector

from geocoin.components import Cache
from geocoin.memento import CacheStateStore, capture
from geocoin.registry import CellRegistry
from geocoin.step import new_game_state
from geocoin.systems.generation import (
    clear,
    clear_system,
    hosts_cache,
    populate,
    populate_system,
    regenerate_system,
    spawn_cache,
)
from tests.test_utils import initial_coin_count, make_config


def test_spawn_cache_counts_and_serials() -> None:
    cells = CellRegistry()
    for j in range(20):
        cell = cells.get(0, j)
        cache = spawn_cache(cell)
        assert len(cache.coins) == initial_coin_count(0, j)
        assert [coin.serial for coin in cache.coins] == list(range(len(cache.coins)))
        assert all(coin.cell is cell for coin in cache.coins)
        assert len(cache.coins) < 10


def test_spawn_cache_scale() -> None:
    cells = CellRegistry()
    assert spawn_cache(cells.get(4, 4), scale=0).is_empty


def test_hosts_cache_thresholds() -> None:
    cells = CellRegistry()
    cell = cells.get(2, 3)
    assert hosts_cache(cell, 1.0)
    assert not hosts_cache(cell, 0.0)


def test_populate_is_idempotent() -> None:
    cells = CellRegistry()
    center = cells.get(10, -10)
    first, store = populate(cells, CacheStateStore(), center, 4, 0.5)
    second, store_again = populate(cells, CacheStateStore(), center, 4, 0.5)
    assert first == second
    assert store == store_again
    # Repopulating from the saved mementos gives the same caches too
    third, _ = populate(cells, store, center, 4, 0.5)
    assert third == first


def test_populate_saves_fresh_caches() -> None:
    cells = CellRegistry()
    caches, store = populate(cells, CacheStateStore(), cells.get(0, 0), 2, 1.0)
    assert len(caches) == 13
    assert set(caches) == set(dict(store.items()))
    for key, cache in caches.items():
        assert store.load(key) == capture(cache)


def test_populate_respects_spawn_probability() -> None:
    cells = CellRegistry()
    caches, store = populate(cells, CacheStateStore(), cells.get(0, 0), 3, 0.0)
    assert len(caches) == 0
    assert len(store) == 0


def test_stored_memento_wins_over_fresh_generation() -> None:
    cells = CellRegistry()
    cell = cells.get(2, 3)
    emptied = Cache(cell=cell)
    store = CacheStateStore().save(cell.key, capture(emptied))
    caches, _ = populate(cells, store, cell, 0, 1.0)
    assert caches[cell.key].is_empty


def test_unreadable_memento_falls_back_to_fresh(caplog: pytest.LogCaptureFixture) -> None:
    cells = CellRegistry()
    cell = cells.get(2, 3)
    store = CacheStateStore().save(cell.key, "garbage")
    with caplog.at_level(logging.WARNING, logger="geocoin.systems.generation"):
        caches, store = populate(cells, store, cell, 0, 1.0)
    assert caches[cell.key] == spawn_cache(cell)
    assert store.load(cell.key) == capture(spawn_cache(cell))
    assert "unreadable memento" in caplog.text


def test_clear_flushes_current_contents() -> None:
    cells = CellRegistry()
    cell = cells.get(1, 1)
    caches, store = populate(cells, CacheStateStore(), cell, 0, 1.0)
    mutated = replace(caches[cell.key], coins=pvector())
    store = clear(caches.set(cell.key, mutated), store)
    assert store.load(cell.key) == capture(mutated)


def test_state_systems() -> None:
    state = new_game_state(make_config(0, 0, neighborhood_radius=1))
    assert len(state.caches) == 5

    cleared = clear_system(state)
    assert len(cleared.caches) == 0
    assert cleared.mementos == state.mementos

    repopulated = populate_system(cleared)
    assert repopulated.caches == state.caches

    assert regenerate_system(state).caches == state.caches
