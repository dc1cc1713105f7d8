import json

import pytest
from pyrsistent import pvector

from geocoin.components import Cache, Coin
from geocoin.errors import MementoFormatError
from geocoin.memento import (
    SNAPSHOT_VERSION,
    CacheSnapshot,
    CacheStateStore,
    capture,
    restore,
)
from geocoin.registry import CellRegistry


def make_cache(cells: CellRegistry) -> Cache:
    home = cells.get(2, 3)
    away = cells.get(-1, 5)
    coins = pvector(
        [
            Coin(cell=home, serial=0),
            Coin(cell=home, serial=1),
            Coin(cell=away, serial=4),
        ]
    )
    return Cache(cell=home, coins=coins)


def test_round_trip_preserves_position_and_coins() -> None:
    cells = CellRegistry()
    cache = make_cache(cells)
    restored = restore(capture(cache), cells)
    assert restored == cache
    assert restored.cell is cache.cell
    assert [coin.to_record() for coin in restored.coins] == [
        (2, 3, 0),
        (2, 3, 1),
        (-1, 5, 4),
    ]


def test_restore_into_fresh_registry_uses_its_cells() -> None:
    cache = make_cache(CellRegistry())
    cells = CellRegistry()
    restored = restore(capture(cache), cells)
    assert restored.cell is cells.get(2, 3)
    assert restored.coins[2].cell is cells.get(-1, 5)


def test_empty_cache_round_trip() -> None:
    cells = CellRegistry()
    cache = Cache(cell=cells.get(0, 0))
    restored = restore(capture(cache), cells)
    assert restored.is_empty
    assert restored.position_key == "0,0"


def test_memento_wire_form() -> None:
    cells = CellRegistry()
    memento = capture(make_cache(cells))
    assert json.loads(memento) == {
        "v": SNAPSHOT_VERSION,
        "i": 2,
        "j": 3,
        "coins": [[2, 3, 0], [2, 3, 1], [-1, 5, 4]],
    }
    assert CacheSnapshot.from_memento(memento) == CacheSnapshot.of(make_cache(cells))


@pytest.mark.parametrize(
    "memento",
    [
        "not json",
        "[]",
        '{"v": 2, "i": 0, "j": 0, "coins": []}',
        '{"v": true, "i": 0, "j": 0, "coins": []}',
        '{"v": 1, "i": "0", "j": 0, "coins": []}',
        '{"v": 1, "i": 0, "j": 0}',
        '{"v": 1, "i": 0, "j": 0, "coins": [[0, 0]]}',
        '{"v": 1, "i": 0, "j": 0, "coins": [[0, 0, -1]]}',
        '{"v": 1, "i": 0, "j": 0, "coins": [[0, false, 1]]}',
    ],
)
def test_malformed_memento_is_rejected(memento: str) -> None:
    with pytest.raises(MementoFormatError):
        restore(memento, CellRegistry())


def test_store_save_load_and_overwrite() -> None:
    store = CacheStateStore()
    assert store.load("0,0") is None

    first = store.save("0,0", "a")
    second = first.save("0,0", "b")

    assert store.load("0,0") is None
    assert first.load("0,0") == "a"
    assert second.load("0,0") == "b"
    assert len(second) == 1
    assert "0,0" in second


def test_store_clear_all() -> None:
    store = CacheStateStore().save("0,0", "a").save("1,1", "b")
    assert dict(store.items()) == {"0,0": "a", "1,1": "b"}
    cleared = store.clear_all()
    assert len(cleared) == 0
    assert len(store) == 2
