from pyrsistent import pvector

from geocoin.components import Coin, Inventory
from geocoin.presentation import (
    COIN_ICON,
    NO_COINS_TEXT,
    coin_labels,
    popup_content,
    status_text,
)
from geocoin.registry import CellRegistry
from geocoin.systems.transfer import pickup_system
from tests.test_utils import make_cache_state


def test_status_text() -> None:
    cells = CellRegistry()
    assert status_text(Inventory()) == NO_COINS_TEXT
    inventory = Inventory(coins=pvector([Coin(cells.get(1, 2), 0), Coin(cells.get(1, 2), 1)]))
    assert status_text(inventory) == "2 coins currently held"


def test_coin_labels_follow_inventory_order() -> None:
    cells = CellRegistry()
    inventory = Inventory(coins=pvector([Coin(cells.get(1, -2), 0), Coin(cells.get(3, 4), 7)]))
    assert coin_labels(inventory) == [f"{COIN_ICON}1:-2#0", f"{COIN_ICON}3:4#7"]


def test_popup_for_fresh_cache() -> None:
    state, key = make_cache_state(min_coins=1)
    count = len(state.caches[key].coins)
    popup = popup_content(state, key)
    assert popup.description == f'There is a cache here at "{key}". It has {count} coins.'
    assert popup.coin_count == count
    assert popup.can_pickup
    assert not popup.can_drop
    assert not popup.detached


def test_popup_enables_drop_once_coins_are_held() -> None:
    state, key = make_cache_state(min_coins=1, max_coins=1)
    state = pickup_system(state, key)
    popup = popup_content(state, key)
    assert popup.coin_count == 0
    assert not popup.can_pickup
    assert popup.can_drop


def test_popup_for_cache_out_of_view() -> None:
    state, _ = make_cache_state()
    popup = popup_content(state, "999,999")
    assert popup.detached
    assert not popup.can_pickup
    assert not popup.can_drop
