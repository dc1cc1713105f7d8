"""Coin stack manipulation helpers."""

from typing import Optional, Tuple

from pyrsistent.typing import PVector

from geocoin.components import Coin, Inventory


def push_coin(coins: PVector[Coin], coin: Coin) -> PVector[Coin]:
    """Return a new vector with ``coin`` on top."""
    return coins.append(coin)


def pop_coin(coins: PVector[Coin]) -> Tuple[Optional[Coin], PVector[Coin]]:
    """Return ``(top_coin, rest)``; ``(None, coins)`` if ``coins`` is empty."""
    if len(coins) == 0:
        return None, coins
    return coins[-1], coins.delete(len(coins) - 1)


def add_coin(inventory: Inventory, coin: Coin) -> Inventory:
    """Return a new inventory with ``coin`` added on top."""
    return Inventory(coins=push_coin(inventory.coins, coin))


def take_coin(inventory: Inventory) -> Tuple[Optional[Coin], Inventory]:
    """Return the most recently added coin and the inventory without it."""
    coin, rest = pop_coin(inventory.coins)
    if coin is None:
        return None, inventory
    return coin, Inventory(coins=rest)
