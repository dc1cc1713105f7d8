"""Presentation helpers shared by every front end.

Builds the text and flags a UI needs without touching any UI toolkit: the
status panel line, coin labels, and the content of a cache popup.
"""

from dataclasses import dataclass
from typing import List

from geocoin.components import Inventory
from geocoin.state import GameState
from geocoin.systems.transfer import drop_guard, pickup_guard
from geocoin.types import PositionKey

NO_COINS_TEXT = "No coins yet..."
COIN_ICON = "\U0001fa99"


@dataclass(frozen=True)
class PopupContent:
    """What a cache popup shows and which actions it enables.

    ``detached`` is set when the cache left the view after the popup was
    opened; both actions are then disabled and dispatching them is a no-op.
    """

    key: PositionKey
    description: str
    coin_count: int
    can_pickup: bool
    can_drop: bool
    detached: bool = False


def coin_labels(inventory: Inventory) -> List[str]:
    return [f"{COIN_ICON}{coin.label}" for coin in inventory.coins]


def status_text(inventory: Inventory) -> str:
    """Status panel headline."""
    if len(inventory) == 0:
        return NO_COINS_TEXT
    return f"{len(inventory)} coins currently held"


def popup_content(state: GameState, key: PositionKey) -> PopupContent:
    """Build popup content for cache ``key`` against the current state."""
    cache = state.caches.get(key)
    if cache is None:
        return PopupContent(
            key=key,
            description=f'The cache at "{key}" is no longer in view.',
            coin_count=0,
            can_pickup=False,
            can_drop=False,
            detached=True,
        )
    coin_count = len(cache.coins)
    return PopupContent(
        key=key,
        description=f'There is a cache here at "{key}". It has {coin_count} coins.',
        coin_count=coin_count,
        can_pickup=pickup_guard(state, key) is None,
        can_drop=drop_guard(state, key) is None,
    )
