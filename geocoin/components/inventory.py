from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from geocoin.components.coin import Coin


@dataclass(frozen=True)
class Inventory:
    """Ordered coins carried by the player.

    The immutable ``PVector`` enables cheap sharing across state copies;
    pushing or popping a coin produces a new component instance. The last
    element is the coin handed over by the next drop.

    Attributes:
        coins:
            Persistent vector of coins currently held.
    """

    coins: PVector[Coin] = pvector()

    def __len__(self) -> int:
        return len(self.coins)
