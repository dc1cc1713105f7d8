"""Cache component.

A cache is the coin container sitting on a cell. Its ``coins`` vector is used
as a stack: the last element is the most recently added coin and is the one
taken by the next pickup. The on-map rectangle belongs to the rendering
collaborator and is derived on demand with
:func:`geocoin.utils.grid.cell_bounds`.
"""

from dataclasses import dataclass

from pyrsistent import pvector
from pyrsistent.typing import PVector

from geocoin.components.cell import Cell
from geocoin.components.coin import Coin
from geocoin.types import PositionKey


@dataclass(frozen=True)
class Cache:
    """Coin container at a cell.

    Attributes:
        cell: Canonical cell the cache sits on.
        coins: Persistent vector of held coins (stack order).
    """

    cell: Cell
    coins: PVector[Coin] = pvector()

    @property
    def position_key(self) -> PositionKey:
        return self.cell.key

    @property
    def is_empty(self) -> bool:
        return len(self.coins) == 0
