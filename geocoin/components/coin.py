"""Coin component.

A coin remembers the cell that spawned it and a serial that is unique among
the coins of that cell's first generation. Coins are never mutated; they only
move between a cache and the player's inventory.
"""

from dataclasses import dataclass

from geocoin.components.cell import Cell
from geocoin.types import CoinRecord


@dataclass(frozen=True, slots=True)
class Coin:
    """Collectible token.

    Attributes:
        cell: Cell whose cache originally generated the coin.
        serial: Non-negative serial within that cell's initial generation.
    """

    cell: Cell
    serial: int

    @property
    def label(self) -> str:
        return f"{self.cell.i}:{self.cell.j}#{self.serial}"

    def to_record(self) -> CoinRecord:
        return (self.cell.i, self.cell.j, self.serial)
