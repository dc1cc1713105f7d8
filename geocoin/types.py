"""Common type aliases and enumerations.

``PositionKey`` is the ``"i,j"`` string form of a cell and is used everywhere
a cache is referenced by the command interface, the memento table and the
persisted blob.
"""

from enum import StrEnum, auto
from typing import Callable, Hashable, Tuple

PositionKey = str
Memento = str

CoinRecord = Tuple[int, int, int]
"""Plain ``(cell_i, cell_j, serial)`` triple used by serialized forms."""

RegionHandle = Hashable
SubscriptionHandle = Hashable
LocationCallback = Callable[[float, float], None]


class TransferGuard(StrEnum):
    """Reasons a pickup / drop is refused without touching any container."""

    EMPTY_CACHE = auto()
    EMPTY_INVENTORY = auto()
    DETACHED_CACHE = auto()
