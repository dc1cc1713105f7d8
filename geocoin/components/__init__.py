"""geocoin.components
=======================

Aggregate import surface for the immutable value objects used by the engine.

All component classes are frozen ``@dataclass`` value objects that carry no
behavior beyond a few derived properties; systems build new instances instead
of mutating them. Downstream code can import them from a single place::

    from geocoin.components import Cache, Cell, Coin, Inventory

"""

from .cache import Cache
from .cell import Cell
from .coin import Coin
from .inventory import Inventory
from .location import Bounds, LatLng

__all__ = [
    "Bounds",
    "Cache",
    "Cell",
    "Coin",
    "Inventory",
    "LatLng",
]
