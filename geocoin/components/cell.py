"""Cell component.

Immutable integer grid coordinate anchored at latitude/longitude (0, 0).
Instances are handed out by :class:`geocoin.registry.CellRegistry`, which
guarantees one object per ``(i, j)`` pair.
"""

from dataclasses import dataclass

from geocoin.types import PositionKey


@dataclass(frozen=True, slots=True)
class Cell:
    """Grid coordinate.

    Attributes:
        i: Row index (latitude direction, grows northwards).
        j: Column index (longitude direction, grows eastwards).
    """

    i: int
    j: int

    @property
    def key(self) -> PositionKey:
        """``"i,j"`` form used as the cache position key."""
        return f"{self.i},{self.j}"
