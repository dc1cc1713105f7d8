"""Player commands.

The UI layer never mutates the game directly; it dispatches one of the
command values below into :func:`geocoin.step.step`.

* :class:`Move` steps the player one tile in a :class:`Direction`.
* :class:`Relocate` jumps to an absolute location (device location updates).
* :class:`Pickup` / :class:`Drop` transfer a coin with the cache at ``key``.
* :class:`Reset` starts over at the default origin.
"""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Union

from geocoin.types import PositionKey


class Direction(StrEnum):
    """Cardinal movement directions on the grid."""

    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()


@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class Relocate:
    lat: float
    lng: float


@dataclass(frozen=True)
class Pickup:
    key: PositionKey


@dataclass(frozen=True)
class Drop:
    key: PositionKey


@dataclass(frozen=True)
class Reset:
    pass


Command = Union[Move, Relocate, Pickup, Drop, Reset]
