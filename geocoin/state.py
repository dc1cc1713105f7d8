"""Core immutable ``GameState`` dataclass.

This module defines the frozen :class:`GameState` object that represents the
entire game at a single instant. All systems are pure functions that take a
previous ``GameState`` plus inputs (e.g. a command) and return a *new*
``GameState``; nothing is mutated in place. The state is created once at
startup (or on reset) and threaded through every call, so there is no hidden
module-level inventory or memento table.

Design notes:

* Collections are **persistent structures** (``pyrsistent.PMap`` /
    ``PVector``). Replacing a cache or pushing a coin produces a new value
    that shares structure with the old one.
* ``caches`` holds only the caches currently materialized around the player;
    ``mementos`` holds the latest snapshot of *every* cache ever generated and
    stays authoritative for the ones that are not active.
* ``cells`` is the flyweight registry. It is a memo table rather than game
    data, so it is shared by every state derived from the same game and
    excluded from equality.

See :mod:`geocoin.step` for how the reducer orchestrates the systems.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pyrsistent import pmap
from pyrsistent.typing import PMap

from geocoin.components import Cache, Cell, Inventory, LatLng
from geocoin.config import GameConfig
from geocoin.memento import CacheStateStore
from geocoin.registry import CellRegistry
from geocoin.types import PositionKey
from geocoin.utils.grid import cell_for


@dataclass(frozen=True)
class GameState:
    """Immutable game aggregate.

    Attributes:
        config (GameConfig): Gameplay tunables (tile size, radius, spawn odds).
        location (LatLng): Player location in degrees.
        cells (CellRegistry): Flyweight registry shared across state copies.
        inventory (Inventory): Coins carried by the player.
        mementos (CacheStateStore): Latest memento per generated cache.
        caches (PMap[PositionKey, Cache]): Caches materialized around the player.
        turn (int): Number of commands applied so far.
        message (str | None): Optional informational message (e.g. refused pickup).
    """

    config: GameConfig
    location: LatLng
    cells: CellRegistry = field(default_factory=CellRegistry, compare=False, repr=False)

    inventory: Inventory = Inventory()
    mementos: CacheStateStore = CacheStateStore()
    caches: PMap[PositionKey, Cache] = pmap()

    turn: int = 0
    message: Optional[str] = None

    @property
    def player_cell(self) -> Cell:
        """Canonical cell under the player."""
        return cell_for(self.cells, self.location, self.config.tile_degrees)

    @property
    def description(self) -> Dict[str, Any]:
        """Small JSON-friendly summary for diagnostics panels."""
        cell = self.player_cell
        return {
            "location": {"lat": self.location.lat, "lng": self.location.lng},
            "cell": cell.key,
            "inventory": len(self.inventory),
            "active_caches": {
                key: len(cache.coins) for key, cache in sorted(self.caches.items())
            },
            "mementos": len(self.mementos),
            "turn": self.turn,
            "message": self.message,
        }
