"""Cache mementos and the memento table.

A memento is the opaque string form of a :class:`CacheSnapshot`. It captures
everything needed to rebuild a :class:`~geocoin.components.Cache` (position
and coin stack, each coin with its own origin cell) so a cache can be dropped
from the active view and regenerated later with no other lookups.

Wire form (compact JSON, keys in this order)::

    {"v":1,"i":2,"j":3,"coins":[[2,3,0],[2,3,1],[5,-1,4]]}

``v`` is the snapshot format version; :func:`restore` rejects versions it does
not know. The :class:`CacheStateStore` maps position keys to these strings
and is the single source of truth for every cache that is not currently
materialized.
"""

import json
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap

from geocoin.components import Cache, Coin
from geocoin.errors import MementoFormatError
from geocoin.registry import CellRegistry
from geocoin.types import CoinRecord, Memento, PositionKey

SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class CacheSnapshot:
    """Versioned plain-data image of a cache.

    Attributes:
        cell_i: Row of the cache cell.
        cell_j: Column of the cache cell.
        coins: ``(cell_i, cell_j, serial)`` records in stack order.
        version: Snapshot format version.
    """

    cell_i: int
    cell_j: int
    coins: Tuple[CoinRecord, ...] = ()
    version: int = SNAPSHOT_VERSION

    @classmethod
    def of(cls, cache: Cache) -> "CacheSnapshot":
        return cls(
            cell_i=cache.cell.i,
            cell_j=cache.cell.j,
            coins=tuple(coin.to_record() for coin in cache.coins),
        )

    def to_memento(self) -> Memento:
        return json.dumps(
            {
                "v": self.version,
                "i": self.cell_i,
                "j": self.cell_j,
                "coins": [list(record) for record in self.coins],
            },
            separators=(",", ":"),
        )

    @classmethod
    def from_memento(cls, memento: Memento) -> "CacheSnapshot":
        try:
            payload = json.loads(memento)
        except (TypeError, ValueError) as exc:
            raise MementoFormatError(f"Memento is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise MementoFormatError("Memento must be a JSON object.")
        version = payload.get("v")
        if isinstance(version, bool) or version != SNAPSHOT_VERSION:
            raise MementoFormatError(f"Unsupported memento version: {version!r}")
        raw_coins = payload.get("coins")
        if not isinstance(raw_coins, list):
            raise MementoFormatError("Memento coins must be a list.")
        return cls(
            cell_i=_require_int(payload.get("i"), "i"),
            cell_j=_require_int(payload.get("j"), "j"),
            coins=tuple(_coerce_record(raw) for raw in raw_coins),
            version=version,
        )

    def to_cache(self, cells: CellRegistry) -> Cache:
        coins = pvector(
            Coin(cell=cells.get(i, j), serial=serial) for i, j, serial in self.coins
        )
        return Cache(cell=cells.get(self.cell_i, self.cell_j), coins=coins)


def capture(cache: Cache) -> Memento:
    """Serialize ``cache`` to its memento string."""
    return CacheSnapshot.of(cache).to_memento()


def restore(memento: Memento, cells: CellRegistry) -> Cache:
    """Rebuild the cache described by ``memento``.

    Raises:
        MementoFormatError: If ``memento`` is malformed or of an unknown version.
    """
    return CacheSnapshot.from_memento(memento).to_cache(cells)


@dataclass(frozen=True)
class CacheStateStore:
    """Persistent table of the latest memento per cache position.

    Entries are created lazily by generation, overwritten after every cache
    mutation and only dropped all at once by :meth:`clear_all` (game reset).
    Like every other state component the store is immutable; mutating
    operations return a new store.

    Attributes:
        entries: Position key to memento string.
    """

    entries: PMap[PositionKey, Memento] = pmap()

    def save(self, key: PositionKey, memento: Memento) -> "CacheStateStore":
        """Return a store with ``key`` set to ``memento`` (create or overwrite)."""
        return CacheStateStore(entries=self.entries.set(key, memento))

    def load(self, key: PositionKey) -> Optional[Memento]:
        """Return the memento stored for ``key`` or ``None`` if never saved."""
        return self.entries.get(key)

    def clear_all(self) -> "CacheStateStore":
        """Return an empty store."""
        return CacheStateStore()

    def items(self) -> Iterator[Tuple[PositionKey, Memento]]:
        return iter(self.entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


def _require_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MementoFormatError(f"Memento field '{field_name}' must be an integer.")
    return value


def _coerce_record(raw: object) -> CoinRecord:
    if not isinstance(raw, list) or len(raw) != 3:
        raise MementoFormatError("Memento coin must be a [cell_i, cell_j, serial] triple.")
    cell_i = _require_int(raw[0], "coins.cell_i")
    cell_j = _require_int(raw[1], "coins.cell_j")
    serial = _require_int(raw[2], "coins.serial")
    if serial < 0:
        raise MementoFormatError("Memento coin serial must be non-negative.")
    return (cell_i, cell_j, serial)
