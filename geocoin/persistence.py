"""Durable save / load of the game aggregate.

The saved blob is a JSON object with three keys::

    {
      "playerLocation": {"lat": 36.9894, "lng": -122.0627},
      "inventory": [{"cellI": 369894, "cellJ": -1220628, "serial": 3}],
      "cacheMementos": [["369895,-1220630", "{\\"v\\":1,...}"]]
    }

``cacheMementos`` holds ``[positionKey, memento]`` pairs where the memento is
the opaque string produced by :func:`geocoin.memento.capture`.

Blobs live in a :class:`BlobStore`; :class:`FileBlobStore` keeps one JSON
file on disk and :class:`MemoryBlobStore` keeps the text in memory. The
:class:`PersistenceAdapter` converts between blobs and :class:`GameSnapshot`
values. An absent blob means "new game"; an unreadable one is logged as a
:class:`~geocoin.errors.RecoverablePersistenceError` and also treated as a new
game, so a corrupt save never prevents the game from starting.
"""

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol

from pyrsistent import pvector

from geocoin.components import Coin, Inventory, LatLng
from geocoin.config import GameConfig
from geocoin.errors import MementoFormatError, RecoverablePersistenceError
from geocoin.memento import CacheSnapshot, CacheStateStore
from geocoin.registry import CellRegistry
from geocoin.state import GameState
from geocoin.systems.generation import populate_system

logger = logging.getLogger(__name__)

PLAYER_LOCATION_KEY = "playerLocation"
INVENTORY_KEY = "inventory"
CACHE_MEMENTOS_KEY = "cacheMementos"

MAX_LATITUDE = 90.0
MAX_LONGITUDE = 180.0


@dataclass(frozen=True)
class GameSnapshot:
    """Persisted aggregate: player location, inventory and memento table."""

    location: LatLng
    inventory: Inventory = Inventory()
    mementos: CacheStateStore = CacheStateStore()


def default_snapshot(config: GameConfig) -> GameSnapshot:
    """Snapshot of a brand new game at ``config.origin``."""
    return GameSnapshot(location=config.origin)


def snapshot_from_state(state: GameState) -> GameSnapshot:
    """Extract the persisted part of ``state``."""
    return GameSnapshot(
        location=state.location,
        inventory=state.inventory,
        mementos=state.mementos,
    )


def state_from_snapshot(
    snapshot: GameSnapshot, config: GameConfig, cells: CellRegistry
) -> GameState:
    """Rebuild a populated game state from ``snapshot``.

    ``cells`` must be the registry the snapshot's coins were resolved through
    so restored caches share cell identities with the inventory.
    """
    state = GameState(
        config=config,
        location=snapshot.location,
        cells=cells,
        inventory=snapshot.inventory,
        mementos=snapshot.mementos,
    )
    return populate_system(state)


def encode_snapshot(snapshot: GameSnapshot) -> str:
    """Serialize ``snapshot`` to the blob text."""
    payload: Dict[str, Any] = {
        PLAYER_LOCATION_KEY: {
            "lat": snapshot.location.lat,
            "lng": snapshot.location.lng,
        },
        INVENTORY_KEY: [
            {"cellI": coin.cell.i, "cellJ": coin.cell.j, "serial": coin.serial}
            for coin in snapshot.inventory.coins
        ],
        CACHE_MEMENTOS_KEY: [
            [key, memento] for key, memento in sorted(snapshot.mementos.items())
        ],
    }
    return json.dumps(payload, separators=(",", ":"))


def decode_snapshot(blob: str, cells: CellRegistry) -> GameSnapshot:
    """Parse blob text into a snapshot, resolving cells through ``cells``.

    Raises:
        RecoverablePersistenceError: If the blob is not a well-formed save.
    """
    try:
        payload = json.loads(blob)
    except ValueError as exc:
        raise RecoverablePersistenceError(f"Save data is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise RecoverablePersistenceError("Save data must be a JSON object.")
    return GameSnapshot(
        location=_coerce_location(payload.get(PLAYER_LOCATION_KEY)),
        inventory=_coerce_inventory(payload.get(INVENTORY_KEY), cells),
        mementos=_coerce_mementos(payload.get(CACHE_MEMENTOS_KEY)),
    )


class BlobStore(Protocol):
    """Durable single-blob storage."""

    def read(self) -> Optional[str]: ...

    def write(self, blob: str) -> None: ...

    def erase(self) -> None: ...


class FileBlobStore:
    """Keeps the blob in one UTF-8 file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Optional[str]:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, blob: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(blob, encoding="utf-8")

    def erase(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            return


class MemoryBlobStore:
    """Keeps the blob in process memory (tests, throwaway sessions)."""

    def __init__(self, blob: Optional[str] = None) -> None:
        self.blob = blob

    def read(self) -> Optional[str]:
        return self.blob

    def write(self, blob: str) -> None:
        self.blob = blob

    def erase(self) -> None:
        self.blob = None


class PersistenceAdapter:
    """Round-trips :class:`GameSnapshot` values through a :class:`BlobStore`."""

    def __init__(self, store: BlobStore, config: Optional[GameConfig] = None) -> None:
        self._store = store
        self._config = config if config is not None else GameConfig()

    def save(self, snapshot: GameSnapshot) -> None:
        """Synchronously overwrite the stored blob."""
        self._store.write(encode_snapshot(snapshot))

    def load(self, cells: CellRegistry) -> Optional[GameSnapshot]:
        """Return the stored snapshot, or ``None`` if absent or unreadable."""
        blob = self._store.read()
        if blob is None:
            logger.info("No saved game found; starting fresh")
            return None
        try:
            snapshot = decode_snapshot(blob, cells)
        except RecoverablePersistenceError as exc:
            logger.warning("Ignoring unreadable saved game: %s", exc)
            return None
        logger.info(
            "Loaded saved game (%d coins held, %d cache mementos)",
            len(snapshot.inventory),
            len(snapshot.mementos),
        )
        return snapshot

    def load_or_default(self, cells: CellRegistry) -> GameSnapshot:
        snapshot = self.load(cells)
        if snapshot is None:
            return default_snapshot(self._config)
        return snapshot

    def reset(self) -> GameSnapshot:
        """Erase the stored blob and return the snapshot to reinitialize from."""
        self._store.erase()
        logger.info("Saved game erased")
        return default_snapshot(self._config)


def _coerce_location(raw: object) -> LatLng:
    if not isinstance(raw, Mapping):
        raise RecoverablePersistenceError(f"'{PLAYER_LOCATION_KEY}' must be an object.")
    return LatLng(
        lat=_require_number(raw.get("lat"), f"{PLAYER_LOCATION_KEY}.lat", MAX_LATITUDE),
        lng=_require_number(raw.get("lng"), f"{PLAYER_LOCATION_KEY}.lng", MAX_LONGITUDE),
    )


def _coerce_inventory(raw: object, cells: CellRegistry) -> Inventory:
    if not isinstance(raw, list):
        raise RecoverablePersistenceError(f"'{INVENTORY_KEY}' must be a list.")
    coins: List[Coin] = []
    for index, entry in enumerate(raw):
        context = f"{INVENTORY_KEY}[{index}]"
        if not isinstance(entry, Mapping):
            raise RecoverablePersistenceError(f"'{context}' must be an object.")
        cell_i = _require_int(entry.get("cellI"), f"{context}.cellI")
        cell_j = _require_int(entry.get("cellJ"), f"{context}.cellJ")
        serial = _require_int(entry.get("serial"), f"{context}.serial")
        if serial < 0:
            raise RecoverablePersistenceError(f"'{context}.serial' must be non-negative.")
        coins.append(Coin(cell=cells.get(cell_i, cell_j), serial=serial))
    return Inventory(coins=pvector(coins))


def _coerce_mementos(raw: object) -> CacheStateStore:
    if not isinstance(raw, list):
        raise RecoverablePersistenceError(f"'{CACHE_MEMENTOS_KEY}' must be a list.")
    store = CacheStateStore()
    for index, entry in enumerate(raw):
        context = f"{CACHE_MEMENTOS_KEY}[{index}]"
        if (
            not isinstance(entry, list)
            or len(entry) != 2
            or not isinstance(entry[0], str)
            or not isinstance(entry[1], str)
        ):
            raise RecoverablePersistenceError(
                f"'{context}' must be a [positionKey, memento] string pair."
            )
        key, memento = entry
        try:
            snapshot = CacheSnapshot.from_memento(memento)
        except MementoFormatError as exc:
            raise RecoverablePersistenceError(f"'{context}': {exc}") from exc
        if key != f"{snapshot.cell_i},{snapshot.cell_j}":
            raise RecoverablePersistenceError(
                f"'{context}' key {key!r} does not match its memento position."
            )
        store = store.save(key, memento)
    return store


def _require_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecoverablePersistenceError(f"'{field_name}' must be an integer.")
    return value


def _require_number(value: object, field_name: str, limit: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise RecoverablePersistenceError(f"'{field_name}' must be a number.")
    if abs(value) > limit or not math.isfinite(value):
        raise RecoverablePersistenceError(
            f"'{field_name}' must be a finite number within [-{limit:g}, {limit:g}]."
        )
    return float(value)
