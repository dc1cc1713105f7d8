"""Interactive game session.

:class:`GameSession` is the object a front end holds on to. It owns the
current :class:`~geocoin.state.GameState` and is the only place where state is
replaced. Each :meth:`GameSession.dispatch` call runs to completion before the
next one starts:

1. the command is applied with the pure reducer :func:`geocoin.step.step`,
2. the persisted part of the new state is written through the
    :class:`~geocoin.persistence.PersistenceAdapter` (or the save is erased
    for a reset); refused transfers change nothing persisted and write nothing,
3. the optional :class:`~geocoin.interfaces.RegionRenderer` is told which
    cache rectangles appeared or disappeared.

Device location updates arrive through :meth:`GameSession.follow` and are
dispatched exactly like a manual ``Relocate`` command.

Usage:

``session = GameSession(PersistenceAdapter(FileBlobStore("save.json")))``
``session.move(Direction.NORTH)``
``session.pickup(next(iter(session.state.caches)))``
"""

import logging
from functools import partial
from typing import Dict, Optional

from geocoin.actions import Command, Direction, Drop, Move, Pickup, Relocate, Reset
from geocoin.config import GameConfig
from geocoin.interfaces import LocationProvider, RegionRenderer
from geocoin.persistence import (
    PersistenceAdapter,
    default_snapshot,
    snapshot_from_state,
    state_from_snapshot,
)
from geocoin.presentation import PopupContent, popup_content
from geocoin.registry import CellRegistry
from geocoin.state import GameState
from geocoin.step import step
from geocoin.types import PositionKey, RegionHandle, SubscriptionHandle
from geocoin.utils.grid import cell_bounds

logger = logging.getLogger(__name__)


class GameSession:
    """Stateful wrapper tying the reducer to storage, rendering and location."""

    def __init__(
        self,
        adapter: PersistenceAdapter,
        config: Optional[GameConfig] = None,
        renderer: Optional[RegionRenderer] = None,
    ) -> None:
        """Create a session and load (or start) the game.

        Arguments:
            adapter: Durable storage for the game snapshot.
            config: Gameplay tunables; defaults to :class:`GameConfig` defaults.
            renderer: Optional map collaborator kept in sync with active caches.
        """
        self.config = config if config is not None else GameConfig()
        self._adapter = adapter
        self._renderer = renderer
        self._regions: Dict[PositionKey, RegionHandle] = {}
        self._provider: Optional[LocationProvider] = None
        self._subscription: Optional[SubscriptionHandle] = None
        self.state: GameState = self.start()

    def start(self) -> GameState:
        """(Re)load the saved game, or a new one, and populate the view."""
        cells = CellRegistry()
        snapshot = self._adapter.load(cells) or default_snapshot(self.config)
        self.state = state_from_snapshot(snapshot, self.config, cells)
        logger.info(
            "Session started at cell %s with %d caches in view",
            self.state.player_cell.key,
            len(self.state.caches),
        )
        self._sync_regions()
        return self.state

    def dispatch(self, command: Command) -> GameState:
        """Apply ``command``, persist the outcome and refresh the map."""
        previous = snapshot_from_state(self.state)
        self.state = step(self.state, command)
        if isinstance(command, Reset):
            self._adapter.reset()
        else:
            current = snapshot_from_state(self.state)
            if current != previous:
                self._adapter.save(current)
        self._sync_regions()
        return self.state

    def move(self, direction: Direction) -> GameState:
        return self.dispatch(Move(direction))

    def relocate(self, lat: float, lng: float) -> GameState:
        return self.dispatch(Relocate(lat, lng))

    def pickup(self, key: PositionKey) -> GameState:
        return self.dispatch(Pickup(key))

    def drop(self, key: PositionKey) -> GameState:
        return self.dispatch(Drop(key))

    def reset(self) -> GameState:
        """Erase the save and return to a brand new game at the origin."""
        return self.dispatch(Reset())

    def popup(self, key: PositionKey) -> PopupContent:
        """Popup content for cache ``key`` as of *now*."""
        return popup_content(self.state, key)

    def follow(self, provider: LocationProvider) -> None:
        """Treat every update from ``provider`` as a ``Relocate`` command."""
        self.unfollow()
        self._provider = provider
        self._subscription = provider.subscribe(self._on_location_update)
        logger.info("Following device location updates")

    def unfollow(self) -> None:
        if self._provider is not None and self._subscription is not None:
            self._provider.unsubscribe(self._subscription)
            logger.info("Stopped following device location updates")
        self._provider = None
        self._subscription = None

    @property
    def following(self) -> bool:
        return self._subscription is not None

    def close(self) -> None:
        """Stop location updates and remove every rendered region."""
        self.unfollow()
        if self._renderer is not None:
            for handle in self._regions.values():
                self._renderer.remove_region(handle)
        self._regions.clear()

    def _on_location_update(self, lat: float, lng: float) -> None:
        self.dispatch(Relocate(lat, lng))

    def _sync_regions(self) -> None:
        if self._renderer is None:
            return
        for key in [key for key in self._regions if key not in self.state.caches]:
            self._renderer.remove_region(self._regions.pop(key))
        for key, cache in self.state.caches.items():
            if key in self._regions:
                continue
            handle = self._renderer.render_region(
                cell_bounds(cache.cell, self.config.tile_degrees)
            )
            self._renderer.attach_popup_factory(handle, partial(self.popup, key))
            self._regions[key] = handle
