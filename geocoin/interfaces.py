"""Collaborator interfaces consumed by :class:`geocoin.session.GameSession`.

The engine never draws anything or talks to location hardware. It relies on:

* a :class:`RegionRenderer` that shows a rectangle per active cache and opens
    a popup built by a factory the session supplies, and
* a :class:`LocationProvider` that pushes latitude/longitude updates.

:class:`ScriptedLocationProvider` is an in-process provider whose updates are
pushed by hand, useful for tests and for replaying a walk.
"""

from itertools import count
from typing import Callable, Dict, Iterator, Protocol

from geocoin.components import Bounds
from geocoin.presentation import PopupContent
from geocoin.types import LocationCallback, RegionHandle, SubscriptionHandle

PopupFactory = Callable[[], PopupContent]


class RegionRenderer(Protocol):
    def render_region(self, bounds: Bounds) -> RegionHandle: ...

    def remove_region(self, handle: RegionHandle) -> None: ...

    def attach_popup_factory(self, handle: RegionHandle, factory: PopupFactory) -> None: ...


class LocationProvider(Protocol):
    def subscribe(self, on_update: LocationCallback) -> SubscriptionHandle: ...

    def unsubscribe(self, handle: SubscriptionHandle) -> None: ...


class ScriptedLocationProvider:
    """Location provider driven by explicit :meth:`push` calls."""

    def __init__(self) -> None:
        self._subscribers: Dict[SubscriptionHandle, LocationCallback] = {}
        self._ids: Iterator[int] = count()

    def subscribe(self, on_update: LocationCallback) -> int:
        handle = next(self._ids)
        self._subscribers[handle] = on_update
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        self._subscribers.pop(handle, None)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def push(self, lat: float, lng: float) -> None:
        """Deliver a location update to every current subscriber."""
        for callback in list(self._subscribers.values()):
            callback(lat, lng)
