"""Movement helpers.

Maps a :class:`~geocoin.actions.Direction` to a cell delta and applies it to a
geographic location. One ``Move`` shifts the player by exactly one tile, so
the player's cell changes by the delta below. The destination is anchored on
the target cell rather than accumulated in degrees, which keeps long walks
on the grid.
"""

import math
from typing import Dict, Tuple

from geocoin.actions import Direction
from geocoin.components import LatLng
from geocoin.utils.grid import coordinate_in_cell

DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (1, 0),
    Direction.SOUTH: (-1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}
"""Direction to ``(di, dj)``: ``i`` follows latitude, ``j`` longitude."""


def step_location(location: LatLng, direction: Direction, tile_degrees: float) -> LatLng:
    """Return ``location`` moved one tile towards ``direction``.

    The offset inside the current cell is kept, so a player standing on a
    cell's south-west corner lands on the next cell's south-west corner.
    """
    di, dj = DIRECTION_DELTAS[direction]
    return LatLng(
        _shift(location.lat, di, tile_degrees),
        _shift(location.lng, dj, tile_degrees),
    )


def _shift(value: float, delta: int, tile_degrees: float) -> float:
    if delta == 0:
        return value
    scaled = value / tile_degrees
    index = math.floor(scaled)
    return coordinate_in_cell(index + delta, scaled - index, tile_degrees)
