"""Grid math helpers.

Conversions between geographic locations and grid cells plus the Manhattan
neighborhood walk used by cache generation. Functions here are pure apart
from the registry memo they go through.
"""

import math
from typing import List, Tuple

from geocoin.components import Bounds, Cell, LatLng
from geocoin.registry import CellRegistry


def cell_for(cells: CellRegistry, location: LatLng, tile_degrees: float) -> Cell:
    """Return the canonical cell containing ``location``.

    The grid is anchored at latitude/longitude (0, 0); cell ``(i, j)`` covers
    ``[i*t, (i+1)*t) x [j*t, (j+1)*t)`` for tile size ``t``.
    """
    i = math.floor(location.lat / tile_degrees)
    j = math.floor(location.lng / tile_degrees)
    return cells.get(i, j)


def cell_bounds(cell: Cell, tile_degrees: float) -> Bounds:
    """Return the rectangle covered by ``cell``."""
    return Bounds(
        south_west=LatLng(cell.i * tile_degrees, cell.j * tile_degrees),
        north_east=LatLng((cell.i + 1) * tile_degrees, (cell.j + 1) * tile_degrees),
    )


def cell_center(cell: Cell, tile_degrees: float) -> LatLng:
    """Return the midpoint of ``cell``."""
    return LatLng((cell.i + 0.5) * tile_degrees, (cell.j + 0.5) * tile_degrees)


def coordinate_in_cell(index: int, fraction: float, tile_degrees: float) -> float:
    """Return the coordinate at ``fraction`` of the way through cell ``index``.

    The result always floors back to ``index``; rounding that would push it
    into a neighbor is undone one ulp at a time.
    """
    value = (index + fraction) * tile_degrees
    while math.floor(value / tile_degrees) < index:
        value = math.nextafter(value, math.inf)
    while math.floor(value / tile_degrees) > index:
        value = math.nextafter(value, -math.inf)
    return value


def manhattan_distance(a: Cell, b: Cell) -> int:
    return abs(a.i - b.i) + abs(a.j - b.j)


def neighborhood(center: Cell, radius: int) -> List[Tuple[int, int]]:
    """Return every ``(i, j)`` within Manhattan ``radius`` of ``center``.

    Coordinates come out in row-major order (increasing ``i``, then ``j``), so
    repeated walks over the same neighborhood visit cells identically.
    """
    coordinates: List[Tuple[int, int]] = []
    for di in range(-radius, radius + 1):
        span = radius - abs(di)
        for dj in range(-span, span + 1):
            coordinates.append((center.i + di, center.j + dj))
    return coordinates
