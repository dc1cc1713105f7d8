"""Flyweight cell registry.

Every part of the engine obtains cells through a :class:`CellRegistry` so
that two lookups of the same coordinates hand back the very same ``Cell``
object. The registry is owned by the game state (see
:class:`geocoin.state.GameState`) rather than living at module level, which
keeps its lifetime explicit and lets tests build isolated registries.

Examples
--------
>>> from geocoin.registry import CellRegistry
>>> cells = CellRegistry()
>>> cells.get(2, 3) is cells.get(2, 3)
True

Cells are never evicted; the registry only grows with the area the player
has explored.
"""

from typing import Dict, Iterator, Tuple

from geocoin.components import Cell


class CellRegistry:
    """Memo table from ``(i, j)`` to the canonical :class:`Cell`."""

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: Dict[Tuple[int, int], Cell] = {}

    def get(self, i: int, j: int) -> Cell:
        """Return the canonical cell for ``(i, j)``, creating it on first use."""
        coordinates = (i, j)
        cell = self._cells.get(coordinates)
        if cell is None:
            cell = Cell(i, j)
            self._cells[coordinates] = cell
        return cell

    def __contains__(self, coordinates: object) -> bool:
        return coordinates in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells.values())
