from geocoin.components import Cell, LatLng
from geocoin.registry import CellRegistry
from geocoin.utils.grid import (
    cell_bounds,
    cell_center,
    cell_for,
    coordinate_in_cell,
    manhattan_distance,
    neighborhood,
)
from tests.test_utils import TILE


def test_cell_for_floors_coordinates() -> None:
    cells = CellRegistry()
    assert cell_for(cells, LatLng(0.00025, 0.00015), TILE) is cells.get(2, 1)
    assert cell_for(cells, LatLng(-0.00005, -0.00015), TILE) is cells.get(-1, -2)


def test_cell_for_default_origin() -> None:
    cells = CellRegistry()
    cell = cell_for(cells, LatLng(36.98949379578401, -122.06277128548504), TILE)
    assert (cell.i, cell.j) == (369894, -1220628)


def test_bounds_contain_center() -> None:
    cell = Cell(3, -4)
    bounds = cell_bounds(cell, TILE)
    assert bounds.contains(cell_center(cell, TILE))
    assert not bounds.contains(cell_center(Cell(4, -4), TILE))
    assert bounds.south_west.lat < bounds.north_east.lat
    assert bounds.south_west.lng < bounds.north_east.lng


def test_manhattan_distance() -> None:
    assert manhattan_distance(Cell(0, 0), Cell(0, 0)) == 0
    assert manhattan_distance(Cell(1, -2), Cell(-2, 2)) == 7


def test_neighborhood_size_and_radius() -> None:
    center = Cell(5, 5)
    for radius in range(5):
        coordinates = neighborhood(center, radius)
        assert len(coordinates) == 2 * radius * radius + 2 * radius + 1
        assert len(set(coordinates)) == len(coordinates)
        assert all(
            manhattan_distance(center, Cell(i, j)) <= radius for i, j in coordinates
        )


def test_neighborhood_is_row_major() -> None:
    coordinates = neighborhood(Cell(0, 0), 1)
    assert coordinates == [(-1, 0), (0, -1), (0, 0), (0, 1), (1, 0)]
    assert neighborhood(Cell(0, 0), 0) == [(0, 0)]


def test_coordinate_in_cell_floors_to_index() -> None:
    cells = CellRegistry()
    for index in range(-200, 200):
        for fraction in (0.0, 0.5, 0.9999999999999999):
            value = coordinate_in_cell(index, fraction, TILE)
            assert cell_for(cells, LatLng(value, 0.0), TILE).i == index
