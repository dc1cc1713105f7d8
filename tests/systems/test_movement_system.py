from geocoin.components import LatLng
from geocoin.step import new_game_state
from geocoin.systems.movement import movement_system
from geocoin.systems.transfer import pickup_system
from tests.test_utils import TILE, location_in_cell, make_cache_state, make_config


def test_move_within_cell_keeps_view() -> None:
    state = new_game_state(make_config(0, 0, neighborhood_radius=1))
    inside = LatLng(state.location.lat + TILE / 4, state.location.lng - TILE / 4)
    new_state = movement_system(state, inside)
    assert new_state.location == inside
    assert new_state.player_cell is state.player_cell
    assert new_state.caches is state.caches


def test_move_to_new_cell_replaces_view() -> None:
    state = new_game_state(make_config(0, 0))
    new_state = movement_system(state, location_in_cell(0, 5))
    assert set(new_state.caches) == {"0,5"}
    assert set(dict(new_state.mementos.items())) == {"0,0", "0,5"}


def test_move_flushes_mutated_caches() -> None:
    state, key = make_cache_state(min_coins=1)
    state = pickup_system(state, key)
    remaining = len(state.caches[key].coins)

    away = movement_system(state, location_in_cell(50, 50))
    assert key not in away.caches

    back = movement_system(away, state.location)
    assert len(back.caches[key].coins) == remaining
    assert len(back.inventory) == 1


def test_move_clears_message() -> None:
    state, _ = make_cache_state()
    state = pickup_system(state, "999,999")
    assert state.message is not None
    assert movement_system(state, location_in_cell(3, 3)).message is None
