"""Player movement system.

Moves the player to a new location and refreshes the caches in view. Manual
moves and device location updates share this path, so both always flush the
outgoing caches before the incoming neighborhood is populated.
"""

import logging
from dataclasses import replace

from geocoin.components import LatLng
from geocoin.state import GameState
from geocoin.systems.generation import regenerate_system

logger = logging.getLogger(__name__)


def movement_system(state: GameState, location: LatLng) -> GameState:
    """Place the player at ``location`` and regenerate the view.

    Args:
        state (GameState): Current state.
        location (LatLng): Destination in degrees.

    Returns:
        GameState: State with the new location. The view is only regenerated
            when the player's cell actually changes.
    """
    previous_cell = state.player_cell
    state = replace(state, location=location, message=None)
    if state.player_cell is previous_cell and state.caches:
        return state
    logger.debug("Player moved %s -> %s", previous_cell.key, state.player_cell.key)
    return regenerate_system(state)
