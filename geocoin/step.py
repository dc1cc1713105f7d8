"""State reducer and step orchestration.

This module wires the systems together to implement a single command
transition. The exported :func:`step` is the only public mutation entry point
for gameplay and is pure: it returns a *new* :class:`geocoin.state.GameState`.

Ordering guarantees:

1. Movement commands (``Move`` / ``Relocate``) update the location, then flush
    every active cache to the memento table, then populate the new
    neighborhood. A cache is never regenerated while its latest mutation is
    unflushed.
2. ``Pickup`` / ``Drop`` mutate one active cache and save its memento before
    returning.
3. ``Reset`` discards inventory and mementos and repopulates the default
    origin, which reproduces the layout of a brand new game.
4. Every command bumps ``turn``.

:func:`new_game_state` builds the initial state used at startup and by reset.
"""

from dataclasses import replace
from typing import Optional

from geocoin.actions import Command, Drop, Move, Pickup, Relocate, Reset
from geocoin.components import LatLng
from geocoin.config import GameConfig
from geocoin.moves import step_location
from geocoin.registry import CellRegistry
from geocoin.state import GameState
from geocoin.systems.generation import populate_system
from geocoin.systems.movement import movement_system
from geocoin.systems.transfer import drop_system, pickup_system


def new_game_state(
    config: GameConfig, cells: Optional[CellRegistry] = None
) -> GameState:
    """Return a populated state at ``config.origin`` with nothing collected."""
    state = GameState(
        config=config,
        location=config.origin,
        cells=cells if cells is not None else CellRegistry(),
    )
    return populate_system(state)


def step(state: GameState, command: Command) -> GameState:
    """Apply one player command.

    Args:
        state (GameState): Previous immutable game state.
        command (Command): Command value to apply.

    Returns:
        GameState: Next state. Refused pickups / drops return a state whose
            coins and mementos are unchanged and whose ``message`` explains why.

    Raises:
        ValueError: If the command is not recognized.
    """
    if isinstance(command, Move):
        state = _step_move(state, command)
    elif isinstance(command, Relocate):
        state = movement_system(state, LatLng(command.lat, command.lng))
    elif isinstance(command, Pickup):
        state = pickup_system(state, command.key)
    elif isinstance(command, Drop):
        state = drop_system(state, command.key)
    elif isinstance(command, Reset):
        state = _step_reset(state)
    else:
        raise ValueError(f"Command is not valid: {command!r}")

    return replace(state, turn=state.turn + 1)


def _step_move(state: GameState, command: Move) -> GameState:
    """Shift the player one tile and regenerate the view."""
    destination = step_location(
        state.location, command.direction, state.config.tile_degrees
    )
    return movement_system(state, destination)


def _step_reset(state: GameState) -> GameState:
    """Start over at the origin, keeping the config, registry and turn count.

    Active caches are discarded without a flush because the memento table
    is being emptied anyway.
    """
    fresh = new_game_state(state.config, cells=state.cells)
    return replace(fresh, turn=state.turn)
