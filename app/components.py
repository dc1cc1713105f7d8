from typing import List

import streamlit as st

from geocoin.actions import Direction
from geocoin.components import Cache
from geocoin.presentation import coin_labels, status_text
from geocoin.session import GameSession
from geocoin.utils.grid import manhattan_distance

DIRECTION_ICONS = {
    Direction.NORTH: "⬆️",
    Direction.WEST: "⬅️",
    Direction.SOUTH: "⬇️",
    Direction.EAST: "➡️",
}


def display_inventory(session: GameSession) -> None:
    inventory = session.state.inventory
    st.info(status_text(inventory), icon="👛")
    labels = coin_labels(inventory)
    if labels:
        st.markdown("\n".join(f"- {label}" for label in reversed(labels)))


def display_movement(session: GameSession) -> None:
    _, up_col, _ = st.columns([1, 1, 1])
    with up_col:
        _movement_button(session, Direction.NORTH)
    left_col, down_col, right_col = st.columns([1, 1, 1])
    with left_col:
        _movement_button(session, Direction.WEST)
    with down_col:
        _movement_button(session, Direction.SOUTH)
    with right_col:
        _movement_button(session, Direction.EAST)


def display_relocate(session: GameSession) -> None:
    st.caption("Jump to a location (stands in for device location updates).")
    location = session.state.location
    lat: float = st.number_input(
        "Latitude", value=location.lat, format="%.8f", key="relocate_lat"
    )
    lng: float = st.number_input(
        "Longitude", value=location.lng, format="%.8f", key="relocate_lng"
    )
    if st.button("🌐 Go", key="relocate_btn", use_container_width=True):
        session.relocate(lat, lng)
        st.rerun()


def display_caches(session: GameSession) -> None:
    state = session.state
    player_cell = state.player_cell
    caches: List[Cache] = sorted(
        state.caches.values(),
        key=lambda cache: (manhattan_distance(cache.cell, player_cell), cache.position_key),
    )
    if not caches:
        st.info("No caches nearby. Keep walking!", icon="🧭")
        return
    for cache in caches:
        popup = session.popup(cache.position_key)
        with st.expander(f"📦 {popup.key} · {popup.coin_count} coins"):
            st.write(popup.description)
            pickup_col, drop_col = st.columns([1, 1])
            with pickup_col:
                if st.button(
                    "pick up",
                    key=f"pickup_{popup.key}",
                    disabled=not popup.can_pickup,
                    use_container_width=True,
                ):
                    session.pickup(popup.key)
                    st.rerun()
            with drop_col:
                if st.button(
                    "drop",
                    key=f"drop_{popup.key}",
                    disabled=not popup.can_drop,
                    use_container_width=True,
                ):
                    session.drop(popup.key)
                    st.rerun()


def _movement_button(session: GameSession, direction: Direction) -> None:
    key = f"{direction.value}_btn"
    if st.button(DIRECTION_ICONS[direction], key=key, use_container_width=True):
        session.move(direction)
        st.rerun()
