from dataclasses import replace

import streamlit as st

from geocoin.components import LatLng
from geocoin.config import GameConfig
from geocoin.utils.logging import setup_logging

from .session_factory import make_session

__all__ = [
    "make_session",
    "set_default_config",
    "get_config_from_widgets",
]


def set_default_config() -> None:
    if "config" not in st.session_state:
        config = GameConfig.from_env()
        setup_logging(config.log_level)
        st.session_state["config"] = config


def get_config_from_widgets() -> GameConfig:
    current: GameConfig = st.session_state["config"]

    st.subheader("Neighborhood")
    radius: int = st.slider(
        "Neighborhood radius (cells)",
        0,
        16,
        current.neighborhood_radius,
        key="neighborhood_radius",
    )
    spawn_probability: float = st.slider(
        "Cache spawn probability",
        0.0,
        1.0,
        current.spawn_probability,
        step=0.01,
        key="spawn_probability",
    )
    initial_coin_scale: int = st.number_input(
        "Initial coin scale",
        min_value=0,
        value=current.initial_coin_scale,
        key="initial_coin_scale",
        help="Fresh caches hold floor(luck x scale) coins.",
    )

    st.subheader("Origin")
    lat_col, lng_col = st.columns([1, 1])
    with lat_col:
        origin_lat: float = st.number_input(
            "Latitude", value=current.origin.lat, format="%.8f", key="origin_lat"
        )
    with lng_col:
        origin_lng: float = st.number_input(
            "Longitude", value=current.origin.lng, format="%.8f", key="origin_lng"
        )

    st.subheader("Storage")
    save_path: str = st.text_input("Save file", value=current.save_path, key="save_path")

    return replace(
        current,
        origin=LatLng(origin_lat, origin_lng),
        neighborhood_radius=radius,
        spawn_probability=spawn_probability,
        initial_coin_scale=initial_coin_scale,
        save_path=save_path,
    )
