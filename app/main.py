import streamlit as st

from config import (
    make_session,
    set_default_config,
    get_config_from_widgets,
)
from components import (
    display_caches,
    display_inventory,
    display_movement,
    display_relocate,
)
from geocoin.config import GameConfig
from geocoin.session import GameSession

st.set_page_config(layout="wide", page_title="Geocoin Carrier")


# --------- Main App ---------

set_default_config()
tab_game, tab_config, tab_state = st.tabs(["Game", "Config", "State"])

with tab_config:
    config: GameConfig = get_config_from_widgets()

    if st.button("Save", key="save_config_btn", use_container_width=True):
        st.session_state["config"] = config
        make_session(config)
    st.divider()

with tab_game:
    if "session" not in st.session_state:
        make_session(st.session_state["config"])
    session: GameSession = st.session_state["session"]

    left_col, middle_col, right_col = st.columns([0.25, 0.5, 0.25])

    with right_col:
        cell = session.state.player_cell
        st.info(f"**Cell:** {cell.key}", icon="📍")
        if session.state.message:
            st.info(session.state.message, icon="💬")
        st.divider()
        display_movement(session)
        st.divider()
        display_relocate(session)
        st.divider()
        if st.button("🚮 Reset game", key="reset_btn", use_container_width=True):
            session.reset()
            st.rerun()

    with left_col:
        display_inventory(session)

    with middle_col:
        display_caches(session)

with tab_state:
    st.json(st.session_state["session"].state.description, expanded=1)
