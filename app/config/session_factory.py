from __future__ import annotations

import streamlit as st

from geocoin.config import GameConfig
from geocoin.persistence import FileBlobStore, PersistenceAdapter
from geocoin.session import GameSession


def make_session(config: GameConfig) -> GameSession:
    """Create a session for ``config`` and store it in ``session_state``.

    Centralizes session_state bookkeeping so the tabs only read
    ``st.session_state["session"]``. Any previous session is closed first so
    it stops following location updates.
    """
    previous: GameSession | None = st.session_state.get("session")
    if previous is not None:
        previous.close()
    adapter = PersistenceAdapter(FileBlobStore(config.save_path), config)
    session = GameSession(adapter, config)
    st.session_state["session"] = session
    return session
