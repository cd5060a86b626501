from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import streamlit as st

from src.core.viewer import GeneExpressionViewer

_STATE_KEY = "_viewer_state"


@dataclass
class ViewerSessionState:
    """Contenedor tipado para valores persistidos en ``st.session_state``."""

    viewer: Optional[GeneExpressionViewer] = None
    data_signature: Optional[tuple] = None

    @classmethod
    def load(cls) -> "ViewerSessionState":
        """Recupera el estado almacenado o crea uno nuevo."""
        existing = st.session_state.get(_STATE_KEY)
        if isinstance(existing, cls):
            return existing
        state = cls()
        st.session_state[_STATE_KEY] = state
        return state

    def persist(self) -> None:
        st.session_state[_STATE_KEY] = self

    def reset_viewer(self) -> None:
        self.viewer = None
        self.data_signature = None
        self.persist()
