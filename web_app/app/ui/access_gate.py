from __future__ import annotations

import logging

import streamlit as st

from app.config.models import AccessConfig
from src.core.access import AccessGate
from src.core.errors import AccessUnavailableError

LOGGER = logging.getLogger(__name__)

_ERROR_KEY = "_access_error"


def build_gate(config: AccessConfig) -> AccessGate:
    return AccessGate(config.password_hash, st.session_state, session_key=config.session_key)


def render_access_gate(gate: AccessGate) -> bool:
    """Muestra el formulario de acceso si hace falta. Devuelve ``True`` cuando el acceso está concedido."""

    if gate.is_granted():
        return True

    st.subheader("Acceso restringido")
    with st.form("access-form", clear_on_submit=True):
        candidate = st.text_input("Contraseña", type="password")
        submitted = st.form_submit_button("Entrar")

    if submitted:
        try:
            granted = gate.unlock(candidate)
        except AccessUnavailableError as exc:
            LOGGER.error("Gate de acceso no disponible: %s", exc)
            st.session_state[_ERROR_KEY] = "El acceso seguro no está disponible en este entorno."
        else:
            if not granted:
                st.session_state[_ERROR_KEY] = "Contraseña incorrecta."
            else:
                st.session_state.pop(_ERROR_KEY, None)
                st.rerun()

    error = st.session_state.get(_ERROR_KEY)
    if error:
        st.error(error)
    return False
