"""
session.py — the per-browser AppContext and the auth gate every page runs.
"""
import streamlit as st

from quizmaster.config import ConfigError
from quizmaster.context import AppContext, build_context

_CONTEXT_KEY = "app_context"


def get_context() -> AppContext:
    """Build the context on first use; stop the page if config is unusable."""
    ctx = st.session_state.get(_CONTEXT_KEY)
    if ctx is None:
        try:
            ctx = build_context(st.session_state)
        except ConfigError as e:
            st.error(str(e))
            st.stop()
        st.session_state[_CONTEXT_KEY] = ctx
    if ctx.auth.loading:
        with st.spinner("Loading..."):
            ctx.auth.initialize()
    else:
        ctx.auth.ensure_fresh()
    return ctx


def require_auth(ctx: AppContext) -> None:
    if ctx.auth.user is None:
        st.warning("Please sign in to take quizzes.")
        st.page_link("pages/0_Login.py", label="👉 Go to Login")
        st.stop()
