"""layout.py — sidebar with the signed-in user and the sign-out action."""
import html

import streamlit as st

from quizmaster.context import AppContext


def render_sidebar(ctx: AppContext) -> None:
    user = ctx.auth.user
    with st.sidebar:
        st.markdown("### 📘 QuizMaster")
        st.markdown(
            f"<div style='color:#A7B0C0;font-size:0.8rem;margin-bottom:0.3rem'>Signed in as</div>"
            f"<div style='color:#E6EAF2;font-weight:600'>{html.escape(user.email)}</div>",
            unsafe_allow_html=True,
        )
        st.divider()
        if st.button("Sign Out", key="sidebar-logout"):
            result = ctx.auth.sign_out()
            if result.error:
                st.toast(result.error)
            st.rerun()
