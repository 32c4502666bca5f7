"""
0_Login.py — Sign In & Create Account page.
This is page 0 in the Streamlit sidebar so it always appears first.
"""
import streamlit as st

from quizmaster.ui.auth_forms import render_login_form, render_signup_form
from quizmaster.ui.session import get_context
from quizmaster.ui.theme import apply_theme

# ── Page config ───────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="QuizMaster — Login",
    page_icon="📘",
    layout="centered",
)
apply_theme()

ctx = get_context()

# ── Redirect if already logged in ────────────────────────────────────────────
if ctx.auth.user is not None:
    st.success("You are already logged in.")
    st.page_link("Home.py", label="Go to Dashboard →")
    st.stop()

# ── Header ────────────────────────────────────────────────────────────────────
st.markdown("## 📘 QuizMaster")
st.markdown(
    "<p class='muted'>Test your knowledge with our interactive quizzes</p>",
    unsafe_allow_html=True,
)

col_info, col_form = st.columns([1, 1], gap="large")

with col_info:
    st.markdown("#### 🏆 Track Your Progress")
    st.caption("Monitor your quiz performance and see detailed results for each attempt.")
    st.markdown("#### 👥 Multiple Categories")
    st.caption("Choose from various quiz categories including programming, general knowledge, and more.")
    st.markdown("#### ⏱️ Timed Challenges")
    st.caption("Test your knowledge under time pressure with our timed quiz format.")

with col_form:
    tab_login, tab_register = st.tabs(["Sign In", "Create Account"])

    # ── LOGIN ─────────────────────────────────────────────────────────────────
    with tab_login:
        render_login_form(ctx)

    # ── REGISTER ──────────────────────────────────────────────────────────────
    with tab_register:
        render_signup_form(ctx)
