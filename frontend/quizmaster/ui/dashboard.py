"""
dashboard.py — stats cards and the grid of available quizzes.
"""
import streamlit as st

from quizmaster.catalog import TESTING, Dashboard
from quizmaster.context import AppContext
from quizmaster.navigation import DashboardScreen
from quizmaster.scoring import format_duration
from quizmaster.ui.quiz_card import render_quiz_card

_GRID_COLUMNS = 3


def render_dashboard(ctx: AppContext, screen: DashboardScreen) -> None:
    user = ctx.auth.user
    model = ctx.screen_model(
        (screen, user.id if user else None), lambda: Dashboard(ctx.repo, user)
    )

    if model.loading:
        label = "Testing connection..." if model.status == TESTING else "Loading dashboard..."
        with st.spinner(label):
            model.initialize()

    if model.error:
        with st.container(border=True):
            st.markdown("#### ⚠️ Connection Error")
            st.error(model.error)
            if st.button("Try Again", key="dashboard-retry", type="primary"):
                with st.spinner("Testing connection..."):
                    model.retry()
                st.rerun()
        return

    st.markdown("## Dashboard")
    st.markdown(
        "<p class='muted'>Welcome back! Ready to test your knowledge?</p>",
        unsafe_allow_html=True,
    )

    # ── Stats cards ───────────────────────────────────────────────────────────
    stats = model.stats
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("🎯 Total Attempts", stats.total_attempts)
    c2.metric("🏅 Average Score", f"{stats.average_score}%")
    c3.metric("🏆 Best Score", f"{stats.best_score}%")
    c4.metric("⏱️ Time Spent", format_duration(stats.time_spent))

    st.divider()

    # ── Available quizzes ─────────────────────────────────────────────────────
    st.markdown("### Available Quizzes")
    cards = model.cards()
    if not cards:
        st.info("No quizzes available at the moment.")
        return

    for start in range(0, len(cards), _GRID_COLUMNS):
        row = st.columns(_GRID_COLUMNS)
        for col, card in zip(row, cards[start:start + _GRID_COLUMNS]):
            with col:
                if render_quiz_card(card):
                    ctx.navigator.start_quiz(card.quiz.id)
                    st.rerun()
