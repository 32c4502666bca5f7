"""
Home.py — Entry point of the QuizMaster Streamlit app.
Resolves the stored session, sends signed-out users to the login page, and
dispatches the signed-in user to the current screen.
"""
import streamlit as st

from quizmaster.navigation import DashboardScreen, QuizScreen, ResultsScreen
from quizmaster.ui.dashboard import render_dashboard
from quizmaster.ui.layout import render_sidebar
from quizmaster.ui.quiz_interface import render_quiz
from quizmaster.ui.quiz_results import render_results
from quizmaster.ui.session import get_context, require_auth
from quizmaster.ui.theme import apply_theme

st.set_page_config(
    page_title="QuizMaster",
    page_icon="📘",
    layout="wide",
)
apply_theme()

# ── Auth guard ─────────────────────────────────────────────────────────────────
ctx = get_context()
require_auth(ctx)

render_sidebar(ctx)

# ── Screen dispatch ───────────────────────────────────────────────────────────
screen = ctx.navigator.screen
if isinstance(screen, QuizScreen):
    render_quiz(ctx, screen)
elif isinstance(screen, ResultsScreen):
    render_results(ctx, screen)
elif isinstance(screen, DashboardScreen):
    render_dashboard(ctx, screen)
else:  # pragma: no cover - Screen is a closed union
    st.error(f"Unknown screen: {screen!r}")
