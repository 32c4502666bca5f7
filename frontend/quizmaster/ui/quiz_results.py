"""
quiz_results.py — score summary and per-question review.
"""
import html

import streamlit as st

from quizmaster.context import AppContext
from quizmaster.navigation import ResultsScreen
from quizmaster.results import FAILED, LOADING, QuestionReview, ResultsView
from quizmaster.scoring import format_clock


def render_results(ctx: AppContext, screen: ResultsScreen) -> None:
    view = ctx.screen_model(
        screen,
        lambda: ResultsView(ctx.repo, screen.quiz_id, ctx.auth.user, screen.outcome),
    )

    if view.state == LOADING:
        with st.spinner("Loading results..."):
            view.load()

    if view.state == FAILED:
        st.error(view.error)
        retry_col, back_col = st.columns(2)
        if retry_col.button("Try Again", key="results-retry", type="primary"):
            view.retry()
            st.rerun()
        if back_col.button("🏠 Back to Dashboard", key="results-back-failed"):
            ctx.navigator.back_to_dashboard()
            st.rerun()
        return

    css = f"score-{view.band}"

    # ── Header ────────────────────────────────────────────────────────────────
    with st.container(border=True):
        st.markdown(
            f"<h1 style='text-align:center' class='{css}'>🏆 Quiz Complete!</h1>"
            f"<h3 style='text-align:center'>{html.escape(view.quiz_title)}</h3>",
            unsafe_allow_html=True,
        )
        c1, c2, c3 = st.columns(3)
        c1.metric("Your Score", f"{view.percentage}%")
        c2.metric("Correct Answers", view.score_label)
        c3.metric("Time Taken", format_clock(view.outcome.time_taken))

    # ── Performance ───────────────────────────────────────────────────────────
    p1, p2, p3 = st.columns(3)
    p1.metric("🎯 Accuracy", f"{view.percentage}%")
    p2.metric("⏱️ Average per Question", format_clock(view.average_per_question))
    p3.metric("🏅 Grade", view.grade)

    # ── Question review ───────────────────────────────────────────────────────
    st.markdown("### Question Review")
    for review in view.reviews():
        _render_review(review)

    if st.button("🏠 Back to Dashboard", key="results-back", type="primary"):
        ctx.navigator.back_to_dashboard()
        st.rerun()


def _render_review(review: QuestionReview) -> None:
    with st.container(border=True):
        icon = "✅" if review.is_correct else "❌"
        st.markdown(f"**{review.number}. {review.question.question_text}** {icon}")
        left, right = st.columns(2)
        for idx, option in enumerate(review.options):
            col = left if idx % 2 == 0 else right
            text = f"**{option.key}.** {option.text}"
            if option.is_correct_answer:
                col.success(f"{text}  (Correct)")
            elif option.is_wrong_selection:
                col.error(f"{text}  (Your Answer)")
            else:
                col.markdown(text)
