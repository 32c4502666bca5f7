"""
quiz_interface.py — the timed question screen.

A 1 s autorefresh is mounted only while the session is active; each rerun
calls ``tick()`` so the countdown can submit on its own at zero.
"""
import streamlit as st
from streamlit_autorefresh import st_autorefresh

from quizmaster.context import AppContext
from quizmaster.navigation import QuizScreen
from quizmaster.quiz_session import (
    ACTIVE,
    COMPLETE,
    LOADING,
    NOT_FOUND,
    NOT_FOUND_MESSAGE,
    QuizSession,
)
from quizmaster.scoring import format_clock


def render_quiz(ctx: AppContext, screen: QuizScreen) -> None:
    session = ctx.screen_model(
        screen,
        lambda: QuizSession(
            ctx.repo,
            screen.quiz_id,
            ctx.auth.user,
            on_complete=ctx.navigator.complete_quiz,
        ),
    )

    if session.state == LOADING:
        with st.spinner("Loading quiz..."):
            session.load()

    if session.state == NOT_FOUND:
        st.info(NOT_FOUND_MESSAGE)
        if st.button("Back to Dashboard", key="quiz-back", type="primary"):
            ctx.navigator.back_to_dashboard()
            st.rerun()
        return

    if session.state == ACTIVE:
        st_autorefresh(interval=1000, key=f"quiz-timer-{screen.quiz_id}")
        session.tick()

    if session.state == COMPLETE:
        st.rerun()

    _render_header(session)
    _render_question(session)
    _render_navigation(session)


def _render_header(session: QuizSession) -> None:
    with st.container(border=True):
        left, right = st.columns([4, 1])
        left.markdown(f"## {session.quiz.title}")
        left.caption(
            f"Question {session.index + 1} of {session.total}"
            f"  ·  {session.answered_count()} answered"
        )
        css = "timer low" if session.time_running_low else "timer"
        right.markdown(
            f"<div class='{css}'>⏱️ {format_clock(session.time_left)}</div>",
            unsafe_allow_html=True,
        )
        st.progress(session.progress)


def _render_question(session: QuizSession) -> None:
    question = session.current
    selected = session.selected_for(question)
    with st.container(border=True):
        st.markdown(f"### {question.question_text}")
        for key, text in question.options:
            is_selected = key == selected
            label = f"{'✅' if is_selected else '⚪'} {key}. {text}"
            if st.button(
                label,
                key=f"option-{question.id}-{key}",
                type="primary" if is_selected else "secondary",
                disabled=session.state != ACTIVE,
            ):
                session.select(key)
                st.rerun()


def _render_navigation(session: QuizSession) -> None:
    if session.submit_error:
        st.error(f"Could not submit your quiz: {session.submit_error}")

    prev_col, palette_col, next_col = st.columns([1, 4, 1])

    if prev_col.button("◀ Previous", key="quiz-prev", disabled=session.index == 0):
        session.previous()
        st.rerun()

    with palette_col:
        numbers = st.columns(session.total)
        for idx, col in enumerate(numbers):
            mark = "●" if idx == session.index else ("✓" if session.is_answered(idx) else "")
            if col.button(f"{idx + 1}{mark}", key=f"quiz-jump-{idx}"):
                session.jump(idx)
                st.rerun()

    if session.is_last or session.submit_error:
        label = "Submitting..." if session.submitting else "✔ Submit Quiz"
        if next_col.button(label, key="quiz-submit", type="primary", disabled=session.submitting):
            with st.spinner("Submitting..."):
                session.submit()
            st.rerun()
    elif next_col.button("Next ▶", key="quiz-next", type="primary"):
        session.next()
        st.rerun()
