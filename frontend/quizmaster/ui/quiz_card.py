"""quiz_card.py — one quiz in the dashboard grid."""
import html

import streamlit as st

from quizmaster.catalog import QuizCardInfo


def heading_html(card: QuizCardInfo) -> str:
    """Card title plus the best-score badge; backend text is escaped."""
    badge = (
        f"<span class='badge'>🏆 {card.best_score}%</span>"
        if card.best_score is not None
        else ""
    )
    return f"### {html.escape(card.quiz.title)} {badge}".rstrip()


def description_html(card: QuizCardInfo) -> str:
    return f"<p class='muted'>{html.escape(card.description)}</p>"


def render_quiz_card(card: QuizCardInfo) -> bool:
    """Draw the card; True when its start button was pressed."""
    quiz = card.quiz
    with st.container(border=True):
        st.markdown(heading_html(card), unsafe_allow_html=True)
        st.markdown(description_html(card), unsafe_allow_html=True)
        st.caption(
            f"📄 {quiz.total_questions} questions  ·  ⏱️ {quiz.duration_minutes} minutes"
        )
        left, right = st.columns([3, 2])
        left.caption(card.attempts_label)
        return right.button(
            f"▶ {card.action_label}", key=f"start-{quiz.id}", type="primary"
        )
