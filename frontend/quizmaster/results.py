"""
results.py — the review screen after a submission.

The outcome passed in from the quiz session is shown as-is; the per-question
answers come from the user's most recent stored attempt.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from quizmaster.api_client import APIError
from quizmaster.models import Question, User
from quizmaster.quiz_session import QuizOutcome
from quizmaster.repository import QuizRepository
from quizmaster.scoring import average_per_question, grade, percentage, score_band

log = logging.getLogger(__name__)

LOADING = "loading"
LOADED = "loaded"
FAILED = "failed"

CORRECT = "correct"
WRONG = "wrong"
NEUTRAL = "neutral"


@dataclass(frozen=True)
class OptionReview:
    key: str
    text: str
    mark: str

    @property
    def is_correct_answer(self) -> bool:
        return self.mark == CORRECT

    @property
    def is_wrong_selection(self) -> bool:
        return self.mark == WRONG


@dataclass(frozen=True)
class QuestionReview:
    number: int
    question: Question
    selected: str
    is_correct: bool
    options: list[OptionReview]


def review_question(number: int, question: Question, selected: str | None) -> QuestionReview:
    selected = selected or ""
    is_correct = selected == question.correct_answer
    options = []
    for key, text in question.options:
        if key == question.correct_answer:
            mark = CORRECT
        elif key == selected and not is_correct:
            mark = WRONG
        else:
            mark = NEUTRAL
        options.append(OptionReview(key, text, mark))
    return QuestionReview(number, question, selected, is_correct, options)


class ResultsView:
    def __init__(
        self,
        repo: QuizRepository,
        quiz_id: str,
        user: User | None,
        outcome: QuizOutcome,
    ):
        self.repo = repo
        self.quiz_id = quiz_id
        self.user = user
        self.outcome = outcome
        self.state = LOADING
        self.error: str | None = None
        self.quiz_title = ""
        self.questions: list[Question] = []
        self.answers: dict[str, str] = {}

    def load(self) -> None:
        self.state = LOADING
        self.error = None
        try:
            if self.user is None:
                raise APIError("Not signed in", 401)
            title = self.repo.get_quiz_title(self.quiz_id)
            questions = self.repo.list_questions(self.quiz_id)
            answers = self.repo.latest_attempt_answers(self.user.id, self.quiz_id)
        except APIError as exc:
            log.error("Error fetching results for quiz %s: %s", self.quiz_id, exc)
            self.error = f"Could not load your results: {exc}"
            self.state = FAILED
            return
        self.quiz_title = title
        self.questions = questions
        self.answers = answers
        self.state = LOADED

    def retry(self) -> None:
        self.load()

    # ── Derived display values ───────────────────────────────────────────────

    @property
    def percentage(self) -> int:
        return percentage(self.outcome.score, self.outcome.total_questions)

    @property
    def grade(self) -> str:
        return grade(self.percentage)

    @property
    def band(self) -> str:
        return score_band(self.percentage)

    @property
    def score_label(self) -> str:
        return f"{self.outcome.score}/{self.outcome.total_questions}"

    @property
    def average_per_question(self) -> int:
        return average_per_question(
            self.outcome.time_taken, self.outcome.total_questions
        )

    def reviews(self) -> list[QuestionReview]:
        return [
            review_question(number, question, self.answers.get(question.id))
            for number, question in enumerate(self.questions, start=1)
        ]
