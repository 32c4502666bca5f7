"""
quiz_session.py — one timed attempt at a quiz.

States
------
    loading     → questions are being fetched
    active      → countdown running, answers can change
    submitting  → attempt insert issued (stays here if the insert fails)
    complete    → attempt stored, outcome handed to ``on_complete``
    not_found   → quiz missing, unreadable, or without questions

The countdown is derived from the injected clock, so the UI only needs to
call ``tick()`` once a second while the session is active.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from quizmaster.api_client import APIError
from quizmaster.models import OPTION_KEYS, AttemptDraft, Question, Quiz, User
from quizmaster.repository import QuizRepository

log = logging.getLogger(__name__)

LOADING = "loading"
ACTIVE = "active"
SUBMITTING = "submitting"
COMPLETE = "complete"
NOT_FOUND = "not_found"

NOT_FOUND_MESSAGE = "Quiz not found or no questions available."
LOW_TIME_SECONDS = 300


@dataclass(frozen=True)
class QuizOutcome:
    score: int
    total_questions: int
    time_taken: int


def score_answers(
    questions: Sequence[Question], answers: dict[str, str]
) -> tuple[int, dict[str, str]]:
    """Return the score and a full answer map ("" for unanswered questions)."""
    score = 0
    full: dict[str, str] = {}
    for question in questions:
        chosen = answers.get(question.id) or ""
        full[question.id] = chosen
        if chosen == question.correct_answer:
            score += 1
    return score, full


class QuizSession:
    def __init__(
        self,
        repo: QuizRepository,
        quiz_id: str,
        user: User | None,
        *,
        on_complete: Callable[[QuizOutcome], None] | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.repo = repo
        self.quiz_id = quiz_id
        self.user = user
        self.on_complete = on_complete
        self._clock = clock

        self.state = LOADING
        self.quiz: Quiz | None = None
        self.questions: list[Question] = []
        self.index = 0
        self.answers: dict[str, str] = {}
        self.time_limit = 0
        self.started_at: float | None = None
        self.outcome: QuizOutcome | None = None
        self.submit_error: str | None = None
        self._in_flight = False
        self._auto_submitted = False

    # ── Loading ──────────────────────────────────────────────────────────────

    def load(self) -> None:
        self.state = LOADING
        try:
            quiz = self.repo.get_quiz(self.quiz_id)
            questions = self.repo.list_questions(self.quiz_id)
        except APIError as exc:
            log.error("Error fetching quiz data for %s: %s", self.quiz_id, exc)
            self.state = NOT_FOUND
            return

        self.quiz = quiz
        self.questions = list(questions)
        if not self.questions:
            log.warning("Quiz %s has no questions", self.quiz_id)
            self.state = NOT_FOUND
            return

        self.index = 0
        self.time_limit = quiz.duration_minutes * 60
        self.started_at = self._clock()
        self.state = ACTIVE
        log.info(
            "Quiz %s started: %d questions, %ds",
            self.quiz_id,
            len(self.questions),
            self.time_limit,
        )

    # ── Timer ────────────────────────────────────────────────────────────────

    @property
    def elapsed(self) -> int:
        if self.started_at is None:
            return 0
        return max(0, int(self._clock() - self.started_at))

    @property
    def time_left(self) -> int:
        if self.started_at is None:
            return 0
        return max(0, self.time_limit - self.elapsed)

    @property
    def time_running_low(self) -> bool:
        return self.time_left < LOW_TIME_SECONDS

    def tick(self) -> QuizOutcome | None:
        """Submit automatically, once, when the countdown reaches zero."""
        if self.state != ACTIVE or self._auto_submitted:
            return None
        if self.time_left > 0:
            return None
        self._auto_submitted = True
        log.info("Time is up for quiz %s; submitting", self.quiz_id)
        return self.submit()

    # ── Navigation ───────────────────────────────────────────────────────────

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current(self) -> Question:
        return self.questions[self.index]

    @property
    def progress(self) -> float:
        if not self.questions:
            return 0.0
        return (self.index + 1) / self.total

    @property
    def is_last(self) -> bool:
        return self.index == self.total - 1

    def next(self) -> int:
        return self.jump(self.index + 1)

    def previous(self) -> int:
        return self.jump(self.index - 1)

    def jump(self, index: int) -> int:
        if self.questions:
            self.index = min(max(0, index), self.total - 1)
        return self.index

    # ── Answers ──────────────────────────────────────────────────────────────

    def select(self, key: str) -> bool:
        key = str(key).strip().upper()[:1]
        if self.state != ACTIVE or key not in OPTION_KEYS:
            return False
        self.answers[self.current.id] = key
        return True

    def selected_for(self, question: Question | None = None) -> str | None:
        target = question or self.current
        return self.answers.get(target.id)

    def is_answered(self, index: int) -> bool:
        return bool(self.answers.get(self.questions[index].id))

    def answered_count(self) -> int:
        return sum(1 for q in self.questions if self.answers.get(q.id))

    # ── Submission ───────────────────────────────────────────────────────────

    @property
    def submitting(self) -> bool:
        return self._in_flight

    def submit(self) -> QuizOutcome | None:
        if self._in_flight or self.quiz is None:
            return None
        retrying = self.state == SUBMITTING and self.submit_error is not None
        if self.state != ACTIVE and not retrying:
            return None
        if self.user is None:
            log.warning("Submit ignored for quiz %s: no signed-in user", self.quiz_id)
            return None

        self._in_flight = True
        self.state = SUBMITTING
        self.submit_error = None
        try:
            score, full_answers = score_answers(self.questions, self.answers)
            time_taken = self.elapsed
            draft = AttemptDraft(
                user_id=self.user.id,
                quiz_id=self.quiz_id,
                score=score,
                total_questions=self.total,
                time_taken_seconds=time_taken,
                answers=full_answers,
                completed_at=datetime.fromtimestamp(
                    self._clock(), tz=timezone.utc
                ).isoformat(),
            )
            self.repo.create_attempt(draft)
        except APIError as exc:
            log.error("Error submitting quiz %s: %s", self.quiz_id, exc)
            self.submit_error = str(exc) or "Submission failed."
            return None
        finally:
            self._in_flight = False

        self.outcome = QuizOutcome(score, self.total, time_taken)
        self.state = COMPLETE
        if self.on_complete:
            self.on_complete(self.outcome)
        return self.outcome
