"""
catalog.py — dashboard data: active quizzes, the user's attempts, and the
statistics derived from them.

``Dashboard.initialize`` runs probe → quizzes → attempts. A failed probe is a
terminal state until the user presses "Try Again" (``retry``).
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from quizmaster.api_client import APIError
from quizmaster.models import Attempt, Quiz, User
from quizmaster.repository import QuizRepository
from quizmaster.scoring import percentage, round_half_up

log = logging.getLogger(__name__)

TESTING = "testing"
CONNECTED = "connected"
FAILED = "failed"

CONNECTION_ERROR = (
    "Unable to connect to the database. "
    "Please check your internet connection and try again."
)
DEFAULT_DESCRIPTION = "Test your knowledge with this quiz"


@dataclass(frozen=True)
class UserStats:
    total_attempts: int = 0
    average_score: int = 0
    best_score: int = 0
    time_spent: int = 0


def compute_user_stats(attempts: Sequence[Attempt]) -> UserStats:
    if not attempts:
        return UserStats()
    total_score = sum(a.score for a in attempts)
    total_possible = sum(a.total_questions for a in attempts)
    average = (
        round_half_up(total_score / total_possible * 100) if total_possible > 0 else 0
    )
    return UserStats(
        total_attempts=len(attempts),
        average_score=average,
        best_score=max(percentage(a.score, a.total_questions) for a in attempts),
        time_spent=sum(a.time_taken_seconds for a in attempts),
    )


@dataclass(frozen=True)
class QuizCardInfo:
    """What one quiz card shows."""

    quiz: Quiz
    attempts: int
    best_score: int | None

    @property
    def description(self) -> str:
        return self.quiz.description or DEFAULT_DESCRIPTION

    @property
    def attempts_label(self) -> str:
        if self.attempts > 0:
            suffix = "s" if self.attempts > 1 else ""
            return f"Attempted {self.attempts} time{suffix}"
        return "Not attempted yet"

    @property
    def action_label(self) -> str:
        return "Retake Quiz" if self.attempts > 0 else "Start Quiz"


class Dashboard:
    def __init__(self, repo: QuizRepository, user: User | None):
        self.repo = repo
        self.user = user
        self.quizzes: list[Quiz] = []
        self.attempts: list[Attempt] = []
        self.stats = UserStats()
        self.status = TESTING
        self.loading = True
        self.error: str | None = None

    def initialize(self) -> None:
        self.loading = True
        self.error = None
        self.status = TESTING
        self.attempts = []
        self.stats = UserStats()

        if not self.repo.probe():
            self.status = FAILED
            self.error = CONNECTION_ERROR
            self.loading = False
            return

        self.status = CONNECTED
        self._fetch_quizzes()
        if self.user:
            self._fetch_user_stats()

    def retry(self) -> None:
        self.initialize()

    def _fetch_quizzes(self) -> None:
        try:
            self.quizzes = self.repo.list_active_quizzes()
            log.info("Fetched %d active quizzes", len(self.quizzes))
            self.error = None
        except APIError as exc:
            log.error("Error fetching quizzes: %s", exc)
            self.error = f"Failed to load quizzes: Database error: {exc}"
        finally:
            self.loading = False

    def _fetch_user_stats(self) -> None:
        try:
            attempts = self.repo.list_attempts(self.user.id)
        except APIError as exc:
            log.error("Error fetching user stats: %s", exc)
            return
        self.attempts = attempts
        self.stats = compute_user_stats(attempts)

    # ── Per-quiz values ──────────────────────────────────────────────────────

    def attempt_count(self, quiz_id: str) -> int:
        return sum(1 for a in self.attempts if a.quiz_id == quiz_id)

    def best_score(self, quiz_id: str) -> int | None:
        scores = [
            percentage(a.score, a.total_questions)
            for a in self.attempts
            if a.quiz_id == quiz_id
        ]
        if not scores:
            return None
        return max(scores)

    def cards(self) -> list[QuizCardInfo]:
        return [
            QuizCardInfo(
                quiz=quiz,
                attempts=self.attempt_count(quiz.id),
                best_score=self.best_score(quiz.id),
            )
            for quiz in self.quizzes
        ]
