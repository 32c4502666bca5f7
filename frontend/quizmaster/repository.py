"""
repository.py — the quiz tables, one method per query the screens issue.

Every call is a single round trip through ``SupabaseClient``. Rows that fail
to decode are reported as ``APIError`` so screens handle a single error type.
"""
from __future__ import annotations

import logging

from quizmaster.api_client import APIError, SupabaseClient, eq
from quizmaster.models import Attempt, AttemptDraft, Question, Quiz

log = logging.getLogger(__name__)

QUIZZES = "quizzes"
QUESTIONS = "questions"
ATTEMPTS = "user_quiz_attempts"


class QuizRepository:
    def __init__(self, client: SupabaseClient):
        self.client = client

    def probe(self) -> bool:
        """Minimal read used as a connectivity check; never raises."""
        try:
            self.client.select(QUIZZES, "id", limit=1)
        except APIError as exc:
            log.error("Connection test failed: %s", exc)
            return False
        log.info("Connection test successful")
        return True

    # ── Quizzes ──────────────────────────────────────────────────────────────

    def list_active_quizzes(self) -> list[Quiz]:
        rows = self.client.select(
            QUIZZES,
            filters={"is_active": eq(True)},
            order="created_at.desc",
        )
        return _decode(Quiz, rows or [])

    def get_quiz(self, quiz_id: str) -> Quiz:
        row = self.client.select(QUIZZES, filters={"id": eq(quiz_id)}, single=True)
        return _decode(Quiz, [row])[0]

    def get_quiz_title(self, quiz_id: str) -> str:
        row = self.client.select(
            QUIZZES, "title", filters={"id": eq(quiz_id)}, single=True
        )
        return str((row or {}).get("title") or "")

    # ── Questions ────────────────────────────────────────────────────────────

    def list_questions(self, quiz_id: str) -> list[Question]:
        rows = self.client.select(
            QUESTIONS,
            filters={"quiz_id": eq(quiz_id)},
            order="question_order.asc",
        )
        return _decode(Question, rows or [])

    # ── Attempts ─────────────────────────────────────────────────────────────

    def list_attempts(self, user_id: str) -> list[Attempt]:
        rows = self.client.select(ATTEMPTS, filters={"user_id": eq(user_id)})
        return _decode(Attempt, rows or [])

    def latest_attempt_answers(self, user_id: str, quiz_id: str) -> dict[str, str]:
        row = self.client.select(
            ATTEMPTS,
            "answers",
            filters={"user_id": eq(user_id), "quiz_id": eq(quiz_id)},
            order="created_at.desc",
            limit=1,
            single=True,
        )
        return dict((row or {}).get("answers") or {})

    def create_attempt(self, draft: AttemptDraft) -> Attempt:
        row = self.client.insert(ATTEMPTS, draft.to_row())
        log.info(
            "Attempt saved quiz_id=%s score=%s/%s",
            draft.quiz_id,
            draft.score,
            draft.total_questions,
        )
        return _decode(Attempt, [row])[0] if row else Attempt.from_row(draft.to_row())


def _decode(model, rows: list) -> list:
    try:
        return [model.from_row(row) for row in rows]
    except (KeyError, TypeError, ValueError) as exc:
        raise APIError(f"Malformed {model.__name__.lower()} row: {exc}") from exc
