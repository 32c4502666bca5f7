"""
models.py — typed rows for the quizzes, questions and user_quiz_attempts tables.

Rows arrive as PostgREST JSON dicts; ``from_row`` tolerates the nullable
columns the schema allows and fills in the schema defaults.
"""
from __future__ import annotations

from dataclasses import dataclass, field

OPTION_KEYS = ("A", "B", "C", "D")


@dataclass(frozen=True)
class User:
    id: str
    email: str
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(
            id=str(row["id"]),
            email=str(row.get("email") or ""),
            created_at=row.get("created_at"),
        )


@dataclass(frozen=True)
class AuthTokens:
    access_token: str
    refresh_token: str
    expires_at: float

    @classmethod
    def from_session(cls, data: dict, now: float) -> "AuthTokens":
        expires_at = data.get("expires_at")
        if expires_at is None:
            expires_at = now + float(data.get("expires_in") or 3600)
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token") or "",
            expires_at=float(expires_at),
        )

    def to_dict(self) -> dict:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }


@dataclass(frozen=True)
class Quiz:
    id: str
    title: str
    description: str | None
    duration_minutes: int
    total_questions: int
    created_by: str | None = None
    created_at: str | None = None
    is_active: bool = True

    @classmethod
    def from_row(cls, row: dict) -> "Quiz":
        return cls(
            id=str(row["id"]),
            title=str(row.get("title") or ""),
            description=row.get("description"),
            duration_minutes=int(row.get("duration_minutes") or 30),
            total_questions=int(row.get("total_questions") or 0),
            created_by=row.get("created_by"),
            created_at=row.get("created_at"),
            is_active=bool(row.get("is_active", True)),
        )


@dataclass(frozen=True)
class Question:
    id: str
    quiz_id: str | None
    question_text: str
    option_a: str
    option_b: str
    option_c: str
    option_d: str
    correct_answer: str
    question_order: int = 1
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "Question":
        correct = str(row.get("correct_answer") or "").strip().upper()
        if correct not in OPTION_KEYS:
            raise ValueError(
                f"question {row.get('id')} has invalid correct_answer {correct!r}"
            )
        return cls(
            id=str(row["id"]),
            quiz_id=row.get("quiz_id"),
            question_text=str(row.get("question_text") or ""),
            option_a=str(row.get("option_a") or ""),
            option_b=str(row.get("option_b") or ""),
            option_c=str(row.get("option_c") or ""),
            option_d=str(row.get("option_d") or ""),
            correct_answer=correct,
            question_order=int(row.get("question_order") or 1),
            created_at=row.get("created_at"),
        )

    @property
    def options(self) -> list[tuple[str, str]]:
        return [
            ("A", self.option_a),
            ("B", self.option_b),
            ("C", self.option_c),
            ("D", self.option_d),
        ]


@dataclass(frozen=True)
class Attempt:
    id: str
    user_id: str | None
    quiz_id: str | None
    score: int
    total_questions: int
    time_taken_seconds: int
    answers: dict[str, str] = field(default_factory=dict)
    completed_at: str | None = None
    created_at: str | None = None

    @classmethod
    def from_row(cls, row: dict) -> "Attempt":
        return cls(
            id=str(row.get("id") or ""),
            user_id=row.get("user_id"),
            quiz_id=row.get("quiz_id"),
            score=int(row.get("score") or 0),
            total_questions=int(row.get("total_questions") or 0),
            time_taken_seconds=int(row.get("time_taken_seconds") or 0),
            answers=dict(row.get("answers") or {}),
            completed_at=row.get("completed_at"),
            created_at=row.get("created_at"),
        )


@dataclass(frozen=True)
class AttemptDraft:
    """Insert payload for one quiz submission."""

    user_id: str
    quiz_id: str
    score: int
    total_questions: int
    time_taken_seconds: int
    answers: dict[str, str]
    completed_at: str

    def to_row(self) -> dict:
        return {
            "user_id": self.user_id,
            "quiz_id": self.quiz_id,
            "score": self.score,
            "total_questions": self.total_questions,
            "time_taken_seconds": self.time_taken_seconds,
            "answers": dict(self.answers),
            "completed_at": self.completed_at,
        }
