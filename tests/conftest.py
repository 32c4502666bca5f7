"""
Pytest configuration and fixtures for QuizMaster tests.
"""
from __future__ import annotations

import pytest

from fakes import FakeClock, FakeRepository, make_question
from quizmaster.models import Question, Quiz, User


@pytest.fixture
def user() -> User:
    return User(id="user-1", email="student@example.com")


@pytest.fixture
def quiz() -> Quiz:
    return Quiz(
        id="quiz-1",
        title="JavaScript Fundamentals",
        description="Test your knowledge of JavaScript basics",
        duration_minutes=20,
        total_questions=5,
    )


@pytest.fixture
def five_questions() -> list[Question]:
    answers = ["A", "B", "C", "D", "A"]
    # Stored out of order to check question_order sorting.
    return [make_question(f"q{i}", i, answers[i - 1]) for i in (3, 1, 5, 2, 4)]


@pytest.fixture
def repo(quiz, five_questions) -> FakeRepository:
    return FakeRepository(quizzes=[quiz], questions=five_questions)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
