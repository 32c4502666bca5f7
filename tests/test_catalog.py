from __future__ import annotations

from fakes import FakeRepository
from quizmaster.api_client import APIError
from quizmaster.catalog import (
    CONNECTED,
    CONNECTION_ERROR,
    FAILED,
    Dashboard,
    QuizCardInfo,
    UserStats,
    compute_user_stats,
)
from quizmaster.models import Attempt, Quiz


def attempt(quiz_id: str, score: int, total: int, seconds: int = 60, user_id: str = "user-1") -> Attempt:
    return Attempt(
        id=f"{quiz_id}-{score}-{seconds}",
        user_id=user_id,
        quiz_id=quiz_id,
        score=score,
        total_questions=total,
        time_taken_seconds=seconds,
    )


def test_stats_with_no_attempts_are_zero() -> None:
    assert compute_user_stats([]) == UserStats(0, 0, 0, 0)


def test_stats_aggregate_over_all_attempts() -> None:
    stats = compute_user_stats(
        [attempt("quiz-1", 3, 5, 125), attempt("quiz-1", 5, 5, 90), attempt("quiz-2", 1, 4, 3600)]
    )

    assert stats.total_attempts == 3
    # 9 of 14 → 64.28…%
    assert stats.average_score == 64
    assert stats.best_score == 100
    assert stats.time_spent == 3815


def test_stats_round_halves_up() -> None:
    # 1/8 = 12.5% rounds to 13, as in the browser
    assert compute_user_stats([attempt("quiz-1", 1, 8)]).average_score == 13


def test_stats_tolerate_attempts_without_questions() -> None:
    stats = compute_user_stats([attempt("quiz-1", 0, 0)])
    assert stats.average_score == 0
    assert stats.best_score == 0


def test_initialize_loads_quizzes_and_stats(repo, quiz, user) -> None:
    repo.attempts = [attempt("quiz-1", 3, 5), attempt("quiz-1", 5, 5), attempt("quiz-1", 5, 5, user_id="other")]
    dashboard = Dashboard(repo, user)

    dashboard.initialize()

    assert repo.calls[:3] == ["probe", "list_active_quizzes", "list_attempts"]
    assert dashboard.status == CONNECTED
    assert dashboard.loading is False
    assert dashboard.error is None
    assert dashboard.quizzes == [quiz]
    assert dashboard.stats.total_attempts == 2


def test_two_attempts_on_one_quiz_card(repo, user) -> None:
    repo.attempts = [attempt("quiz-1", 3, 5), attempt("quiz-1", 5, 5)]
    dashboard = Dashboard(repo, user)
    dashboard.initialize()

    [card] = dashboard.cards()

    assert card.attempts == 2
    assert card.best_score == 100
    assert dashboard.stats.best_score == 100
    assert card.attempts_label == "Attempted 2 times"
    assert card.action_label == "Retake Quiz"


def test_untried_quiz_has_no_best_score(repo, user) -> None:
    dashboard = Dashboard(repo, user)
    dashboard.initialize()

    assert dashboard.attempt_count("quiz-1") == 0
    assert dashboard.best_score("quiz-1") is None
    card = dashboard.cards()[0]
    assert card.attempts_label == "Not attempted yet"
    assert card.action_label == "Start Quiz"


def test_card_text_fallbacks() -> None:
    quiz = Quiz(id="q", title="T", description=None, duration_minutes=10, total_questions=3)
    card = QuizCardInfo(quiz=quiz, attempts=1, best_score=40)
    assert card.description == "Test your knowledge with this quiz"
    assert card.attempts_label == "Attempted 1 time"


def test_failed_probe_is_terminal_until_retry(repo, user) -> None:
    repo.probe_ok = False
    dashboard = Dashboard(repo, user)

    dashboard.initialize()

    assert dashboard.status == FAILED
    assert dashboard.error == CONNECTION_ERROR
    assert dashboard.loading is False
    assert repo.calls == ["probe"]

    repo.probe_ok = True
    dashboard.retry()

    assert dashboard.status == CONNECTED
    assert dashboard.error is None
    assert repo.calls == ["probe", "probe", "list_active_quizzes", "list_attempts"]


def test_quiz_query_error_is_shown(repo, user) -> None:
    repo.failures["list_active_quizzes"] = APIError("permission denied", 401)
    dashboard = Dashboard(repo, user)

    dashboard.initialize()

    assert dashboard.error == "Failed to load quizzes: Database error: permission denied"
    assert dashboard.loading is False


def test_attempt_query_error_keeps_zero_stats(repo, user) -> None:
    repo.failures["list_attempts"] = APIError("timeout", 0)
    dashboard = Dashboard(repo, user)

    dashboard.initialize()

    assert dashboard.error is None
    assert dashboard.stats == UserStats()


def test_no_user_skips_attempt_fetch() -> None:
    repo = FakeRepository()
    dashboard = Dashboard(repo, None)

    dashboard.initialize()

    assert "list_attempts" not in repo.calls
    assert dashboard.cards() == []


def test_retry_drops_stats_from_earlier_load(repo, user) -> None:
    repo.attempts = [attempt("quiz-1", 5, 5)]
    dashboard = Dashboard(repo, user)
    dashboard.initialize()
    assert dashboard.best_score("quiz-1") == 100

    repo.failures["list_attempts"] = APIError("timeout", 0)
    dashboard.retry()

    assert dashboard.attempts == []
    assert dashboard.stats == UserStats()
    assert dashboard.cards()[0].attempts_label == "Not attempted yet"
