"""
navigation.py — which screen the signed-in user is looking at.

A screen is one of three frozen dataclasses. ``ResultsScreen`` always carries
the outcome it displays, so there is no results screen without a score.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from quizmaster.quiz_session import QuizOutcome

log = logging.getLogger(__name__)


class NavigationError(Exception):
    pass


@dataclass(frozen=True)
class DashboardScreen:
    pass


@dataclass(frozen=True)
class QuizScreen:
    quiz_id: str


@dataclass(frozen=True)
class ResultsScreen:
    quiz_id: str
    outcome: QuizOutcome


Screen = Union[DashboardScreen, QuizScreen, ResultsScreen]


class Navigator:
    def __init__(self) -> None:
        self.screen: Screen = DashboardScreen()

    def start_quiz(self, quiz_id: str) -> QuizScreen:
        if not quiz_id:
            raise NavigationError("quiz id is required")
        log.info("Starting quiz %s", quiz_id)
        self.screen = QuizScreen(quiz_id)
        return self.screen

    def complete_quiz(self, outcome: QuizOutcome) -> ResultsScreen:
        if not isinstance(self.screen, QuizScreen):
            raise NavigationError(
                f"cannot show results from {type(self.screen).__name__}"
            )
        self.screen = ResultsScreen(self.screen.quiz_id, outcome)
        return self.screen

    def back_to_dashboard(self) -> DashboardScreen:
        self.screen = DashboardScreen()
        return self.screen

    def reset(self) -> None:
        self.screen = DashboardScreen()
