"""scoring.py — percentages, grades and time labels shared by every screen."""
from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round like JavaScript's Math.round: halves go towards +infinity."""
    return int(math.floor(value + 0.5))


def percentage(score: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(score / total * 100)


def grade(pct: int) -> str:
    if pct >= 90:
        return "A"
    if pct >= 80:
        return "B"
    if pct >= 70:
        return "C"
    if pct >= 60:
        return "D"
    return "F"


def score_band(pct: int) -> str:
    """Colour band for a score: ``good`` (>=80), ``fair`` (>=60) or ``poor``."""
    if pct >= 80:
        return "good"
    if pct >= 60:
        return "fair"
    return "poor"


def average_per_question(time_taken: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(time_taken / total)


def format_clock(seconds: int) -> str:
    """``m:ss``, used by the quiz timer and the results screen."""
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins}:{secs:02d}"


def format_duration(seconds: int) -> str:
    """``Hh Mm`` once past an hour, ``Mm`` before that."""
    seconds = max(0, int(seconds))
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
