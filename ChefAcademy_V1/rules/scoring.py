"""
Star rating of a cooked recipe.

A cooking score (0..100) is turned into 0..3 stars by counting the recipe's
thresholds that the score reaches.  Any callable with the same signature can
replace `stars_for_score` in the recipe resolver.
"""

from typing import Callable, Sequence

from ChefAcademy_V1.data.game_params import MAX_STARS

PERFECT_SCORE = 100

StarPolicy = Callable[[float, Sequence[int]], int]


def stars_for_score(score: float, thresholds: Sequence[int]) -> int:
    """
    Number of thresholds <= score, clamped to 0..MAX_STARS.

    >>> stars_for_score(100, (0, 60, 85))
    3
    >>> stars_for_score(70, (0, 60, 85))
    2
    >>> stars_for_score(5, (10, 65, 90))
    0
    """
    earned = sum(1 for t in thresholds if score >= t)
    return max(0, min(MAX_STARS, earned))
