"""
XP -> level curve.

Reaching level L needs 50 * L * (L - 1) cumulative XP, i.e. every level costs
100 XP more than the previous one (100, 200, 300...).  The curve is
monotonic: more XP never means a lower level.
"""

from functools import lru_cache

import numpy as np

from ChefAcademy_V1.data.game_params import MAX_LEVEL, XP_PER_LEVEL_STEP


@lru_cache(maxsize=1)
def _level_thresholds() -> np.ndarray:
    levels = np.arange(1, MAX_LEVEL + 1)
    return (XP_PER_LEVEL_STEP // 2) * levels * (levels - 1)


def xp_for_level(level: int) -> int:
    """Cumulative XP needed to reach `level`.

    >>> xp_for_level(1)
    0
    >>> xp_for_level(2), xp_for_level(3), xp_for_level(4)
    (100, 300, 600)
    """
    level = max(1, min(int(level), MAX_LEVEL))
    return int(_level_thresholds()[level - 1])


def level_for_xp(xp: int) -> int:
    """Level reached with `xp` cumulative XP (>= 1, capped at MAX_LEVEL).

    >>> level_for_xp(0), level_for_xp(99), level_for_xp(100), level_for_xp(350)
    (1, 1, 2, 3)
    """
    xp = max(0, int(xp))
    return int(np.searchsorted(_level_thresholds(), xp, side="right"))


def level_progress(xp: int) -> float:
    """Fraction of the way to the next level, 1.0 at the level cap.

    >>> level_progress(150)
    0.25
    """
    level = level_for_xp(xp)
    if level >= MAX_LEVEL:
        return 1.0
    start, end = xp_for_level(level), xp_for_level(level + 1)
    return (max(0, int(xp)) - start) / (end - start)
