"""
XP thresholds for automatic level advancement.
"""

from typing import Dict, Optional

from pathway.kernel.models.learner import LEVEL_ORDER, Level

# XP at which each level is reached automatically
LEVEL_THRESHOLDS: Dict[Level, int] = {
    Level.JOURNEYMAN: 1000,
    Level.MASTER: 2500,
    Level.GRADUATE: 5000,
}


def level_for_xp(xp: int) -> Level:
    """Highest level whose threshold xp has reached. Checked from the top down."""
    for level in reversed(LEVEL_ORDER):
        threshold = LEVEL_THRESHOLDS.get(level)
        if threshold is not None and xp >= threshold:
            return level
    return Level.APPRENTICE


def next_threshold(xp: int) -> Optional[int]:
    """XP of the next automatic level, or None past the last one."""
    for level in LEVEL_ORDER:
        threshold = LEVEL_THRESHOLDS.get(level)
        if threshold is not None and threshold > xp:
            return threshold
    return None


def xp_to_next_level(xp: int) -> int:
    """XP still missing for the next automatic level (0 at the top)."""
    threshold = next_threshold(xp)
    return 0 if threshold is None else threshold - xp


def level_progress(xp: int) -> float:
    """Fraction [0, 1] of the way from the current level's threshold to the next."""
    threshold = next_threshold(xp)
    if threshold is None:
        return 1.0
    floor = LEVEL_THRESHOLDS.get(level_for_xp(xp), 0)
    span = threshold - floor
    return (xp - floor) / span if span else 1.0
