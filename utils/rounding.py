"""
Deterministic rounding utilities.

This module provides the round_half_up function and the score-to-grade
mapping so every run produces identical, reproducible numbers.
"""

from decimal import Decimal, ROUND_HALF_UP

from models.enums import Grade, GRADE_THRESHOLDS


def round_half_up(value: float, decimals: int = 0) -> int:
    """
    Round a number using "round half up" strategy.

    This ensures deterministic rounding where 0.5 always rounds up,
    avoiding Python's default banker's rounding.

    Args:
        value: Number to round
        decimals: Number of decimal places (0 for integer)

    Returns:
        Rounded integer

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(66.0)
        66
        >>> round_half_up(2.4)
        2
    """
    if decimals == 0:
        d = Decimal(str(value))
        rounded = d.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return int(rounded)
    else:
        quantize_str = "0." + "0" * decimals
        d = Decimal(str(value))
        rounded = d.quantize(Decimal(quantize_str), rounding=ROUND_HALF_UP)
        return float(rounded)


def score_from_points(points: float, max_points: float) -> int:
    """
    Convert earned points into a 0-100 category score.

    Formula:
        score = round_half_up(100 × points / max_points)

    A rubric with no available points scores 0.
    """
    if max_points <= 0:
        return 0
    score = round_half_up(100 * points / max_points)
    return max(0, min(100, score))


def grade_for(score: int) -> Grade:
    """
    Map a 0-100 score to a letter grade.

    Deterministic mapping:
        90-100: A+
        80-89: A
        70-79: B
        60-69: C
        50-59: D
        0-49: F

    Args:
        score: Integer score

    Returns:
        Grade enum member
    """
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.F
