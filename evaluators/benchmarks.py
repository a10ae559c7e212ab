"""
Industry benchmark positioning.

Places an overall score on a piecewise-linear percentile curve built from
the archetype's p25 / median / p75 / top10 anchors.
"""

from models.enums import BENCHMARK_LABELS, BENCHMARKS, Archetype
from models.schemas import BenchmarkPosition
from utils.rounding import round_half_up


def _interpolate(score: float, low: float, high: float, p_low: float, p_high: float) -> float:
    if high <= low:
        return p_high
    return p_low + (score - low) / (high - low) * (p_high - p_low)


def percentile_for(score: int, archetype: Archetype) -> int:
    """
    Estimated percentile (0-99) of an overall score among sites of the archetype.

    Segments:
        0..p25       -> 0..25
        p25..median  -> 25..50
        median..p75  -> 50..75
        p75..top10   -> 75..90
        top10..100   -> 90..99
    """
    b = BENCHMARKS[archetype]
    if score <= b["p25"]:
        value = _interpolate(score, 0, b["p25"], 0, 25)
    elif score <= b["median"]:
        value = _interpolate(score, b["p25"], b["median"], 25, 50)
    elif score <= b["p75"]:
        value = _interpolate(score, b["median"], b["p75"], 50, 75)
    elif score <= b["top10"]:
        value = _interpolate(score, b["p75"], b["top10"], 75, 90)
    else:
        value = _interpolate(score, b["top10"], 100, 90, 99)
    return max(0, min(99, round_half_up(value)))


def percentile_label(percentile: int, archetype: Archetype) -> str:
    """Human-readable position, e.g. "Top 25% of SaaS sites"."""
    label = BENCHMARK_LABELS[archetype]
    if percentile >= 50:
        return f"Top {100 - percentile}% of {label}"
    return f"Better than {percentile}% of {label}"


def benchmark_position(score: int, archetype: Archetype) -> BenchmarkPosition:
    percentile = percentile_for(score, archetype)
    b = BENCHMARKS[archetype]
    return BenchmarkPosition(
        percentile=percentile,
        label=percentile_label(percentile, archetype),
        median=b["median"],
        top10=b["top10"],
    )
