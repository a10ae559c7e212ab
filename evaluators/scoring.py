"""
Final scoring.

Turns content and integration profiles into GEO, AEO and overall scores.
All logic is deterministic with documented rules.
"""

from typing import Tuple

from models.enums import ARCHETYPE_SPLITS, Archetype, Grade
from utils.rounding import grade_for, round_half_up


def weighted_score(profile) -> int:
    """
    Weighted score of a profile.

    Formula:
        score = round_half_up(Σ category.score × category.weight)

    Works for ContentProfile and every IntegrationProfile variant since
    each category carries its own weight.

    Args:
        profile: Any profile exposing categories()

    Returns:
        Integer score (0-100)
    """
    total = sum(category.score * category.weight for _, category in profile.categories())
    return max(0, min(100, round_half_up(total)))


def overall_score(geo_score: int, aeo_score: int, archetype: Archetype) -> int:
    """
    Blend GEO and AEO with the archetype's split.

    Formula:
        overall = round_half_up(GEO × split.content + AEO × split.integration)

    Example (local-business, 65/35):
        GEO 80, AEO 40 -> round_half_up(52 + 14) = 66
    """
    content_share, integration_share = ARCHETYPE_SPLITS[archetype]
    return round_half_up(geo_score * content_share + aeo_score * integration_share)


def compute_scores(geo, aeo, archetype: Archetype) -> Tuple[Tuple[int, Grade], Tuple[int, Grade], Tuple[int, Grade]]:
    """
    Score and grade both profiles and their blend.

    Returns:
        ((geo, grade), (aeo, grade), (overall, grade))
    """
    geo_score = weighted_score(geo)
    aeo_score = weighted_score(aeo)
    overall = overall_score(geo_score, aeo_score, archetype)
    return (
        (geo_score, grade_for(geo_score)),
        (aeo_score, grade_for(aeo_score)),
        (overall, grade_for(overall)),
    )
