"""
Recommendation engine.

Turns low-scoring categories into a prioritized action list. All logic is
deterministic with documented rules:

- only categories scoring below RECOMMENDATION_SCORE_CEILING contribute
- impact = weight × (100 - score)
- priority: impact > 8 critical, > 5 high, > 3 medium, else low
- effort is a static per-category lookup
- ordering: stable sort by priority, then effort (low first)
"""

import logging
from typing import List

from evaluators.snippets import snippet_for
from models.enums import (
    CATEGORY_LABELS,
    HIGH_EFFORT_CATEGORIES,
    LOW_EFFORT_CATEGORIES,
    PRIORITY_BANDS,
    RECOMMENDATION_SCORE_CEILING,
    Archetype,
    Dimension,
    Effort,
    Priority,
)
from models.schemas import CategoryScore, Recommendation
from utils.rounding import round_half_up

logger = logging.getLogger(__name__)

_PRIORITY_RANK = {Priority.CRITICAL: 0, Priority.HIGH: 1, Priority.MEDIUM: 2, Priority.LOW: 3}
_EFFORT_RANK = {Effort.LOW: 0, Effort.MEDIUM: 1, Effort.HIGH: 2}


def priority_for(impact: float) -> Priority:
    """Map an impact value to its priority band. Bands are exclusive lower bounds."""
    for threshold, priority in PRIORITY_BANDS:
        if impact > threshold:
            return priority
    return Priority.LOW


def effort_for(category_key: str) -> Effort:
    if category_key in LOW_EFFORT_CATEGORIES:
        return Effort.LOW
    if category_key in HIGH_EFFORT_CATEGORIES:
        return Effort.HIGH
    return Effort.MEDIUM


def title_for(text: str) -> str:
    """First sentence of a recommendation, e.g. "Add schema. It helps." -> "Add schema."."""
    return text.split(".")[0] + "."


def _category_recommendations(
    key: str,
    category: CategoryScore,
    dimension: Dimension,
    origin: str,
) -> List[Recommendation]:
    if category.score >= RECOMMENDATION_SCORE_CEILING or not category.recommendations:
        return []

    impact = category.weight * (100 - category.score)
    priority = priority_for(impact)
    effort = effort_for(key)
    snippet = snippet_for(key, category, origin)

    results = []
    for index, text in enumerate(category.recommendations):
        results.append(Recommendation(
            category=CATEGORY_LABELS.get(key, key),
            category_key=key,
            dimension=dimension,
            priority=priority,
            effort=effort,
            title=title_for(text),
            description=text,
            current_score=category.score,
            potential_score=min(100, category.score + 30),
            impact=f"{round_half_up(impact)}% potential overall improvement",
            code_snippet=snippet if index == 0 else None,
        ))
    return results


def generate_recommendations(geo, aeo, archetype: Archetype, origin: str) -> List[Recommendation]:
    """
    Build the ranked recommendation list for a site.

    Args:
        geo: Site-level ContentProfile
        aeo: IntegrationProfile variant
        archetype: Detected archetype (logged for tracing)
        origin: Site origin used to fill snippet templates

    Returns:
        Recommendations, content categories before integration categories
        within each (priority, effort) group
    """
    recommendations: List[Recommendation] = []
    for key, category in geo.categories():
        recommendations.extend(_category_recommendations(key, category, Dimension.CONTENT, origin))
    for key, category in aeo.categories():
        recommendations.extend(_category_recommendations(key, category, Dimension.INTEGRATION, origin))

    recommendations.sort(key=lambda r: (_PRIORITY_RANK[r.priority], _EFFORT_RANK[r.effort]))
    logger.debug(f"Generated {len(recommendations)} recommendation(s) for {archetype.value} site {origin}")
    return recommendations
