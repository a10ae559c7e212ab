"""
Site-level integration readiness (AEO).

Runs the rubric registered for the detected archetype over the whole
page set and returns the matching IntegrationProfile variant.
"""

import logging

from evaluators.context import SiteContext
from evaluators.rubrics import RUBRICS
from models.enums import INTEGRATION_WEIGHTS, Archetype
from models.schemas import INTEGRATION_MODELS

logger = logging.getLogger(__name__)


def evaluate_integration(ctx: SiteContext, archetype: Archetype):
    """
    Evaluate every integration category for an archetype.

    Args:
        ctx: Parsed site context
        archetype: Detected archetype; selects rubric, weights and model

    Returns:
        The IntegrationProfile variant for the archetype
    """
    weights = INTEGRATION_WEIGHTS[archetype]
    categories = {
        key: evaluator(ctx, weights[key])
        for key, evaluator in RUBRICS[archetype].items()
    }
    logger.debug(
        f"Integration rubric {archetype.value} evaluated {len(categories)} categories for {ctx.origin}"
    )
    return INTEGRATION_MODELS[archetype](**categories)
