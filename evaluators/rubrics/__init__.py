"""
Archetype-specific integration rubrics.

Each module exposes CATEGORIES, an ordered mapping of category key to
evaluator(ctx, weight). Keys and order match INTEGRATION_WEIGHTS.
"""

from evaluators.rubrics import content_publisher, ecommerce, general, local_business, saas_api
from models.enums import Archetype

RUBRICS = {
    Archetype.SAAS_API: saas_api.CATEGORIES,
    Archetype.ECOMMERCE: ecommerce.CATEGORIES,
    Archetype.LOCAL_BUSINESS: local_business.CATEGORIES,
    Archetype.CONTENT_PUBLISHER: content_publisher.CATEGORIES,
    Archetype.GENERAL: general.CATEGORIES,
}

__all__ = ["RUBRICS"]
