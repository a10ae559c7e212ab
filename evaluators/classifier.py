"""
Site archetype classifier.

Rules are evaluated in a fixed order and the first match wins:
saas-api, ecommerce, local-business, content-publisher, general.
"""

import logging

from evaluators.context import SiteContext
from evaluators.patterns import (
    API_URL,
    ARTICLE_SCHEMA_TYPES,
    CONTENT_URL,
    ECOMMERCE_SCHEMA_TYPES,
    LOCAL_BUSINESS_SCHEMA_TYPES,
    LOCAL_URL,
    PHONE_NUMBER,
    SHOP_URL,
    STREET_ADDRESS,
)
from models.enums import Archetype

logger = logging.getLogger(__name__)


def _count_matching_urls(ctx: SiteContext, pattern) -> int:
    return sum(1 for url in ctx.urls if pattern.search(url))


def is_saas_api(ctx: SiteContext) -> bool:
    if ctx.resources.openapi_spec:
        return True
    if _count_matching_urls(ctx, API_URL) >= 3:
        return True
    text = ctx.all_text_lower
    return "api key" in text and "endpoint" in text and ("sdk" in text or "documentation" in text)


def is_ecommerce(ctx: SiteContext) -> bool:
    if ECOMMERCE_SCHEMA_TYPES.intersection(ctx.all_schema_types):
        return True
    if _count_matching_urls(ctx, SHOP_URL) >= 1:
        return True
    text = ctx.all_text_lower
    return "add to cart" in text and ("price" in text or "$" in text)


def is_local_business(ctx: SiteContext) -> bool:
    if LOCAL_BUSINESS_SCHEMA_TYPES.intersection(ctx.all_schema_types):
        return True

    text = ctx.all_text_lower
    has_address = bool(STREET_ADDRESS.search(text))
    if has_address and _count_matching_urls(ctx, LOCAL_URL) >= 1:
        return True

    if has_address and PHONE_NUMBER.search(text):
        pages_with_nap = sum(
            1 for page in ctx.pages
            if STREET_ADDRESS.search(page.text) and PHONE_NUMBER.search(page.text)
        )
        if pages_with_nap >= 2:
            return True
    return False


def is_content_publisher(ctx: SiteContext) -> bool:
    article_count = sum(1 for t in ctx.all_schema_types if t in ARTICLE_SCHEMA_TYPES)
    if article_count >= 5:
        return True
    if ctx.pages:
        return _count_matching_urls(ctx, CONTENT_URL) / len(ctx.pages) > 0.4
    return False


# Checked in order; the first predicate that matches decides the archetype
_RULES = [
    (Archetype.SAAS_API, is_saas_api),
    (Archetype.ECOMMERCE, is_ecommerce),
    (Archetype.LOCAL_BUSINESS, is_local_business),
    (Archetype.CONTENT_PUBLISHER, is_content_publisher),
]


def classify_site(ctx: SiteContext) -> Archetype:
    """
    Detect the site archetype from pages, structured data and resources.

    Never raises; an empty page set is classified as general.
    """
    if not ctx.pages:
        return Archetype.GENERAL

    for archetype, matches in _RULES:
        if matches(ctx):
            logger.debug(f"Site {ctx.origin} matched archetype rule: {archetype.value}")
            return archetype
    return Archetype.GENERAL
