"""
Enumerations and constants for the AI Readiness Auditor.

This module defines all the fixed values used in the deterministic scoring model:
category weights, archetype blend splits, grade thresholds and benchmarks.
"""

from enum import Enum
from typing import Dict, List, Tuple


class Archetype(str, Enum):
    """Detected site category. Selects the integration rubric and blend split."""
    SAAS_API = "saas-api"
    ECOMMERCE = "ecommerce"
    LOCAL_BUSINESS = "local-business"
    CONTENT_PUBLISHER = "content-publisher"
    GENERAL = "general"


class Grade(str, Enum):
    """
    Letter grade for a 0-100 score.

    Mapping (deterministic):
    - 90-100: A+
    - 80-89: A
    - 70-79: B
    - 60-69: C
    - 50-59: D
    - 0-49: F
    """
    A_PLUS = "A+"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class FindingStatus(str, Enum):
    """Outcome of a single rubric check."""
    PASS = "pass"
    PARTIAL = "partial"
    FAIL = "fail"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Effort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Dimension(str, Enum):
    """Which half of the audit a recommendation came from."""
    CONTENT = "content"
    INTEGRATION = "integration"


# Grade thresholds, checked top-down (deterministic mapping)
GRADE_THRESHOLDS: List[Tuple[int, Grade]] = [
    (90, Grade.A_PLUS),
    (80, Grade.A),
    (70, Grade.B),
    (60, Grade.C),
    (50, Grade.D),
    (0, Grade.F),
]

# Content (GEO) category weights (total = 1.0)
CONTENT_WEIGHTS: Dict[str, float] = {
    "content_structure": 0.12,
    "schema_markup": 0.13,
    "topical_authority": 0.10,
    "citation_worthiness": 0.13,
    "content_freshness": 0.08,
    "language_patterns": 0.08,
    "meta_information": 0.03,
    "technical_health": 0.05,
    "content_uniqueness": 0.10,
    "multi_format_content": 0.08,
    "eeat_signals": 0.10,
}

# Integration (AEO) category weights per archetype (each total = 1.0)
INTEGRATION_WEIGHTS: Dict[Archetype, Dict[str, float]] = {
    Archetype.SAAS_API: {
        "documentation_structure": 0.10,
        "api_documentation": 0.12,
        "code_examples": 0.10,
        "llms_txt": 0.08,
        "sdk_quality": 0.08,
        "auth_simplicity": 0.08,
        "quickstart_guide": 0.10,
        "error_messages": 0.06,
        "changelog_versioning": 0.05,
        "mcp_server": 0.08,
        "integration_guides": 0.08,
        "machine_readable_sitemaps": 0.07,
    },
    Archetype.ECOMMERCE: {
        "product_schema": 0.15,
        "review_markup": 0.12,
        "inventory_signals": 0.08,
        "merchant_feed": 0.10,
        "comparison_content": 0.08,
        "customer_evidence": 0.08,
        "purchase_simplicity": 0.08,
        "llms_txt": 0.07,
        "machine_readable_sitemaps": 0.08,
        "faq_content": 0.08,
        "category_taxonomy": 0.08,
    },
    Archetype.LOCAL_BUSINESS: {
        "local_schema": 0.15,
        "nap_consistency": 0.12,
        "review_presence": 0.12,
        "service_pages": 0.10,
        "location_signals": 0.08,
        "contact_accessibility": 0.08,
        "trust_signals": 0.08,
        "llms_txt": 0.05,
        "machine_readable_sitemaps": 0.07,
        "local_content": 0.08,
        "photo_evidence": 0.07,
    },
    Archetype.CONTENT_PUBLISHER: {
        "author_credentials": 0.14,
        "content_taxonomy": 0.10,
        "publishing_cadence": 0.10,
        "syndication_readiness": 0.10,
        "original_reporting": 0.12,
        "source_citation": 0.10,
        "llms_txt": 0.07,
        "machine_readable_sitemaps": 0.07,
        "archive_discoverability": 0.07,
        "multimedia_integration": 0.07,
        "newsletter_presence": 0.06,
    },
    Archetype.GENERAL: {
        "documentation_structure": 0.25,
        "llms_txt": 0.15,
        "machine_readable_sitemaps": 0.20,
        "content_quality": 0.25,
        "trust_signals": 0.15,
    },
}

# Overall blend per archetype: (content share, integration share)
ARCHETYPE_SPLITS: Dict[Archetype, Tuple[float, float]] = {
    Archetype.SAAS_API: (0.50, 0.50),
    Archetype.ECOMMERCE: (0.55, 0.45),
    Archetype.LOCAL_BUSINESS: (0.65, 0.35),
    Archetype.CONTENT_PUBLISHER: (0.70, 0.30),
    Archetype.GENERAL: (0.60, 0.40),
}

# Recommendation priority bands on impact = weight × (100 - score)
PRIORITY_BANDS: List[Tuple[float, Priority]] = [
    (8, Priority.CRITICAL),
    (5, Priority.HIGH),
    (3, Priority.MEDIUM),
]

# Categories scoring at or above this never produce recommendations
RECOMMENDATION_SCORE_CEILING = 70

# Effort lookup; anything not listed is medium
LOW_EFFORT_CATEGORIES = frozenset({
    "schema_markup",
    "meta_information",
    "technical_health",
    "llms_txt",
    "machine_readable_sitemaps",
    "changelog_versioning",
})
HIGH_EFFORT_CATEGORIES = frozenset({
    "content_uniqueness",
    "topical_authority",
    "mcp_server",
    "sdk_quality",
    "api_documentation",
})

# Display labels used on recommendations and reports
CATEGORY_LABELS: Dict[str, str] = {
    "content_structure": "Content Structure",
    "schema_markup": "Schema Markup",
    "topical_authority": "Topical Authority",
    "citation_worthiness": "Citation Worthiness",
    "content_freshness": "Content Freshness",
    "language_patterns": "Language Patterns",
    "meta_information": "Meta Information",
    "technical_health": "Technical Health",
    "content_uniqueness": "Content Uniqueness",
    "multi_format_content": "Multi-Format Content",
    "eeat_signals": "E-E-A-T Signals",
    "documentation_structure": "Documentation Structure",
    "api_documentation": "API Documentation",
    "code_examples": "Code Examples",
    "llms_txt": "llms.txt",
    "sdk_quality": "SDK Quality",
    "auth_simplicity": "Auth Simplicity",
    "quickstart_guide": "Quickstart Guide",
    "error_messages": "Error Messages",
    "changelog_versioning": "Changelog & Versioning",
    "mcp_server": "MCP Server",
    "integration_guides": "Integration Guides",
    "machine_readable_sitemaps": "Machine-Readable Sitemaps",
    "product_schema": "Product Schema",
    "review_markup": "Review Markup",
    "inventory_signals": "Inventory Signals",
    "merchant_feed": "Merchant Feed Readiness",
    "comparison_content": "Comparison Content",
    "customer_evidence": "Customer Evidence",
    "purchase_simplicity": "Purchase Simplicity",
    "faq_content": "FAQ Content",
    "category_taxonomy": "Category Taxonomy",
    "local_schema": "Local Business Schema",
    "nap_consistency": "NAP Consistency",
    "review_presence": "Review Presence",
    "service_pages": "Service Pages",
    "location_signals": "Location Signals",
    "contact_accessibility": "Contact Accessibility",
    "trust_signals": "Trust Signals",
    "local_content": "Local Content",
    "photo_evidence": "Photo Evidence",
    "author_credentials": "Author Credentials",
    "content_taxonomy": "Content Taxonomy",
    "publishing_cadence": "Publishing Cadence",
    "syndication_readiness": "Syndication Readiness",
    "original_reporting": "Original Reporting",
    "source_citation": "Source Citation",
    "archive_discoverability": "Archive Discoverability",
    "multimedia_integration": "Multimedia Integration",
    "newsletter_presence": "Newsletter Presence",
    "content_quality": "Content Quality",
}

# Industry benchmarks for overall score: median, p25, p75, top10
BENCHMARKS: Dict[Archetype, Dict[str, int]] = {
    Archetype.SAAS_API: {"median": 58, "p25": 42, "p75": 74, "top10": 85},
    Archetype.ECOMMERCE: {"median": 45, "p25": 30, "p75": 62, "top10": 78},
    Archetype.LOCAL_BUSINESS: {"median": 35, "p25": 20, "p75": 52, "top10": 68},
    Archetype.CONTENT_PUBLISHER: {"median": 52, "p25": 38, "p75": 67, "top10": 80},
    Archetype.GENERAL: {"median": 42, "p25": 28, "p75": 58, "top10": 72},
}

BENCHMARK_LABELS: Dict[Archetype, str] = {
    Archetype.SAAS_API: "SaaS sites",
    Archetype.ECOMMERCE: "e-commerce sites",
    Archetype.LOCAL_BUSINESS: "local businesses",
    Archetype.CONTENT_PUBLISHER: "content publishers",
    Archetype.GENERAL: "websites",
}

# User agents checked against robots.txt for AI crawler access
AI_CRAWLERS: List[str] = [
    "GPTBot",
    "ClaudeBot",
    "PerplexityBot",
    "Google-Extended",
    "OAI-SearchBot",
]
