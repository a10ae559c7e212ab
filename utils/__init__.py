"""Utilities package for the AI Readiness Auditor."""

from .robots import blocked_crawlers, has_sitemap_directive
from .rounding import grade_for, round_half_up, score_from_points
from .urls import extract_domain, normalize_url, validate_url

__all__ = [
    "blocked_crawlers",
    "extract_domain",
    "grade_for",
    "has_sitemap_directive",
    "normalize_url",
    "round_half_up",
    "score_from_points",
    "validate_url",
]
