"""Evaluators package for the AI Readiness Auditor."""

from .aggregator import aggregate_content_profiles
from .classifier import classify_site
from .content_evaluator import analyze_page
from .errors import AnalysisError, EmptyPageSetError
from .integration_evaluator import evaluate_integration
from .pipeline import analyze_site
from .recommendations import generate_recommendations
from .scoring import compute_scores, overall_score, weighted_score

__all__ = [
    "AnalysisError",
    "EmptyPageSetError",
    "aggregate_content_profiles",
    "analyze_page",
    "analyze_site",
    "classify_site",
    "compute_scores",
    "evaluate_integration",
    "generate_recommendations",
    "overall_score",
    "weighted_score",
]
