"""
End-to-end site analysis.

Flow:
    parse -> classify -> per-page content analysis (thread pool)
    -> aggregate -> integration rubric -> score -> recommendations
    -> benchmark -> optional insights
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, List, Optional

from config import settings
from evaluators.aggregator import aggregate_content_profiles
from evaluators.benchmarks import benchmark_position
from evaluators.classifier import classify_site
from evaluators.content_evaluator import analyze_page
from evaluators.context import SiteContext
from evaluators.errors import EmptyPageSetError
from evaluators.integration_evaluator import evaluate_integration
from evaluators.recommendations import generate_recommendations
from evaluators.scoring import compute_scores
from models.schemas import PageSnapshot, SiteAnalysis, SiteResources

logger = logging.getLogger(__name__)

InsightsProvider = Callable[[SiteAnalysis], str]


def analyze_site(
    pages: List[PageSnapshot],
    resources: SiteResources,
    *,
    now: Optional[datetime] = None,
    insights_provider: Optional[InsightsProvider] = None,
    max_workers: Optional[int] = None,
) -> SiteAnalysis:
    """
    Run the full audit for one site.

    Args:
        pages: Fetched page snapshots, homepage first
        resources: robots.txt, llms.txt, OpenAPI and origin
        now: Reference time for freshness checks (defaults to current UTC time)
        insights_provider: Optional callable producing a narrative for the finished analysis
        max_workers: Thread pool size for per-page analysis (defaults to settings.max_workers)

    Returns:
        SiteAnalysis

    Raises:
        EmptyPageSetError: when pages is empty
    """
    if not pages:
        raise EmptyPageSetError()

    logger.info(f"Starting analysis of {resources.origin} with {len(pages)} page(s)")
    ctx = SiteContext.from_inputs(pages, resources, now=now)

    archetype = classify_site(ctx)
    logger.info(f"Detected archetype for {resources.origin}: {archetype.value}")

    workers = max_workers or settings.max_workers
    with ThreadPoolExecutor(max_workers=workers) as executor:
        page_analyses = list(executor.map(lambda page: analyze_page(page, ctx.now), ctx.pages))

    geo = aggregate_content_profiles(page_analyses)
    aeo = evaluate_integration(ctx, archetype)

    (geo_score, geo_grade), (aeo_score, aeo_grade), (overall, overall_grade) = compute_scores(geo, aeo, archetype)
    logger.info(
        f"Scores for {resources.origin}: GEO={geo_score} ({geo_grade.value}), "
        f"AEO={aeo_score} ({aeo_grade.value}), overall={overall} ({overall_grade.value})"
    )

    analysis = SiteAnalysis(
        url=resources.origin,
        crawled_at=ctx.now.isoformat(),
        pages_analyzed=len(page_analyses),
        archetype=archetype,
        page_analyses=page_analyses,
        geo_score=geo_score,
        geo_grade=geo_grade,
        aeo_score=aeo_score,
        aeo_grade=aeo_grade,
        overall_score=overall,
        overall_grade=overall_grade,
        geo=geo,
        aeo=aeo,
        top_recommendations=generate_recommendations(geo, aeo, archetype, resources.origin),
        benchmark=benchmark_position(overall, archetype),
    )

    if insights_provider is not None:
        analysis = analysis.model_copy(update={"ai_insights": insights_provider(analysis)})
    return analysis
