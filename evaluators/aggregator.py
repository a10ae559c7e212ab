"""
Combine per-page content profiles into one site-level profile.

Rules (deterministic):
- category score = round_half_up(mean of page scores), grade recomputed
- findings are deduplicated by check name in first-seen order; the
  worst instance (fewest points) is kept and tagged with every page URL
  that reported that check
- recommendations are deduplicated and capped at MAX_RECOMMENDATIONS
"""

from typing import Dict, List

from evaluators.errors import EmptyPageSetError
from models.schemas import CategoryScore, ContentProfile, Finding, PageAnalysis
from utils.rounding import grade_for, round_half_up

MAX_RECOMMENDATIONS = 5


def _merge_findings(scores: List[CategoryScore], urls: List[str]) -> List[Finding]:
    worst: Dict[str, Finding] = {}
    seen_on: Dict[str, List[str]] = {}
    for score, url in zip(scores, urls):
        for finding in score.findings:
            current = worst.get(finding.check)
            if current is None or finding.points < current.points:
                worst[finding.check] = finding
            pages = seen_on.setdefault(finding.check, [])
            if url not in pages:
                pages.append(url)
    return [
        finding.model_copy(update={"page_urls": seen_on[check]})
        for check, finding in worst.items()
    ]


def _merge_recommendations(scores: List[CategoryScore]) -> List[str]:
    merged: List[str] = []
    for score in scores:
        for text in score.recommendations:
            if text not in merged:
                merged.append(text)
    return merged[:MAX_RECOMMENDATIONS]


def merge_category(scores: List[CategoryScore], urls: List[str]) -> CategoryScore:
    """Merge one category across pages. scores and urls are parallel lists."""
    mean = sum(s.score for s in scores) / len(scores)
    score = round_half_up(mean)
    return CategoryScore(
        score=score,
        grade=grade_for(score),
        weight=scores[0].weight,
        findings=_merge_findings(scores, urls),
        recommendations=_merge_recommendations(scores),
    )


def aggregate_content_profiles(pages: List[PageAnalysis]) -> ContentProfile:
    """
    Aggregate per-page content profiles into a site profile.

    A single page is returned unchanged.

    Raises:
        EmptyPageSetError: when pages is empty
    """
    if not pages:
        raise EmptyPageSetError()
    if len(pages) == 1:
        return pages[0].geo

    urls = [page.url for page in pages]
    merged = {}
    for key in ContentProfile.model_fields:
        scores = [getattr(page.geo, key) for page in pages]
        merged[key] = merge_category(scores, urls)
    return ContentProfile(**merged)
