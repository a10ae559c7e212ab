"""
End-to-end tests for analyze_site and SiteAnalysis serialization.
"""

import json
from datetime import datetime, timezone

import pytest

from evaluators.errors import EmptyPageSetError
from evaluators.pipeline import analyze_site
from models.enums import RECOMMENDATION_SCORE_CEILING, Archetype
from models.schemas import (
    EcommerceIntegration,
    GeneralIntegration,
    PageSnapshot,
    SiteAnalysis,
    SiteResources,
)
from utils.rounding import grade_for

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

PRODUCT = {
    "@context": "https://schema.org",
    "@type": "Product",
    "name": "Trail Shoe",
    "image": "https://shop.example.com/shoe.jpg",
    "sku": "TS-1",
    "offers": {"@type": "Offer", "price": "89.00", "priceCurrency": "USD", "availability": "InStock"},
}


def page(url: str, body: str, head: str = "") -> PageSnapshot:
    return PageSnapshot(
        url=url,
        html=f'<html lang="en"><head><title>Page</title>{head}</head><body>{body}</body></html>',
        headers={"Content-Type": "text/html; charset=utf-8"},
        load_time_ms=900,
    )


def plain_site():
    pages = [
        page("https://example.com/", "<h1>Welcome</h1><p>We make things.</p>"),
        page("https://example.com/about", "<h1>About</h1><p>Our story.</p>"),
    ]
    return pages, SiteResources(origin="https://example.com/")


def shop_site():
    head = f'<script type="application/ld+json">{json.dumps(PRODUCT)}</script>'
    pages = [
        page("https://shop.example.com/", "<h1>Shop</h1><p>Trail shoes for 2026.</p>"),
        page("https://shop.example.com/products/trail-shoe", "<h1>Trail Shoe</h1><p>$89.00</p>", head),
    ]
    resources = SiteResources(
        origin="https://shop.example.com",
        robots_txt="User-agent: *\nAllow: /\nSitemap: https://shop.example.com/sitemap.xml\n",
    )
    return pages, resources


class TestAnalyzeSite:
    """Tests for analyze_site orchestration."""

    def test_empty_page_set_raises(self):
        """Zero pages is the one error surfaced to callers."""
        with pytest.raises(EmptyPageSetError) as exc_info:
            analyze_site([], SiteResources(origin="https://example.com"), now=NOW)
        assert exc_info.value.error_code == "NO_PAGES"

    def test_unparsable_page_url_is_scored(self):
        """A page URL that urllib rejects is analyzed instead of aborting the run."""
        pages = [PageSnapshot(url="http://[broken/page", html="<h1>x</h1>")]
        analysis = analyze_site(pages, SiteResources(origin="https://example.com"), now=NOW)

        assert analysis.pages_analyzed == 1
        assert analysis.page_analyses[0].url == "http://[broken/page"
        assert 0 <= analysis.overall_score <= 100

    def test_basic_fields(self):
        """The analysis carries origin, timestamp, page count and archetype."""
        pages, resources = plain_site()
        analysis = analyze_site(pages, resources, now=NOW)

        assert analysis.url == "https://example.com"
        assert analysis.crawled_at == "2026-03-01T12:00:00+00:00"
        assert analysis.pages_analyzed == 2
        assert [p.url for p in analysis.page_analyses] == [p.url for p in pages]
        assert analysis.archetype == Archetype.GENERAL
        assert isinstance(analysis.aeo, GeneralIntegration)
        assert analysis.ai_insights == ""

    def test_grades_match_scores(self):
        """Every grade is the grade of its score."""
        pages, resources = shop_site()
        analysis = analyze_site(pages, resources, now=NOW)

        assert analysis.geo_grade == grade_for(analysis.geo_score)
        assert analysis.aeo_grade == grade_for(analysis.aeo_score)
        assert analysis.overall_grade == grade_for(analysis.overall_score)
        assert analysis.benchmark is not None

    def test_shop_is_ecommerce(self):
        """Product structured data routes the site to the ecommerce rubric."""
        pages, resources = shop_site()
        analysis = analyze_site(pages, resources, now=NOW)
        assert analysis.archetype == Archetype.ECOMMERCE
        assert isinstance(analysis.aeo, EcommerceIntegration)

    def test_failing_structured_data_on_both_pages(self):
        """Both pages lacking JSON-LD merge into one zero-point finding listing both URLs."""
        pages, resources = plain_site()
        analysis = analyze_site(pages, resources, now=NOW)

        merged = [
            f for f in analysis.geo.schema_markup.findings
            if f.check == "JSON-LD structured data present"
        ]
        assert len(merged) == 1
        assert merged[0].points == 0
        assert merged[0].max_points == 20
        assert merged[0].page_urls == ["https://example.com/", "https://example.com/about"]

    def test_recommendations_respect_ceiling(self):
        """No recommendation comes from a category scoring 70 or more."""
        pages, resources = shop_site()
        analysis = analyze_site(pages, resources, now=NOW)
        assert analysis.top_recommendations
        for recommendation in analysis.top_recommendations:
            assert recommendation.current_score < RECOMMENDATION_SCORE_CEILING

    def test_worker_count_does_not_change_result(self):
        """Sequential and parallel page analysis give identical results."""
        pages, resources = shop_site()
        assert analyze_site(pages, resources, now=NOW, max_workers=1) == \
            analyze_site(pages, resources, now=NOW, max_workers=4)

    def test_insights_provider_receives_analysis(self):
        """The provider sees the finished analysis and its text is attached."""
        pages, resources = plain_site()
        seen = []

        def provider(analysis: SiteAnalysis) -> str:
            seen.append(analysis)
            return f"Overall {analysis.overall_score}"

        analysis = analyze_site(pages, resources, now=NOW, insights_provider=provider)
        assert len(seen) == 1
        assert seen[0].ai_insights == ""
        assert analysis.ai_insights == f"Overall {analysis.overall_score}"


class TestSerialization:
    """Tests for SiteAnalysis JSON round-trips."""

    def test_round_trip_preserves_everything(self):
        """Dumping and re-validating reproduces an equal analysis."""
        pages, resources = shop_site()
        analysis = analyze_site(pages, resources, now=NOW)

        restored = SiteAnalysis.model_validate_json(analysis.model_dump_json())

        assert restored == analysis
        assert isinstance(restored.aeo, EcommerceIntegration)
        assert (restored.overall_score, restored.overall_grade) == (analysis.overall_score, analysis.overall_grade)

    def test_round_trip_without_none_fields(self):
        """The API's exclude_none output still validates back to the same scores."""
        pages, resources = plain_site()
        analysis = analyze_site(pages, resources, now=NOW)

        payload = analysis.model_dump(mode="json", exclude_none=True)
        restored = SiteAnalysis.model_validate(payload)

        assert restored.archetype == analysis.archetype
        assert restored.geo == analysis.geo
        assert restored.aeo == analysis.aeo


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
