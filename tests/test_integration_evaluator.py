"""
Unit tests for site-level integration rubrics.

Covers the archetype-to-model mapping, the categories shared by every
archetype and a handful of checks per archetype variant.
"""

import json
from datetime import datetime, timezone

import pytest

from evaluators.context import SiteContext
from evaluators.integration_evaluator import evaluate_integration
from evaluators.rubrics import RUBRICS
from evaluators.rubrics.content_publisher import evaluate_publishing_cadence, parse_date
from evaluators.rubrics.ecommerce import evaluate_product_schema
from evaluators.rubrics.general import evaluate_documentation_structure
from evaluators.rubrics.local_business import evaluate_local_schema, evaluate_nap_consistency
from evaluators.rubrics.saas_api import evaluate_api_documentation, evaluate_mcp_server
from evaluators.rubrics.shared import evaluate_llms_txt, evaluate_machine_readable_sitemaps
from models.enums import INTEGRATION_WEIGHTS, Archetype, FindingStatus
from models.schemas import INTEGRATION_MODELS, PageSnapshot, SiteResources

ORIGIN = "https://example.com"
NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)

FULL_LLMS_TXT = """# Example

> Example builds widgets for teams.

## Docs

- [Start](https://example.com/docs/start)
- [Guides](https://example.com/docs/guides)
- [Reference](https://example.com/docs/reference)

## Optional

- [Blog](https://example.com/blog)
- [Changelog](https://example.com/changelog)
"""


def json_ld(data) -> str:
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


def snapshot(path: str = "/", body: str = "", head: str = "") -> PageSnapshot:
    return PageSnapshot(
        url=f"{ORIGIN}{path}",
        html=f"<html><head>{head}</head><body>{body}</body></html>",
    )


def context(pages=None, **resources) -> SiteContext:
    return SiteContext.from_inputs(
        pages if pages is not None else [snapshot()],
        SiteResources(origin=ORIGIN, **resources),
        now=NOW,
    )


def finding(category, check: str):
    for item in category.findings:
        if item.check == check:
            return item
    raise AssertionError(f"No finding named {check!r}")


class TestEvaluateIntegration:
    """Tests for evaluate_integration dispatch."""

    @pytest.mark.parametrize("archetype", list(Archetype))
    def test_returns_matching_variant(self, archetype):
        """Each archetype yields its own model with every weighted category."""
        profile = evaluate_integration(context(), archetype)

        assert isinstance(profile, INTEGRATION_MODELS[archetype])
        assert profile.archetype == archetype.value
        weights = INTEGRATION_WEIGHTS[archetype]
        assert [key for key, _ in profile.categories()] == list(weights)
        for key, category in profile.categories():
            assert category.weight == weights[key]

    @pytest.mark.parametrize("archetype", list(Archetype))
    def test_registry_covers_weight_table(self, archetype):
        """Every weighted category has a registered evaluator and vice versa."""
        assert set(RUBRICS[archetype]) == set(INTEGRATION_WEIGHTS[archetype])


class TestLlmsTxt:
    """Tests for the shared llms.txt category."""

    def test_missing_file_scores_zero(self):
        """No llms.txt and no llms-full.txt earns nothing."""
        result = evaluate_llms_txt(context(), 0.08)
        assert result.score == 0
        assert finding(result, "/llms.txt file exists").status == FindingStatus.FAIL

    def test_complete_file_scores_full(self):
        """A well-structured llms.txt with its companion file scores 100."""
        result = evaluate_llms_txt(context(llms_txt=FULL_LLMS_TXT, llms_full_txt="# Everything"), 0.08)
        assert result.score == 100
        assert result.recommendations == []

    def test_sparse_file_is_partial(self):
        """One section and two links earn partial credit for both checks."""
        sparse = "# Example\n\n## Docs\n\n- https://example.com/a\n- https://example.com/b\n"
        result = evaluate_llms_txt(context(llms_txt=sparse), 0.08)
        assert finding(result, "H2 sections with categorized links").status == FindingStatus.PARTIAL
        assert finding(result, "URL links present").points == 8
        assert finding(result, "Summary blockquote").status == FindingStatus.FAIL


class TestMachineReadableSitemaps:
    """Tests for the shared machine-readable sitemaps category."""

    def test_no_robots_is_partial_access(self):
        """Without robots.txt crawler access cannot be confirmed."""
        result = evaluate_machine_readable_sitemaps(context(), 0.07)
        assert finding(result, "robots.txt exists").status == FindingStatus.FAIL
        check = finding(result, "AI bot access")
        assert (check.status, check.points) == (FindingStatus.PARTIAL, 10)

    def test_one_blocked_crawler(self):
        """Blocking GPTBot costs four points and names the bot."""
        robots = "User-agent: GPTBot\nDisallow: /\n\nSitemap: https://example.com/sitemap.xml\n"
        result = evaluate_machine_readable_sitemaps(context(robots_txt=robots), 0.07)
        check = finding(result, "AI bot access (robots.txt)")
        assert check.status == FindingStatus.PARTIAL
        assert check.points == 16
        assert "GPTBot" in check.details
        assert finding(result, "Sitemap referenced in robots.txt").status == FindingStatus.PASS

    def test_everything_blocked_fails(self):
        """A wildcard disallow blocks every AI crawler."""
        result = evaluate_machine_readable_sitemaps(context(robots_txt="User-agent: *\nDisallow: /\n"), 0.07)
        check = finding(result, "AI bot access (robots.txt)")
        assert (check.status, check.points) == (FindingStatus.FAIL, 0)


class TestSaasApiRubric:
    """Tests for saas-api categories."""

    def test_openapi_document_passes(self):
        """A discovered OpenAPI document passes the specification check."""
        result = evaluate_api_documentation(context(openapi_spec='{"openapi": "3.1.0"}'), 0.12)
        assert finding(result, "OpenAPI/Swagger specification").status == FindingStatus.PASS

    def test_auth_docs_detected_by_url(self):
        """An /authentication page counts as authentication documentation."""
        ctx = context([snapshot(), snapshot("/docs/authentication", body="<p>Tokens</p>")])
        result = evaluate_api_documentation(ctx, 0.12)
        assert finding(result, "Authentication documentation").status == FindingStatus.PASS

    def test_mcp_mention_without_page_is_partial(self):
        """Mentioning MCP without a dedicated page earns partial page credit."""
        ctx = context([snapshot(body="<p>Connect our Model Context Protocol server.</p>")])
        result = evaluate_mcp_server(ctx, 0.08)
        assert finding(result, "MCP server referenced").status == FindingStatus.PASS
        assert finding(result, "MCP documentation page").status == FindingStatus.PARTIAL


class TestEcommerceRubric:
    """Tests for ecommerce categories."""

    def test_products_with_full_fields(self):
        """Two complete Product nodes pass every product schema check."""
        product = {
            "@type": "Product",
            "name": "Widget",
            "image": "https://example.com/w.jpg",
            "sku": "W-1",
            "aggregateRating": {"@type": "AggregateRating", "ratingValue": "4.5"},
            "offers": {"@type": "Offer", "price": "10.00", "availability": "https://schema.org/InStock"},
        }
        ctx = context([
            snapshot("/products/a", head=json_ld(product)),
            snapshot("/products/b", head=json_ld(product)),
        ])
        result = evaluate_product_schema(ctx, 0.15)
        assert result.score == 100

    def test_no_products(self):
        """No Product JSON-LD fails and recommends adding it."""
        result = evaluate_product_schema(context(), 0.15)
        assert result.score == 0
        assert finding(result, "Product/Offer JSON-LD present").status == FindingStatus.FAIL


class TestLocalBusinessRubric:
    """Tests for local-business categories."""

    def test_local_schema_fields(self):
        """A Dentist node with address and phone passes those checks but not hours."""
        dentist = {
            "@type": "Dentist",
            "name": "Smile Dental",
            "telephone": "+1-555-555-0100",
            "address": {"@type": "PostalAddress", "streetAddress": "1 Main St"},
        }
        result = evaluate_local_schema(context([snapshot(head=json_ld(dentist))]), 0.15)
        assert finding(result, "LocalBusiness JSON-LD schema").status == FindingStatus.PASS
        assert finding(result, "Address in schema").status == FindingStatus.PASS
        assert finding(result, "Phone number in schema").status == FindingStatus.PASS
        assert finding(result, "Opening hours in schema").status == FindingStatus.FAIL

    def test_same_phone_in_two_formats_is_consistent(self):
        """Formatting differences do not count as different phone numbers."""
        ctx = context([
            snapshot(body="<footer>Call (555) 123-4567</footer>"),
            snapshot("/services", body="<footer>Call 555-123-4567</footer>"),
            snapshot("/about", body="<footer>Call 555.123.4567</footer>"),
        ])
        result = evaluate_nap_consistency(ctx, 0.12)
        assert finding(result, "Phone number on multiple pages").status == FindingStatus.PASS
        assert finding(result, "Phone number consistency").status == FindingStatus.PASS

    def test_two_phone_numbers_is_partial(self):
        """Two distinct phone numbers earn partial consistency credit."""
        ctx = context([
            snapshot(body="<footer>Call (555) 123-4567</footer>"),
            snapshot("/services", body="<footer>Call (555) 987-6543</footer>"),
        ])
        check = finding(evaluate_nap_consistency(ctx, 0.12), "Phone number consistency")
        assert (check.status, check.points) == (FindingStatus.PARTIAL, 12)

    def test_no_phone_fails_consistency(self):
        """No phone numbers at all fails the consistency check."""
        check = finding(evaluate_nap_consistency(context(), 0.12), "Phone number consistency")
        assert (check.status, check.points) == (FindingStatus.FAIL, 0)


class TestContentPublisherRubric:
    """Tests for content-publisher categories."""

    @pytest.mark.parametrize("value,expected", [
        ("2026-01-15T10:00:00Z", datetime(2026, 1, 15, 10, tzinfo=timezone.utc)),
        ("2026-01-15", datetime(2026, 1, 15, tzinfo=timezone.utc)),
        ("last Tuesday", None),
        ("", None),
        (None, None),
        (20260115, None),
    ])
    def test_parse_date(self, value, expected):
        """ISO dates parse to aware datetimes, anything else is None."""
        assert parse_date(value) == expected

    def test_recent_articles_count_toward_cadence(self):
        """Three dated articles this year pass the schema and current-year checks."""
        pages = [
            snapshot(f"/blog/post-{month}", head=json_ld({
                "@type": "BlogPosting", "headline": f"Post {month}", "datePublished": f"2026-0{month}-01",
            }))
            for month in (1, 2, 3)
        ]
        result = evaluate_publishing_cadence(context(pages), 0.10)
        assert finding(result, "datePublished in structured data").status == FindingStatus.PASS
        assert finding(result, "Content from current year").status == FindingStatus.PASS

    def test_unparsable_dates_are_skipped(self):
        """A datePublished that is not a date is ignored rather than raising."""
        page = snapshot("/blog/x", head=json_ld({"@type": "Article", "datePublished": "soon"}))
        result = evaluate_publishing_cadence(context([page]), 0.10)
        assert finding(result, "datePublished in structured data").points == 0


class TestGeneralRubric:
    """Tests for general categories."""

    def test_information_pages(self):
        """About and FAQ pages satisfy the information pages check."""
        ctx = context([snapshot(), snapshot("/about"), snapshot("/faq")])
        result = evaluate_documentation_structure(ctx, 0.25)
        assert finding(result, "Information pages exist").status == FindingStatus.PASS


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
