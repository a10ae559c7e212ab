"""
Unit tests for the page-level content evaluator.

Each test builds a small HTML page and checks individual findings, so a
rubric change shows up as one failing check rather than a shifted total.
"""

from datetime import datetime, timezone

import pytest

from evaluators.content_evaluator import (
    CONTENT_EVALUATORS,
    analyze_page,
    evaluate_content_freshness,
    evaluate_content_structure,
    evaluate_meta_information,
    evaluate_schema_markup,
    evaluate_technical_health,
    evaluate_topical_authority,
)
from evaluators.context import ParsedPage
from models.enums import CONTENT_WEIGHTS, FindingStatus
from models.schemas import PageSnapshot

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def parsed(body: str = "", head: str = "", url: str = "https://example.com/guide", **snapshot) -> ParsedPage:
    html = f"<html><head>{head}</head><body>{body}</body></html>"
    return ParsedPage.from_snapshot(PageSnapshot(url=url, html=html, **snapshot))


def finding(category, check: str):
    for item in category.findings:
        if item.check == check:
            return item
    raise AssertionError(f"No finding named {check!r}")


class TestAnalyzePage:
    """Tests for analyze_page."""

    def test_all_categories_present_with_weights(self):
        """Every content category is scored with its table weight."""
        result = analyze_page(parsed("<h1>Guide</h1>"), NOW)
        keys = [key for key, _ in result.geo.categories()]
        assert keys == list(CONTENT_EVALUATORS) == list(CONTENT_WEIGHTS)
        for key, category in result.geo.categories():
            assert category.weight == CONTENT_WEIGHTS[key]
            assert 0 <= category.score <= 100

    def test_empty_markup_does_not_raise(self):
        """A page with no markup scores rather than raising."""
        snapshot = PageSnapshot(url="https://example.com/", html="")
        result = analyze_page(ParsedPage.from_snapshot(snapshot), NOW)
        assert result.url == "https://example.com/"

    def test_malformed_markup_does_not_raise(self):
        """Unclosed tags and broken JSON-LD are tolerated."""
        page = parsed(
            "<div><p>Unclosed <h1>Title<table><tr><td>1",
            head='<script type="application/ld+json">{not json</script>',
        )
        result = analyze_page(page, NOW)
        check = finding(result.geo.schema_markup, "JSON-LD structured data present")
        assert check.status == FindingStatus.FAIL
        assert check.points == 0

    def test_unparsable_url_does_not_raise(self):
        """A page URL urllib cannot parse still gets a full analysis."""
        page = parsed('<h1>x</h1><a href="/a">a</a><a href="https://other.org/">b</a>', url="http://[broken/page")
        assert page.scheme == ""

        result = analyze_page(page, NOW)
        assert result.url == "http://[broken/page"
        assert finding(result.geo.technical_health, "HTTPS").status == FindingStatus.FAIL
        assert finding(result.geo.topical_authority, "Internal linking").details == "1 internal link(s) found"
        assert finding(result.geo.topical_authority, "External reference links").details == "1 external link(s) found"


class TestTopicalAuthority:
    """Tests for link counting in evaluate_topical_authority."""

    def test_link_split(self):
        """Relative and same-host links are internal; other hosts, including protocol-relative, are external."""
        body = (
            '<a href="/pricing">p</a>'
            '<a href="https://example.com/docs">d</a>'
            '<a href="#top">t</a>'
            '<a href="javascript:void(0)">j</a>'
            '<a href="mailto:hi@example.com">m</a>'
            '<a href="https://other.org/paper">o</a>'
            '<a href="//cdn.example.net/lib.js">c</a>'
        )
        result = evaluate_topical_authority(parsed(body), NOW, 0.10)
        assert finding(result, "Internal linking").details == "2 internal link(s) found"
        assert finding(result, "External reference links").details == "2 external link(s) found"


class TestContentStructure:
    """Tests for evaluate_content_structure."""

    def test_single_h1_passes(self):
        """Exactly one H1 earns full points."""
        result = evaluate_content_structure(parsed("<h1>Only</h1>"), NOW, 0.12)
        assert finding(result, "Single H1 tag").status == FindingStatus.PASS

    def test_two_h1_fails(self):
        """Two H1 headings fail the check and add a recommendation."""
        result = evaluate_content_structure(parsed("<h1>One</h1><h1>Two</h1>"), NOW, 0.12)
        assert finding(result, "Single H1 tag").points == 0
        assert any("exactly one H1" in text for text in result.recommendations)

    def test_skipped_heading_level_fails(self):
        """H1 followed directly by H3 breaks the hierarchy."""
        result = evaluate_content_structure(parsed("<h1>Top</h1><h3>Deep</h3>"), NOW, 0.12)
        assert finding(result, "Heading hierarchy (no skipped levels)").status == FindingStatus.FAIL

    def test_two_h2_is_partial(self):
        """Two H2 sections earn partial credit."""
        result = evaluate_content_structure(parsed("<h1>T</h1><h2>A</h2><h2>B</h2>"), NOW, 0.12)
        check = finding(result, "Multiple content sections (3+ H2s)")
        assert check.status == FindingStatus.PARTIAL
        assert check.points == 8

    def test_faq_heading_detected(self):
        """An H2 titled Frequently Asked Questions counts as an FAQ section."""
        result = evaluate_content_structure(parsed("<h2>Frequently Asked Questions</h2>"), NOW, 0.12)
        assert finding(result, "FAQ section present").status == FindingStatus.PASS


class TestSchemaMarkup:
    """Tests for evaluate_schema_markup."""

    def test_no_structured_data_scores_five(self):
        """Only the optional Microdata miss points (5 of 100) are earned."""
        result = evaluate_schema_markup(parsed("<p>Plain</p>"), NOW, 0.13)
        assert result.score == 5
        assert finding(result, "Additional structured data (Microdata/RDFa)").status == FindingStatus.PARTIAL

    def test_complete_article(self):
        """Article with author, datePublished and headline passes."""
        head = (
            '<script type="application/ld+json">'
            '{"@type": "Article", "headline": "H", "author": {"@type": "Person", "name": "A"},'
            ' "datePublished": "2026-01-01"}'
            "</script>"
        )
        result = evaluate_schema_markup(parsed(head=head), NOW, 0.13)
        assert finding(result, "Article schema with author/date/headline").points == 15

    def test_incomplete_article_is_partial(self):
        """Article without an author earns partial credit."""
        head = '<script type="application/ld+json">{"@type": "Article", "headline": "H"}</script>'
        result = evaluate_schema_markup(parsed(head=head), NOW, 0.13)
        check = finding(result, "Article schema with author/date/headline")
        assert check.status == FindingStatus.PARTIAL
        assert check.points == 8


class TestContentFreshness:
    """Tests for evaluate_content_freshness."""

    def test_current_year_reference(self):
        """Text mentioning the reference year passes."""
        result = evaluate_content_freshness(parsed("<p>Updated for 2026.</p>"), NOW, 0.08)
        assert finding(result, "Current year references in content").status == FindingStatus.PASS

    def test_previous_year_only_is_partial(self):
        """Only last year's references earn partial credit."""
        result = evaluate_content_freshness(parsed("<p>Our 2025 review.</p>"), NOW, 0.08)
        check = finding(result, "Current year references in content")
        assert check.status == FindingStatus.PARTIAL
        assert "Update content with current 2026 references." in result.recommendations

    def test_last_modified_header(self):
        """A Last-Modified response header is detected case-insensitively."""
        page = parsed("<p>x</p>", headers={"Last-Modified": "Sun, 01 Feb 2026 10:00:00 GMT"})
        result = evaluate_content_freshness(page, NOW, 0.08)
        assert finding(result, "HTTP Last-Modified header").status == FindingStatus.PASS


class TestMetaInformation:
    """Tests for evaluate_meta_information."""

    def test_noindex_fails(self):
        """A noindex robots meta tag fails and is called out."""
        result = evaluate_meta_information(parsed(head='<meta name="robots" content="noindex">'), NOW, 0.03)
        assert finding(result, "Robots meta (not blocking indexing)").status == FindingStatus.FAIL

    def test_missing_title(self):
        """No title tag fails with a recommendation to add one."""
        result = evaluate_meta_information(parsed(), NOW, 0.03)
        assert finding(result, "Title tag (50-60 characters)").points == 0
        assert "Add a descriptive title tag." in result.recommendations


class TestTechnicalHealth:
    """Tests for evaluate_technical_health."""

    def test_https_url_passes(self):
        """An https URL passes the HTTPS check."""
        result = evaluate_technical_health(parsed(), NOW, 0.05)
        assert finding(result, "HTTPS").status == FindingStatus.PASS

    def test_hsts_header_passes_on_http_url(self):
        """An HSTS header counts as HTTPS even when the crawled URL is http."""
        page = parsed(url="http://example.com/", headers={"Strict-Transport-Security": "max-age=31536000"})
        result = evaluate_technical_health(page, NOW, 0.05)
        assert finding(result, "HTTPS").status == FindingStatus.PASS

    def test_plain_http_fails(self):
        """http without HSTS fails."""
        result = evaluate_technical_health(parsed(url="http://example.com/"), NOW, 0.05)
        assert finding(result, "HTTPS").status == FindingStatus.FAIL

    @pytest.mark.parametrize("load_time_ms,status,points", [
        (800, FindingStatus.PASS, 25),
        (2500, FindingStatus.PARTIAL, 12),
        (5000, FindingStatus.FAIL, 0),
    ])
    def test_load_time_bands(self, load_time_ms, status, points):
        """Load time under 2s passes, under 4s is partial, slower fails."""
        result = evaluate_technical_health(parsed(load_time_ms=load_time_ms), NOW, 0.05)
        check = finding(result, "Page load time")
        assert (check.status, check.points) == (status, points)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
