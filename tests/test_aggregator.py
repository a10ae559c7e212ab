"""
Unit tests for multi-page aggregation of content profiles.
"""

import pytest

from evaluators.aggregator import MAX_RECOMMENDATIONS, aggregate_content_profiles, merge_category
from evaluators.errors import EmptyPageSetError
from models.enums import CONTENT_WEIGHTS, FindingStatus, Grade
from models.schemas import CategoryScore, ContentProfile, Finding, PageAnalysis
from utils.rounding import grade_for


def category(score: int, weight: float = 0.1, findings=None, recommendations=None) -> CategoryScore:
    return CategoryScore(
        score=score,
        grade=grade_for(score),
        weight=weight,
        findings=findings or [],
        recommendations=recommendations or [],
    )


def page(url: str, score: int = 50, **overrides) -> PageAnalysis:
    categories = {key: category(score, weight) for key, weight in CONTENT_WEIGHTS.items()}
    categories.update(overrides)
    return PageAnalysis(url=url, title=url, geo=ContentProfile(**categories))


def structured_data_finding(points: int) -> Finding:
    status = FindingStatus.PASS if points == 10 else FindingStatus.FAIL
    return Finding(
        check="JSON-LD structured data present",
        status=status,
        details=f"{points}/10",
        points=points,
        max_points=10,
    )


class TestAggregateContentProfiles:
    """Tests for aggregate_content_profiles function."""

    def test_empty_input_raises(self):
        """Aggregating zero pages is an error."""
        with pytest.raises(EmptyPageSetError):
            aggregate_content_profiles([])

    def test_single_page_is_identity(self):
        """One page is returned unchanged."""
        only = page("https://example.com/", score=73)
        assert aggregate_content_profiles([only]) == only.geo

    def test_mean_score_is_rounded_half_up(self):
        """Scores 50 and 51 average to 50.5, which rounds to 51."""
        result = aggregate_content_profiles([
            page("https://example.com/a", score=50),
            page("https://example.com/b", score=51),
        ])
        assert result.content_structure.score == 51
        assert result.content_structure.grade == Grade.D

    def test_weights_are_preserved(self):
        """Merged categories keep their weight from the weight table."""
        result = aggregate_content_profiles([page("https://example.com/a"), page("https://example.com/b")])
        for key, merged in result.categories():
            assert merged.weight == CONTENT_WEIGHTS[key]

    def test_failing_finding_on_both_pages(self):
        """A 0/10 finding on two pages merges into one 0/10 finding listing both URLs."""
        weight = CONTENT_WEIGHTS["schema_markup"]
        urls = ["https://example.com/", "https://example.com/about"]
        pages = [
            page(url, schema_markup=category(0, weight, findings=[structured_data_finding(0)]))
            for url in urls
        ]

        result = aggregate_content_profiles(pages)

        findings = result.schema_markup.findings
        assert len(findings) == 1
        assert findings[0].points == 0
        assert findings[0].max_points == 10
        assert findings[0].page_urls == urls


class TestMergeCategory:
    """Tests for merge_category function."""

    def test_worst_instance_is_kept(self):
        """When pages disagree the finding with fewest points wins."""
        merged = merge_category(
            [
                category(100, findings=[structured_data_finding(10)]),
                category(0, findings=[structured_data_finding(0)]),
            ],
            ["https://example.com/a", "https://example.com/b"],
        )
        assert merged.findings[0].points == 0
        assert merged.findings[0].status == FindingStatus.FAIL
        assert merged.findings[0].page_urls == ["https://example.com/a", "https://example.com/b"]

    def test_findings_keep_first_seen_order(self):
        """Checks appear in the order they were first reported."""
        first = Finding(check="First", status=FindingStatus.PASS, points=5, max_points=5)
        second = Finding(check="Second", status=FindingStatus.PASS, points=5, max_points=5)
        merged = merge_category(
            [category(100, findings=[first]), category(100, findings=[second, first])],
            ["https://example.com/a", "https://example.com/b"],
        )
        assert [f.check for f in merged.findings] == ["First", "Second"]
        assert merged.findings[1].page_urls == ["https://example.com/b"]

    def test_recommendations_deduplicated_and_capped(self):
        """Repeated recommendations appear once and at most MAX_RECOMMENDATIONS survive."""
        texts = [f"Fix issue {i}." for i in range(8)]
        merged = merge_category(
            [category(10, recommendations=texts[:4]), category(10, recommendations=texts)],
            ["https://example.com/a", "https://example.com/b"],
        )
        assert merged.recommendations == texts[:MAX_RECOMMENDATIONS]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
